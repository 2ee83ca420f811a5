#!/usr/bin/env python3
"""
Synthesize the test infrastructure app into a cloud assembly.

Usage:
    python build.py                 # synthesize once into cdk.out
    python build.py --watch         # re-synthesize whenever a .py file changes
    python build.py --outdir DIR    # write the assembly somewhere else
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from watchfiles import PythonFilter, run_process

CDK_DIR = Path(__file__).resolve().parent
DEFAULT_OUTDIR = "cdk.out"

logger = logging.getLogger("delambda.cdk.build")


def setup_logging(level: str = "INFO"):
    """Setup logging configuration."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def synth(outdir: str = DEFAULT_OUTDIR) -> List[Path]:
    """Synthesize the app and return the paths of the generated templates."""
    from app import create_app

    assembly = create_app(outdir=outdir).synth()
    templates = [Path(stack.template_full_path) for stack in assembly.stacks]
    for stack, template in zip(assembly.stacks, templates):
        logger.info(f"Synthesized {stack.stack_name} -> {template}")
    return templates


def _synth_in_child(outdir: str) -> None:
    # Runs in a fresh process on every change so edited modules are re-imported
    setup_logging()
    try:
        synth(outdir)
    except Exception as e:
        logger.error(f"Synthesis failed: {e}")


def watch(outdir: str = DEFAULT_OUTDIR) -> int:
    """Re-synthesize on Python source changes until interrupted."""
    outdir_path = Path(outdir).resolve()
    logger.info("Watching for changes...")
    return run_process(
        CDK_DIR,
        target=_synth_in_child,
        args=(outdir,),
        watch_filter=PythonFilter(ignore_paths=[outdir_path]),
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Build script entry point."""
    parser = argparse.ArgumentParser(description="Synthesize the delambda test stack")
    parser.add_argument(
        "--watch", action="store_true", help="Re-synthesize when sources change"
    )
    parser.add_argument(
        "--outdir",
        default=DEFAULT_OUTDIR,
        help="Cloud assembly output directory (default: cdk.out)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="INFO",
        help="Set logging level",
    )
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    if args.watch:
        watch(args.outdir)
        return 0

    try:
        synth(args.outdir)
    except Exception as e:
        logger.error(f"Synthesis failed: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
