#!/usr/bin/env python3
"""
Command-line interface for delambda.

Safely deletes AWS Lambda functions that are attached to VPCs by disabling
IPv6, detaching the VPC and waiting for the update before deletion.
"""

import argparse
import logging
import sys
from typing import List, Optional

from botocore.exceptions import BotoCoreError, ClientError

from ..aws import AWSClients
from ..config.settings import DelambdaSettings, update_settings
from ..exceptions import DelambdaError
from ..repositories import FunctionRepository, LogGroupRepository, StackRepository
from ..services import (
    DeleteFunctionRequest,
    DeleteFunctionService,
    DeleteLogGroupService,
    DeleteStackFunctionsRequest,
    DeleteStackFunctionsService,
    DetachVpcRequest,
    DetachVpcService,
    DetachVpcStackRequest,
    DetachVpcStackService,
    ListFunctionsService,
    ListStackFunctionsService,
)

logger = logging.getLogger(__name__)

USAGE = """delambda - A powerful CLI tool to safely delete AWS Lambda functions with VPC attachments

Usage:
  delambda <command> [options]

Commands:
  list                 List all Lambda functions with VPC status
  detach               Detach VPC from a Lambda function
  delete               Delete a Lambda function
  delete-logs          Delete a CloudWatch Logs log group
  help                 Show this help message

Global Options:
  --region string      AWS region (optional, uses default or AWS_REGION env var)
  --profile string     AWS profile (optional, uses default or AWS_PROFILE env var)
  --log-level LEVEL    Logging level (default WARNING)

Examples:
  # List all Lambda functions in the account and region
  delambda list

  # List Lambda functions in a specific CloudFormation stack
  delambda list --stack my-stack

  # Detach VPC from a single Lambda function
  delambda detach --lambda my-function

  # Detach VPC from all Lambda functions in a CloudFormation stack
  delambda detach --stack my-stack

  # Delete a Lambda function and its log group (VPC will be automatically detached if attached)
  delambda delete --lambda my-function

  # Delete a Lambda function without deleting its log group
  delambda delete --lambda my-function --without-logs

  # Delete all Lambda functions in a CloudFormation stack (including log groups)
  delambda delete --stack my-stack

  # Delete CloudWatch Logs log group
  delambda delete-logs /aws/lambda/my-function
"""


COMMANDS = ("list", "detach", "delete", "delete-logs", "help")
TARGETED_COMMANDS = ("detach", "delete")
GLOBAL_VALUE_OPTIONS = ("--region", "--profile", "--log-level")


class CommandFailed(Exception):
    """Raised by command handlers after reporting a failure on stderr."""


class DelambdaArgumentParser(argparse.ArgumentParser):
    """Argument parser that exits with status 1 on usage errors."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def setup_logging(level: str = "WARNING", log_format: Optional[str] = None):
    """Setup logging configuration."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=log_format or "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _fail(message: str) -> CommandFailed:
    print(message, file=sys.stderr)
    return CommandFailed(message)


def create_clients(settings: DelambdaSettings) -> AWSClients:
    """Create AWS clients, reporting failures the way every command does."""
    try:
        return AWSClients(**settings.get_client_config())
    except DelambdaError as e:
        raise _fail(f"Failed to create AWS client: {e}") from e


def create_function_repository(
    clients: AWSClients, settings: DelambdaSettings
) -> FunctionRepository:
    return FunctionRepository(
        clients.lambda_client,
        wait_attempts=settings.update_wait_attempts,
        wait_interval=settings.update_wait_interval_seconds,
    )


def list_command(args, settings: DelambdaSettings):
    """List Lambda functions, optionally limited to one stack."""
    clients = create_clients(settings)
    function_repo = create_function_repository(clients, settings)

    try:
        if args.stack:
            stack_repo = StackRepository(clients.cloudformation_client)
            functions = ListStackFunctionsService(function_repo, stack_repo).execute(
                args.stack
            )
        else:
            functions = ListFunctionsService(function_repo).execute()
    except (DelambdaError, BotoCoreError, ClientError) as e:
        if args.stack:
            raise _fail(f"Failed to list functions in stack: {e}") from e
        raise _fail(f"Failed to list functions: {e}") from e

    if not functions:
        print("No Lambda functions found")
        return

    print(f"Found {len(functions)} Lambda function(s):\n")
    for function in functions:
        print(f"  - {function.name} [{function.runtime or ''}] {function.vpc_summary()}")


def detach_command(args, settings: DelambdaSettings):
    """Detach the VPC from one function or every function in a stack."""
    clients = create_clients(settings)
    function_repo = create_function_repository(clients, settings)

    if args.function_name is not None:
        try:
            DetachVpcService(function_repo).execute(
                DetachVpcRequest(function_name=args.function_name, disable_ipv6=True)
            )
        except (DelambdaError, BotoCoreError, ClientError) as e:
            raise _fail(f"Failed to detach VPC: {e}") from e
        print(f"Successfully detached VPC from {args.function_name}")
        return

    stack_repo = StackRepository(clients.cloudformation_client)
    try:
        DetachVpcStackService(function_repo, stack_repo).execute(
            DetachVpcStackRequest(stack_name=args.stack, disable_ipv6=True)
        )
    except (DelambdaError, BotoCoreError, ClientError) as e:
        raise _fail(f"Failed to detach VPC from stack: {e}") from e
    print(f"Successfully detached VPC from all functions in stack {args.stack}")


def delete_command(args, settings: DelambdaSettings):
    """Delete one function or every function in a stack."""
    clients = create_clients(settings)
    function_repo = create_function_repository(clients, settings)
    log_group_repo = LogGroupRepository(clients.logs_client)
    delete_logs = not args.without_logs

    if args.function_name is not None:
        try:
            DeleteFunctionService(function_repo, log_group_repo).execute(
                DeleteFunctionRequest(
                    function_name=args.function_name,
                    detach_vpc=True,
                    disable_ipv6=True,
                    delete_logs=delete_logs,
                )
            )
        except (DelambdaError, BotoCoreError, ClientError) as e:
            raise _fail(f"Failed to delete function: {e}") from e
        print(f"\nSuccessfully deleted function {args.function_name}")
        return

    stack_repo = StackRepository(clients.cloudformation_client)
    try:
        DeleteStackFunctionsService(function_repo, log_group_repo, stack_repo).execute(
            DeleteStackFunctionsRequest(
                stack_name=args.stack,
                detach_vpc=True,
                disable_ipv6=True,
                delete_logs=delete_logs,
            )
        )
    except (DelambdaError, BotoCoreError, ClientError) as e:
        raise _fail(f"Failed to delete stack functions: {e}") from e
    print(f"\nSuccessfully deleted all functions in stack {args.stack}")


def delete_logs_command(args, settings: DelambdaSettings):
    """Delete a CloudWatch Logs log group by name."""
    clients = create_clients(settings)
    log_group_repo = LogGroupRepository(clients.logs_client)

    try:
        deleted = DeleteLogGroupService(log_group_repo).execute(args.log_group_name)
    except (DelambdaError, BotoCoreError, ClientError) as e:
        raise _fail(f"Failed to delete log group: {e}") from e
    if deleted:
        print(f"Successfully deleted log group {args.log_group_name}")


def _add_target_options(parser: argparse.ArgumentParser):
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument(
        "--lambda",
        dest="function_name",
        metavar="FUNCTION_NAME",
        help="Lambda function name",
    )
    target.add_argument("--stack", help="CloudFormation stack name")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser.

    Global options are accepted both before and after the subcommand.
    """
    global_options = argparse.ArgumentParser(add_help=False)
    global_options.add_argument(
        "--region", default=argparse.SUPPRESS, help="AWS region"
    )
    global_options.add_argument(
        "--profile", default=argparse.SUPPRESS, help="AWS profile"
    )
    global_options.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=argparse.SUPPRESS,
        help="Set logging level",
    )

    parser = DelambdaArgumentParser(
        prog="delambda",
        description="Safely delete AWS Lambda functions with VPC attachments",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        parents=[global_options],
        add_help=False,
    )
    parser.add_argument("-h", "--help", action="store_true", dest="show_help")

    subparsers = parser.add_subparsers(dest="command", metavar="<command>")

    list_parser = subparsers.add_parser(
        "list",
        parents=[global_options],
        help="List all Lambda functions with VPC status",
    )
    list_parser.add_argument("--stack", help="CloudFormation stack name")
    list_parser.set_defaults(handler=list_command)

    detach_parser = subparsers.add_parser(
        "detach",
        parents=[global_options],
        help="Detach VPC from a Lambda function",
    )
    _add_target_options(detach_parser)
    detach_parser.set_defaults(handler=detach_command)

    delete_parser = subparsers.add_parser(
        "delete",
        parents=[global_options],
        help="Delete a Lambda function",
    )
    _add_target_options(delete_parser)
    delete_parser.add_argument(
        "--without-logs",
        action="store_true",
        help="Don't delete CloudWatch logs (logs are deleted by default)",
    )
    delete_parser.set_defaults(handler=delete_command)

    delete_logs_parser = subparsers.add_parser(
        "delete-logs",
        parents=[global_options],
        help="Delete a CloudWatch Logs log group",
    )
    delete_logs_parser.add_argument("log_group_name", help="Log group name")
    delete_logs_parser.set_defaults(handler=delete_logs_command)

    subparsers.add_parser("help", help="Show this help message")

    return parser


def _find_command(argv: List[str]) -> Optional[str]:
    """Return the first positional token, skipping global option values."""
    expects_value = False
    for token in argv:
        if expects_value:
            expects_value = False
        elif token in GLOBAL_VALUE_OPTIONS:
            expects_value = True
        elif not token.startswith("-"):
            return token
    return None


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        print(USAGE, end="")
        return 1

    command = _find_command(argv)
    if command is not None and command not in COMMANDS:
        print(f"Unknown command: {command}", file=sys.stderr)
        print(USAGE, end="")
        return 1

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.show_help or args.command in (None, "help"):
        print(USAGE, end="")
        return 0 if args.show_help or args.command == "help" else 1

    if args.command in TARGETED_COMMANDS:
        targets = (args.function_name, args.stack)
        if not any(target and target.strip() for target in targets):
            parser.error("Either --lambda or --stack must be specified")

    settings = update_settings(
        aws_region=getattr(args, "region", None),
        aws_profile=getattr(args, "profile", None),
        log_level=getattr(args, "log_level", None),
    )
    setup_logging(settings.log_level, settings.log_format)
    logger.debug(f"Running {args.command}")

    try:
        args.handler(args, settings)
    except CommandFailed:
        return 1
    return 0


def run():
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
