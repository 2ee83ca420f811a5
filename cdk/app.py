#!/usr/bin/env python3
"""CDK application for the delambda test infrastructure.

Configuration comes from CDK context (``cdk deploy -c stack_name=...``) with
the CDK CLI's default account and region as fallbacks:
    stack_name: CloudFormation stack name (default TestInfrastructureStack)
    account: Target AWS account
    region: Target AWS region
"""

import os
from typing import Any, Dict, Optional

import aws_cdk as cdk
from stacks.infrastructure_stack import TestInfrastructureStack

DEFAULT_STACK_NAME = "TestInfrastructureStack"


def create_app(
    context: Optional[Dict[str, Any]] = None, outdir: Optional[str] = None
) -> cdk.App:
    """Build the CDK app with the test infrastructure stack."""
    app = cdk.App(context=context, outdir=outdir)

    stack_name = app.node.try_get_context("stack_name") or DEFAULT_STACK_NAME
    account = app.node.try_get_context("account") or os.environ.get("CDK_DEFAULT_ACCOUNT")
    region = app.node.try_get_context("region") or os.environ.get("CDK_DEFAULT_REGION")

    TestInfrastructureStack(
        app,
        stack_name,
        env=cdk.Environment(account=account, region=region),
        description="Test infrastructure for delambda: dual-stack VPC and three Lambda functions",
    )
    return app


if __name__ == "__main__":
    create_app().synth()
