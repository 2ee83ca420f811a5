"""Pytest configuration for the CDK test infrastructure app."""

import os
import sys
from pathlib import Path

import pytest

CDK_DIR = Path(__file__).resolve().parents[2] / "cdk"
sys.path.insert(0, str(CDK_DIR))

TEST_ACCOUNT = "123456789012"
TEST_REGION = "us-east-1"


@pytest.fixture(scope="session", autouse=True)
def cdk_environment():
    """Default account and region for stacks synthesized in tests."""
    os.environ.setdefault("CDK_DEFAULT_ACCOUNT", TEST_ACCOUNT)
    os.environ.setdefault("CDK_DEFAULT_REGION", TEST_REGION)


@pytest.fixture(scope="module")
def infrastructure_stack():
    import aws_cdk as cdk
    from stacks import infrastructure_stack

    app = cdk.App()
    return infrastructure_stack.TestInfrastructureStack(
        app,
        "TestInfrastructureStack",
        env=cdk.Environment(account=TEST_ACCOUNT, region=TEST_REGION),
    )


@pytest.fixture(scope="module")
def template(infrastructure_stack):
    from aws_cdk.assertions import Template

    return Template.from_stack(infrastructure_stack)
