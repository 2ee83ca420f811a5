"""Pytest configuration and shared fixtures for delambda tests.

AWS clients are replaced with ``MagicMock`` doubles; no test talks to AWS.
"""

import os
from typing import Any, Dict, List, Optional
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from delambda.config.settings import reset_settings


@pytest.fixture(scope="session", autouse=True)
def configure_test_environment():
    """Configure environment variables for consistent testing."""
    test_env = {
        "AWS_DEFAULT_REGION": "us-east-1",
        "AWS_REGION": "us-east-1",
        # Prevent actual AWS API calls during testing
        "AWS_ACCESS_KEY_ID": "testing",
        "AWS_SECRET_ACCESS_KEY": "testing",
        "AWS_SECURITY_TOKEN": "testing",
        "AWS_SESSION_TOKEN": "testing",
    }

    for key, value in test_env.items():
        if key not in os.environ:
            os.environ[key] = value


@pytest.fixture(autouse=True)
def clean_settings():
    """Drop the cached settings singleton around each test."""
    reset_settings()
    yield
    reset_settings()


def make_client_error(code: str, message: str = "error", operation: str = "Operation"):
    """Build a botocore ClientError with the given error code."""
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


def make_configuration(
    name: str = "my-function",
    runtime: Optional[str] = "python3.11",
    state: str = "Active",
    last_update_status: str = "Successful",
    subnet_ids: Optional[List[str]] = None,
    security_group_ids: Optional[List[str]] = None,
    vpc_id: str = "",
    ipv6: bool = False,
    include_vpc: bool = True,
) -> Dict[str, Any]:
    """Build a Lambda ``FunctionConfiguration`` dict."""
    configuration: Dict[str, Any] = {
        "FunctionName": name,
        "State": state,
        "LastUpdateStatus": last_update_status,
    }
    if runtime is not None:
        configuration["Runtime"] = runtime
    if include_vpc:
        configuration["VpcConfig"] = {
            "VpcId": vpc_id,
            "SubnetIds": subnet_ids or [],
            "SecurityGroupIds": security_group_ids or [],
            "Ipv6AllowedForDualStack": ipv6,
        }
    return configuration


def make_vpc_configuration(name: str = "my-function", ipv6: bool = True, **kwargs):
    """Configuration of a function attached to a VPC."""
    return make_configuration(
        name=name,
        vpc_id="vpc-123",
        subnet_ids=["subnet-a", "subnet-b"],
        security_group_ids=["sg-1"],
        ipv6=ipv6,
        **kwargs,
    )


@pytest.fixture
def lambda_client():
    """Mock Lambda client."""
    return MagicMock()


@pytest.fixture
def logs_client():
    """Mock CloudWatch Logs client."""
    return MagicMock()


@pytest.fixture
def cloudformation_client():
    """Mock CloudFormation client."""
    return MagicMock()


@pytest.fixture
def report_lines():
    """Collects lines written through a service reporter."""
    return []


@pytest.fixture
def reporter(report_lines):
    return report_lines.append


@pytest.fixture
def configuration_factory():
    """Factory for Lambda function configuration dicts."""
    return make_configuration


@pytest.fixture
def vpc_configuration_factory():
    """Factory for configuration dicts of VPC-attached functions."""
    return make_vpc_configuration


@pytest.fixture
def client_error():
    """Factory for botocore ClientErrors."""
    return make_client_error
