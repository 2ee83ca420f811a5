"""Domain models for delambda."""

from .function import LambdaFunction, VpcConfig
from .log_group import LAMBDA_LOG_GROUP_PREFIX, LogGroup
from .stack import LAMBDA_FUNCTION_RESOURCE_TYPE, Stack

__all__ = [
    "LambdaFunction",
    "VpcConfig",
    "LogGroup",
    "LAMBDA_LOG_GROUP_PREFIX",
    "Stack",
    "LAMBDA_FUNCTION_RESOURCE_TYPE",
]
