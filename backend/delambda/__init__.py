"""
delambda

Safely delete AWS Lambda functions with VPC attachments: disable dual-stack
IPv6, detach the VPC, wait for the update, delete the function and clean up
its CloudWatch Logs log group, one function or a whole CloudFormation stack
at a time.
"""

from .config.settings import get_settings, update_settings
from .exceptions import DelambdaError
from .models import LambdaFunction, LogGroup, VpcConfig

__version__ = "0.1.0"

__all__ = [
    "get_settings",
    "update_settings",
    "DelambdaError",
    "LambdaFunction",
    "LogGroup",
    "VpcConfig",
]
