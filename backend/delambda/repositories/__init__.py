"""boto3-backed repositories."""

from .function_repository import FunctionRepository
from .log_group_repository import LogGroupRepository
from .stack_repository import StackRepository

__all__ = ["FunctionRepository", "LogGroupRepository", "StackRepository"]
