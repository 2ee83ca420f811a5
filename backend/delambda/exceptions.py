"""Exception hierarchy for delambda.

Repositories translate botocore errors into these types so services and the
CLI can branch on the failure kind instead of on error text.
"""

from typing import Optional


class DelambdaError(Exception):
    """Base exception for all delambda failures."""


class ClientCreationError(DelambdaError):
    """Raised when an AWS session or service client cannot be created."""


class FunctionNotFoundError(DelambdaError):
    """Raised when a Lambda function does not exist."""

    def __init__(self, function_name: str):
        self.function_name = function_name
        super().__init__(f"function {function_name} not found")


class NotAttachedToVpcError(DelambdaError):
    """Raised when a VPC operation targets a function without a VPC."""

    def __init__(self, function_name: str):
        self.function_name = function_name
        super().__init__(f"function {function_name} is not attached to a VPC")


class FunctionUpdateFailedError(DelambdaError):
    """Raised when a configuration update leaves the function in a failed state."""

    def __init__(
        self,
        function_name: str,
        state: Optional[str],
        last_update_status: Optional[str],
        reason: Optional[str],
    ):
        self.function_name = function_name
        self.state = state
        self.last_update_status = last_update_status
        self.reason = reason
        super().__init__(
            f"function update failed: state={state}, "
            f"lastUpdateStatus={last_update_status}, reason={reason or ''}"
        )


class FunctionUpdateTimeoutError(DelambdaError):
    """Raised when a function does not become ready in time."""

    def __init__(self, function_name: str):
        self.function_name = function_name
        super().__init__(f"timeout waiting for function {function_name} to be ready")


class StackNotFoundError(DelambdaError):
    """Raised when a CloudFormation stack does not exist."""

    def __init__(self, stack_name: str):
        self.stack_name = stack_name
        super().__init__(f"stack {stack_name} does not exist")


class NoStackFunctionsError(DelambdaError):
    """Raised when a stack contains no Lambda functions."""

    def __init__(self, stack_name: str):
        self.stack_name = stack_name
        super().__init__(f"no Lambda functions found in stack {stack_name}")


class BatchOperationError(DelambdaError):
    """Raised when some functions in a stack-wide operation failed."""

    def __init__(self, action: str, failed: int, total: int):
        self.action = action
        self.failed = failed
        self.total = total
        super().__init__(f"failed to {action} {failed} function(s)")
