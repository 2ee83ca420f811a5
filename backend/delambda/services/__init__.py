"""Use cases exposed by the delambda CLI."""

from .deletion import (
    DeleteFunctionRequest,
    DeleteFunctionService,
    DeleteStackFunctionsRequest,
    DeleteStackFunctionsService,
)
from .listing import ListFunctionsService, ListStackFunctionsService, resolve_stack_functions
from .log_cleanup import DeleteLogGroupService
from .vpc_detach import (
    DetachVpcRequest,
    DetachVpcService,
    DetachVpcStackRequest,
    DetachVpcStackService,
)

__all__ = [
    "DeleteFunctionRequest",
    "DeleteFunctionService",
    "DeleteStackFunctionsRequest",
    "DeleteStackFunctionsService",
    "DeleteLogGroupService",
    "DetachVpcRequest",
    "DetachVpcService",
    "DetachVpcStackRequest",
    "DetachVpcStackService",
    "ListFunctionsService",
    "ListStackFunctionsService",
    "resolve_stack_functions",
]
