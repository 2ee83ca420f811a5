"""Services that detach Lambda functions from their VPC.

Detaching before deletion lets Lambda release the function's Hyperplane ENIs
promptly instead of leaving them behind for the subnets and security groups.
IPv6 is disabled first because a dual-stack attachment cannot be removed in
the same update.
"""

import logging
from dataclasses import dataclass
from typing import Callable

from botocore.exceptions import BotoCoreError

from ..exceptions import BatchOperationError, DelambdaError, NotAttachedToVpcError
from ..repositories import FunctionRepository, StackRepository
from .listing import resolve_stack_functions

logger = logging.getLogger(__name__)

Reporter = Callable[[str], None]


@dataclass(frozen=True)
class DetachVpcRequest:
    """Input for detaching one function.

    Attributes:
        function_name: Function to detach.
        disable_ipv6: Disable dual-stack IPv6 before detaching.
    """

    function_name: str
    disable_ipv6: bool = True


@dataclass(frozen=True)
class DetachVpcStackRequest:
    """Input for detaching every function in a stack.

    Attributes:
        stack_name: CloudFormation stack name or ID.
        disable_ipv6: Disable dual-stack IPv6 before detaching.
    """

    stack_name: str
    disable_ipv6: bool = True


class DetachVpcService:
    """Detaches a single function from its VPC."""

    def __init__(self, function_repo: FunctionRepository):
        self.function_repo = function_repo

    def execute(self, request: DetachVpcRequest) -> None:
        """Detach the VPC.

        Raises:
            NotAttachedToVpcError: If the function has no VPC attachment.
        """
        if request.disable_ipv6:
            try:
                self.function_repo.disable_ipv6(request.function_name)
            except NotAttachedToVpcError:
                # Surfaced by detach_vpc below
                pass

        self.function_repo.detach_vpc(request.function_name)


class DetachVpcStackService:
    """Detaches every function of a stack, continuing past failures."""

    def __init__(
        self,
        function_repo: FunctionRepository,
        stack_repo: StackRepository,
        reporter: Reporter = print,
    ):
        self.function_repo = function_repo
        self.stack_repo = stack_repo
        self.report = reporter

    def execute(self, request: DetachVpcStackRequest) -> None:
        """Detach every function in the stack.

        Raises:
            BatchOperationError: If any function could not be processed.
        """
        function_names = resolve_stack_functions(self.stack_repo, request.stack_name)
        self.report(
            f"Found {len(function_names)} Lambda function(s) in stack {request.stack_name}"
        )

        success_count = 0
        failure_count = 0
        for function_name in function_names:
            self.report(f"\nProcessing function: {function_name}")
            if self._process(function_name, request.disable_ipv6):
                success_count += 1
            else:
                failure_count += 1

        self.report("\n=== Summary ===")
        self.report(f"Total functions: {len(function_names)}")
        self.report(f"Successfully processed: {success_count}")
        self.report(f"Failed: {failure_count}")

        if failure_count > 0:
            raise BatchOperationError("process", failure_count, len(function_names))

    def _process(self, function_name: str, disable_ipv6: bool) -> bool:
        try:
            function = self.function_repo.find_by_name(function_name)
        except (DelambdaError, BotoCoreError) as e:
            logger.warning(f"Could not fetch {function_name}: {e}")
            self.report(f"  Failed to get function: {e}")
            return False

        if not function.is_attached_to_vpc:
            self.report("  Function is not attached to VPC, skipping")
            return True

        if disable_ipv6 and function.has_ipv6_enabled:
            self.report("  Disabling IPv6...")
            try:
                self.function_repo.disable_ipv6(function_name)
            except (DelambdaError, BotoCoreError) as e:
                logger.warning(f"Could not disable IPv6 for {function_name}: {e}")
                self.report(f"  Failed to disable IPv6: {e}")
                return False
            self.report("  IPv6 disabled")

        self.report("  Detaching VPC...")
        try:
            self.function_repo.detach_vpc(function_name)
        except (DelambdaError, BotoCoreError) as e:
            logger.warning(f"Could not detach VPC from {function_name}: {e}")
            self.report(f"  Failed to detach VPC: {e}")
            return False

        self.report("  VPC detached successfully")
        return True
