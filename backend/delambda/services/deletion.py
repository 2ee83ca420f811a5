"""Services that delete Lambda functions and their log groups."""

import logging
from dataclasses import dataclass

from botocore.exceptions import BotoCoreError

from ..exceptions import BatchOperationError, DelambdaError, NotAttachedToVpcError
from ..models import LogGroup
from ..repositories import FunctionRepository, LogGroupRepository, StackRepository
from .listing import resolve_stack_functions
from .vpc_detach import Reporter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeleteFunctionRequest:
    """Input for deleting one function.

    Attributes:
        function_name: Function to delete.
        detach_vpc: Detach the VPC before deleting.
        disable_ipv6: Disable dual-stack IPv6 before detaching.
        delete_logs: Delete ``/aws/lambda/<function_name>`` afterwards.
    """

    function_name: str
    detach_vpc: bool = True
    disable_ipv6: bool = True
    delete_logs: bool = True


@dataclass(frozen=True)
class DeleteStackFunctionsRequest:
    """Input for deleting every function in a stack."""

    stack_name: str
    detach_vpc: bool = True
    disable_ipv6: bool = True
    delete_logs: bool = True


class DeleteFunctionService:
    """Deletes a single function, detaching its VPC first."""

    def __init__(
        self,
        function_repo: FunctionRepository,
        log_group_repo: LogGroupRepository,
        reporter: Reporter = print,
    ):
        self.function_repo = function_repo
        self.log_group_repo = log_group_repo
        self.report = reporter

    def execute(self, request: DeleteFunctionRequest) -> None:
        name = request.function_name

        if request.detach_vpc:
            if request.disable_ipv6:
                try:
                    self.function_repo.disable_ipv6(name)
                except NotAttachedToVpcError:
                    self.report("Function is not attached to VPC, skipping IPv6 disable")
                else:
                    self.report(f"Disabled IPv6 for function {name}")

            try:
                self.function_repo.detach_vpc(name)
            except NotAttachedToVpcError:
                self.report("Function is not attached to VPC, skipping VPC detach")
            else:
                self.report(f"Detached VPC from function {name}")

        self.report(f"Deleting function {name}...")
        self.function_repo.delete(name)
        self.report(f"Deleted function {name}")

        if request.delete_logs:
            log_group = LogGroup.for_function(name)
            self.report(f"Deleting CloudWatch Logs log group {log_group.name}...")
            if self.log_group_repo.delete(log_group):
                self.report(f"Deleted CloudWatch Logs log group {log_group.name}")
            else:
                self.report(f"Log group {log_group.name} does not exist, nothing to delete")
        else:
            self.report("Skipping log deletion (--without-logs specified)")


class DeleteStackFunctionsService:
    """Deletes every function of a stack, continuing past failures.

    A log group that cannot be deleted is reported as a warning only, since
    the function itself is already gone by then.
    """

    def __init__(
        self,
        function_repo: FunctionRepository,
        log_group_repo: LogGroupRepository,
        stack_repo: StackRepository,
        reporter: Reporter = print,
    ):
        self.function_repo = function_repo
        self.log_group_repo = log_group_repo
        self.stack_repo = stack_repo
        self.report = reporter

    def execute(self, request: DeleteStackFunctionsRequest) -> None:
        function_names = resolve_stack_functions(self.stack_repo, request.stack_name)
        self.report(
            f"Found {len(function_names)} Lambda function(s) in stack {request.stack_name}"
        )

        success_count = 0
        failure_count = 0
        for function_name in function_names:
            self.report(f"\n=== Processing function: {function_name} ===")
            if self._process(function_name, request):
                self.report(f"Successfully processed {function_name}")
                success_count += 1
            else:
                failure_count += 1

        self.report("\n=== Summary ===")
        self.report(f"Total functions: {len(function_names)}")
        self.report(f"Successfully deleted: {success_count}")
        self.report(f"Failed: {failure_count}")

        if failure_count > 0:
            raise BatchOperationError("delete", failure_count, len(function_names))

    def _process(self, function_name: str, request: DeleteStackFunctionsRequest) -> bool:
        try:
            function = self.function_repo.find_by_name(function_name)
        except (DelambdaError, BotoCoreError) as e:
            self.report(f"Failed to get function: {e}")
            return False

        if request.detach_vpc:
            if function.is_attached_to_vpc:
                if request.disable_ipv6:
                    if function.has_ipv6_enabled:
                        try:
                            self.function_repo.disable_ipv6(function_name)
                        except (DelambdaError, BotoCoreError) as e:
                            self.report(f"Failed to disable IPv6: {e}")
                            return False
                        self.report(f"Disabled IPv6 for function {function_name}")
                    else:
                        self.report("IPv6 is not enabled, skipping IPv6 disable")

                try:
                    self.function_repo.detach_vpc(function_name)
                except (DelambdaError, BotoCoreError) as e:
                    self.report(f"Failed to detach VPC: {e}")
                    return False
                self.report(f"Detached VPC from function {function_name}")
            else:
                self.report("Function is not attached to VPC, skipping VPC detach")

        self.report(f"Deleting function {function_name}...")
        try:
            self.function_repo.delete(function_name)
        except (DelambdaError, BotoCoreError) as e:
            self.report(f"Failed to delete function: {e}")
            return False
        self.report(f"Deleted function {function_name}")

        if request.delete_logs:
            log_group = LogGroup.for_function(function_name)
            self.report(f"Deleting CloudWatch Logs log group {log_group.name}...")
            try:
                deleted = self.log_group_repo.delete(log_group)
            except (DelambdaError, BotoCoreError) as e:
                logger.warning(f"Log group cleanup failed for {function_name}: {e}")
                self.report(f"Warning: Failed to delete log group: {e}")
            else:
                if deleted:
                    self.report(f"Deleted CloudWatch Logs log group {log_group.name}")
                else:
                    self.report(f"Log group {log_group.name} does not exist, nothing to delete")
        else:
            self.report("Skipping log deletion (--without-logs specified)")

        return True
