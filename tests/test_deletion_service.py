"""Tests for the function deletion services."""

from unittest.mock import MagicMock, call

import pytest
from botocore.exceptions import EndpointConnectionError

from delambda.exceptions import (
    BatchOperationError,
    DelambdaError,
    FunctionNotFoundError,
    NoStackFunctionsError,
    NotAttachedToVpcError,
)
from delambda.models import LambdaFunction, LogGroup, VpcConfig
from delambda.repositories import FunctionRepository, LogGroupRepository, StackRepository
from delambda.services import (
    DeleteFunctionRequest,
    DeleteFunctionService,
    DeleteStackFunctionsRequest,
    DeleteStackFunctionsService,
)


def _function(name, attached=True, ipv6=False):
    vpc_config = VpcConfig(
        vpc_id="vpc-1" if attached else "",
        subnet_ids=["subnet-a"] if attached else [],
        ipv6_allowed_for_dual_stack=ipv6,
    )
    return LambdaFunction(name=name, vpc_config=vpc_config)


@pytest.fixture
def function_repo():
    return MagicMock(spec=FunctionRepository)


@pytest.fixture
def log_group_repo():
    return MagicMock(spec=LogGroupRepository)


@pytest.fixture
def stack_repo():
    repo = MagicMock(spec=StackRepository)
    repo.exists.return_value = True
    return repo


class TestDeleteFunctionService:
    @pytest.fixture
    def service(self, function_repo, log_group_repo, reporter):
        return DeleteFunctionService(function_repo, log_group_repo, reporter=reporter)

    def test_full_teardown_order(self, service, function_repo, log_group_repo, report_lines):
        manager = MagicMock()
        manager.attach_mock(function_repo, "functions")
        manager.attach_mock(log_group_repo, "logs")

        service.execute(DeleteFunctionRequest("fn"))

        assert manager.mock_calls == [
            call.functions.disable_ipv6("fn"),
            call.functions.detach_vpc("fn"),
            call.functions.delete("fn"),
            call.logs.delete(LogGroup(name="/aws/lambda/fn")),
        ]
        assert report_lines == [
            "Disabled IPv6 for function fn",
            "Detached VPC from function fn",
            "Deleting function fn...",
            "Deleted function fn",
            "Deleting CloudWatch Logs log group /aws/lambda/fn...",
            "Deleted CloudWatch Logs log group /aws/lambda/fn",
        ]

    def test_function_without_vpc(self, service, function_repo, report_lines):
        function_repo.disable_ipv6.side_effect = NotAttachedToVpcError("fn")
        function_repo.detach_vpc.side_effect = NotAttachedToVpcError("fn")

        service.execute(DeleteFunctionRequest("fn"))

        function_repo.delete.assert_called_once_with("fn")
        assert "Function is not attached to VPC, skipping IPv6 disable" in report_lines
        assert "Function is not attached to VPC, skipping VPC detach" in report_lines

    def test_without_logs(self, service, log_group_repo, report_lines):
        service.execute(DeleteFunctionRequest("fn", delete_logs=False))

        log_group_repo.delete.assert_not_called()
        assert report_lines[-1] == "Skipping log deletion (--without-logs specified)"

    def test_without_vpc_detach(self, service, function_repo):
        service.execute(DeleteFunctionRequest("fn", detach_vpc=False))

        function_repo.disable_ipv6.assert_not_called()
        function_repo.detach_vpc.assert_not_called()
        function_repo.delete.assert_called_once_with("fn")

    def test_detach_failure_stops_deletion(self, service, function_repo):
        function_repo.detach_vpc.side_effect = DelambdaError("update failed")

        with pytest.raises(DelambdaError, match="update failed"):
            service.execute(DeleteFunctionRequest("fn"))

        function_repo.delete.assert_not_called()

    def test_missing_function(self, service, function_repo, log_group_repo):
        function_repo.disable_ipv6.side_effect = FunctionNotFoundError("fn")

        with pytest.raises(FunctionNotFoundError):
            service.execute(DeleteFunctionRequest("fn"))

        log_group_repo.delete.assert_not_called()

    def test_missing_log_group_reported(self, service, log_group_repo, report_lines):
        log_group_repo.delete.return_value = False

        service.execute(DeleteFunctionRequest("fn"))

        assert report_lines[-1] == "Log group /aws/lambda/fn does not exist, nothing to delete"

    def test_log_group_failure_propagates(self, service, log_group_repo):
        log_group_repo.delete.side_effect = DelambdaError("access denied")

        with pytest.raises(DelambdaError, match="access denied"):
            service.execute(DeleteFunctionRequest("fn"))


class TestDeleteStackFunctionsService:
    @pytest.fixture
    def service(self, function_repo, log_group_repo, stack_repo, reporter):
        return DeleteStackFunctionsService(
            function_repo, log_group_repo, stack_repo, reporter=reporter
        )

    def test_deletes_every_function(
        self, service, function_repo, log_group_repo, stack_repo, report_lines
    ):
        functions = {
            "with-ipv6": _function("with-ipv6", ipv6=True),
            "no-ipv6": _function("no-ipv6"),
            "no-vpc": _function("no-vpc", attached=False),
        }
        stack_repo.list_lambda_functions.return_value = list(functions)
        function_repo.find_by_name.side_effect = functions.get

        service.execute(DeleteStackFunctionsRequest("my-stack"))

        function_repo.disable_ipv6.assert_called_once_with("with-ipv6")
        assert function_repo.detach_vpc.call_args_list == [call("with-ipv6"), call("no-ipv6")]
        assert function_repo.delete.call_args_list == [
            call("with-ipv6"),
            call("no-ipv6"),
            call("no-vpc"),
        ]
        assert log_group_repo.delete.call_count == 3
        assert "IPv6 is not enabled, skipping IPv6 disable" in report_lines
        assert "Function is not attached to VPC, skipping VPC detach" in report_lines
        assert report_lines[-3:] == [
            "Total functions: 3",
            "Successfully deleted: 3",
            "Failed: 0",
        ]

    def test_log_group_failure_is_a_warning(
        self, service, function_repo, log_group_repo, stack_repo, report_lines
    ):
        stack_repo.list_lambda_functions.return_value = ["fn"]
        function_repo.find_by_name.return_value = _function("fn", attached=False)
        log_group_repo.delete.side_effect = DelambdaError("access denied")

        service.execute(DeleteStackFunctionsRequest("my-stack"))

        assert "Warning: Failed to delete log group: access denied" in report_lines
        assert "Successfully processed fn" in report_lines
        assert "Successfully deleted: 1" in report_lines

    def test_continues_after_failure(
        self, service, function_repo, log_group_repo, stack_repo, report_lines
    ):
        stack_repo.list_lambda_functions.return_value = ["broken", "fine"]
        function_repo.find_by_name.side_effect = lambda name: _function(name)
        function_repo.delete.side_effect = [DelambdaError("conflict"), None]

        with pytest.raises(BatchOperationError) as exc_info:
            service.execute(DeleteStackFunctionsRequest("my-stack"))

        assert str(exc_info.value) == "failed to delete 1 function(s)"
        assert exc_info.value.total == 2
        assert "Failed to delete function: conflict" in report_lines
        log_group_repo.delete.assert_called_once_with(LogGroup(name="/aws/lambda/fine"))

    def test_connection_error_does_not_stop_batch(
        self, service, function_repo, stack_repo, report_lines
    ):
        stack_repo.list_lambda_functions.return_value = ["a", "b"]
        function_repo.find_by_name.side_effect = [
            EndpointConnectionError(endpoint_url="https://lambda.us-east-1.amazonaws.com"),
            _function("b", attached=False),
        ]

        with pytest.raises(BatchOperationError) as exc_info:
            service.execute(DeleteStackFunctionsRequest("my-stack"))

        assert exc_info.value.failed == 1
        function_repo.delete.assert_called_once_with("b")
        assert "Successfully deleted: 1" in report_lines

    def test_missing_log_group_reported(
        self, service, function_repo, log_group_repo, stack_repo, report_lines
    ):
        stack_repo.list_lambda_functions.return_value = ["fn"]
        function_repo.find_by_name.return_value = _function("fn", attached=False)
        log_group_repo.delete.return_value = False

        service.execute(DeleteStackFunctionsRequest("my-stack"))

        assert "Log group /aws/lambda/fn does not exist, nothing to delete" in report_lines
        assert "Deleted CloudWatch Logs log group /aws/lambda/fn" not in report_lines

    def test_detach_failure_skips_delete(self, service, function_repo, stack_repo, report_lines):
        stack_repo.list_lambda_functions.return_value = ["fn"]
        function_repo.find_by_name.return_value = _function("fn", ipv6=True)
        function_repo.disable_ipv6.side_effect = DelambdaError("update failed")

        with pytest.raises(BatchOperationError):
            service.execute(DeleteStackFunctionsRequest("my-stack"))

        function_repo.detach_vpc.assert_not_called()
        function_repo.delete.assert_not_called()
        assert "Failed to disable IPv6: update failed" in report_lines

    def test_without_logs(self, service, function_repo, log_group_repo, stack_repo):
        stack_repo.list_lambda_functions.return_value = ["fn"]
        function_repo.find_by_name.return_value = _function("fn", attached=False)

        service.execute(DeleteStackFunctionsRequest("my-stack", delete_logs=False))

        log_group_repo.delete.assert_not_called()

    def test_empty_stack(self, service, stack_repo):
        stack_repo.list_lambda_functions.return_value = []

        with pytest.raises(NoStackFunctionsError):
            service.execute(DeleteStackFunctionsRequest("my-stack"))
