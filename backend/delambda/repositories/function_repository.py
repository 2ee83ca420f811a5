"""Lambda function repository backed by the Lambda API."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, List

from botocore.exceptions import BotoCoreError, ClientError

from ..exceptions import (
    DelambdaError,
    FunctionNotFoundError,
    FunctionUpdateFailedError,
    FunctionUpdateTimeoutError,
    NotAttachedToVpcError,
)
from ..models import LambdaFunction

logger = logging.getLogger(__name__)

STATE_ACTIVE = "Active"
STATE_FAILED = "Failed"
UPDATE_SUCCESSFUL = "Successful"
UPDATE_FAILED = "Failed"


def _error_code(error: ClientError) -> str:
    return error.response.get("Error", {}).get("Code", "")


class FunctionRepository:
    """Reads and mutates Lambda functions.

    Args:
        lambda_client: boto3 Lambda client.
        wait_attempts: Polls before a pending update is declared timed out.
        wait_interval: Seconds between polls.
        sleep: Sleep function, replaceable in tests.
    """

    def __init__(
        self,
        lambda_client: Any,
        wait_attempts: int = 60,
        wait_interval: float = 5.0,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.client = lambda_client
        self.wait_attempts = wait_attempts
        self.wait_interval = wait_interval
        self._sleep = sleep

    def find_all(self) -> List[LambdaFunction]:
        """Return every function in the account and region."""
        functions: List[LambdaFunction] = []
        try:
            paginator = self.client.get_paginator("list_functions")
            for page in paginator.paginate():
                for configuration in page.get("Functions", []):
                    functions.append(LambdaFunction.from_configuration(configuration))
        except (BotoCoreError, ClientError) as e:
            msg = f"failed to list functions: {e}"
            raise DelambdaError(msg) from e

        logger.debug(f"Listed {len(functions)} Lambda functions")
        return functions

    def _get_configuration(self, name: str) -> Dict[str, Any]:
        try:
            response = self.client.get_function(FunctionName=name)
        except ClientError as e:
            if _error_code(e) == "ResourceNotFoundException":
                raise FunctionNotFoundError(name) from e
            msg = f"failed to get function {name}: {e}"
            raise DelambdaError(msg) from e
        except BotoCoreError as e:
            msg = f"failed to get function {name}: {e}"
            raise DelambdaError(msg) from e
        return response["Configuration"]

    def find_by_name(self, name: str) -> LambdaFunction:
        """Fetch a single function.

        Raises:
            FunctionNotFoundError: If the function does not exist.
        """
        return LambdaFunction.from_configuration(self._get_configuration(name))

    def _find_attached(self, name: str) -> LambdaFunction:
        function = self.find_by_name(name)
        if not function.is_attached_to_vpc:
            raise NotAttachedToVpcError(name)
        return function

    def _update_vpc_config(self, name: str, vpc_config: Dict[str, Any], action: str) -> None:
        try:
            self.client.update_function_configuration(
                FunctionName=name, VpcConfig=vpc_config
            )
        except (BotoCoreError, ClientError) as e:
            msg = f"failed to {action} function {name}: {e}"
            raise DelambdaError(msg) from e

    def disable_ipv6(self, name: str) -> None:
        """Turn off dual-stack IPv6 while keeping the VPC attachment.

        Raises:
            NotAttachedToVpcError: If the function has no VPC attachment.
        """
        function = self._find_attached(name)
        logger.info(f"Disabling IPv6 for {name}")
        self._update_vpc_config(
            name,
            {
                "SubnetIds": function.vpc_config.subnet_ids,
                "SecurityGroupIds": function.vpc_config.security_group_ids,
                "Ipv6AllowedForDualStack": False,
            },
            "disable IPv6 for",
        )
        self.wait_until_updated(name)

    def detach_vpc(self, name: str) -> None:
        """Remove the VPC attachment.

        Raises:
            NotAttachedToVpcError: If the function has no VPC attachment.
        """
        self._find_attached(name)
        logger.info(f"Detaching VPC from {name}")
        self._update_vpc_config(
            name,
            {"SubnetIds": [], "SecurityGroupIds": []},
            "detach VPC from",
        )
        self.wait_until_updated(name)

    def delete(self, name: str) -> None:
        try:
            self.client.delete_function(FunctionName=name)
        except ClientError as e:
            if _error_code(e) == "ResourceNotFoundException":
                raise FunctionNotFoundError(name) from e
            msg = f"failed to delete function {name}: {e}"
            raise DelambdaError(msg) from e
        except BotoCoreError as e:
            msg = f"failed to delete function {name}: {e}"
            raise DelambdaError(msg) from e
        logger.info(f"Deleted function {name}")

    def wait_until_updated(self, name: str) -> None:
        """Poll until the function is Active with a Successful last update.

        Raises:
            FunctionUpdateFailedError: If the function or its update failed.
            FunctionUpdateTimeoutError: If polling is exhausted.
        """
        for attempt in range(1, self.wait_attempts + 1):
            configuration = self._get_configuration(name)
            state = configuration.get("State")
            last_update_status = configuration.get("LastUpdateStatus")

            if state == STATE_ACTIVE and last_update_status == UPDATE_SUCCESSFUL:
                logger.debug(f"{name} ready after {attempt} poll(s)")
                return

            if state == STATE_FAILED or last_update_status == UPDATE_FAILED:
                raise FunctionUpdateFailedError(
                    name,
                    state,
                    last_update_status,
                    configuration.get("StateReasonCode")
                    or configuration.get("LastUpdateStatusReasonCode"),
                )

            logger.debug(
                f"Waiting for {name}: state={state}, lastUpdateStatus={last_update_status}"
            )
            self._sleep(self.wait_interval)

        raise FunctionUpdateTimeoutError(name)
