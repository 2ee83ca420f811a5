"""CloudFormation stack repository."""

import logging
from typing import Any, List

from botocore.exceptions import BotoCoreError, ClientError

from ..exceptions import DelambdaError
from ..models import LAMBDA_FUNCTION_RESOURCE_TYPE, Stack

logger = logging.getLogger(__name__)


class StackRepository:
    """Looks up the Lambda functions a stack owns."""

    def __init__(self, cloudformation_client: Any):
        self.client = cloudformation_client

    def list_lambda_functions(self, stack: Stack) -> List[str]:
        """Return the physical names of every Lambda function in ``stack``."""
        function_names: List[str] = []
        try:
            paginator = self.client.get_paginator("list_stack_resources")
            for page in paginator.paginate(StackName=stack.name):
                for resource in page.get("StackResourceSummaries", []):
                    if resource.get("ResourceType") != LAMBDA_FUNCTION_RESOURCE_TYPE:
                        continue
                    physical_id = resource.get("PhysicalResourceId")
                    if physical_id:
                        function_names.append(physical_id)
        except (BotoCoreError, ClientError) as e:
            msg = f"failed to list stack resources: {e}"
            raise DelambdaError(msg) from e

        logger.debug(f"Stack {stack.name} owns {len(function_names)} Lambda function(s)")
        return function_names

    def exists(self, stack: Stack) -> bool:
        try:
            self.client.describe_stacks(StackName=stack.name)
        except ClientError as e:
            message = e.response.get("Error", {}).get("Message", "")
            if "does not exist" in message:
                return False
            msg = f"failed to describe stack {stack.name}: {e}"
            raise DelambdaError(msg) from e
        except BotoCoreError as e:
            msg = f"failed to describe stack {stack.name}: {e}"
            raise DelambdaError(msg) from e
        return True
