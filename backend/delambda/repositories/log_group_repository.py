"""CloudWatch Logs log group repository."""

import logging
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from ..exceptions import DelambdaError
from ..models import LogGroup

logger = logging.getLogger(__name__)


class LogGroupRepository:
    """Checks for and deletes log groups."""

    def __init__(self, logs_client: Any):
        self.client = logs_client

    def exists(self, log_group: LogGroup) -> bool:
        try:
            paginator = self.client.get_paginator("describe_log_groups")
            for page in paginator.paginate(logGroupNamePrefix=log_group.name):
                for group in page.get("logGroups", []):
                    if group.get("logGroupName") == log_group.name:
                        return True
        except (BotoCoreError, ClientError) as e:
            msg = f"failed to describe log groups: {e}"
            raise DelambdaError(msg) from e
        return False

    def delete(self, log_group: LogGroup) -> bool:
        """Delete ``log_group``.

        Returns:
            True if a group was deleted, False if it was already gone.
        """
        try:
            self.client.delete_log_group(logGroupName=log_group.name)
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") == "ResourceNotFoundException":
                logger.info(f"Log group {log_group.name} already deleted")
                return False
            msg = f"failed to delete log group {log_group.name}: {e}"
            raise DelambdaError(msg) from e
        except BotoCoreError as e:
            msg = f"failed to delete log group {log_group.name}: {e}"
            raise DelambdaError(msg) from e
        logger.info(f"Deleted log group {log_group.name}")
        return True
