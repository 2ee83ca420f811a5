"""Service for deleting a CloudWatch Logs log group by name."""

import logging

from ..models import LogGroup
from ..repositories import LogGroupRepository
from .vpc_detach import Reporter

logger = logging.getLogger(__name__)


class DeleteLogGroupService:
    """Deletes one log group; a missing group is not an error."""

    def __init__(self, log_group_repo: LogGroupRepository, reporter: Reporter = print):
        self.log_group_repo = log_group_repo
        self.report = reporter

    def execute(self, log_group_name: str) -> bool:
        """Delete ``log_group_name``.

        Returns:
            True if the group existed and was deleted.
        """
        log_group = LogGroup(name=log_group_name)
        if not self.log_group_repo.exists(log_group):
            self.report(f"Log group {log_group.name} does not exist, nothing to delete")
            return False
        return self.log_group_repo.delete(log_group)
