"""CloudWatch Logs log group model."""

from pydantic import BaseModel, Field

LAMBDA_LOG_GROUP_PREFIX = "/aws/lambda/"


class LogGroup(BaseModel):
    """A CloudWatch Logs log group."""

    name: str = Field(..., min_length=1, description="Log group name")

    @classmethod
    def for_function(cls, function_name: str) -> "LogGroup":
        """Log group Lambda writes to by default for ``function_name``."""
        return cls(name=f"{LAMBDA_LOG_GROUP_PREFIX}{function_name}")
