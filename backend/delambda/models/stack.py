"""CloudFormation stack model."""

from pydantic import BaseModel, Field

LAMBDA_FUNCTION_RESOURCE_TYPE = "AWS::Lambda::Function"


class Stack(BaseModel):
    """A CloudFormation stack whose Lambda functions are processed together."""

    name: str = Field(..., min_length=1, description="Stack name or ID")
