"""Lambda function models.

These mirror the parts of the Lambda ``FunctionConfiguration`` shape that
matter when tearing a function down: its VPC attachment and update state.

Example:
    >>> fn = LambdaFunction.from_configuration({
    ...     "FunctionName": "my-fn",
    ...     "Runtime": "python3.11",
    ...     "VpcConfig": {"VpcId": "vpc-1", "SubnetIds": ["subnet-1"]},
    ... })
    >>> fn.is_attached_to_vpc
    True
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class VpcConfig(BaseModel):
    """VPC attachment of a Lambda function."""

    vpc_id: str = Field(default="", description="VPC ID")
    subnet_ids: List[str] = Field(default_factory=list, description="Attached subnet IDs")
    security_group_ids: List[str] = Field(
        default_factory=list, description="Attached security group IDs"
    )
    ipv6_allowed_for_dual_stack: bool = Field(
        default=False, description="Whether IPv6 outbound traffic is allowed"
    )

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "VpcConfig":
        return cls(
            vpc_id=data.get("VpcId") or "",
            subnet_ids=list(data.get("SubnetIds") or []),
            security_group_ids=list(data.get("SecurityGroupIds") or []),
            ipv6_allowed_for_dual_stack=bool(data.get("Ipv6AllowedForDualStack", False)),
        )


class LambdaFunction(BaseModel):
    """A Lambda function as seen by delambda."""

    name: str = Field(..., min_length=1, description="Function name")
    runtime: Optional[str] = Field(None, description="Runtime identifier; None for images")
    state: Optional[str] = Field(None, description="Function state, e.g. Active")
    last_update_status: Optional[str] = Field(None, description="Last update status")
    state_reason_code: Optional[str] = Field(None, description="State reason code")
    vpc_config: Optional[VpcConfig] = Field(None, description="VPC attachment")

    @classmethod
    def from_configuration(cls, configuration: Dict[str, Any]) -> "LambdaFunction":
        """Build from a ``ListFunctions`` item or ``GetFunction`` configuration."""
        vpc_data = configuration.get("VpcConfig")
        return cls(
            name=configuration["FunctionName"],
            runtime=configuration.get("Runtime"),
            state=configuration.get("State"),
            last_update_status=configuration.get("LastUpdateStatus"),
            state_reason_code=configuration.get("StateReasonCode"),
            vpc_config=VpcConfig.from_api(vpc_data) if vpc_data is not None else None,
        )

    @property
    def is_attached_to_vpc(self) -> bool:
        # An empty VpcConfig is returned for detached functions
        return self.vpc_config is not None and len(self.vpc_config.subnet_ids) > 0

    @property
    def has_ipv6_enabled(self) -> bool:
        return self.vpc_config is not None and self.vpc_config.ipv6_allowed_for_dual_stack

    def vpc_summary(self) -> str:
        """Human readable VPC status used by ``delambda list``."""
        if not self.is_attached_to_vpc:
            return "No VPC"
        summary = f"VPC: {self.vpc_config.vpc_id}"
        if self.has_ipv6_enabled:
            summary += " (IPv6 enabled)"
        return summary
