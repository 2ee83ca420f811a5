"""Test infrastructure stack for delambda.

Deploys the resources delambda is exercised against: a dual-stack VPC and
three Lambda functions covering every teardown path.

Architecture:
    - Dual-stack VPC across 2 AZs with public and private-with-egress tiers
    - Security group for the VPC-attached functions, all outbound allowed
    - ``test-vpc-lambda-ipv6``: VPC attached, IPv6 allowed for dual stack
    - ``test-vpc-lambda-no-ipv6``: VPC attached, IPv6 not allowed
    - ``test-no-vpc-lambda``: no VPC
    - Outputs for the VPC ID and each function name
"""

from dataclasses import dataclass
from typing import Any, Dict, Tuple

import cdk_nag
from aws_cdk import Aspects, CfnOutput, Duration, Stack
from aws_cdk import aws_ec2 as ec2
from aws_cdk import aws_lambda as _lambda
from aws_cdk import aws_logs as logs
from cdk_nag import NagSuppressions
from constructs import Construct

FUNCTION_TIMEOUT = Duration.seconds(30)
LOG_RETENTION = logs.RetentionDays.ONE_DAY

PYTHON_HANDLER_TEMPLATE = """
def handler(event, context):
    return {{
        'statusCode': 200,
        'body': '{message}'
    }}
"""

NODE_HANDLER_TEMPLATE = """
exports.handler = async (event) => {{
    return {{
        statusCode: 200,
        body: '{message}'
    }};
}};
"""


@dataclass(frozen=True)
class TestFunctionSpec:
    """Declaration of one test Lambda function.

    Attributes:
        construct_id: CDK construct ID.
        function_name: Physical function name.
        runtime: Lambda runtime.
        handler_source: Inline handler code.
        vpc_attached: Place the function in the private subnets.
        ipv6_allowed: Allow IPv6 traffic for dual stack (VPC functions only).
        output_id: ID of the CloudFormation output exporting the name.
        output_description: Description of that output.
    """

    construct_id: str
    function_name: str
    runtime: _lambda.Runtime
    handler_source: str
    vpc_attached: bool
    ipv6_allowed: bool
    output_id: str
    output_description: str


TEST_FUNCTIONS: Tuple[TestFunctionSpec, ...] = (
    TestFunctionSpec(
        construct_id="VpcLambdaWithIPv6",
        function_name="test-vpc-lambda-ipv6",
        runtime=_lambda.Runtime.PYTHON_3_11,
        handler_source=PYTHON_HANDLER_TEMPLATE.format(
            message="Hello from VPC Lambda with IPv6!"
        ),
        vpc_attached=True,
        ipv6_allowed=True,
        output_id="VpcLambdaWithIPv6Name",
        output_description="Lambda function with VPC and IPv6 enabled",
    ),
    TestFunctionSpec(
        construct_id="VpcLambdaNoIPv6",
        function_name="test-vpc-lambda-no-ipv6",
        runtime=_lambda.Runtime.NODEJS_18_X,
        handler_source=NODE_HANDLER_TEMPLATE.format(
            message="Hello from VPC Lambda without IPv6!"
        ),
        vpc_attached=True,
        ipv6_allowed=False,
        output_id="VpcLambdaNoIPv6Name",
        output_description="Lambda function with VPC but IPv6 disabled",
    ),
    TestFunctionSpec(
        construct_id="NoVpcLambda",
        function_name="test-no-vpc-lambda",
        runtime=_lambda.Runtime.PYTHON_3_11,
        handler_source=PYTHON_HANDLER_TEMPLATE.format(
            message="Hello from Lambda without VPC!"
        ),
        vpc_attached=False,
        ipv6_allowed=False,
        output_id="NoVpcLambdaName",
        output_description="Lambda function without VPC",
    ),
)


class TestInfrastructureStack(Stack):
    """Dual-stack VPC plus the three delambda test functions.

    Attributes:
        vpc: Dual-stack VPC.
        lambda_security_group: Security group shared by VPC functions.
        functions: Functions keyed by construct ID.
    """

    vpc: ec2.Vpc
    lambda_security_group: ec2.SecurityGroup
    functions: Dict[str, _lambda.Function]

    def __init__(self, scope: Construct, construct_id: str, **kwargs: Any) -> None:
        super().__init__(scope, construct_id, **kwargs)

        self.vpc = self._create_vpc()
        self.lambda_security_group = self._create_lambda_security_group()
        self.functions = {
            spec.construct_id: self._create_function(spec) for spec in TEST_FUNCTIONS
        }
        self._create_outputs()
        self._configure_security_checks()

    def _create_vpc(self) -> ec2.Vpc:
        """Create dual-stack VPC with public and private subnets."""
        return ec2.Vpc(
            self,
            "TestVPC",
            max_azs=2,
            ip_protocol=ec2.IpProtocol.DUAL_STACK,
            subnet_configuration=[
                ec2.SubnetConfiguration(
                    name="Public", subnet_type=ec2.SubnetType.PUBLIC, cidr_mask=24
                ),
                ec2.SubnetConfiguration(
                    name="Private",
                    subnet_type=ec2.SubnetType.PRIVATE_WITH_EGRESS,
                    cidr_mask=24,
                ),
            ],
        )

    def _create_lambda_security_group(self) -> ec2.SecurityGroup:
        """Create security group for Lambda functions."""
        return ec2.SecurityGroup(
            self,
            "LambdaSecurityGroup",
            vpc=self.vpc,
            description="Security group for test Lambda functions",
            allow_all_outbound=True,
        )

    def _create_function(self, spec: TestFunctionSpec) -> _lambda.Function:
        vpc_options: Dict[str, Any] = {}
        if spec.vpc_attached:
            vpc_options = {
                "vpc": self.vpc,
                "vpc_subnets": ec2.SubnetSelection(
                    subnet_type=ec2.SubnetType.PRIVATE_WITH_EGRESS
                ),
                "security_groups": [self.lambda_security_group],
                "ipv6_allowed_for_dual_stack": spec.ipv6_allowed,
            }

        return _lambda.Function(
            self,
            spec.construct_id,
            function_name=spec.function_name,
            runtime=spec.runtime,
            handler="index.handler",
            code=_lambda.Code.from_inline(spec.handler_source),
            log_retention=LOG_RETENTION,
            timeout=FUNCTION_TIMEOUT,
            **vpc_options,
        )

    def _create_outputs(self) -> None:
        CfnOutput(self, "VpcId", value=self.vpc.vpc_id, description="VPC ID")
        for spec in TEST_FUNCTIONS:
            CfnOutput(
                self,
                spec.output_id,
                value=self.functions[spec.construct_id].function_name,
                description=spec.output_description,
            )

    def _configure_security_checks(self) -> None:
        """Apply AWS Solutions checks with suppressions for a throwaway test stack."""
        Aspects.of(self).add(cdk_nag.AwsSolutionsChecks())
        NagSuppressions.add_stack_suppressions(
            stack=self,
            suppressions=[
                {
                    "id": "AwsSolutions-VPC7",
                    "reason": "Short-lived test VPC does not need flow logs",
                },
                {
                    "id": "AwsSolutions-IAM4",
                    "reason": "Lambda basic and VPC access execution roles use AWS managed policies",
                },
                {
                    "id": "AwsSolutions-IAM5",
                    "reason": "Log retention custom resource requires wildcard log permissions",
                },
                {
                    "id": "AwsSolutions-L1",
                    "reason": "Runtimes are pinned to cover both Python and Node.js teardown paths",
                },
            ],
        )

