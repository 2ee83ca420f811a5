"""Listing services for Lambda functions."""

import logging
from typing import List

from ..exceptions import NoStackFunctionsError, StackNotFoundError
from ..models import LambdaFunction, Stack
from ..repositories import FunctionRepository, StackRepository

logger = logging.getLogger(__name__)


def resolve_stack_functions(stack_repo: StackRepository, stack_name: str) -> List[str]:
    """Return the Lambda function names owned by ``stack_name``.

    Raises:
        StackNotFoundError: If the stack does not exist.
        NoStackFunctionsError: If the stack owns no Lambda functions.
    """
    stack = Stack(name=stack_name)
    if not stack_repo.exists(stack):
        raise StackNotFoundError(stack_name)

    function_names = stack_repo.list_lambda_functions(stack)
    if not function_names:
        raise NoStackFunctionsError(stack_name)
    return function_names


class ListFunctionsService:
    """Lists every Lambda function in the account and region."""

    def __init__(self, function_repo: FunctionRepository):
        self.function_repo = function_repo

    def execute(self) -> List[LambdaFunction]:
        return self.function_repo.find_all()


class ListStackFunctionsService:
    """Lists the Lambda functions of one CloudFormation stack."""

    def __init__(self, function_repo: FunctionRepository, stack_repo: StackRepository):
        self.function_repo = function_repo
        self.stack_repo = stack_repo

    def execute(self, stack_name: str) -> List[LambdaFunction]:
        function_names = resolve_stack_functions(self.stack_repo, stack_name)
        logger.info(f"Fetching {len(function_names)} function(s) from stack {stack_name}")
        return [self.function_repo.find_by_name(name) for name in function_names]
