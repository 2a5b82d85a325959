"""Lambda function representation for Liszp."""

from __future__ import annotations

from typing import Optional

from liszp import SExpression, LispValue
from liszp.types.bind import ParamSpec, bind_arguments
from liszp.types.environment import Environment


class Lambda:
    """A first-class lambda with parsed formal parameters, body, and closure env."""

    __slots__ = ("params", "body", "env", "name")

    def __init__(
        self,
        params: ParamSpec,
        body: SExpression,
        env: Environment | None = None,
        name: Optional[str] = None,
    ):
        self.params: ParamSpec = params
        self.body: SExpression = body
        # Avoid shared default Environment across instances
        self.env: Environment = env if env is not None else Environment()
        self.name: Optional[str] = name

    def __str__(self) -> str:
        if self.name is None:
            return "<function>"
        return f"<function '{self.name}'>"

    def __repr__(self) -> str:
        return f"(lambda {self.params} {self.body!r})"

    def describe(self) -> str:
        return "function" if self.name is None else f"function '{self.name}'"

    def extend_env(self, args: list[LispValue]) -> Environment:
        """
        Bind the given argument values to this lambda's formal parameters and
        return a new Environment for evaluating the body.
        """
        return bind_arguments(self.params, list(args), self.env, self.describe())
