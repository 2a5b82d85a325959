from liszp import EvaluatorFn
from liszp import SExpression, LispValue
from liszp.types.environment import Environment
from liszp.types.errors import LiszpInvalidSymbol, LiszpSyntaxError
from liszp.types.lambda_fn import Lambda
from liszp.types.nil import Nil
from liszp.types.symbol import Symbol


def define_form(tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn) -> LispValue:
    """
    (def name value)
    The value is evaluated in the current environment and bound in the global
    one. An anonymous lambda takes the name it is first bound to.
    """
    if len(tail) != 2:
        raise LiszpSyntaxError("expected syntax (def <name> <value>)")

    name, val_expr = tail
    if not isinstance(name, Symbol):
        raise LiszpInvalidSymbol(f"expected name in def expression, got {name!r}")
    value = evaluate_fn(val_expr, env)  # normal evaluation
    if isinstance(value, Lambda) and value.name is None:
        value.name = name.id
    env.root().define(name, value)
    return Nil
