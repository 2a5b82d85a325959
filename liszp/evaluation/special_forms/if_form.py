from liszp import EvaluatorFn
from liszp import SExpression, LispValue
from liszp.types.environment import Environment
from liszp.types.errors import LiszpSyntaxError, LiszpTypeError


def if_form(tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn) -> LispValue:
    if len(tail) != 3:
        raise LiszpSyntaxError("if expression has syntax (if <condition> <true case> <false case>)")

    cond = evaluate_fn(tail[0], env)
    # Only booleans are accepted as conditions
    if not isinstance(cond, bool):
        raise LiszpTypeError(f"if expression expected a boolean condition, got {cond!r}")

    return evaluate_fn(tail[1] if cond else tail[2], env)
