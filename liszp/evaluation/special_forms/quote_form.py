from liszp import SExpression, LispValue, EvaluatorFn
from liszp.types.environment import Environment
from liszp.types.errors import LiszpArityError


def quote_form(tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn) -> LispValue:
    if len(tail) != 1:
        raise LiszpArityError("quote takes exactly one value")
    return tail[0]
