from liszp import EvaluatorFn
from liszp import SExpression, LispValue
from liszp.types.bind import parse_params
from liszp.types.environment import Environment
from liszp.types.errors import LiszpSyntaxError
from liszp.types.lambda_fn import Lambda


def lambda_form(tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn) -> LispValue:
    """
    (lambda x body) or (lambda (a b @ rest) body)
    A lambda has exactly one body form; it closes over `env`.
    """
    if len(tail) != 2:
        raise LiszpSyntaxError(
            f"lambda expression expected 2 arguments (lambda <args> <body>), received {len(tail)}"
        )
    params, body = tail
    return Lambda(parse_params(params, "lambda"), body, env)
