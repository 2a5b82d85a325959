"""Application engine for Liszp.

This module centralizes procedure application for the interpreter:
- Lisp Lambdas: bind the already-evaluated arguments over the closure
  environment and evaluate the body.
- Python callables registered in the environment (builtins), invoked with
  the caller's environment and the argument list.

Builtins never see unevaluated forms; macros are rejected here because they
only make sense in the head position of a call form.
"""

from __future__ import annotations

from typing import Callable

from liszp import LispValue, EvaluatorFn
from liszp.types.environment import Environment
from liszp.types.errors import LiszpTypeError
from liszp.types.lambda_fn import Lambda
from liszp.types.macro_fn import Macro


def apply_lambda(fn: Lambda, args: list[LispValue], evaluate_fn: EvaluatorFn) -> LispValue:
    """Apply a Lisp Lambda value.

    Parameters:
    - fn: The Lambda being applied.
    - args: The already-evaluated argument values.
    - evaluate_fn: Evaluator used for the body.

    Arity mismatches raise LiszpArityError from the binder.
    """
    new_env = fn.extend_env(args)
    return evaluate_fn(fn.body, new_env)


def apply(
    head: Lambda | Callable[[Environment, list[LispValue]], LispValue] | object,
    args: list[LispValue],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """Apply either a Lambda or a Python callable.

    - For Lambda, defer to apply_lambda.
    - For Python callables (builtins), invoke with the runtime env and list of args.
    - Otherwise, raise a type error. Macros are not procedures and cannot be
      applied to values.
    """
    if isinstance(head, Lambda):
        return apply_lambda(head, args, evaluate_fn)
    if isinstance(head, Macro):
        raise LiszpTypeError(f"macro '{head.name}' cannot be applied as a function")
    if callable(head):
        return head(env, args)
    from liszp.printer import to_string
    raise LiszpTypeError(f"attempt to call a non-function value {to_string(head, readable=True)}")
