"""Core evaluator for the Liszp interpreter.

Implements special-form dispatch, macro expansion at the head of call forms,
and strict application of lambdas and builtin procedures. Evaluation is a
direct recursion over the form; there is no trampoline, so deep recursion in
Lisp code is bounded by the Python stack. With the default
LISZP_RECURSION_LIMIT of 10000, recursive prelude functions such as `len`
handle lists of roughly 700 elements.
"""

from __future__ import annotations

from liszp import SExpression, LispValue
from liszp.types.environment import Environment
from liszp.types.errors import LiszpSyntaxError
from liszp.types.macro_fn import Macro
from liszp.types.pair import Pair, is_list
from liszp.types.symbol import Symbol
from liszp.evaluation.apply import apply
from liszp.evaluation.macro_expander import expand_macro
from liszp.evaluation.special_forms import SPECIAL_FORMS


def evaluate(expr: SExpression, env: Environment) -> LispValue:
    """
    Evaluate a single form in `env` and return its value.

    - Symbols are looked up in the environment chain.
    - Pairs are call forms: special forms are dispatched on their head
      symbol; a head that resolves to a Macro receives the raw argument forms
      and its expansion is evaluated here, in the caller's environment;
      anything else is applied to its evaluated arguments, left to right.
    - Every other value (numbers, strings, booleans, Nil) evaluates to itself.
    """
    if isinstance(expr, Symbol):
        return env.lookup(expr)

    if not isinstance(expr, Pair):
        return expr

    head, arg_forms = expr.car, expr.cdr
    if not is_list(arg_forms):
        raise LiszpSyntaxError(f"expected a list of args in call form {expr!r}")

    if isinstance(head, Symbol):
        # --- Special forms handling ---
        special = SPECIAL_FORMS.get(head)
        if special is not None:
            return special(list(arg_forms), env, evaluate)
        fn = env.lookup(head)
    else:
        fn = evaluate(head, env)

    if isinstance(fn, Macro):
        expansion = expand_macro(fn, arg_forms, evaluate)
        return evaluate(expansion, env)

    args = [evaluate(arg, env) for arg in arg_forms]
    return apply(fn, args, env, evaluate)
