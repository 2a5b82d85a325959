"""Macro expansion.

A macro call `(name a1 ... aN)` is expanded by binding the transformer's
parameters to the raw argument forms, over the environment the macro was
defined in, and evaluating the transformer body once. The result is the
expansion; evaluating it is the caller's job, in the caller's environment.
"""

from __future__ import annotations

import logging

from liszp import EvaluatorFn, SExpression
from liszp.types.bind import bind_arguments
from liszp.types.environment import Environment
from liszp.types.macro_fn import Macro
from liszp.types.pair import Pair, to_list
from liszp.types.symbol import Symbol

logger = logging.getLogger(__name__)


def expand_macro(macro: Macro, arg_forms: SExpression, evaluate_fn: EvaluatorFn) -> SExpression:
    """
    Run a macro transformer on unevaluated argument forms:
    - Bind raw args to the transformer's parameters (a variadic tail is
      collected into one Sequence).
    - Evaluate the transformer body to produce an expansion.
    - Do NOT evaluate the returned expansion here; just return it.
    """
    transformer = macro.transformer
    args = to_list(arg_forms, f"macro '{macro.name}'")
    call_env = bind_arguments(transformer.params, args, transformer.env, f"macro '{macro.name}'")
    expansion = evaluate_fn(transformer.body, call_env)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Expanded macro %s: %r", macro.name, expansion)
    return expansion


def resolve_macro(form: SExpression, env: Environment) -> Macro | None:
    """Return the Macro a call form's head resolves to, if any."""
    if not isinstance(form, Pair) or not isinstance(form.car, Symbol):
        return None
    # Lazy import: special forms import this module
    from liszp.evaluation.special_forms import SPECIAL_FORMS
    if form.car in SPECIAL_FORMS:
        return None
    frame = env.find(form.car)
    if frame is None:
        return None
    value = frame.vars[form.car]
    return value if isinstance(value, Macro) else None


# Single-step head expansion
def expand_1(form: SExpression, env: Environment, evaluate_fn: EvaluatorFn) -> tuple[SExpression, bool]:
    """Expand only the head-position macro if present.

    Returns the (possibly unchanged) form and whether an expansion happened.
    """
    macro = resolve_macro(form, env)
    if macro is None:
        return form, False
    return expand_macro(macro, form.cdr, evaluate_fn), True


# Fixed-point head expansion
def macroexpand(form: SExpression, env: Environment, evaluate_fn: EvaluatorFn) -> SExpression:
    """Expand the head position repeatedly until it is no longer a macro call."""
    expanded = True
    while expanded:
        form, expanded = expand_1(form, env, evaluate_fn)
    return form
