"""Special forms that expose the macro expander to Lisp code.

macroexpand-1: expand a single step at the head position if it is a macro.
macroexpand: repeatedly expand the head position until it is no longer a
             macro call.

Both return the expansion as a form and do not evaluate it. They are meant
as an aid to debugging macros:

    > (macroexpand-1 '(defun inc (x) (+ x 1)))
    (def inc (lambda (x) (+ x 1)))
"""

from liszp import SExpression, EvaluatorFn
from liszp.types.environment import Environment
from liszp.types.errors import LiszpArityError
from liszp.types.pair import Pair
from liszp.types.symbol import Symbol
from liszp.evaluation.macro_expander import expand_1, macroexpand

QUOTE = Symbol("quote")


def _target(name: str, tail: list[SExpression]) -> SExpression:
    if len(tail) != 1:
        raise LiszpArityError(f"{name} expects exactly 1 argument")
    form = tail[0]
    # Unwrap a single leading (quote <form>) so both (m '(...)) and (m (...)) work
    if isinstance(form, Pair) and form.car == QUOTE and isinstance(form.cdr, Pair):
        form = form.cdr.car
    return form


def macroexpand1_form(tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn):
    """(macroexpand-1 form): expand the head macro once and return the result."""
    expansion, _ = expand_1(_target("macroexpand-1", tail), env, evaluate_fn)
    return expansion


def macroexpand_form(tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn):
    """(macroexpand form): expand the head position to a fixpoint and return it."""
    return macroexpand(_target("macroexpand", tail), env, evaluate_fn)
