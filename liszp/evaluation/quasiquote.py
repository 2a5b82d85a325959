"""The quasiquote rewrite.

`quasiquote_rec` rebuilds a template Pair by Pair. A Pair whose head is the
symbol `unquote` is replaced by the value of its argument, evaluated in the
given environment; everything else is copied as literal data.

There is no nesting-level counter: an `unquote` inside a nested
`quasiquote` is evaluated by the outermost walk like any other. Because the
tail of a Pair is walked too, a template such as `(a . (unquote b))`, which
reads the same as `(a unquote b)`, splices the value of `b` in as the tail.
"""

from __future__ import annotations

from liszp import EvaluatorFn, LispValue, SExpression
from liszp.types.environment import Environment
from liszp.types.errors import LiszpSyntaxError
from liszp.types.pair import Pair
from liszp.types.symbol import Symbol

UNQUOTE = Symbol("unquote")


def quasiquote_rec(x: SExpression, env: Environment, evaluate_fn: EvaluatorFn) -> LispValue:
    if not isinstance(x, Pair):
        return x
    if x.car == UNQUOTE:
        if not isinstance(x.cdr, Pair):
            raise LiszpSyntaxError("unquote expects an expression to evaluate")
        return evaluate_fn(x.cdr.car, env)
    return Pair(
        quasiquote_rec(x.car, env, evaluate_fn),
        quasiquote_rec(x.cdr, env, evaluate_fn),
    )
