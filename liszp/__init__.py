# Core type aliases for Liszp's data model.
# Code and data share one representation: atoms are plain Python values
# (int, float, bool, str, Symbol), sequences are chains of immutable Pair
# cells terminated by Nil.
#
# Naming guidance:
# - SExpression: Use in reader/macro code to denote syntactic forms (code-as-data).
# - LispValue:  Use in evaluator/runtime code to denote evaluated values.
# Both aliases resolve to `Any` and are interchangeable, since a macro's
# expansion is an evaluated value that is evaluated again.

from typing import Any, Callable

# Runtime value alias
LispValue = Any
# Forms alias (used interchangeably with LispValue)
SExpression = LispValue

# Evaluator function type: Python evaluator passed to special forms/macros
EvaluatorFn = Callable[..., LispValue]
