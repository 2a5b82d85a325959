"""Parameter-list parsing and argument binding, shared by lambdas and macros.

A parameter list is either a single Symbol (`(lambda x ...)` takes exactly
one argument), Nil (no arguments), or a Sequence of Symbols. The variadic
marker `@` may appear once, immediately before the final name; that name then
receives the remaining arguments as a Sequence.
"""

from __future__ import annotations

from typing import NamedTuple, Optional

from liszp import LispValue, SExpression
from liszp.types.environment import Environment
from liszp.types.errors import LiszpArityError, LiszpSyntaxError
from liszp.types.nil import Nil
from liszp.types.pair import Pair, from_iterable, is_list
from liszp.types.symbol import Symbol

VARIADIC_MARKER = Symbol("@")


class ParamSpec(NamedTuple):
    required: tuple[Symbol, ...]
    rest: Optional[Symbol] = None

    @property
    def is_variadic(self) -> bool:
        return self.rest is not None

    def __str__(self) -> str:
        names = [str(p) for p in self.required]
        if self.rest is not None:
            names += [VARIADIC_MARKER.id, str(self.rest)]
        return "(" + " ".join(names) + ")"


def parse_params(params: SExpression, who: str = "lambda") -> ParamSpec:
    """Parse a parameter list form into a ParamSpec.

    Raises LiszpSyntaxError for anything that is not a name, or for a
    misplaced variadic marker.
    """
    if isinstance(params, Symbol) and params != VARIADIC_MARKER:
        return ParamSpec((params,))
    if params is Nil:
        return ParamSpec(())
    if not isinstance(params, Pair) or not is_list(params):
        raise LiszpSyntaxError(
            f"in {who}: expected a list of arguments or a single argument, got {params!r}"
        )

    names = list(params)
    for name in names:
        if not isinstance(name, Symbol):
            raise LiszpSyntaxError(f"in {who}: expected name in argument list, got {name!r}")

    if VARIADIC_MARKER not in names:
        _check_unique(names, who)
        return ParamSpec(tuple(names))

    idx = names.index(VARIADIC_MARKER)
    if idx != len(names) - 2:
        raise LiszpSyntaxError(
            f"in {who}: '@' must be followed by exactly one name for the variadic argument"
        )
    rest = names[-1]
    if rest == VARIADIC_MARKER:
        raise LiszpSyntaxError(f"in {who}: expected name for vararg")
    _check_unique(names[:idx] + [rest], who)
    return ParamSpec(tuple(names[:idx]), rest)


def _check_unique(names: list[Symbol], who: str) -> None:
    seen: set[Symbol] = set()
    for name in names:
        if name in seen:
            raise LiszpSyntaxError(f"in {who}: duplicate argument name '{name}'")
        seen.add(name)


def bind_arguments(
    spec: ParamSpec,
    supplied: list[LispValue],
    closure_env: Environment,
    who: str = "function",
) -> Environment:
    """
    Bind supplied arguments to the formals described by `spec`.

    Returns a new Environment whose outer is `closure_env`. Without a rest
    parameter the counts must match exactly; with one, at least the required
    count must be supplied and the surplus is bound as a Sequence.
    """
    n_required = len(spec.required)
    n_supplied = len(supplied)

    if spec.rest is None and n_supplied != n_required:
        raise LiszpArityError(
            f"{who} expected {n_required} argument(s) but received {n_supplied}"
        )
    if spec.rest is not None and n_supplied < n_required:
        raise LiszpArityError(
            f"{who} invoked with too few arguments: expected at least {n_required}, received {n_supplied}"
        )

    local_env = Environment(outer=closure_env)
    for name, value in zip(spec.required, supplied):
        local_env.define(name, value)
    if spec.rest is not None:
        local_env.define(spec.rest, from_iterable(supplied[n_required:]))
    return local_env
