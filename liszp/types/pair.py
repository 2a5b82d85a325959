"""Immutable cons cells and the helpers that treat chains of them as lists.

A Sequence is a chain of Pairs whose last tail is Nil. Pairs are never
mutated after construction, so sharing a tail between two lists is safe.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from liszp import LispValue
from liszp.types.errors import LiszpTypeError
from liszp.types.nil import Nil


class Pair:
    """A two-slot cell `(car . cdr)`."""

    __slots__ = ("car", "cdr")

    def __init__(self, car: LispValue, cdr: LispValue = Nil):
        object.__setattr__(self, "car", car)
        object.__setattr__(self, "cdr", cdr)

    def __setattr__(self, name, value):
        raise AttributeError("Pair is immutable")

    def __iter__(self) -> Iterator[LispValue]:
        """Yield the cars along the cdr chain; stops at the first non-Pair tail."""
        cell: LispValue = self
        while isinstance(cell, Pair):
            yield cell.car
            cell = cell.cdr

    def __eq__(self, other: object) -> bool:
        a: LispValue = self
        b: LispValue = other
        # Walk the spine iteratively; only recurse into cars.
        # Atoms must agree in type as well as value: 1, 1.0 and true differ.
        while isinstance(a, Pair) and isinstance(b, Pair):
            if a is b:
                return True
            if type(a.car) is not type(b.car) or a.car != b.car:
                return False
            a, b = a.cdr, b.cdr
        if isinstance(a, Pair) or isinstance(b, Pair):
            return False
        return type(a) is type(b) and a == b

    def __hash__(self) -> int:
        return hash(tuple(self)) ^ hash(last_tail(self))

    def __repr__(self) -> str:
        from liszp.printer import to_string
        return to_string(self, readable=True)


def lisp_list(*items: LispValue) -> LispValue:
    """Build a proper Sequence from the given items (Nil when empty)."""
    return from_iterable(items)


def from_iterable(items: Iterable[LispValue], tail: LispValue = Nil) -> LispValue:
    result = tail
    for item in reversed(list(items)):
        result = Pair(item, result)
    return result


def last_tail(x: LispValue) -> LispValue:
    while isinstance(x, Pair):
        x = x.cdr
    return x


def is_list(x: LispValue) -> bool:
    """True for Nil and for Pair chains that end in Nil."""
    return last_tail(x) is Nil


def to_list(x: LispValue, who: str = "list") -> list[LispValue]:
    """Convert a proper Sequence to a Python list.

    Raises LiszpTypeError naming `who` if `x` is not a proper Sequence.
    """
    if not is_list(x):
        raise LiszpTypeError(f"{who}: expected a list, got {x!r}")
    return list(x) if isinstance(x, Pair) else []
