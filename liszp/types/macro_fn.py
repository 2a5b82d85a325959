"""Macro bindings.

A Macro wraps a transformer Lambda. It is stored in an Environment like any
other value; the evaluator recognises it by type when it heads a call form
and hands it the raw argument forms instead of their values.
"""

from __future__ import annotations

from liszp.types.lambda_fn import Lambda


class Macro:
    __slots__ = ("name", "transformer")

    def __init__(self, name: str, transformer: Lambda):
        self.name = name
        self.transformer = transformer

    def __str__(self) -> str:
        return f"<macro '{self.name}'>"

    def __repr__(self) -> str:
        return f"Macro({self.name!r}, {self.transformer!r})"
