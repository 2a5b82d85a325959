"""Render Liszp values the way the REPL and `print` show them."""

from __future__ import annotations

from io import StringIO

from liszp import LispValue
from liszp.types.nil import Nil
from liszp.types.pair import Pair
from liszp.types.symbol import Symbol

_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\t": "\\t", "\r": "\\r"}


def _quote_string(s: str) -> str:
    return '"' + "".join(_ESCAPES.get(ch, ch) for ch in s) + '"'


def to_string(value: LispValue, readable: bool = False) -> str:
    """Return the printed form of `value`.

    With `readable=True` strings are quoted and escaped so the output can be
    read back; otherwise they are shown raw, as `print` does.
    """
    with StringIO() as buffer:
        _write(buffer, value, readable)
        return buffer.getvalue()


def _write(buffer: StringIO, value: LispValue, readable: bool) -> None:
    if value is Nil:
        buffer.write("nil")
    elif value is True:
        buffer.write("true")
    elif value is False:
        buffer.write("false")
    elif isinstance(value, Symbol):
        buffer.write(value.id)
    elif isinstance(value, str):
        buffer.write(_quote_string(value) if readable else value)
    elif isinstance(value, Pair):
        _write_pair(buffer, value, readable)
    elif callable(value):
        buffer.write("<builtin function>")
    else:
        buffer.write(str(value))


def _write_pair(buffer: StringIO, value: Pair, readable: bool) -> None:
    buffer.write("(")
    cell: LispValue = value
    first = True
    while isinstance(cell, Pair):
        if not first:
            buffer.write(" ")
        _write(buffer, cell.car, readable)
        first = False
        cell = cell.cdr
    if cell is not Nil:
        buffer.write(" . ")
        _write(buffer, cell, readable)
    buffer.write(")")
