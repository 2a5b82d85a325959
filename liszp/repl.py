"""Interactive read-eval-print loop.

A form may span several lines: input is collected under the continuation
prompt until its strings close and its brackets balance. Non-nil results are
printed; errors are reported on stderr and the session carries on.
"""

from __future__ import annotations

import sys
from typing import Callable, Optional, TextIO

from liszp.interpreter import Interpreter
from liszp.printer import to_string
from liszp.reader.parser import lex
from liszp.types.errors import LiszpError, LiszpSyntaxError
from liszp.types.nil import Nil

PROMPT = "> "
CONTINUATION_PROMPT = "  "
BANNER = "Liszp REPL. Type 'exit' or press Ctrl+D to quit."


def bracket_depth(source: str) -> int:
    """Number of brackets opened but not yet closed in `source`."""
    depth = 0
    for tok in lex(source):
        if tok.kind == "lparen":
            depth += 1
        elif tok.kind == "rparen":
            depth -= 1
    return depth


def has_open_string(source: str) -> bool:
    """True if `source` ends inside a string literal."""
    in_string = in_comment = escaped = False
    for ch in source:
        if in_comment:
            in_comment = ch != "\n"
        elif in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch == "#":
            in_comment = True
    return in_string


def read_input(input_fn: Callable[[str], str]) -> Optional[str]:
    """Read lines until strings close and brackets balance.

    Returns None at end of input.
    """
    lines: list[str] = []
    prompt = PROMPT
    while True:
        try:
            line = input_fn(prompt)
        except EOFError:
            return None
        lines.append(line)
        source = "\n".join(lines)
        if has_open_string(source):
            prompt = CONTINUATION_PROMPT
            continue
        depth = bracket_depth(source)
        if depth < 0:
            raise LiszpSyntaxError("input has more closing brackets than opening brackets")
        if depth == 0:
            return source
        prompt = CONTINUATION_PROMPT


def run_repl(
    interp: Interpreter,
    input_fn: Callable[[str], str] = input,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> None:
    out = out or sys.stdout
    err = err or sys.stderr
    print(BANNER, file=out)
    while True:
        try:
            source = read_input(input_fn)
            if source is None:
                print(file=out)
                break
            if source.strip() == "exit":
                break
            result = interp.eval(source)
            if result is not Nil:
                print(to_string(result, readable=True), file=out)
        except LiszpError as e:
            print(f"Liszp: {e}", file=err)
        except RecursionError:
            print("Liszp: maximum recursion depth exceeded", file=err)
        except KeyboardInterrupt:
            print(file=out)
