from __future__ import annotations
import logging
import sys
from pathlib import Path

from liszp.config import get_log_level
from liszp.interpreter import Interpreter
from liszp.repl import run_repl
from liszp.types.errors import LiszpError


def run_file(file_path: str) -> int:
    """Evaluate every top-level form of a source file; returns the exit status."""
    p = Path(file_path)
    try:
        source = p.read_text(encoding="utf-8")
    except FileNotFoundError:
        print(f"Liszp: file not found: {file_path}", file=sys.stderr)
        return 1
    try:
        Interpreter().eval(source)
    except LiszpError as e:
        print(f"Liszp: {e}", file=sys.stderr)
        return 1
    except RecursionError:
        print("Liszp: maximum recursion depth exceeded", file=sys.stderr)
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run a source file when one is given, otherwise start the REPL."""
    args = sys.argv[1:] if argv is None else argv
    logging.basicConfig(level=get_log_level(), format="%(levelname)s %(name)s: %(message)s")

    files = [a for a in args if not a.startswith("-")]
    if len(files) > 1:
        print("Liszp: you must provide at most one file", file=sys.stderr)
        return 2
    if files:
        return run_file(files[0])

    run_repl(Interpreter())
    return 0


if __name__ == "__main__":
    sys.exit(main())
