from __future__ import annotations

"""
Lightweight indexer for Liszp files without evaluating code.

We scan for top-level forms and build an index for:
- definitions: (def name ...), (defun name ...), (defmacro (name ...) ...)
- the first syntax error the reader reports, if any

The scanner is tolerant: it never raises on partial/incomplete buffers, so a
half-typed document still yields its symbols.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional, Tuple
import re

from liszp.reader.parser import read
from liszp.types.errors import LiszpSyntaxError

TOKEN_REGEX = re.compile(
    r"\s+|\#[^\n]*|[(\[{]|[)\]}]|['`,]|\"(?:\\.|[^\"\\])*\"?|[^\s()\[\]{}'`,\"#]+"
)
OPENERS = "([{"
CLOSERS = ")]}"
LINE_RE = re.compile(r"at line (\d+)")

DEFINING_FORMS = {"def": "var", "defun": "function", "defmacro": "macro"}


@dataclass
class SymbolDef:
    name: str
    kind: str  # "var" | "function" | "macro"
    line: int
    col: int


@dataclass
class DocumentIndex:
    symbols: Dict[str, SymbolDef] = field(default_factory=dict)
    syntax_error: Optional[str] = None
    error_line: int = 0


def _iter_tokens(text: str) -> Iterator[Tuple[str, int]]:
    for m in TOKEN_REGEX.finditer(text):
        tok = m.group(0)
        if tok.isspace() or tok.startswith("#"):
            continue
        yield tok, m.start()


def _position_from_offset(text: str, offset: int) -> Tuple[int, int]:
    # Return (line, col), 0-based
    line = text.count("\n", 0, offset)
    last_nl = text.rfind("\n", 0, offset)
    col = offset if last_nl == -1 else offset - last_nl - 1
    return line, col


def _check_syntax(text: str, idx: DocumentIndex) -> None:
    try:
        read(text)
    except LiszpSyntaxError as e:
        idx.syntax_error = str(e)
        m = LINE_RE.search(idx.syntax_error)
        idx.error_line = int(m.group(1)) - 1 if m else 0


def build_index(text: str) -> DocumentIndex:
    idx = DocumentIndex()
    _check_syntax(text, idx)

    tokens = list(_iter_tokens(text))
    for i, (tok, _) in enumerate(tokens):
        if tok not in OPENERS or i + 2 >= len(tokens):
            continue
        kind = DEFINING_FORMS.get(tokens[i + 1][0])
        if kind is None:
            continue
        j = i + 2
        # (defmacro (name params..) body): the name opens the signature list
        if kind == "macro" and tokens[j][0] in OPENERS:
            j += 1
        if j >= len(tokens):
            continue
        name, start = tokens[j]
        if name in OPENERS or name in CLOSERS or name.startswith('"'):
            continue
        line, col = _position_from_offset(text, start)
        idx.symbols[name] = SymbolDef(name=name, kind=kind, line=line, col=col)

    return idx


# Signatures for quick hover/signature help without eval
SIGNATURES: Dict[str, str] = {
    # special forms
    "quote": "(quote form)",
    "if": "(if condition then else)",
    "lambda": "(lambda (params @ rest) body)",
    "def": "(def name value)",
    "defmacro": "(defmacro (name params @ rest) body)",
    "macroexpand-1": "(macroexpand-1 form)",
    "macroexpand": "(macroexpand form)",
    # builtins
    "cons": "(cons head tail)",
    "car": "(car pair)",
    "cdr": "(cdr pair)",
    "list": "(list @ xs)",
    "cons?": "(cons? x)",
    "nil?": "(nil? x)",
    "bool?": "(bool? x)",
    "int?": "(int? x)",
    "float?": "(float? x)",
    "str?": "(str? x)",
    "name?": "(name? x)",
    "equals?": "(equals? x y)",
    "eval": "(eval form)",
    "quasiquote-rec": "(quasiquote-rec template)",
    "panic": "(panic msg)",
    "error": "(error msg)",
    "print": "(print x)",
    "println": "(println x)",
    "+": "(+ x @ xs)",
    "-": "(- x @ xs)",
    "*": "(* x @ xs)",
    "/": "(/ x @ xs)",
    "%": "(% n d)",
    "<": "(< x y)",
    ">": "(> x y)",
    "<=": "(<= x y)",
    ">=": "(>= x y)",
    "==": "(== x y)",
    "!=": "(!= x y)",
    "not": "(not b)",
    "and": "(and a b)",
    "or": "(or a b)",
    "xor": "(xor a b)",
    # standard library
    "quasiquote": "(quasiquote template)",
    "unquote": "(unquote form)",
    "defun": "(defun name params body)",
    "let": "(let ([name value] ..) body)",
    "cond": "(cond test result @ more)",
    "map": "(map xs f)",
    "filter": "(filter xs pred)",
    "foldr": "(foldr f init xs)",
    "len": "(len xs)",
    "max": "(max xs)",
    "range": "(range start stop step)",
    "partition": "(partition pred xs)",
}
