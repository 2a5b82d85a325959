"""
  Liszp Reader, Lexer and Parser

- Streaming, lazy parsing
- Emits Liszp forms built from Python primitives and Pair cells:

    - nil / null -> Nil
    - true / false -> bool
    - lists -> Pair chains ending in Nil; () reads as Nil
    - dotted lists -> Pair chains ending in the dotted tail
    - symbols -> Symbol
    - strings -> str
    - numbers -> int/float (decimal with _ separators, 0x.., 0b..)
    - quote forms -> (quote expr), (quasiquote expr), (unquote expr)

  (), [] and {} are interchangeable list delimiters, but each list must be
  closed by the partner of the bracket that opened it. Comments run from #
  to the end of the line.
"""

from __future__ import annotations

import re
from typing import Iterator, NamedTuple, Optional

from liszp import SExpression
from liszp.types.errors import LiszpSyntaxError
from liszp.types.nil import Nil
from liszp.types.pair import Pair, from_iterable
from liszp.types.symbol import Symbol


TOKEN_RE = re.compile(
    r"\s*(?:"
    r"(?P<comment>\#[^\n]*)"  # single-line comment
    r"|(?P<quote>['`,])"  # ' ` ,
    r"|(?P<lparen>[(\[{])"  # ( [ {
    r"|(?P<rparen>[)\]}])"  # ) ] }
    r'|(?P<string>"(?:\\.|[^\\"])*")'  # double-quoted strings
    r"|(?P<symbol>[^\s()\[\]{}'`,\"#]+)"  # fallback: atoms
    r")",
    re.DOTALL,
)

INT_RE = re.compile(r"-?(?:0[bB][01_]+|0[xX][0-9a-fA-F_]+|[0-9][0-9_]*)")
FLOAT_RE = re.compile(r"-?[0-9][0-9_]*(?:\.[0-9_]*)?(?:[eE][-+]?[0-9]+)?")

CLOSERS: dict[str, str] = {"(": ")", "[": "]", "{": "}"}

QUOTE_FORMS: dict[str, Symbol] = {
    "'": Symbol("quote"),
    "`": Symbol("quasiquote"),
    ",": Symbol("unquote"),
}

STRING_ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    '"': '"',
    "\\": "\\",
    "0": "\0",
}

DOT = Symbol(".")


class Token(NamedTuple):
    kind: str
    text: str
    line: int


def lex(source: str) -> Iterator[Token]:
    """Token generator: yields Token(kind, text, line) tuples."""
    pos = 0
    line = 1
    n = len(source)

    while pos < n:
        m = TOKEN_RE.match(source, pos)
        if not m:
            if source[pos:].strip() == "":
                break
            start = pos + (len(source[pos:]) - len(source[pos:].lstrip()))
            line += source.count("\n", pos, start)
            raise LiszpSyntaxError(
                f"syntax error at line {line}: unexpected character {source[start]!r}"
            )
        kind = next(nm for nm in TOKEN_RE.groupindex if m.group(nm) is not None)
        line += source.count("\n", pos, m.start(kind))
        pos = m.end()
        if kind == "comment":
            continue
        yield Token(kind, m.group(kind), line)
        line += m.group(kind).count("\n")


def unescape(body: str) -> str:
    out: list[str] = []
    chars = iter(body)
    for ch in chars:
        if ch != "\\":
            out.append(ch)
            continue
        nxt = next(chars, "")
        out.append(STRING_ESCAPES.get(nxt, "\\" + nxt))
    return "".join(out)


def parse_atom(text: str) -> SExpression:
    """Convert the source text of an atom into its value."""
    if text in ("nil", "null"):
        return Nil
    if text == "true":
        return True
    if text == "false":
        return False
    if INT_RE.fullmatch(text):
        digits = text.lstrip("-")
        sign = -1 if text.startswith("-") else 1
        base = {"0x": 16, "0b": 2}.get(digits[:2].lower(), 10)
        try:
            return sign * int(digits if base == 10 else digits[2:], base)
        except ValueError:
            raise LiszpSyntaxError(f"could not parse '{text}' as an integer or a float")
    if FLOAT_RE.fullmatch(text):
        try:
            return float(text)
        except ValueError:
            raise LiszpSyntaxError(f"could not parse '{text}' as an integer or a float")
    if text[0].isdigit():
        raise LiszpSyntaxError(f"could not parse '{text}' as an integer or a float")
    return Symbol(text)


class TokenStream:
    def __init__(self, token_iter: Iterator[Token]):
        self.tokens = iter(token_iter)
        self.buffer: list[Token] = []

    def peek(self) -> Optional[Token]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None
        return self.buffer[0]

    def advance(self) -> Optional[Token]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, None)

    def parse_expr(self) -> SExpression:
        """Parse the next form; returns None once the stream is exhausted."""
        tok = self.advance()
        if tok is None:
            return None

        if tok.kind == "symbol":
            return parse_atom(tok.text)

        if tok.kind == "string":
            return unescape(tok.text[1:-1])

        # Quote forms
        if tok.kind == "quote":
            if self.peek() is None:
                raise LiszpSyntaxError(
                    f"syntax error at line {tok.line}: expected an expression after {tok.text!r}"
                )
            self._reject_closer(tok)
            expr = self.parse_expr()
            return Pair(QUOTE_FORMS[tok.text], Pair(expr, Nil))

        # List or dotted list
        if tok.kind == "lparen":
            return self._parse_list(tok)

        if tok.kind == "rparen":
            raise LiszpSyntaxError(
                f"syntax error at line {tok.line}: unexpected closing bracket '{tok.text}'"
            )

        raise LiszpSyntaxError(f"Unknown token: {tok.kind} {tok.text}")

    def _reject_closer(self, after: Token) -> None:
        nxt = self.peek()
        if nxt is not None and nxt.kind == "rparen":
            raise LiszpSyntaxError(
                f"syntax error at line {nxt.line}: unexpected '{nxt.text}' after {after.text!r}"
            )

    def _parse_list(self, opener: Token) -> SExpression:
        expected = CLOSERS[opener.text]
        items: list[SExpression] = []
        tail: SExpression = Nil
        dotted = False
        while True:
            nxt = self.peek()
            if nxt is None:
                raise LiszpSyntaxError(
                    f"syntax error at line {opener.line}: unmatched '{opener.text}'"
                )
            if nxt.kind == "rparen":
                self.advance()
                if nxt.text != expected:
                    raise LiszpSyntaxError(
                        f"syntax error at line {nxt.line}: expected expr opened with "
                        f"'{opener.text}' to be closed with '{expected}', found '{nxt.text}' instead"
                    )
                return from_iterable(items, tail)
            if dotted:
                raise LiszpSyntaxError(
                    f"syntax error at line {nxt.line}: expected '{expected}' after dotted tail"
                )
            if nxt.kind == "symbol" and nxt.text == DOT.id:
                self.advance()
                if not items:
                    raise LiszpSyntaxError(
                        f"syntax error at line {nxt.line}: '.' must follow at least one element"
                    )
                after = self.peek()
                if after is None or after.kind == "rparen":
                    raise LiszpSyntaxError(
                        f"syntax error at line {nxt.line}: expected an expression after '.'"
                    )
                tail = self.parse_expr()
                dotted = True
                continue
            items.append(self.parse_expr())

    def parse_all(self) -> Iterator[SExpression]:
        while self.peek() is not None:
            yield self.parse_expr()


def read(source: str) -> list[SExpression]:
    """Read every top-level form in `source`."""
    return list(TokenStream(lex(source)).parse_all())
