from __future__ import annotations

"""
A minimal pygls-based Language Server for Liszp.

Features:
- Text synchronization and document store
- Diagnostics: reader errors (unbalanced or mismatched brackets, bad literals)
- Hover: builtin and standard library signatures, locally defined symbols
- Completion: locals, builtins and standard library names
- Signature Help: for known names
- Document Symbols: from indexer

Note: We avoid evaluating the buffer. We build a static index per document.
"""

from typing import Dict, Optional, List
from dataclasses import dataclass

from pygls.server import LanguageServer
from lsprotocol.types import (
    DidOpenTextDocumentParams,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    Diagnostic,
    DiagnosticSeverity,
    Position,
    Range,
    Hover,
    MarkupContent,
    MarkupKind,
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionOptions,
    CompletionParams,
    HoverParams,
    DocumentSymbolParams,
    DocumentSymbol,
    SymbolKind,
    SignatureHelp,
    SignatureHelpOptions,
    SignatureInformation,
    ParameterInformation,
    SignatureHelpParams,
)

from liszp_lsp.indexer import build_index, SIGNATURES, DocumentIndex

DELIMITERS = " \t()[]{}'`,\n\r"

SYMBOL_KINDS = {
    "function": SymbolKind.Function,
    "macro": SymbolKind.Operator,
    "var": SymbolKind.Variable,
}


@dataclass
class DocumentState:
    text: str
    index: DocumentIndex


class LiszpLanguageServer(LanguageServer):
    CMD_NAME = "liszp-ls"
    VERSION = "0.1.0"

    def __init__(self):
        super().__init__(self.CMD_NAME, self.VERSION)
        self.documents: Dict[str, DocumentState] = {}


ls = LiszpLanguageServer()


# --- Text sync ---
@ls.feature("textDocument/didOpen")
def did_open(params: DidOpenTextDocumentParams):
    uri = params.text_document.uri
    text = params.text_document.text or ""
    ls.documents[uri] = DocumentState(text=text, index=build_index(text))
    _publish_diagnostics(uri)


@ls.feature("textDocument/didChange")
def did_change(params: DidChangeTextDocumentParams):
    uri = params.text_document.uri
    if params.content_changes:
        text = params.content_changes[-1].text
    else:
        text = ls.documents.get(uri, DocumentState("", build_index(""))).text
    ls.documents[uri] = DocumentState(text=text, index=build_index(text))
    _publish_diagnostics(uri)


@ls.feature("textDocument/didClose")
def did_close(params: DidCloseTextDocumentParams):
    uri = params.text_document.uri
    ls.documents.pop(uri, None)
    ls.publish_diagnostics(uri, [])


# --- Diagnostics ---
def _line_range(line: int) -> Range:
    return Range(start=Position(line=line, character=0), end=Position(line=line + 1, character=0))


def _publish_diagnostics(uri: str):
    idx = ls.documents[uri].index
    diags: List[Diagnostic] = []
    if idx.syntax_error is not None:
        diags.append(
            Diagnostic(
                range=_line_range(idx.error_line),
                message=idx.syntax_error,
                severity=DiagnosticSeverity.Error,
                source=ls.CMD_NAME,
            )
        )
    ls.publish_diagnostics(uri, diags)


# --- Hover ---
@ls.feature("textDocument/hover")
def on_hover(params: HoverParams) -> Optional[Hover]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None

    word = extract_word_at(state.text, params.position)
    if not word:
        return None

    if word in state.index.symbols:
        sdef = state.index.symbols[word]
        contents = f"{word}: {sdef.kind} (defined at {sdef.line + 1}:{sdef.col + 1})"
    elif word in SIGNATURES:
        contents = SIGNATURES[word]
    else:
        return None
    return Hover(contents=MarkupContent(kind=MarkupKind.PlainText, value=contents))


# --- Completion ---
@ls.feature("textDocument/completion", CompletionOptions(trigger_characters=["("]))
def on_completion(params: CompletionParams) -> CompletionList:
    state = ls.documents.get(params.text_document.uri)
    items: List[CompletionItem] = []
    for name, sig in SIGNATURES.items():
        items.append(CompletionItem(label=name, kind=CompletionItemKind.Function, detail=sig))
    if state:
        for name, sdef in state.index.symbols.items():
            if name not in SIGNATURES:
                items.append(CompletionItem(label=name, kind=CompletionItemKind.Variable, detail=sdef.kind))
    return CompletionList(is_incomplete=False, items=items)


# --- Signature Help ---
@ls.feature("textDocument/signatureHelp", SignatureHelpOptions(trigger_characters=["(", " "]))
def on_signature_help(params: SignatureHelpParams) -> Optional[SignatureHelp]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None

    callee = extract_callee_name(get_line_prefix(state.text, params.position))
    sig = SIGNATURES.get(callee) if callee else None
    if not sig:
        return None

    parameters = [ParameterInformation(label=p) for p in signature_params(sig)]
    return SignatureHelp(
        signatures=[SignatureInformation(label=sig, parameters=parameters)],
        active_signature=0,
        active_parameter=0,
    )


# --- Document Symbols ---
@ls.feature("textDocument/documentSymbol")
def on_document_symbols(params: DocumentSymbolParams) -> Optional[List[DocumentSymbol]]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None
    symbols: List[DocumentSymbol] = []
    for name, sdef in state.index.symbols.items():
        rng = Range(
            start=Position(line=sdef.line, character=sdef.col),
            end=Position(line=sdef.line, character=sdef.col + len(name)),
        )
        symbols.append(
            DocumentSymbol(
                name=name,
                kind=SYMBOL_KINDS.get(sdef.kind, SymbolKind.Function),
                range=rng,
                selection_range=rng,
            )
        )
    return symbols


# --- Helpers ---

def get_line_prefix(text: str, pos: Position) -> str:
    # Return the text from start of line up to pos
    lines = text.splitlines(True)
    if pos.line >= len(lines):
        return ""
    return lines[pos.line][: pos.character]


def extract_word_at(text: str, pos: Position) -> Optional[str]:
    lines = text.splitlines(True)
    if pos.line >= len(lines):
        return None
    line = lines[pos.line]
    start = end = min(pos.character, len(line))
    while start > 0 and line[start - 1] not in DELIMITERS:
        start -= 1
    while end < len(line) and line[end] not in DELIMITERS:
        end += 1
    return line[start:end] or None


def extract_callee_name(prefix: str) -> Optional[str]:
    # first token after the last opening bracket
    lp = max(prefix.rfind(c) for c in "([{")
    if lp == -1:
        return None
    tail = prefix[lp + 1:].split()
    return tail[0] if tail else None


def signature_params(sig: str) -> List[str]:
    """Parameter labels of a signature such as "(foldr f init xs)"."""
    return sig[1:-1].split()[1:]


def main():
    # Run the language server over stdio
    ls.start_io()


if __name__ == "__main__":
    main()
