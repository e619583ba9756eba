"""
RScript Language Server entry point.

This server provides basic language features for RScript source files using
`pygls`. It reuses the RScript parser to build a symbol index of top-level
declarations supporting definition lookup, hover information and document
symbols, and it reports lexical and parse errors as diagnostics. Ranges come
straight from node spans.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from lsprotocol.types import (
    TEXT_DOCUMENT_DEFINITION,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DOCUMENT_SYMBOL,
    TEXT_DOCUMENT_HOVER,
    DefinitionParams,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    DocumentSymbol,
    DocumentSymbolParams,
    Hover,
    HoverParams,
    Location,
    MarkupContent,
    MarkupKind,
    Position,
    Range,
    SymbolKind,
)
from pygls.server import LanguageServer

from rscript import ast
from rscript.exceptions import ScriptError
from rscript.parser import parse
from rscript.span import Span

logger = logging.getLogger(__name__)


@dataclass
class RScriptSymbol:
    """Represents a top-level symbol in an RScript file."""

    name: str
    kind: SymbolKind
    uri: str
    range: Range
    selection_range: Range
    detail: str


def offset_to_position(text: str, offset: int) -> Position:
    """Convert a source offset into a zero-based line/character position."""
    offset = max(0, min(offset, len(text)))
    line = text.count("\n", 0, offset)
    line_start = text.rfind("\n", 0, offset) + 1
    return Position(line=line, character=offset - line_start)


def span_to_range(text: str, span: Span) -> Range:
    """Convert a span into an LSP range over ``text``."""
    return Range(start=offset_to_position(text, span.start), end=offset_to_position(text, span.end))


def _describe(statement) -> Optional[tuple[str, SymbolKind, str]]:
    """Return ``(name, kind, detail)`` for a declaration worth indexing."""
    match statement:
        case ast.FunctionDeclaration(identifier=identifier, parameters=parameters, return_type=return_type):
            params = ", ".join(f"{p.identifier.name}: {p.declared_type.name}" for p in parameters)
            return identifier.name, SymbolKind.Function, f"fn {identifier.name}({params}) -> {return_type.name}"
        case ast.NamedStruct(identifier=identifier, fields=fields):
            body = ", ".join(f"{f.identifier.name}: {f.declared_type.name}" for f in fields)
            return identifier.name, SymbolKind.Struct, f"struct {identifier.name} {{ {body} }}"
        case ast.TupleStruct(identifier=identifier, fields=fields):
            body = ", ".join(f.declared_type.name for f in fields)
            return identifier.name, SymbolKind.Struct, f"struct {identifier.name}({body});"
        case ast.UnitStruct(identifier=identifier):
            return identifier.name, SymbolKind.Struct, f"struct {identifier.name};"
        case ast.VariableDeclaration(identifier=identifier):
            return identifier.name, SymbolKind.Variable, f"let {identifier.name}"
    return None


def collect_symbols(uri: str, text: str) -> List[RScriptSymbol]:
    """Parse ``text`` and extract its top-level symbols.

    Raises:
        ScriptError: If the text does not tokenize or parse.
    """
    program = parse(text, uri)
    symbols: List[RScriptSymbol] = []
    for statement in program.statements:
        described = _describe(statement)
        if described is None:
            continue
        name, kind, detail = described
        symbols.append(
            RScriptSymbol(
                name=name,
                kind=kind,
                uri=uri,
                range=span_to_range(text, statement.span),
                selection_range=span_to_range(text, statement.identifier.span),
                detail=detail,
            )
        )
    return symbols


def error_diagnostic(text: str, error: ScriptError) -> Diagnostic:
    """Turn a lexical or parse error into a diagnostic."""
    span = error.span if error.span is not None else Span(len(text), len(text))
    return Diagnostic(
        range=span_to_range(text, span),
        message=str(error),
        severity=DiagnosticSeverity.Error,
        source="rscript",
    )


class RScriptLanguageServer(LanguageServer):
    """Language server for RScript source files."""

    def __init__(self) -> None:
        super().__init__("rscript-ls", "v0.1")
        self.symbols_by_uri: Dict[str, List[RScriptSymbol]] = {}
        self.global_symbols: Dict[str, List[RScriptSymbol]] = {}
        self.indexed_workspace = False

    def _index_workspace(self) -> None:
        """Parse all `.rscript` files under the current workspace."""
        root = self.workspace.root_path
        if not root:
            self.indexed_workspace = True
            return
        for path in Path(root).rglob("*.rscript"):
            uri = path.as_uri()
            if uri in self.symbols_by_uri:
                continue
            try:
                text = path.read_text(encoding="utf-8")
            except OSError as e:
                logger.warning("Failed to read %s: %s", path, e)
                continue
            self.update_index(uri, text)
        self.indexed_workspace = True

    def update_index(self, uri: str, text: str) -> List[Diagnostic]:
        """Parse ``text`` and update the symbol index for ``uri``.

        A document that fails to parse keeps its previous symbols.

        Returns:
            list[Diagnostic]: The diagnostics for the document.
        """
        try:
            symbols = collect_symbols(uri, text)
        except ScriptError as e:
            return [error_diagnostic(text, e)]
        self.symbols_by_uri[uri] = symbols
        self._rebuild_global_index()
        return []

    def _rebuild_global_index(self) -> None:
        self.global_symbols.clear()
        for syms in self.symbols_by_uri.values():
            for sym in syms:
                self.global_symbols.setdefault(sym.name, []).append(sym)

    def lookup(self, word: str) -> Optional[RScriptSymbol]:
        """Return the first indexed symbol called ``word``."""
        if not word:
            return None
        if not self.indexed_workspace:
            self._index_workspace()
        matches = self.global_symbols.get(word)
        return matches[0] if matches else None


lang_server = RScriptLanguageServer()


def _refresh(ls: RScriptLanguageServer, uri: str, text: str) -> None:
    ls.publish_diagnostics(uri, ls.update_index(uri, text))


@lang_server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: RScriptLanguageServer, params: DidOpenTextDocumentParams) -> None:
    """Index a document when it is opened."""
    _refresh(ls, params.text_document.uri, params.text_document.text)


@lang_server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: RScriptLanguageServer, params: DidChangeTextDocumentParams) -> None:
    """Re-index a document when it changes."""
    doc = ls.workspace.get_text_document(params.text_document.uri)
    _refresh(ls, doc.uri, doc.source)


@lang_server.feature(TEXT_DOCUMENT_DEFINITION)
def definition(ls: RScriptLanguageServer, params: DefinitionParams):
    """Return the definition location for the symbol under the cursor."""
    doc = ls.workspace.get_text_document(params.text_document.uri)
    sym = ls.lookup(doc.word_at_position(params.position))
    if sym is None:
        return None
    return Location(uri=sym.uri, range=sym.selection_range)


@lang_server.feature(TEXT_DOCUMENT_HOVER)
def hover(ls: RScriptLanguageServer, params: HoverParams) -> Optional[Hover]:
    """Return hover information for the symbol under the cursor."""
    doc = ls.workspace.get_text_document(params.text_document.uri)
    sym = ls.lookup(doc.word_at_position(params.position))
    if sym is None:
        return None
    contents = MarkupContent(kind=MarkupKind.PlainText, value=sym.detail)
    return Hover(contents=contents)


@lang_server.feature(TEXT_DOCUMENT_DOCUMENT_SYMBOL)
def document_symbols(ls: RScriptLanguageServer, params: DocumentSymbolParams):
    """Return top-level symbols for the given document."""
    symbols = ls.symbols_by_uri.get(params.text_document.uri, [])
    return [
        DocumentSymbol(
            name=sym.name,
            kind=sym.kind,
            range=sym.range,
            selection_range=sym.selection_range,
            detail=sym.detail,
        )
        for sym in symbols
    ]


def main() -> None:
    """Start the language server."""
    lang_server.start_io()


if __name__ == "__main__":
    main()
