"""Minimal LSP server for Scrip — diagnostics only."""

from __future__ import annotations

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer
from pygls.workspace import TextDocument

from scrip import __version__
from scrip.errors import LexError, ParseError
from scrip.lexer import Lexer
from scrip.parser import Parser

server = LanguageServer("scrip-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full)


def _to_diagnostic(error: LexError | ParseError, doc: TextDocument) -> Diagnostic:
    start = error.start
    end = error.end
    # Columns are code points; the client counts in its negotiated encoding
    rng = doc.position_codec.range_to_client_units(
        doc.lines,
        Range(
            start=Position(line=start.line - 1, character=start.column - 1),
            end=Position(line=end.line - 1, character=end.column - 1),
        ),
    )
    return Diagnostic(
        range=rng,
        message=error.message,
        severity=DiagnosticSeverity.Error,
        source="scrip",
    )


def _validate(ls: LanguageServer, uri: str) -> None:
    """Run the Scrip front end and publish every collected diagnostic."""
    doc = ls.workspace.get_text_document(uri)
    source = doc.source

    lexed = Lexer(source).run()
    if lexed.ok:
        errors: tuple[LexError, ...] | tuple[ParseError, ...] = (
            Parser(lexed.tokens, source).run().errors
        )
    else:
        errors = lexed.errors

    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=[_to_diagnostic(e, doc) for e in errors])
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


def main() -> None:
    server.start_io()
