"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from scrip.ast import Program
from scrip.lexer import Lexer, LexResult, tokenize
from scrip.parser import Parser, ParseResult, parse
from scrip.tokens import Token, TokenKind


@pytest.fixture
def lex():
    """Return a helper that tokenizes source and returns the token list."""

    def _lex(source: str) -> list[Token]:
        return tokenize(source)

    return _lex


@pytest.fixture
def lex_result():
    """Return a helper that runs a Lexer and returns its LexResult."""

    def _lex(source: str) -> LexResult:
        return Lexer(source).run()

    return _lex


@pytest.fixture
def parse_source():
    """Return a helper that parses source and returns a Program."""

    def _parse(source: str) -> Program:
        return parse(source)

    return _parse


@pytest.fixture
def parse_result():
    """Return a helper that parses clean-lexing source and returns the ParseResult."""

    def _parse(source: str) -> ParseResult:
        return Parser(tokenize(source), source).run()

    return _parse


def assert_kinds(tokens: list[Token], expected: list[TokenKind]) -> None:
    """Assert that the token kinds match the expected list."""
    actual = [t.kind for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_texts(tokens: list[Token], expected: list[str]) -> None:
    """Assert that the token texts match the expected list."""
    actual = [t.text for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def span_text(source: str, node) -> str:
    """Return the source text covered by a node's or token's span."""
    return source[node.span.lo : node.span.hi]
