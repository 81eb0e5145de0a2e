"""Token kinds, spans, and source position helpers."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum


class TokenKind(Enum):
    """Closed set of token kinds. The value is the display name used in diagnostics."""

    # Structural
    NEWLINE = "Newline"

    # Keywords
    GLOBAL = "global"
    FUNC = "func"
    WHILE = "while"
    IF = "if"
    RETURN = "return"

    IDENT = "Identifier"

    # Literals
    INT_LIT = "Integer"
    FLOAT_LIT = "Float"
    BOOL_LIT = "Boolean"
    STR_LIT = "String"

    # Assignment operators
    EQUALS = "="
    ADD_EQUALS = "+="
    SUB_EQUALS = "-="
    MUL_EQUALS = "*="
    DIV_EQUALS = "/="

    # Arithmetic operators
    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    SLASH = "/"

    # Punctuation
    DOT = "."
    COMMA = ","

    # Brackets
    LPAREN = "("
    RPAREN = ")"
    LBRACE = "{"
    RBRACE = "}"

    # Internal only, never present in a successful token sequence
    WHITESPACE = "Whitespace"
    ERROR = "Error"


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open offset range ``[lo, hi)`` into the source text."""

    lo: int
    hi: int

    def __or__(self, other: Span) -> Span:
        return Span(self.lo, other.hi)


@dataclass(frozen=True, slots=True)
class Position:
    """Resolved source position, 1-based line and column."""

    line: int
    column: int


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexer token with its source text."""

    text: str
    kind: TokenKind
    span: Span


# Identifier text promoted to another kind after matching
KEYWORDS: dict[str, TokenKind] = {
    "global": TokenKind.GLOBAL,
    "func": TokenKind.FUNC,
    "while": TokenKind.WHILE,
    "if": TokenKind.IF,
    "return": TokenKind.RETURN,
    "True": TokenKind.BOOL_LIT,
    "False": TokenKind.BOOL_LIT,
}

ASSIGN_OPS: frozenset[TokenKind] = frozenset(
    {
        TokenKind.EQUALS,
        TokenKind.ADD_EQUALS,
        TokenKind.SUB_EQUALS,
        TokenKind.MUL_EQUALS,
        TokenKind.DIV_EQUALS,
    }
)

# A line break right after one of these does not terminate a statement
NEWLINE_SUPPRESSED_AFTER: frozenset[TokenKind] = ASSIGN_OPS | {
    TokenKind.NEWLINE,
    TokenKind.LPAREN,
    TokenKind.RPAREN,
    TokenKind.LBRACE,
    TokenKind.RBRACE,
}


# \r\n, a lone \r and \n each end one line
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def position_at(source: str, offset: int) -> Position:
    """Resolve an offset in *source* to a 1-based line and column."""
    offset = max(0, min(offset, len(source)))
    line = 1
    line_start = 0
    for m in _LINE_BREAK.finditer(source):
        if m.end() > offset:
            break
        line += 1
        line_start = m.end()
    return Position(line, offset - line_start + 1)


def line_text(source: str, line: int) -> str:
    """Return the 1-based *line* of *source* without its line terminator."""
    lines = _LINE_BREAK.split(source)
    if 0 < line <= len(lines):
        return lines[line - 1]
    return ""


_KIND_ORDER = {kind: i for i, kind in enumerate(TokenKind)}


def describe_kinds(kinds: tuple[TokenKind, ...] | frozenset[TokenKind]) -> str:
    """Render a set of kinds as ``a`, `b`` for use inside backquotes."""
    ordered = sorted(kinds, key=_KIND_ORDER.__getitem__)
    return "`, `".join(k.value for k in ordered)
