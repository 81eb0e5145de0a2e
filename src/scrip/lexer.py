"""Scrip lexer — converts source text into a flat token sequence."""

from __future__ import annotations

import re
from dataclasses import dataclass

from scrip.errors import CompileError, LexError
from scrip.tokens import KEYWORDS, NEWLINE_SUPPRESSED_AFTER, Span, Token, TokenKind

# Ordered rule table. At each position the longest match wins; among equally
# long matches the earlier rule wins. The catch-all must stay last.
_RULES: tuple[tuple[TokenKind, re.Pattern[str]], ...] = (
    (TokenKind.WHITESPACE, re.compile(r"[ \t]+")),
    (TokenKind.NEWLINE, re.compile(r"[\n\r]")),
    (TokenKind.IDENT, re.compile(r"[a-zA-Z_][a-zA-Z0-9_]*")),
    (TokenKind.INT_LIT, re.compile(r"[+-]?[0-9]+")),
    (TokenKind.FLOAT_LIT, re.compile(r"[+-]?[0-9]+\.[0-9]+")),
    (TokenKind.STR_LIT, re.compile(r'"[^"]*"')),
    (TokenKind.EQUALS, re.compile(r"=")),
    (TokenKind.ADD_EQUALS, re.compile(r"\+=")),
    (TokenKind.SUB_EQUALS, re.compile(r"-=")),
    (TokenKind.MUL_EQUALS, re.compile(r"\*=")),
    (TokenKind.DIV_EQUALS, re.compile(r"/=")),
    (TokenKind.PLUS, re.compile(r"\+")),
    (TokenKind.MINUS, re.compile(r"-")),
    (TokenKind.STAR, re.compile(r"\*")),
    (TokenKind.SLASH, re.compile(r"/")),
    (TokenKind.DOT, re.compile(r"\.")),
    (TokenKind.COMMA, re.compile(r",")),
    (TokenKind.LPAREN, re.compile(r"\(")),
    (TokenKind.RPAREN, re.compile(r"\)")),
    (TokenKind.LBRACE, re.compile(r"\{")),
    (TokenKind.RBRACE, re.compile(r"\}")),
    (TokenKind.ERROR, re.compile(r".", re.DOTALL)),
)


@dataclass(frozen=True, slots=True)
class LexResult:
    """Outcome of a lexer run: either tokens or lexical errors, never both."""

    tokens: tuple[Token, ...] = ()
    errors: tuple[LexError, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors


class Lexer:
    """Tokenize Scrip source text into a sequence of Token objects.

    A Lexer is single-use: the first call to :meth:`run` scans the whole
    source and later calls return the same cached :class:`LexResult`.
    """

    def __init__(self, source: str) -> None:
        self._source = source
        self._tokens: list[Token] = []
        self._errors: list[LexError] = []
        self._result: LexResult | None = None

    def run(self) -> LexResult:
        """Scan the full source, batching every lexical error."""
        if self._result is not None:
            return self._result

        pos = 0
        while pos < len(self._source):
            kind, text = self._match(pos)
            span = Span(pos, pos + len(text))
            pos = span.hi

            if kind is TokenKind.WHITESPACE:
                continue
            if kind is TokenKind.ERROR:
                self._record_error(LexError(text, span, self._source))
                continue
            if kind is TokenKind.IDENT:
                kind = KEYWORDS.get(text, kind)
            if kind is TokenKind.NEWLINE and self._suppress_newline():
                continue
            self._tokens.append(Token(text, kind, span))

        if self._errors:
            self._result = LexResult(errors=tuple(self._errors))
        else:
            self._result = LexResult(tokens=tuple(self._tokens))
        return self._result

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _match(self, pos: int) -> tuple[TokenKind, str]:
        best_kind = TokenKind.ERROR
        best_text = ""
        for kind, pattern in _RULES:
            m = pattern.match(self._source, pos)
            if m is not None and len(m.group()) > len(best_text):
                best_kind = kind
                best_text = m.group()
        return best_kind, best_text

    def _suppress_newline(self) -> bool:
        if not self._tokens:
            return True
        return self._tokens[-1].kind in NEWLINE_SUPPRESSED_AFTER

    def _record_error(self, error: LexError) -> None:
        if self._errors and self._errors[-1].span.hi == error.span.lo:
            self._errors[-1] = self._errors[-1].merge(error)
        else:
            self._errors.append(error)


def tokenize(source: str, filename: str = "input.scr") -> list[Token]:
    """Convenience function: tokenize source text or raise CompileError."""
    result = Lexer(source).run()
    if not result.ok:
        raise CompileError(result.errors, filename)
    return list(result.tokens)
