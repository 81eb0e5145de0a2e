"""Scrip parser — converts a token sequence into a sequence of declarations."""

from __future__ import annotations

from dataclasses import dataclass

from scrip.ast import (
    Atom,
    Block,
    BoolLit,
    Expr,
    FloatLit,
    FuncDef,
    Global,
    IntLit,
    Name,
    Program,
    StrLit,
    VarDef,
)
from scrip.errors import CompileError, ParseError
from scrip.lexer import tokenize
from scrip.tokens import Span, Token, TokenKind, describe_kinds


class _Abandon(Exception):
    """Unwinds the current declaration after its error has been recorded."""


@dataclass(frozen=True, slots=True)
class ParseResult:
    """Outcome of a parser run.

    ``declarations`` holds everything that parsed cleanly, including the
    declarations recovered after an error; it is positional metadata for
    tooling. Only an error-free result yields a :class:`Program`.
    """

    declarations: tuple[Expr, ...]
    errors: tuple[ParseError, ...]
    span: Span
    filename: str = "input.scr"

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def program(self) -> Program:
        if self.errors:
            raise CompileError(self.errors, self.filename)
        return Program(self.declarations, self.span)


class Parser:
    """Recursive descent parser for Scrip token sequences.

    Source ranges are computed with an explicit span stack: ``_begin``
    pushes the current token's span, every consumed token widens the top
    entry, and ``_end`` pops the production's span and widens the enclosing
    entry to cover it.
    """

    def __init__(
        self,
        tokens: list[Token] | tuple[Token, ...],
        source: str,
        filename: str = "input.scr",
    ) -> None:
        self._tokens = tuple(tokens)
        self._source = source
        self._filename = filename
        self._pos = 0
        self._spans: list[Span] = []
        self._errors: list[ParseError] = []
        self._result: ParseResult | None = None

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def _peek(self) -> Token | None:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    def _at(self, *kinds: TokenKind) -> bool:
        tok = self._peek()
        return tok is not None and tok.kind in kinds

    def _at_eof(self) -> bool:
        return self._pos >= len(self._tokens)

    def _current_span(self) -> Span:
        tok = self._peek()
        if tok is None:
            return Span(len(self._source), len(self._source))
        return tok.span

    def _advance(self) -> Token:
        tok = self._tokens[self._pos]
        self._pos += 1
        if self._spans:
            top = self._spans[-1]
            self._spans[-1] = Span(top.lo, max(top.hi, tok.span.hi))
        return tok

    def _require(self, *kinds: TokenKind) -> bool:
        """Check the current token without consuming; record an error on mismatch."""
        if self._at(*kinds):
            return True
        tok = self._peek()
        if tok is None:
            found = "EOF"
        elif tok.kind is TokenKind.NEWLINE:
            found = TokenKind.NEWLINE.value
        else:
            found = tok.text
        self._error(f"Expected `{describe_kinds(kinds)}`, found `{found}`", self._current_span())
        return False

    def _expect(self, *kinds: TokenKind) -> Token:
        if not self._require(*kinds):
            raise _Abandon
        return self._advance()

    # ------------------------------------------------------------------
    # Span stack
    # ------------------------------------------------------------------

    def _begin(self) -> None:
        self._spans.append(self._current_span())

    def _end(self) -> Span:
        span = self._spans.pop()
        if self._spans:
            top = self._spans[-1]
            self._spans[-1] = Span(top.lo, max(top.hi, span.hi))
        return span

    # ------------------------------------------------------------------
    # Program level
    # ------------------------------------------------------------------

    def run(self) -> ParseResult:
        """Parse every declaration, batching all syntax errors.

        A Parser is single-use: later calls return the cached result.
        """
        if self._result is not None:
            return self._result

        declarations: list[Expr] = []
        while not self._at_eof():
            if self._at(TokenKind.NEWLINE):
                self._advance()
                continue
            decl = self._parse_declaration(_TOP_LEVEL_STARTS, in_block=False)
            if decl is not None:
                declarations.append(decl)

        self._result = ParseResult(
            tuple(declarations),
            tuple(self._errors),
            Span(0, len(self._source)),
            self._filename,
        )
        return self._result

    def _parse_declaration(self, starts: frozenset[TokenKind], *, in_block: bool) -> Expr | None:
        """Parse one declaration, or record an error and resynchronize."""
        tok = self._peek()
        if tok is None or tok.kind not in starts:
            self._unexpected(starts, in_block=in_block)
            return None

        stack_depth = len(self._spans)
        try:
            if tok.kind is TokenKind.FUNC:
                return self._parse_func_decl()
            if tok.kind is TokenKind.GLOBAL:
                decl: Expr = self._parse_global()
            else:
                decl = self._parse_var_decl()
            self._advance()  # terminating NEWLINE
        except _Abandon:
            del self._spans[stack_depth:]
            self._synchronize(in_block=in_block)
            return None
        return decl

    def _unexpected(self, starts: frozenset[TokenKind], *, in_block: bool) -> None:
        """Panic mode: report the unexpected run of tokens, then resynchronize.

        Inside a block, braces are counted so a nested ``{ ... }`` group is
        skipped whole and only the block's own ``}`` ends recovery.
        """
        self._begin()
        depth = 0
        while True:
            tok = self._advance()
            if in_block:
                depth += _BRACE_NESTING.get(tok.kind, 0)
                if depth == 0 and tok.kind is TokenKind.RBRACE:
                    break
            if self._at_eof() or self._at(TokenKind.IDENT, TokenKind.NEWLINE):
                break
            if in_block and depth == 0 and self._at(TokenKind.RBRACE):
                break
        span = self._end()
        found = self._source[span.lo : span.hi]
        self._error(f"Expected `{describe_kinds(starts)}`, found `{found}`", span)
        # A closed group ends the statement; the lexer dropped the line break after `}`
        if in_block and depth == 0 and tok.kind is TokenKind.RBRACE:
            return
        self._synchronize(in_block=in_block, depth=depth)

    def _synchronize(self, *, in_block: bool, depth: int = 0) -> None:
        """Skip to just past the next NEWLINE (or up to a closing brace in a block)."""
        while not self._at_eof():
            if depth == 0 and self._at(TokenKind.NEWLINE):
                self._advance()
                return
            if in_block and depth == 0 and self._at(TokenKind.RBRACE):
                return
            tok = self._advance()
            if in_block:
                depth += _BRACE_NESTING.get(tok.kind, 0)
                if depth == 0 and tok.kind is TokenKind.RBRACE:
                    return

    # ------------------------------------------------------------------
    # Declarations
    # ------------------------------------------------------------------

    def _parse_global(self) -> Global:
        self._begin()
        self._advance()  # consume GLOBAL
        decl = self._parse_var_decl()
        return Global(decl, self._end())

    def _parse_var_decl(self) -> VarDef:
        self._begin()
        type_name = self._parse_type()
        name = self._parse_name()
        self._expect(TokenKind.EQUALS)
        value = self._parse_atom()
        # The NEWLINE terminates the declaration but is not part of its span
        if not self._require(TokenKind.NEWLINE):
            raise _Abandon
        return VarDef(name, type_name, value, self._end())

    def _parse_func_decl(self) -> FuncDef:
        self._begin()
        self._advance()  # consume FUNC
        name = self._parse_name()
        self._expect(TokenKind.LPAREN)

        params: list[Expr] = []
        if self._at(TokenKind.IDENT):
            params.append(self._parse_name())
            while self._at(TokenKind.COMMA):
                self._advance()
                params.append(self._parse_name())

        self._expect(TokenKind.RPAREN)
        body = self._parse_block()
        return FuncDef(name, tuple(params), body, self._end())

    def _parse_block(self) -> Block:
        self._begin()
        self._expect(TokenKind.LBRACE)

        body: list[Expr] = []
        while not self._at_eof() and not self._at(TokenKind.RBRACE):
            if self._at(TokenKind.NEWLINE):
                self._advance()
                continue
            item = self._parse_declaration(_BLOCK_STARTS, in_block=True)
            if item is not None:
                body.append(item)

        self._expect(TokenKind.RBRACE)
        return Block(tuple(body), self._end())

    # ------------------------------------------------------------------
    # Names and atoms
    # ------------------------------------------------------------------

    def _parse_type(self) -> Name:
        self._begin()
        tok = self._expect(TokenKind.IDENT)
        return Name(tok.text, self._end())

    def _parse_name(self) -> Name:
        self._begin()
        parts = [self._expect(TokenKind.IDENT).text]
        while self._at(TokenKind.DOT):
            self._advance()
            parts.append(self._expect(TokenKind.IDENT).text)
        return Name(".".join(parts), self._end())

    def _parse_atom(self) -> Atom:
        tok = self._expect(*_ATOM_KINDS)

        if tok.kind is TokenKind.STR_LIT:
            return StrLit(tok.text[1:-1], tok.span)

        if tok.kind is TokenKind.BOOL_LIT:
            assert tok.text in _BOOL_VALUES, f"unexpected boolean literal {tok.text!r}"
            return BoolLit(_BOOL_VALUES[tok.text], tok.span)

        try:
            if tok.kind is TokenKind.INT_LIT:
                return IntLit(int(tok.text), tok.span)
            return FloatLit(float(tok.text), tok.span)
        except ValueError:
            self._error("invalid numeric literal", tok.span)
            raise _Abandon from None

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _error(self, message: str, span: Span) -> None:
        self._errors.append(ParseError(message, span, self._source))


# Module-level constants
_TOP_LEVEL_STARTS: frozenset[TokenKind] = frozenset(
    {TokenKind.IDENT, TokenKind.GLOBAL, TokenKind.FUNC}
)
_BLOCK_STARTS: frozenset[TokenKind] = frozenset({TokenKind.IDENT, TokenKind.GLOBAL})
_BRACE_NESTING: dict[TokenKind, int] = {TokenKind.LBRACE: 1, TokenKind.RBRACE: -1}
_ATOM_KINDS: tuple[TokenKind, ...] = (
    TokenKind.INT_LIT,
    TokenKind.FLOAT_LIT,
    TokenKind.BOOL_LIT,
    TokenKind.STR_LIT,
)
_BOOL_VALUES: dict[str, bool] = {"True": True, "False": False}


def parse(source: str, filename: str = "input.scr") -> Program:
    """Convenience function: lex and parse source text into a Program.

    Raises CompileError carrying every diagnostic of the first failing stage.
    """
    tokens = tokenize(source, filename)
    return Parser(tokens, source, filename).run().program
