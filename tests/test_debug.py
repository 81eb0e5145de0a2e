"""Tests for the token and AST dumps."""

from __future__ import annotations

import io

from scrip.ast import Call, Name, Program, StrLit
from scrip.debug import dump_ast, dump_tokens
from scrip.tokens import Span


class TestDumpTokens:
    def test_one_line_per_token(self, lex):
        out = io.StringIO()
        dump_tokens(lex("Int x = 1\n"), file=out)
        lines = out.getvalue().splitlines()
        assert len(lines) == 5
        assert lines[0].split() == ["IDENT", "0..3", "'Int'"]
        assert lines[-1].split()[0] == "NEWLINE"


class TestDumpAst:
    def test_declarations(self, parse_source):
        source = 'global String s = "x"\nfunc Main(a, b) {\n    Int n = 2\n}\n'
        out = io.StringIO()
        dump_ast(parse_source(source), file=out)
        assert out.getvalue() == (
            "Program\n"
            "  Global\n"
            "    VarDef String s\n"
            "      StrLit('x')\n"
            "  FuncDef Main(Name(a), Name(b))\n"
            "    Block\n"
            "      VarDef Int n\n"
            "        IntLit(2)\n"
        )

    def test_call_node(self):
        span = Span(0, 0)
        call = Call(Name("print", span), (StrLit("hi", span),), span)
        out = io.StringIO()
        dump_ast(Program((call,), span), file=out)
        assert "Call Name(print)(StrLit('hi'))" in out.getvalue()
