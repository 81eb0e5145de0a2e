"""Test token kinds, literals, operators and offsets."""

import pytest

from scrip.tokens import Span, TokenKind

from tests.conftest import assert_kinds, assert_texts


class TestIdentifiers:
    def test_simple(self, lex):
        tokens = lex("hello")
        assert_kinds(tokens, [TokenKind.IDENT])
        assert tokens[0].text == "hello"

    def test_underscore_and_digits(self, lex):
        tokens = lex("_tmp2 x_1")
        assert_kinds(tokens, [TokenKind.IDENT, TokenKind.IDENT])
        assert_texts(tokens, ["_tmp2", "x_1"])

    def test_dotted_path_is_split(self, lex):
        tokens = lex("a.b.c")
        assert_kinds(
            tokens,
            [TokenKind.IDENT, TokenKind.DOT, TokenKind.IDENT, TokenKind.DOT, TokenKind.IDENT],
        )


class TestKeywords:
    @pytest.mark.parametrize(
        ("word", "kind"),
        [
            ("global", TokenKind.GLOBAL),
            ("func", TokenKind.FUNC),
            ("while", TokenKind.WHILE),
            ("if", TokenKind.IF),
            ("return", TokenKind.RETURN),
        ],
    )
    def test_keyword_kind(self, lex, word, kind):
        tokens = lex(word)
        assert_kinds(tokens, [kind])
        assert tokens[0].text == word

    def test_keyword_prefix_stays_identifier(self, lex):
        tokens = lex("globalize")
        assert_kinds(tokens, [TokenKind.IDENT])
        assert tokens[0].text == "globalize"

    def test_keyword_suffix_stays_identifier(self, lex):
        assert_kinds(lex("iffy returned funcs"), [TokenKind.IDENT] * 3)

    def test_keywords_are_case_sensitive(self, lex):
        assert_kinds(lex("Global FUNC"), [TokenKind.IDENT, TokenKind.IDENT])


class TestLiterals:
    def test_integer(self, lex):
        tokens = lex("42")
        assert_kinds(tokens, [TokenKind.INT_LIT])
        assert tokens[0].text == "42"

    def test_signed_integer(self, lex):
        assert_kinds(lex("-7 +3"), [TokenKind.INT_LIT, TokenKind.INT_LIT])

    def test_float(self, lex):
        tokens = lex("3.14")
        assert_kinds(tokens, [TokenKind.FLOAT_LIT])
        assert tokens[0].text == "3.14"

    def test_float_needs_fraction_digits(self, lex):
        assert_kinds(lex("3."), [TokenKind.INT_LIT, TokenKind.DOT])

    def test_booleans(self, lex):
        tokens = lex("True False")
        assert_kinds(tokens, [TokenKind.BOOL_LIT, TokenKind.BOOL_LIT])

    def test_boolean_prefix_is_identifier(self, lex):
        assert_kinds(lex("Truest"), [TokenKind.IDENT])

    def test_string(self, lex):
        tokens = lex('"Hello, World!"')
        assert_kinds(tokens, [TokenKind.STR_LIT])
        assert tokens[0].text == '"Hello, World!"'

    def test_empty_string(self, lex):
        assert_kinds(lex('""'), [TokenKind.STR_LIT])

    def test_string_keeps_inner_whitespace(self, lex):
        tokens = lex('"a  b\tc"')
        assert tokens[0].text == '"a  b\tc"'


class TestOperators:
    def test_assignment_family(self, lex):
        tokens = lex("= += -= *= /=")
        assert_kinds(
            tokens,
            [
                TokenKind.EQUALS,
                TokenKind.ADD_EQUALS,
                TokenKind.SUB_EQUALS,
                TokenKind.MUL_EQUALS,
                TokenKind.DIV_EQUALS,
            ],
        )

    def test_arithmetic(self, lex):
        tokens = lex("a + b * c / d - e")
        kinds = [t.kind for t in tokens]
        assert kinds[1::2] == [TokenKind.PLUS, TokenKind.STAR, TokenKind.SLASH, TokenKind.MINUS]

    def test_punctuation_and_brackets(self, lex):
        tokens = lex("f(a, b) {}")
        assert_kinds(
            tokens,
            [
                TokenKind.IDENT,
                TokenKind.LPAREN,
                TokenKind.IDENT,
                TokenKind.COMMA,
                TokenKind.IDENT,
                TokenKind.RPAREN,
                TokenKind.LBRACE,
                TokenKind.RBRACE,
            ],
        )


class TestSpans:
    def test_offsets(self, lex):
        tokens = lex("Int x = 5")
        assert [t.span for t in tokens] == [Span(0, 3), Span(4, 5), Span(6, 7), Span(8, 9)]

    def test_span_matches_text(self, lex):
        source = 'String s = "hi"\nFloat f = 1.5\n'
        for tok in lex(source):
            assert source[tok.span.lo : tok.span.hi] == tok.text

    def test_union(self):
        assert Span(2, 4) | Span(7, 9) == Span(2, 9)


class TestVarDeclTokens:
    def test_hello_world_line(self, lex):
        tokens = lex('String hello = "Hello, World!"\n')
        assert_kinds(
            tokens,
            [
                TokenKind.IDENT,
                TokenKind.IDENT,
                TokenKind.EQUALS,
                TokenKind.STR_LIT,
                TokenKind.NEWLINE,
            ],
        )
        assert_texts(tokens[:2], ["String", "hello"])
