"""
Tests for the RScript lexer.
"""
import pytest

from rscript.exceptions import LexicalError
from rscript.lexer import Lexer, Token, TokenKind, tokenize
from rscript.span import Span

from utils import kinds


def test_keywords_operators_and_delimiters():
    """
    Test that every fixed token is recognized by its exact text.
    """
    source = (
        "true false let mut type struct fn while loop for if else return "
        "+ - * / = == != < > && || ( ) { } [ ] ; : , . ->"
    )
    assert kinds(source) == [
        TokenKind.TRUE, TokenKind.FALSE, TokenKind.LET, TokenKind.MUT,
        TokenKind.TYPE, TokenKind.STRUCT, TokenKind.FN, TokenKind.WHILE,
        TokenKind.LOOP, TokenKind.FOR, TokenKind.IF, TokenKind.ELSE,
        TokenKind.RETURN,
        TokenKind.PLUS, TokenKind.MINUS, TokenKind.STAR, TokenKind.SLASH,
        TokenKind.ASSIGN, TokenKind.EQUALS, TokenKind.NOT_EQUALS,
        TokenKind.LESS_THAN, TokenKind.GREATER_THAN, TokenKind.AND, TokenKind.OR,
        TokenKind.LPAREN, TokenKind.RPAREN, TokenKind.LBRACE, TokenKind.RBRACE,
        TokenKind.LBRACKET, TokenKind.RBRACKET, TokenKind.SEMICOLON,
        TokenKind.COLON, TokenKind.COMMA, TokenKind.PERIOD, TokenKind.RIGHT_ARROW,
    ]


def test_let_statement_tokens_and_spans():
    """
    Test tokens and spans of a simple declaration.
    """
    assert tokenize("let x = 42;") == [
        (Token(TokenKind.LET), Span(0, 3)),
        (Token(TokenKind.IDENTIFIER, "x"), Span(4, 5)),
        (Token(TokenKind.ASSIGN), Span(6, 7)),
        (Token(TokenKind.INTEGER, 42), Span(8, 10)),
        (Token(TokenKind.SEMICOLON), Span(10, 11)),
    ]


def test_keyword_prefix_is_an_identifier():
    """
    Test that identifiers starting with a keyword are not split.
    """
    assert tokenize("letter iffy fn_name _x1") == [
        (Token(TokenKind.IDENTIFIER, "letter"), Span(0, 6)),
        (Token(TokenKind.IDENTIFIER, "iffy"), Span(7, 11)),
        (Token(TokenKind.IDENTIFIER, "fn_name"), Span(12, 19)),
        (Token(TokenKind.IDENTIFIER, "_x1"), Span(20, 23)),
    ]


def test_keyword_directly_after_number():
    """
    Test that a keyword glued to a number is still a keyword.
    """
    assert tokenize("3let") == [
        (Token(TokenKind.INTEGER, 3), Span(0, 1)),
        (Token(TokenKind.LET, None), Span(1, 4)),
    ]
    assert kinds("1.5true x2fn") == [TokenKind.FLOAT, TokenKind.TRUE, TokenKind.IDENTIFIER]


def test_numbers():
    """
    Test integer and float literals.
    """
    tokens = tokenize("7 3.25 9223372036854775807")
    assert tokens[0] == (Token(TokenKind.INTEGER, 7), Span(0, 1))
    assert tokens[1] == (Token(TokenKind.FLOAT, 3.25), Span(2, 6))
    assert tokens[2][0] == Token(TokenKind.INTEGER, 2 ** 63 - 1)


def test_integer_out_of_range_is_a_lexical_error():
    """
    Test that integers beyond the 64-bit range are rejected with their span.
    """
    with pytest.raises(LexicalError) as excinfo:
        tokenize("let big = 9223372036854775808;")
    assert excinfo.value.span == Span(10, 29)
    assert "too large" in excinfo.value.reason


def test_strings_are_kept_verbatim():
    """
    Test that strings keep their quotes and escape markers.
    """
    source = r'"hello \"world\"\n"'
    assert tokenize(source) == [(Token(TokenKind.STRING, source), Span(0, len(source)))]


def test_whitespace_and_comments_are_skipped():
    """
    Test that whitespace and line comments produce no tokens.
    """
    source = "\tlet\n\f// note\n  x"
    assert tokenize(source) == [
        (Token(TokenKind.LET), Span(1, 4)),
        (Token(TokenKind.IDENTIFIER, "x"), Span(16, 17)),
    ]


def test_unrecognized_character():
    """
    Test that characters matching no rule raise a lexical error.
    """
    with pytest.raises(LexicalError) as excinfo:
        tokenize("let a = 1 @ 2;")
    assert excinfo.value.span == Span(10, 11)


def test_lexer_is_lazy_and_restartable():
    """
    Test that errors surface only when reached and iteration restarts.
    """
    lexer = Lexer("a b $")
    stream = iter(lexer)
    assert next(stream) == (Token(TokenKind.IDENTIFIER, "a"), Span(0, 1))
    assert next(stream) == (Token(TokenKind.IDENTIFIER, "b"), Span(2, 3))
    with pytest.raises(LexicalError):
        next(stream)
    assert next(iter(lexer)) == (Token(TokenKind.IDENTIFIER, "a"), Span(0, 1))


def test_empty_source():
    """
    Test that empty and blank sources yield no tokens.
    """
    assert tokenize("") == []
    assert tokenize(" \n\t ") == []
