"""Lexer for RScript.

The lexer performs a single pass over the source code using a combined
regular expression of named groups. Each match yields a :class:`Token`
together with the :class:`~rscript.span.Span` it was read from.

Tokens cover literals (numbers, strings, booleans), keywords (``let``, ``fn``,
``struct`` …), operators and delimiters. Whitespace and ``//`` line comments
are skipped. String literals are kept verbatim, quotes and escape markers
included; decoding escapes is left to later stages.

Tokenizing is lazy: iterating a :class:`Lexer` produces tokens on demand and
raises :class:`~rscript.exceptions.LexicalError` only once the offending text
is reached. Iterating the same lexer again starts over from the beginning.


File: lexer.py
Version: 0.1.0
License: MIT
"""

import logging
import re
from enum import Enum
from typing import Iterator

from rscript.exceptions import LexicalError
from rscript.span import Span

logger = logging.getLogger(__name__)

I64_MIN = -(2 ** 63)
I64_MAX = 2 ** 63 - 1


class TokenKind(str, Enum):
    """
    Enumeration of token kinds.
    """

    # Keywords
    TRUE = "true"
    FALSE = "false"
    LET = "let"
    MUT = "mut"
    TYPE = "type"
    STRUCT = "struct"
    FN = "fn"
    WHILE = "while"
    LOOP = "loop"
    FOR = "for"
    IF = "if"
    ELSE = "else"
    RETURN = "return"

    # Operators
    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    SLASH = "/"
    ASSIGN = "="
    EQUALS = "=="
    NOT_EQUALS = "!="
    LESS_THAN = "<"
    GREATER_THAN = ">"
    AND = "&&"
    OR = "||"

    # Delimiters
    LPAREN = "("
    RPAREN = ")"
    LBRACE = "{"
    RBRACE = "}"
    LBRACKET = "["
    RBRACKET = "]"
    SEMICOLON = ";"
    COLON = ":"
    COMMA = ","
    PERIOD = "."
    RIGHT_ARROW = "->"

    # Value-carrying
    IDENTIFIER = "identifier"
    INTEGER = "integer literal"
    FLOAT = "float literal"
    STRING = "string literal"

    def describe(self) -> str:
        """
        Return the kind as it should read in an error message.
        """
        if self in VALUE_KINDS:
            return self.value
        return f"`{self.value}`"

    def __str__(self) -> str:
        return self.value


VALUE_KINDS = frozenset({
    TokenKind.IDENTIFIER,
    TokenKind.INTEGER,
    TokenKind.FLOAT,
    TokenKind.STRING,
})

KEYWORDS = (
    TokenKind.TRUE,
    TokenKind.FALSE,
    TokenKind.LET,
    TokenKind.MUT,
    TokenKind.TYPE,
    TokenKind.STRUCT,
    TokenKind.FN,
    TokenKind.WHILE,
    TokenKind.LOOP,
    TokenKind.FOR,
    TokenKind.IF,
    TokenKind.ELSE,
    TokenKind.RETURN,
)


class Token:
    """
    Represents a lexical token with a kind and, for literals and
    identifiers, a value.
    """
    def __init__(self, kind, value=None):
        """
        Initialize a new token.

        Parameters:
            kind (TokenKind): The token kind.
            value (Any): The token value, ``None`` for fixed tokens.
        """
        self.kind = kind
        self.value = value

    def __eq__(self, other) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return self.kind == other.kind and self.value == other.value

    def __hash__(self) -> int:
        return hash((self.kind, self.value))

    def __repr__(self) -> str:
        """
        Return a string representation of the token.
        """
        if self.value is None:
            return f"Token({self.kind.name})"
        return f"Token({self.kind.name}, {self.value!r})"

    def __str__(self) -> str:
        if self.kind == TokenKind.STRING:
            return f"string {self.value}"
        if self.kind in VALUE_KINDS:
            return f"{self.kind.value} `{self.value}`"
        return f"`{self.kind.value}`"


token_specification: list[tuple[str, str]] = [
    # Skipped
    ('SKIP',          r'[ \t\n\f\r]+'),
    ('COMMENT',       r'//[^\n]*'),

    # Literals
    ('FLOAT',         r'[0-9]+\.[0-9]+'),
    ('INTEGER',       r'[0-9]+'),
    ('STRING',        r'"(?:[^"\\]|\\.)*"'),

    # Keywords
    *[(kw.name, rf'{kw.value}(?![A-Za-z0-9_])') for kw in KEYWORDS],

    # Identifiers
    ('IDENTIFIER',    r'[A-Za-z_][A-Za-z0-9_]*'),

    # Two-character operators
    ('EQUALS',        r'=='),
    ('NOT_EQUALS',    r'!='),
    ('AND',           r'&&'),
    ('OR',            r'\|\|'),
    ('RIGHT_ARROW',   r'->'),

    # Operators
    ('PLUS',          r'\+'),
    ('MINUS',         r'-'),
    ('STAR',          r'\*'),
    ('SLASH',         r'/'),
    ('ASSIGN',        r'='),
    ('LESS_THAN',     r'<'),
    ('GREATER_THAN',  r'>'),

    # Delimiters
    ('LPAREN',        r'\('),
    ('RPAREN',        r'\)'),
    ('LBRACE',        r'\{'),
    ('RBRACE',        r'\}'),
    ('LBRACKET',      r'\['),
    ('RBRACKET',      r'\]'),
    ('SEMICOLON',     r';'),
    ('COLON',         r':'),
    ('COMMA',         r','),
    ('PERIOD',        r'\.'),

    ('MISMATCH',      r'.'),
]

tok_regex = re.compile(
    '|'.join(f'(?P<{name}>{pattern})' for name, pattern in token_specification),
    re.DOTALL,
)


class Lexer:
    """
    Lazy, restartable token stream over a piece of source text.
    """

    def __init__(self, source: str):
        self.source = source

    def __iter__(self) -> Iterator[tuple[Token, Span]]:
        for match_obj in tok_regex.finditer(self.source):
            kind = match_obj.lastgroup
            value = match_obj.group()
            span = Span(match_obj.start(), match_obj.end())

            if kind in ('SKIP', 'COMMENT'):
                continue
            if kind == 'MISMATCH':
                raise LexicalError(f"unrecognized character {value!r}", span)

            if kind == 'INTEGER':
                number = int(value)
                if not I64_MIN <= number <= I64_MAX:
                    raise LexicalError("number too large to fit in target type", span)
                token = Token(TokenKind.INTEGER, number)
            elif kind == 'FLOAT':
                token = Token(TokenKind.FLOAT, float(value))
            elif kind == 'STRING':
                token = Token(TokenKind.STRING, value)
            elif kind == 'IDENTIFIER':
                token = Token(TokenKind.IDENTIFIER, value)
            else:
                token = Token(TokenKind[kind])

            logger.debug("Token %r at %s", token, span)
            yield token, span


def tokenize(source: str) -> list[tuple[Token, Span]]:
    """
    Convert a string of source code into a list of ``(token, span)`` pairs.

    Parameters:
        source (str): The source code to tokenize.

    Returns:
        list[tuple[Token, Span]]: Every token in the source, in order.

    Raises:
        LexicalError: If a number is out of range or a character is unexpected.
    """
    return list(Lexer(source))
