"""
Main parser entry point for RScript.

This module defines the `Parser` class, which coordinates the recursive
descent parsing process. The actual parsing routines are split across
`rscript.parser.expressions` and `rscript.parser.statements`.

The parser pulls tokens from a :class:`~rscript.lexer.Lexer` one at a time and
keeps exactly one token of lookahead in ``current``. Lexical errors therefore
surface at the point the parser reaches them.


File: parser.py
Version: 0.1.0
License: MIT
"""

import logging
from typing import Iterator, Optional

from rscript import ast
from rscript.exceptions import ParseError, UnexpectedEofError, UnexpectedTokenError
from rscript.lexer import Lexer, Token, TokenKind
from rscript.operations import OPERATOR_TOKENS, BinaryOperator
from rscript.span import Span

from . import expressions as _expr
from . import statements as _stmt

logger = logging.getLogger(__name__)


class Parser:
    """RScript parser."""

    def __init__(self, source: str, file: str = "<input>"):
        """
        Initialize the parser over a piece of source text.

        Parameters:
            source (str): The source code to parse.
            file (str): The name of the script, used in log messages.
        """
        self.source = source
        self.source_file = file
        self.current: Optional[tuple[Token, Span]] = None
        self._tokens: Iterator[tuple[Token, Span]] = iter(Lexer(source))
        self._started = False
        self._last_span = Span(0, 0)

    def advance(self) -> None:
        """
        Pull the next token from the lexer into ``current``.

        Raises:
            LexicalError: If the lexer cannot produce the next token.
        """
        if self.current is not None:
            self._last_span = self.current[1]
        self.current = next(self._tokens, None)

    def peek(self) -> Optional[TokenKind]:
        """
        Return the kind of the current token, or ``None`` at end of input.
        """
        return self.current[0].kind if self.current is not None else None

    def at(self, kind: TokenKind) -> bool:
        """
        Return ``True`` if the current token is of the given kind.
        """
        return self.peek() == kind

    def eof_span(self) -> Span:
        """
        Return the empty span at the end of the source.
        """
        end = len(self.source)
        return Span(end, end)

    def require(self, expected: str) -> tuple[Token, Span]:
        """
        Return the current token, failing if the input is exhausted.

        Raises:
            UnexpectedEofError: If there is no current token.
        """
        if self.current is None:
            raise UnexpectedEofError(expected, self.eof_span())
        return self.current

    def eat(self, kind: TokenKind) -> Span:
        """
        Consume the current token if it matches the expected kind.

        Parameters:
            kind (TokenKind): The expected token kind.

        Returns:
            Span: The span of the consumed token.

        Raises:
            UnexpectedTokenError: If the token does not match the expected kind.
            UnexpectedEofError: If the input ends before the expected token.
        """
        token, span = self.require(kind.describe())
        if token.kind != kind:
            raise UnexpectedTokenError(kind.describe(), token, span)
        self.advance()
        return span

    def eat_identifier(self) -> ast.Identifier:
        """
        Consume an identifier token and return it as a syntax tree node.
        """
        token, span = self.require("identifier")
        if token.kind != TokenKind.IDENTIFIER:
            raise UnexpectedTokenError("identifier", token, span)
        self.advance()
        return ast.Identifier(token.value, span)

    def binary_operator(self) -> Optional[BinaryOperator]:
        """
        Return the binary operator the current token spells, if any.
        """
        return OPERATOR_TOKENS.get(self.peek())


    # Expression wrappers
    def primary(self) -> ast.Expression:
        """
        Parse a literal, identifier, call, parenthesized group, block or if.
        """
        return _expr.parse_primary(self)

    def expr(self) -> ast.Expression:
        """
        Parse a full expression, binary operators included.
        """
        return _expr.parse_expression(self)

    def parse_if(self) -> ast.IfExpression:
        """
        Parse an 'if' expression with an optional else branch.
        """
        return _expr.parse_if(self)


    # Statement wrappers
    def block(self) -> ast.BlockExpression:
        """
        Parse a block expression enclosed in braces.
        """
        return _stmt.parse_block(self)

    def statement(self) -> ast.Statement:
        """
        Parse a single statement.
        """
        return _stmt.parse_statement(self)

    def parse_variable_declaration(self) -> ast.VariableDeclaration:
        """
        Parse a 'let' variable declaration.
        """
        return _stmt.parse_variable_declaration(self)

    def parse_function_declaration(self) -> ast.FunctionDeclaration:
        """
        Parse a function declaration.
        """
        return _stmt.parse_function_declaration(self)

    def parse_struct_declaration(self) -> ast.StructDeclaration:
        """
        Parse a named, tuple or unit struct declaration.
        """
        return _stmt.parse_struct_declaration(self)

    def parse_return(self) -> ast.ReturnStatement:
        """
        Parse a 'return' statement from within a function.
        """
        return _stmt.parse_return(self)


    def _start(self) -> None:
        if not self._started:
            self._started = True
            self.advance()

    def _nesting_error(self) -> ParseError:
        span = self.current[1] if self.current is not None else self.eof_span()
        return ParseError("Nesting too deep to parse", span)

    def parse(self) -> ast.Program:
        """
        Parse the full input into a :class:`~rscript.ast.Program`.

        Raises:
            ParseError: If the input is malformed or nested too deeply.
        """
        logger.debug("Parsing %s", self.source_file)
        self._start()
        statements = []
        start_span = self.current[1] if self.current is not None else Span(0, 0)
        try:
            while self.current is not None:
                statements.append(self.statement())
        except RecursionError:
            raise self._nesting_error() from None
        span = start_span.combine(self._last_span) if statements else Span(0, 0)
        logger.debug("Parsed %d top-level statements from %s", len(statements), self.source_file)
        return ast.Program(statements, span)

    def parse_expression(self) -> ast.Expression:
        """
        Parse the full input as a single expression.

        Raises:
            UnexpectedTokenError: If anything follows the expression.
            ParseError: If the expression is nested too deeply.
        """
        self._start()
        try:
            expression = self.expr()
        except RecursionError:
            raise self._nesting_error() from None
        if self.current is not None:
            token, span = self.current
            raise UnexpectedTokenError("end of input", token, span)
        return expression


def parse(source: str, file: str = "<input>") -> ast.Program:
    """
    Parse source code and return the program.
    """
    return Parser(source, file).parse()


def parse_expression(source: str) -> ast.Expression:
    """
    Parse source code that holds exactly one expression.
    """
    return Parser(source).parse_expression()
