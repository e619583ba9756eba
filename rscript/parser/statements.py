"""Statement parsing utilities for RScript.

These functions operate on a `rscript.parser.parser.Parser` instance and
handle the statement forms in the language: variable, function and struct
declarations, returns, expression statements and braced blocks.


File: statements.py
Version: 0.1.0
License: MIT
"""

import logging
from typing import TYPE_CHECKING

from rscript import ast
from rscript.exceptions import UnexpectedTokenError
from rscript.lexer import TokenKind

if TYPE_CHECKING:
    from rscript.parser import Parser

logger = logging.getLogger(__name__)

# Expressions that may stand as a statement without a trailing ';'.
BLOCK_LIKE = (ast.BlockExpression, ast.IfExpression)


def parse_statement(parser: 'Parser') -> ast.Statement:
    """
    Parse a single statement.

    Syntax:
        <statement>

    Args:
        parser: The parser instance.

    Returns:
        Statement: the syntax tree node.
    """
    kind = parser.peek()
    if kind == TokenKind.LET:
        return parser.parse_variable_declaration()
    elif kind == TokenKind.FN:
        return parser.parse_function_declaration()
    elif kind == TokenKind.STRUCT:
        return parser.parse_struct_declaration()
    elif kind == TokenKind.RETURN:
        return parser.parse_return()
    else:
        return parse_expression_statement(parser)


def parse_expression_statement(parser: 'Parser') -> ast.ExpressionStatement:
    """
    Parse an expression used as a statement.

    Syntax:
        <expression>;
        <if expression> | <block>
    """
    expression = parser.expr()
    if isinstance(expression, BLOCK_LIKE) and not parser.at(TokenKind.SEMICOLON):
        return ast.ExpressionStatement(expression, expression.span)
    end = parser.eat(TokenKind.SEMICOLON)
    return ast.ExpressionStatement(expression, expression.span.combine(end))


def parse_block(parser: 'Parser') -> ast.BlockExpression:
    """
    Parse a block of statements enclosed in braces.

    Syntax:
        { <statement>* [<expression>] }

    A trailing expression that is not followed by ``;`` becomes the
    block's final expression and therefore its value.

    Args:
        parser: The parser instance.

    Returns:
        BlockExpression: the block node.
    """
    start = parser.eat(TokenKind.LBRACE)
    statements = []
    final_expression = None
    while not parser.at(TokenKind.RBRACE):
        parser.require("`}`")
        if parser.peek() in (TokenKind.LET, TokenKind.FN, TokenKind.STRUCT, TokenKind.RETURN):
            statements.append(parser.statement())
            continue

        expression = parser.expr()
        if parser.at(TokenKind.SEMICOLON):
            end = parser.eat(TokenKind.SEMICOLON)
            statements.append(ast.ExpressionStatement(expression, expression.span.combine(end)))
        elif parser.at(TokenKind.RBRACE):
            final_expression = expression
        elif isinstance(expression, BLOCK_LIKE):
            statements.append(ast.ExpressionStatement(expression, expression.span))
        else:
            parser.eat(TokenKind.SEMICOLON)
    end = parser.eat(TokenKind.RBRACE)
    return ast.BlockExpression(statements, final_expression, start.combine(end))


def parse_variable_declaration(parser: 'Parser') -> ast.VariableDeclaration:
    """
    Parse a `let` variable declaration.

    Syntax:
        let <identifier> = <expression>;

    Args:
        parser: The parser instance.

    Returns:
        VariableDeclaration: the declaration node.
    """
    start = parser.eat(TokenKind.LET)
    identifier = parser.eat_identifier()
    parser.eat(TokenKind.ASSIGN)
    initializer = parser.expr()
    end = parser.eat(TokenKind.SEMICOLON)
    return ast.VariableDeclaration(identifier, initializer, start.combine(end))


def parse_parameters(parser: 'Parser') -> list[ast.Parameter]:
    """
    Parse function parameters up to, not including, the closing ')'.

    Syntax:
        <identifier>: <type> [,] <identifier>: <type> ...

    Parsing stops at the first token that is not an identifier. Commas
    between parameters are optional.
    """
    parameters = []
    while parser.at(TokenKind.IDENTIFIER):
        identifier = parser.eat_identifier()
        parser.eat(TokenKind.COLON)
        declared_type = parser.eat_identifier()
        parameters.append(
            ast.Parameter(identifier, declared_type, identifier.span.combine(declared_type.span))
        )
        if parser.at(TokenKind.COMMA):
            parser.advance()
    return parameters


def parse_function_declaration(parser: 'Parser') -> ast.FunctionDeclaration:
    """
    Parse a function definition.

    Syntax:
        fn <name>(<params>) -> <type> { <statements> }

    Args:
        parser: The parser instance.

    Returns:
        FunctionDeclaration: the declaration node.
    """
    start = parser.eat(TokenKind.FN)
    identifier = parser.eat_identifier()
    logger.debug("Parsing function declaration %s", identifier.name)
    parser.eat(TokenKind.LPAREN)
    parameters = parse_parameters(parser)
    parser.eat(TokenKind.RPAREN)
    parser.eat(TokenKind.RIGHT_ARROW)
    return_type = parser.eat_identifier()
    parser.eat(TokenKind.LBRACE)
    body = []
    while not parser.at(TokenKind.RBRACE):
        parser.require("`}`")
        body.append(parser.statement())
    end = parser.eat(TokenKind.RBRACE)
    return ast.FunctionDeclaration(identifier, parameters, return_type, body, start.combine(end))


def _parse_tuple_fields(parser: 'Parser') -> list[ast.TupleFieldDeclaration]:
    """
    Parse ``(<type>, <type> ...)``; commas are optional.
    """
    parser.eat(TokenKind.LPAREN)
    fields = []
    while True:
        token, span = parser.require("`)` or identifier")
        if token.kind == TokenKind.RPAREN:
            break
        if token.kind == TokenKind.COMMA:
            parser.advance()
            continue
        if token.kind != TokenKind.IDENTIFIER:
            raise UnexpectedTokenError("`)` or identifier", token, span)
        declared_type = parser.eat_identifier()
        fields.append(ast.TupleFieldDeclaration(declared_type, declared_type.span))
    parser.eat(TokenKind.RPAREN)
    return fields


def _parse_named_fields(parser: 'Parser') -> list[ast.NamedFieldDeclaration]:
    """
    Parse ``{<name>: <type>, ...}`` up to, not including, the closing '}'.
    """
    parser.eat(TokenKind.LBRACE)
    fields = []
    while True:
        token, span = parser.require("`}` or identifier")
        if token.kind == TokenKind.RBRACE:
            break
        if token.kind == TokenKind.COMMA:
            parser.advance()
            continue
        if token.kind != TokenKind.IDENTIFIER:
            raise UnexpectedTokenError("`}` or identifier", token, span)
        identifier = parser.eat_identifier()
        parser.eat(TokenKind.COLON)
        declared_type = parser.eat_identifier()
        fields.append(
            ast.NamedFieldDeclaration(
                identifier, declared_type, identifier.span.combine(declared_type.span)
            )
        )
    return fields


def parse_struct_declaration(parser: 'Parser') -> ast.StructDeclaration:
    """
    Parse a struct declaration.

    Syntax:
        struct <name>(<type>, ...);
        struct <name> { <field>: <type>, ... }
        struct <name>;

    Args:
        parser: The parser instance.

    Returns:
        StructDeclaration: a tuple, named or unit struct node.
    """
    start = parser.eat(TokenKind.STRUCT)
    identifier = parser.eat_identifier()
    token, span = parser.require("`(` or `{` or `;`")

    if token.kind == TokenKind.LPAREN:
        fields = _parse_tuple_fields(parser)
        end = parser.eat(TokenKind.SEMICOLON)
        return ast.TupleStruct(identifier, fields, start.combine(end))

    if token.kind == TokenKind.LBRACE:
        fields = _parse_named_fields(parser)
        end = parser.eat(TokenKind.RBRACE)
        return ast.NamedStruct(identifier, fields, start.combine(end))

    if token.kind == TokenKind.SEMICOLON:
        end = parser.eat(TokenKind.SEMICOLON)
        return ast.UnitStruct(identifier, start.combine(end))

    raise UnexpectedTokenError("`(` or `{` or `;`", token, span)


def parse_return(parser: 'Parser') -> ast.ReturnStatement:
    """
    Parse a 'return' statement.

    Syntax:
        return [<expression>];

    Args:
        parser: The parser instance.

    Returns:
        ReturnStatement: the return node.
    """
    start = parser.eat(TokenKind.RETURN)
    value = None
    if not parser.at(TokenKind.SEMICOLON):
        value = parser.expr()
    end = parser.eat(TokenKind.SEMICOLON)
    return ast.ReturnStatement(value, start.combine(end))
