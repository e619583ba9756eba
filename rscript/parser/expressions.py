"""
Expression parsing utilities for RScript.

These functions operate on a `rscript.parser.parser.Parser` instance and
implement the recursive descent logic for expressions. Binary operators are
parsed by precedence climbing over
:data:`~rscript.operations.PRECEDENCE_LEVELS`; every level is
left-associative, so ``a - b - c`` groups as ``(a - b) - c`` and
``a * b + c`` as ``(a * b) + c``.
"""

from typing import TYPE_CHECKING

from rscript import ast
from rscript.exceptions import UnexpectedTokenError
from rscript.lexer import TokenKind
from rscript.operations import PRECEDENCE_LEVELS

if TYPE_CHECKING:
    from rscript.parser import Parser


# ---- Highest precedence ----

def parse_primary(parser: 'Parser') -> ast.Expression:
    """Parse a literal, identifier, call, parenthesized group, block or if."""
    token, span = parser.require("expression")
    kind = token.kind

    if kind == TokenKind.INTEGER:
        parser.advance()
        return ast.IntegerLiteral(token.value, span)

    if kind == TokenKind.FLOAT:
        parser.advance()
        return ast.FloatLiteral(token.value, span)

    if kind == TokenKind.STRING:
        parser.advance()
        return ast.StringLiteral(token.value, span)

    if kind in (TokenKind.TRUE, TokenKind.FALSE):
        parser.advance()
        return ast.BooleanLiteral(kind == TokenKind.TRUE, span)

    if kind == TokenKind.IDENTIFIER:
        identifier = parser.eat_identifier()
        if parser.at(TokenKind.LPAREN):
            return parse_call(parser, identifier)
        return identifier

    if kind == TokenKind.LPAREN:
        parser.eat(TokenKind.LPAREN)
        node = parser.expr()
        end = parser.eat(TokenKind.RPAREN)
        node.span = span.combine(end)
        return node

    if kind == TokenKind.LBRACE:
        return parser.block()

    if kind == TokenKind.IF:
        return parser.parse_if()

    raise UnexpectedTokenError("expression", token, span)


def parse_call(parser: 'Parser', function_name: ast.Identifier) -> ast.FunctionCall:
    """
    Parse the argument list of a call whose name was already consumed.

    Syntax:
        <identifier>(<expression>, ...)
    """
    parser.eat(TokenKind.LPAREN)
    arguments = []
    if not parser.at(TokenKind.RPAREN):
        arguments.append(parser.expr())
        while parser.at(TokenKind.COMMA):
            parser.advance()
            if parser.at(TokenKind.RPAREN):
                break
            arguments.append(parser.expr())
    end = parser.eat(TokenKind.RPAREN)
    return ast.FunctionCall(function_name, arguments, function_name.span.combine(end))


def parse_if(parser: 'Parser') -> ast.IfExpression:
    """
    Parse a conditional expression.

    Syntax:
        if <condition> { <block> }
        if <condition> { <block> } else { <block> }
        if <condition> { <block> } else if ...

    An ``else if`` chain is stored as an else block whose final expression
    is the nested if.
    """
    start = parser.eat(TokenKind.IF)
    condition = parser.expr()
    then_branch = parser.block()
    else_branch = None
    if parser.at(TokenKind.ELSE):
        parser.advance()
        if parser.at(TokenKind.IF):
            nested = parser.parse_if()
            else_branch = ast.BlockExpression([], nested, nested.span)
        else:
            else_branch = parser.block()
    last = else_branch if else_branch is not None else then_branch
    return ast.IfExpression(condition, then_branch, else_branch, start.combine(last.span))


def parse_binary(parser: 'Parser', level: int = 0) -> ast.Expression:
    """Parse the binary operators of one precedence level and tighter."""
    if level == len(PRECEDENCE_LEVELS):
        return parser.primary()

    operators = PRECEDENCE_LEVELS[level]
    result = parse_binary(parser, level + 1)
    while parser.binary_operator() in operators:
        operator = parser.binary_operator()
        parser.advance()
        right = parse_binary(parser, level + 1)
        result = ast.BinaryOp(operator, result, right, result.span.combine(right.span))
    return result


# ---- Entry point ----

def parse_expression(parser: 'Parser') -> ast.Expression:
    """Parse an expression starting from the lowest-precedence operator."""
    return parse_binary(parser)
