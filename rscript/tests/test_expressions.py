"""
Tests for expression parsing in RScript: literals, operators and precedence,
calls, blocks and if expressions.
"""
import pytest

from rscript import ast
from rscript.exceptions import ParseError, UnexpectedEofError, UnexpectedTokenError
from rscript.operations import BinaryOperator
from rscript.parser import parse_expression
from rscript.span import Span


def ident(name, start):
    return ast.Identifier(name, Span(start, start + len(name)))


@pytest.mark.parametrize("text", ["0", "7", "65535", "9223372036854775807"])
def test_integer_literal(text):
    """
    Test that an integer literal keeps its value and exact span.
    """
    assert parse_expression(text) == ast.IntegerLiteral(int(text), Span(0, len(text)))


def test_other_literals():
    """
    Test float, string and boolean literals.
    """
    assert parse_expression("2.5") == ast.FloatLiteral(2.5, Span(0, 3))
    assert parse_expression('"hi"') == ast.StringLiteral('"hi"', Span(0, 4))
    assert parse_expression("true") == ast.BooleanLiteral(True, Span(0, 4))
    assert parse_expression("false") == ast.BooleanLiteral(False, Span(0, 5))


def test_addition_of_identifiers():
    """
    Test that `a + b` spans from the start of `a` to the end of `b`.
    """
    node = parse_expression("a + b")
    assert node == ast.BinaryOp(BinaryOperator.ADD, ident("a", 0), ident("b", 4), Span(0, 5))
    assert node.span.start == node.left.span.start
    assert node.span.end == node.right.span.end
    assert node.inferred_type is None


def test_multiplication_binds_tighter_than_addition():
    """
    Test precedence in both operand orders.
    """
    node = parse_expression("a + b * c")
    assert node.operator == BinaryOperator.ADD
    assert node.right == ast.BinaryOp(
        BinaryOperator.MULTIPLY, ident("b", 4), ident("c", 8), Span(4, 9)
    )

    node = parse_expression("a * b + c")
    assert node.operator == BinaryOperator.ADD
    assert node.left == ast.BinaryOp(
        BinaryOperator.MULTIPLY, ident("a", 0), ident("b", 4), Span(0, 5)
    )
    assert node.right == ident("c", 8)
    assert node.span == Span(0, 9)


def test_operators_are_left_associative():
    """
    Test that chains of one precedence level group to the left.
    """
    node = parse_expression("a - b - c")
    assert node.operator == BinaryOperator.SUBTRACT
    assert node.right == ident("c", 8)
    assert node.left.operator == BinaryOperator.SUBTRACT
    assert node.left.span == Span(0, 5)


def test_full_precedence_ladder():
    """
    Test the relative precedence of every operator family.
    """
    node = parse_expression("a || b && c == d < e + f / g")
    assert node.operator == BinaryOperator.OR
    node = node.right
    assert node.operator == BinaryOperator.AND
    node = node.right
    assert node.operator == BinaryOperator.EQUALS
    node = node.right
    assert node.operator == BinaryOperator.LESS_THAN
    node = node.right
    assert node.operator == BinaryOperator.ADD
    assert node.right.operator == BinaryOperator.DIVIDE


def test_not_equals_and_greater_than():
    """
    Test the remaining comparison operators.
    """
    node = parse_expression("x != y > z")
    assert node.operator == BinaryOperator.NOT_EQUALS
    assert node.right.operator == BinaryOperator.GREATER_THAN


def test_parentheses_override_precedence():
    """
    Test grouping, including the parentheses in the span.
    """
    node = parse_expression("(a + b) * c")
    assert node.operator == BinaryOperator.MULTIPLY
    assert node.left.operator == BinaryOperator.ADD
    assert node.left.span == Span(0, 7)
    assert node.span == Span(0, 11)


def test_function_call():
    """
    Test calls with zero, one and several arguments.
    """
    assert parse_expression("f()") == ast.FunctionCall(ident("f", 0), [], Span(0, 3))
    call = parse_expression("add(1, x, 2 * 3,)")
    assert call.function_name == ident("add", 0)
    assert len(call.arguments) == 3
    assert call.arguments[1] == ident("x", 7)
    assert call.arguments[2].operator == BinaryOperator.MULTIPLY
    assert call.span == Span(0, 17)


def test_block_with_final_expression():
    """
    Test that a trailing expression without `;` is the block's value.
    """
    block = parse_expression("{ let a = 1; a + 1 }")
    assert isinstance(block, ast.BlockExpression)
    assert isinstance(block.statements[0], ast.VariableDeclaration)
    assert block.final_expression.operator == BinaryOperator.ADD
    assert block.span == Span(0, 20)


def test_block_without_final_expression():
    """
    Test that a block ending in `;` has no final expression.
    """
    block = parse_expression("{ f(); }")
    assert block.final_expression is None
    assert isinstance(block.statements[0], ast.ExpressionStatement)


def test_if_else_expression():
    """
    Test condition, branches and span of an if expression.
    """
    source = "if a < b { a } else { b }"
    node = parse_expression(source)
    assert isinstance(node, ast.IfExpression)
    assert node.condition.operator == BinaryOperator.LESS_THAN
    assert node.then_branch.final_expression == ident("a", 11)
    assert node.else_branch.final_expression == ident("b", 22)
    assert node.span == Span(0, len(source))


def test_if_without_else():
    """
    Test that the else branch is optional.
    """
    node = parse_expression("if ok { 1 }")
    assert node.else_branch is None
    assert node.span == Span(0, 11)


def test_else_if_chain():
    """
    Test that `else if` nests an if expression in the else block.
    """
    node = parse_expression("if a { 1 } else if b { 2 } else { 3 }")
    nested = node.else_branch.final_expression
    assert isinstance(nested, ast.IfExpression)
    assert nested.condition == ident("b", 19)
    assert nested.else_branch.final_expression.value == 3
    assert node.else_branch.span == nested.span


def test_nested_blocks_as_statements():
    """
    Test that block-like expressions inside a block need no `;`.
    """
    block = parse_expression("{ if a { 1 } else { 2 } { 3 } 4 }")
    assert len(block.statements) == 2
    assert block.final_expression.value == 4


def test_missing_operand_is_unexpected_eof():
    """
    Test that an operator at end of input reports EOF.
    """
    with pytest.raises(UnexpectedEofError):
        parse_expression("a +")


def test_unclosed_block_is_unexpected_eof():
    """
    Test that a block cut short reports EOF.
    """
    with pytest.raises(UnexpectedEofError):
        parse_expression("{ let a = 1;")


def test_trailing_tokens_are_rejected():
    """
    Test that a single expression must consume all input.
    """
    with pytest.raises(UnexpectedTokenError) as excinfo:
        parse_expression("1 2")
    assert excinfo.value.expected == "end of input"
    assert excinfo.value.span == Span(2, 3)


def test_missing_separator_in_block():
    """
    Test that expressions inside a block must be separated by `;`.
    """
    with pytest.raises(UnexpectedTokenError):
        parse_expression("{ 1 2 }")


def test_deeply_nested_expression():
    """
    Test that a runaway nesting depth is reported as a parse error.
    """
    with pytest.raises(ParseError):
        parse_expression("{" * 5000 + "1" + "}" * 5000)
