"""Shared definitions for binary operators.

This module centralizes the operator vocabulary used by the parser,
interpreter and formatter. Keeping the token mapping and the precedence
table in one place prevents the components from drifting apart when new
operators are added.
"""

from enum import Enum

from rscript.lexer import TokenKind


class BinaryOperator(str, Enum):
    """
    Enumeration of supported binary operators.
    """

    # Arithmetic
    ADD = "Add"
    SUBTRACT = "Subtract"
    MULTIPLY = "Multiply"
    DIVIDE = "Divide"

    # Comparison
    EQUALS = "Equals"
    NOT_EQUALS = "NotEquals"
    LESS_THAN = "LessThan"
    GREATER_THAN = "GreaterThan"

    # Boolean
    AND = "And"
    OR = "Or"

    @property
    def symbol(self) -> str:
        """
        Return the source spelling of the operator.
        """
        return OPERATOR_TOKENS_REVERSED[self].value

    def __str__(self) -> str:  # pragma: no cover - trivial
        """
        Return the underlying string value for nicer debug output.
        """
        return self.value


OPERATOR_TOKENS: dict[TokenKind, BinaryOperator] = {
    TokenKind.PLUS: BinaryOperator.ADD,
    TokenKind.MINUS: BinaryOperator.SUBTRACT,
    TokenKind.STAR: BinaryOperator.MULTIPLY,
    TokenKind.SLASH: BinaryOperator.DIVIDE,
    TokenKind.EQUALS: BinaryOperator.EQUALS,
    TokenKind.NOT_EQUALS: BinaryOperator.NOT_EQUALS,
    TokenKind.LESS_THAN: BinaryOperator.LESS_THAN,
    TokenKind.GREATER_THAN: BinaryOperator.GREATER_THAN,
    TokenKind.AND: BinaryOperator.AND,
    TokenKind.OR: BinaryOperator.OR,
}

OPERATOR_TOKENS_REVERSED = {op: kind for kind, op in OPERATOR_TOKENS.items()}

# Lowest binds loosest. Every level is left-associative.
PRECEDENCE_LEVELS: tuple[tuple[BinaryOperator, ...], ...] = (
    (BinaryOperator.OR,),
    (BinaryOperator.AND,),
    (BinaryOperator.EQUALS, BinaryOperator.NOT_EQUALS),
    (BinaryOperator.LESS_THAN, BinaryOperator.GREATER_THAN),
    (BinaryOperator.ADD, BinaryOperator.SUBTRACT),
    (BinaryOperator.MULTIPLY, BinaryOperator.DIVIDE),
)


__all__ = ["BinaryOperator", "OPERATOR_TOKENS", "PRECEDENCE_LEVELS"]
