"""Syntax tree for RScript.

Every node is a dataclass carrying the :class:`~rscript.span.Span` of the
text it was parsed from. Composite nodes own their children outright; the
tree never shares or back-references nodes.

Expression nodes also carry an ``inferred_type`` slot. It is ``None`` after
parsing and is reserved for a type checking pass.

``Expression``, ``Statement`` and ``StructDeclaration`` are unions of the
concrete node classes; the interpreter and formatter dispatch over them with
``match`` statements.


File: ast.py
Version: 0.1.0
License: MIT
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

from rscript.operations import BinaryOperator
from rscript.span import Span


# ---- Expressions ----

@dataclass
class Identifier:
    name: str
    span: Span
    inferred_type: Optional[Identifier] = None


@dataclass
class IntegerLiteral:
    value: int
    span: Span
    inferred_type: Optional[Identifier] = None


@dataclass
class FloatLiteral:
    value: float
    span: Span
    inferred_type: Optional[Identifier] = None


@dataclass
class StringLiteral:
    """String literal, kept exactly as written (quotes included)."""

    value: str
    span: Span
    inferred_type: Optional[Identifier] = None


@dataclass
class BooleanLiteral:
    value: bool
    span: Span
    inferred_type: Optional[Identifier] = None


@dataclass
class BinaryOp:
    operator: BinaryOperator
    left: Expression
    right: Expression
    span: Span
    inferred_type: Optional[Identifier] = None


@dataclass
class FunctionCall:
    function_name: Identifier
    arguments: list[Expression]
    span: Span
    inferred_type: Optional[Identifier] = None


@dataclass
class BlockExpression:
    """
    ``{ statements... [final_expression] }``.

    The block evaluates to its final expression, or to unit when there is
    none.
    """

    statements: list[Statement]
    final_expression: Optional[Expression]
    span: Span
    inferred_type: Optional[Identifier] = None


@dataclass
class IfExpression:
    """
    ``if condition { ... } [else { ... }]``.

    Both branches are expected to agree on a type once type checking exists.
    """

    condition: Expression
    then_branch: BlockExpression
    else_branch: Optional[BlockExpression]
    span: Span
    inferred_type: Optional[Identifier] = None


Expression = Union[
    BinaryOp,
    FunctionCall,
    BlockExpression,
    IfExpression,
    Identifier,
    IntegerLiteral,
    FloatLiteral,
    StringLiteral,
    BooleanLiteral,
]


# ---- Statements ----

@dataclass
class VariableDeclaration:
    identifier: Identifier
    initializer: Expression
    span: Span


@dataclass
class Parameter:
    identifier: Identifier
    declared_type: Identifier
    span: Span


@dataclass
class FunctionDeclaration:
    identifier: Identifier
    parameters: list[Parameter]
    return_type: Identifier
    body: list[Statement]
    span: Span


@dataclass
class NamedFieldDeclaration:
    identifier: Identifier
    declared_type: Identifier
    span: Span


@dataclass
class TupleFieldDeclaration:
    declared_type: Identifier
    span: Span


@dataclass
class NamedStruct:
    identifier: Identifier
    fields: list[NamedFieldDeclaration]
    span: Span


@dataclass
class TupleStruct:
    identifier: Identifier
    fields: list[TupleFieldDeclaration]
    span: Span


@dataclass
class UnitStruct:
    identifier: Identifier
    span: Span


StructDeclaration = Union[NamedStruct, TupleStruct, UnitStruct]


@dataclass
class ExpressionStatement:
    expression: Expression
    span: Span


@dataclass
class ReturnStatement:
    value: Optional[Expression]
    span: Span


@dataclass
class BreakStatement:
    value: Optional[Expression]
    span: Span


Statement = Union[
    VariableDeclaration,
    FunctionDeclaration,
    NamedStruct,
    TupleStruct,
    UnitStruct,
    ExpressionStatement,
    ReturnStatement,
    BreakStatement,
]


@dataclass
class Program:
    statements: list[Statement] = field(default_factory=list)
    span: Span = field(default_factory=lambda: Span(0, 0))

