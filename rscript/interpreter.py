"""Interpreter.

This is a tree-walk interpreter for evaluating the syntax tree produced by the
parser. It supports variable, function and struct declarations, function
calls, blocks, conditionals and binary operations.

1. Execution Model
The interpreter evaluates a :class:`~rscript.ast.Program` top-down and
recursively. Statements are executed via `execute_statement()`, and
expressions are evaluated using `evaluate()`. Both dispatch over the node
classes with ``match``.

2. Environment
The interpreter owns one :class:`~rscript.environment.Environment`. Blocks
push a scope for their duration. Function calls run in a call frame that
hides the caller's locals, so a function body sees its parameters, its own
locals and the global scope.

3. Expression Evaluation
Literals evaluate to the matching runtime value, identifiers are looked up in
the environment. Arithmetic works on two ints or two floats, ``+`` also joins
two strings, comparisons need operands of one type, and ``&&``/``||``
short-circuit on booleans. Any other combination raises
`TypeMismatchError`.

4. Control Flow
`return` unwinds to the enclosing call through `ReturnControlFlow`. Scopes
are popped on the way out. `break` has no loop to leave and is rejected as an
unsupported construct.

5. Error Handling
Every failure is a :class:`~rscript.exceptions.ScriptError` carrying the span
of the node that caused it. Nothing is recovered internally. Running out of
Python stack during a call surfaces as a `ScriptRuntimeError` at that call.


File: interpreter.py
Version: 0.1.0
License: MIT
"""

import logging
from typing import Optional

from rscript import ast
from rscript.environment import Environment
from rscript.exceptions import (
    AlreadyDeclaredError,
    ArityError,
    ReturnControlFlow,
    ScriptRuntimeError,
    TypeMismatchError,
    UnsupportedConstructError,
)
from rscript.lexer import I64_MAX, I64_MIN
from rscript.operations import BinaryOperator
from rscript.parser import Parser
from rscript.span import Span
from rscript.values import (
    UNIT,
    Bool,
    Float,
    Function,
    Int,
    String,
    StructType,
    Value,
    type_name,
)

logger = logging.getLogger(__name__)

ARITHMETIC = (
    BinaryOperator.ADD,
    BinaryOperator.SUBTRACT,
    BinaryOperator.MULTIPLY,
    BinaryOperator.DIVIDE,
)


class Interpreter:
    """Tree-walk interpreter for RScript."""

    def __init__(self, environment: Optional[Environment] = None, file: str = "<input>"):
        """Initialize the interpreter."""
        self.environment = environment if environment is not None else Environment()
        self.file = file

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def run(self, source: str) -> Value:
        """
        Parse and execute a piece of source code.

        Raises:
            ScriptError: For lexical, parse and runtime failures alike.
        """
        program = Parser(source, self.file).parse()
        return self.execute(program)

    def execute(self, program: ast.Program) -> Value:
        """
        Execute the top-level statements of a program in order.

        Returns:
            Value: The value of the last statement when it is an expression
            statement, unit otherwise.
        """
        logger.debug("Executing %d statements from %s", len(program.statements), self.file)
        result = UNIT
        for statement in program.statements:
            try:
                if isinstance(statement, ast.ExpressionStatement):
                    result = self.evaluate(statement.expression)
                else:
                    self.execute_statement(statement)
                    result = UNIT
            except ReturnControlFlow as ret:
                raise UnsupportedConstructError("return outside of a function", ret.span) from None
            except RecursionError:
                raise ScriptRuntimeError("Maximum recursion depth exceeded", statement.span) from None
        return result

    def call(self, name: str, arguments: Optional[list] = None, span: Optional[Span] = None) -> Value:
        """
        Call the function or struct constructor bound to ``name``.

        Parameters:
            name (str): The function or struct name.
            arguments (list): Already evaluated argument values.

        Returns:
            Value: The returned value, or unit.

        Raises:
            ScriptRuntimeError: If the call nests too deeply for the Python stack.
        """
        arguments = list(arguments or [])
        callee = self.environment.get(name, span)

        if isinstance(callee, StructType):
            if len(arguments) != len(callee.field_names):
                raise ArityError(name, len(callee.field_names), len(arguments), span)
            return callee.instantiate(arguments)

        if not isinstance(callee, Function):
            raise TypeMismatchError(
                f"Attempted to call non-function '{name}' of type {type_name(callee)}", span
            )
        if len(arguments) != len(callee.parameters):
            raise ArityError(name, len(callee.parameters), len(arguments), span)

        logger.debug("Calling %s with %d arguments", name, len(arguments))
        try:
            with self.environment.call_frame():
                for parameter, argument in zip(callee.parameters, arguments):
                    self.environment.declare(parameter, argument)
                try:
                    for statement in callee.body:
                        self.execute_statement(statement)
                except ReturnControlFlow as ret:
                    return ret.value
        except RecursionError:
            raise ScriptRuntimeError(f"Maximum recursion depth exceeded calling '{name}'", span) from None
        return UNIT

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def execute_statement(self, statement: ast.Statement) -> None:
        """
        Execute a single statement.

        Raises:
            ReturnControlFlow: When a return statement is reached.
            UnsupportedConstructError: For statements with no runtime meaning.
        """
        match statement:
            case ast.VariableDeclaration(identifier=identifier, initializer=initializer):
                value = self.evaluate(initializer)
                logger.debug("Declaring %s = %r", identifier.name, value)
                self.environment.declare(identifier.name, value)

            case ast.FunctionDeclaration(identifier=identifier):
                self.environment.declare(identifier.name, Function.from_declaration(statement))

            case ast.NamedStruct() | ast.TupleStruct() | ast.UnitStruct():
                name = statement.identifier.name
                # Only the innermost scope counts; inner structs may shadow outer ones.
                if isinstance(self.environment.scopes[-1].get(name), StructType):
                    raise AlreadyDeclaredError(name, statement.identifier.span)
                self.environment.declare(name, StructType.from_declaration(statement))

            case ast.ExpressionStatement(expression=expression):
                self.evaluate(expression)

            case ast.ReturnStatement(value=value, span=span):
                result = self.evaluate(value) if value is not None else UNIT
                raise ReturnControlFlow(result, span)

            case ast.BreakStatement(span=span):
                raise UnsupportedConstructError("break outside of a loop", span)

            case _:
                raise UnsupportedConstructError(type(statement).__name__, getattr(statement, "span", None))

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def evaluate(self, node: ast.Expression) -> Value:
        """
        Recursively evaluate an expression node and return its value.

        Raises:
            VariableNotFoundError: If a referenced name is not bound.
            TypeMismatchError: If operand types do not suit the operation.
            ScriptRuntimeError: On overflow or division by zero.
        """
        match node:
            # Literals
            case ast.IntegerLiteral(value=value):
                return Int(value)
            case ast.FloatLiteral(value=value):
                return Float(value)
            case ast.StringLiteral(value=value):
                return String(value)
            case ast.BooleanLiteral(value=value):
                return Bool(value)

            # Variables
            case ast.Identifier(name=name, span=span):
                value = self.environment.get(name, span)
                if isinstance(value, StructType):
                    # A bare unit struct name builds its only instance.
                    if value.kind == "unit":
                        return value.instantiate([])
                    raise TypeMismatchError(
                        f"Struct '{name}' must be constructed with {len(value.field_names)} arguments", span
                    )
                return value

            case ast.BinaryOp():
                return self._binary_op(node)

            case ast.FunctionCall(function_name=function_name, arguments=arguments, span=span):
                values = [self.evaluate(argument) for argument in arguments]
                return self.call(function_name.name, values, span)

            case ast.BlockExpression():
                return self._block(node)

            case ast.IfExpression(condition=condition):
                taken = self.evaluate(condition)
                if not isinstance(taken, Bool):
                    raise TypeMismatchError(
                        f"if condition must be bool, got {type_name(taken)}", condition.span
                    )
                if taken.value:
                    return self._block(node.then_branch)
                if node.else_branch is not None:
                    return self._block(node.else_branch)
                return UNIT

        raise UnsupportedConstructError(type(node).__name__, getattr(node, "span", None))

    def _block(self, block: ast.BlockExpression) -> Value:
        with self.environment.scope():
            for statement in block.statements:
                self.execute_statement(statement)
            if block.final_expression is None:
                return UNIT
            return self.evaluate(block.final_expression)

    def _binary_op(self, node: ast.BinaryOp) -> Value:
        op = node.operator
        lhs = self.evaluate(node.left)

        if op in (BinaryOperator.AND, BinaryOperator.OR):
            self._expect_bool(op, lhs, node.left.span)
            if op == BinaryOperator.AND and not lhs.value:
                return Bool(False)
            if op == BinaryOperator.OR and lhs.value:
                return Bool(True)
            rhs = self.evaluate(node.right)
            self._expect_bool(op, rhs, node.right.span)
            return Bool(rhs.value)

        rhs = self.evaluate(node.right)
        if type(lhs) is not type(rhs):
            raise self._mismatch(op, lhs, rhs, node.span)

        match op:
            case BinaryOperator.EQUALS:
                return Bool(lhs == rhs)
            case BinaryOperator.NOT_EQUALS:
                return Bool(lhs != rhs)
            case BinaryOperator.LESS_THAN | BinaryOperator.GREATER_THAN:
                if not isinstance(lhs, (Int, Float, String)):
                    raise self._mismatch(op, lhs, rhs, node.span)
                if op == BinaryOperator.LESS_THAN:
                    return Bool(lhs.value < rhs.value)
                return Bool(lhs.value > rhs.value)

        if op not in ARITHMETIC:
            raise UnsupportedConstructError(f"operator {op.value}", node.span)

        if isinstance(lhs, String) and op == BinaryOperator.ADD:
            return String(lhs.value + rhs.value)
        if isinstance(lhs, Int):
            return Int(_int_arithmetic(op, lhs.value, rhs.value, node.span))
        if isinstance(lhs, Float):
            return Float(_float_arithmetic(op, lhs.value, rhs.value, node.span))
        raise self._mismatch(op, lhs, rhs, node.span)

    def _expect_bool(self, op: BinaryOperator, value: Value, span: Span) -> None:
        if not isinstance(value, Bool):
            raise TypeMismatchError(
                f"'{op.symbol}' requires bool operands, got {type_name(value)}", span
            )

    @staticmethod
    def _mismatch(op: BinaryOperator, lhs: Value, rhs: Value, span: Span) -> TypeMismatchError:
        return TypeMismatchError(
            f"Cannot apply '{op.symbol}' to {type_name(lhs)} and {type_name(rhs)}", span
        )


def _int_arithmetic(op: BinaryOperator, lhs: int, rhs: int, span: Span) -> int:
    match op:
        case BinaryOperator.ADD:
            result = lhs + rhs
        case BinaryOperator.SUBTRACT:
            result = lhs - rhs
        case BinaryOperator.MULTIPLY:
            result = lhs * rhs
        case _:
            if rhs == 0:
                raise ScriptRuntimeError("Division by zero", span)
            # Truncate toward zero.
            result = abs(lhs) // abs(rhs)
            if (lhs < 0) != (rhs < 0):
                result = -result
    if not I64_MIN <= result <= I64_MAX:
        raise ScriptRuntimeError("Integer overflow", span)
    return result


def _float_arithmetic(op: BinaryOperator, lhs: float, rhs: float, span: Span) -> float:
    match op:
        case BinaryOperator.ADD:
            return lhs + rhs
        case BinaryOperator.SUBTRACT:
            return lhs - rhs
        case BinaryOperator.MULTIPLY:
            return lhs * rhs
        case _:
            if rhs == 0.0:
                raise ScriptRuntimeError("Division by zero", span)
            return lhs / rhs
