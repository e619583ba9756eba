"""Formatting of syntax trees and runtime values for humans.

`format_tree` renders any syntax tree node as indented text, one node per
line, each with its span. Leaf and property-bearing nodes also show their
names, literal values, operators and declared types::

    Program [0-10]
        VariableDeclaration [0-10]
            Identifier [4-5] name=x
            IntegerLiteral [8-9] value=5

`format_value` renders a runtime value the way a script author would write
it.
"""

from rscript import ast
from rscript.values import (
    Bool,
    Float,
    Function,
    Int,
    String,
    StructInstance,
    Unit,
)


def _line(node, level: int, indent: int, **properties) -> str:
    prefix = " " * (indent * level)
    text = f"{prefix}{type(node).__name__} [{node.span}]"
    for key, value in properties.items():
        text += f" {key}={value}"
    return text


def _lines(node, level: int, indent: int) -> list[str]:
    """Render ``node`` and its children, depth first."""
    match node:
        case ast.Program(statements=statements):
            children = statements
            head = _line(node, level, indent)
        case ast.VariableDeclaration():
            children = [node.identifier, node.initializer]
            head = _line(node, level, indent)
        case ast.FunctionDeclaration():
            head = _line(
                node, level, indent,
                name=node.identifier.name,
                returns=node.return_type.name,
            )
            children = [*node.parameters, *node.body]
        case ast.Parameter() | ast.NamedFieldDeclaration():
            return [_line(
                node, level, indent,
                name=node.identifier.name,
                type=node.declared_type.name,
            )]
        case ast.TupleFieldDeclaration():
            return [_line(node, level, indent, type=node.declared_type.name)]
        case ast.NamedStruct() | ast.TupleStruct():
            head = _line(node, level, indent, name=node.identifier.name)
            children = node.fields
        case ast.UnitStruct():
            return [_line(node, level, indent, name=node.identifier.name)]
        case ast.ExpressionStatement(expression=expression):
            head = _line(node, level, indent)
            children = [expression]
        case ast.ReturnStatement(value=value) | ast.BreakStatement(value=value):
            head = _line(node, level, indent)
            children = [value] if value is not None else []
        case ast.BinaryOp():
            head = _line(node, level, indent, operator=node.operator.value)
            children = [node.left, node.right]
        case ast.FunctionCall():
            head = _line(node, level, indent, name=node.function_name.name)
            children = node.arguments
        case ast.BlockExpression():
            head = _line(node, level, indent)
            children = list(node.statements)
            if node.final_expression is not None:
                children.append(node.final_expression)
        case ast.IfExpression():
            head = _line(node, level, indent)
            children = [node.condition, node.then_branch]
            if node.else_branch is not None:
                children.append(node.else_branch)
        case ast.Identifier(name=name):
            return [_line(node, level, indent, name=name)]
        case ast.IntegerLiteral(value=value) | ast.FloatLiteral(value=value) | ast.StringLiteral(value=value):
            return [_line(node, level, indent, value=value)]
        case ast.BooleanLiteral(value=value):
            return [_line(node, level, indent, value=str(value).lower())]
        case _:
            raise TypeError(f"Cannot format {type(node).__name__}")

    lines = [head]
    for child in children:
        lines.extend(_lines(child, level + 1, indent))
    return lines


def format_tree(node, indent: int = 4) -> str:
    """
    Render a syntax tree node and everything below it.

    Parameters:
        node: Any syntax tree node, usually a :class:`~rscript.ast.Program`.
        indent (int): Spaces per nesting level.
    """
    return "\n".join(_lines(node, 0, indent))


def format_value(value) -> str:
    """
    Render a runtime value, e.g. ``42``, ``true``, ``()`` or ``Point(1, 2)``.
    """
    match value:
        case Int(value=v):
            return str(v)
        case Float(value=v):
            return repr(v)
        case String(value=v):
            return v
        case Bool(value=v):
            return "true" if v else "false"
        case Unit():
            return "()"
        case StructInstance(name=name, fields=fields):
            if not fields:
                return name
            if all(field_name.isdigit() for field_name, _ in fields):
                return f"{name}({', '.join(format_value(v) for _, v in fields)})"
            body = ", ".join(f"{field_name}: {format_value(v)}" for field_name, v in fields)
            return f"{name} {{ {body} }}"
        case Function(name=name, parameters=parameters):
            return f"<fn {name}({', '.join(parameters)})>"
    raise TypeError(f"Cannot format value {value!r}")
