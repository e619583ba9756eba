"""
Tests for rendering syntax trees and values.
"""
from rscript.formatter import format_tree, format_value
from rscript.values import UNIT, Bool, Float, Function, Int, String, StructInstance

from utils import parse_source


def test_format_declaration():
    """
    Test the layout of a simple program.
    """
    program = parse_source("let x = 5;")
    assert format_tree(program) == (
        "Program [0-10]\n"
        "    VariableDeclaration [0-10]\n"
        "        Identifier [4-5] name=x\n"
        "        IntegerLiteral [8-9] value=5"
    )


def test_format_every_statement_kind():
    """
    Test that every parsed node kind renders with its properties.
    """
    source = (
        "struct P(int);\n"
        "struct N { a: int }\n"
        "struct U;\n"
        "fn f(a: int) -> bool {\n"
        "    return if a > 1 { true } else { false };\n"
        "}\n"
        "g(1.5, \"s\") || false;\n"
    )
    text = format_tree(parse_source(source), indent=2)
    assert "TupleStruct [0-14] name=P" in text
    assert "  TupleFieldDeclaration [9-12] type=int" in text
    assert "NamedFieldDeclaration" in text and "name=a type=int" in text
    assert "UnitStruct" in text and "name=U" in text
    assert "FunctionDeclaration" in text and "name=f returns=bool" in text
    assert "Parameter" in text
    assert "ReturnStatement" in text
    assert "IfExpression" in text
    assert "BlockExpression" in text
    assert "BooleanLiteral" in text and "value=true" in text
    assert "BinaryOp" in text and "operator=Or" in text
    assert "FunctionCall" in text and "name=g" in text
    assert "FloatLiteral" in text and "value=1.5" in text
    assert 'StringLiteral' in text and 'value="s"' in text


def test_nesting_indentation():
    """
    Test that children are indented one level deeper than their parent.
    """
    lines = format_tree(parse_source("a + b;")).splitlines()
    assert lines[1].startswith("    ExpressionStatement")
    assert lines[2].startswith("        BinaryOp")
    assert lines[3].startswith("            Identifier")


def test_format_values():
    """
    Test rendering of each runtime value.
    """
    assert format_value(Int(3)) == "3"
    assert format_value(Float(2.5)) == "2.5"
    assert format_value(String('"hi"')) == '"hi"'
    assert format_value(Bool(True)) == "true"
    assert format_value(UNIT) == "()"
    assert format_value(StructInstance("Point", (("0", Int(1)), ("1", Int(2))))) == "Point(1, 2)"
    assert format_value(StructInstance("N", (("x", Int(1)),))) == "N { x: 1 }"
    assert format_value(StructInstance("Marker")) == "Marker"
    assert format_value(Function("f", ("a", "b"), ())) == "<fn f(a, b)>"
