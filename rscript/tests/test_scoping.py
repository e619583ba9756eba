"""
Tests for scoping rules in RScript
"""
import pytest

from rscript.exceptions import VariableNotFoundError
from rscript.values import Int

from utils import run_source


def test_functions_have_fresh_env():
    """
    Test that functions have a fresh environment and do not leak variables.
    """
    source = (
        "fn inner() -> int {\n"
        "    let x = 1;\n"
        "    return x;\n"
        "}\n"
        "fn outer() -> int {\n"
        "    let x = 2;\n"
        "    return inner();\n"
        "}\n"
        "let r = outer();\n"
    )
    interpreter = run_source(source)
    assert interpreter.environment.get("r") == Int(1)
    with pytest.raises(VariableNotFoundError):
        interpreter.environment.get("x")


def test_globals_visible():
    """
    Test that global variables are visible inside functions.
    """
    source = (
        "let g = 5;\n"
        "fn read_g() -> int {\n"
        "    return g;\n"
        "}\n"
        "let r = read_g();\n"
    )
    assert run_source(source).environment.get("r") == Int(5)


def test_caller_locals_not_visible_in_callee():
    """
    Test that a callee cannot see the locals of its caller.
    """
    source = (
        "fn callee() -> int {\n"
        "    return secret;\n"
        "}\n"
        "fn caller() -> int {\n"
        "    let secret = 3;\n"
        "    return callee();\n"
        "}\n"
        "let r = caller();\n"
    )
    with pytest.raises(VariableNotFoundError) as excinfo:
        run_source(source)
    assert excinfo.value.name == "secret"


def test_parameters_shadow_globals():
    """
    Test that a parameter hides a global of the same name.
    """
    source = (
        "let n = 100;\n"
        "fn twice(n: int) -> int {\n"
        "    return n + n;\n"
        "}\n"
        "let r = twice(4);\n"
        "let s = n;\n"
    )
    env = run_source(source).environment
    assert env.get("r") == Int(8)
    assert env.get("s") == Int(100)


def test_declarations_inside_function_stay_local():
    """
    Test that `let` inside a function does not touch the global binding.
    """
    source = (
        "let x = 1;\n"
        "fn f() -> unit {\n"
        "    let x = 2;\n"
        "}\n"
        "f();\n"
        "let r = x;\n"
    )
    assert run_source(source).environment.get("r") == Int(1)
