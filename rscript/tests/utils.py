"""
Utility functions shared across RScript tests.
"""
from pathlib import Path
import sys

# Ensure the project root is on the Python path
PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.append(str(PROJECT_ROOT))

from rscript.interpreter import Interpreter  # noqa: E402
from rscript.lexer import tokenize  # noqa: E402
from rscript.parser import Parser  # noqa: E402


def parse_source(source: str):
    """
    Parse source code and return the program.
    """
    return Parser(source, "<test>").parse()


def kinds(source: str) -> list:
    """
    Return the kinds of every token in the source.
    """
    return [token.kind for token, _ in tokenize(source)]


def run_source(source: str) -> Interpreter:
    """
    Run source code and return the interpreter instance after execution.
    """
    interpreter = Interpreter(file="<test>")
    interpreter.execute(parse_source(source))
    return interpreter


def run_file(path: Path) -> Interpreter:
    """
    Run a file and return the interpreter instance after execution.
    """
    interpreter = Interpreter(file=str(path))
    interpreter.run(path.read_text(encoding="utf-8"))
    return interpreter
