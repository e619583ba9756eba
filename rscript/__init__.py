"""RScript: a small scripting language.

Source text is turned into ``(Token, Span)`` pairs by :mod:`rscript.lexer`,
into a spanned syntax tree by :mod:`rscript.parser` and executed by the
tree-walking :class:`~rscript.interpreter.Interpreter`.


File: __init__.py
Version: 0.1.0
License: MIT
"""

import logging

from rscript.environment import Environment
from rscript.exceptions import ScriptError
from rscript.interpreter import Interpreter
from rscript.lexer import Lexer, Token, TokenKind, tokenize
from rscript.parser import Parser, parse, parse_expression
from rscript.span import Span

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Environment",
    "Interpreter",
    "Lexer",
    "Parser",
    "ScriptError",
    "Span",
    "Token",
    "TokenKind",
    "parse",
    "parse_expression",
    "tokenize",
]
