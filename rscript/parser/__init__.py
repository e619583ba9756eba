"""Parser package for RScript.

This package splits the parser functionality into multiple modules to
keep the code organized. The :class:`Parser` class and the ``parse``
helpers are exposed at the package level for convenience.


File: __init__.py
Version: 0.1.0
License: MIT
"""

from .parser import Parser, parse, parse_expression

__all__ = ["Parser", "parse", "parse_expression"]
