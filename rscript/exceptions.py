"""Errors.

Every failure raised by the tokenizer, parser, environment or interpreter is
a subclass of :class:`ScriptError`, so callers can report any of them through
one ``except`` clause. Each class composes its message up front and keeps the
pieces as attributes for tooling that wants to point at the offending span.


File: exceptions.py
Version: 0.1.0
License: MIT
"""


class ScriptError(Exception):
    """
    Base class for all RScript errors.
    """
    def __init__(self, message, span=None):
        self.span = span
        if span is not None:
            message += f" at {span}"
        super().__init__(message)


class LexicalError(ScriptError):
    """
    Error for source text that cannot be tokenized.
    """
    def __init__(self, reason, span=None):
        self.reason = reason
        super().__init__(f"Lexical error: {reason}", span)


class ParseError(ScriptError):
    """
    Base error for grammar violations.
    """


class UnexpectedTokenError(ParseError):
    """
    Error for a token that does not satisfy the grammar.
    """
    def __init__(self, expected, found, span=None):
        self.expected = expected
        self.found = found
        super().__init__(f"Expected {expected}, found {found}", span)


class UnexpectedEofError(ParseError):
    """
    Error for input that ends in the middle of a construct.
    """
    def __init__(self, expected=None, span=None):
        self.expected = expected
        message = "Unexpected end of input"
        if expected is not None:
            message += f", expected {expected}"
        super().__init__(message, span)


class ScopeError(ScriptError):
    """
    Base error for environment lookups and declarations.
    """


class VariableNotFoundError(ScopeError):
    """
    Error for undefined variables.
    """
    def __init__(self, name, span=None):
        self.name = name
        super().__init__(f"Undefined variable '{name}'", span)


class AlreadyDeclaredError(ScopeError):
    """
    Error for a name that may only be declared once.
    """
    def __init__(self, name, span=None):
        self.name = name
        super().__init__(f"'{name}' is already declared", span)


class ScriptRuntimeError(ScriptError):
    """
    Error raised while evaluating a program.
    """


class UnsupportedConstructError(ScriptRuntimeError):
    """
    Error for syntax tree nodes the interpreter does not execute.
    """
    def __init__(self, construct, span=None):
        self.construct = construct
        super().__init__(f"Unsupported construct: {construct}", span)


class TypeMismatchError(ScriptRuntimeError):
    """
    Error for operands or conditions of the wrong type.
    """


class ArityError(ScriptRuntimeError):
    """
    Error for calls with the wrong number of arguments.
    """
    def __init__(self, name, expected, got, span=None):
        self.name = name
        self.expected = expected
        self.got = got
        super().__init__(
            f"'{name}' expects {expected} argument{'s' if expected != 1 else ''}, got {got}",
            span,
        )


class ReturnControlFlow(Exception):
    """
    Control flow handling for return statements.
    """
    def __init__(self, value, span=None):
        self.value = value
        self.span = span
