"""Environment.

The environment is a stack of lexical scopes, each mapping names to runtime
values. The bottom scope is the global scope; it is created with the
environment and is never popped.

- ``declare`` binds in the innermost scope, shadowing outer bindings and
  replacing a binding of the same name in that scope.
- ``get`` searches from the innermost scope outwards.
- ``set`` updates the nearest existing binding, and falls back to
  ``declare`` when there is none.
- ``scope()`` and ``call_frame()`` are context managers that restore the
  stack on exit, early returns included.


File: environment.py
Version: 0.1.0
License: MIT
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from rscript.exceptions import VariableNotFoundError
from rscript.span import Span

logger = logging.getLogger(__name__)


class Environment:
    """Stack of name to value scopes."""

    def __init__(self):
        """Initialize the environment with its global scope."""
        self.scopes: list[dict] = [{}]

    @property
    def depth(self) -> int:
        """Number of scopes on the stack, the global scope included."""
        return len(self.scopes)

    @property
    def globals(self) -> dict:
        return self.scopes[0]

    def push_scope(self) -> None:
        self.scopes.append({})

    def pop_scope(self) -> None:
        """
        Discard the innermost scope. The global scope is never discarded.
        """
        if len(self.scopes) == 1:
            logger.warning("Attempted to pop the global scope; ignoring")
            return
        self.scopes.pop()

    def declare(self, name: str, value) -> None:
        """
        Bind ``name`` in the innermost scope.
        """
        self.scopes[-1][name] = value

    def get(self, name: str, span: Optional[Span] = None):
        """
        Return the value bound to ``name`` in the nearest enclosing scope.

        Raises:
            VariableNotFoundError: If no scope binds ``name``.
        """
        for scope in reversed(self.scopes):
            if name in scope:
                return scope[name]
        raise VariableNotFoundError(name, span)

    def set(self, name: str, value) -> None:
        """
        Rebind ``name`` where it is currently bound, or declare it in the
        innermost scope when it is not bound anywhere.
        """
        for scope in reversed(self.scopes):
            if name in scope:
                scope[name] = value
                return
        self.declare(name, value)

    def contains(self, name: str) -> bool:
        return any(name in scope for scope in self.scopes)

    def snapshot(self) -> dict:
        """
        Return every visible binding, inner bindings hiding outer ones.
        """
        visible = {}
        for scope in self.scopes:
            visible.update(scope)
        return visible

    @contextmanager
    def scope(self) -> Iterator[dict]:
        """
        Push a scope for the duration of the ``with`` block.
        """
        self.push_scope()
        try:
            yield self.scopes[-1]
        finally:
            self.pop_scope()

    @contextmanager
    def call_frame(self) -> Iterator[dict]:
        """
        Hide the caller's local scopes and push a fresh one for a function
        body. Only the global scope stays visible.
        """
        saved_scopes = self.scopes
        self.scopes = [saved_scopes[0], {}]
        try:
            yield self.scopes[-1]
        finally:
            self.scopes = saved_scopes

    def __repr__(self) -> str:
        return f"Environment(depth={self.depth})"
