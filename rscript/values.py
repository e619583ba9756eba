"""Runtime values.

Values produced by the interpreter are frozen dataclasses, one per variant.
Rebinding a name replaces the value; a value is never changed in place.

:class:`Function` and :class:`StructType` are not values a program computes
with. They are what function and struct declarations leave behind. Both are
bound in the environment like any other name and follow its scoping.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from rscript import ast


@dataclass(frozen=True)
class Int:
    value: int


@dataclass(frozen=True)
class Float:
    value: float


@dataclass(frozen=True)
class String:
    value: str


@dataclass(frozen=True)
class Bool:
    value: bool


@dataclass(frozen=True)
class Unit:
    pass


UNIT = Unit()


@dataclass(frozen=True)
class StructInstance:
    name: str
    fields: tuple[tuple[str, Value], ...] = ()

    def field(self, name: str) -> Value:
        """
        Return the value of the field called ``name``.

        Raises:
            KeyError: If the struct has no such field.
        """
        for field_name, value in self.fields:
            if field_name == name:
                return value
        raise KeyError(name)


Value = Union[Int, Float, String, Bool, Unit, StructInstance]


@dataclass(frozen=True)
class Function:
    """Runtime representation of a declared function."""

    name: str
    parameters: tuple[str, ...]
    body: tuple[ast.Statement, ...] = field(compare=False, repr=False)

    @classmethod
    def from_declaration(cls, declaration: ast.FunctionDeclaration) -> Function:
        return cls(
            declaration.identifier.name,
            tuple(p.identifier.name for p in declaration.parameters),
            tuple(declaration.body),
        )


@dataclass(frozen=True)
class StructType:
    """Descriptor registered by a struct declaration."""

    name: str
    kind: str
    field_names: tuple[str, ...] = ()

    @classmethod
    def from_declaration(cls, declaration: ast.StructDeclaration) -> StructType:
        name = declaration.identifier.name
        match declaration:
            case ast.NamedStruct(fields=fields):
                return cls(name, "named", tuple(f.identifier.name for f in fields))
            case ast.TupleStruct(fields=fields):
                return cls(name, "tuple", tuple(str(i) for i in range(len(fields))))
            case ast.UnitStruct():
                return cls(name, "unit")
        raise TypeError(f"Not a struct declaration: {declaration!r}")

    def instantiate(self, arguments: list[Value]) -> StructInstance:
        return StructInstance(self.name, tuple(zip(self.field_names, arguments)))


def type_name(value) -> str:
    """
    Return the user-facing name of a runtime value's type.
    """
    match value:
        case Int():
            return "int"
        case Float():
            return "float"
        case String():
            return "string"
        case Bool():
            return "bool"
        case Unit():
            return "unit"
        case StructInstance(name=name):
            return name
        case Function():
            return "fn"
        case StructType():
            return "struct"
    return type(value).__name__
