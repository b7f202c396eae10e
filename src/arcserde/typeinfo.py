"""Column type descriptors for the query engine's type language.

Types are immutable dataclasses compared structurally, so a schema supplied by
the engine can be checked against the archive record layout with ``==``.
``parse_type_string`` turns an engine type string (for example the
``columns.types`` table property) into a list of descriptors.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from functools import cached_property
from typing import List, Optional, Tuple, Union

from .exceptions import SchemaError


class Category(enum.Enum):
    """Broad kind of a column type."""

    PRIMITIVE = "primitive"
    LIST = "list"
    MAP = "map"
    STRUCT = "struct"


PRIMITIVE_NAMES = frozenset(
    {
        "string",
        "boolean",
        "tinyint",
        "smallint",
        "int",
        "bigint",
        "float",
        "double",
        "binary",
        "timestamp",
        "date",
        "void",
    }
)

# Primitives that take a parenthesised parameter list, e.g. varchar(10)
PARAMETERIZED_NAMES = frozenset({"char", "varchar", "decimal"})


@dataclass(frozen=True)
class PrimitiveType:
    """A primitive column type such as ``string`` or ``bigint``.

    Attributes:
        name: Lower-case engine type name, including parameters if any
    """

    name: str

    @property
    def category(self) -> Category:
        return Category.PRIMITIVE

    @property
    def type_name(self) -> str:
        return self.name


@dataclass(frozen=True)
class ListType:
    """An ``array<element>`` column type."""

    element: TypeInfo

    @property
    def category(self) -> Category:
        return Category.LIST

    @property
    def type_name(self) -> str:
        return f"array<{self.element.type_name}>"


@dataclass(frozen=True)
class MapType:
    """A ``map<key,value>`` column type."""

    key: TypeInfo
    value: TypeInfo

    @property
    def category(self) -> Category:
        return Category.MAP

    @property
    def type_name(self) -> str:
        return f"map<{self.key.type_name},{self.value.type_name}>"


@dataclass(frozen=True)
class StructField:
    """A named, typed member of a struct type."""

    name: str
    type: TypeInfo


@dataclass(frozen=True)
class StructType:
    """A ``struct<name:type,...>`` column type.

    A StructType also describes a whole row: each field is one column, in
    column order.

    Attributes:
        fields: Ordered struct members
    """

    fields: Tuple[StructField, ...]

    @property
    def category(self) -> Category:
        return Category.STRUCT

    @property
    def type_name(self) -> str:
        members = ",".join(f"{f.name}:{f.type.type_name}" for f in self.fields)
        return f"struct<{members}>"

    @cached_property
    def _positions(self) -> dict[str, int]:
        return {f.name: i for i, f in enumerate(self.fields)}

    def index_of(self, name: str) -> Optional[int]:
        """Return the position of field ``name``, or None if absent."""
        return self._positions.get(name)

    def field(self, name: str) -> Optional[StructField]:
        """Return the field called ``name``, or None if absent."""
        index = self.index_of(name)
        return None if index is None else self.fields[index]

    @classmethod
    def of(cls, *members: Tuple[str, TypeInfo]) -> StructType:
        """Build a struct type from ``(name, type)`` pairs."""
        return cls(tuple(StructField(name, type_) for name, type_ in members))


TypeInfo = Union[PrimitiveType, ListType, MapType, StructType]

STRING = PrimitiveType("string")
INT = PrimitiveType("int")
BIGINT = PrimitiveType("bigint")


_TOKEN_RE = re.compile(r"\s*([<>(),:;]|[^<>(),:;\s]+)")
_TOP_LEVEL_SEPARATORS = (",", ":", ";")


class _TypeParser:
    """Recursive descent parser over a tokenized type string."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.tokens: List[Tuple[str, int]] = []
        pos = 0
        while pos < len(text):
            match = _TOKEN_RE.match(text, pos)
            if match is None:
                # Only trailing whitespace is left
                break
            self.tokens.append((match.group(1), match.start(1)))
            pos = match.end()
        self.index = 0

    def at_end(self) -> bool:
        return self.index >= len(self.tokens)

    def peek(self) -> Optional[str]:
        if self.at_end():
            return None
        return self.tokens[self.index][0]

    def _error(self, message: str) -> SchemaError:
        if self.at_end():
            where = "end of input"
        else:
            where = f"position {self.tokens[self.index][1]}"
        return SchemaError(f"Error parsing type string {self.text!r} at {where}: {message}")

    def next(self) -> str:
        if self.at_end():
            raise self._error("unexpected end of type string")
        token = self.tokens[self.index][0]
        self.index += 1
        return token

    def expect(self, *expected: str) -> str:
        token = self.peek()
        if token not in expected:
            raise self._error(f"expected {' or '.join(repr(e) for e in expected)}, got {token!r}")
        self.index += 1
        return token

    def identifier(self) -> str:
        token = self.peek()
        if token is None or token in "<>(),:;":
            raise self._error(f"expected a name, got {token!r}")
        self.index += 1
        return token

    def parse_type(self) -> TypeInfo:
        name = self.identifier().lower()

        if name == "array":
            self.expect("<")
            element = self.parse_type()
            self.expect(">")
            return ListType(element)

        if name == "map":
            self.expect("<")
            key = self.parse_type()
            self.expect(",")
            value = self.parse_type()
            self.expect(">")
            return MapType(key, value)

        if name == "struct":
            self.expect("<")
            members: List[StructField] = []
            if self.peek() == ">":
                self.next()
                return StructType(())
            while True:
                field_name = self.identifier()
                self.expect(":")
                members.append(StructField(field_name, self.parse_type()))
                if self.expect(",", ">") == ">":
                    return StructType(tuple(members))

        if name in PARAMETERIZED_NAMES:
            if self.peek() != "(":
                return PrimitiveType(name)
            self.next()
            params = [self.identifier()]
            while self.expect(",", ")") == ",":
                params.append(self.identifier())
            return PrimitiveType(f"{name}({','.join(params)})")

        if name in PRIMITIVE_NAMES:
            return PrimitiveType(name)

        self.index -= 1
        raise self._error(f"unknown type {name!r}")


def parse_type_string(text: str) -> List[TypeInfo]:
    """Parse a list of column types.

    Top-level types may be separated by ``,``, ``:`` or ``;``; type names are
    case-insensitive, struct member names are kept as written.

    Args:
        text: Type string, e.g. ``"string:bigint:array<struct<key:string,value:string>>"``

    Returns:
        One descriptor per column, in order

    Raises:
        SchemaError: If the string is empty or malformed

    Example:
        >>> parse_type_string("string,array<int>")
        [PrimitiveType(name='string'), ListType(element=PrimitiveType(name='int'))]
    """
    parser = _TypeParser(text)
    if parser.at_end():
        raise SchemaError("Column type string is empty")

    types: List[TypeInfo] = []
    while True:
        types.append(parser.parse_type())
        if parser.at_end():
            return types
        parser.expect(*_TOP_LEVEL_SEPARATORS)
