"""arcserde: Archive Record SerDe

Converts captured web archive records (ArcFileItem) to and from the generic
rows a SQL-on-files query engine reads, after checking that the table's column
schema matches the record layout exactly.

Key Features:
- Pydantic-based wire record model
- Structural column schema validation with precise diagnostics
- Lossless, type-checked conversion in both directions
- Engine type string parser (``columns.types`` table property)

Quick Start:
    >>> from arcserde import ArcSerDe, ArcFileItem
    >>> serde = ArcSerDe()
    >>> serde.initialize(
    ...     "string:string:bigint:string:int:array<struct<key:string,value:string>>"
    ...     ":string:string:int:int:int"
    ... )
    >>> row = serde.deserialize(item)
    >>> serde.serialize(row) == item
    True
"""

from __future__ import annotations

from .codec import (
    CANONICAL_COLUMNS,
    LIST_COLUMN_TYPES,
    ROW_TYPE,
    ArcSerDe,
    CompiledLayout,
    compile_layout,
    decode,
    encode,
)
from .config import CodecSettings, get_settings
from .exceptions import ArcSerdeError, FieldTypeError, SchemaError
from .models import ArcFileHeaderItem, ArcFileItem
from .typeinfo import (
    BIGINT,
    INT,
    STRING,
    Category,
    ListType,
    MapType,
    PrimitiveType,
    StructField,
    StructType,
    parse_type_string,
)

__version__ = "0.1.0"

__all__ = [
    # Core API
    "ArcSerDe",
    "compile_layout",
    "encode",
    "decode",
    "CompiledLayout",
    "CANONICAL_COLUMNS",
    "ROW_TYPE",
    "LIST_COLUMN_TYPES",
    # Wire record
    "ArcFileItem",
    "ArcFileHeaderItem",
    # Types
    "Category",
    "PrimitiveType",
    "ListType",
    "MapType",
    "StructField",
    "StructType",
    "STRING",
    "INT",
    "BIGINT",
    "parse_type_string",
    # Configuration
    "CodecSettings",
    "get_settings",
    # Exceptions
    "ArcSerdeError",
    "SchemaError",
    "FieldTypeError",
    # Version
    "__version__",
]
