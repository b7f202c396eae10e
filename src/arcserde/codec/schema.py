"""Canonical archive record schema and layout compilation.

The archive record maps onto exactly eleven table columns. ``compile_layout``
checks a column schema supplied by the query engine against that layout and
returns a CompiledLayout which the encoder and decoder use for every call.
"""

from __future__ import annotations

import codecs
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Sequence, Tuple, Union

from ..exceptions import SchemaError
from ..typeinfo import (
    BIGINT,
    INT,
    STRING,
    ListType,
    StructField,
    StructType,
    TypeInfo,
    parse_type_string,
)

# Column names
URI = "uri"
HOST_IP = "hostIP"
TIMESTAMP = "timestamp"
MIME_TYPE = "mimeType"
RECORD_LENGTH = "recordLength"
FILE_HEADERS = "fileHeaders"
CONTENT = "content"
ARC_FILE_NAME = "arcFileName"
ARC_FILE_POS = "arcFilePos"
FLAGS = "flags"
ARC_FILE_SIZE = "fileSize"

# Header struct member names
HEADER_KEY = "key"
HEADER_VALUE = "value"

# Table property holding the column type string
LIST_COLUMN_TYPES = "columns.types"

HEADER_STRUCT_TYPE = StructType.of((HEADER_KEY, STRING), (HEADER_VALUE, STRING))
HEADER_LIST_TYPE = ListType(HEADER_STRUCT_TYPE)

CANONICAL_COLUMNS: Tuple[StructField, ...] = (
    StructField(URI, STRING),
    StructField(HOST_IP, STRING),
    StructField(TIMESTAMP, BIGINT),
    StructField(MIME_TYPE, STRING),
    StructField(RECORD_LENGTH, INT),
    StructField(FILE_HEADERS, HEADER_LIST_TYPE),
    StructField(CONTENT, STRING),
    StructField(ARC_FILE_NAME, STRING),
    StructField(ARC_FILE_POS, INT),
    StructField(FLAGS, INT),
    StructField(ARC_FILE_SIZE, INT),
)

ROW_TYPE = StructType(CANONICAL_COLUMNS)

DEFAULT_CONTENT_ENCODING = "utf-8"
DEFAULT_CONTENT_ERRORS = "replace"


@dataclass(frozen=True)
class CompiledLayout:
    """Field positions and content codec for a validated schema.

    Read-only after construction, so one layout may be shared by any number of
    concurrent encode/decode calls.

    Attributes:
        row_type: Struct type describing a decoded row
        positions: Column name to row index
        header_type: Struct type of one fileHeaders element
        header_positions: Header member name to index within the element
        content_encoding: Text encoding applied to the content column
        content_errors: Error handler used when decoding content bytes
    """

    row_type: StructType
    positions: Mapping[str, int]
    header_type: StructType
    header_positions: Mapping[str, int]
    content_encoding: str = DEFAULT_CONTENT_ENCODING
    content_errors: str = DEFAULT_CONTENT_ERRORS

    @property
    def width(self) -> int:
        """Number of columns in a row."""
        return len(self.row_type.fields)


def _verify_column_type(actual_types: Sequence[TypeInfo], index: int) -> None:
    column = CANONICAL_COLUMNS[index]
    actual = actual_types[index]
    if actual != column.type:
        actual_name = getattr(actual, "type_name", repr(actual))
        raise SchemaError(
            f"Column {index} ({column.name}) must be type {column.type.type_name}, "
            f"got {actual_name}"
        )


def verify_schema(column_types: Sequence[TypeInfo]) -> None:
    """Check that ``column_types`` matches the archive record columns exactly.

    Args:
        column_types: Column type descriptors, in table order

    Raises:
        SchemaError: If the column count differs from 11, or the first column
            whose type differs structurally from the canonical one
    """
    if len(column_types) != len(CANONICAL_COLUMNS):
        raise SchemaError(
            f"Table must have {len(CANONICAL_COLUMNS)} columns, got {len(column_types)}"
        )
    for index in range(len(CANONICAL_COLUMNS)):
        _verify_column_type(column_types, index)


def compile_layout(
    column_types: Union[str, Sequence[TypeInfo]],
    *,
    content_encoding: str = DEFAULT_CONTENT_ENCODING,
    content_errors: str = DEFAULT_CONTENT_ERRORS,
) -> CompiledLayout:
    """Validate a column schema and build the layout used by encode/decode.

    Args:
        column_types: Column type descriptors, or a type string to parse
        content_encoding: Text encoding for the content column
        content_errors: Decode error handler for the content column

    Returns:
        CompiledLayout for the canonical archive record columns

    Raises:
        SchemaError: If the schema is malformed or does not match, or the
            content encoding is unknown

    Example:
        >>> layout = compile_layout(
        ...     "string:string:bigint:string:int:array<struct<key:string,value:string>>"
        ...     ":string:string:int:int:int"
        ... )
        >>> layout.positions["fileSize"]
        10
    """
    if isinstance(column_types, str):
        column_types = parse_type_string(column_types)

    verify_schema(column_types)

    try:
        content_encoding = codecs.lookup(content_encoding).name
        # Binary-to-binary codecs such as base64 raise LookupError here
        b"".decode(content_encoding)
        codecs.lookup_error(content_errors)
    except LookupError as err:
        raise SchemaError(f"Invalid content codec: {err}") from err

    return CompiledLayout(
        row_type=ROW_TYPE,
        positions=MappingProxyType({f.name: i for i, f in enumerate(CANONICAL_COLUMNS)}),
        header_type=HEADER_STRUCT_TYPE,
        header_positions=MappingProxyType(
            {f.name: i for i, f in enumerate(HEADER_STRUCT_TYPE.fields)}
        ),
        content_encoding=content_encoding,
        content_errors=content_errors,
    )
