"""Row to archive record encoder.

This module provides the encode() function that converts a generic table row
back into an ArcFileItem. Each field is located by name in the row's declared
struct type, checked against the type the archive record requires, and copied.
"""

from __future__ import annotations

from typing import Any, List, Optional

from ..exceptions import FieldTypeError
from ..models.fields import int_bounds
from ..models.record import ArcFileHeaderItem, ArcFileItem
from ..typeinfo import BIGINT, INT, STRING, Category, PrimitiveType, StructField, StructType
from .inspect import list_elements, struct_field_data
from .schema import (
    ARC_FILE_NAME,
    ARC_FILE_POS,
    ARC_FILE_SIZE,
    CONTENT,
    FILE_HEADERS,
    FLAGS,
    HOST_IP,
    MIME_TYPE,
    RECORD_LENGTH,
    TIMESTAMP,
    URI,
    CompiledLayout,
)

_INT_BITS = {INT: 32, BIGINT: 64}


def encode(
    row: Any, layout: CompiledLayout, row_type: Optional[StructType] = None
) -> ArcFileItem:
    """Encode a row to a new archive record.

    Fields are read in column order; the first field that is missing or has the
    wrong declared or runtime type stops the encode.

    Args:
        row: Row value, a mapping keyed by column name or a sequence in
            ``row_type`` order
        layout: Layout returned by compile_layout()
        row_type: Declared struct type of ``row`` (defaults to the layout's row type)

    Returns:
        Newly built ArcFileItem

    Raises:
        FieldTypeError: If a field is missing or does not have the required type

    Example:
        >>> item = encode(decode(original, layout), layout)
        >>> item == original
        True
    """
    if row_type is None:
        row_type = layout.row_type

    def field(name: str) -> StructField:
        found = row_type.field(name)
        if found is None:
            raise FieldTypeError(f"Field {name} is missing from row type {row_type.type_name}")
        return found

    uri = _inspect_string(row, row_type, field(URI))
    host_ip = _inspect_string(row, row_type, field(HOST_IP))
    timestamp = _inspect_int(row, row_type, field(TIMESTAMP), BIGINT)
    mime_type = _inspect_string(row, row_type, field(MIME_TYPE))
    record_length = _inspect_int(row, row_type, field(RECORD_LENGTH), INT)
    header_items = _inspect_headers(row, row_type, field(FILE_HEADERS))
    content = _inspect_string(row, row_type, field(CONTENT))
    arc_file_name = _inspect_string(row, row_type, field(ARC_FILE_NAME))
    arc_file_pos = _inspect_int(row, row_type, field(ARC_FILE_POS), INT)
    flags = _inspect_int(row, row_type, field(FLAGS), INT)
    arc_file_size = _inspect_int(row, row_type, field(ARC_FILE_SIZE), INT)

    try:
        content_bytes = content.encode(layout.content_encoding, _encode_errors(layout))
    except UnicodeEncodeError as e:
        raise FieldTypeError(
            f"Field {CONTENT}: text cannot be encoded as {layout.content_encoding}: {e}"
        ) from e

    return ArcFileItem(
        uri=uri,
        host_ip=host_ip,
        timestamp=timestamp,
        mime_type=mime_type,
        record_length=record_length,
        header_items=header_items,
        content=content_bytes,
        arc_file_name=arc_file_name,
        arc_file_pos=arc_file_pos,
        flags=flags,
        arc_file_size=arc_file_size,
    )


def _encode_errors(layout: CompiledLayout) -> str:
    """Error handler for re-encoding content text.

    surrogateescape is its own inverse; every other decode handler loses
    information, so encoding stays strict.
    """
    return "surrogateescape" if layout.content_errors == "surrogateescape" else "strict"


def _inspect_string(data: Any, struct_type: StructType, field: StructField) -> str:
    """Read a string field, checking its declared and runtime type."""
    if field.type != STRING:
        raise FieldTypeError(
            f"Field {field.name}: expected string column, declared {field.type.type_name}"
        )
    value = struct_field_data(data, struct_type, field)
    if not isinstance(value, str):
        raise FieldTypeError(f"Field {field.name}: expected string, got {type(value).__name__}")
    return value


def _inspect_int(
    data: Any, struct_type: StructType, field: StructField, expected: PrimitiveType
) -> int:
    """Read an int or bigint field, checking its declared type, runtime type and width."""
    if field.type != expected:
        raise FieldTypeError(
            f"Field {field.name}: expected {expected.type_name} column, "
            f"declared {field.type.type_name}"
        )
    value = struct_field_data(data, struct_type, field)
    # bool is an int subclass but never a valid integer column value
    if not isinstance(value, int) or isinstance(value, bool):
        raise FieldTypeError(
            f"Field {field.name}: expected {expected.type_name}, got {type(value).__name__}"
        )
    lo, hi = int_bounds(_INT_BITS[expected])
    if not lo <= value <= hi:
        raise FieldTypeError(
            f"Field {field.name}: value {value} does not fit {expected.type_name} [{lo}, {hi}]"
        )
    return value


def _inspect_headers(
    data: Any, struct_type: StructType, field: StructField
) -> List[ArcFileHeaderItem]:
    """Read the header list field as ArcFileHeaderItems, in order."""
    if field.type.category is not Category.LIST:
        raise FieldTypeError(
            f"Field {field.name}: expected list-of-struct column, declared {field.type.type_name}"
        )
    element_type = field.type.element
    if element_type.category is not Category.STRUCT or len(element_type.fields) != 2:
        raise FieldTypeError(
            f"Field {field.name}: list elements must be key/value structs, "
            f"declared {field.type.type_name}"
        )
    key_field, value_field = element_type.fields
    for member in element_type.fields:
        if member.type != STRING:
            raise FieldTypeError(
                f"Field {field.name}: header member {member.name} must be string, "
                f"declared {member.type.type_name}"
            )

    value = struct_field_data(data, struct_type, field)
    header_items: List[ArcFileHeaderItem] = []
    for i, element in enumerate(list_elements(value, field.name)):
        try:
            key = _inspect_string(element, element_type, key_field)
            item_value = _inspect_string(element, element_type, value_field)
        except FieldTypeError as e:
            raise FieldTypeError(f"Field {field.name}[{i}]: {e}") from e
        header_items.append(ArcFileHeaderItem(item_key=key, item_value=item_value))
    return header_items
