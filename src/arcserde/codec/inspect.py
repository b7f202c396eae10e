"""Value access through declared struct types.

Rows handed to the encoder are generic: a mapping keyed by field name, or a
sequence ordered like its struct type. These helpers read field data out of
either form without assuming anything else about the container.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, List

from ..exceptions import FieldTypeError
from ..typeinfo import StructField, StructType


def _is_sequence(data: Any) -> bool:
    return isinstance(data, Sequence) and not isinstance(data, (str, bytes, bytearray))


def struct_field_data(data: Any, struct_type: StructType, field: StructField) -> Any:
    """Read one field of a struct value.

    Args:
        data: Struct value, either a mapping or a sequence
        struct_type: Declared type of ``data``
        field: Member of ``struct_type`` to read

    Returns:
        The field value; None if the value is null, or a sequence is too short
        to hold the field

    Raises:
        FieldTypeError: If ``data`` is neither a mapping nor a sequence
    """
    if data is None:
        return None

    if isinstance(data, Mapping):
        return data.get(field.name)

    if _is_sequence(data):
        index = struct_type.index_of(field.name)
        if index is None or index >= len(data):
            return None
        return data[index]

    raise FieldTypeError(
        f"Struct value for {struct_type.type_name} must be a mapping or sequence, "
        f"got {type(data).__name__}"
    )


def list_elements(data: Any, field_name: str) -> List[Any]:
    """Return the elements of a list value.

    A null list has no elements.

    Raises:
        FieldTypeError: If ``data`` is not a sequence
    """
    if data is None:
        return []
    if not _is_sequence(data):
        raise FieldTypeError(
            f"Field {field_name}: expected list-of-struct, got {type(data).__name__}"
        )
    return list(data)
