"""ArcSerDe: schema-checked conversion between archive records and table rows.

ArcSerDe is the object a query engine holds for one table. ``initialize`` is
called once with the table's column schema; after that ``deserialize`` and
``serialize`` may be called any number of times, from any number of threads.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Sequence, Type, Union

from ..config import CodecSettings, get_settings
from ..exceptions import ArcSerdeError, FieldTypeError, SchemaError
from ..models.record import ArcFileItem
from ..typeinfo import StructType, TypeInfo
from .decoder import decode
from .encoder import encode
from .schema import LIST_COLUMN_TYPES, CompiledLayout, compile_layout

SchemaSource = Union[str, Sequence[TypeInfo], Mapping[str, str]]


class ArcSerDe:
    """Serializer/deserializer for the archive record table format.

    Example:
        >>> serde = ArcSerDe()
        >>> serde.initialize({"columns.types": column_types})
        >>> row = serde.deserialize(item)
        >>> serde.serialize(row) == item
        True
    """

    def __init__(self, settings: Optional[CodecSettings] = None) -> None:
        """Create an uninitialized SerDe.

        Args:
            settings: Content codec settings (defaults to get_settings())
        """
        self.settings = settings if settings is not None else get_settings()
        self._layout: Optional[CompiledLayout] = None

    def initialize(self, schema: SchemaSource) -> CompiledLayout:
        """Validate the table schema and cache the compiled layout.

        Args:
            schema: Column type descriptors, a column type string, or table
                properties holding the type string under ``columns.types``

        Returns:
            The compiled layout, also kept on this instance

        Raises:
            SchemaError: If the schema does not match the archive record columns
        """
        if isinstance(schema, Mapping):
            if LIST_COLUMN_TYPES not in schema:
                raise SchemaError(f"Table properties have no {LIST_COLUMN_TYPES!r} entry")
            schema = schema[LIST_COLUMN_TYPES]

        self._layout = compile_layout(
            schema,
            content_encoding=self.settings.content_encoding,
            content_errors=self.settings.content_errors,
        )
        return self._layout

    @property
    def layout(self) -> CompiledLayout:
        if self._layout is None:
            raise ArcSerdeError("ArcSerDe.initialize() must be called first")
        return self._layout

    @property
    def row_type(self) -> StructType:
        """Struct type describing rows produced by deserialize()."""
        return self.layout.row_type

    @property
    def serialized_class(self) -> Type[ArcFileItem]:
        """Wire record class produced by serialize()."""
        return ArcFileItem

    def deserialize(self, record: Optional[ArcFileItem]) -> Optional[List[Any]]:
        """Decode a wire record to a row; None passes through."""
        return decode(record, self.layout)

    def serialize(self, row: Any, row_type: Optional[StructType] = None) -> ArcFileItem:
        """Encode a row, described by ``row_type``, to a new wire record."""
        if row_type is not None and not isinstance(row_type, StructType):
            raise FieldTypeError(
                f"Row type must be a StructType, got {type(row_type).__name__}"
            )
        return encode(row, self.layout, row_type)
