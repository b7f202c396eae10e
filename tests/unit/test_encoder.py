"""Unit tests for encoding rows to archive records."""

from __future__ import annotations

import pytest

from arcserde import (
    BIGINT,
    INT,
    ROW_TYPE,
    STRING,
    ArcFileHeaderItem,
    ArcFileItem,
    CompiledLayout,
    FieldTypeError,
    ListType,
    StructField,
    StructType,
    compile_layout,
    decode,
    encode,
)


def _replace_column(row_type: StructType, name: str, new_type) -> StructType:
    """Copy ``row_type`` with column ``name`` declared as ``new_type``."""
    return StructType(
        tuple(StructField(f.name, new_type) if f.name == name else f for f in row_type.fields)
    )


class TestEncode:
    """Test basic encode functionality."""

    def test_sequence_row(
        self, sample_row: list, layout: CompiledLayout, sample_item: ArcFileItem
    ) -> None:
        assert encode(sample_row, layout) == sample_item

    def test_mapping_row(
        self, sample_row: list, layout: CompiledLayout, sample_item: ArcFileItem
    ) -> None:
        row = {f.name: value for f, value in zip(ROW_TYPE.fields, sample_row)}
        row["fileHeaders"] = [
            {"key": "Content-Type", "value": "text/html"},
            {"key": "Server", "value": "Apache"},
        ]
        assert encode(row, layout) == sample_item

    def test_tuple_row(
        self, sample_row: list, layout: CompiledLayout, sample_item: ArcFileItem
    ) -> None:
        row = list(sample_row)
        row[5] = [tuple(pair) for pair in row[5]]
        assert encode(tuple(row), layout) == sample_item

    def test_headers_in_order(self, sample_row: list, layout: CompiledLayout) -> None:
        item = encode(sample_row, layout)
        assert item.header_items == [
            ArcFileHeaderItem(item_key="Content-Type", item_value="text/html"),
            ArcFileHeaderItem(item_key="Server", item_value="Apache"),
        ]

    def test_null_headers_encode_empty(self, sample_row: list, layout: CompiledLayout) -> None:
        sample_row[5] = None
        assert encode(sample_row, layout).header_items == []

    def test_content_bytes(self, sample_row: list, layout: CompiledLayout) -> None:
        sample_row[6] = "naïve"
        item = encode(sample_row, layout)
        assert item.content == "naïve".encode("utf-8")
        assert isinstance(item.content, bytes)

    def test_reordered_row_type(
        self, sample_row: list, layout: CompiledLayout, sample_item: ArcFileItem
    ) -> None:
        """Fields are found by name, not by position."""
        row_type = StructType(tuple(reversed(ROW_TYPE.fields)))
        assert encode(list(reversed(sample_row)), layout, row_type) == sample_item

    def test_new_record_each_call(self, sample_row: list, layout: CompiledLayout) -> None:
        first = encode(sample_row, layout)
        second = encode(sample_row, layout)
        assert first == second
        assert first is not second
        assert first.header_items is not second.header_items

    def test_extra_row_fields_ignored(
        self, sample_row: list, layout: CompiledLayout, sample_item: ArcFileItem
    ) -> None:
        row_type = StructType(ROW_TYPE.fields + (StructField("extra", STRING),))
        assert encode(sample_row + ["ignored"], layout, row_type) == sample_item


class TestEncodeTypeErrors:
    """Test encode type mismatch handling."""

    def test_timestamp_holds_string(self, sample_row: list, layout: CompiledLayout) -> None:
        sample_row[2] = "1262304000000"
        with pytest.raises(FieldTypeError, match="Field timestamp"):
            encode(sample_row, layout)

    def test_builtin_type_error(self, sample_row: list, layout: CompiledLayout) -> None:
        sample_row[2] = "1262304000000"
        with pytest.raises(TypeError, match="timestamp"):
            encode(sample_row, layout)

    def test_timestamp_declared_string(self, sample_row: list, layout: CompiledLayout) -> None:
        row_type = _replace_column(ROW_TYPE, "timestamp", STRING)
        with pytest.raises(
            FieldTypeError, match="Field timestamp: expected bigint column, declared string"
        ):
            encode(sample_row, layout, row_type)

    def test_int_declared_bigint(self, sample_row: list, layout: CompiledLayout) -> None:
        row_type = _replace_column(ROW_TYPE, "flags", BIGINT)
        with pytest.raises(
            FieldTypeError, match="Field flags: expected int column, declared bigint"
        ):
            encode(sample_row, layout, row_type)

    def test_string_declared_int(self, sample_row: list, layout: CompiledLayout) -> None:
        row_type = _replace_column(ROW_TYPE, "mimeType", INT)
        with pytest.raises(
            FieldTypeError, match="Field mimeType: expected string column, declared int"
        ):
            encode(sample_row, layout, row_type)

    @pytest.mark.parametrize(
        "index,value,field",
        [
            (0, 42, "uri"),
            (1, None, "hostIP"),
            (4, "2048", "recordLength"),
            (4, True, "recordLength"),
            (4, 1.5, "recordLength"),
            (6, b"bytes", "content"),
            (10, None, "fileSize"),
        ],
    )
    def test_wrong_runtime_value(
        self, sample_row: list, layout: CompiledLayout, index: int, value: object, field: str
    ) -> None:
        sample_row[index] = value
        with pytest.raises(FieldTypeError, match=f"Field {field}"):
            encode(sample_row, layout)

    @pytest.mark.parametrize("value", [2**31, -(2**31) - 1])
    def test_int_out_of_range(self, sample_row: list, layout: CompiledLayout, value: int) -> None:
        sample_row[8] = value
        with pytest.raises(FieldTypeError, match="Field arcFilePos: value .* does not fit int"):
            encode(sample_row, layout)

    def test_bigint_out_of_range(self, sample_row: list, layout: CompiledLayout) -> None:
        sample_row[2] = 2**63
        with pytest.raises(FieldTypeError, match="does not fit bigint"):
            encode(sample_row, layout)

    def test_missing_field(self, sample_row: list, layout: CompiledLayout) -> None:
        row_type = StructType(tuple(f for f in ROW_TYPE.fields if f.name != "mimeType"))
        row = sample_row[:3] + sample_row[4:]
        with pytest.raises(FieldTypeError, match="Field mimeType is missing"):
            encode(row, layout, row_type)

    def test_first_field_in_column_order_reported(
        self, sample_row: list, layout: CompiledLayout
    ) -> None:
        sample_row[10] = "late"
        sample_row[1] = 1
        with pytest.raises(FieldTypeError, match="Field hostIP"):
            encode(sample_row, layout)

    def test_row_not_a_container(self, layout: CompiledLayout) -> None:
        with pytest.raises(FieldTypeError, match="mapping or sequence"):
            encode(42, layout)


class TestEncodeHeaderErrors:
    """Test fileHeaders field validation."""

    def test_headers_declared_string(self, sample_row: list, layout: CompiledLayout) -> None:
        row_type = _replace_column(ROW_TYPE, "fileHeaders", STRING)
        with pytest.raises(
            FieldTypeError, match="Field fileHeaders: expected list-of-struct column"
        ):
            encode(sample_row, layout, row_type)

    def test_headers_list_of_strings(self, sample_row: list, layout: CompiledLayout) -> None:
        row_type = _replace_column(ROW_TYPE, "fileHeaders", ListType(STRING))
        with pytest.raises(FieldTypeError, match="list elements must be key/value structs"):
            encode(sample_row, layout, row_type)

    def test_headers_struct_with_int_value(self, sample_row: list, layout: CompiledLayout) -> None:
        header = ListType(StructType.of(("key", STRING), ("value", INT)))
        row_type = _replace_column(ROW_TYPE, "fileHeaders", header)
        with pytest.raises(
            FieldTypeError, match="header member value must be string, declared int"
        ):
            encode(sample_row, layout, row_type)

    def test_headers_value_not_a_list(self, sample_row: list, layout: CompiledLayout) -> None:
        sample_row[5] = "Content-Type: text/html"
        with pytest.raises(FieldTypeError, match="Field fileHeaders: expected list-of-struct"):
            encode(sample_row, layout)

    def test_header_element_bad_value(self, sample_row: list, layout: CompiledLayout) -> None:
        sample_row[5] = [["Content-Type", "text/html"], ["Content-Length", 120]]
        with pytest.raises(FieldTypeError, match="Field fileHeaders\\[1\\]: Field value"):
            encode(sample_row, layout)

    def test_header_element_too_short(self, sample_row: list, layout: CompiledLayout) -> None:
        sample_row[5] = [["Content-Type"]]
        with pytest.raises(FieldTypeError, match="fileHeaders\\[0\\]"):
            encode(sample_row, layout)


class TestEncodeContent:
    """Test encoding of the content column."""

    def test_unencodable_text(self, sample_row: list, column_types: str) -> None:
        layout = compile_layout(column_types, content_encoding="ascii")
        sample_row[6] = "café"
        with pytest.raises(FieldTypeError, match="Field content"):
            encode(sample_row, layout)

    def test_lone_surrogate_rejected(self, sample_row: list, layout: CompiledLayout) -> None:
        sample_row[6] = "bad \udcff"
        with pytest.raises(FieldTypeError, match="Field content"):
            encode(sample_row, layout)

    def test_surrogateescape_restores_raw_bytes(
        self, sample_item: ArcFileItem, column_types: str
    ) -> None:
        layout = compile_layout(column_types, content_errors="surrogateescape")
        item = sample_item.model_copy(update={"content": b"ok\xff"})

        row = decode(item, layout)
        assert row[6] == "ok\udcff"
        assert encode(row, layout).content == b"ok\xff"

    def test_replace_still_encodes_strictly(self, sample_row: list, layout: CompiledLayout) -> None:
        assert layout.content_errors == "replace"
        sample_row[6] = "ok\udcff"
        with pytest.raises(FieldTypeError, match="Field content"):
            encode(sample_row, layout)
