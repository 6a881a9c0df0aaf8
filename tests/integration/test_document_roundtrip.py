"""
Integration tests for the public codec functions.

Tests cover:
- Round-trips for flat, nested-scalar and relational data
- Idempotence after the first round-trip
- Failure and warning reporting through Result
- The single-table variants
"""

import pytest

from reldoc import (
    CodecConfig,
    RelationPolicy,
    decode_document,
    decode_table,
    encode_document,
    encode_table,
)


def as_text(value):
    """Expected decode output: every leaf rendered as document text."""
    if isinstance(value, dict):
        return {k: as_text(v) for k, v in value.items()}
    if isinstance(value, list):
        return [as_text(v) for v in value]
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@pytest.mark.integration
class TestDocumentRoundTrip:
    """Round-trip properties of encode_document/decode_document."""

    def test_flat_records(self):
        records = [
            {"id": 1, "name": "Alice", "age": 30, "active": True},
            {"id": 2, "name": "Bob", "age": 25, "active": False},
            {"id": 3, "name": "Carol", "age": None, "active": True},
        ]

        decoded = decode_document(encode_document(records, "r").unwrap()).unwrap()

        assert decoded == as_text(records)

    @pytest.mark.parametrize("separator", ["\r", "\x0c", "\x1d", "\x85", "\u2028"])
    def test_values_with_unicode_line_breaks(self, separator):
        records = [{"id": 1, "note": f"a{separator}b"}, {"id": 2, "note": "c"}]

        decoded = decode_document(encode_document(records, "r").unwrap()).unwrap()

        assert decoded == as_text(records)

    def test_child_values_with_nested_records_keep_alignment(self):
        records = [{"id": 1, "orders": [{"id": 10, "meta": {"a": 1, "b": 2}, "item": "Book"}]}]

        decoded = decode_document(encode_document(records, "r").unwrap()).unwrap()

        assert decoded == [{"id": "1", "orders": [{"id": "10", "meta": "null", "item": "Book"}]}]

    def test_parent_id_with_carriage_return_is_rejected(self):
        result = encode_document([{"id": "a\rb", "orders": [{"id": 10}]}], "r")

        assert not result.success
        assert result.error_details["details"]["field"] == "id"

    def test_nested_scalars(self):
        records = [{"id": 1, "name": "Alice", "address": {"city": "NYC"}}]

        text = encode_document(records, "r").unwrap()

        assert text == "r[1]{id,name,address.city}:\n1,Alice,NYC."
        assert decode_document(text).unwrap() == [
            {"id": "1", "name": "Alice", "address": {"city": "NYC"}}
        ]

    def test_relational(self):
        records = [{"id": 1, "name": "Alice", "orders": [{"id": 10, "item": "Book"}]}]

        text = encode_document(records, "clientes").unwrap()

        assert text == (
            "clientes[1]{id,name}:\n"
            "1,Alice.\n"
            "\n"
            "orders(cliente_id:1)[1]{id,item}:\n"
            "10,Book."
        )
        assert decode_document(text).unwrap() == [
            {"id": "1", "name": "Alice", "orders": [{"id": "10", "item": "Book"}]}
        ]

    def test_several_children_per_parent(self, customers):
        decoded = decode_document(encode_document(customers, "clientes").unwrap()).unwrap()

        expected = as_text(customers)
        # Empty child collections are not encoded, so they do not come back
        del expected[1]["orders"]
        assert decoded == expected

    def test_empty_collection(self):
        text = encode_document([], "r").unwrap()

        assert text == "r[0]{}:"
        assert decode_document(text).unwrap() == []

    def test_idempotent_after_first_round_trip(self, customers):
        once = decode_document(encode_document(customers, "clientes").unwrap()).unwrap()
        twice = decode_document(encode_document(once, "clientes").unwrap()).unwrap()

        assert twice == once

    def test_explicit_foreign_key(self):
        records = [{"id": "u1", "roles": [{"name": "admin"}]}]

        text = encode_document(records, "staff", foreign_key="member_id").unwrap()

        assert "roles(member_id:u1)[1]{name}:" in text
        assert decode_document(text).unwrap() == records

    def test_config_suffix(self):
        config = CodecConfig(foreign_key_suffix="_ref")

        text = encode_document([{"id": 1, "items": [{"n": 1}]}], "carts", config=config).unwrap()

        assert "items(cart_ref:1)[1]{n}:" in text


@pytest.mark.integration
class TestFailureReporting:
    """Errors and warnings surface as Result values."""

    def test_short_row(self):
        result = decode_document("r[1]{id,name,email}:\n1,Alice.")

        assert result.unwrap() == [{"id": "1", "name": "Alice", "email": None}]

    def test_orphan_child_is_dropped_with_warning(self):
        result = decode_document("r[1]{id}:\n1.\n\norders(r_id:2)[1]{id}:\n10.")

        assert result.success
        assert result.data == [{"id": "1"}]
        assert len(result.warnings) == 1

    def test_orphan_child_fails_in_strict_mode(self):
        result = decode_document(
            "r[1]{id}:\n1.\n\norders(r_id:2)[1]{id}:\n10.",
            relation_policy=RelationPolicy.STRICT,
        )

        assert not result
        assert result.error == "Block 'orders' does not reference a known parent record."
        assert result.error_details["error_type"] == "RelationError"

    def test_malformed_document(self):
        result = decode_document("this is { not a document")

        assert not result
        assert result.error == "Invalid document format at line 1."
        assert result.unwrap_or([]) == []

    def test_encode_rejects_non_records(self):
        result = encode_document(["a", "b"], "r")

        assert not result
        assert result.error.startswith("Failed to encode data")

    def test_encode_rejects_invalid_root_name(self):
        assert not encode_document([{"id": 1}], "two words")


@pytest.mark.integration
class TestTableVariants:
    """encode_table/decode_table share the row codec."""

    def test_round_trip(self):
        records = [{"id": 1, "user": {"name": "Alice"}}, {"id": 2, "user": {"name": "Bob"}}]

        table = decode_table(encode_table(records, "users").unwrap()).unwrap()

        assert table.name == "users"
        assert table.records == as_text(records)

    def test_table_output_is_a_valid_document(self, customers):
        text = encode_table(customers, "clientes").unwrap()

        assert decode_document(text).unwrap() == decode_table(text).unwrap().records

    def test_decode_table_failure(self):
        result = decode_table("")

        assert not result
        assert result.error_details["error_type"] == "DocumentSyntaxError"

    def test_decode_table_reports_extra_blocks(self, customers_document):
        result = decode_table(customers_document)

        assert result.success
        assert result.warnings == ["Ignored 3 block(s) after table 'clientes'"]


@pytest.mark.integration
class TestNonTextInput:
    """Decoders reject non-text input without raising."""

    @pytest.mark.parametrize("value", [None, 42, [{"id": 1}]])
    def test_decode_document(self, value):
        result = decode_document(value)

        assert not result
        assert result.error.startswith("Document must be text")

    def test_decode_table(self):
        assert not decode_table(None)
