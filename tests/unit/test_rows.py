"""
Unit tests for the table-row codec.

Tests cover:
- Text conversion of leaf values
- Row and block-of-rows encoding
- Row decoding (terminators, blank lines, whitespace)
"""

import pytest

from reldoc.codec.rows import (
    decode_rows,
    encode_row,
    encode_rows,
    field_value,
    row_values,
    split_row,
    to_text,
)


class TestToText:
    """Tests for to_text()."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (None, "null"),
            (True, "true"),
            (False, "false"),
            (42, "42"),
            (1.5, "1.5"),
            ("Alice", "Alice"),
        ],
    )
    def test_conversion(self, value, expected):
        assert to_text(value) == expected

    def test_custom_null_literal(self):
        assert to_text(None, null_literal="~") == "~"


class TestEncodeRow:
    """Tests for row encoding."""

    def test_follows_key_order(self):
        record = {"name": "Alice", "id": 1}

        assert encode_row(["id", "name"], record) == "1,Alice"

    def test_nested_paths(self):
        record = {"id": 1, "address": {"city": "NYC"}}

        assert encode_row(["id", "address.city"], record) == "1,NYC"

    def test_missing_values_render_as_null(self):
        assert encode_row(["id", "name", "address.city"], {"id": 2}) == "2,null,null"

    def test_field_lookup_does_not_follow_paths(self):
        record = {"a.b": "flat", "a": {"b": "nested"}}

        assert row_values(["a.b"], record, field_value) == ["flat"]
        assert row_values(["a.b"], record) == ["nested"]


class TestEncodeRows:
    """Tests for encode_rows()."""

    def test_every_row_is_terminated(self):
        assert encode_rows(["1,Alice", "2,Bob"]) == "1,Alice.\n2,Bob."

    def test_single_row(self):
        assert encode_rows(["1,Alice"]) == "1,Alice."

    def test_no_rows(self):
        assert encode_rows([]) == ""


class TestDecodeRows:
    """Tests for row decoding."""

    def test_splits_lines_and_fields(self):
        assert decode_rows("1,Alice.\n2,Bob.") == [["1", "Alice"], ["2", "Bob"]]

    def test_drops_blank_lines(self):
        assert decode_rows("\n1,Alice.\n\n   \n2,Bob.\n") == [["1", "Alice"], ["2", "Bob"]]

    def test_terminator_is_optional(self):
        assert decode_rows("1,Alice") == [["1", "Alice"]]

    def test_only_one_terminator_is_stripped(self):
        assert split_row("1,etc..") == ["1", "etc."]

    def test_whitespace_is_trimmed(self):
        assert split_row("  1 , Alice .  ") == ["1", "Alice"]

    def test_whitespace_kept_when_disabled(self):
        assert split_row(" 1, Alice.", strip_whitespace=False) == [" 1", " Alice"]

    def test_empty_fields_survive(self):
        assert split_row("1,,3.") == ["1", "", "3"]
