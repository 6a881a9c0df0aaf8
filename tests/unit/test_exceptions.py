"""Unit tests for exception classes"""

from reldoc.exceptions import (
    ConfigurationError,
    DocumentSyntaxError,
    EncodingError,
    RelationError,
    ReldocError,
)


class TestReldocError:
    """Test base ReldocError class"""

    def test_basic_initialization(self):
        error = ReldocError("Test error")

        assert error.message == "Test error"
        assert error.details == {}
        assert error.recoverable is False
        assert error.user_message == "Test error"

    def test_str_representation_basic(self):
        assert str(ReldocError("Test error")) == "Test error"

    def test_str_representation_with_details(self):
        error = ReldocError("Test error", details={"block": "orders"}, recoverable=True)

        assert str(error) == "Test error (block=orders) [recoverable]"

    def test_to_dict(self):
        error = ReldocError("Technical", details={"k": 1}, user_message="Friendly")

        assert error.to_dict() == {
            "error_type": "ReldocError",
            "message": "Technical",
            "details": {"k": 1},
            "recoverable": False,
            "user_message": "Friendly",
        }


class TestSubclasses:
    """Test specialised errors"""

    def test_document_syntax_error(self):
        error = DocumentSyntaxError("Expected a block header", line_number=2, line="junk")

        assert isinstance(error, ReldocError)
        assert error.line_number == 2
        assert error.details == {"line_number": 2, "line": "junk"}
        assert error.user_message == "Invalid document format at line 2."

    def test_relation_error(self):
        error = RelationError("Cannot attach", block_name="orders", relation="x:1")

        assert error.details == {"block": "orders", "relation": "x:1"}
        assert "orders" in error.user_message

    def test_encoding_error_field(self):
        error = EncodingError("bad name", field="root_name")

        assert error.field == "root_name"
        assert error.details == {"field": "root_name"}
        assert error.user_message == "Failed to encode data: bad name"

    def test_configuration_error(self):
        error = ConfigurationError("Invalid suffix", field="foreign_key_suffix", value=".")

        assert error.recoverable is False
        assert error.details == {"field": "foreign_key_suffix", "value": "."}
