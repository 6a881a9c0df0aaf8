"""Exception classes carrying structured context for logs and callers"""

from typing import Any


class ReldocError(Exception):
    """Base exception with context and metadata"""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        recoverable: bool = False,
        user_message: str | None = None,
    ):
        """
        Initialize exception with context.

        Args:
            message: Technical error message for logs
            details: Additional context (dict for structured logging)
            recoverable: Whether the caller can fix the input and retry
            user_message: User-friendly error message
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.recoverable = recoverable
        self.user_message = user_message or message

    def __str__(self) -> str:
        parts = [self.message]

        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            parts.append(f"({details_str})")

        if self.recoverable:
            parts.append("[recoverable]")

        return " ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging"""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
            "recoverable": self.recoverable,
            "user_message": self.user_message,
        }


class DocumentSyntaxError(ReldocError):
    """Text where a block header is required does not match the grammar"""

    def __init__(self, message: str, line_number: int, line: str):
        super().__init__(
            message=message,
            details={"line_number": line_number, "line": line},
            recoverable=True,
            user_message=f"Invalid document format at line {line_number}.",
        )
        self.line_number = line_number
        self.line = line


class RelationError(ReldocError):
    """A child block could not be attached to a parent record"""

    def __init__(
        self,
        message: str,
        block_name: str,
        relation: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        details = details or {}
        details.update({"block": block_name, "relation": relation})

        super().__init__(
            message=message,
            details=details,
            recoverable=True,
            user_message=f"Block '{block_name}' does not reference a known parent record.",
        )
        self.block_name = block_name
        self.relation = relation


class EncodingError(ReldocError):
    """Input records cannot be rendered as a document"""

    def __init__(self, message: str, field: str | None = None, details: dict[str, Any] | None = None):
        details = details or {}
        if field is not None:
            details["field"] = field

        super().__init__(
            message=message,
            details=details,
            recoverable=True,
            user_message=f"Failed to encode data: {message}",
        )
        self.field = field


class ConfigurationError(ReldocError):
    """Configuration validation errors"""

    def __init__(self, message: str, field: str | None = None, value: Any = None):
        details = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = value

        super().__init__(
            message=message,
            details=details,
            recoverable=False,  # Config errors require fix
            user_message=f"Configuration error: {message}",
        )
        self.field = field
        self.value = value
