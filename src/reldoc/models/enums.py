"""Configuration enums for type-safe settings.

This module provides enum types for the configuration choices in reldoc,
enabling IDE autocomplete, preventing typos, and improving type safety.
"""

from enum import Enum


class RelationPolicy(str, Enum):
    """What the decoder does with a child block it cannot attach.

    Attributes:
        SKIP: Drop the block's rows, log a warning and keep decoding
        STRICT: Abort the decode with a RelationError
    """
    SKIP = "skip"
    STRICT = "strict"

    def __str__(self) -> str:
        """Return the enum value as a string for serialization."""
        return self.value


class LogLevel(str, Enum):
    """Standard logging levels.

    Attributes:
        DEBUG: Detailed diagnostic information
        INFO: General informational messages
        WARNING: Warning messages for potentially problematic situations
        ERROR: Error messages for serious problems
        CRITICAL: Critical messages for severe errors
    """
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    def __str__(self) -> str:
        """Return the enum value as a string for serialization."""
        return self.value


class ParserState(str, Enum):
    """States of the document tokenizer."""
    SEEK_BLOCK_START = "seek_block_start"
    READ_HEADER = "read_header"
    READ_ROWS = "read_rows"


# Export all enums
__all__ = [
    "RelationPolicy",
    "LogLevel",
    "ParserState",
]
