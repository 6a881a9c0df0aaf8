"""
Data models for reldoc.
"""

from .document import (
    RelationDescriptor,
    Schema,
    TableBlock,
    TableData,
)
from .enums import LogLevel, ParserState, RelationPolicy
from .result import Result

__all__ = [
    "RelationDescriptor",
    "Schema",
    "TableBlock",
    "TableData",
    "LogLevel",
    "ParserState",
    "RelationPolicy",
    "Result",
]
