"""
reldoc - Relational Document Notation
Compact table-block codec for nested records and their child collections
"""

from .api import decode_document, decode_table, encode_document, encode_table
from .codec import DocumentDecoder, DocumentEncoder, TableCodec
from .core.config import CodecConfig
from .models.document import TableBlock, TableData
from .models.enums import RelationPolicy
from .models.result import Result

__version__ = "0.1.0"

__all__ = [
    "encode_document",
    "decode_document",
    "encode_table",
    "decode_table",
    "DocumentEncoder",
    "DocumentDecoder",
    "TableCodec",
    "CodecConfig",
    "TableBlock",
    "TableData",
    "RelationPolicy",
    "Result",
]
