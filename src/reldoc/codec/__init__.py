"""
Relational document codec: flattening, row codec, blocks, documents.
"""

from .blocks import BlockParser, render_block
from .document import (
    DocumentDecoder,
    DocumentEncoder,
    RelationResolver,
    canonical_id,
    foreign_key_name,
)
from .flatten import build_record, flatten_keys, get_value, set_value
from .rows import decode_rows, encode_row, encode_rows
from .schema import discover_schema
from .table import TableCodec

__all__ = [
    "BlockParser",
    "render_block",
    "DocumentDecoder",
    "DocumentEncoder",
    "RelationResolver",
    "canonical_id",
    "foreign_key_name",
    "build_record",
    "flatten_keys",
    "get_value",
    "set_value",
    "decode_rows",
    "encode_row",
    "encode_rows",
    "discover_schema",
    "TableCodec",
]
