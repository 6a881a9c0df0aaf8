"""
Public codec functions.

Each function returns a Result instead of raising: codec errors become
``Result.err`` with a user-facing message, and rows dropped by a
best-effort decode are listed in ``Result.warnings``.
"""

from collections.abc import Sequence
from typing import Any

from .codec.document import DocumentDecoder, DocumentEncoder
from .codec.table import TableCodec
from .core.config import CodecConfig
from .exceptions import ReldocError
from .models.document import TableData
from .models.enums import RelationPolicy
from .models.result import Result
from .utils.logging import get_logger

logger = get_logger(__name__)


def encode_document(
    records: Sequence[Any],
    root_name: str,
    foreign_key: str | None = None,
    config: CodecConfig | None = None,
) -> Result[str]:
    """
    Encode root records and their child collections as a document.

    Args:
        records: Root records; each child collection field becomes its own block
        root_name: Name of the root block (e.g. ``"clientes"``)
        foreign_key: Relation key name for child blocks; defaults to the
            singular root name plus ``_id`` (``"cliente_id"``)
        config: Codec settings; the global configuration when omitted

    Returns:
        Result holding the document text
    """
    try:
        text = DocumentEncoder(config).encode(records, root_name, foreign_key)
    except ReldocError as e:
        logger.warning("encode_failed", **e.to_dict())
        return Result.from_error(e)
    return Result.ok(text)


def decode_document(
    text: str,
    config: CodecConfig | None = None,
    relation_policy: RelationPolicy | None = None,
) -> Result[list[dict[str, Any]]]:
    """
    Decode a document into root records with child collections attached.

    All leaf values come back as text. Blank input decodes to an empty list.

    Args:
        text: Document text
        config: Codec settings; the global configuration when omitted
        relation_policy: Overrides ``config.relation_policy`` for this call

    Returns:
        Result holding the root records; warnings list any dropped child blocks
    """
    if not isinstance(text, str):
        return Result.err(f"Document must be text, got {type(text).__name__}")
    try:
        resolver = DocumentDecoder(config, relation_policy).resolve(text)
    except ReldocError as e:
        logger.warning("decode_failed", **e.to_dict())
        return Result.from_error(e)
    return Result.ok(resolver.roots, warnings=resolver.warnings)


def encode_table(
    records: Sequence[Any],
    name: str | None = None,
    config: CodecConfig | None = None,
) -> Result[str]:
    """Encode one collection as a single table, ignoring child collections."""
    try:
        text = TableCodec(config).encode(records, name)
    except ReldocError as e:
        logger.warning("encode_failed", **e.to_dict())
        return Result.from_error(e)
    return Result.ok(text)


def decode_table(text: str, config: CodecConfig | None = None) -> Result[TableData]:
    """Decode the first block of ``text`` as a single table."""
    if not isinstance(text, str):
        return Result.err(f"Table must be text, got {type(text).__name__}")
    try:
        table, warnings = TableCodec(config).decode(text)
    except ReldocError as e:
        logger.warning("decode_failed", **e.to_dict())
        return Result.from_error(e)
    return Result.ok(table, warnings=warnings)
