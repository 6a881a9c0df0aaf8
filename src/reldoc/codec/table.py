"""
Single-table codec.

Encodes one collection as a lone root block, without relations. Fields
holding collections are skipped. Shares the row codec and header grammar
with the document codec.
"""

from collections.abc import Sequence
from typing import Any

from ..core.config import CodecConfig, get_config
from ..exceptions import DocumentSyntaxError, EncodingError
from ..models.document import TableBlock, TableData, is_valid_name
from ..utils.logging import get_logger
from .blocks import BlockParser, render_block
from .flatten import as_record, build_record, flatten_keys, is_collection
from .rows import row_values


class TableCodec:
    """Encode/decode a single flat or nested-scalar table."""

    def __init__(self, config: CodecConfig | None = None):
        self.config = config or get_config()
        self.parser = BlockParser(strip_whitespace=self.config.strip_whitespace)
        self.logger = get_logger(__name__)

    def encode(self, records: Sequence[Any], name: str | None = None) -> str:
        """
        Raises:
            EncodingError: If ``records`` is not a list of records or
                ``name`` cannot appear in a header
        """
        name = name or self.config.default_root_name
        if not is_valid_name(name):
            raise EncodingError(f"Table name {name!r} must match [A-Za-z0-9_]+", field="name")
        if not is_collection(records):
            raise EncodingError(
                f"Table data must be a list of records, got {type(records).__name__}"
            )

        rows = [as_record(record) for record in records]
        if not rows:
            self.logger.warning("empty_table_encoded", name=name)
            return render_block(TableBlock(name=name))

        keys = flatten_keys(rows[0])
        block = TableBlock(
            name=name,
            declared_count=len(rows),
            keys=keys,
            rows=[row_values(keys, row, null_literal=self.config.null_literal) for row in rows],
        )
        return render_block(block)

    def decode(self, text: str) -> tuple[TableData, list[str]]:
        """
        Decode the first block of ``text`` as a table.

        Returns:
            Tuple of (table, warnings); extra blocks are reported, not decoded

        Raises:
            DocumentSyntaxError: If there is no header, or the first block
                carries a relation
        """
        blocks = self.parser.parse(text)
        if not blocks:
            raise DocumentSyntaxError("Expected a table header", line_number=1, line="")

        table = blocks[0]
        if not table.is_root:
            raise DocumentSyntaxError(
                f"Block '{table.name}' carries a relation; expected a plain table",
                line_number=table.line_number or 1,
                line=table.header,
            )

        warnings = []
        if len(blocks) > 1:
            warnings.append(f"Ignored {len(blocks) - 1} block(s) after table '{table.name}'")

        data = TableData(
            name=table.name,
            records=[build_record(table.keys, row) for row in table.rows],
        )
        return data, warnings
