"""
Table-block encoding and the document tokenizer.

A block is a header line followed by its rows::

    orders(cliente_id:1)[2]{id,item}:
    10,Book.
    11,Pen.

Blocks are separated by a blank line. Lines are split on line feeds only (a
trailing carriage return is dropped), so other Unicode line breaks inside
values stay part of their row. The tokenizer walks the document line by line
through three states:

- ``SEEK_BLOCK_START``: skip leading blank lines.
- ``READ_HEADER``: the current line must be a header, otherwise the
  document is malformed.
- ``READ_ROWS``: collect row lines. A header line only starts a new block
  when it follows a blank line; a blank line followed by anything else is
  skipped and the block continues.
"""

import re
from collections.abc import Iterator

from ..exceptions import DocumentSyntaxError
from ..models.document import DELIMITER, NAME_PATTERN, RelationDescriptor, TableBlock
from ..models.enums import ParserState
from ..utils.logging import get_logger
from .rows import decode_rows, encode_rows

HEADER_RE = re.compile(
    rf"^(?P<name>{NAME_PATTERN})"
    r"(?:\((?P<relation>[^)]*)\))?"
    r"\[(?P<count>\d+)\]"
    r"\{(?P<keys>[^}]*)\}:"
    r"(?P<rest>.*)$"
)


def render_block(block: TableBlock) -> str:
    """Header, newline, then the terminated rows. A block without rows is just its header."""
    body = encode_rows(DELIMITER.join(row) for row in block.rows)
    return f"{block.header}\n{body}" if body else block.header


class BlockParser:
    """
    Splits document text into TableBlocks.

    Example:
        >>> parser = BlockParser()
        >>> [b.name for b in parser.iter_blocks("r[1]{id}:\\n1.")]
        ['r']
    """

    def __init__(self, strip_whitespace: bool = True):
        self.strip_whitespace = strip_whitespace
        self.logger = get_logger(__name__)

    def parse(self, text: str) -> list[TableBlock]:
        """Parse every block in ``text``. Blank input yields no blocks."""
        return list(self.iter_blocks(text))

    def iter_blocks(self, text: str) -> Iterator[TableBlock]:
        """
        Yield blocks in document order.

        Raises:
            DocumentSyntaxError: If non-blank text appears where a header
                is required
        """
        state = ParserState.SEEK_BLOCK_START
        block: TableBlock | None = None
        body: list[str] = []
        after_blank = False

        for line_number, line in enumerate(text.split("\n"), start=1):
            line = line.removesuffix("\r")
            if not line.strip():
                after_blank = True
                continue

            if state is ParserState.SEEK_BLOCK_START:
                state = ParserState.READ_HEADER
            elif state is ParserState.READ_ROWS and after_blank and self._match_header(line):
                yield self._finish(block, body)
                state = ParserState.READ_HEADER

            if state is ParserState.READ_HEADER:
                block, rest = self._read_header(line, line_number)
                body = [rest] if rest.strip() else []
                state = ParserState.READ_ROWS
            else:
                body.append(line)
            after_blank = False

        if block is not None:
            yield self._finish(block, body)

    def _match_header(self, line: str) -> re.Match[str] | None:
        return HEADER_RE.match(line.strip())

    def _read_header(self, line: str, line_number: int) -> tuple[TableBlock, str]:
        match = self._match_header(line)
        if match is None:
            raise DocumentSyntaxError(
                "Expected a block header 'name[count]{keys}:'",
                line_number=line_number,
                line=line,
            )

        raw_relation = match.group("relation")
        relation = RelationDescriptor.parse(raw_relation) if raw_relation is not None else None

        keys_text = match.group("keys")
        keys = keys_text.split(DELIMITER) if keys_text.strip() else []
        if self.strip_whitespace:
            keys = [key.strip() for key in keys]

        block = TableBlock(
            name=match.group("name"),
            relation=relation,
            raw_relation=raw_relation,
            declared_count=int(match.group("count")),
            keys=keys,
            line_number=line_number,
        )
        return block, match.group("rest")

    def _finish(self, block: TableBlock, body: list[str]) -> TableBlock:
        block.rows = decode_rows("\n".join(body), self.strip_whitespace)

        if len(block.rows) != block.declared_count:
            self.logger.debug(
                "row_count_mismatch",
                block=block.name,
                declared=block.declared_count,
                actual=len(block.rows),
            )

        self.logger.debug(
            "block_parsed",
            block=block.name,
            relation=block.raw_relation,
            keys=len(block.keys),
            rows=len(block.rows),
            line=block.line_number,
        )
        return block
