"""
Table-row codec.

A row is one line of delimiter-joined text. Every row ends with a period;
rows are separated by newlines and the last row has no trailing newline::

    1,Alice.
    2,Bob.
"""

from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any

from ..models.document import DELIMITER, TERMINATOR
from .flatten import get_value


def to_text(value: Any, null_literal: str = "null") -> str:
    """Render a leaf value as document text."""
    if value is None:
        return null_literal
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def field_value(record: Mapping[str, Any], key: str) -> Any:
    """Direct top-level lookup, used for child blocks."""
    return record.get(key)


def row_values(
    keys: Sequence[str],
    record: Mapping[str, Any],
    lookup: Callable[[Mapping[str, Any], str], Any] = get_value,
    null_literal: str = "null",
) -> list[str]:
    """
    Fetch and render one text value per key, in key order.

    ``lookup`` fetches each value: ``get_value`` follows dot paths (root
    blocks), ``field_value`` reads top-level fields (child blocks).
    """
    return [to_text(lookup(record, key), null_literal) for key in keys]


def encode_row(
    keys: Sequence[str],
    record: Mapping[str, Any],
    lookup: Callable[[Mapping[str, Any], str], Any] = get_value,
    null_literal: str = "null",
) -> str:
    """Render one record as a delimited line. Values are not escaped."""
    return DELIMITER.join(row_values(keys, record, lookup, null_literal))


def encode_rows(lines: Iterable[str]) -> str:
    """Terminate every line with a period and join them with newlines."""
    return "\n".join(f"{line}{TERMINATOR}" for line in lines)


def split_row(line: str, strip_whitespace: bool = True) -> list[str]:
    """Split one row line into raw field values, dropping the terminator."""
    if strip_whitespace:
        line = line.strip()
    if line.endswith(TERMINATOR):
        line = line[: -len(TERMINATOR)]

    values = line.split(DELIMITER)
    if strip_whitespace:
        values = [value.strip() for value in values]
    return values


def decode_rows(text: str, strip_whitespace: bool = True) -> list[list[str]]:
    """
    Parse a block body into rows of raw text fields.

    Blank lines are dropped. Alignment to keys happens later, so a row
    may hold fewer (or more) values than the block declares keys.
    """
    return [
        split_row(line, strip_whitespace)
        for line in text.split("\n")
        if line.strip()
    ]
