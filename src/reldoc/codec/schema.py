"""Schema discovery from a representative root record."""

from collections.abc import Mapping
from typing import Any

from ..models.document import Schema
from .flatten import flatten_keys, is_collection


def discover_schema(representative: Mapping[str, Any]) -> Schema:
    """
    Classify the top-level fields of ``representative``.

    Scalar leaves (including those inside nested mappings) become dot-path
    ``scalar_keys``; fields holding collections become ``child_keys``.
    Both keep the record's field order.

    Callers must handle an empty root collection themselves; there is no
    representative to inspect in that case.
    """
    child_keys = [str(field) for field, value in representative.items() if is_collection(value)]
    return Schema(scalar_keys=flatten_keys(representative), child_keys=child_keys)
