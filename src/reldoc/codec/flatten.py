"""
Key-path flattening.

Converts nested scalar groups to ordered dot-separated key paths and back.
Collection-valued fields are never flattened; they belong to child blocks.

Example:
    >>> flatten_keys({"id": 1, "address": {"city": "NYC"}, "orders": []})
    ['id', 'address.city']
    >>> build_record(["id", "address.city"], ["1", "NYC"])
    {'id': '1', 'address': {'city': 'NYC'}}
"""

from collections.abc import Mapping, MutableMapping, Sequence
from typing import Any

from pydantic import BaseModel

from ..exceptions import EncodingError
from ..models.document import PATH_SEPARATOR


def is_collection(value: Any) -> bool:
    """Lists and tuples are collections; strings are not."""
    return isinstance(value, (list, tuple))


def as_record(value: Any) -> Mapping[str, Any]:
    """
    Return ``value`` as a mapping, dumping pydantic models.

    Raises:
        EncodingError: If ``value`` is neither a mapping nor a model
    """
    if isinstance(value, BaseModel):
        return value.model_dump()
    if isinstance(value, Mapping):
        return value
    raise EncodingError(
        f"Expected a record (mapping), got {type(value).__name__}",
        details={"value": repr(value)[:80]},
    )


def flatten_keys(record: Mapping[str, Any], prefix: str = "") -> list[str]:
    """
    List the dot paths of every scalar leaf in ``record``, depth first.

    Fields holding collections are skipped entirely. Null counts as a
    scalar. An empty nested mapping contributes no paths.
    """
    keys: list[str] = []
    for field, value in record.items():
        if is_collection(value):
            continue

        path = f"{prefix}{PATH_SEPARATOR}{field}" if prefix else str(field)
        if isinstance(value, BaseModel):
            value = value.model_dump()

        if isinstance(value, Mapping):
            keys.extend(flatten_keys(value, path))
        else:
            keys.append(path)
    return keys


def get_value(record: Mapping[str, Any], path: str) -> Any:
    """Walk ``path``; None when any segment is missing. Never raises."""
    current: Any = record
    for segment in path.split(PATH_SEPARATOR):
        if isinstance(current, BaseModel):
            current = current.model_dump()
        if not isinstance(current, Mapping) or segment not in current:
            return None
        current = current[segment]
    return current


def set_value(record: MutableMapping[str, Any], path: str, value: Any) -> None:
    """
    Assign ``value`` at ``path``, creating intermediate mappings.

    An intermediate segment holding a non-mapping value is overwritten
    with a new mapping. Mutates ``record`` in place.
    """
    *parents, leaf = path.split(PATH_SEPARATOR)
    current = record
    for segment in parents:
        if not isinstance(current.get(segment), MutableMapping):
            current[segment] = {}
        current = current[segment]
    current[leaf] = value


def build_record(keys: Sequence[str], values: Sequence[Any]) -> dict[str, Any]:
    """
    Build a fresh nested record from position-aligned keys and values.

    Keys past the end of ``values`` are set to None; values past the end
    of ``keys`` are ignored.
    """
    record: dict[str, Any] = {}
    for index, key in enumerate(keys):
        value = values[index] if index < len(values) else None
        set_value(record, key, value)
    return record
