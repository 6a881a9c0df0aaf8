"""
Relational document encoding and decoding.

The root collection becomes one block of flattened scalar fields. Every
non-empty child collection on a root record with an ``id`` becomes its own
block, tagged with the parent's id::

    clientes[1]{id,name}:
    1,Alice.

    orders(cliente_id:1)[1]{id,item}:
    10,Book.

Decoding reverses this: root blocks rebuild the root records, then each
child block is attached to the root record whose ``id`` matches.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel

from ..core.config import CodecConfig, get_config
from ..exceptions import EncodingError, RelationError
from ..models.document import (
    BLOCK_SEPARATOR,
    RelationDescriptor,
    TableBlock,
    is_valid_name,
)
from ..models.enums import RelationPolicy
from ..utils.logging import get_logger
from .blocks import BlockParser, render_block
from .flatten import as_record, build_record, is_collection
from .rows import field_value, row_values, to_text
from .schema import discover_schema

ID_FIELD = "id"


def foreign_key_name(root_name: str, suffix: str = "_id") -> str:
    """
    Derive the foreign-key name written into child block relations.

    A single trailing ``s`` is dropped before the suffix is appended:
    ``clientes`` -> ``cliente_id``, ``staff`` -> ``staff_id``.
    """
    singular = root_name[:-1] if root_name.endswith("s") else root_name
    return f"{singular}{suffix}"


def canonical_id(value: Any) -> str | None:
    """
    Identifier as stripped text, so ``1`` (encoded) and ``"1"`` (decoded) match.

    None stays None: records without an id never match a relation.
    """
    if value is None:
        return None
    return to_text(value).strip()


class DocumentEncoder:
    """
    Renders a root collection and its child collections as a document.

    Example:
        encoder = DocumentEncoder()
        text = encoder.encode(customers, "clientes")
    """

    def __init__(self, config: CodecConfig | None = None):
        self.config = config or get_config()
        self.logger = get_logger(__name__)

    def encode(
        self,
        records: Sequence[Any],
        root_name: str,
        foreign_key: str | None = None,
    ) -> str:
        """
        Encode ``records`` as a document named ``root_name``.

        Args:
            records: Root records (mappings or pydantic models)
            root_name: Name of the root block
            foreign_key: Relation key name for child blocks; derived from
                ``root_name`` when omitted

        Raises:
            EncodingError: If the input is not a list of records or a name
                cannot appear in a header
        """
        blocks = self.build_blocks(records, root_name, foreign_key)
        text = BLOCK_SEPARATOR.join(render_block(block) for block in blocks)

        self.logger.info(
            "document_encoded",
            root=root_name,
            records=len(blocks[0].rows),
            child_blocks=len(blocks) - 1,
            chars=len(text),
        )
        return text

    def build_blocks(
        self,
        records: Sequence[Any],
        root_name: str,
        foreign_key: str | None = None,
    ) -> list[TableBlock]:
        """Build the root block followed by child blocks, in discovery order."""
        if not is_collection(records):
            raise EncodingError(
                f"Root collection must be a list of records, got {type(records).__name__}"
            )
        self._check_name(root_name, "root_name")

        roots = [as_record(record) for record in records]
        if not roots:
            return [TableBlock(name=root_name)]

        schema = discover_schema(roots[0])
        blocks = [
            TableBlock(
                name=root_name,
                declared_count=len(roots),
                keys=schema.scalar_keys,
                rows=[
                    row_values(schema.scalar_keys, root, null_literal=self.config.null_literal)
                    for root in roots
                ],
            )
        ]

        if not schema.child_keys:
            return blocks

        if foreign_key is None:
            foreign_key = foreign_key_name(root_name, self.config.foreign_key_suffix)
        self._check_name(foreign_key, "foreign_key")

        for root in roots:
            if ID_FIELD not in root:
                continue
            parent_id = to_text(root[ID_FIELD], self.config.null_literal)

            for child_key in schema.child_keys:
                children = root.get(child_key)
                if not is_collection(children) or not children:
                    continue
                block = self._child_block(child_key, children, foreign_key, parent_id)
                if block is not None:
                    blocks.append(block)

        return blocks

    def _child_block(
        self,
        name: str,
        children: Sequence[Any],
        foreign_key: str,
        parent_id: str,
    ) -> TableBlock | None:
        # Only collections of records can be tables
        if not isinstance(children[0], (Mapping, BaseModel)):
            self.logger.warning(
                "child_collection_skipped",
                field=name,
                parent_id=parent_id,
                reason=f"elements are {type(children[0]).__name__}, not records",
            )
            return None

        self._check_name(name, "child_collection")
        if not parent_id or any(char in parent_id for char in ")\r\n"):
            raise EncodingError(
                f"Parent id {parent_id!r} cannot appear in a relation descriptor",
                field=ID_FIELD,
            )

        rows = [as_record(child) for child in children]
        keys = [str(key) for key in rows[0].keys()]
        return TableBlock(
            name=name,
            relation=RelationDescriptor(foreign_key=foreign_key, parent_id=parent_id),
            declared_count=len(rows),
            keys=keys,
            rows=[self._child_row(name, keys, row) for row in rows],
        )

    def _child_row(self, name: str, keys: list[str], record: Mapping[str, Any]) -> list[str]:
        # Child rows are not flattened; nested values would break field alignment
        values = []
        for key in keys:
            value = field_value(record, key)
            if isinstance(value, (Mapping, BaseModel)) or is_collection(value):
                self.logger.warning(
                    "child_value_unsupported",
                    block=name,
                    field=key,
                    type=type(value).__name__,
                )
                value = None
            values.append(to_text(value, self.config.null_literal))
        return values

    def _check_name(self, name: str, field: str) -> None:
        if not isinstance(name, str) or not is_valid_name(name):
            raise EncodingError(
                f"Block name {name!r} must match [A-Za-z0-9_]+",
                field=field,
            )


class RelationResolver:
    """
    Accumulates decoded blocks into root records with attached children.

    Root blocks append to ``roots``. A child block is attached to the first
    root record whose ``id`` equals the relation's parent id (compared as
    stripped text). Child blocks that cannot be attached are handled by
    ``policy``: SKIP records a warning and drops the rows, STRICT raises.
    """

    def __init__(self, policy: RelationPolicy = RelationPolicy.SKIP):
        self.policy = policy
        self.roots: list[dict[str, Any]] = []
        self.warnings: list[str] = []
        self.logger = get_logger(__name__)
        self._root_names: list[str] = []
        self._by_id: dict[str, dict[str, Any]] = {}

    def add(self, block: TableBlock) -> None:
        """
        Apply one decoded block.

        Raises:
            RelationError: Under STRICT policy, if the block cannot be attached
        """
        records = [build_record(block.keys, row) for row in block.rows]

        if block.is_root:
            self._add_roots(block.name, records)
            return

        if block.relation is None:
            self._unresolved(block, f"relation '({block.raw_relation})' is not 'key:parentId'")
            return

        parent = self._by_id.get(canonical_id(block.relation.parent_id))
        if parent is None:
            self._unresolved(
                block, f"no root record has id '{block.relation.parent_id}'"
            )
            return

        existing = parent.get(block.name)
        if existing is None:
            parent[block.name] = existing = []
        elif not isinstance(existing, list):
            self._unresolved(block, f"parent field '{block.name}' already holds a scalar value")
            return

        existing.extend(records)
        self.logger.debug(
            "child_block_attached",
            block=block.name,
            parent_id=block.relation.parent_id,
            rows=len(records),
        )

    def _add_roots(self, name: str, records: list[dict[str, Any]]) -> None:
        if self._root_names and name not in self._root_names:
            self.logger.warning("multiple_root_blocks", names=[*self._root_names, name])
        self._root_names.append(name)

        self.roots.extend(records)
        for record in records:
            key = canonical_id(record.get(ID_FIELD))
            if key is not None:
                self._by_id.setdefault(key, record)

    def _unresolved(self, block: TableBlock, reason: str) -> None:
        if self.policy is RelationPolicy.STRICT:
            raise RelationError(
                f"Cannot attach block '{block.name}': {reason}",
                block_name=block.name,
                relation=block.raw_relation,
                details={"line_number": block.line_number},
            )

        message = f"Dropped {len(block.rows)} row(s) of block '{block.name}': {reason}"
        self.warnings.append(message)
        self.logger.warning(
            "relation_unresolved",
            block=block.name,
            relation=block.raw_relation,
            line=block.line_number,
            reason=reason,
        )


class DocumentDecoder:
    """
    Rebuilds root records, with child collections attached, from a document.

    Example:
        decoder = DocumentDecoder()
        customers = decoder.decode(text)
    """

    def __init__(
        self,
        config: CodecConfig | None = None,
        relation_policy: RelationPolicy | None = None,
    ):
        self.config = config or get_config()
        self.relation_policy = relation_policy or self.config.relation_policy
        self.parser = BlockParser(strip_whitespace=self.config.strip_whitespace)
        self.logger = get_logger(__name__)

    def decode(self, text: str) -> list[dict[str, Any]]:
        """
        Decode ``text`` into root records.

        Raises:
            DocumentSyntaxError: If a header is malformed
            RelationError: Under STRICT policy, if a child block cannot be attached
        """
        return self.resolve(text).roots

    def resolve(self, text: str) -> RelationResolver:
        """Decode ``text`` and return the resolver, which also holds the warnings."""
        resolver = RelationResolver(self.relation_policy)
        blocks = 0
        for block in self.parser.iter_blocks(text):
            resolver.add(block)
            blocks += 1

        self.logger.info(
            "document_decoded",
            blocks=blocks,
            records=len(resolver.roots),
            dropped_blocks=len(resolver.warnings),
        )
        return resolver
