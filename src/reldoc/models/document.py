"""
Pydantic models for the pieces of a relational document.
"""

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# ============================================================================
# Grammar tokens
# ============================================================================

DELIMITER = ","
PATH_SEPARATOR = "."
TERMINATOR = "."
BLOCK_SEPARATOR = "\n\n"

NAME_PATTERN = r"[A-Za-z0-9_]+"

_NAME_RE = re.compile(rf"^{NAME_PATTERN}$")
_RELATION_RE = re.compile(r"^([^:]+):(.+)$")


def is_valid_name(name: str) -> bool:
    """Check whether ``name`` can be used as a block name in a header."""
    return bool(_NAME_RE.match(name))


# ============================================================================
# Blocks
# ============================================================================


class RelationDescriptor(BaseModel):
    """Links a child block's rows to the root record whose id is ``parent_id``."""

    model_config = ConfigDict(frozen=True)

    foreign_key: str = Field(..., description="Informational only, not used for matching")
    parent_id: str

    @classmethod
    def parse(cls, text: str) -> "RelationDescriptor | None":
        """Parse ``key:parentId`` (without parentheses); None if it does not fit."""
        match = _RELATION_RE.match(text)
        if not match:
            return None
        return cls(foreign_key=match.group(1).strip(), parent_id=match.group(2).strip())

    def __str__(self) -> str:
        return f"{self.foreign_key}:{self.parent_id}"


class TableBlock(BaseModel):
    """One named table within a document, root or child."""

    name: str
    relation: RelationDescriptor | None = None
    raw_relation: str | None = Field(
        default=None, description="Text between the parentheses, kept when it fails to parse"
    )
    declared_count: int = Field(default=0, ge=0, description="Advisory row count from the header")
    keys: list[str] = Field(default_factory=list)
    rows: list[list[str]] = Field(default_factory=list)
    line_number: int | None = Field(default=None, description="Header line, for decoded blocks")

    @property
    def is_root(self) -> bool:
        return self.relation is None and self.raw_relation is None

    @property
    def header(self) -> str:
        relation = f"({self.relation})" if self.relation is not None else ""
        return f"{self.name}{relation}[{self.declared_count}]{{{DELIMITER.join(self.keys)}}}:"


class Schema(BaseModel):
    """Field classification of a representative root record."""

    scalar_keys: list[str] = Field(default_factory=list, description="Dot paths to scalar leaves")
    child_keys: list[str] = Field(default_factory=list, description="Fields holding child collections")


class TableData(BaseModel):
    """Output of the single-table decoder."""

    name: str
    records: list[dict[str, Any]] = Field(default_factory=list)
