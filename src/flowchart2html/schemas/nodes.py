"""Node description models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class NodeType(str, Enum):
    """Enumeration of flowchart node kinds."""

    DECISION = "decision"
    ACTION = "action"
    WARNING = "warning"
    INFO = "info"
    SECTION = "section"


class ChildMode(str, Enum):
    """Layout mode for a node's children."""

    SEQUENTIAL = "sequential"
    CHOICE = "choice"


class NodeSpec(BaseModel):
    """A declarative flowchart node as supplied by the data file.

    Attributes:
        id: Stable handle for the node, expected to be unique within the tree.
        type: The node kind.
        label: Text shown in the node header.
        detail: Optional free text revealed on demand.
        child_mode: How the children are laid out (``childMode`` in JSON).
        children: Ordered child nodes.
    """

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    id: str
    type: NodeType
    label: str
    detail: str | None = None
    child_mode: ChildMode = Field(default=ChildMode.SEQUENTIAL, alias="childMode")
    children: list["NodeSpec"] = Field(default_factory=list)

    @field_validator("id", "label")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject empty ids and labels."""
        if not v.strip():
            err = "must not be empty"
            raise ValueError(err)
        return v

    @field_validator("detail")
    @classmethod
    def normalize_detail(cls, v: str | None) -> str | None:
        """Treat an empty detail string as no detail."""
        if v is None or not v.strip():
            return None
        return v

    @field_validator("child_mode", mode="before")
    @classmethod
    def default_child_mode(cls, v: object) -> object:
        """Fall back to sequential when the mode is null."""
        return ChildMode.SEQUENTIAL if v is None else v

    @field_validator("children", mode="before")
    @classmethod
    def normalize_children(cls, v: object) -> object:
        """Treat ``null`` children as an empty list."""
        return [] if v is None else v
