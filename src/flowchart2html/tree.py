"""Build the stateful node tree from a flowchart document."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Iterator

from pydantic import ValidationError

from flowchart2html.config import FLOWCHART2HTML_VALIDATE_IDS
from flowchart2html.exceptions import DuplicateIdError, MalformedTreeError
from flowchart2html.schemas import ChildMode, FlowchartDocument, NodeSpec, NodeType


@dataclass(eq=False)
class NodeInstance:
    """A rendered node: its spec, its position, and its visibility flags.

    Attributes:
        spec: The immutable node description.
        depth: 0 for the root, parent depth + 1 otherwise.
        sibling_index: 0-based position among its siblings.
        position_label: Dotted, zero-padded path such as ``"01.03"``.
        detail_expanded: Whether the detail text is shown.
        children_expanded: Whether the children subtree is shown.
        children: Child instances in spec order.
        parent: The parent instance, None for the root.
    """

    spec: NodeSpec
    depth: int
    sibling_index: int
    position_label: str
    detail_expanded: bool = False
    children_expanded: bool = True
    children: list["NodeInstance"] = field(default_factory=list)
    parent: "NodeInstance | None" = field(default=None, repr=False)

    @property
    def id(self) -> str:
        return self.spec.id

    @property
    def has_detail(self) -> bool:
        return self.spec.detail is not None

    @property
    def has_children(self) -> bool:
        return bool(self.children)

    @property
    def is_section(self) -> bool:
        """True for a section-type node with at least one child."""
        return self.spec.type is NodeType.SECTION and self.has_children

    @property
    def child_mode(self) -> ChildMode:
        return self.spec.child_mode


@dataclass(frozen=True)
class NodeState:
    """Presentation-independent view of one node's state."""

    depth: int
    position_label: str
    children_expanded: bool
    detail_expanded: bool


def format_position_label(parent_label: str, sibling_index: int) -> str:
    """Append a 1-based, two-digit segment to the parent's label."""
    segment = f"{sibling_index + 1:02d}"
    return f"{parent_label}.{segment}" if parent_label else segment


def build_tree(
    spec: NodeSpec,
    *,
    depth: int = 0,
    sibling_index: int = 0,
    parent: NodeInstance | None = None,
) -> NodeInstance:
    """Materialize a NodeSpec subtree depth-first, preserving child order."""
    if parent is None:
        position_label = ""
    else:
        position_label = format_position_label(parent.position_label, sibling_index)

    node = NodeInstance(
        spec=spec,
        depth=depth,
        sibling_index=sibling_index,
        position_label=position_label,
        detail_expanded=False,
        children_expanded=not (
            spec.type is NodeType.SECTION and bool(spec.children) and depth >= 1
        ),
        parent=parent,
    )
    node.children = [
        build_tree(child, depth=depth + 1, sibling_index=index, parent=node)
        for index, child in enumerate(spec.children)
    ]
    return node


def parse_document(payload: Any) -> NodeSpec:
    """Validate a raw payload and return its root NodeSpec.

    Nesting is limited by pydantic's recursion guard: trees deeper than
    roughly 250 levels are rejected as malformed.

    Raises:
        MalformedTreeError: If the payload has no usable root or a node lacks
            a required field.
    """
    if not isinstance(payload, dict):
        raise MalformedTreeError(
            f"Flowchart data must be an object, got {type(payload).__name__}"
        )
    if payload.get("root") is None:
        raise MalformedTreeError("Flowchart data has no root node")
    try:
        document = FlowchartDocument.model_validate(payload)
    except ValidationError as exc:
        raise MalformedTreeError(f"Invalid flowchart node: {exc}") from exc
    return document.root


def find_duplicate_ids(spec: NodeSpec) -> list[str]:
    """Return ids used by more than one node, in first-seen order."""
    counts: Counter[str] = Counter()

    def _walk(node: NodeSpec) -> None:
        counts[node.id] += 1
        for child in node.children:
            _walk(child)

    _walk(spec)
    return [node_id for node_id, count in counts.items() if count > 1]


class FlowchartTree:
    """The instantiated node tree with an id index.

    One instance exists per mounted flowchart and lives as long as the page.
    """

    def __init__(self, root: NodeInstance) -> None:
        self.root = root
        self._by_id: dict[str, NodeInstance] = {}
        self._members: set[NodeInstance] = set()
        for node in self:
            self._members.add(node)
            # With id validation off, the first node keeps the id.
            self._by_id.setdefault(node.id, node)

    @classmethod
    def from_spec(
        cls, spec: NodeSpec, *, validate_ids: bool = FLOWCHART2HTML_VALIDATE_IDS
    ) -> "FlowchartTree":
        if validate_ids:
            duplicates = find_duplicate_ids(spec)
            if duplicates:
                raise DuplicateIdError(f"Duplicate node ids: {', '.join(duplicates)}")
        return cls(build_tree(spec))

    @classmethod
    def from_document(
        cls, payload: Any, *, validate_ids: bool = FLOWCHART2HTML_VALIDATE_IDS
    ) -> "FlowchartTree":
        """Parse a raw ``{"root": ...}`` payload and build the tree."""
        return cls.from_spec(parse_document(payload), validate_ids=validate_ids)

    def __iter__(self) -> Iterator[NodeInstance]:
        stack = [self.root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def __len__(self) -> int:
        return len(self._members)

    def __contains__(self, node: object) -> bool:
        return isinstance(node, NodeInstance) and node in self._members

    def get(self, node_id: str) -> NodeInstance:
        try:
            return self._by_id[node_id]
        except KeyError:
            raise KeyError(f"Unknown node id: {node_id!r}") from None

    def sections(self) -> list[NodeInstance]:
        return [node for node in self if node.is_section]

    def nodes_with_detail(self) -> list[NodeInstance]:
        return [node for node in self if node.has_detail]

    def state(self, node_id: str) -> NodeState:
        node = self.get(node_id)
        return NodeState(
            depth=node.depth,
            position_label=node.position_label,
            children_expanded=node.children_expanded,
            detail_expanded=node.detail_expanded,
        )

    def snapshot(self) -> dict[str, NodeState]:
        """Return the state of every node keyed by id."""
        return {node_id: self.state(node_id) for node_id in self._by_id}
