"""Expand-all / collapse-all across a whole flowchart."""

from __future__ import annotations

from flowchart2html.state import set_children_expanded, set_detail_expanded
from flowchart2html.tree import FlowchartTree, NodeInstance
from flowchart2html.utils.logging_config import get_logger

logger = get_logger(__name__)

EXPAND_ALL_LABEL = "Expand All"
COLLAPSE_ALL_LABEL = "Collapse All"


class ToggleAllCoordinator:
    """Drives every node of one tree to a single bulk state.

    Each mounted flowchart owns its own coordinator, so the ``all_expanded``
    flag is never shared between flowcharts. Bulk state wins over any manual
    toggles made since the previous bulk operation.
    """

    def __init__(
        self,
        tree: FlowchartTree,
        *,
        expand_label: str = EXPAND_ALL_LABEL,
        collapse_label: str = COLLAPSE_ALL_LABEL,
    ) -> None:
        self.tree = tree
        self.all_expanded = False
        self.expand_label = expand_label
        self.collapse_label = collapse_label

    @property
    def control_label(self) -> str:
        """Text for the page control: the action the next click performs."""
        return self.collapse_label if self.all_expanded else self.expand_label

    def toggle_all(self) -> list[NodeInstance]:
        """Flip the bulk flag and return the nodes whose state changed."""
        if self.all_expanded:
            return self.collapse_all()
        return self.expand_all()

    def expand_all(self) -> list[NodeInstance]:
        changed: list[NodeInstance] = []
        for node in self.tree.sections():
            if set_children_expanded(node, True):
                changed.append(node)
        for node in self.tree.nodes_with_detail():
            if set_detail_expanded(node, True):
                changed.append(node)
        self.all_expanded = True
        logger.debug("Expanded all nodes", extra={"changed": len(changed)})
        return list(dict.fromkeys(changed))

    def collapse_all(self) -> list[NodeInstance]:
        changed: list[NodeInstance] = []
        # Details go first so no expanded detail is left inside a collapsed section.
        for node in self.tree.nodes_with_detail():
            if set_detail_expanded(node, False):
                changed.append(node)
        for node in self.tree.sections():
            if node.depth >= 1 and set_children_expanded(node, False):
                changed.append(node)
        self.all_expanded = False
        logger.debug("Collapsed all nodes", extra={"changed": len(changed)})
        return list(dict.fromkeys(changed))

