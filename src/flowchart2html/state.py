"""Per-node visibility transitions for the detail and children facets.

``set_children_expanded`` is the only place the two facets are coupled:
expanding a section reveals its own detail, collapsing it hides the detail.
Both the per-node handlers below and the bulk coordinator go through it.
"""

from __future__ import annotations

from typing import Callable

from flowchart2html.config import FLOWCHART2HTML_DEBUG
from flowchart2html.exceptions import ToggleError
from flowchart2html.tree import FlowchartTree, NodeInstance
from flowchart2html.utils.logging_config import get_logger

logger = get_logger(__name__)

Transition = Callable[[NodeInstance], bool]


def set_detail_expanded(node: NodeInstance, expanded: bool) -> bool:
    """Set the detail facet. Returns True if the flag changed."""
    if not node.has_detail or node.detail_expanded == expanded:
        return False
    node.detail_expanded = expanded
    return True


def set_children_expanded(node: NodeInstance, expanded: bool) -> bool:
    """Set the children facet of a section node and cascade to its detail.

    Non-section nodes are always expanded and are left untouched.

    Returns:
        True if either flag changed.
    """
    if not node.is_section or node.children_expanded == expanded:
        return False
    node.children_expanded = expanded
    set_detail_expanded(node, expanded)
    return True


def toggle_children(node: NodeInstance) -> bool:
    return set_children_expanded(node, not node.children_expanded)


def toggle_detail(node: NodeInstance) -> bool:
    """Flip the detail facet of a non-section node."""
    if node.is_section:
        return False
    return set_detail_expanded(node, not node.detail_expanded)


def activate(node: NodeInstance) -> bool:
    """Handle activation of a node header.

    Sections toggle their children (a section's own detail only moves through
    the coupling); other nodes toggle their detail if they have one.
    """
    if node.is_section:
        return toggle_children(node)
    if node.has_detail:
        return toggle_detail(node)
    return False


def activate_detail(node: NodeInstance) -> bool:
    """Handle activation of the detail region itself."""
    return activate(node)


def apply_transition(
    tree: FlowchartTree,
    node: str | NodeInstance,
    transition: Transition,
    *,
    debug: bool = FLOWCHART2HTML_DEBUG,
) -> bool:
    """Run a transition on a node of ``tree``, given by id or instance.

    An unknown id or a node from another tree is a programming error: it
    raises ToggleError in debug mode and is logged and ignored otherwise.
    """
    node_id = node if isinstance(node, str) else node.id
    try:
        target = resolve_node(tree, node)
        return transition(target)
    except ToggleError:
        if debug:
            raise
        logger.exception("Ignoring invalid toggle", extra={"node_id": node_id})
        return False


def resolve_node(tree: FlowchartTree, node: str | NodeInstance) -> NodeInstance:
    """Return the tree's instance for an id, or check an instance belongs to it."""
    if isinstance(node, str):
        try:
            return tree.get(node)
        except KeyError as exc:
            raise ToggleError(f"Unknown node id: {node!r}") from exc
    if node not in tree:
        raise ToggleError(f"Node {node.id!r} does not belong to this flowchart")
    return node
