"""flowchart2html: render interactive, collapsible flowcharts from JSON."""

from flowchart2html.coordinator import ToggleAllCoordinator
from flowchart2html.exceptions import (
    DuplicateIdError,
    FetchError,
    Flowchart2htmlError,
    MalformedTreeError,
    ToggleError,
)
from flowchart2html.mount import FlowchartMount, mount_flowchart
from flowchart2html.render import RenderLabels
from flowchart2html.schemas import ChildMode, FlowchartDocument, NodeSpec, NodeType
from flowchart2html.tree import FlowchartTree, NodeInstance, NodeState, build_tree

__all__ = [
    "ChildMode",
    "DuplicateIdError",
    "FetchError",
    "Flowchart2htmlError",
    "FlowchartDocument",
    "FlowchartMount",
    "FlowchartTree",
    "MalformedTreeError",
    "NodeInstance",
    "NodeSpec",
    "NodeState",
    "NodeType",
    "RenderLabels",
    "ToggleAllCoordinator",
    "ToggleError",
    "build_tree",
    "mount_flowchart",
]
