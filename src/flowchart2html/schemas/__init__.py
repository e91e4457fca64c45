"""Shared schemas for flowchart2html."""

from flowchart2html.schemas.document import FlowchartDocument
from flowchart2html.schemas.nodes import ChildMode, NodeSpec, NodeType

__all__ = ["ChildMode", "FlowchartDocument", "NodeSpec", "NodeType"]
