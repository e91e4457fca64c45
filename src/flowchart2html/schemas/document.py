"""Top-level flowchart document model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from flowchart2html.schemas.nodes import NodeSpec


class FlowchartDocument(BaseModel):
    """The fetched JSON document: a single object holding the root node."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    root: NodeSpec
