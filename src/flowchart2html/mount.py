"""Mount a flowchart into a page container."""

from __future__ import annotations

from pathlib import Path

import httpx

from flowchart2html import state as transitions
from flowchart2html.config import (
    FLOWCHART2HTML_DEBUG,
    FLOWCHART2HTML_EXPAND_ALL_ID,
    FLOWCHART2HTML_VALIDATE_IDS,
)
from flowchart2html.coordinator import ToggleAllCoordinator
from flowchart2html.exceptions import FetchError, Flowchart2htmlError, MalformedTreeError
from flowchart2html.fetch import fetch_flowchart_data
from flowchart2html.render import (
    DEFAULT_LABELS,
    RenderLabels,
    paint_node,
    render_error_panel,
    render_tree,
)
from flowchart2html.tree import FlowchartTree, NodeInstance, NodeState
from flowchart2html.utils.logging_config import get_logger

try:
    from bs4 import BeautifulSoup
    from bs4.element import Tag
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise RuntimeError(
        "BeautifulSoup4 is required for rendering (pip install beautifulsoup4)."
    ) from exc

logger = get_logger(__name__)


class FlowchartMount:
    """A flowchart rendered into a page container.

    Interactions mutate the tree through the state transitions or the
    coordinator, then repaint the affected elements.

    Attributes:
        page: The page document the flowchart lives in.
        container: The container element.
        tree: The instantiated node tree, None if mounting failed.
        coordinator: The expand/collapse-all coordinator, None when the page
            has no such control or mounting failed.
        control: The expand/collapse-all control element, if present.
        error: The error that prevented mounting, if any.
    """

    def __init__(
        self,
        page: BeautifulSoup,
        container: Tag,
        *,
        tree: FlowchartTree | None = None,
        elements: dict[NodeInstance, Tag] | None = None,
        coordinator: ToggleAllCoordinator | None = None,
        control: Tag | None = None,
        error: Flowchart2htmlError | None = None,
        labels: RenderLabels = DEFAULT_LABELS,
        debug: bool = FLOWCHART2HTML_DEBUG,
    ) -> None:
        self.page = page
        self.container = container
        self.tree = tree
        self.coordinator = coordinator
        self.control = control
        self.error = error
        self.labels = labels
        self.debug = debug
        self._elements = elements or {}

    @property
    def ok(self) -> bool:
        return self.tree is not None and self.error is None

    def activate(self, node: str | NodeInstance) -> bool:
        """Activate a node header. Returns True if any state changed."""
        return self._run(node, transitions.activate)

    def activate_detail(self, node: str | NodeInstance) -> bool:
        """Activate a node's detail region."""
        return self._run(node, transitions.activate_detail)

    def toggle_all(self) -> bool:
        """Run the expand/collapse-all control. Returns the new bulk flag."""
        if self.coordinator is None:
            raise RuntimeError("This flowchart has no expand/collapse-all control")
        for node in self.coordinator.toggle_all():
            self._repaint(node)
        if self.control is not None:
            self.control.string = self.coordinator.control_label
        return self.coordinator.all_expanded

    def state(self, node_id: str) -> NodeState:
        return self._require_tree().state(node_id)

    def element(self, node_id: str) -> Tag:
        return self._elements[self._require_tree().get(node_id)]

    def _run(self, node: str | NodeInstance, transition: transitions.Transition) -> bool:
        tree = self._require_tree()
        changed = transitions.apply_transition(tree, node, transition, debug=self.debug)
        if changed:
            self._repaint(transitions.resolve_node(tree, node))
        return changed

    def _repaint(self, node: NodeInstance) -> None:
        el = self._elements.get(node)
        if el is not None:
            paint_node(el, node, self.labels)

    def _require_tree(self) -> FlowchartTree:
        if self.tree is None:
            raise RuntimeError("Flowchart failed to mount") from self.error
        return self.tree


async def mount_flowchart(
    page: BeautifulSoup,
    container_id: str,
    locator: str | Path,
    *,
    client: httpx.AsyncClient | None = None,
    labels: RenderLabels | None = None,
    expand_all_id: str = FLOWCHART2HTML_EXPAND_ALL_ID,
    validate_ids: bool = FLOWCHART2HTML_VALIDATE_IDS,
    debug: bool = FLOWCHART2HTML_DEBUG,
) -> FlowchartMount | None:
    """Fetch flowchart data and render it into a page container.

    Fetch and parse failures never escape: the container gets a failure
    panel instead of a partial tree and the returned mount carries the error.

    Args:
        page: Page document containing the container.
        container_id: Id of the container element.
        locator: URL or path of the JSON data file.
        client: Optional httpx.AsyncClient for network locators.
        labels: User-visible strings. Defaults to English.
        expand_all_id: Id of the optional expand/collapse-all control.
        validate_ids: Reject trees with duplicate node ids.
        debug: Raise on invalid toggles instead of logging them.

    Returns:
        The mount, or None if the container does not exist.
    """
    labels = labels or DEFAULT_LABELS
    container = page.find(id=container_id)
    if container is None:
        logger.warning("Flowchart container not found", extra={"container_id": container_id})
        return None

    try:
        payload = await fetch_flowchart_data(locator, client=client)
        tree = FlowchartTree.from_document(payload, validate_ids=validate_ids)
    except (FetchError, MalformedTreeError) as exc:
        logger.error(
            "Flowchart init error",
            extra={"locator": str(locator), "error": str(exc)},
        )
        # Parse details stay in the log; fetch failures are shown as-is.
        message = str(exc) if isinstance(exc, FetchError) else labels.invalid_data
        container.clear()
        container.append(render_error_panel(page, message, labels))
        return FlowchartMount(page, container, error=exc, labels=labels, debug=debug)

    root_el, elements = render_tree(page, tree, labels)
    container.clear()
    container.append(root_el)

    control = page.find(id=expand_all_id)
    coordinator = None
    if control is not None:
        coordinator = ToggleAllCoordinator(
            tree,
            expand_label=labels.expand_all,
            collapse_label=labels.collapse_all,
        )
        control.string = coordinator.control_label

    logger.info(
        "Flowchart mounted",
        extra={"container_id": container_id, "nodes": len(tree)},
    )
    return FlowchartMount(
        page,
        container,
        tree=tree,
        elements=elements,
        coordinator=coordinator,
        control=control,
        error=None,
        labels=labels,
        debug=debug,
    )
