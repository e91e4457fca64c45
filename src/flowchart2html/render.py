"""Render a node tree into page elements and repaint them from state.

Rendering only reads ``NodeInstance`` flags. All state changes happen in
``flowchart2html.state`` and ``flowchart2html.coordinator``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from flowchart2html.schemas import ChildMode, NodeType
from flowchart2html.tree import FlowchartTree, NodeInstance

try:
    from bs4 import BeautifulSoup
    from bs4.element import Tag
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise RuntimeError(
        "BeautifulSoup4 is required for rendering (pip install beautifulsoup4)."
    ) from exc


ICONS: dict[NodeType, str] = {
    NodeType.DECISION: (
        '<svg viewBox="0 0 20 20" fill="currentColor" class="text-amber-500">'
        '<path d="M10 2L2 10l8 8 8-8-8-8zm0 2.83L15.17 10 10 15.17 4.83 10 10 4.83z"/>'
        "</svg>"
    ),
    NodeType.ACTION: (
        '<svg viewBox="0 0 20 20" fill="currentColor" class="text-blue-500">'
        '<path d="M16.707 5.293a1 1 0 010 1.414l-8 8a1 1 0 01-1.414 0l-4-4a1 1 0 '
        '011.414-1.414L8 12.586l7.293-7.293a1 1 0 011.414 0z"/>'
        "</svg>"
    ),
    NodeType.WARNING: (
        '<svg viewBox="0 0 20 20" fill="currentColor" class="text-red-500">'
        '<path fill-rule="evenodd" d="M8.257 3.099c.765-1.36 2.722-1.36 3.486 0l5.58 '
        "9.92c.75 1.334-.213 2.98-1.742 2.98H4.42c-1.53 0-2.493-1.646-1.743-2.98l5.58-9.92zM11 "
        '13a1 1 0 11-2 0 1 1 0 012 0zm-1-8a1 1 0 00-1 1v3a1 1 0 002 0V6a1 1 0 00-1-1z" '
        'clip-rule="evenodd"/>'
        "</svg>"
    ),
    NodeType.INFO: (
        '<svg viewBox="0 0 20 20" fill="currentColor" class="text-gray-500">'
        '<path fill-rule="evenodd" d="M18 10a8 8 0 11-16 0 8 8 0 0116 0zm-7-4a1 1 0 11-2 0 '
        '1 1 0 012 0zM9 9a1 1 0 000 2v3a1 1 0 001 1h1a1 1 0 100-2v-3a1 1 0 00-1-1H9z" '
        'clip-rule="evenodd"/>'
        "</svg>"
    ),
    NodeType.SECTION: (
        '<svg viewBox="0 0 20 20" fill="currentColor" class="text-violet-500">'
        '<path d="M2 6a2 2 0 012-2h5l2 2h5a2 2 0 012 2v6a2 2 0 01-2 2H4a2 2 0 '
        '01-2-2V6z"/>'
        "</svg>"
    ),
}

_COLLAPSED_CLASS = "flow-children--collapsed"
_HIDDEN_STYLE = "display: none"


class RenderLabels(BaseModel):
    """User-visible strings, replaceable by a locale layer."""

    model_config = ConfigDict(frozen=True)

    show: str = "show"
    hide: str = "hide"
    choice_divider: str = "OR"
    expand_all: str = "Expand All"
    collapse_all: str = "Collapse All"
    load_failed: str = "Failed to load flowchart."
    invalid_data: str = "The flowchart data is invalid."


DEFAULT_LABELS = RenderLabels()


def step_marker(position_label: str) -> str:
    """Show the last two segments of a position label, e.g. ``> 02.01``."""
    parts = position_label.split(".")
    return "> " + ".".join(parts[-2:])


def render_tree(
    soup: BeautifulSoup,
    tree: FlowchartTree,
    labels: RenderLabels = DEFAULT_LABELS,
) -> tuple[Tag, dict[NodeInstance, Tag]]:
    """Render the whole tree.

    Returns:
        The root element and a map from each node to its ``flow-node`` element.
    """
    elements: dict[NodeInstance, Tag] = {}
    root = render_node(soup, tree.root, labels, elements=elements)
    return root, elements


def render_node(
    soup: BeautifulSoup,
    node: NodeInstance,
    labels: RenderLabels = DEFAULT_LABELS,
    *,
    elements: dict[NodeInstance, Tag] | None = None,
) -> Tag:
    """Recursively build the element for a node and its children."""
    el = soup.new_tag(
        "div",
        attrs={
            "class": ["flow-node", f"flow-node--{node.spec.type.value}"],
            "data-node-id": node.id,
            "data-depth": str(node.depth),
        },
    )
    el.append(_create_card(soup, node, labels))

    if node.has_children:
        mode = node.child_mode.value
        el.append(soup.new_tag("div", attrs={"class": ["flow-connector-stub"]}))

        children_el = soup.new_tag(
            "div", attrs={"class": ["flow-children", f"flow-children--{mode}"]}
        )
        for index, child in enumerate(node.children):
            if node.child_mode is ChildMode.CHOICE and index > 0:
                children_el.append(_create_choice_divider(soup, labels))
            children_el.append(render_node(soup, child, labels, elements=elements))
        el.append(children_el)

    if elements is not None:
        elements[node] = el
    paint_node(el, node, labels)
    return el


def paint_node(el: Tag, node: NodeInstance, labels: RenderLabels = DEFAULT_LABELS) -> None:
    """Apply a node's current flags to its existing element."""
    el["data-expanded"] = "true" if node.detail_expanded else "false"

    card = el.find("div", class_="flow-card", recursive=False)
    detail = card.find("div", class_="flow-card__detail", recursive=False) if card else None
    if detail is not None:
        detail["aria-hidden"] = "false" if node.detail_expanded else "true"

    badge = card.find("span", class_="flow-card__badge", recursive=False) if card else None
    if badge is not None:
        if badge.get("data-role") == "section":
            shown = node.children_expanded
        else:
            shown = node.detail_expanded
        badge.string = labels.hide if shown else labels.show

    children_el = el.find("div", class_="flow-children", recursive=False)
    stub = el.find("div", class_="flow-connector-stub", recursive=False)
    if children_el is not None:
        _set_class(children_el, _COLLAPSED_CLASS, not node.children_expanded)
    if stub is not None:
        if node.children_expanded:
            if "style" in stub.attrs:
                del stub["style"]
        else:
            stub["style"] = _HIDDEN_STYLE


def render_error_panel(
    soup: BeautifulSoup,
    message: str | None,
    labels: RenderLabels = DEFAULT_LABELS,
) -> Tag:
    """Build the static failure panel shown instead of the tree."""
    panel = soup.new_tag("div", attrs={"class": ["flow-error"], "role": "alert"})
    heading = soup.new_tag("p")
    heading.string = labels.load_failed
    panel.append(heading)
    if message:
        # Text nodes are escaped on output.
        detail = soup.new_tag("p", attrs={"class": ["flow-error__detail"]})
        detail.string = message
        panel.append(detail)
    return panel


def _create_card(soup: BeautifulSoup, node: NodeInstance, labels: RenderLabels) -> Tag:
    card = soup.new_tag("div", attrs={"class": ["flow-card"]})

    header = soup.new_tag("div", attrs={"class": ["flow-card__header"]})
    icon = soup.new_tag("span", attrs={"class": ["flow-card__icon"]})
    icon.append(_icon_svg(node.spec.type))
    header.append(icon)

    if node.depth > 0 and node.position_label:
        step = soup.new_tag("span", attrs={"class": ["flow-card__step"]})
        step.string = step_marker(node.position_label)
        header.append(step)

    label = soup.new_tag("span", attrs={"class": ["flow-card__label"]})
    label.string = node.spec.label
    header.append(label)
    card.append(header)

    if node.is_section or node.has_detail:
        role = "section" if node.is_section else "detail"
        badge = soup.new_tag(
            "span", attrs={"class": ["flow-card__badge"], "data-role": role}
        )
        badge.string = labels.show
        card.append(badge)

    if node.has_detail:
        detail = soup.new_tag(
            "div", attrs={"class": ["flow-card__detail"], "aria-hidden": "true"}
        )
        inner = soup.new_tag("div", attrs={"class": ["flow-card__detail-inner"]})
        inner.string = node.spec.detail or ""
        detail.append(inner)
        card.append(detail)

    return card


def _create_choice_divider(soup: BeautifulSoup, labels: RenderLabels) -> Tag:
    divider = soup.new_tag("div", attrs={"class": ["flow-choice-divider"]})
    divider.append(soup.new_tag("div", attrs={"class": ["flow-choice-divider__line"]}))
    text = soup.new_tag("span", attrs={"class": ["flow-choice-divider__text"]})
    text.string = labels.choice_divider
    divider.append(text)
    divider.append(soup.new_tag("div", attrs={"class": ["flow-choice-divider__line"]}))
    return divider


def _icon_svg(node_type: NodeType) -> Tag:
    markup = ICONS[node_type]
    return BeautifulSoup(markup, "html.parser").svg


def _set_class(tag: Tag, name: str, present: bool) -> None:
    classes = list(tag.get("class", []))
    if present and name not in classes:
        classes.append(name)
    elif not present and name in classes:
        classes.remove(name)
    tag["class"] = classes
