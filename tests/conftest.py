"""Test setup for flowchart2html."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from flowchart2html.tree import FlowchartTree  # noqa: E402


@pytest.fixture
def scenario_payload() -> dict[str, Any]:
    """Root section with an action and a nested section."""
    return {
        "root": {
            "id": "root",
            "type": "section",
            "label": "Incident response",
            "children": [
                {"id": "A", "type": "action", "label": "Stay calm"},
                {
                    "id": "B",
                    "type": "section",
                    "label": "Evidence",
                    "detail": "Collect what you can.",
                    "children": [
                        {"id": "C", "type": "info", "label": "Screenshots"},
                    ],
                },
            ],
        }
    }


@pytest.fixture
def rich_payload() -> dict[str, Any]:
    """Deeper tree mixing choice mode, details, and nested sections."""
    return {
        "root": {
            "id": "start",
            "type": "section",
            "label": "What happened?",
            "detail": "Pick the closest match.",
            "childMode": "choice",
            "children": [
                {
                    "id": "harassment",
                    "type": "decision",
                    "label": "Harassment",
                    "detail": "Online or in person.",
                    "children": [
                        {"id": "report", "type": "action", "label": "Report it", "detail": "Use the form."},
                        {"id": "block", "type": "action", "label": "Block the account"},
                    ],
                },
                {
                    "id": "breach",
                    "type": "section",
                    "label": "Data breach",
                    "detail": "Your data was exposed.",
                    "children": [
                        {
                            "id": "passwords",
                            "type": "section",
                            "label": "Passwords",
                            "children": [
                                {"id": "rotate", "type": "warning", "label": "Rotate now", "detail": "All reused ones."},
                            ],
                        },
                        {"id": "notify", "type": "info", "label": "Notify your bank"},
                    ],
                },
                {"id": "other", "type": "info", "label": "Something else"},
            ],
        }
    }


@pytest.fixture
def scenario_tree(scenario_payload: dict[str, Any]) -> FlowchartTree:
    return FlowchartTree.from_document(scenario_payload)


@pytest.fixture
def rich_tree(rich_payload: dict[str, Any]) -> FlowchartTree:
    return FlowchartTree.from_document(rich_payload)
