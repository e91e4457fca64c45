"""Local configuration for flowchart2html."""

from __future__ import annotations

import os


DEFAULT_FETCH_TIMEOUT_S = 10.0
DEFAULT_MAX_REDIRECTS = 5
DEFAULT_USER_AGENT = "flowchart2html/0.1"
DEFAULT_EXPAND_ALL_ID = "expand-all-btn"
DEFAULT_LOG_LEVEL = "INFO"


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


FLOWCHART2HTML_FETCH_TIMEOUT_S = float(os.getenv("FLOWCHART2HTML_FETCH_TIMEOUT_S", str(DEFAULT_FETCH_TIMEOUT_S)))
FLOWCHART2HTML_MAX_REDIRECTS = int(os.getenv("FLOWCHART2HTML_MAX_REDIRECTS", str(DEFAULT_MAX_REDIRECTS)))
FLOWCHART2HTML_USER_AGENT = os.getenv("FLOWCHART2HTML_USER_AGENT", DEFAULT_USER_AGENT)
# Duplicate node ids are rejected at build time unless this is switched off.
FLOWCHART2HTML_VALIDATE_IDS = _env_flag("FLOWCHART2HTML_VALIDATE_IDS", True)
# Debug mode turns toggle programming errors into exceptions instead of log lines.
FLOWCHART2HTML_DEBUG = _env_flag("FLOWCHART2HTML_DEBUG", False)
FLOWCHART2HTML_EXPAND_ALL_ID = os.getenv("FLOWCHART2HTML_EXPAND_ALL_ID", DEFAULT_EXPAND_ALL_ID)
FLOWCHART2HTML_LOG_LEVEL = os.getenv("FLOWCHART2HTML_LOG_LEVEL", DEFAULT_LOG_LEVEL)
