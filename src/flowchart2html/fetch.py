"""Load flowchart data from a URL or a local file."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any
from urllib.parse import unquote, urlparse

import httpx

from flowchart2html.exceptions import FetchError
from flowchart2html.http_utils import fetch_json
from flowchart2html.utils.logging_config import get_logger

logger = get_logger(__name__)

_HTTP_SCHEMES = ("http", "https")


async def fetch_flowchart_data(
    locator: str | Path,
    *,
    client: httpx.AsyncClient | None = None,
) -> Any:
    """Fetch the raw flowchart payload.

    ``http``/``https`` locators are fetched over the network; anything else
    (a filesystem path or a ``file://`` URL) is read from disk.

    Args:
        locator: URL or path of the JSON data file.
        client: Optional httpx.AsyncClient used for network locators.

    Returns:
        The decoded JSON payload, not yet validated.

    Raises:
        FetchError: If the locator is invalid, or the data cannot be read or
            is not valid JSON.
    """
    if isinstance(locator, str):
        try:
            parsed = urlparse(locator)
        except ValueError as exc:
            raise FetchError(f"Invalid locator {locator}: {exc}") from exc
        if parsed.scheme in _HTTP_SCHEMES:
            logger.debug("Fetching flowchart data from %s", locator)
            return await fetch_json(locator, client=client)
        if parsed.scheme == "file":
            locator = Path(unquote(parsed.path))
        else:
            locator = Path(locator)

    logger.debug("Reading flowchart data from %s", locator)
    return await _read_json_file(locator)


async def _read_json_file(path: Path) -> Any:
    try:
        text = await asyncio.to_thread(path.read_text, encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise FetchError(f"Failed to read {path}: {exc}") from exc

    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise FetchError(f"Invalid JSON in {path}: {exc}") from exc
