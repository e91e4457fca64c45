"""HTTP utilities for the one-shot flowchart data fetch."""

from __future__ import annotations

import json
from typing import Any

import httpx

from flowchart2html.config import (
    FLOWCHART2HTML_FETCH_TIMEOUT_S,
    FLOWCHART2HTML_MAX_REDIRECTS,
    FLOWCHART2HTML_USER_AGENT,
)
from flowchart2html.exceptions import FetchError


async def fetch_json(
    url: str,
    *,
    client: httpx.AsyncClient | None = None,
) -> Any:
    """Fetch a JSON document from a URL.

    The request is made exactly once. There is no retry: the flowchart either
    loads on the first attempt or the caller shows a failure message.

    Args:
        url: The URL to fetch.
        client: Optional httpx.AsyncClient to reuse. If not provided, a new
            client is created for this request.

    Returns:
        The decoded JSON payload.

    Raises:
        FetchError: On invalid URLs, transport errors, non-success status
            codes, or a body that is not valid JSON.
    """

    async def do_fetch(http_client: httpx.AsyncClient) -> Any:
        try:
            response = await http_client.get(url)
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            raise FetchError(f"Failed to fetch {url}: {exc}") from exc

        if response.status_code < 200 or response.status_code >= 300:
            raise FetchError(f"Failed to load flowchart data: {response.status_code}")

        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise FetchError(f"Invalid JSON from {url}: {exc}") from exc

    if client is not None:
        return await do_fetch(client)

    async with httpx.AsyncClient(
        timeout=httpx.Timeout(FLOWCHART2HTML_FETCH_TIMEOUT_S),
        headers={"User-Agent": FLOWCHART2HTML_USER_AGENT, "Accept": "application/json"},
        follow_redirects=True,
        max_redirects=FLOWCHART2HTML_MAX_REDIRECTS,
    ) as new_client:
        return await do_fetch(new_client)
