"""Render a flowchart data file into a static HTML page."""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from bs4 import BeautifulSoup

from flowchart2html.config import FLOWCHART2HTML_EXPAND_ALL_ID, FLOWCHART2HTML_LOG_LEVEL
from flowchart2html.mount import mount_flowchart
from flowchart2html.utils.logging_config import configure_logging, get_logger

logger = get_logger(__name__)

_PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head><meta charset="utf-8"/><title></title></head>
<body>
<main>
<div id="flowchart-controls"></div>
<div id="{container_id}"><p class="flow-loading">Loading...</p></div>
</main>
</body>
</html>
"""


def build_page(*, title: str, container_id: str, with_expand_all: bool) -> BeautifulSoup:
    """Create the page document the flowchart is mounted into."""
    page = BeautifulSoup(_PAGE_TEMPLATE.format(container_id=container_id), "lxml")
    page.title.string = title
    if with_expand_all:
        button = page.new_tag(
            "button", attrs={"id": FLOWCHART2HTML_EXPAND_ALL_ID, "type": "button"}
        )
        page.find(id="flowchart-controls").append(button)
    return page


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Render a JSON flowchart into an HTML page.")
    parser.add_argument("locator", help="URL or path of the flowchart JSON file")
    parser.add_argument("-o", "--output", help="Write the page here instead of stdout")
    parser.add_argument("--title", default="Flowchart", help="Page title")
    parser.add_argument("--container-id", default="flowchart", help="Id of the flowchart container")
    parser.add_argument(
        "--no-expand-all", action="store_true", help="Omit the expand/collapse-all control"
    )
    parser.add_argument(
        "--expand-all", action="store_true", help="Render with every node expanded"
    )
    parser.add_argument("--log-level", default=FLOWCHART2HTML_LOG_LEVEL, help="Logging level")
    args = parser.parse_args(argv)

    if args.expand_all and args.no_expand_all:
        parser.error("--expand-all needs the expand/collapse-all control")

    configure_logging(args.log_level)
    page = build_page(
        title=args.title,
        container_id=args.container_id,
        with_expand_all=not args.no_expand_all,
    )
    mount = asyncio.run(mount_flowchart(page, args.container_id, args.locator))

    if mount is not None and mount.ok and args.expand_all:
        mount.toggle_all()

    html = str(page)
    if args.output:
        Path(args.output).write_text(html, encoding="utf-8")
        logger.info("Wrote %s", args.output)
    else:
        sys.stdout.write(html)

    return 0 if mount is not None and mount.ok else 1


if __name__ == "__main__":
    sys.exit(main())
