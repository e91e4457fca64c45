"""Inspect a flowchart data file: node kinds, depths, and layout modes."""

from __future__ import annotations

import argparse
import json
from collections import Counter
from pathlib import Path

import httpx

from flowchart2html.tree import FlowchartTree


def main() -> None:
    parser = argparse.ArgumentParser(description="Summarize a flowchart JSON file.")
    parser.add_argument("--url", help="URL to fetch (e.g. https://example.org/data/flowchart.json)")
    parser.add_argument("--file", help="Local JSON file path")
    parser.add_argument("--outline", action="store_true", help="Print every node with its position label")
    args = parser.parse_args()

    if not args.url and not args.file:
        parser.error("Provide --url or --file")

    payload = load_json(url=args.url, file_path=args.file)
    tree = FlowchartTree.from_document(payload, validate_ids=False)
    types, depths, modes = collect_stats(tree)

    print(f"Nodes: {len(tree)}")

    print("\nTypes:")
    for name, count in types.most_common():
        print(f"{name}: {count}")

    print("\nDepths:")
    for depth, count in sorted(depths.items()):
        print(f"{depth}: {count}")

    print("\nChild modes:")
    for name, count in modes.most_common():
        print(f"{name}: {count}")

    if args.outline:
        print("\nOutline:")
        for node in tree:
            label = node.position_label or "--"
            print(f"{'  ' * node.depth}{label} [{node.spec.type.value}] {node.spec.label}")


def load_json(*, url: str | None, file_path: str | None) -> object:
    if url:
        response = httpx.get(url, follow_redirects=True, timeout=15.0)
        response.raise_for_status()
        return response.json()

    path = Path(file_path or "")
    if not path.is_file():
        raise FileNotFoundError(f"JSON file not found: {path}")
    return json.loads(path.read_text(encoding="utf-8"))


def collect_stats(tree: FlowchartTree) -> tuple[Counter, Counter, Counter]:
    types = Counter()
    depths = Counter()
    modes = Counter()

    for node in tree:
        types[node.spec.type.value] += 1
        depths[node.depth] += 1
        if node.has_children:
            modes[node.child_mode.value] += 1
    return types, depths, modes


if __name__ == "__main__":
    main()
