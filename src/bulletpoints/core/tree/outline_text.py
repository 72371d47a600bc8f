"""Hyphen-indented plain text import and export.

Each line is one item; the number of leading ``-`` characters is its depth
below the root::

    1
    -1a
    -1b
    --1ba
    2
"""

import io
from collections.abc import Callable

from bs4 import BeautifulSoup
from loguru import logger

from bulletpoints.config import ROOT_ID, ROOT_TEXT
from bulletpoints.core.store import build_store, generate_id
from bulletpoints.models.item import Item, Store


def strip_html(text: str) -> str:
    """Reduce a rich-text blob to its plain text."""
    if "<" not in text and "&" not in text:
        return text
    return BeautifulSoup(text, "html.parser").get_text()


def _split_depth(line: str) -> tuple[int, str]:
    stripped = line.lstrip("-")
    return len(line) - len(stripped), stripped.strip()


def parse_outline_text(text: str, *, id_factory: Callable[[], str] = generate_id) -> Store:
    """Build a fresh store from hyphen-indented outline text.

    A line at depth d becomes a child of the item most recently read at depth
    d-1. Depth jumps of more than one level are clamped to one below the
    deepest open item. Blank lines are skipped.
    """
    children: dict[str, list[str]] = {ROOT_ID: []}
    texts: dict[str, str] = {ROOT_ID: ROOT_TEXT}
    # open_parents[d] is the item that receives lines of depth d
    open_parents: list[str] = [ROOT_ID]
    clamped = 0

    for line in text.splitlines():
        if not line.strip():
            continue
        depth, content = _split_depth(line.rstrip())
        if depth > len(open_parents) - 1:
            depth = len(open_parents) - 1
            clamped += 1

        item_id = id_factory()
        while item_id in texts:
            item_id = id_factory()

        children[open_parents[depth]].append(item_id)
        children[item_id] = []
        texts[item_id] = content
        del open_parents[depth + 1 :]
        open_parents.append(item_id)

    if clamped:
        logger.warning("Clamped {} outline lines that skipped indentation levels", clamped)

    items = {
        item_id: Item(id=item_id, text=texts[item_id], children=tuple(kids))
        for item_id, kids in children.items()
    }
    logger.debug("Parsed {} items from outline text", len(items) - 1)
    return build_store(items, ROOT_ID)


def export_outline_text(store: Store, *, root_id: str | None = None) -> str:
    """Render the visible items below root_id as hyphen-indented text.

    Collapsed items are exported but their descendants are not. Markup is
    stripped and trailing whitespace trimmed from each line. An empty item at
    depth 0 exports as a blank line, which the parser skips.
    """
    start = root_id if root_id is not None else store.root_id
    root = store.items.get(start)
    if root is None:
        return ""

    out = io.StringIO()
    stack: list[tuple[str, int]] = [(child_id, 0) for child_id in reversed(root.children)]
    while stack:
        item_id, depth = stack.pop()
        item = store.items[item_id]
        line = "-" * depth + strip_html(item.text)
        out.write(line.rstrip() + "\n")
        if not item.collapsed:
            stack.extend((child_id, depth + 1) for child_id in reversed(item.children))

    # only the final newline goes; trailing empty items still get their line
    return out.getvalue().removesuffix("\n")
