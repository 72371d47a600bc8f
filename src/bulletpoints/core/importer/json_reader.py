"""Convert stores to and from the JSON document shape used for persistence."""

from typing import Any, get_args

from bulletpoints.config import DEFAULT_FONT_SIZE
from bulletpoints.core.store import build_store, check_invariants
from bulletpoints.models.item import FontSize, Item, Store

_FONT_SIZES = get_args(FontSize)


def item_to_data(item: Item) -> dict[str, Any]:
    return {
        "id": item.id,
        "text": item.text,
        "children": list(item.children),
        "isCompleted": item.is_completed,
        "collapsed": item.collapsed,
        "isTask": item.is_task,
        "fontSize": item.font_size,
        "isBold": item.is_bold,
        "isItalic": item.is_italic,
        "isUnderlined": item.is_underlined,
    }


def store_to_data(store: Store) -> dict[str, Any]:
    """Serialise a store as ``{"items": {...}, "rootId": ...}``."""
    return {
        "items": {item_id: item_to_data(item) for item_id, item in store.items.items()},
        "rootId": store.root_id,
    }


def _parse_item(item_id: str, raw: dict[str, Any]) -> Item:
    if not isinstance(raw, dict):
        msg = f"Item {item_id!r} must be an object, got {type(raw).__name__}"
        raise ValueError(msg)
    children = raw.get("children", [])
    if not isinstance(children, list) or not all(isinstance(c, str) for c in children):
        msg = f"Item {item_id!r} has malformed children {children!r}"
        raise ValueError(msg)
    if not isinstance(raw.get("text", ""), str):
        msg = f"Item {item_id!r} has non-string text"
        raise ValueError(msg)
    font_size = raw.get("fontSize") or DEFAULT_FONT_SIZE
    if font_size not in _FONT_SIZES:
        msg = f"Item {item_id!r} has unknown font size {font_size!r}"
        raise ValueError(msg)
    return Item(
        id=raw.get("id", item_id),
        text=raw.get("text", ""),
        children=tuple(children),
        collapsed=bool(raw.get("collapsed", False)),
        is_completed=bool(raw.get("isCompleted", False)),
        is_task=bool(raw.get("isTask", False)),
        font_size=font_size,
        is_bold=bool(raw.get("isBold", False)),
        is_italic=bool(raw.get("isItalic", False)),
        is_underlined=bool(raw.get("isUnderlined", False)),
    )


def parse_store_data(data: dict[str, Any]) -> Store:
    """Parse a persisted document into a Store.

    Missing optional attributes take their defaults. Raises ValueError when
    the document is not shaped like a snapshot and InvariantError when the
    items do not form a single tree under rootId.
    """
    if not isinstance(data, dict):
        msg = f"Snapshot must be an object, got {type(data).__name__}"
        raise ValueError(msg)
    try:
        raw_items: dict[str, dict[str, Any]] = data["items"]
        root_id: str = data["rootId"]
    except KeyError as e:
        msg = f"Snapshot is missing required key {e.args[0]!r}"
        raise ValueError(msg) from e
    if not isinstance(raw_items, dict):
        msg = f"Snapshot key 'items' must be an object, got {type(raw_items).__name__}"
        raise ValueError(msg)
    if not isinstance(root_id, str):
        msg = f"Snapshot key 'rootId' must be a string, got {root_id!r}"
        raise ValueError(msg)

    items = {item_id: _parse_item(item_id, raw) for item_id, raw in raw_items.items()}
    store = build_store(items, root_id)
    check_invariants(store)
    return store
