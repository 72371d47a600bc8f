"""Tree queries: parent lookup, ancestry, visible items, breadcrumbs, tasks."""

from collections.abc import Iterator

from bulletpoints.models.item import Breadcrumb, Item, Store


def find_parent(store: Store, item_id: str) -> str | None:
    """Return the id of the item whose children contain item_id.

    None for the root and for ids that are not in the tree.
    """
    return store.parent_of.get(item_id)


def is_ancestor(store: Store, candidate: str, node: str) -> bool:
    """True if candidate is node itself or lies somewhere below node.

    Walks up from candidate through the parent index, so the cost is the
    depth of candidate rather than the size of node's subtree.
    """
    if candidate == node:
        return True
    current = store.parent_of.get(candidate)
    while current is not None:
        if current == node:
            return True
        current = store.parent_of.get(current)
    return False


def iter_subtree(store: Store, item_id: str) -> Iterator[str]:
    """Yield item_id and all its descendants in pre-order."""
    if item_id not in store.items:
        return
    stack = [item_id]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(store.items[current].children))


def visible_flat_list(store: Store, root_id: str) -> list[str]:
    """List the ids a user sees below root_id, top to bottom.

    Children of collapsed items are skipped. root_id itself is not included.
    """
    root = store.items.get(root_id)
    if root is None:
        return []

    result: list[str] = []
    stack = list(reversed(root.children))
    while stack:
        current = stack.pop()
        result.append(current)
        item = store.items.get(current)
        if item is not None and not item.collapsed:
            stack.extend(reversed(item.children))
    return result


def next_visible(store: Store, view_root: str, item_id: str) -> str | None:
    visible = visible_flat_list(store, view_root)
    try:
        index = visible.index(item_id)
    except ValueError:
        return None
    return visible[index + 1] if index + 1 < len(visible) else None


def previous_visible(store: Store, view_root: str, item_id: str) -> str | None:
    visible = visible_flat_list(store, view_root)
    try:
        index = visible.index(item_id)
    except ValueError:
        return None
    return visible[index - 1] if index > 0 else None


def visible_range(store: Store, view_root: str, start_id: str, end_id: str) -> list[str]:
    """Visible ids between start_id and end_id inclusive, in display order.

    Falls back to just end_id when either end is not visible.
    """
    visible = visible_flat_list(store, view_root)
    if start_id not in visible or end_id not in visible:
        return [end_id]
    start = visible.index(start_id)
    end = visible.index(end_id)
    low, high = min(start, end), max(start, end)
    return visible[low : high + 1]


def get_breadcrumbs(store: Store, item_id: str) -> tuple[Breadcrumb, ...]:
    """Path from the absolute root down to item_id, both ends included."""
    if item_id not in store.items:
        return ()

    chain: list[str] = []
    current: str | None = item_id
    while current is not None:
        chain.append(current)
        current = store.parent_of.get(current)
    chain.reverse()

    return tuple(
        Breadcrumb(item_id=crumb_id, text=store.items[crumb_id].text, depth=depth)
        for depth, crumb_id in enumerate(chain)
    )


def get_tasks(store: Store) -> tuple[Item, ...]:
    """All items flagged as tasks, in document order."""
    return tuple(
        store.items[item_id]
        for item_id in iter_subtree(store, store.root_id)
        if store.items[item_id].is_task
    )
