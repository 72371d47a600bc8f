"""Pure structural and content transformations of an outline store.

Every handler takes a store and an action and returns a store. When an
action's preconditions do not hold the *same* store object is returned, which
is how the history layer tells a no-op from a change. Handlers never mutate
their input: changes are staged on a :class:`_Draft` holding shallow copies of
the item map and parent index, and frozen into a new store at the end.
"""

from collections.abc import Callable
from dataclasses import replace
from types import MappingProxyType
from typing import Any

from loguru import logger

from bulletpoints.core.tree.navigation import is_ancestor, iter_subtree
from bulletpoints.models.actions import (
    Action,
    ChangeFontSize,
    Delete,
    Indent,
    Insert,
    MergeUp,
    Move,
    MoveItems,
    Outdent,
    SetCompleted,
    SetIsTask,
    SetText,
    ToggleCollapse,
    ToggleStyle,
)
from bulletpoints.models.item import Item, Store

_STYLE_FIELDS = {
    "bold": "is_bold",
    "italic": "is_italic",
    "underline": "is_underlined",
}


class _Draft:
    """Mutable working copy of a store used while a single action is applied."""

    def __init__(self, store: Store) -> None:
        self.root_id = store.root_id
        self.items: dict[str, Item] = dict(store.items)
        self.parent_of: dict[str, str] = dict(store.parent_of)

    def update(self, item_id: str, **changes: Any) -> None:
        self.items[item_id] = replace(self.items[item_id], **changes)

    def unlink(self, item_id: str) -> None:
        """Detach item_id from its current parent, if it has one."""
        parent_id = self.parent_of.pop(item_id, None)
        if parent_id is None:
            return
        parent = self.items[parent_id]
        self.update(parent_id, children=tuple(c for c in parent.children if c != item_id))

    def link(self, parent_id: str, child_ids: list[str], index: int | None = None) -> None:
        """Insert child_ids into parent_id's children at index (append if None)."""
        children = list(self.items[parent_id].children)
        if index is None:
            index = len(children)
        children[index:index] = child_ids
        self.update(parent_id, children=tuple(children))
        for child_id in child_ids:
            self.parent_of[child_id] = parent_id

    def drop_subtree(self, store: Store, item_id: str) -> None:
        for doomed in list(iter_subtree(store, item_id)):
            self.items.pop(doomed, None)
            self.parent_of.pop(doomed, None)

    def freeze(self) -> Store:
        return Store(
            items=MappingProxyType(self.items),
            root_id=self.root_id,
            parent_of=MappingProxyType(self.parent_of),
        )


def _set_fields(store: Store, item_id: str, **changes: Any) -> Store:
    """Replace attributes of one item; no-op if missing or already equal."""
    item = store.items.get(item_id)
    if item is None:
        logger.debug("Ignoring attribute change on missing item {}", item_id)
        return store
    if all(getattr(item, name) == value for name, value in changes.items()):
        return store
    draft = _Draft(store)
    draft.update(item_id, **changes)
    return draft.freeze()


def _insert(store: Store, action: Insert) -> Store:
    parent = store.items.get(action.parent_id)
    if parent is None:
        logger.debug("Insert ignored: parent {} not found", action.parent_id)
        return store
    if action.new_id in store.items:
        logger.debug("Insert ignored: id {} already in use", action.new_id)
        return store

    index = 0
    if action.after_id is not None:
        try:
            index = parent.children.index(action.after_id) + 1
        except ValueError:
            index = len(parent.children)

    draft = _Draft(store)
    draft.items[action.new_id] = Item(id=action.new_id)
    draft.link(action.parent_id, [action.new_id], index)
    return draft.freeze()


def _set_text(store: Store, action: SetText) -> Store:
    return _set_fields(store, action.id, text=action.text)


def _delete(store: Store, action: Delete) -> Store:
    if action.parent_id not in store.items:
        logger.debug("Delete ignored: parent {} not found", action.parent_id)
        return store
    if store.parent_of.get(action.id) != action.parent_id:
        logger.debug("Delete ignored: {} is not a child of {}", action.id, action.parent_id)
        return store

    draft = _Draft(store)
    draft.unlink(action.id)
    draft.drop_subtree(store, action.id)
    return draft.freeze()


def _merge_up(store: Store, action: MergeUp) -> Store:
    item = store.items.get(action.id)
    previous = store.items.get(action.previous_id)
    parent = store.items.get(action.parent_id)
    if item is None or previous is None or parent is None:
        logger.debug("Merge ignored: missing operand in {}", action)
        return store
    if store.parent_of.get(action.id) != action.parent_id or action.id == action.previous_id:
        return store
    if is_ancestor(store, action.previous_id, action.id):
        # previous lives inside the item being dissolved
        return store

    merged_text = previous.text + item.text
    moved = list(item.children)
    draft = _Draft(store)

    if action.previous_id == action.parent_id:
        index = parent.children.index(action.id)
        draft.unlink(action.id)
        draft.link(action.parent_id, moved, index)
        draft.update(action.parent_id, text=merged_text)
    else:
        draft.unlink(action.id)
        draft.link(action.previous_id, moved)
        draft.update(action.previous_id, text=merged_text, collapsed=False)

    del draft.items[action.id]
    return draft.freeze()


def _indent(store: Store, action: Indent) -> Store:
    parent = store.items.get(action.parent_id)
    if parent is None or action.id not in parent.children:
        return store

    index = parent.children.index(action.id)
    if index == 0:
        logger.debug("Indent ignored: {} is the first child", action.id)
        return store

    sibling_id = parent.children[index - 1]
    draft = _Draft(store)
    draft.unlink(action.id)
    draft.link(sibling_id, [action.id])
    draft.update(sibling_id, collapsed=False)
    return draft.freeze()


def _outdent(store: Store, action: Outdent) -> Store:
    parent = store.items.get(action.parent_id)
    if parent is None or action.id not in parent.children:
        return store

    grandparent_id = store.parent_of.get(action.parent_id)
    if grandparent_id is None:
        logger.debug("Outdent ignored: {} has no grandparent", action.id)
        return store

    draft = _Draft(store)
    draft.unlink(action.id)
    index = draft.items[grandparent_id].children.index(action.parent_id) + 1
    draft.link(grandparent_id, [action.id], index)
    return draft.freeze()


def _toggle_collapse(store: Store, action: ToggleCollapse) -> Store:
    item = store.items.get(action.id)
    if item is None:
        return store
    return _set_fields(store, action.id, collapsed=not item.collapsed)


def _topmost(store: Store, drag_ids: tuple[str, ...]) -> list[str]:
    """Drop unknown ids, duplicates, and ids lying below another dragged id."""
    candidates = list(dict.fromkeys(i for i in drag_ids if i in store.items))
    return [
        item_id
        for item_id in candidates
        if not any(other != item_id and is_ancestor(store, item_id, other) for other in candidates)
    ]


def _move_items(store: Store, action: MoveItems) -> Store:
    target_id = action.target_id
    if target_id not in store.items:
        return store

    moving = _topmost(store, action.drag_ids)
    if not moving:
        return store
    for item_id in moving:
        if is_ancestor(store, target_id, item_id):
            logger.debug("Move rejected: target {} is inside dragged {}", target_id, item_id)
            return store

    if action.position != "inside" and target_id not in store.parent_of:
        logger.debug("Move ignored: target {} has no parent", target_id)
        return store

    draft = _Draft(store)
    for item_id in moving:
        draft.unlink(item_id)

    if action.position == "inside":
        draft.link(target_id, moving)
        draft.update(target_id, collapsed=False)
    else:
        target_parent_id = draft.parent_of[target_id]
        index = draft.items[target_parent_id].children.index(target_id)
        if action.position == "after":
            index += 1
        draft.link(target_parent_id, moving, index)

    return draft.freeze()


def _move(store: Store, action: Move) -> Store:
    return _move_items(store, MoveItems((action.drag_id,), action.target_id, action.position))


def _change_font_size(store: Store, action: ChangeFontSize) -> Store:
    return _set_fields(store, action.id, font_size=action.size)


def _set_is_task(store: Store, action: SetIsTask) -> Store:
    return _set_fields(store, action.id, is_task=action.is_task)


def _set_completed(store: Store, action: SetCompleted) -> Store:
    return _set_fields(store, action.id, is_completed=action.is_completed)


def _toggle_style(store: Store, action: ToggleStyle) -> Store:
    item = store.items.get(action.id)
    if item is None:
        return store
    name = _STYLE_FIELDS[action.style]
    return _set_fields(store, action.id, **{name: not getattr(item, name)})


_HANDLERS: dict[type, Callable[[Store, Any], Store]] = {
    Insert: _insert,
    SetText: _set_text,
    Delete: _delete,
    MergeUp: _merge_up,
    Indent: _indent,
    Outdent: _outdent,
    ToggleCollapse: _toggle_collapse,
    MoveItems: _move_items,
    Move: _move,
    ChangeFontSize: _change_font_size,
    SetIsTask: _set_is_task,
    SetCompleted: _set_completed,
    ToggleStyle: _toggle_style,
}


def apply(store: Store, action: Action) -> Store:
    """Apply one action to a store and return the resulting store.

    Returns ``store`` itself when the action does not apply.
    """
    handler = _HANDLERS.get(type(action))
    if handler is None:
        msg = f"Unsupported action: {action!r}"
        raise TypeError(msg)
    return handler(store, action)
