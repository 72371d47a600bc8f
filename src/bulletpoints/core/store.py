"""Store construction, id generation and structural invariant checks."""

import random
import string
from collections.abc import Mapping
from types import MappingProxyType

from bulletpoints.config import ID_LENGTH, ROOT_ID, ROOT_TEXT, WELCOME_TEXT
from bulletpoints.models.item import Item, Store

_ID_ALPHABET = string.ascii_lowercase + string.digits


class InvariantError(ValueError):
    """Raised when a store violates the outline tree invariants."""


def generate_id() -> str:
    """Return a fresh random item id."""
    return "".join(random.choices(_ID_ALPHABET, k=ID_LENGTH))


def build_store(items: Mapping[str, Item], root_id: str = ROOT_ID) -> Store:
    """Build a store from an item mapping, deriving the parent index.

    No validation happens here; see :func:`check_invariants`.
    """
    return Store(items=MappingProxyType(dict(items)), root_id=root_id)


def default_store(*, first_child_id: str | None = None) -> Store:
    """Seed document for a new user: the root plus one welcome item."""
    child_id = first_child_id or generate_id()
    return build_store(
        {
            ROOT_ID: Item(id=ROOT_ID, text=ROOT_TEXT, children=(child_id,)),
            child_id: Item(id=child_id, text=WELCOME_TEXT),
        },
        ROOT_ID,
    )


def check_invariants(store: Store) -> None:
    """Raise InvariantError if the store is not a single tree rooted at root_id.

    Checks, in order: the root exists, every child reference resolves, the
    root is nobody's child, no id has two parents, every item is reachable
    from the root exactly once (which rules out cycles and orphans), and the
    parent index agrees with the children tuples.
    """
    items = store.items
    if store.root_id not in items:
        msg = f"Root {store.root_id!r} missing from items"
        raise InvariantError(msg)

    seen_parent: dict[str, str] = {}
    for item_id, item in items.items():
        if item.id != item_id:
            msg = f"Item keyed {item_id!r} carries id {item.id!r}"
            raise InvariantError(msg)
        for child_id in item.children:
            if child_id not in items:
                msg = f"Item {item_id!r} references missing child {child_id!r}"
                raise InvariantError(msg)
            if child_id == store.root_id:
                msg = f"Root listed as a child of {item_id!r}"
                raise InvariantError(msg)
            if child_id in seen_parent:
                msg = (
                    f"Item {child_id!r} has two parents: "
                    f"{seen_parent[child_id]!r} and {item_id!r}"
                )
                raise InvariantError(msg)
            seen_parent[child_id] = item_id

    reached: set[str] = set()
    stack = [store.root_id]
    while stack:
        current = stack.pop()
        if current in reached:
            msg = f"Cycle through {current!r}"
            raise InvariantError(msg)
        reached.add(current)
        stack.extend(items[current].children)

    unreachable = set(items) - reached
    if unreachable:
        msg = f"Orphaned items: {sorted(unreachable)!r}"
        raise InvariantError(msg)

    if dict(store.parent_of) != seen_parent:
        msg = "Parent index out of sync with children"
        raise InvariantError(msg)
