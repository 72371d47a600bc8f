"""Domain models for the outline: items and store snapshots."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Literal

from bulletpoints.config import DEFAULT_FONT_SIZE

FontSize = Literal["small", "medium", "large"]


@dataclass(frozen=True)
class Item:
    """A single node in the outline tree."""

    id: str
    text: str = ""
    children: tuple[str, ...] = ()
    collapsed: bool = False
    is_completed: bool = False
    is_task: bool = False
    font_size: FontSize = DEFAULT_FONT_SIZE
    is_bold: bool = False
    is_italic: bool = False
    is_underlined: bool = False


def derive_parent_index(items: Mapping[str, Item]) -> dict[str, str]:
    """Map each child id to the first item listing it among its children."""
    parent_of: dict[str, str] = {}
    for item in items.values():
        for child_id in item.children:
            parent_of.setdefault(child_id, item.id)
    return parent_of


@dataclass(frozen=True)
class Store:
    """An immutable snapshot of the whole outline.

    ``parent_of`` maps every non-root item id to the id of its parent. It is
    derived from the ``children`` tuples when not supplied, and kept in step
    by the mutation engine, so it takes no part in equality.
    """

    items: Mapping[str, Item]
    root_id: str
    parent_of: Mapping[str, str] = field(default_factory=dict, compare=False, repr=False)

    def __post_init__(self) -> None:
        if not self.parent_of:
            # an empty index is only correct when nothing has children
            object.__setattr__(self, "parent_of", MappingProxyType(derive_parent_index(self.items)))

    def __contains__(self, item_id: object) -> bool:
        return item_id in self.items

    def get(self, item_id: str) -> Item | None:
        return self.items.get(item_id)

    @property
    def root(self) -> Item:
        return self.items[self.root_id]


@dataclass(frozen=True)
class Breadcrumb:
    item_id: str
    text: str
    depth: int
