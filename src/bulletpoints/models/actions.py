"""The closed vocabulary of actions accepted by the mutation engine and history."""

from dataclasses import dataclass
from typing import Literal

from bulletpoints.models.item import FontSize, Store

DropPosition = Literal["before", "after", "inside"]
TextStyle = Literal["bold", "italic", "underline"]


@dataclass(frozen=True)
class Insert:
    """Insert a new empty item under ``parent_id``.

    Placed right after ``after_id`` when given (appended if ``after_id`` is not
    a child of the parent), otherwise prepended.
    """

    parent_id: str
    new_id: str
    after_id: str | None = None


@dataclass(frozen=True)
class SetText:
    id: str
    text: str


@dataclass(frozen=True)
class Delete:
    """Remove ``id`` from ``parent_id`` and drop its whole subtree."""

    id: str
    parent_id: str


@dataclass(frozen=True)
class MergeUp:
    """Fold ``id`` into ``previous_id``: text is concatenated, children re-parented."""

    id: str
    parent_id: str
    previous_id: str


@dataclass(frozen=True)
class Indent:
    id: str
    parent_id: str


@dataclass(frozen=True)
class Outdent:
    id: str
    parent_id: str


@dataclass(frozen=True)
class ToggleCollapse:
    id: str


@dataclass(frozen=True)
class MoveItems:
    """Relocate one or more items as a unit relative to ``target_id``."""

    drag_ids: tuple[str, ...]
    target_id: str
    position: DropPosition


@dataclass(frozen=True)
class Move:
    """Single-item form of :class:`MoveItems`."""

    drag_id: str
    target_id: str
    position: DropPosition


@dataclass(frozen=True)
class ChangeFontSize:
    id: str
    size: FontSize


@dataclass(frozen=True)
class SetIsTask:
    id: str
    is_task: bool


@dataclass(frozen=True)
class SetCompleted:
    id: str
    is_completed: bool


@dataclass(frozen=True)
class ToggleStyle:
    id: str
    style: TextStyle


# History-level actions. These never reach the mutation engine.


@dataclass(frozen=True)
class Undo:
    pass


@dataclass(frozen=True)
class Redo:
    pass


@dataclass(frozen=True)
class LoadState:
    """Replace the whole document, e.g. after persistence delivers a snapshot."""

    store: Store


Action = (
    Insert
    | SetText
    | Delete
    | MergeUp
    | Indent
    | Outdent
    | ToggleCollapse
    | MoveItems
    | Move
    | ChangeFontSize
    | SetIsTask
    | SetCompleted
    | ToggleStyle
)

HistoryAction = Undo | Redo | LoadState
