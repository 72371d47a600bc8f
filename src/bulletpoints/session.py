"""A single document editing session: history plus change notification."""

from collections.abc import Iterable

from loguru import logger

from bulletpoints.core.history import History, dispatch
from bulletpoints.core.store import generate_id
from bulletpoints.models.actions import (
    Action,
    ChangeFontSize,
    Delete,
    DropPosition,
    HistoryAction,
    Indent,
    Insert,
    LoadState,
    MergeUp,
    Move,
    MoveItems,
    Outdent,
    Redo,
    SetCompleted,
    SetIsTask,
    SetText,
    TextStyle,
    ToggleCollapse,
    ToggleStyle,
    Undo,
)
from bulletpoints.models.item import FontSize, Store
from bulletpoints.protocols import SnapshotListenerProtocol


class EditingSession:
    """Owns the history of one document and tells listeners when it changes.

    Actions are applied one at a time, synchronously. Listeners are called
    after every dispatch that changes the current store; persistence is
    expected to subscribe here and do its own I/O.
    """

    def __init__(
        self,
        store: Store | None = None,
        *,
        listeners: Iterable[SnapshotListenerProtocol] = (),
    ) -> None:
        self.history = History.initial(store)
        self._listeners: list[SnapshotListenerProtocol] = list(listeners)

    @property
    def store(self) -> Store:
        return self.history.present

    def subscribe(self, listener: SnapshotListenerProtocol) -> None:
        self._listeners.append(listener)

    def dispatch(self, action: Action | HistoryAction) -> bool:
        """Apply an action. Returns True if the current store changed."""
        before = self.history.present
        self.history = dispatch(self.history, action)
        if self.history.present is before:
            return False
        self._notify()
        return True

    def _notify(self) -> None:
        for listener in self._listeners:
            try:
                listener.store_changed(self.history.present)
            except Exception:
                logger.exception("Snapshot listener {!r} failed", listener)

    def add_item(
        self, parent_id: str, after_id: str | None = None, new_id: str | None = None
    ) -> str | None:
        """Insert an empty item. Returns its id, or None if nothing was inserted."""
        item_id = new_id or generate_id()
        if not self.dispatch(Insert(parent_id=parent_id, new_id=item_id, after_id=after_id)):
            return None
        return item_id

    def update_text(self, item_id: str, text: str) -> bool:
        return self.dispatch(SetText(item_id, text))

    def delete_item(self, item_id: str, parent_id: str) -> bool:
        return self.dispatch(Delete(item_id, parent_id))

    def merge_up(self, item_id: str, parent_id: str, previous_id: str) -> bool:
        return self.dispatch(MergeUp(item_id, parent_id, previous_id))

    def indent(self, item_id: str, parent_id: str) -> bool:
        return self.dispatch(Indent(item_id, parent_id))

    def outdent(self, item_id: str, parent_id: str) -> bool:
        return self.dispatch(Outdent(item_id, parent_id))

    def toggle_collapse(self, item_id: str) -> bool:
        return self.dispatch(ToggleCollapse(item_id))

    def move_item(self, drag_id: str, target_id: str, position: DropPosition) -> bool:
        return self.dispatch(Move(drag_id, target_id, position))

    def move_items(self, drag_ids: Iterable[str], target_id: str, position: DropPosition) -> bool:
        return self.dispatch(MoveItems(tuple(drag_ids), target_id, position))

    def change_font_size(self, item_id: str, size: FontSize) -> bool:
        return self.dispatch(ChangeFontSize(item_id, size))

    def set_is_task(self, item_id: str, is_task: bool) -> bool:
        return self.dispatch(SetIsTask(item_id, is_task))

    def set_completed(self, item_id: str, is_completed: bool) -> bool:
        return self.dispatch(SetCompleted(item_id, is_completed))

    def toggle_style(self, item_id: str, style: TextStyle) -> bool:
        return self.dispatch(ToggleStyle(item_id, style))

    def undo(self) -> bool:
        return self.dispatch(Undo())

    def redo(self) -> bool:
        return self.dispatch(Redo())

    def load_state(self, store: Store) -> None:
        self.dispatch(LoadState(store))
