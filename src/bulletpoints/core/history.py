"""Undo/redo history around the mutation engine.

The history is itself an immutable value: :func:`dispatch` returns a new
``History`` (or the same one when nothing changed). Stores are immutable, so
snapshots kept on the past/future stacks can never be altered after the fact.
"""

from dataclasses import dataclass, replace

from loguru import logger

from bulletpoints.core.mutation.engine import apply
from bulletpoints.core.store import default_store
from bulletpoints.models.actions import Action, HistoryAction, LoadState, Redo, SetText, Undo
from bulletpoints.models.item import Store


@dataclass(frozen=True)
class History:
    """Past, present and future document snapshots.

    ``last_action`` is the coalescing marker: the most recent action that
    produced the current present, or None after undo/redo/load.
    """

    present: Store
    past: tuple[Store, ...] = ()
    future: tuple[Store, ...] = ()
    last_action: Action | None = None

    @classmethod
    def initial(cls, store: Store | None = None) -> "History":
        return cls(present=store if store is not None else default_store())

    @property
    def can_undo(self) -> bool:
        return bool(self.past)

    @property
    def can_redo(self) -> bool:
        return bool(self.future)


def _coalesces(previous: Action | None, action: Action) -> bool:
    """Consecutive text edits of the same item share one undo step."""
    return (
        isinstance(action, SetText)
        and isinstance(previous, SetText)
        and previous.id == action.id
    )


def _undo(history: History) -> History:
    if not history.past:
        return history
    return History(
        present=history.past[-1],
        past=history.past[:-1],
        future=(history.present, *history.future),
        last_action=None,
    )


def _redo(history: History) -> History:
    if not history.future:
        return history
    return History(
        present=history.future[0],
        past=(*history.past, history.present),
        future=history.future[1:],
        last_action=None,
    )


def dispatch(history: History, action: Action | HistoryAction) -> History:
    """Apply an action and record it in the history.

    Returns the input history unchanged when the action is a no-op.
    """
    if isinstance(action, Undo):
        return _undo(history)
    if isinstance(action, Redo):
        return _redo(history)
    if isinstance(action, LoadState):
        logger.debug("Loading new document state; history cleared")
        return History(present=action.store)

    new_present = apply(history.present, action)
    if new_present is history.present:
        return history

    if _coalesces(history.last_action, action):
        return replace(history, present=new_present, future=(), last_action=action)

    return History(
        present=new_present,
        past=(*history.past, history.present),
        future=(),
        last_action=action,
    )
