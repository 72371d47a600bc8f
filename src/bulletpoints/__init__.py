"""Outline editor core: item tree, mutation engine and undo history."""

from loguru import logger

from bulletpoints.core.history import History, dispatch
from bulletpoints.core.mutation.engine import apply
from bulletpoints.core.store import InvariantError, check_invariants, default_store
from bulletpoints.models.item import Item, Store
from bulletpoints.protocols import SnapshotListenerProtocol
from bulletpoints.session import EditingSession

logger.disable("bulletpoints")

__all__ = [
    "EditingSession",
    "History",
    "InvariantError",
    "Item",
    "SnapshotListenerProtocol",
    "Store",
    "apply",
    "check_invariants",
    "default_store",
    "dispatch",
]
