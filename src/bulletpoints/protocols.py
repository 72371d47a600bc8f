"""Protocols for collaborators injected into an editing session."""

from typing import Protocol, runtime_checkable

from bulletpoints.models.item import Store


@runtime_checkable
class SnapshotListenerProtocol(Protocol):
    """Protocol for consumers of document changes (renderers, persistence)."""

    def store_changed(self, store: Store) -> None:
        """Receive the new current store after it changed."""
        ...
