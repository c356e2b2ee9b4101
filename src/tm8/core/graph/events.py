"""
Graph change notification.

This module lets collaborators subscribe to changes committed to a store.
A notification carries the kind of entity, its id and the operation. It means
"something changed, re-read the graph" rather than a precise diff: batches,
loads, undo and redo are announced once with EntityKind.GRAPH and a
synthetic id.
"""

import logging
from dataclasses import dataclass, field
from typing import List

from ..enums import ChangeOperation, EntityKind
from ..types import ChangeListener

logger = logging.getLogger(__name__)

BATCH_EVENT_ID = "batch"
LOAD_EVENT_ID = "load"
CLEAR_EVENT_ID = "clear"
UNDO_EVENT_ID = "undo"
REDO_EVENT_ID = "redo"
CHECKPOINT_EVENT_ID = "checkpoint"


@dataclass
class GraphEventManager:
    """
    Manages change listener subscriptions and notifications.

    Listeners are called in registration order. A listener that raises is
    logged and skipped; the remaining listeners are still notified.

    Attributes:
        _listeners (List[ChangeListener]): Registered listeners
    """

    _listeners: List[ChangeListener] = field(default_factory=list)

    def add_listener(self, listener: ChangeListener) -> None:
        """
        Add a change listener.

        Args:
            listener (ChangeListener): Callable taking (kind, id, operation)
        """
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: ChangeListener) -> None:
        """
        Remove a change listener.

        Args:
            listener (ChangeListener): The listener to remove
        """
        if listener in self._listeners:
            self._listeners.remove(listener)

    def notify(self, kind: EntityKind, entity_id: str, operation: ChangeOperation) -> None:
        """
        Notify all listeners of a committed change.

        Args:
            kind (EntityKind): Kind of the changed entity
            entity_id (str): Id of the entity, or a synthetic id for graph-wide changes
            operation (ChangeOperation): What happened to it
        """
        for listener in list(self._listeners):
            try:
                listener(kind, entity_id, operation)
            except Exception as e:
                logger.error(f"Error notifying listener {listener}: {e}")

    def clear_listeners(self) -> None:
        """Remove all listeners."""
        self._listeners.clear()

    def __len__(self) -> int:
        return len(self._listeners)
