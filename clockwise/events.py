"""A small publish/subscribe bus for sprite events."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum, auto
from typing import Any

MAX_SUBSCRIPTIONS = 5


class EventType(Enum):
    """Kinds of events a sprite can broadcast."""

    MOVE = auto()
    COLLISION = auto()


class EventTask(ABC):
    """Something that reacts to broadcast events."""

    @abstractmethod
    def execute(self, event: EventType, caller: Any) -> None:
        """Handle ``event`` sent by ``caller``."""


class EventBusFullError(RuntimeError):
    """Raised when a bus has no room for another subscriber."""


class EventBus:
    """Delivers events to up to ``capacity`` subscribed tasks, in order."""

    def __init__(self, capacity: int = MAX_SUBSCRIPTIONS) -> None:
        self.capacity = capacity
        self._subscriptions: list[EventTask] = []

    @property
    def subscriptions(self) -> tuple[EventTask, ...]:
        return tuple(self._subscriptions)

    def subscribe(self, task: EventTask) -> None:
        """Add ``task`` to the subscribers."""
        if len(self._subscriptions) >= self.capacity:
            raise EventBusFullError("Out of space")
        self._subscriptions.append(task)

    def broadcast(self, event: EventType, sender: Any) -> None:
        """Send ``event`` from ``sender`` to every subscriber."""
        for task in tuple(self._subscriptions):
            task.execute(event, sender)