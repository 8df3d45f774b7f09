"""Event log — append-only record of semaphore transitions."""

from __future__ import annotations

from abc import ABC, abstractmethod

from turnstile.schemas.events import EventType, SemaphoreEvent


class EventLog(ABC):
    """Abstract interface for the append-only event log."""

    @abstractmethod
    def append(self, event: SemaphoreEvent) -> None:
        """Append an event to the log. Must preserve ordering."""

    @abstractmethod
    def query(self, semaphore: str) -> list[SemaphoreEvent]:
        """Return all events for a semaphore, ordered by sequence number."""

    @abstractmethod
    def query_by_type(self, semaphore: str, event_type: EventType) -> list[SemaphoreEvent]:
        """Return events of a specific type for a semaphore."""

    @abstractmethod
    def clear(self) -> None:
        """Drop every recorded event."""


class InMemoryEventLog(EventLog):
    """List-backed event log for a single event loop."""

    def __init__(self) -> None:
        self._events: list[SemaphoreEvent] = []

    def __len__(self) -> int:
        return len(self._events)

    def append(self, event: SemaphoreEvent) -> None:
        self._events.append(event)

    def query(self, semaphore: str) -> list[SemaphoreEvent]:
        matching = [e for e in self._events if e.semaphore == semaphore]
        return sorted(matching, key=lambda e: e.seq)

    def query_by_type(self, semaphore: str, event_type: EventType) -> list[SemaphoreEvent]:
        return [e for e in self.query(semaphore) if e.event_type == event_type]

    def clear(self) -> None:
        self._events.clear()
