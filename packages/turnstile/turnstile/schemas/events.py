"""Event schemas for semaphore state transitions."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field

from turnstile.core.identifiers import WaiterId


class EventType(StrEnum):
    """All recognized event types."""

    SLOT_ACQUIRED = "SlotAcquired"
    WAITER_QUEUED = "WaiterQueued"
    SLOT_GRANTED = "SlotGranted"
    SLOT_RELEASED = "SlotReleased"
    WAITER_CANCELLED = "WaiterCancelled"
    WAITER_TIMED_OUT = "WaiterTimedOut"
    OVER_RELEASE = "OverRelease"


def _utc_now() -> datetime:
    return datetime.now(UTC)


class SemaphoreEvent(BaseModel):
    """One state transition of a semaphore.

    SlotAcquired is an immediate grant; SlotGranted is a hand-off from
    release() to a queued waiter.
    """

    semaphore: str
    seq: int = Field(ge=0, description="Sequence number within the semaphore")
    timestamp: datetime = Field(default_factory=_utc_now)
    event_type: EventType
    waiter_id: WaiterId | None = None
    payload: dict[str, Any] = Field(default_factory=dict)
