"""Semaphore configuration and state snapshot schemas."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field


class OverReleasePolicy(StrEnum):
    """What release() does when no grant is outstanding."""

    RAISE = "raise"
    IGNORE = "ignore"


class WaiterState(StrEnum):
    """Lifecycle of a single acquisition request."""

    PENDING = "PENDING"
    GRANTED = "GRANTED"
    CANCELLED = "CANCELLED"
    TIMED_OUT = "TIMED_OUT"


class SemaphoreConfig(BaseModel):
    """Construction parameters for a Semaphore."""

    capacity: int = Field(gt=0, description="Maximum concurrently granted slots")
    name: str | None = Field(default=None, description="Label used in logs and events")
    over_release: OverReleasePolicy = Field(
        default=OverReleasePolicy.RAISE,
        description="Behaviour of release() without an outstanding grant",
    )
    default_timeout: float | None = Field(
        default=None,
        gt=0,
        description="Seconds a queued acquire waits when no timeout is given",
    )


class SemaphoreStats(BaseModel):
    """Point-in-time view of a semaphore's counters."""

    name: str | None = None
    capacity: int = Field(gt=0)
    available: int = Field(ge=0)
    granted: int = Field(ge=0)
    waiting: int = Field(ge=0)
    total_grants: int = Field(ge=0, default=0)
    total_timeouts: int = Field(ge=0, default=0)
    total_cancellations: int = Field(ge=0, default=0)

    @property
    def saturated(self) -> bool:
        return self.available == 0
