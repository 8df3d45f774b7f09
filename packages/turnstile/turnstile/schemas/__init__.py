"""turnstile schemas — Pydantic v2 models for configuration, stats and events."""

from turnstile.schemas.events import EventType, SemaphoreEvent
from turnstile.schemas.semaphore import (
    OverReleasePolicy,
    SemaphoreConfig,
    SemaphoreStats,
    WaiterState,
)

__all__ = [
    "EventType",
    "OverReleasePolicy",
    "SemaphoreConfig",
    "SemaphoreEvent",
    "SemaphoreStats",
    "WaiterState",
]
