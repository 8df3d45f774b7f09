"""turnstile — a FIFO counting semaphore for asyncio."""

from turnstile.core.errors import (
    AcquireTimeoutError,
    ConfigError,
    InvalidCapacityError,
    InvalidTimeoutError,
    OverReleaseError,
    TurnstileError,
)
from turnstile.runtime.event_log import EventLog, InMemoryEventLog
from turnstile.runtime.semaphore import Semaphore
from turnstile.schemas.events import EventType, SemaphoreEvent
from turnstile.schemas.semaphore import (
    OverReleasePolicy,
    SemaphoreConfig,
    SemaphoreStats,
    WaiterState,
)
from turnstile.settings import SemaphoreSettings, load_config

__all__ = [
    "AcquireTimeoutError",
    "ConfigError",
    "EventLog",
    "EventType",
    "InMemoryEventLog",
    "InvalidCapacityError",
    "InvalidTimeoutError",
    "OverReleaseError",
    "OverReleasePolicy",
    "Semaphore",
    "SemaphoreConfig",
    "SemaphoreEvent",
    "SemaphoreSettings",
    "SemaphoreStats",
    "TurnstileError",
    "WaiterState",
    "load_config",
]
