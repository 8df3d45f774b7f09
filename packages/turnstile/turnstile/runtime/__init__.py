"""turnstile runtime — the semaphore and its event log."""

from turnstile.runtime.event_log import EventLog, InMemoryEventLog
from turnstile.runtime.semaphore import Semaphore, Waiter

__all__ = [
    "EventLog",
    "InMemoryEventLog",
    "Semaphore",
    "Waiter",
]
