"""Shared test fixtures for turnstile."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any

import pytest

from turnstile.runtime.event_log import InMemoryEventLog
from turnstile.runtime.semaphore import Semaphore
from turnstile.schemas.events import EventType, SemaphoreEvent


# ── Fixtures ───────────────────────────────────────────────────────


@pytest.fixture()
def event_log():
    """Fresh InMemoryEventLog."""
    log = InMemoryEventLog()
    yield log
    log.clear()


@pytest.fixture()
def make_semaphore(event_log) -> Callable[..., Semaphore]:
    """Factory for named semaphores wired to the shared event log."""

    def _make(capacity: int = 1, **kwargs: Any) -> Semaphore:
        kwargs.setdefault("name", "test")
        kwargs.setdefault("event_log", event_log)
        return Semaphore(capacity, **kwargs)

    return _make


# ── Helpers ────────────────────────────────────────────────────────


async def settle(rounds: int = 5) -> None:
    """Let every ready task run until nothing is left to wake."""
    for _ in range(rounds):
        await asyncio.sleep(0)


# ── Assertion Helpers ──────────────────────────────────────────────


def assert_event_sequence(events: list[SemaphoreEvent], expected_types: list[EventType]) -> None:
    """Assert that events match the expected EventType sequence."""
    actual = [e.event_type for e in events]
    assert actual == expected_types, (
        f"Event sequence mismatch.\n"
        f"  Expected: {[t.value for t in expected_types]}\n"
        f"  Actual:   {[t.value for t in actual]}"
    )


def assert_no_leaks(semaphore: Semaphore) -> None:
    """Assert a semaphore is back to its idle state."""
    assert semaphore.available == semaphore.capacity, repr(semaphore)
    assert semaphore.granted == 0, repr(semaphore)
    assert semaphore.waiting == 0, repr(semaphore)
