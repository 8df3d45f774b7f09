"""Tests for the event log and the events a semaphore records."""

import asyncio

import pytest

from turnstile.core.errors import OverReleaseError
from turnstile.runtime.event_log import InMemoryEventLog
from turnstile.runtime.semaphore import Semaphore
from turnstile.schemas.events import EventType, SemaphoreEvent

from tests.conftest import assert_event_sequence, settle


class TestInMemoryEventLog:
    def test_append_and_query(self) -> None:
        log = InMemoryEventLog()
        log.append(SemaphoreEvent(semaphore="a", seq=1, event_type=EventType.SLOT_RELEASED))
        log.append(SemaphoreEvent(semaphore="a", seq=0, event_type=EventType.SLOT_ACQUIRED))
        log.append(SemaphoreEvent(semaphore="b", seq=0, event_type=EventType.SLOT_ACQUIRED))

        events = log.query("a")
        assert [e.seq for e in events] == [0, 1]
        assert len(log) == 3

    def test_query_by_type(self) -> None:
        log = InMemoryEventLog()
        log.append(SemaphoreEvent(semaphore="a", seq=0, event_type=EventType.SLOT_ACQUIRED))
        log.append(SemaphoreEvent(semaphore="a", seq=1, event_type=EventType.SLOT_RELEASED))

        released = log.query_by_type("a", EventType.SLOT_RELEASED)
        assert len(released) == 1
        assert released[0].seq == 1

    def test_clear(self) -> None:
        log = InMemoryEventLog()
        log.append(SemaphoreEvent(semaphore="a", seq=0, event_type=EventType.SLOT_ACQUIRED))
        log.clear()
        assert len(log) == 0
        assert log.query("a") == []


class TestSemaphoreEvents:
    @pytest.mark.asyncio
    async def test_immediate_acquire_and_release(self, make_semaphore, event_log) -> None:
        sem = make_semaphore(1)
        await sem.acquire()
        sem.release()

        events = event_log.query("test")
        assert_event_sequence(events, [EventType.SLOT_ACQUIRED, EventType.SLOT_RELEASED])
        assert [e.seq for e in events] == [0, 1]
        assert events[0].payload == {"available": 0, "granted": 1, "waiting": 0}

    @pytest.mark.asyncio
    async def test_queued_hand_off(self, make_semaphore, event_log) -> None:
        sem = make_semaphore(1)
        await sem.acquire()
        waiter = asyncio.create_task(sem.acquire())
        await settle()
        sem.release()
        await waiter

        events = event_log.query("test")
        assert_event_sequence(
            events,
            [
                EventType.SLOT_ACQUIRED,
                EventType.WAITER_QUEUED,
                EventType.SLOT_RELEASED,
                EventType.SLOT_GRANTED,
            ],
        )
        queued, granted = events[1], events[3]
        assert queued.waiter_id is not None
        assert queued.waiter_id == granted.waiter_id
        assert queued.payload["timeout"] is None

    @pytest.mark.asyncio
    async def test_timeout_and_cancel_events(self, make_semaphore, event_log) -> None:
        sem = make_semaphore(1)
        await sem.acquire()

        with pytest.raises(TimeoutError):
            await sem.acquire(timeout=0.01)

        waiter = asyncio.create_task(sem.acquire())
        await settle()
        waiter.cancel()
        await settle()

        assert len(event_log.query_by_type("test", EventType.WAITER_TIMED_OUT)) == 1
        assert len(event_log.query_by_type("test", EventType.WAITER_CANCELLED)) == 1

    def test_over_release_event(self, make_semaphore, event_log) -> None:
        sem = make_semaphore(1)
        with pytest.raises(OverReleaseError):
            sem.release()

        (event,) = event_log.query_by_type("test", EventType.OVER_RELEASE)
        assert event.payload["policy"] == "raise"

    def test_no_log_no_events(self, event_log) -> None:
        sem = Semaphore(1, name="test")
        assert sem.try_acquire()
        sem.release()
        assert len(event_log) == 0
