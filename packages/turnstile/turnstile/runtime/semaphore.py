"""Semaphore — FIFO counting semaphore for a single asyncio event loop."""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any

from turnstile.core.errors import (
    AcquireTimeoutError,
    InvalidCapacityError,
    InvalidTimeoutError,
    OverReleaseError,
)
from turnstile.core.identifiers import WaiterId, generate_waiter_id
from turnstile.runtime.event_log import EventLog
from turnstile.schemas.events import EventType, SemaphoreEvent
from turnstile.schemas.semaphore import (
    OverReleasePolicy,
    SemaphoreConfig,
    SemaphoreStats,
    WaiterState,
)

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Waiter:
    """A queued acquisition request.

    The future is the single-shot resume capability: it is resolved exactly
    once when release() grants this waiter the slot.
    """

    waiter_id: WaiterId
    future: asyncio.Future[None]
    state: WaiterState = WaiterState.PENDING
    timer: asyncio.TimerHandle | None = None


class Semaphore:
    """Counting semaphore with strict FIFO admission.

    At most ``capacity`` holders exist at once. Excess acquirers queue in
    arrival order and release() hands its slot straight to the head of the
    queue, so a newcomer can never overtake a waiter.

    Every successful acquire must be paired with exactly one release(),
    including on error paths; ``async with semaphore`` does this for you.
    Acquiring again while already holding a slot is a new, independent
    request and deadlocks the caller when capacity is 1.

    All methods must be called from the event loop thread.
    """

    def __init__(
        self,
        capacity: int,
        *,
        name: str | None = None,
        over_release: OverReleasePolicy | str = OverReleasePolicy.RAISE,
        default_timeout: float | None = None,
        event_log: EventLog | None = None,
    ) -> None:
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity < 1:
            raise InvalidCapacityError(
                f"capacity must be a positive integer, got {capacity!r}"
            )
        if default_timeout is not None and default_timeout <= 0:
            raise InvalidTimeoutError(f"default_timeout must be > 0, got {default_timeout!r}")

        self._capacity = capacity
        self._available = capacity
        self._granted = 0
        self._waiters: deque[Waiter] = deque()
        self._name = name or f"semaphore-{id(self):x}"
        self._over_release = OverReleasePolicy(over_release)
        self._default_timeout = default_timeout
        self._event_log = event_log
        self._seq = 0

        self._total_grants = 0
        self._total_timeouts = 0
        self._total_cancellations = 0

    @classmethod
    def from_config(
        cls, config: SemaphoreConfig, event_log: EventLog | None = None
    ) -> Semaphore:
        return cls(
            config.capacity,
            name=config.name,
            over_release=config.over_release,
            default_timeout=config.default_timeout,
            event_log=event_log,
        )

    # ── Introspection ──────────────────────────────────────────────

    @property
    def name(self) -> str:
        return self._name

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def available(self) -> int:
        return self._available

    @property
    def granted(self) -> int:
        return self._granted

    @property
    def waiting(self) -> int:
        return len(self._waiters)

    def locked(self) -> bool:
        """Return True if acquire() would have to wait."""
        return self._available == 0

    def stats(self) -> SemaphoreStats:
        return SemaphoreStats(
            name=self._name,
            capacity=self._capacity,
            available=self._available,
            granted=self._granted,
            waiting=len(self._waiters),
            total_grants=self._total_grants,
            total_timeouts=self._total_timeouts,
            total_cancellations=self._total_cancellations,
        )

    def __repr__(self) -> str:
        return (
            f"<Semaphore {self._name!r} available={self._available}/{self._capacity} "
            f"waiting={len(self._waiters)}>"
        )

    # ── Acquisition ────────────────────────────────────────────────

    async def acquire(self, timeout: float | None = None) -> None:
        """Acquire a slot, waiting in FIFO order if none is free.

        Returns without yielding to the event loop when a slot is free.
        ``timeout`` (or the semaphore's default timeout) bounds how long a
        queued request may wait; on expiry the request leaves the queue and
        AcquireTimeoutError is raised.
        """
        timeout = self._effective_timeout(timeout)
        if self._available > 0:
            self._take_slot()
            self._emit(EventType.SLOT_ACQUIRED)
            return

        waiter = self._enqueue(timeout)
        try:
            await waiter.future
        except asyncio.CancelledError:
            if waiter.state is WaiterState.GRANTED:
                # Granted but cancelled before resuming: pass the slot on.
                self.release()
            elif waiter.state is WaiterState.PENDING:
                self._discard(waiter, WaiterState.CANCELLED)
            raise

    async def acquire_iter(self, timeout: float | None = None) -> AsyncIterator[None]:
        """Iterator-style acquisition.

        Each advance performs one grant cycle and yields once. The sequence
        never ends on its own; callers release and ``break`` after one
        iteration, otherwise the next advance requests another slot::

            async for _ in semaphore.acquire_iter():
                await do_work()
                semaphore.release()
                break
        """
        while True:
            await self.acquire(timeout)
            yield

    def try_acquire(self) -> bool:
        """Take a slot without waiting. Returns True if acquired."""
        if self._available == 0:
            return False
        self._take_slot()
        self._emit(EventType.SLOT_ACQUIRED)
        return True

    @asynccontextmanager
    async def slot(self, timeout: float | None = None) -> AsyncIterator[Semaphore]:
        """Hold a slot for the duration of the block."""
        await self.acquire(timeout)
        try:
            yield self
        finally:
            self.release()

    async def __aenter__(self) -> Semaphore:
        await self.acquire()
        return self

    async def __aexit__(self, *_: object) -> None:
        self.release()

    # ── Release ────────────────────────────────────────────────────

    def release(self) -> None:
        """Return a slot, handing it to the longest waiter if there is one.

        Raises OverReleaseError when no grant is outstanding, unless the
        semaphore was built with OverReleasePolicy.IGNORE.
        """
        if self._granted == 0:
            self._reject_over_release()
            return

        self._emit(EventType.SLOT_RELEASED)
        while self._waiters:
            waiter = self._waiters.popleft()
            if waiter.future.done():
                # Cancelled, but its task has not observed it yet.
                self._discard(waiter, WaiterState.CANCELLED)
                continue
            self._grant(waiter)
            return

        self._granted -= 1
        self._available += 1

    # ── Internals ──────────────────────────────────────────────────

    def _effective_timeout(self, timeout: float | None) -> float | None:
        if timeout is None:
            return self._default_timeout
        if timeout < 0:
            raise InvalidTimeoutError(f"timeout must be >= 0, got {timeout!r}")
        return timeout

    def _take_slot(self) -> None:
        self._available -= 1
        self._granted += 1
        self._total_grants += 1

    def _enqueue(self, timeout: float | None) -> Waiter:
        loop = asyncio.get_running_loop()
        waiter = Waiter(waiter_id=generate_waiter_id(), future=loop.create_future())
        if timeout is not None:
            waiter.timer = loop.call_later(timeout, self._expire, waiter)
        self._waiters.append(waiter)
        logger.debug(
            "Semaphore '%s' full, queued waiter %s (position %d)",
            self._name, waiter.waiter_id, len(self._waiters),
        )
        self._emit(EventType.WAITER_QUEUED, waiter, timeout=timeout)
        return waiter

    def _grant(self, waiter: Waiter) -> None:
        if waiter.timer is not None:
            waiter.timer.cancel()
        waiter.state = WaiterState.GRANTED
        waiter.future.set_result(None)
        self._total_grants += 1
        logger.debug("Semaphore '%s' granted slot to waiter %s", self._name, waiter.waiter_id)
        self._emit(EventType.SLOT_GRANTED, waiter)

    def _expire(self, waiter: Waiter) -> None:
        if waiter.state is not WaiterState.PENDING:
            return
        if waiter.future.done():
            self._discard(waiter, WaiterState.CANCELLED)
            return
        self._discard(waiter, WaiterState.TIMED_OUT)
        waiter.future.set_exception(
            AcquireTimeoutError(f"Timed out waiting for a slot on semaphore '{self._name}'")
        )

    def _discard(self, waiter: Waiter, state: WaiterState) -> None:
        """Drop a pending waiter without granting it."""
        if waiter.state is not WaiterState.PENDING:
            return
        if waiter in self._waiters:
            self._waiters.remove(waiter)
        if waiter.timer is not None:
            waiter.timer.cancel()
        waiter.state = state

        if state is WaiterState.TIMED_OUT:
            self._total_timeouts += 1
            event_type = EventType.WAITER_TIMED_OUT
        else:
            self._total_cancellations += 1
            event_type = EventType.WAITER_CANCELLED
        logger.debug(
            "Semaphore '%s' dropped waiter %s (%s)", self._name, waiter.waiter_id, state.value
        )
        self._emit(event_type, waiter)

    def _reject_over_release(self) -> None:
        self._emit(EventType.OVER_RELEASE, policy=self._over_release.value)
        if self._over_release is OverReleasePolicy.RAISE:
            raise OverReleaseError(
                f"Semaphore '{self._name}' released with no outstanding grant"
            )
        logger.warning(
            "Ignoring release() on semaphore '%s' with no outstanding grant", self._name
        )

    def _emit(self, event_type: EventType, waiter: Waiter | None = None, **extra: Any) -> None:
        if self._event_log is None:
            return
        payload: dict[str, Any] = {
            "available": self._available,
            "granted": self._granted,
            "waiting": len(self._waiters),
        }
        payload.update(extra)
        self._event_log.append(
            SemaphoreEvent(
                semaphore=self._name,
                seq=self._seq,
                event_type=event_type,
                waiter_id=waiter.waiter_id if waiter is not None else None,
                payload=payload,
            )
        )
        self._seq += 1
