"""Bounded jobs demo — run five jobs through a two-slot semaphore.

Usage:
    TURNSTILE_CAPACITY=2 python examples/bounded_jobs_demo.py
"""

from __future__ import annotations

import asyncio
import logging

from turnstile import InMemoryEventLog, Semaphore, load_config


# --- A consumer that receives the semaphore instead of reaching for a global ---

class JobRunner:
    def __init__(self, semaphore: Semaphore) -> None:
        self._semaphore = semaphore

    async def run(self, job_id: int) -> None:
        async with self._semaphore:
            print(f"Job {job_id} is starting")
            await asyncio.sleep(0.1 * job_id)
            print(f"Job {job_id} is finished")

    async def run_with_iterator(self, job_id: int) -> None:
        async for _ in self._semaphore.acquire_iter():
            print(f"Job {job_id} (iterator) is starting")
            await asyncio.sleep(0.05)
            print(f"Job {job_id} (iterator) is finished")
            self._semaphore.release()
            break


async def main() -> None:
    logging.basicConfig(level=logging.INFO)

    # 1. Build the semaphore from env and attach an event log
    config = load_config()
    event_log = InMemoryEventLog()
    semaphore = Semaphore.from_config(config.model_copy(update={"name": "jobs"}), event_log)
    print(f"Semaphore: {semaphore!r}")

    # 2. Run jobs through both acquisition styles
    runner = JobRunner(semaphore)
    await asyncio.gather(*(runner.run(i) for i in range(1, 4)))
    await asyncio.gather(*(runner.run_with_iterator(i) for i in range(4, 6)))

    # 3. Inspect the trail
    print(f"Final stats: {semaphore.stats().model_dump()}")
    for event in event_log.query("jobs"):
        print(f"  [{event.seq}] {event.event_type.value} {event.payload}")


if __name__ == "__main__":
    asyncio.run(main())
