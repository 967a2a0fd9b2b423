"""Run one batch of worker jobs concurrently, each under its own timeout."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Dict, List, Optional, Set, Tuple

from automation.shared.booking_contracts import BookingOutcome

from .batching import WorkerJob

OutcomeSink = Dict[str, BookingOutcome]

# How often paused workers are re-checked for a restarted clock.
PAUSED_POLL_SECONDS = 1.0


async def dispatch_to_workers(
    jobs: List[WorkerJob],
    *,
    execute_worker: Callable[[WorkerJob, OutcomeSink], Awaitable[None]],
    logger: Optional[logging.Logger] = None,
    timeout_seconds: float = 900.0,
) -> Tuple[OutcomeSink, Dict[str, str]]:
    """Execute worker jobs concurrently and return outcomes/timeouts.

    Each worker's clock starts when its task is created. A worker may pause
    its clock (``WorkerJob.pause_clock``) while it waits on something that is
    not booking work, and restart it afterwards; paused time never counts
    toward ``timeout_seconds``.

    Workers report each finished request into the shared sink, so a worker
    cancelled on timeout still contributes the requests it completed. Ids it
    never got to are returned in the timeout map. Any other exception raised
    by a worker propagates after the remaining workers are cancelled.
    """

    if not jobs:
        return {}, {}

    loop = asyncio.get_running_loop()
    outcomes: OutcomeSink = {}
    task_map: Dict["asyncio.Task[None]", WorkerJob] = {}
    for job in jobs:
        job.start_clock()
        task = asyncio.create_task(
            execute_worker(job, outcomes),
            name=f"batch-{job.batch_number}-worker-{job.worker_id}",
        )
        task_map[task] = job

    pending: Set["asyncio.Task[None]"] = set(task_map)
    expired: List["asyncio.Task[None]"] = []

    while pending:
        now = loop.time()
        for task in list(pending):
            deadline = task_map[task].deadline(timeout_seconds)
            if deadline is not None and deadline <= now:
                pending.discard(task)
                expired.append(task)
                task.cancel()
        if not pending:
            break

        deadlines = [
            deadline for deadline in (task_map[task].deadline(timeout_seconds) for task in pending)
            if deadline is not None
        ]
        wait_for = min(deadlines) - now if deadlines else None
        if len(deadlines) < len(pending):
            wait_for = PAUSED_POLL_SECONDS if wait_for is None else min(wait_for, PAUSED_POLL_SECONDS)

        done, pending = await asyncio.wait(
            pending,
            return_when=asyncio.FIRST_EXCEPTION,
            timeout=wait_for,
        )

        failed = [task for task in done if not task.cancelled() and task.exception() is not None]
        if failed:
            for task in (*pending, *expired):
                task.cancel()
            await asyncio.gather(*pending, *expired, return_exceptions=True)
            job = task_map[failed[0]]
            if logger:
                logger.error(
                    "Worker %s of batch %s failed: %s",
                    job.worker_id,
                    job.batch_number,
                    failed[0].exception(),
                )
            raise failed[0].exception()

    timeouts: Dict[str, str] = {}
    if expired:
        if logger:
            logger.warning("Found %s hanging worker(s) - cancelling them", len(expired))
        timeout_message = f"Booking timed out after {timeout_seconds:g} seconds"
        await asyncio.gather(*expired, return_exceptions=True)
        for task in expired:
            job = task_map[task]
            if logger:
                logger.warning(
                    "Cancelled worker %s of batch %s (requests %s)",
                    job.worker_id,
                    job.batch_number,
                    ", ".join(job.request_ids),
                )
            for request_id in job.request_ids:
                if request_id not in outcomes:
                    timeouts[request_id] = timeout_message

    return outcomes, timeouts
