"""Split due requests into batches and hand them to workers."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from reservations.models import BookingRequest


@dataclass
class WorkerJob:
    """The requests one worker session processes, in order."""

    worker_id: int
    batch_number: int
    requests: List[BookingRequest] = field(default_factory=list)
    clock_started_at: Optional[float] = None
    clock_paused: bool = False

    @property
    def request_ids(self) -> List[str]:
        return [request.id for request in self.requests]

    def start_clock(self) -> None:
        """(Re)start the timeout clock from now."""

        self.clock_started_at = asyncio.get_running_loop().time()
        self.clock_paused = False

    def pause_clock(self) -> None:
        """Stop counting time against the worker timeout (e.g. while gated)."""

        self.clock_paused = True

    def deadline(self, timeout_seconds: float) -> Optional[float]:
        if self.clock_paused or self.clock_started_at is None:
            return None
        return self.clock_started_at + timeout_seconds


def partition_batches(requests: Sequence[BookingRequest], batch_size: int) -> List[List[BookingRequest]]:
    """Consecutive chunks of at most ``batch_size``, preserving queue order."""

    if batch_size < 1:
        raise ValueError("batch_size must be at least 1")
    return [list(requests[i:i + batch_size]) for i in range(0, len(requests), batch_size)]


def assign_workers(batch: Sequence[BookingRequest], batch_size: int, batch_number: int = 1) -> List[WorkerJob]:
    """Round-robin ``batch`` across ``min(batch_size, len(batch))`` workers."""

    worker_count = min(batch_size, len(batch))
    jobs = [WorkerJob(worker_id=index + 1, batch_number=batch_number) for index in range(worker_count)]
    for position, request in enumerate(batch):
        jobs[position % worker_count].requests.append(request)
    return jobs
