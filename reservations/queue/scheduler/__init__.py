"""Batch scheduling helpers for the booking queue."""

from .batching import WorkerJob, assign_workers, partition_batches
from .dispatch import dispatch_to_workers
from .metrics import STATUS_FAILURE, STATUS_SUCCESS, RunReport
from .outcome import commit_outcomes
from .timing_gate import TimingGate

__all__ = [
    "WorkerJob",
    "assign_workers",
    "partition_batches",
    "dispatch_to_workers",
    "RunReport",
    "STATUS_FAILURE",
    "STATUS_SUCCESS",
    "commit_outcomes",
    "TimingGate",
]
