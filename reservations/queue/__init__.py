"""Queue storage, selection and processing services."""

from __future__ import annotations

from importlib import import_module
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from .booking_scheduler import BatchScheduler
    from .processor import ProcessorConfig, RequestProcessor
    from .queue_store import QueueLoad, QueueStore

__all__ = [
    "BatchScheduler",
    "ProcessorConfig",
    "QueueLoad",
    "QueueStore",
    "RequestProcessor",
]


def __getattr__(name: str):
    if name in {"QueueLoad", "QueueStore"}:
        module = import_module("reservations.queue.queue_store")
    elif name in {"ProcessorConfig", "RequestProcessor"}:
        module = import_module("reservations.queue.processor")
    elif name == "BatchScheduler":
        module = import_module("reservations.queue.booking_scheduler")
    else:
        raise AttributeError(name)
    return getattr(module, name)
