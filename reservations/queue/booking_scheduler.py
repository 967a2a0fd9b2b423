"""Orchestrate one queue processing run: load, select, batch, commit."""

from __future__ import annotations

import logging
import time
from datetime import date, datetime
from typing import Any, Callable, List, Optional

import pytz

from automation.shared.booking_contracts import BookingOutcome
from infrastructure.errors import ConfigurationError
from infrastructure.settings import AppSettings
from reservations.models import BookingRequest
from reservations.queue.eligibility import resolve_today, select_due_requests
from reservations.queue.processor import RequestProcessor
from reservations.queue.queue_store import QueueLoad, QueueStore
from reservations.queue.request_builder import seed_test_queue
from reservations.queue.scheduler import (
    RunReport,
    TimingGate,
    WorkerJob,
    assign_workers,
    commit_outcomes,
    dispatch_to_workers,
    partition_batches,
)
from reservations.queue.scheduler.dispatch import OutcomeSink
from reservations.queue.transitions import apply_outcome

EMPTY_QUEUE_MESSAGE = "No booking requests in queue."
NOTHING_DUE_MESSAGE = "No booking requests for today."

SessionFactory = Callable[[], Any]


class BatchScheduler:
    """Process today's due requests in sequential batches of parallel workers.

    Nothing is written to the queue until every batch has finished; a fatal
    error anywhere before that leaves the stored document untouched.
    """

    def __init__(
        self,
        settings: AppSettings,
        *,
        store: QueueStore,
        processor: RequestProcessor,
        session_factory: SessionFactory,
        gate: Optional[TimingGate] = None,
        clock: Optional[Callable[[], datetime]] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.settings = settings
        self.store = store
        self.processor = processor
        self.session_factory = session_factory
        self.gate = gate
        self._clock = clock
        self.logger = logger or logging.getLogger("BookingScheduler")

    def _today(self) -> date:
        try:
            return resolve_today(self.settings.timezone, self.settings.date_override, clock=self._clock)
        except pytz.UnknownTimeZoneError as exc:
            raise ConfigurationError(f"Unknown BOOKING_TIMEZONE {self.settings.timezone!r}") from exc

    def _load(self, today: date) -> QueueLoad:
        if self.settings.test_mode:
            self.logger.info("TEST MODE: using %s", self.store.path)
            seeded = seed_test_queue(self.store, today, self._clock() if self._clock else None)
            if seeded is not None:
                return seeded
        return self.store.load()

    async def run(self) -> RunReport:
        started = time.monotonic()
        today = self._today()
        self.logger.info("Starting booking queue processing for %s", today.isoformat())

        loaded = self._load(today)
        queue = loaded.data
        if not queue.booking_requests:
            self.logger.info(EMPTY_QUEUE_MESSAGE)
            return RunReport.nothing_to_do(EMPTY_QUEUE_MESSAGE)

        due = select_due_requests(
            queue.booking_requests,
            today,
            lead_days=self.settings.lead_days,
            grace_days=self.settings.grace_days,
        )
        if not due:
            self.logger.info(NOTHING_DUE_MESSAGE)
            return RunReport.nothing_to_do(NOTHING_DUE_MESSAGE)

        if not self.settings.simulate_booking and self.settings.credentials is None:
            raise ConfigurationError("Golf course credentials not found in environment variables")

        self.logger.info("Found %s booking request(s) to process", len(due))
        report = RunReport()
        resolved: List[BookingRequest] = []
        batches = partition_batches(due, self.settings.batch_size)

        for batch_number, batch in enumerate(batches, start=1):
            self.logger.info(
                "Processing batch %s/%s (%s request(s))", batch_number, len(batches), len(batch)
            )
            jobs = assign_workers(batch, self.settings.batch_size, batch_number)
            outcomes, timeouts = await dispatch_to_workers(
                jobs,
                execute_worker=self._run_worker,
                logger=self.logger,
                timeout_seconds=self.settings.worker_timeout_seconds,
            )
            for request in batch:
                outcome = outcomes.get(request.id)
                if outcome is None:
                    reason = timeouts.get(request.id, "Request was not processed")
                    outcome = BookingOutcome.errored(reason, attempts=0)
                if request.is_pending:
                    apply_outcome(request, outcome, self._clock() if self._clock else None)
                report.record(request.id, outcome)
                resolved.append(request)

        commit_outcomes(queue, resolved)
        self.store.save(queue, expected_version=loaded.version)

        report.elapsed_seconds = time.monotonic() - started
        self.logger.info("Booking queue processing complete\n%s", report.format_report())
        return report

    async def _run_worker(self, job: WorkerJob, sink: OutcomeSink) -> None:
        self.logger.info(
            "Worker %s of batch %s starting with %s request(s)",
            job.worker_id,
            job.batch_number,
            len(job.requests),
        )
        async with self.session_factory() as session:
            if self.gate is not None:
                # the gate wait does not count toward the worker timeout
                job.pause_clock()
                try:
                    await self.gate.wait()
                finally:
                    job.start_clock()
            for request in job.requests:
                sink[request.id] = await self.processor.process(request, session)
