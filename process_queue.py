"""Entry point: process today's tee-time booking requests once and exit."""

from __future__ import annotations

import asyncio
import logging
import sys
from datetime import timedelta
from typing import Optional

from automation.availability.slot_finder import SlotFinder
from automation.browser.session import BookingSession, SimulatedSession
from automation.debug.diagnostics import DiagnosticCapture
from infrastructure.errors import BookingBotError
from infrastructure.logging_config import setup_logging
from infrastructure.outputs import publish_run_outputs
from infrastructure.settings import AppSettings, get_settings
from reservations.queue.booking_scheduler import BatchScheduler
from reservations.queue.processor import ProcessorConfig, RequestProcessor
from reservations.queue.queue_store import QueueStore
from reservations.queue.scheduler import STATUS_FAILURE, RunReport, TimingGate

logger = logging.getLogger("BookingScheduler")


def build_scheduler(settings: AppSettings) -> BatchScheduler:
    """Wire the scheduler for real or simulated booking from ``settings``."""

    if settings.simulate_booking:
        logger.info("SIMULATION MODE: no browser will be started")

        def session_factory():
            return SimulatedSession(party_size=settings.required_party_size)
    else:

        def session_factory():
            return BookingSession(settings.credentials, headless=settings.headless)

    diagnostics = DiagnosticCapture(
        settings.log_dir,
        enabled=settings.take_screenshots and not settings.simulate_booking,
    )
    processor = RequestProcessor(
        SlotFinder(settings.required_party_size),
        diagnostics,
        config=ProcessorConfig(
            max_attempts=settings.max_attempts,
            retry_delay_seconds=settings.retry_delay_seconds,
            settle_seconds=0.0 if settings.simulate_booking else settings.settle_seconds,
        ),
    )

    gate: Optional[TimingGate] = None
    if settings.scheduled_run:
        hour, minute = settings.booking_open_time
        gate = TimingGate(
            settings.timezone,
            hour,
            minute,
            late_grace=timedelta(minutes=settings.gate_late_grace_minutes),
        )

    return BatchScheduler(
        settings,
        store=QueueStore(settings.queue_file),
        processor=processor,
        session_factory=session_factory,
        gate=gate,
    )


def main() -> int:
    try:
        settings = get_settings()
    except BookingBotError as exc:
        logging.basicConfig(level=logging.INFO)
        logger.error("Invalid configuration: %s", exc)
        publish_run_outputs(0, STATUS_FAILURE, f"Fatal error: {exc}")
        return 1

    setup_logging(settings.log_dir, production_mode=settings.production_mode)
    try:
        report: RunReport = asyncio.run(build_scheduler(settings).run())
    except Exception as exc:
        logger.exception("Fatal error processing booking queue: %s", exc)
        publish_run_outputs(0, STATUS_FAILURE, f"Fatal error: {exc}")
        return 1

    publish_run_outputs(report.processed_count, report.booking_status, "\n".join(report.results))
    return 0


if __name__ == "__main__":
    sys.exit(main())
