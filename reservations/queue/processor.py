"""Process one booking request against an open booking session, with retries."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Awaitable, Callable, Optional

from automation.availability.slot_finder import SlotFinder
from automation.availability.time_utils import date_label
from automation.debug.diagnostics import DiagnosticCapture
from automation.shared.booking_contracts import BookingOutcome, BookingSite, BookingSurface
from infrastructure.constants import (
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_RETRY_DELAY_SECONDS,
    DEFAULT_SETTLE_SECONDS,
    READY_TIMEOUT_MS,
)
from reservations.models import BookingRequest, TimeRange
from reservations.queue.transitions import apply_outcome

Sleeper = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class ProcessorConfig:
    """Retry and pacing knobs for :class:`RequestProcessor`."""

    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    retry_delay_seconds: float = DEFAULT_RETRY_DELAY_SECONDS
    settle_seconds: float = DEFAULT_SETTLE_SECONDS
    ready_timeout_ms: int = READY_TIMEOUT_MS


class RequestProcessor:
    """Drive a single request to a terminal outcome.

    Every attempt starts by reloading the booking surface, so a retry never
    inherits half-finished UI state from the previous attempt. The request
    itself is only updated once, after the last attempt.
    """

    def __init__(
        self,
        slot_finder: SlotFinder,
        diagnostics: DiagnosticCapture,
        *,
        config: Optional[ProcessorConfig] = None,
        logger: Optional[logging.Logger] = None,
        sleep: Sleeper = asyncio.sleep,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.slot_finder = slot_finder
        self.diagnostics = diagnostics
        self.config = config or ProcessorConfig()
        self.logger = logger or logging.getLogger("RequestProcessor")
        self._sleep = sleep
        self._clock = clock

    async def process(self, request: BookingRequest, surface: BookingSurface) -> BookingOutcome:
        """Run attempts until success or the attempt budget is spent, then record it."""

        self.logger.info("Processing request %s for %s", request.id, request.play_date)

        try:
            play_date = request.parsed_play_date()
            time_range = request.parsed_time_range()
        except ValueError as exc:
            self.logger.error("Request %s is malformed: %s", request.id, exc)
            outcome = BookingOutcome.errored(str(exc), attempts=0)
            self._record(request, outcome)
            return outcome

        label = date_label(play_date)
        attempts = max(1, self.config.max_attempts)
        outcome = BookingOutcome.errored("Request was not attempted", attempts=0)

        for attempt in range(1, attempts + 1):
            self.logger.info("Attempt %s/%s for request %s", attempt, attempts, request.id)
            outcome = (await self._attempt(request, surface, label, time_range)).with_attempts(attempt)
            if outcome.success:
                break
            self.logger.warning(
                "Attempt %s for request %s ended as %s: %s",
                attempt,
                request.id,
                outcome.status.value,
                outcome.failure_reason,
            )
            if attempt < attempts:
                self.logger.info("Waiting %ss before retrying request %s", self.config.retry_delay_seconds, request.id)
                await self._sleep(self.config.retry_delay_seconds)

        self._record(request, outcome)
        return outcome

    async def _attempt(
        self,
        request: BookingRequest,
        surface: BookingSurface,
        label: str,
        time_range: TimeRange,
    ) -> BookingOutcome:
        site: Optional[BookingSite] = None
        try:
            site = await surface.navigate_to_booking_surface()

            self.logger.info("Selecting date: %s", label)
            if not await site.select_date(label):
                await self.diagnostics.capture(site, "failed-to-select-date", request.id)
                return BookingOutcome.failed(f'Could not select date "{label}"')

            await site.wait_for_date_loaded(label, self.config.ready_timeout_ms)
            if self.config.settle_seconds:
                await self._sleep(self.config.settle_seconds)

            slot = self.slot_finder.find(await site.list_slots(), time_range)
            if slot is None:
                await self.diagnostics.capture(site, "no-available-time", request.id)
                return BookingOutcome.failed(
                    f"No times with {self.slot_finder.required_party_size} spots in range"
                )

            self.logger.info("Booking tee time %s for request %s", slot.time, request.id)
            await site.select_slot(slot)
            confirmation = await site.confirm()
            if not confirmation.confirmed:
                await self.diagnostics.capture(site, "booking-error", request.id)
                return BookingOutcome.errored(confirmation.message or "Booking was not confirmed")

            await self.diagnostics.capture(site, "booking-confirmation", request.id)
            self.logger.info(
                "Booked %s for request %s (confirmation %s)",
                slot.time,
                request.id,
                confirmation.confirmation_number,
            )
            return BookingOutcome.booked(slot.time, confirmation.confirmation_number)
        except Exception as exc:
            self.logger.error("Error booking tee time for request %s: %s", request.id, exc)
            # navigation failures leave no site; the session page is still open
            await self.diagnostics.capture(site or surface, "booking-error", request.id)
            return BookingOutcome.errored(str(exc) or exc.__class__.__name__)

    def _record(self, request: BookingRequest, outcome: BookingOutcome) -> None:
        processed_at = self._clock() if self._clock else None
        apply_outcome(request, outcome, processed_at)
