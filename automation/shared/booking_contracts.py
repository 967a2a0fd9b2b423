"""Shared contracts between the request processor and booking-site adapters."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Protocol

from reservations.models import RequestStatus, time_to_minutes


@dataclass(frozen=True)
class RenderedSlot:
    """One tee-sheet row as the site rendered it, before any filtering."""

    time_text: str
    open_spots: Optional[int]
    selector: str
    unavailable: bool = False


@dataclass(frozen=True)
class SlotCandidate:
    """A qualifying slot: normalized ``HH:MM`` time plus the selector to click."""

    time: str
    selector: str

    @property
    def minutes(self) -> int:
        return time_to_minutes(self.time)


@dataclass(frozen=True)
class ConfirmationResult:
    """What the confirmation sub-flow reported back."""

    confirmed: bool
    confirmation_number: Optional[str] = None
    message: Optional[str] = None


@dataclass(frozen=True)
class BookingOutcome:
    """Terminal result of processing one request (the last attempt's result)."""

    status: RequestStatus
    booked_time: Optional[str] = None
    confirmation_number: Optional[str] = None
    failure_reason: Optional[str] = None
    attempts: int = 1

    @property
    def success(self) -> bool:
        return self.status is RequestStatus.SUCCESS

    @classmethod
    def booked(
        cls,
        booked_time: str,
        confirmation_number: Optional[str] = None,
        *,
        attempts: int = 1,
    ) -> "BookingOutcome":
        return cls(
            status=RequestStatus.SUCCESS,
            booked_time=booked_time,
            confirmation_number=confirmation_number,
            attempts=attempts,
        )

    @classmethod
    def failed(cls, reason: str, *, attempts: int = 1) -> "BookingOutcome":
        return cls(status=RequestStatus.FAILED, failure_reason=reason, attempts=attempts)

    @classmethod
    def errored(cls, reason: str, *, attempts: int = 1) -> "BookingOutcome":
        return cls(status=RequestStatus.ERROR, failure_reason=reason, attempts=attempts)

    def with_attempts(self, attempts: int) -> "BookingOutcome":
        return BookingOutcome(
            status=self.status,
            booked_time=self.booked_time,
            confirmation_number=self.confirmation_number,
            failure_reason=self.failure_reason,
            attempts=attempts,
        )

    def summary_line(self, request_id: str) -> str:
        """Human-readable one-liner used in the run results."""

        if self.status is RequestStatus.SUCCESS:
            line = f"✅ Request {request_id}: Booked for {self.booked_time}"
            if self.confirmation_number:
                line += f" (Confirmation: {self.confirmation_number})"
            return line
        if self.status is RequestStatus.FAILED:
            return f"❌ Request {request_id}: {self.failure_reason}"
        return f"⚠️ Request {request_id}: Error - {self.failure_reason}"


class Capturable(Protocol):
    """Anything that can save a visual snapshot of itself."""

    async def capture(self, path: Path) -> None:
        ...


class BookingSite(Protocol):
    """Capabilities the processor needs from a tee-sheet adapter."""

    async def select_date(self, label: str) -> bool:
        """Click the date control labelled ``label``; False when it is absent."""

    async def wait_for_date_loaded(self, label: str, timeout_ms: int) -> None:
        """Block until the site confirms ``label`` is the loaded date."""

    async def list_slots(self) -> List[RenderedSlot]:
        """Return every slot row currently rendered."""

    async def select_slot(self, slot: SlotCandidate) -> None:
        """Click the chosen slot."""

    async def confirm(self) -> ConfirmationResult:
        """Run the confirmation sub-flow for the selected slot."""

    async def capture(self, path: Path) -> None:
        """Save a visual snapshot of the current state to ``path``."""


class BookingSurface(Protocol):
    """Something that can (re)open the booking surface and hand back a site."""

    async def navigate_to_booking_surface(self) -> BookingSite:
        ...

    async def capture(self, path: Path) -> None:
        """Snapshot whatever page is open, even when no site could be bound."""


__all__ = [
    "BookingOutcome",
    "BookingSite",
    "BookingSurface",
    "Capturable",
    "ConfirmationResult",
    "RenderedSlot",
    "SlotCandidate",
]
