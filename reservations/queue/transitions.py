"""State transition helpers for queued booking requests."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from automation.shared.booking_contracts import BookingOutcome
from reservations.models import BookingRequest


def iso_timestamp(moment: Optional[datetime] = None) -> str:
    """UTC ISO-8601 timestamp with millisecond precision and a ``Z`` suffix."""

    moment = moment or datetime.now(timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def apply_outcome(
    request: BookingRequest,
    outcome: BookingOutcome,
    processed_at: Optional[datetime] = None,
) -> BookingRequest:
    """Resolve a pending request: status and every outcome field at once."""

    if not request.is_pending:
        raise ValueError(f"Request {request.id} is already {request.status.value}")
    if not outcome.status.is_terminal:
        raise ValueError("Outcome must carry a terminal status")

    request.status = outcome.status
    request.processed_date = iso_timestamp(processed_at)
    request.booked_time = outcome.booked_time
    request.confirmation_number = outcome.confirmation_number
    request.failure_reason = outcome.failure_reason
    return request
