"""Pick which pending requests are due for processing today."""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Callable, List, Optional, Sequence

import pytz

from infrastructure.constants import DEFAULT_GRACE_DAYS, DEFAULT_LEAD_DAYS
from reservations.models import BookingRequest

logger = logging.getLogger("EligibilityFilter")


def resolve_today(
    timezone_name: str,
    override: Optional[date] = None,
    *,
    clock: Optional[Callable[[], datetime]] = None,
) -> date:
    """Return the calendar date in ``timezone_name`` (or ``override`` if set)."""

    if override is not None:
        logger.info("Using date override: %s", override.isoformat())
        return override

    now_utc = clock() if clock else datetime.now(pytz.utc)
    if now_utc.tzinfo is None:
        now_utc = pytz.utc.localize(now_utc)
    zone = pytz.timezone(timezone_name)
    return now_utc.astimezone(zone).date()


def select_due_requests(
    requests: Sequence[BookingRequest],
    today: date,
    *,
    lead_days: int = DEFAULT_LEAD_DAYS,
    grace_days: int = DEFAULT_GRACE_DAYS,
) -> List[BookingRequest]:
    """Pending requests whose play date is exactly ``lead_days`` out or within
    the ``grace_days`` catch-up window starting today.

    Dates are compared as ISO strings, matching how they are stored, so the
    result keeps queue order and is the same no matter how often it is run.
    """

    booking_day = (today + timedelta(days=lead_days)).isoformat()
    window_start = today.isoformat()
    window_end = (today + timedelta(days=grace_days)).isoformat()

    due: List[BookingRequest] = []
    for request in requests:
        if not request.is_pending:
            continue
        play_date = request.play_date if isinstance(request.play_date, str) else ""
        if play_date == booking_day or window_start <= play_date <= window_end:
            due.append(request)

    logger.info(
        "Checking for requests on %s (window %s to %s): %s of %s due",
        booking_day,
        window_start,
        window_end,
        len(due),
        len(requests),
    )
    return due
