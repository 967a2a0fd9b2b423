"""Builders for new queue entries (used by test-mode seeding)."""

from __future__ import annotations

import logging
import random
from datetime import date, datetime
from typing import Optional

from reservations.models import BookingRequest, QueueData, RequestStatus, TimeRange
from reservations.queue.queue_store import QueueLoad, QueueStore
from reservations.queue.transitions import iso_timestamp

TEST_REQUESTER = "Test User"
TEST_TIME_RANGE = TimeRange(start="08:00", end="12:00")

logger = logging.getLogger("QueueStore")


def new_booking_request(
    play_date: date,
    start: str,
    end: str,
    requested_by: str,
    now: Optional[datetime] = None,
    *,
    rng: Optional[random.Random] = None,
) -> BookingRequest:
    """Create a pending request shaped like the ones the submission form writes."""

    time_range = TimeRange.parse({"start": start, "end": end})
    suffix = (rng or random).randint(0, 99999)
    return BookingRequest(
        id=f"{play_date.isoformat()}-{suffix}",
        request_date=iso_timestamp(now),
        play_date=play_date.isoformat(),
        time_range=time_range.to_payload(),
        status=RequestStatus.PENDING,
        requested_by=requested_by,
    )


def seed_test_queue(store: QueueStore, today: date, now: Optional[datetime] = None) -> Optional[QueueLoad]:
    """Write a one-request queue for ``today`` when the test queue file is missing.

    Returns ``None`` when a queue already exists so the caller loads it as usual.
    """

    if store.exists():
        return None

    request = new_booking_request(
        today,
        TEST_TIME_RANGE.start,
        TEST_TIME_RANGE.end,
        TEST_REQUESTER,
        now,
    )
    data = QueueData(booking_requests=[request])
    version = store.save(data)
    logger.info("Created test queue %s with request %s for %s", store.path, request.id, request.play_date)
    return QueueLoad(data=data, version=version, created=True)
