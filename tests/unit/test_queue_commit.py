from datetime import datetime, timezone

import pytest

from automation.shared.booking_contracts import BookingOutcome
from reservations.models import QueueData, RequestStatus
from reservations.queue.scheduler import commit_outcomes
from reservations.queue.transitions import apply_outcome, iso_timestamp
from tests.helpers import make_request


def test_apply_outcome_sets_every_field_once():
    request = make_request("r1", "2026-11-18")
    at = datetime(2026, 10, 19, 11, 0, 5, 123000, tzinfo=timezone.utc)

    apply_outcome(request, BookingOutcome.booked("09:30", "C-1"), at)

    assert request.status is RequestStatus.SUCCESS
    assert request.processed_date == "2026-10-19T11:00:05.123Z"
    assert request.booked_time == "09:30"
    assert request.confirmation_number == "C-1"

    with pytest.raises(ValueError):
        apply_outcome(request, BookingOutcome.failed("again"), at)


def test_iso_timestamp_is_utc_with_z_suffix():
    assert iso_timestamp(datetime(2026, 1, 1, tzinfo=timezone.utc)) == "2026-01-01T00:00:00.000Z"


def test_commit_moves_resolved_to_front_of_processed_in_order():
    old = make_request("old", "2026-09-01", status=RequestStatus.SUCCESS)
    first = make_request("first", "2026-10-19")
    waiting = make_request("waiting", "2026-12-01")
    second = make_request("second", "2026-10-20")
    data = QueueData(booking_requests=[first, waiting, second], processed_requests=[old])

    apply_outcome(first, BookingOutcome.failed("No times with 4 spots in range"))
    apply_outcome(second, BookingOutcome.booked("10:00", "C-2"))
    commit_outcomes(data, [first, second])

    assert [r.id for r in data.booking_requests] == ["waiting"]
    assert [r.id for r in data.processed_requests] == ["first", "second", "old"]


def test_commit_moves_stray_terminal_entries_without_duplicating_ids():
    stray = make_request("stray", "2026-10-01", status=RequestStatus.ERROR)
    duplicate = make_request("dup", "2026-10-01", status=RequestStatus.SUCCESS)
    data = QueueData(
        booking_requests=[stray, duplicate],
        processed_requests=[make_request("dup", "2026-10-01", status=RequestStatus.SUCCESS)],
    )

    commit_outcomes(data, [])

    assert data.booking_requests == []
    assert [r.id for r in data.processed_requests] == ["stray", "dup"]


def test_commit_refuses_pending_requests():
    request = make_request("r1", "2026-10-19")

    with pytest.raises(ValueError):
        commit_outcomes(QueueData(booking_requests=[request]), [request])
