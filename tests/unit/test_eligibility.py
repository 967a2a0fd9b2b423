from datetime import date, datetime

import pytz

from reservations.models import RequestStatus
from reservations.queue.eligibility import resolve_today, select_due_requests
from tests.helpers import make_request

TODAY = date(2026, 10, 19)


def test_selects_lead_day_and_grace_window_in_queue_order():
    requests = [
        make_request("far", "2026-11-20"),
        make_request("lead", "2026-11-18"),
        make_request("today", "2026-10-19"),
        make_request("grace-end", "2026-10-22"),
        make_request("past-grace", "2026-10-23"),
        make_request("yesterday", "2026-10-18"),
    ]

    due = select_due_requests(requests, TODAY, lead_days=30, grace_days=3)

    assert [r.id for r in due] == ["lead", "today", "grace-end"]


def test_terminal_requests_are_never_selected():
    requests = [
        make_request("done", "2026-10-19", status=RequestStatus.SUCCESS),
        make_request("failed", "2026-10-19", status=RequestStatus.FAILED),
        make_request("open", "2026-10-19"),
    ]

    assert [r.id for r in select_due_requests(requests, TODAY)] == ["open"]


def test_selection_is_idempotent():
    requests = [make_request("a", "2026-10-20"), make_request("b", "2026-11-18")]

    first = select_due_requests(requests, TODAY)
    second = select_due_requests(requests, TODAY)

    assert [r.id for r in first] == [r.id for r in second]


def test_malformed_date_inside_window_is_selected_for_error_handling():
    requests = [make_request("odd", "2026-10-20x"), make_request("junk", "someday")]

    assert [r.id for r in select_due_requests(requests, TODAY)] == ["odd"]


def test_resolve_today_uses_override():
    assert resolve_today("America/New_York", date(2026, 1, 2)) == date(2026, 1, 2)


def test_resolve_today_uses_booking_timezone():
    # 03:30 UTC is still the previous evening in New York
    clock = lambda: pytz.utc.localize(datetime(2026, 10, 20, 3, 30))

    assert resolve_today("America/New_York", clock=clock) == date(2026, 10, 19)
    assert resolve_today("UTC", clock=clock) == date(2026, 10, 20)
