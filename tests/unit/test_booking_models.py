import pytest

from reservations.models import BookingRequest, QueueData, RequestStatus, TimeRange, time_to_minutes


def test_request_round_trip_keeps_unknown_fields():
    payload = {
        "id": "2026-11-18-4711",
        "requestDate": "2026-10-19T11:00:00.000Z",
        "playDate": "2026-11-18",
        "timeRange": {"start": "09:00", "end": "11:00"},
        "status": "pending",
        "requestedBy": "Pat",
        "notes": "cart please",
    }

    request = BookingRequest.from_payload(payload)

    assert request.status is RequestStatus.PENDING
    assert request.extras == {"notes": "cart please"}
    assert request.to_payload() == payload


def test_pending_request_omits_outcome_fields():
    request = BookingRequest.from_payload(
        {"id": "a", "playDate": "2026-11-18", "timeRange": {"start": "09:00", "end": "10:00"}}
    )

    payload = request.to_payload()

    assert "processedDate" not in payload
    assert "failureReason" not in payload


def test_unknown_status_is_rejected():
    with pytest.raises(ValueError):
        BookingRequest.from_payload({"id": "a", "status": "booked"})


def test_parsed_play_date_reports_bad_value():
    request = BookingRequest(id="a", request_date="", play_date="2026-13-40", time_range={})

    with pytest.raises(ValueError, match="Invalid date in request: 2026-13-40"):
        request.parsed_play_date()


def test_time_range_parse_accepts_canonical_strings():
    time_range = TimeRange.parse({"start": "07:30", "end": "10:15"})

    assert time_range.start_minutes == 450
    assert time_range.contains(10 * 60 + 15)
    assert not time_range.contains(10 * 60 + 16)


@pytest.mark.parametrize(
    "raw",
    [
        {"start": 9, "end": 11},
        {"start": "11:00", "end": "09:00"},
        {"start": "9am", "end": "11:00"},
        None,
    ],
)
def test_time_range_parse_rejects_other_shapes(raw):
    with pytest.raises(ValueError):
        TimeRange.parse(raw)


def test_time_to_minutes_is_strict():
    assert time_to_minutes("00:00") == 0
    assert time_to_minutes("23:59") == 1439
    with pytest.raises(ValueError):
        time_to_minutes("24:00")
    with pytest.raises(ValueError):
        time_to_minutes("9:5")


def test_queue_data_round_trip_and_find():
    payload = {
        "bookingRequests": [
            {"id": "p1", "playDate": "2026-11-18", "timeRange": {"start": "09:00", "end": "10:00"}, "status": "pending"}
        ],
        "processedRequests": [
            {"id": "d1", "playDate": "2026-10-18", "timeRange": {"start": "09:00", "end": "10:00"}, "status": "failed",
             "failureReason": "No times with 4 spots in range"}
        ],
        "schemaVersion": 2,
    }

    data = QueueData.from_payload(payload)

    assert data.find("d1").status is RequestStatus.FAILED
    assert data.find("missing") is None
    assert data.to_payload()["schemaVersion"] == 2


def test_queue_data_rejects_wrong_shape():
    with pytest.raises(ValueError):
        QueueData.from_payload({"bookingRequests": {}})
    with pytest.raises(ValueError):
        QueueData.from_payload([])
