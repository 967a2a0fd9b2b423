"""Queue document dataclasses: booking requests and the queue itself."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional


class RequestStatus(Enum):
    """Lifecycle states of a queued booking request."""

    PENDING = "pending"    # Waiting to be processed
    SUCCESS = "success"    # Tee time booked
    FAILED = "failed"      # Expected negative outcome (no slot, date not offered)
    ERROR = "error"        # Bad input or an exception while driving the site

    @property
    def is_terminal(self) -> bool:
        return self is not RequestStatus.PENDING


def time_to_minutes(value: str) -> int:
    """Convert a strict ``HH:MM`` string into minutes after midnight."""

    if not isinstance(value, str) or value.count(":") != 1:
        raise ValueError(f"Expected HH:MM time, got {value!r}")
    hour_str, minute_str = value.strip().split(":")
    if len(minute_str) != 2 or not hour_str.isdigit() or not minute_str.isdigit():
        raise ValueError(f"Expected HH:MM time, got {value!r}")
    hour, minute = int(hour_str), int(minute_str)
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise ValueError(f"Time {value!r} is out of range")
    return hour * 60 + minute


@dataclass(frozen=True)
class TimeRange:
    """Requested tee-off window, ``HH:MM`` strings inclusive at both ends."""

    start: str
    end: str

    @classmethod
    def parse(cls, raw: Any) -> "TimeRange":
        """Validate a stored ``timeRange`` value.

        Only the canonical string form is accepted; the legacy integer-hour
        form is rejected rather than guessed at.
        """
        if not isinstance(raw, Mapping):
            raise ValueError(f"Invalid time range {raw!r}")
        start, end = raw.get("start"), raw.get("end")
        if not isinstance(start, str) or not isinstance(end, str):
            raise ValueError(f"Invalid time range {dict(raw)!r}: start and end must be HH:MM strings")
        time_range = cls(start=start.strip(), end=end.strip())
        if time_range.start_minutes > time_range.end_minutes:
            raise ValueError(f"Invalid time range {start}-{end}: start is after end")
        return time_range

    @property
    def start_minutes(self) -> int:
        return time_to_minutes(self.start)

    @property
    def end_minutes(self) -> int:
        return time_to_minutes(self.end)

    def contains(self, minutes: int) -> bool:
        return self.start_minutes <= minutes <= self.end_minutes

    def to_payload(self) -> Dict[str, str]:
        return {"start": self.start, "end": self.end}


_REQUEST_KEYS = (
    "id",
    "requestDate",
    "playDate",
    "timeRange",
    "status",
    "requestedBy",
    "processedDate",
    "bookedTime",
    "confirmationNumber",
    "failureReason",
)


@dataclass
class BookingRequest:
    """One user's queued ask for a tee time.

    ``time_range`` holds the stored value untouched so that documents written
    by older submission forms survive a load/save cycle; use
    :meth:`parsed_time_range` to validate it.
    """

    id: str
    request_date: str
    play_date: str
    time_range: Any
    status: RequestStatus = RequestStatus.PENDING
    requested_by: str = ""
    processed_date: Optional[str] = None
    booked_time: Optional[str] = None
    confirmation_number: Optional[str] = None
    failure_reason: Optional[str] = None
    extras: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_pending(self) -> bool:
        return self.status is RequestStatus.PENDING

    def parsed_play_date(self) -> date:
        """Return ``play_date`` as a date, raising ``ValueError`` if malformed."""

        if not isinstance(self.play_date, str):
            raise ValueError(f"Invalid date in request: {self.play_date}")
        try:
            return date.fromisoformat(self.play_date)
        except ValueError as exc:
            raise ValueError(f"Invalid date in request: {self.play_date}") from exc

    def parsed_time_range(self) -> TimeRange:
        return TimeRange.parse(self.time_range)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "BookingRequest":
        if not isinstance(payload, Mapping):
            raise ValueError(f"Booking request must be an object, got {type(payload).__name__}")
        if not payload.get("id"):
            raise ValueError("Booking request is missing its id")
        return cls(
            id=str(payload["id"]),
            request_date=payload.get("requestDate", ""),
            play_date=payload.get("playDate", ""),
            time_range=payload.get("timeRange"),
            status=RequestStatus(payload.get("status", RequestStatus.PENDING.value)),
            requested_by=payload.get("requestedBy", ""),
            processed_date=payload.get("processedDate"),
            booked_time=payload.get("bookedTime"),
            confirmation_number=payload.get("confirmationNumber"),
            failure_reason=payload.get("failureReason"),
            extras={k: v for k, v in payload.items() if k not in _REQUEST_KEYS},
        )

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "id": self.id,
            "requestDate": self.request_date,
            "playDate": self.play_date,
            "timeRange": self.time_range,
            "status": self.status.value,
            "requestedBy": self.requested_by,
        }
        optional = {
            "processedDate": self.processed_date,
            "bookedTime": self.booked_time,
            "confirmationNumber": self.confirmation_number,
            "failureReason": self.failure_reason,
        }
        payload.update({key: value for key, value in optional.items() if value is not None})
        payload.update(self.extras)
        return payload


@dataclass
class QueueData:
    """The whole persisted queue document."""

    booking_requests: List[BookingRequest] = field(default_factory=list)
    processed_requests: List[BookingRequest] = field(default_factory=list)
    extras: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Any) -> "QueueData":
        if not isinstance(payload, Mapping):
            raise ValueError(f"Queue document must be an object, got {type(payload).__name__}")
        pending = payload.get("bookingRequests", [])
        processed = payload.get("processedRequests", [])
        if not isinstance(pending, list) or not isinstance(processed, list):
            raise ValueError("bookingRequests and processedRequests must be lists")
        return cls(
            booking_requests=[BookingRequest.from_payload(item) for item in pending],
            processed_requests=[BookingRequest.from_payload(item) for item in processed],
            extras={
                k: v for k, v in payload.items()
                if k not in ("bookingRequests", "processedRequests")
            },
        )

    def to_payload(self) -> Dict[str, Any]:
        return {
            "bookingRequests": [request.to_payload() for request in self.booking_requests],
            "processedRequests": [request.to_payload() for request in self.processed_requests],
            **self.extras,
        }

    def find(self, request_id: str) -> Optional[BookingRequest]:
        for request in (*self.booking_requests, *self.processed_requests):
            if request.id == request_id:
                return request
        return None
