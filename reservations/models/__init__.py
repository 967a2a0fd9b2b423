"""Domain model definitions for the booking queue."""

from .booking_request import (
    BookingRequest,
    QueueData,
    RequestStatus,
    TimeRange,
    time_to_minutes,
)

__all__ = ["BookingRequest", "QueueData", "RequestStatus", "TimeRange", "time_to_minutes"]
