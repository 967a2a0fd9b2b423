"""Run-level counters and the report published at the end of a run."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from automation.shared.booking_contracts import BookingOutcome
from reservations.models import RequestStatus

STATUS_SUCCESS = "success"
STATUS_FAILURE = "failure"


@dataclass
class RunReport:
    """What one scheduler run did.

    ``processed_count`` counts booked requests only; failed and errored
    requests still appear in ``results``.
    """

    results: List[str] = field(default_factory=list)
    successful_bookings: int = 0
    failed_bookings: int = 0
    errored_bookings: int = 0
    total_attempts: int = 0
    elapsed_seconds: float = 0.0
    message: Optional[str] = None

    @classmethod
    def nothing_to_do(cls, message: str) -> "RunReport":
        return cls(results=[message], message=message)

    def record(self, request_id: str, outcome: BookingOutcome) -> None:
        self.results.append(outcome.summary_line(request_id))
        self.total_attempts += outcome.attempts
        if outcome.status is RequestStatus.SUCCESS:
            self.successful_bookings += 1
        elif outcome.status is RequestStatus.FAILED:
            self.failed_bookings += 1
        else:
            self.errored_bookings += 1

    @property
    def resolved_count(self) -> int:
        return self.successful_bookings + self.failed_bookings + self.errored_bookings

    @property
    def processed_count(self) -> int:
        return self.successful_bookings

    @property
    def booking_status(self) -> str:
        if self.processed_count > 0 or self.resolved_count == 0:
            return STATUS_SUCCESS
        return STATUS_FAILURE

    @property
    def success_rate(self) -> float:
        if self.resolved_count == 0:
            return 0.0
        return (self.successful_bookings / self.resolved_count) * 100

    def format_report(self) -> str:
        if self.message:
            return f"📊 Booking Queue Run\nℹ️ {self.message}"
        lines = [
            "📊 Booking Queue Run",
            f"✅ Booked: {self.successful_bookings}",
            f"❌ Failed: {self.failed_bookings}",
            f"⚠️ Errors: {self.errored_bookings}",
            f"📈 Total Attempts: {self.total_attempts}",
            f"🏆 Success Rate: {self.success_rate:.2f}%",
            f"⏱️ Elapsed: {self.elapsed_seconds:.2f}s",
        ]
        return "\n".join(lines)
