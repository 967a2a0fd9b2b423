"""Shared fakes and utilities for unit tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from automation.shared.booking_contracts import ConfirmationResult, RenderedSlot, SlotCandidate
from reservations.models import BookingRequest, RequestStatus


class DummyLogger:
    """Lightweight stand-in for ``logging.Logger`` that records calls."""

    def __init__(self) -> None:
        self.records: List[Tuple[str, Tuple[Any, ...], Dict[str, Any]]] = []

    def _record(self, level: str, *args: Any, **kwargs: Any) -> None:
        self.records.append((level, args, kwargs))

    def debug(self, *args: Any, **kwargs: Any) -> None:
        self._record("debug", *args, **kwargs)

    def info(self, *args: Any, **kwargs: Any) -> None:
        self._record("info", *args, **kwargs)

    def warning(self, *args: Any, **kwargs: Any) -> None:
        self._record("warning", *args, **kwargs)

    def error(self, *args: Any, **kwargs: Any) -> None:
        self._record("error", *args, **kwargs)

    def exception(self, *args: Any, **kwargs: Any) -> None:
        self._record("exception", *args, **kwargs)

    @property
    def messages(self) -> List[Tuple[str, Any]]:
        """Return formatted messages for quick assertions."""

        formatted: List[Tuple[str, Any]] = []
        for level, args, _kwargs in self.records:
            if not args:
                continue
            template = args[0]
            message = template
            if isinstance(template, str) and len(args) > 1:
                try:
                    message = template % args[1:]
                except (TypeError, ValueError):
                    message = template
            formatted.append((level, message))
        return formatted


def make_request(
    request_id: str,
    play_date: str,
    start: str = "09:00",
    end: str = "11:00",
    *,
    status: RequestStatus = RequestStatus.PENDING,
    time_range: Any = None,
) -> BookingRequest:
    return BookingRequest(
        id=request_id,
        request_date="2026-10-01T12:00:00.000Z",
        play_date=play_date,
        time_range=time_range if time_range is not None else {"start": start, "end": end},
        status=status,
        requested_by="Pat",
    )


def rendered(time_text: str, open_spots: Optional[int] = 4, *, unavailable: bool = False) -> RenderedSlot:
    return RenderedSlot(
        time_text=time_text,
        open_spots=open_spots,
        selector=f"[data-teetime-slot='{time_text}']",
        unavailable=unavailable,
    )


class FakeTeeSheet:
    """Scriptable booking site used by processor and scheduler tests."""

    def __init__(
        self,
        slots: Sequence[RenderedSlot] = (),
        *,
        dates: Optional[Sequence[str]] = None,
        confirmation: Union[ConfirmationResult, Exception, None] = None,
        fail_capture: bool = False,
    ) -> None:
        self.slots = list(slots)
        self.dates = dates
        self.confirmation = confirmation or ConfirmationResult(True, "CONF-1")
        self.fail_capture = fail_capture
        self.selected_dates: List[str] = []
        self.selected_slots: List[SlotCandidate] = []
        self.captures: List[Path] = []

    async def select_date(self, label: str) -> bool:
        if self.dates is not None and label not in self.dates:
            return False
        self.selected_dates.append(label)
        return True

    async def wait_for_date_loaded(self, label: str, timeout_ms: int) -> None:
        return None

    async def list_slots(self) -> List[RenderedSlot]:
        return list(self.slots)

    async def select_slot(self, slot: SlotCandidate) -> None:
        self.selected_slots.append(slot)

    async def confirm(self) -> ConfirmationResult:
        if isinstance(self.confirmation, Exception):
            raise self.confirmation
        return self.confirmation

    async def capture(self, path: Path) -> None:
        if self.fail_capture:
            raise RuntimeError("screenshot failed")
        self.captures.append(path)


class FakeSurface:
    """Hands out one scripted site per navigation; exceptions are raised."""

    def __init__(self, *sites: Union[FakeTeeSheet, Exception]) -> None:
        self.sites = list(sites)
        self.navigations = 0
        self.captures: List[Path] = []

    async def navigate_to_booking_surface(self) -> FakeTeeSheet:
        index = min(self.navigations, len(self.sites) - 1)
        self.navigations += 1
        site = self.sites[index]
        if isinstance(site, Exception):
            raise site
        return site

    async def capture(self, path: Path) -> None:
        self.captures.append(path)


async def no_sleep(_seconds: float) -> None:
    return None
