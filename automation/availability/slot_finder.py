"""Select bookable tee times from a rendered tee sheet."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from automation.availability.time_utils import normalize_slot_time
from automation.shared.booking_contracts import RenderedSlot, SlotCandidate
from infrastructure.constants import REQUIRED_PARTY_SIZE
from reservations.models import TimeRange, time_to_minutes

logger = logging.getLogger("SlotFinder")


class SlotFinder:
    """Apply the capacity and time-window filters, then pick one slot.

    Selection policy: the earliest qualifying time wins. Rows sharing the same
    time keep the order the site rendered them in.
    """

    def __init__(self, required_party_size: int = REQUIRED_PARTY_SIZE) -> None:
        self.required_party_size = required_party_size

    def qualifying_slots(
        self,
        rendered: Iterable[RenderedSlot],
        time_range: TimeRange,
    ) -> List[SlotCandidate]:
        """Return qualifying slots ordered by time (earliest first)."""

        start, end = time_range.start_minutes, time_range.end_minutes
        candidates: List[SlotCandidate] = []
        for slot in rendered:
            if slot.unavailable:
                continue
            if slot.open_spots != self.required_party_size:
                continue
            normalized = normalize_slot_time(slot.time_text)
            if normalized is None:
                logger.debug("Skipping slot with unreadable time %r", slot.time_text)
                continue
            minutes = time_to_minutes(normalized)
            if minutes < start or minutes > end:
                continue
            candidates.append(SlotCandidate(time=normalized, selector=slot.selector))

        # sorted() is stable, so equal times keep rendered order
        return sorted(candidates, key=lambda candidate: candidate.minutes)

    def choose_slot(self, candidates: List[SlotCandidate]) -> Optional[SlotCandidate]:
        if not candidates:
            return None
        return candidates[0]

    def find(
        self,
        rendered: Iterable[RenderedSlot],
        time_range: TimeRange,
    ) -> Optional[SlotCandidate]:
        candidates = self.qualifying_slots(rendered, time_range)
        logger.info(
            "Found %s qualifying slot(s) between %s and %s: %s",
            len(candidates),
            time_range.start,
            time_range.end,
            ", ".join(candidate.time for candidate in candidates) or "none",
        )
        return self.choose_slot(candidates)
