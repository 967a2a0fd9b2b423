"""Simulation-mode tee sheet: deterministic slots, no browser, no network."""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path
from typing import List, Optional

from automation.shared.booking_contracts import ConfirmationResult, RenderedSlot, SlotCandidate
from infrastructure.constants import REQUIRED_PARTY_SIZE

FIRST_TEE_MINUTES = 6 * 60
LAST_TEE_MINUTES = 19 * 60
TEE_INTERVAL_MINUTES = 10


def simulated_confirmation_number(date_label: str, slot_time: str) -> str:
    """Stable ``SIM-NNNNNN`` identifier for a simulated booking."""

    digest = hashlib.sha256(f"{date_label}|{slot_time}".encode("utf-8")).hexdigest()
    return f"SIM-{100000 + int(digest[:8], 16) % 900000}"


class SimulatedTeeSheet:
    """Implements :class:`BookingSite` with a fully open, fixed tee sheet."""

    def __init__(
        self,
        *,
        party_size: int = REQUIRED_PARTY_SIZE,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.party_size = party_size
        self.logger = logger or logging.getLogger("BookingSession")
        self.selected_date: Optional[str] = None
        self.selected_slot: Optional[SlotCandidate] = None

    async def select_date(self, label: str) -> bool:
        self.logger.info("SIMULATION: Selected date %s", label)
        self.selected_date = label
        return True

    async def wait_for_date_loaded(self, label: str, timeout_ms: int) -> None:
        return None

    async def list_slots(self) -> List[RenderedSlot]:
        slots = []
        for minutes in range(FIRST_TEE_MINUTES, LAST_TEE_MINUTES + 1, TEE_INTERVAL_MINUTES):
            time_text = f"{minutes // 60:02d}:{minutes % 60:02d}"
            slots.append(
                RenderedSlot(
                    time_text=time_text,
                    open_spots=self.party_size,
                    selector=f"sim-{time_text}",
                )
            )
        return slots

    async def select_slot(self, slot: SlotCandidate) -> None:
        self.selected_slot = slot

    async def confirm(self) -> ConfirmationResult:
        if self.selected_date is None or self.selected_slot is None:
            raise RuntimeError("Nothing selected to confirm")
        number = simulated_confirmation_number(self.selected_date, self.selected_slot.time)
        self.logger.info("SIMULATION: Confirmation number: %s", number)
        return ConfirmationResult(confirmed=True, confirmation_number=number)

    async def capture(self, path: Path) -> None:
        self.logger.debug("SIMULATION: Skipping screenshot %s", path.name)
