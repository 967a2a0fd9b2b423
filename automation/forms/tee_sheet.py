"""Playwright adapter for the club's tee-sheet iframe."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List, Optional

from playwright.async_api import Frame, Page, TimeoutError as PlaywrightTimeout

from automation.availability.dom_extraction import click_date_item, extract_slot_rows
from automation.browser.async_browser_helpers import BrowserHelpers
from automation.shared.booking_contracts import ConfirmationResult, RenderedSlot, SlotCandidate
from infrastructure.constants import (
    ADD_GROUP_TEXT,
    BOOK_NOW_SELECTOR,
    CONFIRMATION_NUMBER_PATTERN,
    COURSE_READY_SELECTOR,
    GROUP_NAME_PATTERN,
    READY_TIMEOUT_MS,
    SCREENSHOT_TIMEOUT_MS,
    SELECTED_DATE_TEMPLATE,
)
from infrastructure.errors import DateLoadTimeout

_CONFIRMATION_WAIT_SECONDS = 15.0


class ClubhouseTeeSheet:
    """Implements :class:`BookingSite` against the live tee sheet."""

    def __init__(self, page: Page, frame: Frame, *, logger: Optional[logging.Logger] = None) -> None:
        self.page = page
        self.frame = frame
        self.logger = logger or logging.getLogger("BookingSession")

    @classmethod
    async def open(
        cls,
        page: Page,
        *,
        logger: Optional[logging.Logger] = None,
        timeout_ms: int = READY_TIMEOUT_MS,
    ) -> "ClubhouseTeeSheet":
        """Bind to the booking iframe once the course selector has rendered."""

        frame = await BrowserHelpers.get_booking_frame(page)
        sheet = cls(page, frame, logger=logger)
        sheet.logger.info("Waiting for Golf Course element to appear")
        try:
            await frame.wait_for_selector(COURSE_READY_SELECTOR, state="visible", timeout=timeout_ms)
        except PlaywrightTimeout as exc:
            raise RuntimeError(
                f"Failed to load tee times: Golf Course element not found after {timeout_ms}ms"
            ) from exc
        await frame.wait_for_load_state("networkidle")
        return sheet

    async def select_date(self, label: str) -> bool:
        await self.frame.wait_for_load_state("networkidle")
        return await click_date_item(self.frame, label)

    async def wait_for_date_loaded(self, label: str, timeout_ms: int) -> None:
        selector = SELECTED_DATE_TEMPLATE.format(label=label)
        try:
            await self.frame.wait_for_selector(selector, state="visible", timeout=timeout_ms)
        except PlaywrightTimeout as exc:
            raise DateLoadTimeout(
                f'Failed to load tee times: Selected date element "{label}" not found after {timeout_ms}ms'
            ) from exc
        await self.frame.wait_for_load_state("networkidle")

    async def list_slots(self) -> List[RenderedSlot]:
        return await extract_slot_rows(self.frame)

    async def select_slot(self, slot: SlotCandidate) -> None:
        await self.frame.click(slot.selector)

    async def confirm(self) -> ConfirmationResult:
        self.logger.info("Confirming booking inside iframe")
        await self.frame.get_by_text(ADD_GROUP_TEXT).click()
        await self.frame.get_by_text(re.compile(GROUP_NAME_PATTERN, re.IGNORECASE)).click()
        await self.frame.wait_for_load_state("networkidle")
        await self.frame.locator(BOOK_NOW_SELECTOR).click()
        await self.frame.wait_for_load_state("networkidle")

        confirmation_number = await self._read_confirmation_number()
        return ConfirmationResult(confirmed=True, confirmation_number=confirmation_number)

    async def capture(self, path: Path) -> None:
        if self.page.is_closed():
            raise RuntimeError("page is already closed")
        await self.page.screenshot(path=str(path), timeout=SCREENSHOT_TIMEOUT_MS, full_page=True)

    async def _read_confirmation_number(self) -> Optional[str]:
        pattern = re.compile(CONFIRMATION_NUMBER_PATTERN, re.IGNORECASE)
        found: List[str] = []

        async def confirmation_visible() -> bool:
            text = await self.frame.evaluate("() => document.body.innerText || ''")
            match = pattern.search(text)
            if match:
                found.append(match.group(1))
                return True
            return False

        if await BrowserHelpers.wait_for_condition(
            confirmation_visible,
            timeout=_CONFIRMATION_WAIT_SECONDS,
            description="confirmation number",
        ):
            return found[-1]
        self.logger.warning("Booking submitted but no confirmation number was rendered")
        return None
