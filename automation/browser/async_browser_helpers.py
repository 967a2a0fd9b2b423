"""Minimal async helpers for locating the tee-sheet iframe and waiting on it."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

from playwright.async_api import Frame, Page

from infrastructure.constants import BOOKING_FRAME_SELECTOR

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 0.25


class BrowserHelpers:
    """Utilities shared by the session and the tee-sheet adapter."""

    @staticmethod
    async def get_booking_frame(page: Page) -> Frame:
        """Resolve the booking iframe's content frame or raise."""
        handle = await page.locator(BOOKING_FRAME_SELECTOR).element_handle()
        if handle is None:
            raise RuntimeError("Booking iframe not found")
        frame = await handle.content_frame()
        if frame is None:
            raise RuntimeError("Unable to resolve content frame")
        logger.debug("Resolved booking frame at %s", frame.url)
        return frame

    @staticmethod
    async def wait_for_condition(
        predicate: Callable[[], Awaitable[bool]],
        *,
        timeout: float,
        interval: float = DEFAULT_POLL_INTERVAL,
        description: str = "condition",
    ) -> bool:
        """Poll ``predicate`` until it returns True or ``timeout`` seconds pass."""
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        while True:
            try:
                if await predicate():
                    return True
            except Exception as exc:  # transient DOM errors while the frame re-renders
                logger.debug("Error while checking %s: %s", description, exc)
            if loop.time() >= deadline:
                logger.debug("%s not met after %.1fs", description, timeout)
                return False
            await asyncio.sleep(interval)


__all__ = ["BrowserHelpers"]
