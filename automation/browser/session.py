"""Authenticated browser sessions against the booking site."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Callable, Optional

from playwright.async_api import Browser, BrowserContext, Page, Playwright, async_playwright

from automation.forms.simulated_tee_sheet import SimulatedTeeSheet
from automation.forms.tee_sheet import ClubhouseTeeSheet
from infrastructure.constants import (
    BROWSER_USER_AGENT,
    BROWSER_VIEWPORT,
    LOGIN_URL,
    REQUIRED_PARTY_SIZE,
    SCREENSHOT_TIMEOUT_MS,
    TEE_SHEET_URL,
)
from infrastructure.errors import ConfigurationError
from infrastructure.settings import Credentials

SIMULATED_STARTUP_SECONDS = 0.1


class BookingSession:
    """One logged-in Playwright browser, reused for every request of a worker.

    Use as an async context manager; the browser is always closed on exit,
    whether the worker finished cleanly or raised.
    """

    def __init__(
        self,
        credentials: Optional[Credentials],
        *,
        headless: bool = True,
        logger: Optional[logging.Logger] = None,
        playwright_factory: Callable[[], Any] = async_playwright,
    ) -> None:
        self.credentials = credentials
        self.headless = headless
        self.logger = logger or logging.getLogger("BookingSession")
        self._playwright_factory = playwright_factory
        self._playwright_manager: Any = None
        self.playwright: Optional[Playwright] = None
        self.browser: Optional[Browser] = None
        self.context: Optional[BrowserContext] = None
        self.page: Optional[Page] = None

    async def __aenter__(self) -> "BookingSession":
        self._require_credentials()
        try:
            await self.launch()
            await self.login()
        except BaseException:
            await self.close()
            raise
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def _require_credentials(self) -> Credentials:
        if self.credentials is None:
            raise ConfigurationError("Golf course credentials not found in environment variables")
        return self.credentials

    async def launch(self) -> Page:
        """Start Chromium and open the single page this session drives."""

        self.logger.info("Launching browser (headless=%s)", self.headless)
        self._playwright_manager = self._playwright_factory()
        self.playwright = await self._playwright_manager.start()
        self.browser = await self.playwright.chromium.launch(headless=self.headless)
        self.context = await self.browser.new_context(
            viewport=BROWSER_VIEWPORT,
            user_agent=BROWSER_USER_AGENT,
        )
        self.page = await self.context.new_page()
        return self.page

    async def login(self) -> None:
        credentials = self._require_credentials()
        if self.page is None:
            raise RuntimeError("Browser session has not been launched")

        self.logger.info("Logging in to golf course website")
        await self.page.goto(LOGIN_URL)
        await self.page.get_by_placeholder("Username").fill(credentials.username)
        await self.page.get_by_placeholder("Password").fill(credentials.password)
        await self.page.get_by_role("button", name="Login").click()
        await self.page.wait_for_load_state("networkidle")

    async def navigate_to_booking_surface(self) -> ClubhouseTeeSheet:
        """Load the tee sheet from scratch and bind an adapter to its iframe."""

        if self.page is None:
            raise RuntimeError("Browser session has not been launched")
        self.logger.info("Navigating to booking page")
        await self.page.goto(TEE_SHEET_URL)
        return await ClubhouseTeeSheet.open(self.page, logger=self.logger)

    async def capture(self, path: Path) -> None:
        """Screenshot the session page as it is, whether or not the tee sheet loaded."""

        if self.page is None or self.page.is_closed():
            raise RuntimeError("Browser session has no open page")
        await self.page.screenshot(path=str(path), timeout=SCREENSHOT_TIMEOUT_MS, full_page=True)

    async def close(self) -> None:
        """Tear down page, context, browser and driver; errors are only logged."""

        for label, resource in (("context", self.context), ("browser", self.browser)):
            if resource is None:
                continue
            try:
                await resource.close()
            except Exception as exc:
                self.logger.warning("Error closing %s: %s", label, exc)
        if self._playwright_manager is not None:
            try:
                await self._playwright_manager.stop()
            except Exception as exc:
                self.logger.warning("Error stopping Playwright: %s", exc)
        self.page = None
        self.context = None
        self.browser = None
        self.playwright = None
        self._playwright_manager = None


class SimulatedSession:
    """Drop-in session for simulation mode; never touches a browser."""

    def __init__(
        self,
        *,
        party_size: int = REQUIRED_PARTY_SIZE,
        logger: Optional[logging.Logger] = None,
        startup_delay: float = SIMULATED_STARTUP_SECONDS,
    ) -> None:
        self.party_size = party_size
        self.logger = logger or logging.getLogger("BookingSession")
        self.startup_delay = startup_delay
        self.navigations = 0

    async def __aenter__(self) -> "SimulatedSession":
        self.logger.info("SIMULATION MODE: Mocking browser interactions")
        await asyncio.sleep(self.startup_delay)
        self.logger.info("SIMULATION: Logged in successfully")
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.logger.info("SIMULATION: Session closed")

    async def navigate_to_booking_surface(self) -> SimulatedTeeSheet:
        self.navigations += 1
        self.logger.info("SIMULATION: Navigated to booking page")
        return SimulatedTeeSheet(party_size=self.party_size, logger=self.logger)

    async def capture(self, path: Path) -> None:
        self.logger.debug("SIMULATION: Skipping screenshot %s", path.name)
