"""Hold workers until the booking window opens."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, time, timedelta
from typing import Awaitable, Callable, Optional

import pytz

from infrastructure.constants import DEFAULT_GATE_LATE_GRACE_MINUTES


def _sleep_chunk(seconds_left: float) -> float:
    if seconds_left <= 10:
        return seconds_left
    if seconds_left > 600:
        return 300.0
    if seconds_left > 180:
        return 60.0
    if seconds_left > 60:
        return 30.0
    return 10.0


class TimingGate:
    """Wait until ``hour:minute`` civil time in ``timezone_name``.

    If the target passed less than ``late_grace`` ago the gate opens at once;
    if it passed longer ago the next day's target is awaited instead.
    """

    def __init__(
        self,
        timezone_name: str,
        hour: int,
        minute: int,
        *,
        late_grace: timedelta = timedelta(minutes=DEFAULT_GATE_LATE_GRACE_MINUTES),
        clock: Optional[Callable[[], datetime]] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.timezone_name = timezone_name
        self.hour = hour
        self.minute = minute
        self.late_grace = late_grace
        self._clock = clock or (lambda: datetime.now(pytz.utc))
        self._sleep = sleep
        self.logger = logger or logging.getLogger("TimingGate")

    def _now(self) -> datetime:
        now = self._clock()
        if now.tzinfo is None:
            now = pytz.utc.localize(now)
        return now

    def target_after(self, now: datetime) -> Optional[datetime]:
        """Return the instant to wait for, or ``None`` when the gate is open."""

        zone = pytz.timezone(self.timezone_name)
        local_now = now.astimezone(zone)
        opening = time(self.hour, self.minute)
        today_target = zone.localize(datetime.combine(local_now.date(), opening))

        if local_now < today_target:
            return today_target
        if local_now - today_target <= self.late_grace:
            return None
        tomorrow = local_now.date() + timedelta(days=1)
        return zone.localize(datetime.combine(tomorrow, opening))

    async def wait(self) -> None:
        label = f"{self.hour:02d}:{self.minute:02d} {self.timezone_name}"
        try:
            target = self.target_after(self._now())
        except (pytz.UnknownTimeZoneError, ValueError, OverflowError) as exc:
            self.logger.error("Could not resolve booking time %s: %s. Proceeding immediately.", label, exc)
            return

        if target is None:
            self.logger.info("Already past %s - continuing immediately", label)
            return

        self.logger.info("Waiting until %s (%s)", label, target.isoformat())
        while True:
            now = self._now()
            seconds_left = (target - now).total_seconds()
            if seconds_left <= 0:
                self.logger.info("Reached %s. Continuing.", label)
                return
            sleep_for = _sleep_chunk(seconds_left)
            self.logger.debug("%.1f min remaining (sleeping %.1fs)", seconds_left / 60, sleep_for)
            await self._sleep(sleep_for)
