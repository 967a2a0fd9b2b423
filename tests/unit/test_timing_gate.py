from datetime import datetime, timedelta

import pytest
import pytz

from reservations.queue.scheduler import TimingGate
from tests.helpers import DummyLogger

NEW_YORK = pytz.timezone("America/New_York")


class FakeClock:
    """Clock that advances whenever the gate sleeps."""

    def __init__(self, start):
        self.now = start
        self.sleeps = []

    def __call__(self):
        return self.now

    async def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now = self.now + timedelta(seconds=seconds)


def local(year, month, day, hour, minute, second=0):
    return NEW_YORK.localize(datetime(year, month, day, hour, minute, second)).astimezone(pytz.utc)


def make_gate(clock, timezone="America/New_York"):
    return TimingGate(
        timezone,
        7,
        0,
        late_grace=timedelta(minutes=60),
        clock=clock,
        sleep=clock.sleep,
        logger=DummyLogger(),
    )


@pytest.mark.asyncio
async def test_waits_until_opening_time():
    clock = FakeClock(local(2026, 10, 19, 6, 50))

    await make_gate(clock).wait()

    assert clock.now >= local(2026, 10, 19, 7, 0)
    assert clock.now - local(2026, 10, 19, 7, 0) < timedelta(seconds=1)
    assert len(clock.sleeps) > 1


@pytest.mark.asyncio
async def test_proceeds_immediately_within_late_grace():
    clock = FakeClock(local(2026, 10, 19, 7, 20))

    await make_gate(clock).wait()

    assert clock.sleeps == []


def test_long_past_target_rolls_over_to_tomorrow():
    gate = make_gate(FakeClock(local(2026, 10, 19, 9, 0)))

    target = gate.target_after(local(2026, 10, 19, 9, 0))

    assert target == NEW_YORK.localize(datetime(2026, 10, 20, 7, 0))


def test_target_respects_daylight_saving_change():
    gate = make_gate(FakeClock(local(2026, 10, 31, 12, 0)))

    # 2026-11-01 is the fall-back day in New York
    target = gate.target_after(local(2026, 10, 31, 12, 0))

    assert target.astimezone(pytz.utc).hour == 12
    assert target.date().isoformat() == "2026-11-01"


@pytest.mark.asyncio
async def test_unknown_timezone_proceeds_and_logs():
    clock = FakeClock(local(2026, 10, 19, 6, 0))
    gate = make_gate(clock, timezone="Mars/Olympus_Mons")

    await gate.wait()

    assert clock.sleeps == []
    assert any(level == "error" for level, _ in gate.logger.messages)
