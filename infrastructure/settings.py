"""Centralized application settings.

Every runtime toggle the queue processor understands is read here once and
frozen into :class:`AppSettings`. Modules receive the settings object instead
of calling ``os.getenv`` themselves, which keeps tests free to build settings
from a plain mapping.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import date
from functools import lru_cache
from typing import Mapping, Optional, Tuple

from dotenv import load_dotenv

from . import constants
from .errors import ConfigurationError


def _to_bool(value: Optional[str], default: bool = False) -> bool:
    """Normalize environment strings such as "true"/"1" into booleans."""

    if value is None or not value.strip():
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _to_int(env: Mapping[str, str], key: str, default: int, *, minimum: int = 0) -> int:
    raw = env.get(key)
    if raw is None or not str(raw).strip():
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{key} must be an integer, got {raw!r}") from exc
    if value < minimum:
        raise ConfigurationError(f"{key} must be >= {minimum}, got {value}")
    return value


def _to_float(env: Mapping[str, str], key: str, default: float) -> float:
    raw = env.get(key)
    if raw is None or not str(raw).strip():
        return default
    try:
        value = float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{key} must be a number, got {raw!r}") from exc
    if value < 0:
        raise ConfigurationError(f"{key} must not be negative, got {value}")
    return value


def _parse_date_override(raw: Optional[str]) -> Optional[date]:
    if raw is None or not raw.strip():
        return None
    try:
        return date.fromisoformat(raw.strip())
    except ValueError as exc:
        raise ConfigurationError(
            f"DATE_OVERRIDE must use YYYY-MM-DD, got {raw!r}"
        ) from exc


def parse_clock_time(raw: str) -> Tuple[int, int]:
    """Parse an ``HH:MM`` civil time into ``(hour, minute)``."""

    try:
        hour_str, minute_str = raw.strip().split(":")
        hour, minute = int(hour_str), int(minute_str)
    except (AttributeError, ValueError) as exc:
        raise ConfigurationError(f"Expected HH:MM time, got {raw!r}") from exc
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise ConfigurationError(f"Time {raw!r} is out of range")
    return hour, minute


@dataclass(frozen=True)
class Credentials:
    """Login pair for the booking site."""

    username: str
    password: str


@dataclass(frozen=True)
class AppSettings:
    """Immutable snapshot of runtime configuration values."""

    username: Optional[str]
    password: Optional[str]
    test_mode: bool
    simulate_booking: bool
    take_screenshots: bool
    headless: bool
    date_override: Optional[date]
    scheduled_run: bool
    production_mode: bool
    timezone: str
    booking_open_time: Tuple[int, int]
    gate_late_grace_minutes: int
    queue_file: str
    log_dir: str
    batch_size: int
    max_attempts: int
    retry_delay_seconds: float
    settle_seconds: float
    worker_timeout_seconds: float
    lead_days: int
    grace_days: int
    required_party_size: int

    @property
    def credentials(self) -> Optional[Credentials]:
        """Return the credential pair, or ``None`` when either half is missing."""

        if not self.username or not self.password:
            return None
        return Credentials(self.username, self.password)


def load_settings(env: Optional[Mapping[str, str]] = None) -> AppSettings:
    """Load configuration from the environment and fall back to defaults."""

    if env is None:
        load_dotenv(override=False)
        env = os.environ

    test_mode = _to_bool(env.get("TEST_MODE"))
    default_queue = constants.TEST_QUEUE_FILE if test_mode else constants.DEFAULT_QUEUE_FILE

    return AppSettings(
        username=env.get("GOLF_USERNAME") or None,
        password=env.get("GOLF_PASSWORD") or None,
        test_mode=test_mode,
        simulate_booking=_to_bool(env.get("SIMULATE_BOOKING")),
        take_screenshots=_to_bool(env.get("TAKE_SCREENSHOTS"), default=True),
        headless=_to_bool(env.get("HEADLESS"), default=True),
        date_override=_parse_date_override(env.get("DATE_OVERRIDE")),
        scheduled_run=_to_bool(env.get("SCHEDULED_RUN")),
        production_mode=_to_bool(env.get("PRODUCTION_MODE")),
        timezone=env.get("BOOKING_TIMEZONE") or constants.DEFAULT_TIMEZONE,
        booking_open_time=parse_clock_time(
            env.get("BOOKING_OPEN_TIME") or constants.DEFAULT_BOOKING_OPEN_TIME
        ),
        gate_late_grace_minutes=_to_int(
            env, "GATE_LATE_GRACE_MINUTES", constants.DEFAULT_GATE_LATE_GRACE_MINUTES
        ),
        queue_file=env.get("QUEUE_FILE") or default_queue,
        log_dir=env.get("LOG_DIR") or constants.DEFAULT_LOG_DIR,
        batch_size=_to_int(env, "BATCH_SIZE", constants.DEFAULT_BATCH_SIZE, minimum=1),
        max_attempts=_to_int(env, "MAX_ATTEMPTS", constants.DEFAULT_MAX_ATTEMPTS, minimum=1),
        retry_delay_seconds=_to_float(
            env, "RETRY_DELAY_SECONDS", constants.DEFAULT_RETRY_DELAY_SECONDS
        ),
        settle_seconds=_to_float(env, "SETTLE_SECONDS", constants.DEFAULT_SETTLE_SECONDS),
        worker_timeout_seconds=_to_float(
            env, "WORKER_TIMEOUT_SECONDS", constants.WORKER_TIMEOUT_SECONDS
        ),
        lead_days=_to_int(env, "LEAD_DAYS", constants.DEFAULT_LEAD_DAYS),
        grace_days=_to_int(env, "GRACE_DAYS", constants.DEFAULT_GRACE_DAYS),
        required_party_size=_to_int(
            env, "REQUIRED_PARTY_SIZE", constants.REQUIRED_PARTY_SIZE, minimum=1
        ),
    )


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Return a cached :class:`AppSettings` instance."""

    return load_settings()
