from datetime import date

import pytest

from infrastructure.errors import ConfigurationError
from infrastructure.settings import load_settings, parse_clock_time


def test_defaults():
    settings = load_settings({})

    assert settings.queue_file == "booking-queue.json"
    assert settings.batch_size == 3
    assert settings.max_attempts == 2
    assert settings.retry_delay_seconds == 30.0
    assert settings.take_screenshots is True
    assert settings.headless is True
    assert settings.simulate_booking is False
    assert settings.timezone == "America/New_York"
    assert settings.booking_open_time == (7, 0)
    assert (settings.lead_days, settings.grace_days) == (30, 3)
    assert settings.credentials is None


def test_test_mode_switches_queue_file():
    assert load_settings({"TEST_MODE": "true"}).queue_file == "test-booking-queue.json"
    assert load_settings({"TEST_MODE": "1", "QUEUE_FILE": "custom.json"}).queue_file == "custom.json"


def test_credentials_and_flags():
    settings = load_settings(
        {
            "GOLF_USERNAME": "member",
            "GOLF_PASSWORD": "secret",
            "TAKE_SCREENSHOTS": "false",
            "HEADLESS": "no",
            "SCHEDULED_RUN": "yes",
            "DATE_OVERRIDE": "2026-11-18",
            "BOOKING_OPEN_TIME": "06:30",
        }
    )

    assert settings.credentials.username == "member"
    assert settings.take_screenshots is False
    assert settings.headless is False
    assert settings.scheduled_run is True
    assert settings.date_override == date(2026, 11, 18)
    assert settings.booking_open_time == (6, 30)


@pytest.mark.parametrize(
    "env",
    [
        {"BATCH_SIZE": "0"},
        {"MAX_ATTEMPTS": "many"},
        {"RETRY_DELAY_SECONDS": "-1"},
        {"DATE_OVERRIDE": "18/11/2026"},
        {"BOOKING_OPEN_TIME": "25:00"},
    ],
)
def test_invalid_values_raise_configuration_error(env):
    with pytest.raises(ConfigurationError):
        load_settings(env)


def test_parse_clock_time():
    assert parse_clock_time(" 07:05 ") == (7, 5)
    with pytest.raises(ConfigurationError):
        parse_clock_time("7")
