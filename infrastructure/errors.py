"""Exception types shared across the queue processor."""

from __future__ import annotations


class BookingBotError(Exception):
    """Base class for errors raised by the booking queue processor."""


class ConfigurationError(BookingBotError):
    """Required configuration is missing or invalid; the run cannot start."""


class QueueCorruptError(BookingBotError):
    """The stored queue document could not be parsed."""


class QueueConflictError(BookingBotError):
    """The queue document changed on disk between load and save."""


class DateLoadTimeout(BookingBotError):
    """The tee sheet never confirmed that the selected date finished loading."""


__all__ = [
    "BookingBotError",
    "ConfigurationError",
    "QueueCorruptError",
    "QueueConflictError",
    "DateLoadTimeout",
]
