"""Infrastructure helpers."""

from .errors import (
    BookingBotError,
    ConfigurationError,
    DateLoadTimeout,
    QueueConflictError,
    QueueCorruptError,
)
from .settings import AppSettings, Credentials, get_settings, load_settings

__all__ = [
    "AppSettings",
    "BookingBotError",
    "ConfigurationError",
    "Credentials",
    "DateLoadTimeout",
    "QueueConflictError",
    "QueueCorruptError",
    "get_settings",
    "load_settings",
]
