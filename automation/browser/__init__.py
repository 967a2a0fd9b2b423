"""Browser session management for the booking site."""

from .async_browser_helpers import BrowserHelpers
from .session import BookingSession, SimulatedSession

__all__ = [
    "BrowserHelpers",
    "BookingSession",
    "SimulatedSession",
]
