"""Tee-sheet reading and slot selection."""

from .slot_finder import SlotFinder
from .time_utils import date_label, normalize_slot_time, parse_slot_time

__all__ = [
    "SlotFinder",
    "date_label",
    "normalize_slot_time",
    "parse_slot_time",
]
