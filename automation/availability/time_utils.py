"""Time parsing helpers for tee-sheet extraction."""

from __future__ import annotations

import re
from datetime import date
from typing import Optional, Tuple

from infrastructure.constants import MONTH_ABBREVIATIONS

_TWELVE_HOUR = re.compile(r"(\d{1,2}):(\d{2})\s*(AM|PM)$", re.IGNORECASE)
_TWENTY_FOUR_HOUR = re.compile(r"(?<!\d)(\d{1,2}):(\d{2})$")


def parse_slot_time(text: str) -> Optional[Tuple[int, int]]:
    """Return ``(hour, minute)`` for the time at the end of ``text``.

    The tee sheet renders times as ``7:40 AM``; some rows prefix the time with
    a label, so only the trailing time is considered. Plain 24-hour ``HH:MM``
    text is accepted too. Returns ``None`` when no time can be read.
    """
    if not text:
        return None
    cleaned = text.strip()

    match = _TWELVE_HOUR.search(cleaned)
    if match:
        hour, minute = int(match.group(1)), int(match.group(2))
        meridiem = match.group(3).upper()
        if not (1 <= hour <= 12 and 0 <= minute <= 59):
            return None
        if meridiem == "PM" and hour != 12:
            hour += 12
        elif meridiem == "AM" and hour == 12:
            hour = 0
        return hour, minute

    match = _TWENTY_FOUR_HOUR.search(cleaned)
    if match:
        hour, minute = int(match.group(1)), int(match.group(2))
        if 0 <= hour <= 23 and 0 <= minute <= 59:
            return hour, minute
    return None


def normalize_slot_time(text: str) -> Optional[str]:
    """Return the slot time as zero-padded ``HH:MM`` or ``None``."""

    parsed = parse_slot_time(text)
    if parsed is None:
        return None
    return f"{parsed[0]:02d}:{parsed[1]:02d}"


def date_label(target: date) -> str:
    """Label the date carousel shows for ``target``, e.g. ``Jul 12``."""

    return f"{MONTH_ABBREVIATIONS[target.month - 1]} {target.day}"
