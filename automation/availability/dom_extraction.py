"""DOM extraction helpers for the tee-sheet iframe."""

from __future__ import annotations

from typing import Any, Dict, List

from playwright.async_api import Frame

from automation.shared.booking_contracts import RenderedSlot
from infrastructure.constants import (
    DATE_ITEM_SELECTOR,
    DATE_TEXT_SELECTOR,
    SLOT_AVAILABILITY_SELECTOR,
    SLOT_MARKER_ATTRIBUTE,
    SLOT_ROW_SELECTOR,
    SLOT_TIME_SELECTOR,
)

_DATE_TEXTS_SCRIPT = """
({ itemSelector, textSelector }) => {
    return Array.from(document.querySelectorAll(itemSelector)).map((item) => {
        const dateDiv = item.querySelector(textSelector);
        return dateDiv && dateDiv.textContent ? dateDiv.textContent.trim() : '';
    });
}
"""

_CLICK_DATE_AT_SCRIPT = """
({ itemSelector, index }) => {
    const item = document.querySelectorAll(itemSelector)[index];
    if (item instanceof HTMLElement) {
        item.click();
        return true;
    }
    return false;
}
"""

_EXTRACT_ROWS_SCRIPT = """
({ rowSelector, spotsSelector, timeSelector, marker }) => {
    const rows = [];
    document.querySelectorAll(rowSelector).forEach((row, index) => {
        const timeDiv = row.querySelector(timeSelector);
        if (!timeDiv || !timeDiv.textContent) return;
        const spots = row.querySelector(spotsSelector);
        const spotsText = spots && spots.textContent ? spots.textContent.trim() : '';
        const markerValue = `slot-${index}`;
        timeDiv.setAttribute(marker, markerValue);
        rows.push({
            timeText: timeDiv.textContent.trim(),
            openSpots: spotsText === '' ? null : parseInt(spotsText, 10),
            unavailable: row.classList.contains('unavailable'),
            selector: `[${marker}="${markerValue}"]`,
        });
    });
    return rows;
}
"""


async def click_date_item(frame: Frame, label: str) -> bool:
    """Click the carousel item whose date text is exactly ``label``.

    ``Jul 1`` must not match ``Jul 10``.
    """

    texts: List[str] = await frame.evaluate(
        _DATE_TEXTS_SCRIPT,
        {"itemSelector": DATE_ITEM_SELECTOR, "textSelector": DATE_TEXT_SELECTOR},
    ) or []
    for index, text in enumerate(texts):
        if str(text).strip() == label:
            clicked = await frame.evaluate(
                _CLICK_DATE_AT_SCRIPT,
                {"itemSelector": DATE_ITEM_SELECTOR, "index": index},
            )
            return bool(clicked)
    return False


async def extract_slot_rows(frame: Frame) -> List[RenderedSlot]:
    """Return every tee-sheet row, tagging each time cell with a stable selector."""

    rows: List[Dict[str, Any]] = await frame.evaluate(
        _EXTRACT_ROWS_SCRIPT,
        {
            "rowSelector": SLOT_ROW_SELECTOR,
            "spotsSelector": SLOT_AVAILABILITY_SELECTOR,
            "timeSelector": SLOT_TIME_SELECTOR,
            "marker": SLOT_MARKER_ATTRIBUTE,
        },
    ) or []

    slots: List[RenderedSlot] = []
    for row in rows:
        open_spots = row.get("openSpots")
        if isinstance(open_spots, float) and open_spots.is_integer():
            open_spots = int(open_spots)
        slots.append(
            RenderedSlot(
                time_text=str(row.get("timeText", "")),
                # parseInt yields NaN for junk text
                open_spots=open_spots if isinstance(open_spots, int) else None,
                selector=str(row.get("selector", "")),
                unavailable=bool(row.get("unavailable")),
            )
        )
    return slots
