"""Screenshot capture for failure (and confirmation) diagnostics."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional, Union

from automation.shared.booking_contracts import Capturable


def screenshot_name(action: str, request_id: Optional[str] = None, *, at: Optional[datetime] = None) -> str:
    """Build ``<action>-<request id>-<timestamp>.png`` with filesystem-safe colons."""

    stamp = (at or datetime.now(timezone.utc)).isoformat(timespec="milliseconds").replace(":", "-")
    if request_id:
        return f"{action}-{request_id}-{stamp}.png"
    return f"{action}-{stamp}.png"


class DiagnosticCapture:
    """Save one snapshot per event into the log directory; never raises."""

    def __init__(
        self,
        log_dir: Union[str, Path],
        *,
        enabled: bool = True,
        logger: Optional[logging.Logger] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.log_dir = Path(log_dir)
        self.enabled = enabled
        self.logger = logger or logging.getLogger("Diagnostics")
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    async def capture(
        self,
        site: Optional[Capturable],
        action: str,
        request_id: Optional[str] = None,
    ) -> Optional[Path]:
        if not self.enabled:
            self.logger.debug("Screenshotting is disabled, skipping %s", action)
            return None
        if site is None:
            self.logger.warning("Cannot take screenshot %r - no booking page is open", action)
            return None

        path = self.log_dir / screenshot_name(action, request_id, at=self._clock())
        try:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            await site.capture(path)
        except Exception as exc:
            self.logger.warning("Failed to take screenshot %r: %s", path.name, exc)
            return None
        self.logger.info("Screenshot saved to %s", path)
        return path
