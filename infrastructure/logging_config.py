"""
Logging configuration for the booking queue processor.

Each run writes its own ``processing-<timestamp>.log`` next to the diagnostic
screenshots, so a scheduled run leaves one self-contained artifact folder.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

COMPONENT_LOGGERS = (
    "QueueStore",
    "EligibilityFilter",
    "BookingScheduler",
    "RequestProcessor",
    "BookingSession",
    "SlotFinder",
    "TimingGate",
    "Diagnostics",
)


def run_log_name(started_at: Optional[datetime] = None) -> str:
    """Return the per-run log file name, safe for every filesystem."""

    stamp = (started_at or datetime.now()).isoformat(timespec="seconds")
    return f"processing-{stamp.replace(':', '-')}.log"


def setup_logging(
    log_dir: Union[str, os.PathLike] = "logs",
    *,
    production_mode: bool = False,
    started_at: Optional[datetime] = None,
) -> Path:
    """
    Set up console and file logging for a single processing run.

    Args:
        log_dir: Directory that receives the run log and the error log
        production_mode: Quieter console output when True
        started_at: Timestamp used in the run log name (defaults to now)

    Returns:
        Path to the run log file
    """
    directory = Path(log_dir)
    directory.mkdir(parents=True, exist_ok=True)
    run_log = directory / run_log_name(started_at)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.INFO if production_mode else logging.DEBUG)
    root_logger.handlers = []

    detailed_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d in %(funcName)s()] - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    console_formatter = logging.Formatter(
        '[%(asctime)s] %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(console_formatter)
    root_logger.addHandler(console_handler)

    run_handler = logging.FileHandler(run_log, encoding='utf-8')
    run_handler.setLevel(logging.INFO if production_mode else logging.DEBUG)
    run_handler.setFormatter(detailed_formatter)
    root_logger.addHandler(run_handler)

    # Errors accumulate across runs so repeated failures are easy to spot.
    error_handler = logging.handlers.RotatingFileHandler(
        directory / 'errors.log',
        maxBytes=5 * 1024 * 1024,
        backupCount=5,
        encoding='utf-8'
    )
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(detailed_formatter)
    root_logger.addHandler(error_handler)

    component_level = logging.INFO if production_mode else logging.DEBUG
    for name in COMPONENT_LOGGERS:
        logging.getLogger(name).setLevel(component_level)

    # Reduce noise from external libraries
    logging.getLogger('asyncio').setLevel(logging.WARNING)
    logging.getLogger('playwright').setLevel(logging.WARNING)

    root_logger.info("=" * 80)
    root_logger.info(f"Booking queue logging initialized - {datetime.now()}")
    root_logger.info(f"Production Mode: {'ON' if production_mode else 'OFF'}")
    root_logger.info(f"Run log: {run_log}")
    root_logger.info("=" * 80)
    return run_log


def get_logger(name: str) -> logging.Logger:
    """Return a logger with the given name."""
    return logging.getLogger(name)
