"""Debug utilities for automation."""

from .diagnostics import DiagnosticCapture, screenshot_name

__all__ = ["DiagnosticCapture", "screenshot_name"]
