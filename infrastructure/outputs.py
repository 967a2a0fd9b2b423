"""Run outputs for the invoking environment (CI step outputs or console)."""

from __future__ import annotations

import os
from typing import Mapping, Optional


def set_output(name: str, value: str, *, env: Optional[Mapping[str, str]] = None) -> None:
    """Publish a named run output.

    When ``GITHUB_OUTPUT`` names a file the value is appended in heredoc form so
    multi-line summaries survive intact; otherwise ``name=value`` is printed.
    """

    env = os.environ if env is None else env
    destination = env.get("GITHUB_OUTPUT")
    if destination:
        with open(destination, "a", encoding="utf-8") as handle:
            handle.write(f"{name}<<EOF\n{value}\nEOF\n")
        return
    print(f"{name}={value}")


def publish_run_outputs(
    processed_count: int,
    booking_status: str,
    results: str,
    *,
    env: Optional[Mapping[str, str]] = None,
) -> None:
    """Emit the three outputs every run produces."""

    set_output("processed_count", str(processed_count), env=env)
    set_output("booking_status", booking_status, env=env)
    set_output("results", results, env=env)
