"""Status labels, durations and relative times for terminal output."""

from __future__ import annotations

from datetime import datetime

import click

from ..models import Status

_STYLES = {
    Status.SUCCESS: "green",
    Status.FAILED: "red",
    Status.RUNNING: "yellow",
}

_DURATION_UNITS = (("d", 86400), ("h", 3600), ("m", 60), ("s", 1))

_AGO_UNITS = (
    ("year", 365 * 86400),
    ("month", 30 * 86400),
    ("week", 7 * 86400),
    ("day", 86400),
    ("hour", 3600),
    ("minute", 60),
    ("second", 1),
)


def render_label(label: str, status: Status | str) -> str:
    """Style *label* according to *status*.

    Success is green, failed red and running yellow; manual jobs get a
    `` [manual]`` suffix. Every other status leaves the label untouched.
    """
    state = Status.parse(status)
    if state is Status.MANUAL:
        return f"{label} [manual]"
    color = _STYLES.get(state)
    if color is None:
        return label
    return click.style(label, fg=color)


def format_duration(seconds: int | float) -> str:
    """Format whole seconds like ``1h 2m 3s``; sub-second parts are dropped."""
    remaining = int(seconds)
    if remaining <= 0:
        return "0s"
    parts = []
    for suffix, size in _DURATION_UNITS:
        value, remaining = divmod(remaining, size)
        if value:
            parts.append(f"{value}{suffix}")
    return " ".join(parts)


def format_ago(then: datetime, now: datetime) -> str:
    """Describe the distance from *then* to *now*, e.g. ``2 days ago``."""
    delta = int((now - then).total_seconds())
    if delta == 0:
        return "now"
    distance = abs(delta)
    for unit, size in _AGO_UNITS:
        if distance >= size:
            value = distance // size
            break
    phrase = f"{value} {unit}" if value == 1 else f"{value} {unit}s"
    return f"{phrase} ago" if delta > 0 else f"in {phrase}"
