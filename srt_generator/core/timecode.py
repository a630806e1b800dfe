"""SRT timestamp codec: float seconds <-> ``HH:MM:SS,mmm``.

WHY: SRT timing lines use a fixed textual timestamp with a comma before
the milliseconds. Cue end times must never appear later than the source
timestamp they came from, so formatting truncates instead of rounding.

HOW: format_timestamp() converts seconds to whole milliseconds and splits
them into fields. parse_timestamp() is its inverse for well-formed input.

RULES:
- Hours are at least two digits but unbounded ("100:00:00,000" is valid)
- Milliseconds are floored from the shortest decimal form of the float
  (its repr), so 2.3 renders as "00:00:02,300", not "00:00:02,299", and
  1.0009996 renders as "00:00:01,000"
- Negative, NaN and infinite seconds are rejected
- parse_timestamp() raises MalformedTimestampError on anything else
"""

from __future__ import annotations

import math
import re
from decimal import Decimal

TIMESTAMP_RE = re.compile(r"^(\d{2,}):([0-5]\d):([0-5]\d),(\d{3})$")


class MalformedTimestampError(ValueError):
    """Raised when a string is not a valid ``HH:MM:SS,mmm`` timestamp."""


def _to_millis(seconds: float) -> int:
    """Floor seconds to whole milliseconds using their shortest decimal form."""
    return int(Decimal(repr(float(seconds))) * 1000)


def format_timestamp(seconds: float) -> str:
    """Convert seconds to an SRT timestamp: HH:MM:SS,mmm.

    Args:
        seconds: Non-negative time in seconds.

    Returns:
        The zero-padded timestamp string.

    Raises:
        ValueError: If seconds is negative or not finite.
    """
    if not math.isfinite(seconds):
        raise ValueError("Cannot format non-finite time: {}".format(seconds))
    if seconds < 0:
        raise ValueError("Cannot format negative time: {}".format(seconds))

    total_ms = _to_millis(seconds)
    hours, remainder = divmod(total_ms, 3_600_000)
    minutes, remainder = divmod(remainder, 60_000)
    secs, millis = divmod(remainder, 1000)
    return "{:02d}:{:02d}:{:02d},{:03d}".format(hours, minutes, secs, millis)


def parse_timestamp(text: str) -> float:
    """Parse an SRT timestamp back into float seconds.

    Args:
        text: A timestamp such as "00:01:02,345". Surrounding whitespace
              is ignored.

    Returns:
        The time in seconds.

    Raises:
        MalformedTimestampError: If text does not match HH:MM:SS,mmm.
    """
    match = TIMESTAMP_RE.match(text.strip()) if isinstance(text, str) else None
    if match is None:
        raise MalformedTimestampError("Invalid time format: {!r}".format(text))

    hours, minutes, secs, millis = (int(part) for part in match.groups())
    total_ms = ((hours * 60 + minutes) * 60 + secs) * 1000 + millis
    return total_ms / 1000
