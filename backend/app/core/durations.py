"""Duration Parsing — "7d" / "12h" / "30m" / "45s" / "3600" to timedelta."""

import re
from datetime import timedelta

_DURATION = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$", re.IGNORECASE)
_UNIT_SECONDS = {"": 1, "s": 1, "m": 60, "h": 3600, "d": 86400}


def parse_duration(value: str) -> timedelta:
    """Parse a compact duration. Bare numbers are seconds.

    Raises ValueError for anything else (including zero).
    """
    match = _DURATION.match(value or "")
    if not match:
        raise ValueError(f"Invalid duration: {value!r}")
    amount = int(match.group(1))
    if amount <= 0:
        raise ValueError(f"Duration must be positive: {value!r}")
    return timedelta(seconds=amount * _UNIT_SECONDS[match.group(2).lower()])
