from __future__ import annotations

import time
from datetime import datetime, timezone


def now_ns() -> int:
    """Return the current Unix time in nanoseconds."""
    return time.time_ns()


def parse_rfc3339(value: str) -> datetime:
    """
    Parse RFC3339 timestamp string into tz-aware UTC datetime.

    Accepts strings like:
      - 2025-01-01T12:34:56Z
      - 2025-01-01T12:34:56.123Z
      - 2025-01-01T12:34:56+09:00
    """
    if not isinstance(value, str) or not value:
        raise ValueError("RFC3339 value must be a non-empty string")

    s = value.strip()
    # fromisoformat doesn't accept 'Z' before 3.11.
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"

    dt = datetime.fromisoformat(s)  # raises ValueError if invalid
    if dt.tzinfo is None:
        raise ValueError("RFC3339 value must carry a timezone offset")
    return dt.astimezone(timezone.utc)

