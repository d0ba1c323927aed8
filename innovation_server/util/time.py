from __future__ import annotations

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Current UTC time (tz-aware), truncated to milliseconds like BSON dates."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)
