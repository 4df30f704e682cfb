from __future__ import annotations

from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def whole_minutes_until(*, now_utc: datetime, deadline: datetime) -> int:
    """Returns full minutes left until deadline, never negative."""
    remaining_seconds = int((deadline - now_utc).total_seconds())
    if remaining_seconds <= 0:
        return 0
    return remaining_seconds // 60
