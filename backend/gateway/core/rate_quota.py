"""Rate Quota — pure hourly-window arithmetic for the per-viewer API quota.

Invariants:
    - A window is one UTC clock hour; it resets at the top of the next hour
    - reset_time_in_seconds is never negative
    - remaining = max(0, limit - used)
"""

from datetime import datetime, timedelta, timezone

from gateway.core.response_formatter import api_date


def hour_bucket(now: datetime) -> datetime:
    """Start of the UTC hour containing `now` (the counter key)."""
    return now.astimezone(timezone.utc).replace(minute=0, second=0, microsecond=0)


def next_reset(now: datetime) -> datetime:
    return hour_bucket(now) + timedelta(hours=1)


def seconds_until_reset(now: datetime) -> int:
    return max(0, int((next_reset(now) - now).total_seconds()))


def remaining_hits(limit: int, used: int) -> int:
    return max(0, limit - used)


def status_payload(now: datetime, limit: int, used: int, xml: bool = False) -> dict:
    """account/rate_limit_status body. XML spells the seconds key without the underscore."""
    seconds_key = "resettime_in_seconds" if xml else "reset_time_in_seconds"
    return {
        "remaining_hits": remaining_hits(limit, used),
        "hourly_limit": limit,
        seconds_key: seconds_until_reset(now),
        "reset_time": api_date(next_reset(now)),
    }
