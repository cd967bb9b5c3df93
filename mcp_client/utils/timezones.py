"""Helpers for rendering timestamps in the configured timezone."""

from __future__ import annotations

from datetime import datetime, timezone, tzinfo
from typing import Optional

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..logging_config import logger

UTC = timezone.utc


def resolve_timezone(name: Optional[str]) -> tzinfo:
    """Resolve *name* to a tzinfo, falling back to UTC on error."""

    tz_name = (name or "").strip()
    if not tz_name or tz_name.upper() == "UTC":
        return UTC
    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("unknown timezone; defaulting to UTC", extra={"timezone": tz_name})
    return UTC


def convert_to_timezone(dt: datetime, tz: tzinfo) -> datetime:
    """Convert *dt* into *tz*, treating naive datetimes as UTC."""

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(tz)


def format_medium(dt: datetime) -> str:
    """Render a medium date and medium time, e.g. ``Oct 19, 2026 at 9:16:05 AM``."""

    hour = dt.hour % 12 or 12
    return f"{dt:%b} {dt.day}, {dt:%Y} at {hour}:{dt:%M:%S %p}"


__all__ = ["UTC", "convert_to_timezone", "format_medium", "resolve_timezone"]
