# src/saintlocator/processing/display.py
"""Render canonical values for the screens: dates, times, links, calendar slots."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo
from typing import Optional
from urllib.parse import quote
from zoneinfo import ZoneInfo

from saintlocator.config.settings import settings
from saintlocator.core.models import Coordinate, EventRecord
from saintlocator.core.types import EpochMillis
from saintlocator.processing.normalize import instant_to_datetime, safe_str

NOT_AVAILABLE = "Not available"


def _zone(tz: Optional[str | tzinfo]) -> tzinfo:
    if tz is None:
        return ZoneInfo(settings.DISPLAY_TIMEZONE)
    if isinstance(tz, str):
        return ZoneInfo(tz)
    return tz


def _local(ms: Optional[EpochMillis], tz: Optional[str | tzinfo]) -> Optional[datetime]:
    dt = instant_to_datetime(ms)
    return dt.astimezone(_zone(tz)) if dt is not None else None


def format_date(ms: Optional[EpochMillis], tz: Optional[str | tzinfo] = None) -> str:
    """``"Monday, September 8, 2025"`` or ``"Not available"``."""
    dt = _local(ms, tz)
    if dt is None:
        return NOT_AVAILABLE
    return f"{dt:%A}, {dt:%B} {dt.day}, {dt.year}"


def format_time(ms: Optional[EpochMillis], tz: Optional[str | tzinfo] = None) -> str:
    """12-hour clock, e.g. ``"6:00 PM"``."""
    dt = _local(ms, tz)
    if dt is None:
        return NOT_AVAILABLE
    hour = dt.hour % 12 or 12
    return f"{hour}:{dt:%M} {'AM' if dt.hour < 12 else 'PM'}"


def format_timestamp(ms: Optional[EpochMillis], tz: Optional[str | tzinfo] = None) -> str:
    if ms is None:
        return NOT_AVAILABLE
    return f"{format_date(ms, tz)} {format_time(ms, tz)}"


def display_value(value: object | None) -> str:
    s = safe_str(value)
    return s or NOT_AVAILABLE


@dataclass(frozen=True)
class CalendarEntry:
    title: str
    start: datetime
    end: datetime
    location: Optional[str] = None
    notes: Optional[str] = None


def calendar_entry(event: EventRecord, duration: Optional[timedelta] = None) -> Optional[CalendarEntry]:
    """Calendar slot for an event, or ``None`` when its time is unknown.

    Defaults to ``EVENT_DURATION_MINUTES`` from settings (one hour).
    """
    start = instant_to_datetime(event.date_time)
    if start is None:
        return None
    if duration is None:
        duration = timedelta(minutes=settings.EVENT_DURATION_MINUTES)
    return CalendarEntry(
        title=event.title or "Event",
        start=start,
        end=start + duration,
        location=event.address or None,
        notes=event.description or None,
    )


def directions_url(coordinate: Coordinate, label: str = "", platform: str = "android") -> str:
    scheme = "maps:0,0?q=" if platform.lower() == "ios" else "geo:0,0?q="
    encoded = quote(label, safe="!*'()")
    return f"{scheme}{coordinate.latitude},{coordinate.longitude}({encoded})"
