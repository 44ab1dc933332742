# src/saintlocator/processing/normalize.py
"""Total coercions from loosely-typed document values to canonical scalars.

Every ``normalize_*`` function returns ``None`` when nothing usable can be
recovered and never raises. Multi-shape inputs are handled by an ordered
tuple of converters: each converter returns a value, or ``None`` when the
input is not its shape (or converts to something invalid), and the first
non-``None`` result wins.
"""
from __future__ import annotations

import math
import numbers
import re
from collections.abc import Mapping
from datetime import date, datetime, timedelta, timezone
from typing import Any, Callable, Optional, Sequence, Tuple, TypeVar

import pandas as pd

from saintlocator.core.models import Coordinate
from saintlocator.core.types import EpochMillis

_T = TypeVar("_T")
Converter = Callable[[Any], Optional[_T]]

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
# Largest magnitude a JavaScript Date can hold; documents written by the
# mobile client never carry anything beyond it.
_MAX_EPOCH_MS = 8_640_000_000_000_000

_TO_DATE_METHODS: Tuple[str, ...] = ("toDate", "to_datetime", "ToDatetime", "to_pydatetime")
_SECONDS_KEYS: Tuple[str, ...] = ("seconds", "_seconds")
_NANOS_KEYS: Tuple[str, ...] = ("nanoseconds", "_nanoseconds", "nanos")

_LAT_LNG_ALIASES: Tuple[Tuple[str, str], ...] = (
    ("latitude", "longitude"),
    ("lat", "lng"),
    ("lat", "lon"),
    ("_latitude", "_longitude"),
)

_NUMBER = r"[-+]?(?:\d+(?:\.\d*)?|\.\d+)"
_NUMBER_RE = re.compile(_NUMBER)
_NUMBER_FULL_RE = re.compile(rf"^{_NUMBER}$")
_HEMISPHERE_RE = re.compile(rf"({_NUMBER})\s*°?\s*([NSEW])(?![A-Z])", re.IGNORECASE)
_STRIP_RE = re.compile(r"[°\[\]()]|\b[NSEW]\b", re.IGNORECASE)


def safe_str(x: object | None) -> str:
    if x is None:
        return ""
    return str(x).strip()


def _first_match(converters: Sequence[Converter[_T]], value: Any) -> Optional[_T]:
    for convert in converters:
        try:
            out = convert(value)
        except Exception:
            # a converter blowing up is just that shape not matching
            continue
        if out is not None:
            return out
    return None


def _is_number(x: Any) -> bool:
    return isinstance(x, numbers.Real) and not isinstance(x, bool) and math.isfinite(x)


def _lookup(value: Any, keys: Sequence[str]) -> Any:
    """First of *keys* found on a mapping (by key) or other object (by attribute)."""
    for k in keys:
        if isinstance(value, Mapping):
            if k in value:
                return value[k]
        elif hasattr(value, k):
            return getattr(value, k)
    return None


def _is_scalar(value: Any) -> bool:
    return isinstance(value, (str, bytes, numbers.Number, date, timedelta))


# ---------------------------------------------------------------------------
# instants
# ---------------------------------------------------------------------------


def _valid_ms(ms: Any) -> Optional[EpochMillis]:
    if not _is_number(ms):
        return None
    out = int(ms)
    return out if abs(out) <= _MAX_EPOCH_MS else None


def _datetime_to_ms(dt: Any) -> Optional[EpochMillis]:
    if not isinstance(dt, datetime) or pd.isna(dt):
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return _valid_ms((dt - _EPOCH) // timedelta(milliseconds=1))


def _instant_from_to_date(value: Any) -> Optional[EpochMillis]:
    if value is None or _is_scalar(value) or isinstance(value, Mapping):
        return None
    for name in _TO_DATE_METHODS:
        method = getattr(value, name, None)
        if callable(method):
            return _datetime_to_ms(method())
    return None


def _instant_from_seconds(value: Any) -> Optional[EpochMillis]:
    if value is None or _is_scalar(value):
        return None
    seconds = _lookup(value, _SECONDS_KEYS)
    if not _is_number(seconds):
        return None
    nanos = _lookup(value, _NANOS_KEYS)
    nanos = nanos if _is_number(nanos) else 0
    # Math.round semantics: halves go up
    return _valid_ms(int(seconds * 1000) + math.floor(nanos / 1_000_000 + 0.5))


def _instant_from_number(value: Any) -> Optional[EpochMillis]:
    if not _is_number(value):
        return None
    # digits of the integral magnitude: sign and fraction do not count
    digits = len(str(abs(int(value))))
    return _valid_ms(value * 1000 if digits == 10 else value)


def _instant_from_date(value: Any) -> Optional[EpochMillis]:
    if isinstance(value, datetime):
        return _datetime_to_ms(value)
    if isinstance(value, date):
        return _datetime_to_ms(datetime(value.year, value.month, value.day))
    return None


def _instant_from_string(value: Any) -> Optional[EpochMillis]:
    if not isinstance(value, str) or not value.strip():
        return None
    # keywords like "now" or "today" would read the wall clock
    if not any(ch.isdigit() for ch in value):
        return None
    # NOTE: pd.to_datetime(..., utc=True) yields tz-aware Timestamp or NaT
    out = pd.to_datetime(value.strip(), utc=True, errors="coerce")
    if isinstance(out, pd.Timestamp):
        return _datetime_to_ms(out)
    return None


# String parsing is the least reliable encoding and must stay last.
INSTANT_CONVERTERS: Tuple[Converter[EpochMillis], ...] = (
    _instant_from_to_date,
    _instant_from_seconds,
    _instant_from_number,
    _instant_from_date,
    _instant_from_string,
)


def normalize_instant(value: Any) -> Optional[EpochMillis]:
    """Epoch milliseconds for a timestamp in any stored encoding, else ``None``.

    Accepts objects with a to-date method (store timestamp types),
    ``{seconds, nanoseconds}`` payloads, 10-digit (seconds) or other
    (milliseconds) numbers, ``datetime``/``date`` values and date strings.
    """
    return _first_match(INSTANT_CONVERTERS, value)


def instant_to_datetime(ms: Optional[EpochMillis]) -> Optional[datetime]:
    if ms is None:
        return None
    return _EPOCH + timedelta(milliseconds=ms)


# ---------------------------------------------------------------------------
# coordinates
# ---------------------------------------------------------------------------


def _coordinate(lat: Any, lng: Any) -> Optional[Coordinate]:
    if not (_is_number(lat) and _is_number(lng)):
        return None
    lat, lng = float(lat), float(lng)
    if not (-90.0 <= lat <= 90.0 and -180.0 <= lng <= 180.0):
        return None
    return Coordinate(latitude=lat, longitude=lng)


def _coordinate_from_object(value: Any) -> Optional[Coordinate]:
    if value is None or _is_scalar(value) or isinstance(value, (list, tuple)):
        return None
    for lat_key, lng_key in _LAT_LNG_ALIASES:
        lat = _lookup(value, (lat_key,))
        lng = _lookup(value, (lng_key,))
        if lat is not None and lng is not None:
            return _coordinate(lat, lng)
    return None


def _coordinate_from_pair(value: Any) -> Optional[Coordinate]:
    if isinstance(value, (list, tuple)) and len(value) == 2:
        return _coordinate(value[0], value[1])
    return None


def _signed(match: re.Match[str]) -> str:
    number, hemisphere = match.group(1), match.group(2).upper()
    if hemisphere in ("S", "W"):
        number = number.lstrip("+")
        number = number[1:] if number.startswith("-") else "-" + number
    return f" {number} "


def _numeric_tokens(parts: Sequence[str]) -> Optional[Tuple[float, float]]:
    tokens = [p.strip() for p in parts if p.strip()]
    if len(tokens) != 2 or not all(_NUMBER_FULL_RE.match(t) for t in tokens):
        return None
    return float(tokens[0]), float(tokens[1])


def _coordinate_from_string(value: Any) -> Optional[Coordinate]:
    if not isinstance(value, str):
        return None
    text = _HEMISPHERE_RE.sub(_signed, value)
    text = _STRIP_RE.sub(" ", text).strip()
    if not text:
        return None
    pair = _numeric_tokens(text.split(","))
    if pair is None:
        pair = _numeric_tokens(text.split())
    if pair is None:
        found = _NUMBER_RE.findall(text)
        if len(found) < 2:
            return None
        pair = float(found[0]), float(found[1])
    return _coordinate(*pair)


COORDINATE_CONVERTERS: Tuple[Converter[Coordinate], ...] = (
    _coordinate_from_object,
    _coordinate_from_pair,
    _coordinate_from_string,
)


def normalize_coordinate(value: Any) -> Optional[Coordinate]:
    """Validated coordinate from a geo point, ``[lat, lng]`` or a text label.

    Text like ``"[26.55° N, 76.49° E]"`` or ``"24.8,80.0"`` is accepted;
    southern/western hemisphere letters flip the sign. Pairs outside
    latitude [-90, 90] / longitude [-180, 180] are rejected, never clamped.
    """
    return _first_match(COORDINATE_CONVERTERS, value)


# ---------------------------------------------------------------------------
# references
# ---------------------------------------------------------------------------


def _last_segment(path: str) -> Optional[str]:
    parts = [p for p in path.split("/") if p.strip()]
    return parts[-1].strip() if parts else None


def _reference_from_id(value: Any) -> Optional[str]:
    if value is None or _is_scalar(value):
        return None
    ref_id = _lookup(value, ("id",))
    if isinstance(ref_id, str) and ref_id:
        return _last_segment(ref_id)
    return None


def _reference_from_path(value: Any) -> Optional[str]:
    if value is None or _is_scalar(value):
        return None
    path = _lookup(value, ("path",))
    return _last_segment(path) if isinstance(path, str) else None


def _reference_from_string(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    s = value.strip()
    return _last_segment(s[1:] if s.startswith("/") else s)


REFERENCE_CONVERTERS: Tuple[Converter[str], ...] = (
    _reference_from_id,
    _reference_from_path,
    _reference_from_string,
)


def normalize_reference(value: Any) -> Optional[str]:
    """Bare document id from a reference object, a path string or an id."""
    return _first_match(REFERENCE_CONVERTERS, value)


# ---------------------------------------------------------------------------
# plain fields
# ---------------------------------------------------------------------------


def normalize_text(value: Any) -> Optional[str]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        s = value.strip()
        return s or None
    if _is_number(value):
        return safe_str(value)
    return None


def normalize_choice(value: Any, choices: Mapping[str, str]) -> Optional[str]:
    """Canonical spelling for *value* from a lower-cased alias table.

    Values the table does not know are kept as stored (stripped text).
    """
    text = normalize_text(value)
    if text is None:
        return None
    return choices.get(" ".join(text.lower().split()), text)
