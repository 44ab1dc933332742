# src/saintlocator/processing/collection.py
from __future__ import annotations

import math
from typing import Any, Iterable, List, Mapping, Optional, Union

from saintlocator.core.models import (
    Coordinate,
    DistanceAnnotated,
    EventRecord,
    R,
    Record,
    SaintRecord,
    record_position,
)
from saintlocator.processing.base import Pipeline, Stage
from saintlocator.processing.normalize import normalize_reference, safe_str

EARTH_RADIUS_KM = 6371.0

RecordOrAnnotated = Union[Record, DistanceAnnotated[Any]]


def haversine_km(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance between two coordinates in kilometres."""
    lat1, lat2 = math.radians(a.latitude), math.radians(b.latitude)
    dlat = lat2 - lat1
    dlng = math.radians(b.longitude - a.longitude)
    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlng / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.asin(min(1.0, math.sqrt(h)))


def _annotated(item: RecordOrAnnotated) -> DistanceAnnotated[Any]:
    if isinstance(item, DistanceAnnotated):
        return item
    return DistanceAnnotated(record=item)


class AnnotateDistance(Stage):
    """Tag each record with its distance from *origin*.

    Without an origin, existing annotations are passed through untouched.
    """

    def __init__(self, origin: Optional[Coordinate]):
        self.origin = origin

    def run(self, items: List[DistanceAnnotated[Any]]) -> List[DistanceAnnotated[Any]]:
        if self.origin is None:
            return list(items)
        out: List[DistanceAnnotated[Any]] = []
        for it in items:
            pos = record_position(it.record)
            dist = haversine_km(self.origin, pos) if pos is not None else None
            out.append(DistanceAnnotated(record=it.record, distance_km=dist))
        return out


class DistanceFilter(Stage):
    """Drop records farther than *max_km*; unknown distances are kept."""

    def __init__(self, max_km: float = math.inf):
        self.max_km = max_km

    def run(self, items: List[DistanceAnnotated[Any]]) -> List[DistanceAnnotated[Any]]:
        if not math.isfinite(self.max_km):
            return list(items)
        return [it for it in items if it.distance_km is None or it.distance_km <= self.max_km]


def matches_query(record: Record, query: str) -> bool:
    """Case-insensitive substring match against the record's search fields."""
    needle = query.strip().casefold()
    if not needle:
        return True
    return any(needle in safe_str(getattr(record, f, "")).casefold() for f in record.SEARCH_FIELDS)


class TextFilter(Stage):
    def __init__(self, query: str = ""):
        self.query = safe_str(query)

    def run(self, items: List[DistanceAnnotated[Any]]) -> List[DistanceAnnotated[Any]]:
        if not self.query:
            return list(items)
        return [it for it in items if matches_query(it.record, self.query)]


class SortByDistance(Stage):
    """Ascending by distance, unknown last; ties keep input order."""

    def run(self, items: List[DistanceAnnotated[Any]]) -> List[DistanceAnnotated[Any]]:
        return sorted(
            items,
            key=lambda it: (it.distance_km is None, it.distance_km if it.distance_km is not None else 0.0),
        )


def filter_and_sort(
    records: Iterable[RecordOrAnnotated],
    origin: Optional[Coordinate] = None,
    query: str = "",
    max_distance_km: float = math.inf,
) -> List[DistanceAnnotated[Any]]:
    """Presentation list: annotate, distance filter, text filter, sort.

    Deterministic for equal inputs; records lacking a position are never
    dropped by the distance bound and always sort after positioned ones.
    """
    pipe = Pipeline(
        [
            AnnotateDistance(origin),
            DistanceFilter(max_distance_km),
            TextFilter(query),
            SortByDistance(),
        ]
    )
    return pipe.run([_annotated(r) for r in records])


def with_coordinates(records: Iterable[R]) -> List[R]:
    """Records that can be placed on a map."""
    return [r for r in records if record_position(r) is not None]


def filter_by_type(events: Iterable[EventRecord], event_type: Optional[str]) -> List[EventRecord]:
    wanted = safe_str(event_type).casefold()
    if not wanted or wanted == "all":
        return list(events)
    return [e for e in events if e.type.casefold() == wanted]


def resolve_reference(ref: Any, records_by_id: Mapping[str, R]) -> Optional[R]:
    """Follow a soft foreign key; ``None`` when it is absent or dangling."""
    ref_id = normalize_reference(ref)
    if ref_id is None:
        return None
    return records_by_id.get(ref_id)


def resolve_host(event: EventRecord, saints_by_id: Mapping[str, SaintRecord]) -> Optional[SaintRecord]:
    return resolve_reference(event.saint_id, saints_by_id)

