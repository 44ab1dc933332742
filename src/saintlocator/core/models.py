from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Generic, Optional, Tuple, TypeVar, Union

from saintlocator.core.types import EpochMillis


@dataclass(frozen=True)
class Coordinate:
    """A validated (latitude, longitude) pair in decimal degrees."""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class SaintRecord:
    """Canonical saint document.

    ``guru`` and ``group_leader`` are soft references to other saints;
    ``date_of_diksha`` is epoch milliseconds when known.
    """

    KIND: ClassVar[str] = "saint"
    GEO_FIELD: ClassVar[str] = "coordinates"
    SEARCH_FIELDS: ClassVar[Tuple[str, ...]] = ("name", "location", "designation")

    id: str
    name: str = ""
    designation: str = ""
    location: str = ""
    coordinates: Optional[Coordinate] = None
    guru_name: str = ""
    guru: Optional[str] = None
    group_leader: Optional[str] = None
    sect: str = ""
    about: str = ""
    date_of_diksha: Optional[EpochMillis] = None
    gender: str = ""
    amber: str = ""


@dataclass(frozen=True)
class EventRecord:
    """Canonical event document; ``saint_id`` points at the hosting saint."""

    KIND: ClassVar[str] = "event"
    GEO_FIELD: ClassVar[str] = "location_geo"
    SEARCH_FIELDS: ClassVar[Tuple[str, ...]] = ("title", "saint_name", "address")

    id: str
    title: str = ""
    type: str = ""
    saint_id: Optional[str] = None
    description: str = ""
    saint_name: str = ""
    date_time: Optional[EpochMillis] = None
    address: str = ""
    location_geo: Optional[Coordinate] = None


Record = Union[SaintRecord, EventRecord]

R = TypeVar("R", SaintRecord, EventRecord)


@dataclass(frozen=True)
class DistanceAnnotated(Generic[R]):
    """A record plus its great-circle distance (km) from a reference point."""

    record: R
    distance_km: Optional[float] = None


def record_position(record: Record) -> Optional[Coordinate]:
    return getattr(record, record.GEO_FIELD, None)
