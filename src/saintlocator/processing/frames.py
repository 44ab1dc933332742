# src/saintlocator/processing/frames.py
from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, Iterable, List

import pandas as pd

from saintlocator.core.models import DistanceAnnotated, EventRecord, SaintRecord
from saintlocator.processing.collection import RecordOrAnnotated

_INSTANT_COLS = ("date_of_diksha", "date_time")


def _row(item: RecordOrAnnotated) -> Dict[str, Any]:
    if isinstance(item, DistanceAnnotated):
        record, dist = item.record, item.distance_km
    else:
        record, dist = item, None
    row = asdict(record)
    geo = row.pop(record.GEO_FIELD, None)
    row["latitude"] = geo["latitude"] if geo else None
    row["longitude"] = geo["longitude"] if geo else None
    row["distance_km"] = dist
    return row


def records_to_frame(items: Iterable[RecordOrAnnotated]) -> pd.DataFrame:
    """
    One row per record, in input order:
      - the record's position split into latitude/longitude columns
      - distance_km (NaN when unknown)
      - epoch-ms instants as tz-aware UTC timestamps
    """
    rows: List[Dict[str, Any]] = [_row(it) for it in items]
    if not rows:
        return pd.DataFrame(columns=["id", "latitude", "longitude", "distance_km"])
    df = pd.DataFrame(rows)
    for col in _INSTANT_COLS:
        if col in df.columns:
            df[col] = pd.to_datetime(df[col], unit="ms", utc=True, errors="coerce")
    df["distance_km"] = pd.to_numeric(df["distance_km"], errors="coerce")
    return df


def kind_columns(kind: str) -> List[str]:
    """Preferred column order for printing a frame of *kind* records."""
    if kind == SaintRecord.KIND:
        return ["id", "name", "designation", "location", "distance_km"]
    if kind == EventRecord.KIND:
        return ["id", "title", "type", "saint_name", "when", "address", "distance_km"]
    return ["id", "distance_km"]
