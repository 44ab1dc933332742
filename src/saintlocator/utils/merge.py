# src/saintlocator/utils/merge.py
from __future__ import annotations

from typing import Dict, Iterable, List, Sequence

from saintlocator.core.models import R


def merge_records(*sources: Sequence[R]) -> List[R]:
    """
    Union several record lists, de-duplicating by ``id``.
    - A record keeps the position where its id was first seen
    - Content comes from the last list that carries the id (refreshes win)
    - Inputs are never mutated
    """
    merged: Dict[str, R] = {}
    for records in sources:
        for rec in records:
            merged[rec.id] = rec
    return list(merged.values())


def index_by_id(records: Iterable[R]) -> Dict[str, R]:
    out: Dict[str, R] = {}
    for rec in records:
        out.setdefault(rec.id, rec)
    return out
