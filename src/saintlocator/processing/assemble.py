# src/saintlocator/processing/assemble.py
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from functools import partial
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Type

from saintlocator.core.models import EventRecord, Record, SaintRecord
from saintlocator.core.types import RawDocument, RecordKind
from saintlocator.processing.normalize import (
    normalize_choice,
    normalize_coordinate,
    normalize_instant,
    normalize_reference,
    normalize_text,
)
from saintlocator.utils.progress import Progress

GENDER_CHOICES: Dict[str, str] = {
    "male": "Male",
    "m": "Male",
    "female": "Female",
    "f": "Female",
}

AMBER_CHOICES: Dict[str, str] = {
    "digambar": "Digambar",
    "digambara": "Digambar",
    "shwetambar": "Shwetambar",
    "shvetambar": "Shwetambar",
    "svetambara": "Shwetambar",
    "shwetambara": "Shwetambar",
}


@dataclass(frozen=True)
class FieldSpec:
    """How one canonical field is read from a raw document.

    ``sources`` are raw key names in priority order. Only the first key
    present is consulted; if its value does not normalize, ``default`` is
    used rather than a lower-priority key.
    """

    name: str
    sources: Tuple[str, ...]
    normalizer: Callable[[Any], Any] = normalize_text
    default: Any = ""


Manifest = Tuple[FieldSpec, ...]

SAINT_MANIFEST: Manifest = (
    FieldSpec("name", ("name",)),
    FieldSpec("designation", ("designation",)),
    FieldSpec("location", ("location",)),
    FieldSpec("coordinates", ("coordinates", "locationGeo", "geo"), normalize_coordinate, None),
    FieldSpec("guru_name", ("guruName", "guru_name")),
    FieldSpec("guru", ("guru",), normalize_reference, None),
    FieldSpec("group_leader", ("groupLeader", "group_leader"), normalize_reference, None),
    FieldSpec("sect", ("sect",)),
    FieldSpec("about", ("about",)),
    FieldSpec("date_of_diksha", ("dateOfDiksha", "date_of_diksha"), normalize_instant, None),
    FieldSpec("gender", ("gender",), partial(normalize_choice, choices=GENDER_CHOICES)),
    FieldSpec("amber", ("amber",), partial(normalize_choice, choices=AMBER_CHOICES)),
)

EVENT_MANIFEST: Manifest = (
    FieldSpec("title", ("title",)),
    FieldSpec("type", ("type",)),
    FieldSpec("saint_id", ("saintId", "saint"), normalize_reference, None),
    FieldSpec("description", ("description",)),
    FieldSpec("saint_name", ("saintName", "saint_name")),
    FieldSpec("date_time", ("dateTime", "date_time"), normalize_instant, None),
    FieldSpec("address", ("address",)),
    FieldSpec("location_geo", ("locationGeo", "coordinates", "geo"), normalize_coordinate, None),
)

_RECORD_TYPES: Dict[str, Tuple[Type[Any], Manifest]] = {
    "saint": (SaintRecord, SAINT_MANIFEST),
    "event": (EventRecord, EVENT_MANIFEST),
}


def _source_value(raw: RawDocument, sources: Tuple[str, ...]) -> Any:
    """Value of the first source key present with a non-null value."""
    for key in sources:
        val = raw.get(key)
        if val is not None:
            return val
    return None


def _field_value(raw: RawDocument, spec: FieldSpec) -> Any:
    val = _source_value(raw, spec.sources)
    if val is None:
        return spec.default
    try:
        out = spec.normalizer(val)
    except Exception:
        return spec.default
    return spec.default if out is None else out


def assemble(
    kind: RecordKind,
    doc_id: str,
    raw: Optional[RawDocument],
    manifest: Optional[Manifest] = None,
) -> Record:
    """Build a canonical record from a raw document, field by field.

    Missing or unparseable fields take their manifest default; the input
    mapping is never mutated and nothing is raised for bad data.
    """
    record_type, default_manifest = _RECORD_TYPES[kind]
    fields = manifest if manifest is not None else default_manifest
    doc: RawDocument = raw if isinstance(raw, Mapping) else {}
    values = {spec.name: _field_value(doc, spec) for spec in fields}
    return record_type(id=str(doc_id), **values)


def assemble_many(
    kind: RecordKind,
    documents: Iterable[Tuple[str, RawDocument]],
    manifest: Optional[Manifest] = None,
    *,
    progress: bool = False,
) -> List[Record]:
    prog = Progress(enabled=progress)
    return [
        assemble(kind, doc_id, raw, manifest)
        for doc_id, raw in prog.iter(documents, desc=f"Assembling {kind} records")
    ]
