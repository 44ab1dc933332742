from __future__ import annotations
from typing import Any, List, Literal, Mapping, Tuple

RecordKind = Literal["saint", "event"]

# Untyped field -> value map as handed over by the document store.
RawDocument = Mapping[str, Any]

# (document id, raw document) pairs produced by a DocumentSource.
DocumentList = List[Tuple[str, RawDocument]]

# Canonical instant: Unix epoch milliseconds.
EpochMillis = int
