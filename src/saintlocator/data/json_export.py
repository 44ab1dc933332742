# src/saintlocator/data/json_export.py
from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Mapping, cast

from saintlocator.core.errors import DocumentSourceError, InvalidExportError
from saintlocator.core.types import DocumentList, RawDocument
from saintlocator.data.base import DocumentSource


def _status(msg: str) -> None:
    print(msg, file=sys.stderr, flush=True)


def _read_json_object(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            data: Any = json.load(f)
    except (OSError, ValueError) as e:
        raise DocumentSourceError(f"Could not read document export {path}: {e}") from e
    if not isinstance(data, dict):
        raise InvalidExportError(f"{path} does not contain a JSON object of collections.")
    return cast(Dict[str, Any], data)


def _documents_from_mapping(name: str, docs: Mapping[str, Any]) -> DocumentList:
    out: DocumentList = []
    for doc_id, raw in docs.items():
        if not isinstance(raw, dict):
            raise InvalidExportError(f"Document {name}/{doc_id} is not a JSON object.")
        out.append((str(doc_id), cast(RawDocument, raw)))
    return out


def _documents_from_list(name: str, docs: List[Any]) -> DocumentList:
    out: DocumentList = []
    for i, raw in enumerate(docs):
        if not isinstance(raw, dict) or raw.get("id") in (None, ""):
            raise InvalidExportError(f"Entry {i} of collection '{name}' has no 'id'.")
        body = {k: v for k, v in raw.items() if k != "id"}
        out.append((str(raw["id"]), cast(RawDocument, body)))
    return out


class JsonExportSource(DocumentSource):
    """
    Read a document-store dump saved as JSON:
      {"saint": {"<id>": {...}, ...}, "events": [{"id": "<id>", ...}, ...]}
    Each collection is either an id -> document object or a list of
    documents carrying their own "id". A missing collection loads as empty.
    """

    def __init__(self, path: str | Path) -> None:
        p = Path(path)
        if p.is_dir():
            candidate = p / "export.json"
            if not candidate.exists():
                raise FileNotFoundError(
                    f"Expected an export at {candidate}. "
                    "Pass the file path directly if it has a different name."
                )
            self.path = candidate
        else:
            self.path = p
        self._data: Dict[str, Any] | None = None

    def _collections(self) -> Dict[str, Any]:
        if self._data is None:
            self._data = _read_json_object(self.path)
        return self._data

    def load(self, collection: str) -> DocumentList:
        docs = self._collections().get(collection)
        if docs is None:
            _status(f"Collection '{collection}' not found in {self.path}; nothing to load.")
            return []
        if isinstance(docs, dict):
            out = _documents_from_mapping(collection, docs)
        elif isinstance(docs, list):
            out = _documents_from_list(collection, docs)
        else:
            raise InvalidExportError(
                f"Collection '{collection}' must be an object or a list, got {type(docs).__name__}."
            )
        _status(f"Loaded {len(out)} '{collection}' documents from {self.path}")
        return out
