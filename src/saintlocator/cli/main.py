from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional

import pandas as pd
import typer

from saintlocator.config.settings import settings
from saintlocator.core.errors import DocumentSourceError, ExportError, InvalidExportError
from saintlocator.core.models import Coordinate, EventRecord
from saintlocator.core.types import RecordKind
from saintlocator.data.json_export import JsonExportSource
from saintlocator.processing.assemble import assemble_many
from saintlocator.processing.collection import filter_and_sort, filter_by_type
from saintlocator.processing.display import format_timestamp
from saintlocator.processing.frames import kind_columns, records_to_frame
from saintlocator.processing.normalize import normalize_coordinate

app = typer.Typer(
    help="Saint locator CLI",
    no_args_is_help=True,
    add_completion=False,
)


def _status(msg: str) -> None:
    print(msg, file=sys.stderr, flush=True)


def _origin(near: Optional[str]) -> Optional[Coordinate]:
    if near is None:
        return None
    origin = normalize_coordinate(near)
    if origin is None:
        raise typer.BadParameter(f"Could not read a coordinate from {near!r}", param_hint="--near")
    return origin


def _write_csv(df: pd.DataFrame, out: Path) -> None:
    try:
        out.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(out, index=False)
    except OSError as e:
        raise ExportError(f"Failed to write {out}: {e}") from e


def _run(
    kind: RecordKind,
    collection: str,
    source: Path,
    near: Optional[str],
    query: str,
    max_km: float,
    event_type: Optional[str],
    out: Optional[Path],
    progress: bool,
) -> None:
    origin = _origin(near)
    try:
        docs = JsonExportSource(source).load(collection)
    except (DocumentSourceError, InvalidExportError, FileNotFoundError) as e:
        _status(f"Error: {e}")
        raise typer.Exit(code=1) from e

    records = assemble_many(kind, docs, progress=progress)
    if event_type:
        records = filter_by_type([r for r in records if isinstance(r, EventRecord)], event_type)
    shown = filter_and_sort(records, origin=origin, query=query, max_distance_km=max_km)
    df = records_to_frame(shown)
    if kind == "event" and not df.empty:
        df["when"] = [format_timestamp(it.record.date_time) for it in shown]

    if out is not None:
        if not out.is_absolute():
            out = Path(settings.OUTPUT_ROOT) / out
        try:
            _write_csv(df, out)
        except ExportError as e:
            _status(f"Error: {e}")
            raise typer.Exit(code=1) from e
        _status(f"Wrote {len(df)} {kind} records to {out}")
        return

    if df.empty:
        _status(f"No {kind} records matched.")
        return
    cols: List[str] = [c for c in kind_columns(kind) if c in df.columns]
    typer.echo(df[cols].to_string(index=False))


@app.command()
def saints(
    source: Path = typer.Option(Path(settings.DATA_ROOT), help="JSON export file or directory holding export.json."),
    near: Optional[str] = typer.Option(None, help='Reference point, e.g. "26.9,75.8" or "26.9° N, 75.8° E".'),
    query: str = typer.Option("", help="Case-insensitive text to look for in name, location or designation."),
    max_km: float = typer.Option(settings.DEFAULT_MAX_DISTANCE_KM, help="Maximum distance from --near in km."),
    out: Optional[Path] = typer.Option(None, help="Write the result to this CSV file (relative paths land under OUTPUT_ROOT)."),
    progress: bool = typer.Option(False, help="Show a progress bar while assembling."),
) -> None:
    """List saints, nearest first."""
    _run("saint", settings.SAINT_COLLECTION, source, near, query, max_km, None, out, progress)


@app.command()
def events(
    source: Path = typer.Option(Path(settings.DATA_ROOT), help="JSON export file or directory holding export.json."),
    near: Optional[str] = typer.Option(None, help='Reference point, e.g. "26.9,75.8".'),
    query: str = typer.Option("", help="Case-insensitive text to look for in title, host or address."),
    max_km: float = typer.Option(settings.DEFAULT_MAX_DISTANCE_KM, help="Maximum distance from --near in km."),
    event_type: Optional[str] = typer.Option(None, "--type", help='Only events of this type, e.g. "Satsang".'),
    out: Optional[Path] = typer.Option(None, help="Write the result to this CSV file (relative paths land under OUTPUT_ROOT)."),
    progress: bool = typer.Option(False, help="Show a progress bar while assembling."),
) -> None:
    """List events, nearest first."""
    _run("event", settings.EVENT_COLLECTION, source, near, query, max_km, event_type, out, progress)


if __name__ == "__main__":  # pragma: no cover
    app()
