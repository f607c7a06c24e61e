from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Iterator

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from availability.core.errors import AvailabilityError
from availability.core.log import configure_logging
from availability.core.weekdays import Weekdays
from availability.frames.models import Frame
from availability.io import (
    build_availability,
    dump_frames_json,
    frames_dataframe,
    load_availability,
    load_document,
)
from availability.table.availability import Availability

app = typer.Typer(add_completion=False, no_args_is_help=True, help="Layered availability rules.")
console = Console()

LOG_LEVEL_OPTION = typer.Option("WARNING", "--log-level", help="Loguru level for diagnostics.")


@contextmanager
def _reported_errors() -> Iterator[None]:
    try:
        yield
    except (AvailabilityError, ValidationError, FileNotFoundError) as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1)


def _parse_moment(value: str, label: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except ValueError as exc:
        raise typer.BadParameter(f"{label} must be an ISO datetime, got {value!r}") from exc


def _format_payload(payload: Any) -> str:
    return "" if payload is None else str(payload)


def _derive(
    table: Availability[Any],
    window: tuple[datetime, datetime] | None,
) -> tuple[Frame[Any], ...]:
    if window is None:
        return table.derive_all()
    return table.derive_in_range(*window)


def _resolve_window(
    document_window: Any, start: str | None, end: str | None
) -> tuple[datetime, datetime] | None:
    if (start is None) != (end is None):
        raise typer.BadParameter("--start and --end must be given together")
    if start is not None and end is not None:
        return _parse_moment(start, "--start"), _parse_moment(end, "--end")
    if document_window is not None:
        return document_window.start, document_window.end
    return None


@app.command()
def validate(document: Path, log_level: str = LOG_LEVEL_OPTION):
    """Validate an availability document and print its rule layers."""
    configure_logging(log_level)
    with _reported_errors():
        doc = load_document(document)
        table = build_availability(doc)
    t = Table(title=f"Availability: {doc.name or document.stem}")
    t.add_column("Priority", justify="right")
    t.add_column("Start")
    t.add_column("End")
    t.add_column("Weekdays")
    t.add_column("Status")
    t.add_column("Payload")
    for priority, layer in enumerate(table.rules):
        for rule in layer:
            days = ", ".join(rule.weekdays.names()) if rule.weekdays else "all"
            t.add_row(
                str(priority),
                str(rule.start),
                str(rule.end),
                days,
                "off" if rule.off else "on",
                _format_payload(rule.payload),
            )
    console.print(t)


@app.command()
def frames(
    document: Path,
    start: str | None = typer.Option(None, "--start", help="Window start (ISO datetime)."),
    end: str | None = typer.Option(None, "--end", help="Window end (ISO datetime)."),
    out: Path | None = typer.Option(None, "--out", help="Write frames to .csv or .json."),
    log_level: str = LOG_LEVEL_OPTION,
):
    """Derive frames and print them (ranged when a window is known, full history otherwise)."""
    configure_logging(log_level)
    with _reported_errors():
        table, document_window = load_availability(document)
        window = _resolve_window(document_window, start, end)
        derived = _derive(table, window)

    if out is not None:
        if out.suffix.lower() == ".json":
            dump_frames_json(derived, out)
        else:
            out.parent.mkdir(parents=True, exist_ok=True)
            frames_dataframe(derived).to_csv(str(out), index=False)
        console.print(f"{len(derived)} frame(s) saved to {out}")

    t = Table(title="Frames")
    t.add_column("#", justify="right")
    t.add_column("Start")
    t.add_column("End")
    t.add_column("Weekday")
    t.add_column("Status")
    t.add_column("Payload")
    for index, frame in enumerate(derived, start=1):
        t.add_row(
            str(index),
            frame.start.strftime("%Y-%m-%d %H:%M"),
            frame.end.strftime("%Y-%m-%d %H:%M"),
            Weekdays.from_date(frame.start.date()).names()[0],
            "[red]CLOSED[/red]" if frame.off else "[green]OPEN[/green]",
            _format_payload(frame.payload),
        )
    console.print(t)


@app.command()
def status(
    document: Path,
    at: str = typer.Argument(..., help="Moment to query (ISO datetime)."),
    log_level: str = LOG_LEVEL_OPTION,
):
    """Print whether the schedule is open at a moment, and its payload."""
    configure_logging(log_level)
    moment = _parse_moment(at, "AT")
    with _reported_errors():
        table, document_window = load_availability(document)
        _derive(table, _resolve_window(document_window, None, None))
    state = "OPEN" if table.is_open_at(moment) else "CLOSED"
    console.print(f"{moment.isoformat(sep=' ')}: {state}")
    payload = table.payload_at(moment)
    if payload is not None:
        console.print(f"Payload: {payload}")


if __name__ == "__main__":
    app()
