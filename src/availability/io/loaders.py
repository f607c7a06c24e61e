"""Document loading utilities (YAML/JSON metadata + optional CSV rule table)."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, cast

import pandas as pd
import yaml
from loguru import logger

from availability.core.settings import EngineSettings
from availability.io.documents import AvailabilityDocument, RuleDocument, WindowDocument
from availability.rules.builder import RuleBuilder
from availability.rules.models import Rule
from availability.table.availability import Availability

__all__ = [
    "build_availability",
    "build_rule",
    "load_availability",
    "load_document",
    "read_rules_csv",
]


def _read_mapping(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        if path.suffix.lower() == ".json":
            data = json.load(handle)
        else:
            data = yaml.safe_load(handle)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Availability document {path} must contain a mapping")
    return data


def read_rules_csv(path: Path) -> list[dict[str, object]]:
    """Load rule rows from CSV; blank weekday/payload cells become ``None``."""
    frame = pd.read_csv(path, dtype={"start": str, "end": str, "weekdays": str})
    rows = cast(list[dict[str, object]], frame.to_dict("records"))
    for row in rows:
        for key in ("weekdays", "payload"):
            value = row.get(key)
            if value is None or (not isinstance(value, str) and pd.isna(cast(Any, value))):
                row.pop(key, None)
    return rows


def load_document(path: str | Path) -> AvailabilityDocument:
    """Read and validate an availability document.

    Rules may be listed inline under ``rules`` and/or kept in a CSV referenced
    by ``rules_csv`` (relative paths resolve against the document directory).
    """

    doc_path = Path(path).resolve()
    meta = _read_mapping(doc_path)
    rules_raw = list(meta.pop("rules", None) or [])
    csv_ref = meta.pop("rules_csv", None)
    if csv_ref is not None:
        csv_path = Path(csv_ref)
        if not csv_path.is_absolute():
            csv_path = doc_path.parent / csv_path
        if not csv_path.exists():
            raise FileNotFoundError(csv_path)
        rules_raw.extend(read_rules_csv(csv_path))
    return AvailabilityDocument.model_validate({**meta, "rules": rules_raw})


def build_rule(entry: RuleDocument, settings: EngineSettings | None = None) -> Rule[Any]:
    builder: RuleBuilder[Any] = RuleBuilder(settings)
    builder.start_str(entry.start).end_str(entry.end).off(entry.off)
    if entry.weekdays:
        builder.weekdays(entry.weekdays)
    if entry.payload is not None:
        builder.payload(entry.payload)
    return builder.build()


def build_availability(document: AvailabilityDocument) -> Availability[Any]:
    """Populate an :class:`Availability` (not yet derived) from a validated document.

    Rule build and conflict errors propagate unchanged.
    """

    table: Availability[Any] = Availability(document.settings)
    for entry in document.rules:
        table.add_rule(build_rule(entry, document.settings), entry.priority)
    logger.debug("Built table with {} rules", len(document.rules))
    return table


def load_availability(
    path: str | Path,
) -> tuple[Availability[Any], WindowDocument | None]:
    """Read a document and return its table and window (if any)."""
    document = load_document(path)
    return build_availability(document), document.window
