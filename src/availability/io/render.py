"""Plain-data and tabular views of rules and frames."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable, Mapping

import pandas as pd

from availability.core.weekdays import Weekdays
from availability.frames.models import Frame
from availability.rules.models import Rule

__all__ = [
    "dump_frames_json",
    "frame_to_dict",
    "frames_dataframe",
    "rule_from_dict",
    "rule_to_dict",
]

FRAME_COLUMNS = ["start", "end", "off", "payload", "duration_minutes"]


def rule_to_dict(rule: Rule[Any]) -> dict[str, Any]:
    """Serialise a rule with camelCase keys; absent weekdays/payload are omitted."""
    data: dict[str, Any] = {
        "start": rule.start.isoformat(),
        "end": rule.end.isoformat(),
        "off": rule.off,
    }
    if rule.weekdays is not None:
        data["weekdays"] = int(rule.weekdays)
        data["weekdayNames"] = rule.weekdays.names()
    if rule.payload is not None:
        data["payload"] = rule.payload
    return data


def rule_from_dict(data: Mapping[str, Any]) -> Rule[Any]:
    weekdays = data.get("weekdays")
    return Rule(
        datetime.fromisoformat(data["start"]),
        datetime.fromisoformat(data["end"]),
        Weekdays(int(weekdays)) if weekdays is not None else None,
        bool(data.get("off", False)),
        data.get("payload"),
    )


def frame_to_dict(frame: Frame[Any]) -> dict[str, Any]:
    data: dict[str, Any] = {
        "start": frame.start.isoformat(),
        "end": frame.end.isoformat(),
        "off": frame.off,
    }
    if frame.payload is not None:
        data["payload"] = frame.payload
    return data


def frames_dataframe(frames: Iterable[Frame[Any]]) -> pd.DataFrame:
    """Return frames as a DataFrame (one row per frame, ordered by start)."""
    rows = [
        {
            "start": frame.start,
            "end": frame.end,
            "off": frame.off,
            "payload": frame.payload,
            "duration_minutes": frame.duration.total_seconds() / 60.0,
        }
        for frame in frames
    ]
    return pd.DataFrame(rows, columns=FRAME_COLUMNS)


def dump_frames_json(frames: Iterable[Frame[Any]], path: Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = [frame_to_dict(frame) for frame in frames]
    path.write_text(json.dumps(payload, indent=2, default=str), encoding="utf-8")
    return path
