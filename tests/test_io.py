import json
from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from availability import AbsoluteConflictError, Rule, RuleBuildError, Weekdays
from availability.io import (
    build_availability,
    dump_frames_json,
    frame_to_dict,
    frames_dataframe,
    load_availability,
    load_document,
    rule_from_dict,
    rule_to_dict,
)

from conftest import assert_partition, at

STORE_DOC = {
    "name": "store-hours",
    "window": {"start": "2024-01-01T00:00:00", "end": "2024-01-08T00:00:00"},
    "rules": [
        {
            "start": "2024-01-01 09:00:00",
            "end": "2024-01-31 17:00:00",
            "weekdays": ["mon", "tue", "wed", "thu", "fri"],
            "payload": {"staff": 3},
        },
        {
            "start": "2024-01-03 00:00:00",
            "end": "2024-01-04 00:00:00",
            "priority": 2,
            "off": True,
            "payload": {"staff": 0},
        },
    ],
}


def _write(tmp_path: Path, data: dict, name: str = "store.yaml") -> Path:
    path = tmp_path / name
    if name.endswith(".json"):
        path.write_text(json.dumps(data), encoding="utf-8")
    else:
        path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


def test_load_availability_from_yaml(tmp_path):
    table, window = load_availability(_write(tmp_path, STORE_DOC))
    assert table.priorities == 3
    assert table.rules_at(1)[0].weekdays == Weekdays.WORKDAYS
    assert window is not None and window.start == at(1)

    frames = table.derive_in_range(window.start, window.end)
    assert_partition(frames, at(1), at(8))
    assert table.payload_at(at(2, 10)) == {"staff": 3}
    assert not table.is_open_at(at(3, 10))


def test_load_availability_from_json(tmp_path):
    table, _ = load_availability(_write(tmp_path, STORE_DOC, "store.json"))
    assert len(table.rules_at(2)) == 1


def test_rules_csv_is_merged_with_inline_rules(tmp_path):
    (tmp_path / "rules.csv").write_text(
        "start,end,weekdays,off,priority,payload\n"
        "2024-01-06 10:00:00,2024-01-28 14:00:00,sat|sun,False,3,weekend\n"
        "2024-01-10 12:00:00,2024-01-10 13:00:00,,True,4,\n",
        encoding="utf-8",
    )
    doc = {**STORE_DOC, "rules_csv": "rules.csv"}
    table, _ = load_availability(_write(tmp_path, doc))
    weekend = table.rules_at(3)[0]
    assert weekend.weekdays == Weekdays.WEEKEND
    assert weekend.payload == "weekend"
    lunch = table.rules_at(4)[0]
    assert lunch.off and lunch.is_absolute() and lunch.payload is None


def test_missing_rules_csv_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_document(_write(tmp_path, {**STORE_DOC, "rules_csv": "missing.csv"}))


@pytest.mark.parametrize(
    "rule",
    [
        {"start": "2024-01-01 09:00:00", "end": "2024-01-01 17:00:00", "priority": 0},
        {"start": "2024-01-01 09:00:00", "end": "2024-01-01 17:00:00", "weekdays": ["noday"]},
    ],
)
def test_document_validation_errors(tmp_path, rule):
    with pytest.raises(ValidationError):
        load_document(_write(tmp_path, {"rules": [rule]}))


def test_reversed_window_is_rejected(tmp_path):
    doc = {"window": {"start": "2024-01-02T00:00:00", "end": "2024-01-01T00:00:00"}}
    with pytest.raises(ValidationError):
        load_document(_write(tmp_path, doc))


def test_builder_and_conflict_errors_propagate(tmp_path):
    bad_format = {"rules": [{"start": "20240101", "end": "2024-01-01 17:00:00"}]}
    with pytest.raises(RuleBuildError):
        load_availability(_write(tmp_path, bad_format))

    clash = {
        "rules": [
            {"start": "2024-01-01 09:00:00", "end": "2024-01-01 17:00:00"},
            {"start": "2024-01-01 12:00:00", "end": "2024-01-01 18:00:00"},
        ]
    }
    with pytest.raises(AbsoluteConflictError):
        load_availability(_write(tmp_path, clash, "clash.yaml"))


def test_document_settings_reach_the_table(tmp_path):
    doc = {
        "settings": {"base_min_year": 2020, "base_max_year": 2030},
        "rules": [{"start": "2024-01-01 09:00:00", "end": "2024-01-01 17:00:00"}],
    }
    table, _ = load_availability(_write(tmp_path, doc))
    assert table.base_rule.start.year == 2020


def test_rule_dict_round_trip_uses_bits_and_omits_empty_fields():
    relative = Rule(at(1, 9), at(31, 17), Weekdays.MONDAY | Weekdays.FRIDAY, False, {"k": 1})
    data = rule_to_dict(relative)
    assert data["weekdays"] == 17
    assert data["weekdayNames"] == ["monday", "friday"]
    assert rule_from_dict(data) == relative

    absolute = rule_to_dict(Rule(at(1, 9), at(1, 17), None, True))
    assert "weekdays" not in absolute and "payload" not in absolute


def test_frames_dataframe_and_json_dump(tmp_path, table):
    table.add_rule(Rule(at(1, 9), at(1, 12), None, False, "shop"), 1)
    frames = table.derive_in_range(at(1, 8), at(1, 13))

    df = frames_dataframe(frames)
    assert list(df.columns) == ["start", "end", "off", "payload", "duration_minutes"]
    assert df["duration_minutes"].tolist() == [60.0, 180.0, 60.0]
    assert df["off"].tolist() == [True, False, True]

    out = dump_frames_json(frames, tmp_path / "nested" / "frames.json")
    dumped = json.loads(out.read_text(encoding="utf-8"))
    assert dumped[1] == frame_to_dict(frames[1])
    assert dumped[1]["payload"] == "shop"
    assert "payload" not in dumped[0]


def test_bundled_store_hours_example():
    example = Path(__file__).resolve().parents[1] / "examples" / "store_hours" / "availability.yaml"
    table, window = load_availability(example)
    frames = table.derive_in_range(window.start, window.end)

    assert_partition(frames, at(1), at(1, month=2))
    assert table.payload_at(at(2, 19))["manager_on_duty"] == "Sale Team"
    assert table.payload_at(at(9, 16))["staff_count"] == 3
    assert not table.is_open_at(at(9, 18))
    assert table.payload_at(at(13, 11)) == "saturday"
    assert not table.is_open_at(at(14, 11))  # Sunday
    assert not table.is_open_at(at(15, 10))
    assert table.payload_at(at(15, 10)) == "inventory"


def test_build_availability_from_validated_document(tmp_path):
    document = load_document(_write(tmp_path, STORE_DOC))
    table = build_availability(document)
    assert document.name == "store-hours"
    assert [len(layer) for layer in table.rules] == [1, 1, 1]
