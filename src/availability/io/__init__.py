"""Document loading and rendering helpers."""

from .documents import AvailabilityDocument, RuleDocument, WindowDocument
from .loaders import (
    build_availability,
    build_rule,
    load_availability,
    load_document,
    read_rules_csv,
)
from .render import (
    dump_frames_json,
    frame_to_dict,
    frames_dataframe,
    rule_from_dict,
    rule_to_dict,
)

__all__ = [
    "AvailabilityDocument",
    "RuleDocument",
    "WindowDocument",
    "build_availability",
    "build_rule",
    "dump_frames_json",
    "frame_to_dict",
    "frames_dataframe",
    "load_availability",
    "load_document",
    "read_rules_csv",
    "rule_from_dict",
    "rule_to_dict",
]
