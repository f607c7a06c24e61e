"""Derived time frames."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Generic

from availability.rules.models import P

if TYPE_CHECKING:
    from availability.rules.models import Rule

__all__ = ["Frame"]


@dataclass(frozen=True, slots=True)
class Frame(Generic[P]):
    """Half-open interval ``[start, end)`` with an on/off status and payload.

    Frames are produced by the engine; callers only read them.
    """

    start: datetime
    end: datetime
    off: bool
    payload: P | None = None

    @classmethod
    def from_rule(cls, rule: "Rule[P]") -> "Frame[P]":
        return cls(rule.start, rule.end, rule.off, rule.payload)

    @classmethod
    def closed(cls, start: datetime, end: datetime) -> "Frame[P]":
        """Synthetic off frame used to fill uncovered time."""
        return cls(start, end, True, None)

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def is_on(self) -> bool:
        return not self.off

    def is_off(self) -> bool:
        return self.off

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment < self.end

    def is_open(self, moment: datetime) -> bool:
        return self.is_on() and self.contains(moment)

    def has_matching_payload(self, other: "Frame") -> bool:
        return self.payload == other.payload

    def clipped(self, start: datetime, end: datetime) -> "Frame[P] | None":
        """Return the part of the frame inside ``[start, end)``, or ``None``."""
        if self.end <= start or self.start >= end:
            return None
        if self.start >= start and self.end <= end:
            return self
        return Frame(max(self.start, start), min(self.end, end), self.off, self.payload)
