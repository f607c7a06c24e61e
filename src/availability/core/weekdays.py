"""Seven-flag weekday set."""

from __future__ import annotations

from datetime import date
from enum import IntFlag
from typing import Iterable

from .errors import RuleBuildError

__all__ = ["Weekdays", "WEEKDAY_TOKENS"]


class Weekdays(IntFlag):
    """Bit mask over Monday..Sunday (Monday is the lowest bit)."""

    NONE = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 4
    THURSDAY = 8
    FRIDAY = 16
    SATURDAY = 32
    SUNDAY = 64
    WORKDAYS = MONDAY | TUESDAY | WEDNESDAY | THURSDAY | FRIDAY
    WEEKEND = SATURDAY | SUNDAY
    ALL = WORKDAYS | WEEKEND

    @classmethod
    def from_date(cls, day: date) -> "Weekdays":
        """Return the single flag matching ``day``'s weekday."""
        return _ORDERED[day.weekday()]

    @classmethod
    def from_names(cls, tokens: Iterable[str]) -> "Weekdays":
        """Combine weekday tokens (``"monday"``, ``"Tue"``, ...) into one mask.

        A single unrecognised token fails the whole conversion.
        """
        mask = cls.NONE
        for token in tokens:
            flag = WEEKDAY_TOKENS.get(token.strip().lower())
            if flag is None:
                raise RuleBuildError(f"Invalid weekday encountered: {token!r}")
            mask |= flag
        return mask

    def includes(self, day: date) -> bool:
        return bool(self & Weekdays.from_date(day))

    def intersects(self, other: "Weekdays") -> bool:
        return bool(self & other)

    def names(self) -> list[str]:
        """Lowercase day names in Monday-first order; unknown bits are ignored."""
        return [_NAMES[flag] for flag in _ORDERED if self & flag]


_ORDERED = (
    Weekdays.MONDAY,
    Weekdays.TUESDAY,
    Weekdays.WEDNESDAY,
    Weekdays.THURSDAY,
    Weekdays.FRIDAY,
    Weekdays.SATURDAY,
    Weekdays.SUNDAY,
)

_NAMES = {
    Weekdays.MONDAY: "monday",
    Weekdays.TUESDAY: "tuesday",
    Weekdays.WEDNESDAY: "wednesday",
    Weekdays.THURSDAY: "thursday",
    Weekdays.FRIDAY: "friday",
    Weekdays.SATURDAY: "saturday",
    Weekdays.SUNDAY: "sunday",
}

WEEKDAY_TOKENS: dict[str, Weekdays] = {
    **{name: flag for flag, name in _NAMES.items()},
    **{name[:3]: flag for flag, name in _NAMES.items()},
}
