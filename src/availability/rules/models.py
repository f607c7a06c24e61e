"""Rule data model and the relative-to-absolute expander."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, time, timedelta
from typing import Generic, TypeVar

from availability.core.errors import InvalidRangeError, UndividableRangeError
from availability.core.settings import DEFAULT_SETTINGS, EngineSettings
from availability.core.weekdays import Weekdays

P = TypeVar("P")

_ONE_DAY = timedelta(days=1)


def _within_daily_window(moment: time, start: time, end: time) -> bool:
    # A window whose end is not after its start wraps past midnight.
    if start < end:
        return start <= moment < end
    return moment >= start or moment < end


@dataclass(frozen=True, slots=True)
class Rule(Generic[P]):
    """Immutable directive covering ``[start, end)``.

    Parameters
    ----------
    start, end:
        Naive datetimes; ``start`` must precede ``end``.
    weekdays:
        Optional weekday filter. ``None`` (or an empty mask, which is normalised to
        ``None``) makes the rule absolute; a non-empty mask makes it relative.
    off:
        ``True`` when the rule closes the covered time.
    payload:
        Opaque value carried through to the derived frames.
    """

    start: datetime
    end: datetime
    weekdays: Weekdays | None = None
    off: bool = False
    payload: P | None = None

    def __post_init__(self) -> None:
        if self.start >= self.end:
            raise InvalidRangeError(self.start, self.end)
        if self.weekdays is not None:
            mask = Weekdays(int(self.weekdays))
            object.__setattr__(self, "weekdays", mask if mask else None)

    @classmethod
    def base(cls, settings: EngineSettings | None = None) -> "Rule[P]":
        """The always-off, absolute rule occupying priority 0."""
        settings = settings or DEFAULT_SETTINGS
        return cls(settings.base_start, settings.base_end, None, True, None)

    def is_absolute(self) -> bool:
        return self.weekdays is None

    def is_relative(self) -> bool:
        return self.weekdays is not None

    def is_on(self) -> bool:
        return not self.off

    def is_active(self, moment: datetime) -> bool:
        """True when ``moment`` falls inside the span, the daily window and the weekday filter."""
        if not self.start <= moment < self.end:
            return False
        if not _within_daily_window(moment.time(), self.start.time(), self.end.time()):
            return False
        if self.weekdays is None:
            return True
        day = moment.date()
        end_time = self.end.time()
        if end_time <= self.start.time() and moment.time() < end_time:
            # After midnight the moment belongs to the piece that began the day before.
            day -= _ONE_DAY
        return day >= self.start.date() and self.weekdays.includes(day)

    def overlaps(self, other: "Rule") -> bool:
        return self.start < other.end and other.start < self.end

    def shares_weekday_with(self, other: "Rule") -> bool:
        if self.weekdays is None or other.weekdays is None:
            return False
        return self.weekdays.intersects(other.weekdays)

    def has_matching_payload(self, other: "Rule") -> bool:
        return self.payload == other.payload

    def with_payload(self, payload: P | None) -> "Rule[P]":
        return replace(self, payload=payload)

    def to_absolute(self) -> list["Rule[P]"]:
        return relative_to_absolute(self)


def relative_to_absolute(rule: Rule[P]) -> list[Rule[P]]:
    """Split a weekday-filtered rule into one absolute rule per matching day.

    Absolute rules come back unchanged as a singleton. Pieces are emitted in
    ascending date order; a piece whose daily window wraps midnight ends on the
    following day, and every piece is clamped to the rule's own ``end``.
    """

    if rule.weekdays is None:
        return [rule]

    first_day = rule.start.date()
    last_day = rule.end.date()
    if first_day == last_day:
        raise UndividableRangeError(rule.start, rule.end)

    start_time = rule.start.time()
    end_time = rule.end.time()
    wraps = end_time <= start_time

    pieces: list[Rule[P]] = []
    for offset in range((last_day - first_day).days + 1):
        day = first_day + offset * _ONE_DAY
        if not rule.weekdays.includes(day):
            continue
        piece_start = datetime.combine(day, start_time)
        if day == last_day:
            piece_end = rule.end
        elif wraps:
            piece_end = min(datetime.combine(day + _ONE_DAY, end_time), rule.end)
        else:
            piece_end = datetime.combine(day, end_time)
        if piece_start < piece_end:
            pieces.append(Rule(piece_start, piece_end, None, rule.off, rule.payload))
    return pieces


__all__ = ["Rule", "relative_to_absolute"]
