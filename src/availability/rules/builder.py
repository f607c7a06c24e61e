"""Fluent construction of rules from raw strings."""

from __future__ import annotations

from datetime import datetime
from typing import Generic, Iterable

from loguru import logger

from availability.core.errors import RuleBuildError
from availability.core.settings import DEFAULT_SETTINGS, EngineSettings
from availability.core.weekdays import Weekdays

from .models import P, Rule

__all__ = ["RuleBuilder", "parse_datetime"]


def parse_datetime(value: str, fmt: str | None = None) -> datetime:
    """Parse ``value`` with ``fmt`` (defaults to ``YYYY-MM-DD HH:MM:SS``)."""
    return datetime.strptime(value, fmt or DEFAULT_SETTINGS.builder_datetime_format)


class RuleBuilder(Generic[P]):
    """Collects rule fields and validates them all at once in :meth:`build`.

    Setters never fail; every problem (missing bounds, malformed datetimes,
    unknown weekday tokens, reversed ranges) is reported by ``build`` as a single
    :class:`RuleBuildError`.
    """

    def __init__(self, settings: EngineSettings | None = None) -> None:
        self._settings = settings or DEFAULT_SETTINGS
        self._start: str | None = None
        self._end: str | None = None
        self._weekdays: Weekdays | None = None
        self._bad_tokens: list[str] = []
        self._off = False
        self._payload: P | None = None

    def start_str(self, value: str) -> "RuleBuilder[P]":
        self._start = value
        return self

    def end_str(self, value: str) -> "RuleBuilder[P]":
        self._end = value
        return self

    def start_datetime(self, value: datetime) -> "RuleBuilder[P]":
        self._start = value.strftime(self._settings.builder_datetime_format)
        return self

    def end_datetime(self, value: datetime) -> "RuleBuilder[P]":
        self._end = value.strftime(self._settings.builder_datetime_format)
        return self

    def weekdays(self, tokens: Iterable[str] | str) -> "RuleBuilder[P]":
        if isinstance(tokens, str):
            tokens = [tokens]
        for token in tokens:
            try:
                self._add_day(Weekdays.from_names([token]))
            except RuleBuildError:
                self._bad_tokens.append(token)
        return self

    def _add_day(self, flag: Weekdays) -> "RuleBuilder[P]":
        self._weekdays = (self._weekdays or Weekdays.NONE) | flag
        return self

    def monday(self) -> "RuleBuilder[P]":
        return self._add_day(Weekdays.MONDAY)

    def tuesday(self) -> "RuleBuilder[P]":
        return self._add_day(Weekdays.TUESDAY)

    def wednesday(self) -> "RuleBuilder[P]":
        return self._add_day(Weekdays.WEDNESDAY)

    def thursday(self) -> "RuleBuilder[P]":
        return self._add_day(Weekdays.THURSDAY)

    def friday(self) -> "RuleBuilder[P]":
        return self._add_day(Weekdays.FRIDAY)

    def saturday(self) -> "RuleBuilder[P]":
        return self._add_day(Weekdays.SATURDAY)

    def sunday(self) -> "RuleBuilder[P]":
        return self._add_day(Weekdays.SUNDAY)

    def all_weekdays(self) -> "RuleBuilder[P]":
        self._weekdays = Weekdays.ALL
        return self

    def off(self, off: bool = True) -> "RuleBuilder[P]":
        self._off = off
        return self

    def payload(self, payload: P) -> "RuleBuilder[P]":
        self._payload = payload
        return self

    def _parse(self, label: str, value: str | None) -> datetime:
        if value is None:
            raise RuleBuildError(f"{label} time is required and was never set")
        fmt = self._settings.builder_datetime_format
        try:
            return parse_datetime(value, fmt)
        except ValueError as exc:
            raise RuleBuildError(
                f"Invalid {label.lower()} time format: {value!r}. Expected format: {fmt}"
            ) from exc

    def build(self) -> Rule[P]:
        start = self._parse("Start", self._start)
        end = self._parse("End", self._end)
        if start >= end:
            raise RuleBuildError("Start must not be after or equal to end")
        if self._bad_tokens:
            raise RuleBuildError(f"Invalid weekday encountered: {', '.join(self._bad_tokens)}")
        rule = Rule(start, end, self._weekdays, self._off, self._payload)
        logger.debug("Built rule {} -> {} (weekdays={})", start, end, rule.weekdays)
        return rule
