"""Core utilities shared across availability modules."""

from .errors import (
    AbsoluteConflictError,
    AvailabilityError,
    IndexNotFoundError,
    InvalidRangeError,
    PriorityNotFoundError,
    ReservedPriorityError,
    RuleBuildError,
    RuleConflictError,
    UndividableRangeError,
    WeekdayConflictError,
)
from .log import configure_logging
from .settings import DEFAULT_SETTINGS, EngineSettings
from .weekdays import WEEKDAY_TOKENS, Weekdays

__all__ = [
    "AbsoluteConflictError",
    "AvailabilityError",
    "IndexNotFoundError",
    "InvalidRangeError",
    "PriorityNotFoundError",
    "ReservedPriorityError",
    "RuleBuildError",
    "RuleConflictError",
    "UndividableRangeError",
    "WeekdayConflictError",
    "configure_logging",
    "DEFAULT_SETTINGS",
    "EngineSettings",
    "WEEKDAY_TOKENS",
    "Weekdays",
]
