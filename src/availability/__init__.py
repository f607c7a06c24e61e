"""Layered availability rules resolved into non-overlapping time frames."""

from loguru import logger

from availability.core import (
    AbsoluteConflictError,
    AvailabilityError,
    EngineSettings,
    IndexNotFoundError,
    InvalidRangeError,
    PriorityNotFoundError,
    ReservedPriorityError,
    RuleBuildError,
    RuleConflictError,
    UndividableRangeError,
    WeekdayConflictError,
    Weekdays,
)
from availability.frames import Frame
from availability.rules import Rule, RuleBuilder, relative_to_absolute
from availability.table import Availability

__all__ = [
    "AbsoluteConflictError",
    "Availability",
    "AvailabilityError",
    "EngineSettings",
    "Frame",
    "IndexNotFoundError",
    "InvalidRangeError",
    "PriorityNotFoundError",
    "ReservedPriorityError",
    "Rule",
    "RuleBuildError",
    "RuleBuilder",
    "RuleConflictError",
    "UndividableRangeError",
    "WeekdayConflictError",
    "Weekdays",
    "relative_to_absolute",
]

logger.disable("availability")
