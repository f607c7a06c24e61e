"""Availability-specific exceptions."""

from __future__ import annotations

from typing import Any


class AvailabilityError(ValueError):
    """Raised when the availability engine rejects caller-provided data."""


class InvalidRangeError(AvailabilityError):
    """Raised when a rule or a derivation window does not satisfy ``start < end``."""

    def __init__(self, start: Any, end: Any) -> None:
        self.start = start
        self.end = end
        super().__init__(f"Start {start} must be before end {end}")


class ReservedPriorityError(AvailabilityError):
    """Raised when a caller tries to modify the base layer."""

    def __init__(self) -> None:
        super().__init__("Priority 0 is reserved for base rule and cannot be modified")


class RuleConflictError(AvailabilityError):
    """A new rule clashes with a rule already stored at the same priority."""

    def __init__(self, message: str, *, priority: int, rule: Any, existing: Any) -> None:
        self.priority = priority
        self.rule = rule
        self.existing = existing
        super().__init__(message)


class AbsoluteConflictError(RuleConflictError):
    def __init__(self, *, priority: int, rule: Any, existing: Any) -> None:
        super().__init__(
            f"New rule overlaps with existing rule at priority {priority}. "
            f"New rule: {rule.start} to {rule.end}, "
            f"Existing rule: {existing.start} to {existing.end}",
            priority=priority,
            rule=rule,
            existing=existing,
        )


class WeekdayConflictError(RuleConflictError):
    def __init__(self, *, priority: int, rule: Any, existing: Any) -> None:
        super().__init__(
            f"New rule overlaps with existing rule at priority {priority} "
            f"because of clashing weekdays. "
            f"New rule: {rule.start} to {rule.end}, "
            f"Existing rule: {existing.start} to {existing.end}",
            priority=priority,
            rule=rule,
            existing=existing,
        )


class PriorityNotFoundError(AvailabilityError, LookupError):
    def __init__(self, priority: int, max_priority: int) -> None:
        self.priority = priority
        self.max_priority = max_priority
        super().__init__(
            f"Priority {priority} does not exist. Max priority is {max_priority}."
        )


class IndexNotFoundError(AvailabilityError, LookupError):
    def __init__(self, priority: int, index: int) -> None:
        self.priority = priority
        self.index = index
        super().__init__(f"Rule index {index} does not exist at priority level {priority}.")


class UndividableRangeError(AvailabilityError):
    """Raised when a weekday-filtered rule cannot be split into per-day pieces."""

    def __init__(self, start: Any, end: Any) -> None:
        self.start = start
        self.end = end
        super().__init__(
            f"Relative rule from {start} to {end} starts and ends on the same day "
            "and cannot be split into absolute rules"
        )


class RuleBuildError(AvailabilityError):
    """Raised by the rule builder when its fields cannot form a valid rule."""


__all__ = [
    "AvailabilityError",
    "InvalidRangeError",
    "ReservedPriorityError",
    "RuleConflictError",
    "AbsoluteConflictError",
    "WeekdayConflictError",
    "PriorityNotFoundError",
    "IndexNotFoundError",
    "UndividableRangeError",
    "RuleBuildError",
]
