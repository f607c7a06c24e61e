"""Pydantic contracts for availability documents (YAML/JSON)."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, field_validator, model_validator

from availability.core.settings import EngineSettings
from availability.core.weekdays import WEEKDAY_TOKENS

__all__ = ["RuleDocument", "WindowDocument", "AvailabilityDocument"]


class RuleDocument(BaseModel):
    """One rule entry as written by a user.

    ``start``/``end`` stay strings here; the rule builder parses them so that
    format errors read the same wherever a rule comes from.
    """

    start: str
    end: str
    priority: int = 1
    weekdays: list[str] | None = None
    off: bool = False
    payload: Any = None

    @field_validator("start", "end", mode="before")
    @classmethod
    def _unparse_yaml_timestamps(cls, value: Any) -> Any:
        # Unquoted YAML timestamps arrive as datetimes.
        if isinstance(value, datetime):
            return value.strftime("%Y-%m-%d %H:%M:%S")
        return value

    @field_validator("priority")
    @classmethod
    def _priority_not_reserved(cls, value: int) -> int:
        if value < 1:
            raise ValueError("priority must be >= 1 (0 is the reserved base layer)")
        return value

    @field_validator("weekdays", mode="before")
    @classmethod
    def _split_weekdays(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [part.strip() for part in value.replace("|", ",").split(",") if part.strip()]
        return value

    @field_validator("weekdays")
    @classmethod
    def _known_weekdays(cls, value: list[str] | None) -> list[str] | None:
        if value is None:
            return None
        unknown = [token for token in value if token.strip().lower() not in WEEKDAY_TOKENS]
        if unknown:
            raise ValueError(f"unknown weekday tokens: {unknown}")
        return value


class WindowDocument(BaseModel):
    start: datetime
    end: datetime

    @model_validator(mode="after")
    def _ordered(self) -> "WindowDocument":
        if self.start >= self.end:
            raise ValueError("window start must be before window end")
        return self


class AvailabilityDocument(BaseModel):
    """Complete rule table description with optional derivation window."""

    name: str | None = None
    settings: EngineSettings = EngineSettings()
    rules: list[RuleDocument] = []
    window: WindowDocument | None = None
