"""Engine configuration."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

__all__ = ["EngineSettings", "DEFAULT_SETTINGS"]


class EngineSettings(BaseModel):
    """Tunable constants of the rule table.

    Attributes
    ----------
    base_min_year, base_max_year:
        Calendar years bounding the always-present base rule at priority 0.
    datetime_format:
        ``strftime`` pattern accepted by the ``*_from_str`` query helpers.
    builder_datetime_format:
        Pattern the rule builder expects for its start/end strings.
    """

    model_config = ConfigDict(frozen=True)

    base_min_year: int = 1
    base_max_year: int = 9999
    datetime_format: str = "%Y%m%d%H%M%S"
    builder_datetime_format: str = "%Y-%m-%d %H:%M:%S"

    @field_validator("base_min_year", "base_max_year")
    @classmethod
    def _year_in_bounds(cls, value: int) -> int:
        if not 1 <= value <= 9999:
            raise ValueError("base rule years must be within 1..9999")
        return value

    @model_validator(mode="after")
    def _ordered_years(self) -> "EngineSettings":
        if self.base_min_year > self.base_max_year:
            raise ValueError("base_min_year must be <= base_max_year")
        return self

    @property
    def base_start(self) -> datetime:
        return datetime(self.base_min_year, 1, 1)

    @property
    def base_end(self) -> datetime:
        return datetime(self.base_max_year, 12, 31, 23, 59, 59)


DEFAULT_SETTINGS = EngineSettings()
