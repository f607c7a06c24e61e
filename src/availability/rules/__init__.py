"""Rule model, weekday expansion and the fluent builder."""

from .builder import RuleBuilder, parse_datetime
from .models import Rule, relative_to_absolute

__all__ = ["Rule", "RuleBuilder", "parse_datetime", "relative_to_absolute"]
