"""Rule table with frame derivation and point queries."""

from .availability import Availability

__all__ = ["Availability"]
