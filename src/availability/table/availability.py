"""Priority-layered rule table and frame derivation."""

from __future__ import annotations

from bisect import bisect_right
from datetime import datetime
from typing import Generic, Sequence

from loguru import logger

from availability.core.errors import (
    AbsoluteConflictError,
    IndexNotFoundError,
    InvalidRangeError,
    PriorityNotFoundError,
    ReservedPriorityError,
    UndividableRangeError,
    WeekdayConflictError,
)
from availability.core.settings import DEFAULT_SETTINGS, EngineSettings
from availability.frames.merge import clip_frames, fill_gaps, overlay
from availability.frames.models import Frame
from availability.rules.models import P, Rule, relative_to_absolute

__all__ = ["Availability"]


class Availability(Generic[P]):
    """Owns the priority layers of rules and the last derived frame sequence.

    Layer 0 always holds the base rule (absolute, off, no payload). Higher
    layers override lower ones wherever their time spans overlap. The frame
    sequence is a cache refreshed only by :meth:`derive_all` or
    :meth:`derive_in_range`.
    """

    def __init__(self, settings: EngineSettings | None = None) -> None:
        self.settings = settings or DEFAULT_SETTINGS
        self._layers: list[list[Rule[P]]] = [[Rule.base(self.settings)]]
        self._frames: list[Frame[P]] = []
        self._starts: list[datetime] = []

    def __repr__(self) -> str:
        counts = [len(layer) for layer in self._layers]
        return f"Availability(layers={counts}, frames={len(self._frames)})"

    @property
    def rules(self) -> tuple[tuple[Rule[P], ...], ...]:
        return tuple(tuple(layer) for layer in self._layers)

    @property
    def frames(self) -> tuple[Frame[P], ...]:
        return tuple(self._frames)

    @property
    def priorities(self) -> int:
        """Number of layers, the base layer included."""
        return len(self._layers)

    @property
    def base_rule(self) -> Rule[P]:
        return self._layers[0][0]

    def rules_at(self, priority: int) -> tuple[Rule[P], ...]:
        if not 0 <= priority < len(self._layers):
            raise PriorityNotFoundError(priority, len(self._layers) - 1)
        return tuple(self._layers[priority])

    # ------------------------------------------------------------------ mutation

    def add_rule(self, rule: Rule[P], priority: int) -> None:
        """Insert ``rule`` at ``priority`` after checking same-layer conflicts.

        Raises
        ------
        ReservedPriorityError
            ``priority`` is 0.
        AbsoluteConflictError
            The rule overlaps a rule at that layer and either of them is absolute.
        WeekdayConflictError
            The rule overlaps a relative rule at that layer on a shared weekday.
        """

        if priority == 0:
            raise ReservedPriorityError()
        if priority < 0:
            raise PriorityNotFoundError(priority, len(self._layers) - 1)

        for existing in self._layers[priority] if priority < len(self._layers) else ():
            if not existing.overlaps(rule):
                continue
            if existing.is_absolute() or rule.is_absolute():
                raise AbsoluteConflictError(priority=priority, rule=rule, existing=existing)
            if existing.shares_weekday_with(rule):
                raise WeekdayConflictError(priority=priority, rule=rule, existing=existing)

        while len(self._layers) <= priority:
            self._layers.append([])
        self._layers[priority].append(rule)
        logger.debug("Added rule {} -> {} at priority {}", rule.start, rule.end, priority)

    def remove_rule_by_index(self, priority: int, index: int) -> Rule[P]:
        if priority == 0:
            raise ReservedPriorityError()
        if not 0 < priority < len(self._layers):
            raise PriorityNotFoundError(priority, len(self._layers) - 1)
        layer = self._layers[priority]
        if not 0 <= index < len(layer):
            raise IndexNotFoundError(priority, index)

        removed = layer.pop(index)
        self._drop_empty_top(priority)
        logger.debug("Removed rule {} -> {} from priority {}", removed.start, removed.end, priority)
        return removed

    def remove_rule_by_datetime(self, priority: int, moment: datetime) -> Rule[P] | None:
        """Remove the first rule at ``priority`` active at ``moment``; ``None`` if none is."""
        if not 0 < priority < len(self._layers):
            return None
        layer = self._layers[priority]
        for index, rule in enumerate(layer):
            if rule.is_active(moment):
                removed = layer.pop(index)
                self._drop_empty_top(priority)
                logger.debug("Removed rule active at {} from priority {}", moment, priority)
                return removed
        return None

    def remove_rule_by_str(self, priority: int, moment: str) -> Rule[P] | None:
        parsed = self._parse(moment)
        if parsed is None:
            return None
        return self.remove_rule_by_datetime(priority, parsed)

    def _drop_empty_top(self, priority: int) -> None:
        if priority == len(self._layers) - 1 and not self._layers[priority]:
            self._layers.pop()

    # ---------------------------------------------------------------- derivation

    def _layer_frames(self, priority: int) -> list[Frame[P]]:
        frames: list[Frame[P]] = []
        for rule in self._layers[priority]:
            try:
                pieces = relative_to_absolute(rule)
            except UndividableRangeError as exc:
                logger.warning("Skipping rule at priority {}: {}", priority, exc)
                continue
            # Earlier rules keep precedence if pieces of one layer ever touch.
            frames = overlay(frames, [Frame.from_rule(piece) for piece in pieces])
        return frames

    def derive_all(self) -> tuple[Frame[P], ...]:
        """Recompute frames over the whole base-rule span."""
        frames: list[Frame[P]] = []
        for priority in range(len(self._layers) - 1, -1, -1):
            frames = overlay(frames, self._layer_frames(priority))
        self._store(frames)
        logger.debug("Derived {} frames from {} layers", len(self._frames), len(self._layers))
        return self.frames

    def derive_in_range(self, start: datetime, end: datetime) -> tuple[Frame[P], ...]:
        """Recompute frames covering exactly ``[start, end)``.

        The base layer is not merged; uncovered time becomes synthetic off frames.
        """

        if start >= end:
            raise InvalidRangeError(start, end)
        frames: list[Frame[P]] = []
        for priority in range(len(self._layers) - 1, 0, -1):
            clipped = clip_frames(self._layer_frames(priority), start, end)
            frames = overlay(frames, clipped)
        self._store(fill_gaps(frames, start, end))
        logger.debug("Derived {} frames for window {} -> {}", len(self._frames), start, end)
        return self.frames

    def _store(self, frames: Sequence[Frame[P]]) -> None:
        self._frames = sorted(frames, key=lambda frame: frame.start)
        self._starts = [frame.start for frame in self._frames]

    # ------------------------------------------------------------------- queries

    def frame_at(self, moment: datetime) -> Frame[P] | None:
        index = bisect_right(self._starts, moment) - 1
        if index < 0:
            return None
        frame = self._frames[index]
        return frame if frame.contains(moment) else None

    def is_open_at(self, moment: datetime) -> bool:
        frame = self.frame_at(moment)
        return frame is not None and not frame.off

    def payload_at(self, moment: datetime) -> P | None:
        frame = self.frame_at(moment)
        return frame.payload if frame is not None else None

    def _parse(self, moment: str) -> datetime | None:
        try:
            return datetime.strptime(moment, self.settings.datetime_format)
        except ValueError:
            logger.debug("Ignoring unparseable datetime string {!r}", moment)
            return None

    def is_open_from_str(self, moment: str) -> bool:
        parsed = self._parse(moment)
        return parsed is not None and self.is_open_at(parsed)

    def payload_from_str(self, moment: str) -> P | None:
        parsed = self._parse(moment)
        return self.payload_at(parsed) if parsed is not None else None
