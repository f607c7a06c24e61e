"""Priority overlay merge and window post-processing for frame sequences."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Sequence

from .models import Frame

__all__ = ["clip_frames", "fill_gaps", "overlay"]


def _by_start(frame: Frame) -> datetime:
    return frame.start


def overlay(higher: Sequence[Frame], lower: Sequence[Frame]) -> list[Frame]:
    """Merge ``lower`` underneath ``higher``.

    Both inputs must be non-overlapping. Higher frames are emitted whole; a
    lower frame is cut around every higher frame it intersects, so one long
    lower frame may come out as several fragments.
    """

    high = sorted(higher, key=_by_start)
    low = sorted(lower, key=_by_start)
    merged: list[Frame] = []
    i = j = 0
    current = low[0] if low else None

    while i < len(high) and current is not None:
        top = high[i]
        if top.start >= current.end:
            merged.append(current)
            j += 1
            current = low[j] if j < len(low) else None
        elif current.start >= top.end:
            merged.append(top)
            i += 1
        else:
            if current.start < top.start:
                merged.append(Frame(current.start, top.start, current.off, current.payload))
            if current.end > top.end:
                # The remainder may still run under the next higher frame.
                current = Frame(top.end, current.end, current.off, current.payload)
                merged.append(top)
                i += 1
            else:
                j += 1
                current = low[j] if j < len(low) else None

    merged.extend(high[i:])
    if current is not None:
        merged.append(current)
        merged.extend(low[j + 1 :])
    merged.sort(key=_by_start)
    return merged


def clip_frames(frames: Iterable[Frame], start: datetime, end: datetime) -> list[Frame]:
    """Drop frames outside ``[start, end)`` and clamp the ones crossing its edges."""
    clipped = (frame.clipped(start, end) for frame in frames)
    return [frame for frame in clipped if frame is not None]


def fill_gaps(frames: Sequence[Frame], start: datetime, end: datetime) -> list[Frame]:
    """Cover ``[start, end)`` completely by inserting synthetic off frames.

    Zero-length frames are discarded from the result.
    """

    ordered = sorted(frames, key=_by_start)
    if not ordered:
        return [Frame.closed(start, end)]

    filled: list[Frame] = []
    if ordered[0].start > start:
        filled.append(Frame.closed(start, ordered[0].start))
    for frame, following in zip(ordered, ordered[1:]):
        filled.append(frame)
        if frame.end < following.start:
            filled.append(Frame.closed(frame.end, following.start))
    filled.append(ordered[-1])
    if ordered[-1].end < end:
        filled.append(Frame.closed(ordered[-1].end, end))
    return [frame for frame in filled if frame.end > frame.start]
