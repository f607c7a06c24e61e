from datetime import datetime

import pytest

from availability import Availability


def at(day: int, hour: int = 0, minute: int = 0, month: int = 1, year: int = 2024) -> datetime:
    """January 2024 shorthand; 2024-01-01 is a Monday."""
    return datetime(year, month, day, hour, minute)


@pytest.fixture
def table() -> Availability:
    return Availability()


def assert_partition(frames, start=None, end=None):
    """Frames are ordered, non-overlapping and gap-free (and cover the window if given)."""
    assert frames, "expected at least one frame"
    for frame in frames:
        assert frame.start < frame.end
    for current, following in zip(frames, frames[1:]):
        assert current.end == following.start
    if start is not None:
        assert frames[0].start == start
    if end is not None:
        assert frames[-1].end == end
