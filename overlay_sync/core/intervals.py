"""Interval overlap arithmetic in absolute frame coordinates.

WHY: Both caption selection and overwrite clearing ask the same question:
does this item intersect the marker region? Answering it with one
shared predicate guarantees that what a run inserts is exactly what the
next run deletes.

HOW: overlaps() is the strict half-open test. marker_region() converts a
marker's relative frame into an absolute Interval. select_overlapping()
filters any items exposing an ``interval`` property, keeping their order.

RULES:
- a overlaps b  ⇔  a.start < b.end and a.end > b.start
- Touching intervals ([0,10) and [10,20)) do not overlap
- Marker frames are offset by the timeline start; caption and clip
  frames are already absolute and are never offset again
- A marker without a positive duration covers default_duration frames
"""

from __future__ import annotations

from typing import List, Optional, Sequence, TypeVar

from overlay_sync.config import DEFAULT_MARKER_DURATION
from overlay_sync.core.models import CaptionEntry, Interval, Marker

T = TypeVar("T")


def overlaps(a: Interval, b: Interval) -> bool:
    """Strict half-open overlap test."""
    return a.start < b.end and a.end > b.start


def effective_duration(
    duration: Optional[int],
    default_duration: int = DEFAULT_MARKER_DURATION,
) -> int:
    """Normalise a marker duration: absent or non-positive → default."""
    if duration is None or duration <= 0:
        return default_duration
    return duration


def marker_region(
    marker: Marker,
    start_offset: int,
    default_duration: int = DEFAULT_MARKER_DURATION,
) -> Interval:
    """Convert a marker's relative span to an absolute Interval.

    Args:
        marker: Marker with a relative frame.
        start_offset: Absolute frame of the timeline start.
        default_duration: Frames covered when the marker has no duration.
    """
    start = marker.frame + start_offset
    return Interval(start, start + effective_duration(marker.duration, default_duration))


def select_overlapping(items: Sequence[T], region: Interval) -> List[T]:
    """Keep the items whose ``interval`` overlaps region, in input order."""
    return [item for item in items if overlaps(item.interval, region)]


def select_captions(captions: Sequence[CaptionEntry], region: Interval) -> List[CaptionEntry]:
    """Captions inside a marker region, in source-track order."""
    return select_overlapping(captions, region)
