"""Unit tests for interval overlap and coordinate conversion.

WHY: Off-by-one errors at region boundaries silently pull a neighbouring
caption into a marker, or delete an overlay that belongs to the next
marker. Mixing relative and absolute frames shifts everything by an
hour.

HOW: Tests pin the strict half-open predicate, the marker region
conversion including the duration default, and order-preserving
selection.
"""

from overlay_sync.core.intervals import (
    effective_duration,
    marker_region,
    overlaps,
    select_captions,
)
from overlay_sync.core.models import CaptionEntry, Interval, Marker


class TestOverlaps:
    """overlaps() is a strict half-open intersection test."""

    def test_touching_intervals_do_not_overlap(self):
        assert not overlaps(Interval(0, 10), Interval(10, 20))
        assert not overlaps(Interval(10, 20), Interval(0, 10))

    def test_one_frame_intersection_overlaps(self):
        assert overlaps(Interval(0, 10), Interval(9, 20))

    def test_containment_overlaps(self):
        assert overlaps(Interval(0, 100), Interval(40, 50))
        assert overlaps(Interval(40, 50), Interval(0, 100))

    def test_disjoint(self):
        assert not overlaps(Interval(0, 10), Interval(30, 40))

    def test_empty_interval_inside_other(self):
        # A zero-length interval strictly inside another still intersects it
        assert overlaps(Interval(5, 5), Interval(0, 10))


class TestMarkerRegion:
    """marker_region() offsets relative frames by the timeline start."""

    def test_region_is_absolute(self):
        region = marker_region(Marker("::Main-StyleA", 100, 100), 86400)
        assert region == Interval(86500, 86600)

    def test_missing_duration_defaults_to_one_frame(self):
        region = marker_region(Marker("::Main-StyleA", 100, None), 86400)
        assert region == Interval(86500, 86501)

    def test_zero_duration_defaults_to_one_frame(self):
        region = marker_region(Marker("::Main-StyleA", 100, 0), 0)
        assert region == Interval(100, 101)

    def test_custom_default_duration(self):
        assert effective_duration(None, 24) == 24
        assert effective_duration(12, 24) == 12


class TestSelectCaptions:
    """Captions are kept when they intersect the region, in track order."""

    def _captions(self):
        return [
            CaptionEntry("before", 86480, 20),   # ends exactly at region start
            CaptionEntry("first", 86510, 20),
            CaptionEntry("straddle", 86590, 30),
            CaptionEntry("after", 86600, 10),    # starts exactly at region end
        ]

    def test_selects_overlapping_in_order(self):
        selected = select_captions(self._captions(), Interval(86500, 86600))
        assert [c.text for c in selected] == ["first", "straddle"]

    def test_captions_are_not_offset_again(self):
        # Relative coordinates would put "first" at 110, outside [86500, 86600)
        region = marker_region(Marker("::Main-StyleA", 100, 100), 86400)
        selected = select_captions([CaptionEntry("first", 110, 20)], region)
        assert selected == []

    def test_no_captions(self):
        assert select_captions([], Interval(0, 100)) == []
