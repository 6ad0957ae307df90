"""Unit tests for clearing a marker region before placement.

WHY: Clearing too little duplicates overlays on every run; clearing too
much destroys clips next to the marker.
"""

from overlay_sync.core.models import Interval
from overlay_sync.core.overwrite import clear_region, plan_removals

from conftest import START_FRAME


def _put_clips(snapshot_data, clips):
    snapshot_data["timeline"]["video_tracks"][1]["items"] = [
        {"name": name, "start": start, "duration": duration} for name, start, duration in clips
    ]


REGION = Interval(START_FRAME + 100, START_FRAME + 200)


class TestPlanRemovals:
    """Clips intersecting the region are selected with the shared predicate."""

    def test_selects_overlapping_clips_only(self, ctx, snapshot_data):
        _put_clips(snapshot_data, [
            ("touching-before", START_FRAME + 80, 20),
            ("inside", START_FRAME + 110, 20),
            ("straddling-end", START_FRAME + 190, 30),
            ("touching-after", START_FRAME + 200, 10),
        ])
        removals = plan_removals(ctx, 2, REGION)
        assert [c.name for c in removals] == ["inside", "straddling-end"]

    def test_clip_spanning_whole_region(self, ctx, snapshot_data):
        # Not aligned with any caption, still inside the marker's union region
        _put_clips(snapshot_data, [("wide", START_FRAME, 1000)])
        assert [c.name for c in plan_removals(ctx, 2, REGION)] == ["wide"]

    def test_empty_track(self, ctx):
        assert plan_removals(ctx, 2, REGION) == []


class TestClearRegion:
    """clear_region() deletes the planned clips in a single batch."""

    def test_deletes_and_counts(self, ctx, snapshot_data, snapshot_host):
        _put_clips(snapshot_data, [
            ("inside", START_FRAME + 110, 20),
            ("outside", START_FRAME + 500, 20),
        ])
        assert clear_region(ctx, 2, REGION) == 1
        remaining = [c.name for c in snapshot_host.list_overlays(2)]
        assert remaining == ["outside"]

    def test_other_tracks_untouched(self, ctx, snapshot_host):
        clear_region(ctx, 2, Interval(START_FRAME, START_FRAME + 5000))
        assert [c.name for c in snapshot_host.list_overlays(1)] == ["A001_C002.mov"]

    def test_single_batch_call(self, ctx, monkeypatch, snapshot_data, snapshot_host):
        _put_clips(snapshot_data, [
            ("a", START_FRAME + 110, 20),
            ("b", START_FRAME + 150, 20),
        ])
        calls = []
        monkeypatch.setattr(snapshot_host, "delete_overlays", lambda clips: calls.append(list(clips)))
        clear_region(ctx, 2, REGION)
        assert len(calls) == 1
        assert [c.name for c in calls[0]] == ["a", "b"]

    def test_nothing_to_delete_skips_host_call(self, ctx, monkeypatch, snapshot_host):
        calls = []
        monkeypatch.setattr(snapshot_host, "delete_overlays", lambda clips: calls.append(clips))
        assert clear_region(ctx, 2, REGION) == 0
        assert calls == []
