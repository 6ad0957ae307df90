"""Clearing a marker region before overlays are re-inserted.

WHY: Running the engine twice must not stack a second set of overlays on
top of the first. Deleting everything that intersects the marker region
before placing makes every run an overwrite of the previous one.

HOW: plan_removals() selects the region's clips with the same overlap
predicate used for caption selection; clear_region() deletes them in one
host call.

RULES:
- Scope is the whole marker region, never the per-caption sub-intervals
- Any clip on the target video track counts, whatever its origin
- Deletion happens before any placement for the marker
"""

from __future__ import annotations

import logging
from typing import List

from overlay_sync.core.context import SyncContext
from overlay_sync.core.intervals import select_overlapping
from overlay_sync.core.models import Interval, OverlayClip

logger = logging.getLogger(__name__)


def plan_removals(ctx: SyncContext, video_track_index: int, region: Interval) -> List[OverlayClip]:
    """Clips on the video track that intersect the region."""
    clips = ctx.host.list_overlays(video_track_index)
    return select_overlapping(clips, region)


def clear_region(ctx: SyncContext, video_track_index: int, region: Interval) -> int:
    """Delete every clip intersecting the region; returns how many."""
    doomed = plan_removals(ctx, video_track_index, region)
    if not doomed:
        return 0
    for clip in doomed:
        logger.debug(
            "  [Delete] %s (Range: %d - %d)", clip.name, clip.start_abs, clip.end_abs
        )
    ctx.host.delete_overlays(doomed)
    return len(doomed)
