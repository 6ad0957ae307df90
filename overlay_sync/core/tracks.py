"""Track lookup by display name.

WHY: Markers name their target track, but the host addresses tracks by
position. Indices can shift whenever an editor adds or reorders tracks,
so they are re-derived for every marker instead of cached.

HOW: Linear scan over the host's track names of one kind.

RULES:
- Exact, case-sensitive equality; first match wins
- Indices are 1-based, in the order the host reports (never sorted)
- A marker needs both its video and its subtitle track
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from overlay_sync.core.context import SyncContext
from overlay_sync.core.models import TrackKind, TrackRef

logger = logging.getLogger(__name__)


def locate_track(ctx: SyncContext, kind: TrackKind, name: str) -> Optional[TrackRef]:
    """Resolve a track name to a TrackRef, or None if no track carries it."""
    for index, track_name in enumerate(ctx.host.list_track_names(kind), start=1):
        if track_name == name:
            return TrackRef(kind=kind, index=index, name=track_name)
    return None


def locate_track_pair(
    ctx: SyncContext,
    name: str,
) -> Tuple[Optional[TrackRef], Optional[TrackRef]]:
    """Resolve the (video, caption) tracks that share a name."""
    video = locate_track(ctx, TrackKind.VIDEO, name)
    caption = locate_track(ctx, TrackKind.CAPTION, name)
    logger.debug(
        "Track %r: video=%s subtitle=%s",
        name,
        video.index if video else None,
        caption.index if caption else None,
    )
    return video, caption


def log_track_listing(ctx: SyncContext) -> None:
    """Log every track name per kind; used to debug naming mistakes."""
    for kind in (TrackKind.VIDEO, TrackKind.CAPTION):
        names = ctx.host.list_track_names(kind)
        logger.debug("%s tracks: %d", kind.value, len(names))
        for index, track_name in enumerate(names, start=1):
            logger.debug("  %s %d: [%s]", kind.value, index, track_name)
