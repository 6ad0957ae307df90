"""Explicit per-run session context.

WHY: Resolve scripts traditionally read the current project and timeline
from globals. Passing them explicitly lets every component be driven by
any host (live or snapshot) and keeps the engine free of module state.

HOW: SyncContext bundles the host, the settings, and the values that are
fixed for the whole run (timeline name and start offset). It is built
once by the controller and threaded through every component call.

RULES:
- One SyncContext per run; never stored at module level
- start_offset converts marker-relative frames to absolute frames
"""

from __future__ import annotations

from dataclasses import dataclass

from overlay_sync.config import SyncSettings
from overlay_sync.hosts.base import TimelineHost


@dataclass
class SyncContext:
    """Host session and settings shared by every component of one run."""

    host: TimelineHost
    settings: SyncSettings
    timeline_name: str
    start_offset: int

    @classmethod
    def open(cls, host: TimelineHost, settings: SyncSettings) -> "SyncContext":
        """Read the run-wide values from the host once."""
        return cls(
            host=host,
            settings=settings,
            timeline_name=host.timeline_name(),
            start_offset=host.timeline_start_offset(),
        )
