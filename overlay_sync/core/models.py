"""Dataclasses for markers, captions, overlays, and run results.

WHY: The engine juggles two coordinate systems (marker-relative and
absolute frames) and two track kinds. Typed containers make it explicit
which value lives in which coordinate system and keep host objects
opaque to the planning logic.

HOW: Input types (Marker, CaptionEntry, OverlayClip) are built by a host
from its timeline. Derived types (ParsedMarkerTarget, TrackRef, Interval,
PlacementInstruction) exist only while one marker is processed. Result
types (CaptionResult, MarkerResult, RunSummary) are what the CLI reports.

RULES:
- Marker.frame is relative to the timeline start
- CaptionEntry and OverlayClip carry absolute frames
- Interval is half-open: [start, end)
- handle fields hold the host's native object and are never inspected here
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, List, Optional


class TrackKind(str, enum.Enum):
    """Track kinds the engine works with.

    Values match the track type strings of the Resolve scripting API.
    """

    VIDEO = "video"
    CAPTION = "subtitle"


class MarkerStatus(str, enum.Enum):
    """Outcome of processing one prefixed marker."""

    PLACED = "placed"
    MALFORMED_NAME = "malformed_name"
    TRACK_NOT_FOUND = "track_not_found"
    NO_CAPTIONS_IN_REGION = "no_captions_in_region"
    TEMPLATE_NOT_FOUND = "template_not_found"


class CaptionStatus(str, enum.Enum):
    """Outcome of placing one caption as an overlay."""

    APPLIED = "applied"
    ATTRIBUTE_UNRESOLVED = "attribute_unresolved"
    PLACEMENT_FAILED = "placement_failed"


@dataclass(frozen=True)
class Interval:
    """Half-open frame interval [start, end) in absolute coordinates."""

    start: int
    end: int


@dataclass
class Marker:
    """A timeline marker as reported by the host.

    RULES:
    - frame: relative to the timeline start (not absolute)
    - duration: frames; None when the host did not report one
    """

    name: str
    frame: int
    duration: Optional[int] = None


@dataclass(frozen=True)
class ParsedMarkerTarget:
    """Track target and template parsed from a marker name.

    track_name is the name both tracks must carry: the prefix followed by
    the track target.
    """

    track_target: str
    template_id: str
    track_name: str


@dataclass(frozen=True)
class TrackRef:
    """A track resolved by name. index is 1-based, in host order."""

    kind: TrackKind
    index: int
    name: str


@dataclass
class CaptionEntry:
    """One subtitle item in absolute frames."""

    text: str
    start_abs: int
    duration: int

    @property
    def end_abs(self) -> int:
        return self.start_abs + self.duration

    @property
    def interval(self) -> Interval:
        return Interval(self.start_abs, self.end_abs)


@dataclass
class OverlayClip:
    """An existing clip on a video track, candidate for removal."""

    name: str
    start_abs: int
    duration: int
    handle: Any = field(default=None, repr=False, compare=False)

    @property
    def end_abs(self) -> int:
        return self.start_abs + self.duration

    @property
    def interval(self) -> Interval:
        return Interval(self.start_abs, self.end_abs)


@dataclass
class TemplateRef:
    """A template clip found in the host's template library."""

    name: str
    handle: Any = field(default=None, repr=False, compare=False)


@dataclass(frozen=True)
class PlacementInstruction:
    """Everything the host needs to append one overlay for one caption."""

    template_id: str
    start_abs: int
    duration: int
    track_index: int
    text: str


@dataclass
class CaptionResult:
    """Per-caption outcome inside one marker."""

    instruction: PlacementInstruction
    status: CaptionStatus
    strategy: Optional[str] = None


@dataclass
class MarkerResult:
    """Outcome of one prefixed marker.

    RULES:
    - success_count counts captions whose text was applied
    - total_count is the number of captions matched in the region
    - processed is True only when at least one caption was applied
    """

    marker: Marker
    status: MarkerStatus
    target: Optional[ParsedMarkerTarget] = None
    region: Optional[Interval] = None
    removed_count: int = 0
    captions: List[CaptionResult] = field(default_factory=list)
    detail: str = ""

    @property
    def total_count(self) -> int:
        return len(self.captions)

    @property
    def success_count(self) -> int:
        return sum(1 for c in self.captions if c.status == CaptionStatus.APPLIED)

    @property
    def processed(self) -> bool:
        return self.status == MarkerStatus.PLACED and self.success_count > 0


@dataclass
class RunSummary:
    """Aggregated result of one synchronisation run.

    RULES:
    - markers_seen: every marker on the timeline, prefixed or not
    - results: one entry per recognized (prefixed) marker, in time order
    - needs_guidance: markers exist but none was processed (malformed,
      unmatched, or every prefixed marker skipped)
    """

    timeline_name: str
    markers_seen: int = 0
    results: List[MarkerResult] = field(default_factory=list)

    @property
    def recognized_count(self) -> int:
        return len(self.results)

    @property
    def processed_count(self) -> int:
        return sum(1 for r in self.results if r.processed)

    @property
    def needs_guidance(self) -> bool:
        return self.markers_seen > 0 and self.processed_count == 0
