"""Per-run orchestration: markers in time order, one at a time.

WHY: Every placement mutates the track that the next overlap computation
reads, so markers and captions must be processed strictly in sequence.
Processing in timeline order also makes the diagnostics read top to
bottom along the timeline.

HOW: SyncController.run() opens a SyncContext, sorts the markers by
relative frame and feeds each prefixed marker through:
  parse name → locate track pair → clear region → select captions →
  find template → place + set text per caption
Any step that cannot continue records a MarkerResult with the matching
MarkerStatus and moves on to the next marker.

RULES:
- Unprefixed markers produce no result and no diagnostic
- Marker failures never abort the run; nothing is retried
- A caption whose placement or text write fails does not stop the
  remaining captions of its marker
- The region is cleared before the captions and template are looked up
"""

from __future__ import annotations

import logging
from typing import List, Optional

from overlay_sync.config import SyncSettings, load_settings
from overlay_sync.core.context import SyncContext
from overlay_sync.core.intervals import marker_region, select_captions
from overlay_sync.core.models import (
    CaptionResult,
    CaptionStatus,
    Marker,
    MarkerResult,
    MarkerStatus,
    PlacementInstruction,
    RunSummary,
    TemplateRef,
)
from overlay_sync.core.naming import parse_marker_name
from overlay_sync.core.overwrite import clear_region
from overlay_sync.core.placement import find_template, plan_placements
from overlay_sync.core.text_attribute import TextAttributeResolver
from overlay_sync.core.tracks import locate_track_pair, log_track_listing
from overlay_sync.errors import MalformedMarkerNameError
from overlay_sync.hosts.base import TimelineHost

logger = logging.getLogger(__name__)


def sorted_markers(markers: dict) -> List[Marker]:
    """Markers ordered by relative frame (stable for equal frames)."""
    return [markers[frame] for frame in sorted(markers)]


class SyncController:
    """Runs the marker-driven synchronisation against one host."""

    def __init__(self, host: TimelineHost, settings: Optional[SyncSettings] = None) -> None:
        self.host = host
        self.settings = settings or load_settings()
        self.resolver = TextAttributeResolver(
            canonical_name=self.settings.canonical_component,
            attribute_names=self.settings.attribute_names,
            skip_hidden=self.settings.skip_hidden,
        )

    def run(self) -> RunSummary:
        """Process every marker on the timeline and summarise the run."""
        ctx = SyncContext.open(self.host, self.settings)
        summary = RunSummary(timeline_name=ctx.timeline_name)

        markers = sorted_markers(self.host.list_markers())
        summary.markers_seen = len(markers)
        if not markers:
            return summary

        log_track_listing(ctx)

        for marker in markers:
            logger.debug("Frame %d: Name=[%s]", marker.frame, marker.name)
            result = self.process_marker(ctx, marker)
            if result is not None:
                summary.results.append(result)

        return summary

    def process_marker(self, ctx: SyncContext, marker: Marker) -> Optional[MarkerResult]:
        """Run the pipeline for one marker; None when it is not a sync marker."""
        try:
            target = parse_marker_name(marker.name, ctx.settings.prefix)
        except MalformedMarkerNameError as exc:
            logger.info("  [Skip] %s", exc)
            return MarkerResult(marker, MarkerStatus.MALFORMED_NAME, detail=str(exc))
        if target is None:
            return None

        video, caption = locate_track_pair(ctx, target.track_name)
        if video is None or caption is None:
            missing = [kind for kind, ref in (("video", video), ("subtitle", caption)) if ref is None]
            detail = "Track {!r} not found ({})".format(target.track_name, ", ".join(missing))
            logger.info("  [Skip] %s: %s", marker.name, detail)
            return MarkerResult(marker, MarkerStatus.TRACK_NOT_FOUND, target=target, detail=detail)

        logger.info(
            "Marker: %s -> Track: %s, Template: %s",
            marker.name,
            target.track_name,
            target.template_id,
        )

        region = marker_region(marker, ctx.start_offset, ctx.settings.default_duration)
        logger.debug("Clearing existing clips (Range: %d - %d)", region.start, region.end)
        removed = clear_region(ctx, video.index, region)
        result = MarkerResult(
            marker,
            MarkerStatus.PLACED,
            target=target,
            region=region,
            removed_count=removed,
        )

        captions = select_captions(ctx.host.list_captions(caption.index), region)
        for entry in captions:
            logger.debug("  [Found] %r (Start: %d)", entry.text[:10], entry.start_abs)
        if not captions:
            result.status = MarkerStatus.NO_CAPTIONS_IN_REGION
            result.detail = "No captions found in the marker region"
            logger.info("  [Skip] %s", result.detail)
            return result

        template = find_template(ctx.host.template_library(), target.template_id)
        if template is None:
            result.status = MarkerStatus.TEMPLATE_NOT_FOUND
            result.detail = "Template {!r} not found in the media pool".format(target.template_id)
            logger.info("  [Error] %s", result.detail)
            return result

        logger.info("  Found %d caption(s), placing overlays...", len(captions))
        for instruction in plan_placements(captions, target.template_id, video.index):
            result.captions.append(self.place(ctx, template, instruction))

        logger.info("  [Result] %d/%d overlays placed", result.success_count, result.total_count)
        return result

    def place(
        self,
        ctx: SyncContext,
        template: TemplateRef,
        instruction: PlacementInstruction,
    ) -> CaptionResult:
        """Realise one instruction and write the caption text into it."""
        overlay = ctx.host.append_overlay(
            template,
            instruction.start_abs,
            instruction.duration,
            instruction.track_index,
        )
        if overlay is None:
            logger.warning("  [Error] Placement failed for %r", instruction.text[:10])
            return CaptionResult(instruction, CaptionStatus.PLACEMENT_FAILED)

        try:
            comp = ctx.host.get_composition(overlay)
        except Exception:
            logger.debug("Reading overlay composition failed", exc_info=True)
            comp = None

        target = self.resolver.set_text(comp, instruction.text)
        if not target.resolved:
            logger.warning("  [Error] No text attribute for %r", instruction.text[:10])
            return CaptionResult(instruction, CaptionStatus.ATTRIBUTE_UNRESOLVED)

        return CaptionResult(instruction, CaptionStatus.APPLIED, strategy=target.strategy.value)
