"""Human-readable run report lines.

WHY: The CLI and Resolve's console both need the same wording for the
run header, the closing summary, and the guidance shown when no marker
could be processed. Keeping the text in one place keeps
cli.py focused on argument handling.

HOW: Pure functions returning plain strings; the caller decides where
to print them. Per-marker lines are logged live by the controller, so
the report only frames them.

RULES:
- All functions return str or list[str]; nothing is printed here
- Guidance lists exactly three conditions: marker name format, prefixed
  video+subtitle tracks, template clip in the media pool
"""

from __future__ import annotations

from typing import List

from overlay_sync.core.models import RunSummary


def format_header(timeline_name: str) -> str:
    """First report line, naming the timeline the run is bound to."""
    return "Timeline: {}".format(timeline_name)


def format_no_markers() -> str:
    """Replaces the closing lines when the timeline carries no markers."""
    return "Info: the timeline has no markers."


def format_guidance(prefix: str) -> List[str]:
    """Checklist shown when markers exist but none was processed.

    WHY: A run that places nothing is usually a naming slip, and the
    per-marker skip lines alone do not say what the convention is.
    """
    return [
        "",
        "[Guidance] No '{}' marker was processed.".format(prefix),
        "Check the following:",
        "1. Is the marker named '{p}Track-Template'? (e.g. {p}Main-StyleA)".format(p=prefix),
        "2. Do both the video track and the subtitle track carry the "
        "'{p}' prefix? (e.g. {p}Main)".format(p=prefix),
        "3. Does the media pool contain the template clip? (e.g. StyleA)",
    ]


def format_closing(summary: RunSummary, prefix: str) -> List[str]:
    """Lines printed after all markers were processed."""
    if summary.markers_seen == 0:
        return [format_no_markers()]

    lines: List[str] = []
    if summary.needs_guidance:
        lines.extend(format_guidance(prefix))
    lines.append("")
    lines.append("Finish: processed {} markers".format(summary.processed_count))
    return lines
