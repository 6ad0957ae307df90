"""Template lookup and per-caption placement planning.

WHY: Each caption becomes its own overlay whose timing mirrors the
caption exactly, independent of the coarser marker region. The template
that styles the overlays lives somewhere in a nested library and has to
be found by name before anything is placed.

HOW: find_template() walks the library depth-first: the folder's own
clips first, then each subfolder in order, returning on the first hit.
plan_placements() turns the matched captions into one
PlacementInstruction each.

RULES:
- Template names match exactly; first hit in traversal order wins
- A missing template skips the whole marker (no partial placement)
- One instruction per caption, in source-track order, never merged
- Instruction timing is the caption's own start and duration
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from overlay_sync.core.models import CaptionEntry, PlacementInstruction, TemplateRef
from overlay_sync.hosts.base import TemplateFolder


def find_template(folder: TemplateFolder, name: str) -> Optional[TemplateRef]:
    """Depth-first search of the template library for an exact name.

    Args:
        folder: Library folder to search (usually the root).
        name: Template clip name.

    Returns:
        The first matching TemplateRef, or None.
    """
    for template in folder.templates():
        if template.name == name:
            return template

    for child in folder.subfolders():
        found = find_template(child, name)
        if found is not None:
            return found

    return None


def plan_placements(
    captions: Sequence[CaptionEntry],
    template_id: str,
    track_index: int,
) -> List[PlacementInstruction]:
    """One placement instruction per caption, in caption order."""
    return [
        PlacementInstruction(
            template_id=template_id,
            start_abs=caption.start_abs,
            duration=caption.duration,
            track_index=track_index,
            text=caption.text,
        )
        for caption in captions
    ]
