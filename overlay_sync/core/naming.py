"""Marker name parsing for the ``<prefix>Track-Template`` convention.

WHY: Operators drive the engine purely through marker names. A marker
named ``::Main-StyleA`` means "fill the ``::Main`` video track with
``StyleA`` overlays for the captions on the ``::Main`` subtitle track".
Markers without the prefix belong to other workflows and must be left
alone silently.

HOW: Check the prefix, strip it, and split the remainder on the first
separator. The track target gets the prefix back so it can be compared
with track names directly.

RULES:
- No prefix → None (not applicable, no diagnostic)
- Prefix but no separator → MalformedMarkerNameError
- Only the first separator splits: "::Main-Style-A" → ("Main", "Style-A")
- Empty track target ("::-StyleA") or empty template id ("::Main-") is
  malformed; a looser first-hyphen split would accept both and then fail
  later as a missing track or template
- Matching is case-sensitive
"""

from __future__ import annotations

from typing import Optional

from overlay_sync.config import MARKER_PREFIX, TRACK_TEMPLATE_SEPARATOR
from overlay_sync.core.models import ParsedMarkerTarget
from overlay_sync.errors import MalformedMarkerNameError


def is_sync_marker(name: str, prefix: str = MARKER_PREFIX) -> bool:
    """Whether a marker name opts into overlay synchronisation."""
    return name.startswith(prefix)


def parse_marker_name(
    name: str,
    prefix: str = MARKER_PREFIX,
) -> Optional[ParsedMarkerTarget]:
    """Parse a marker name into its track target and template id.

    Args:
        name: The marker's display name.
        prefix: Leading substring that marks sync markers.

    Returns:
        ParsedMarkerTarget, or None if the name does not carry the prefix.

    Raises:
        MalformedMarkerNameError: The prefix is present but the body is not
            ``Track-Template``.
    """
    if not is_sync_marker(name, prefix):
        return None

    body = name[len(prefix):]
    track_target, separator, template_id = body.partition(TRACK_TEMPLATE_SEPARATOR)
    if not separator or not track_target or not template_id:
        raise MalformedMarkerNameError(name, prefix)

    return ParsedMarkerTarget(
        track_target=track_target,
        template_id=template_id,
        track_name=prefix + track_target,
    )
