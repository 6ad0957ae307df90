"""Marker-driven subtitle to Text+ overlay synchronisation.

WHY: Editors place captions on a subtitle track, but styled on-screen
text has to live on a video track as Text+ clips. Copying every caption
by hand into a title clip is slow and breaks as soon as the captions are
retimed. This package reads operator-placed timeline markers named
``::Track-Template`` and rebuilds one Text+ overlay per caption inside
each marker's region.

HOW: Four-stage pipeline per marker: parse the marker name, locate the
prefixed video/subtitle track pair, clear the marker region on the video
track, then place one overlay per overlapping caption and write its text
into the overlay's Fusion composition. The timeline itself is reached
through a pluggable host (live DaVinci Resolve or a JSON snapshot).

RULES:
- The engine is stateless: every run is re-derived from the timeline
- All interval comparisons happen in absolute frame coordinates
- Re-running on an unchanged timeline reproduces the same overlays
"""

__version__ = "0.1.0"
