"""Exception types for the overlay sync engine.

WHY: Only one condition aborts a run (no reachable project/timeline).
Everything else is a per-marker or per-caption diagnostic. Typed
exceptions let the CLI tell the fatal case apart from the recoverable
ones without string matching.

RULES:
- HostUnavailableError is the only fatal error
- MalformedMarkerNameError is caught by the controller and recorded
- SnapshotError wraps JSON and schema failures of snapshot files
"""

from __future__ import annotations


class OverlaySyncError(Exception):
    """Base class for all errors raised by overlay_sync."""


class HostUnavailableError(OverlaySyncError):
    """Raised when no project or timeline is open in the host.

    HOW: Carries a human-readable message that the CLI prints verbatim.
    """


class MalformedMarkerNameError(OverlaySyncError, ValueError):
    """Raised for a prefixed marker name that lacks a ``Track-Template`` body."""

    def __init__(self, name: str, prefix: str) -> None:
        self.name = name
        self.prefix = prefix
        super().__init__(
            "Malformed marker name {!r} (expected: {}Track-Template)".format(name, prefix)
        )


class SnapshotError(OverlaySyncError, ValueError):
    """Raised when a timeline snapshot cannot be parsed or validated."""
