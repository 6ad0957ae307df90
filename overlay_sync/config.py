"""Configuration constants, naming convention, and .env loading.

WHY: Centralizes all configurable values so they are easy to find,
update, and override. The marker prefix, the Fusion component and input
names that carry caption text, and the default marker duration are plain
data, not buried in logic, so they can be changed without touching the
engine.

HOW: python-dotenv loads the .env file on import. Constants are defined
at module level; environment variables override the defaults.
load_settings() bundles the effective values into a SyncSettings
dataclass that is passed explicitly to the engine.

RULES:
- MARKER_PREFIX must lead both the marker name and the track names
- TEXT_ATTRIBUTE_NAMES is ordered: richer attribute first
- A marker without a positive duration covers DEFAULT_MARKER_DURATION frames
- All defaults can be overridden via environment variables
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Tuple

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    """Read a boolean env var; 1/true/yes/on (any case) count as set."""
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# ---------------------------------------------------------------------------
# Naming convention
# ---------------------------------------------------------------------------

MARKER_PREFIX = os.getenv("OVERLAY_SYNC_PREFIX", "::")
"""Leading substring shared by sync markers and their target tracks."""

TRACK_TEMPLATE_SEPARATOR = "-"

# ---------------------------------------------------------------------------
# Fusion composition lookup
# ---------------------------------------------------------------------------

CANONICAL_COMPONENT_NAME = "Template"
"""Name Resolve gives the Text+ tool inside a Text+ title's composition."""

TEXT_ATTRIBUTE_NAMES: Tuple[str, ...] = ("StyledText", "Text")

# ---------------------------------------------------------------------------
# Timing
# ---------------------------------------------------------------------------

DEFAULT_MARKER_DURATION = 1

# ---------------------------------------------------------------------------
# Runtime toggles
# ---------------------------------------------------------------------------

DEBUG_MODE = _env_flag("OVERLAY_SYNC_DEBUG", "false")
SKIP_HIDDEN_ATTRIBUTES = _env_flag("OVERLAY_SYNC_SKIP_HIDDEN", "true")


@dataclass(frozen=True)
class SyncSettings:
    """Effective settings for one synchronisation run.

    RULES:
    - prefix: must be non-empty
    - attribute_names: preference order for the caption text input
    - skip_hidden: tier-2 attribute search ignores non-visible inputs
    - default_duration: frames covered by a marker without a duration
    """

    prefix: str = MARKER_PREFIX
    canonical_component: str = CANONICAL_COMPONENT_NAME
    attribute_names: Tuple[str, ...] = TEXT_ATTRIBUTE_NAMES
    skip_hidden: bool = SKIP_HIDDEN_ATTRIBUTES
    default_duration: int = DEFAULT_MARKER_DURATION
    debug: bool = DEBUG_MODE


def load_settings(**overrides) -> SyncSettings:
    """Build SyncSettings from the environment plus explicit overrides.

    Overrides whose value is None are ignored so CLI flags that were not
    given fall through to the environment defaults.

    Raises:
        ValueError: If the resulting prefix is empty.
    """
    settings = SyncSettings()
    given = {key: value for key, value in overrides.items() if value is not None}
    if given:
        settings = replace(settings, **given)
    if not settings.prefix:
        raise ValueError(
            "Marker prefix is empty. Set OVERLAY_SYNC_PREFIX or pass --prefix."
        )
    return settings
