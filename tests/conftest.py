"""Shared test fixtures for the overlay_sync test suite.

WHY: Most engine tests need the same small timeline: one sync marker,
a prefixed video/subtitle track pair, a few captions, and a template
library with a nested Text+ template. Centralizing it here keeps every
test working from the same frame numbers.

HOW: sample_snapshot() returns a fresh snapshot dict on every call so
tests can mutate it freely. Fixtures wrap it in a SnapshotHost and a
SyncContext, and provide explicit SyncSettings that ignore the
environment.

RULES:
- Timeline starts at absolute frame 86400 (01:00:00:00 at 24 fps)
- The "::Main-StyleA" marker covers relative [100, 200) = absolute
  [86500, 86600)
- Captions at absolute [86510, 86530) and [86550, 86570) fall inside the
  marker; [86700, 86720) falls outside
"""

import copy
from typing import Any, Dict

import pytest

from overlay_sync.config import SyncSettings
from overlay_sync.core.context import SyncContext
from overlay_sync.hosts.snapshot import SnapshotHost

START_FRAME = 86400

TEXT_PLUS_COMPONENTS = [
    {
        "name": "Template",
        "inputs": [
            {"id": "StyledText", "visible": True, "value": "Custom Text"},
            {"id": "Size", "visible": True, "value": 0.08},
        ],
    },
    {"name": "MediaOut1", "inputs": [{"id": "Input"}]},
]

_SAMPLE_SNAPSHOT: Dict[str, Any] = {
    "timeline": {
        "name": "Episode 01",
        "start_frame": START_FRAME,
        "markers": [
            {"frame": 100, "name": "::Main-StyleA", "duration": 100},
            {"frame": 40, "name": "Review: colour", "duration": 10},
        ],
        "video_tracks": [
            {"name": "Video 1", "items": [
                {"name": "A001_C002.mov", "start": START_FRAME, "duration": 2000},
            ]},
            {"name": "::Main", "items": []},
        ],
        "subtitle_tracks": [
            {"name": "::Main", "items": [
                {"text": "Hello there", "start": START_FRAME + 110, "duration": 20},
                {"text": "General Kenobi", "start": START_FRAME + 150, "duration": 20},
                {"text": "Much later", "start": START_FRAME + 300, "duration": 20},
            ]},
        ],
    },
    "media_pool": {
        "name": "Master",
        "clips": [{"name": "A001_C002.mov"}],
        "folders": [
            {
                "name": "Titles",
                "clips": [{"name": "StyleA", "components": TEXT_PLUS_COMPONENTS}],
            },
        ],
    },
}


def sample_snapshot() -> Dict[str, Any]:
    """A fresh, independently mutable copy of the sample snapshot."""
    return copy.deepcopy(_SAMPLE_SNAPSHOT)


@pytest.fixture
def snapshot_data():
    return sample_snapshot()


@pytest.fixture
def snapshot_host(snapshot_data):
    return SnapshotHost(snapshot_data)


@pytest.fixture
def settings():
    """Settings with the documented defaults, independent of the environment."""
    return SyncSettings(
        prefix="::",
        canonical_component="Template",
        attribute_names=("StyledText", "Text"),
        skip_hidden=True,
        default_duration=1,
        debug=False,
    )


@pytest.fixture
def ctx(snapshot_host, settings):
    return SyncContext.open(snapshot_host, settings)
