"""In-memory timeline host backed by a JSON snapshot.

WHY: The engine mutates a live timeline, which makes trial runs risky
and tests impossible without Resolve. A snapshot host holds a complete
timeline (markers, tracks, template library with compositions) in plain
dicts so a run can be previewed, diffed, and tested offline.

HOW: SnapshotHost.load() reads the JSON file and validates it with
jsonschema against timeline_snapshot.schema.json. Host operations work
directly on the validated dicts: appending an overlay deep-copies the
template's components onto a new track item, deleting removes items by
identity, and text writes set the copied input's ``value``. to_dict()
returns a copy of the mutated document in the same schema; save()
writes it to disk.

RULES:
- Snapshots are validated before use; invalid files raise SnapshotError
- Track items are kept sorted by start frame, like Resolve reports them
- Markers sharing a frame collapse to the last one declared
- Appending to a track index that does not exist fails (returns None)
"""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import jsonschema

from overlay_sync.core.models import (
    CaptionEntry,
    Marker,
    OverlayClip,
    TemplateRef,
    TrackKind,
)
from overlay_sync.errors import SnapshotError
from overlay_sync.hosts.base import Component, Composition, TemplateFolder, TimelineHost

SCHEMA_PATH = Path(__file__).resolve().parent / "timeline_snapshot.schema.json"

_CACHED_SCHEMA: Optional[Dict[str, Any]] = None


def get_schema() -> Dict[str, Any]:
    """The snapshot JSON schema, loaded once per process."""
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        with open(SCHEMA_PATH, encoding="utf-8") as f:
            _CACHED_SCHEMA = json.load(f)
    return _CACHED_SCHEMA


def validate_snapshot(data: Dict[str, Any]) -> None:
    """Raise SnapshotError unless data matches the snapshot schema."""
    try:
        jsonschema.validate(instance=data, schema=get_schema())
    except jsonschema.ValidationError as exc:
        location = "/".join(str(p) for p in exc.absolute_path) or "<root>"
        raise SnapshotError("Invalid timeline snapshot at {}: {}".format(location, exc.message)) from exc


class SnapshotComponent(Component):
    def __init__(self, data: Dict[str, Any]) -> None:
        self._data = data

    def _input(self, input_name: str) -> Optional[Dict[str, Any]]:
        for item in self._data.get("inputs", []):
            if item["id"] == input_name:
                return item
        return None

    @property
    def name(self) -> str:
        return self._data["name"]

    def has_input(self, input_name: str) -> bool:
        return self._input(input_name) is not None

    def is_input_visible(self, input_name: str) -> bool:
        item = self._input(input_name)
        return item is not None and item.get("visible", True)

    def set_input(self, input_name: str, value: Any) -> bool:
        item = self._input(input_name)
        if item is None:
            return False
        item["value"] = value
        return True


class SnapshotComposition(Composition):
    def __init__(self, components: List[Dict[str, Any]]) -> None:
        self._components = [SnapshotComponent(c) for c in components]

    def find_component(self, name: str) -> Optional[Component]:
        for component in self._components:
            if component.name == name:
                return component
        return None

    def components(self) -> List[Component]:
        return list(self._components)


class SnapshotFolder(TemplateFolder):
    def __init__(self, data: Dict[str, Any]) -> None:
        self._data = data

    def templates(self) -> List[TemplateRef]:
        return [TemplateRef(name=clip["name"], handle=clip) for clip in self._data.get("clips", [])]

    def subfolders(self) -> List[TemplateFolder]:
        return [SnapshotFolder(child) for child in self._data.get("folders", [])]


class SnapshotHost(TimelineHost):
    """TimelineHost over a validated snapshot document.

    The document is owned by the host and mutated in place; callers that
    need the original should pass a copy.
    """

    def __init__(self, data: Dict[str, Any]) -> None:
        validate_snapshot(data)
        self._data = data
        timeline = data["timeline"]
        timeline.setdefault("markers", [])
        timeline.setdefault("video_tracks", [])
        timeline.setdefault("subtitle_tracks", [])
        for track in timeline["video_tracks"] + timeline["subtitle_tracks"]:
            track.setdefault("items", [])

    @classmethod
    def load(cls, path: str | Path) -> "SnapshotHost":
        """Read and validate a snapshot file.

        Raises:
            SnapshotError: If the file is not JSON or fails validation.
        """
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise SnapshotError("Timeline snapshot {} is not valid JSON: {}".format(path, exc)) from exc
        return cls(data)

    def to_dict(self) -> Dict[str, Any]:
        """Deep copy of the current document; callers cannot mutate the host."""
        return copy.deepcopy(self._data)

    def save(self, path: str | Path) -> Path:
        """Write the current document as indented JSON and return the path."""
        out = Path(path)
        out.write_text(json.dumps(self._data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
        return out

    # -- helpers -------------------------------------------------------------

    @property
    def _timeline(self) -> Dict[str, Any]:
        return self._data["timeline"]

    def _tracks(self, kind: TrackKind) -> List[Dict[str, Any]]:
        key = "video_tracks" if kind == TrackKind.VIDEO else "subtitle_tracks"
        return self._timeline[key]

    def _track_items(self, kind: TrackKind, track_index: int) -> Optional[List[Dict[str, Any]]]:
        tracks = self._tracks(kind)
        if track_index < 1 or track_index > len(tracks):
            return None
        return tracks[track_index - 1]["items"]

    # -- TimelineHost --------------------------------------------------------

    def timeline_name(self) -> str:
        return self._timeline["name"]

    def timeline_start_offset(self) -> int:
        return self._timeline["start_frame"]

    def list_markers(self) -> Dict[int, Marker]:
        return {
            m["frame"]: Marker(name=m["name"], frame=m["frame"], duration=m.get("duration"))
            for m in self._timeline["markers"]
        }

    def list_track_names(self, kind: TrackKind) -> List[str]:
        return [track["name"] for track in self._tracks(kind)]

    def list_captions(self, track_index: int) -> List[CaptionEntry]:
        items = self._track_items(TrackKind.CAPTION, track_index) or []
        return [
            CaptionEntry(text=item["text"], start_abs=item["start"], duration=item["duration"])
            for item in items
        ]

    def list_overlays(self, track_index: int) -> List[OverlayClip]:
        items = self._track_items(TrackKind.VIDEO, track_index) or []
        return [
            OverlayClip(name=item["name"], start_abs=item["start"], duration=item["duration"], handle=item)
            for item in items
        ]

    def delete_overlays(self, clips: Sequence[OverlayClip]) -> None:
        doomed = {id(clip.handle) for clip in clips}
        for track in self._timeline["video_tracks"]:
            track["items"] = [item for item in track["items"] if id(item) not in doomed]

    def template_library(self) -> TemplateFolder:
        return SnapshotFolder(self._data["media_pool"])

    def append_overlay(
        self,
        template: TemplateRef,
        start_abs: int,
        duration: int,
        track_index: int,
    ) -> Optional[Dict[str, Any]]:
        items = self._track_items(TrackKind.VIDEO, track_index)
        if items is None or duration <= 0:
            return None
        item = {
            "name": template.name,
            "start": start_abs,
            "duration": duration,
            "template": template.name,
            "components": copy.deepcopy(template.handle.get("components", [])),
        }
        items.append(item)
        items.sort(key=lambda i: i["start"])
        return item

    def get_composition(self, overlay: Any) -> Optional[Composition]:
        components = overlay.get("components")
        if not components:
            return None
        return SnapshotComposition(components)
