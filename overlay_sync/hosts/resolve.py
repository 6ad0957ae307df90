"""DaVinci Resolve scripting binding of the timeline host.

WHY: The engine's real target is the current timeline of a running
DaVinci Resolve. This module maps the narrow host interface onto the
Resolve and Fusion scripting objects so the core never touches them.

HOW: connect_resolve() imports DaVinciResolveScript (adding the standard
install location to sys.path when needed) and returns the app handle.
ResolveHost.from_resolve() binds to the current project and timeline.
Fusion tools and compositions are wrapped in Component/Composition
adapters; media pool folders in TemplateFolder adapters.

RULES:
- No open project or timeline → HostUnavailableError (the fatal case)
- Track type strings are "video" and "subtitle"
- Overlays are appended with startFrame=0, endFrame=duration,
  recordFrame=<absolute start>, mediaType=1 (video only)
- The composition of a placed overlay is Fusion comp index 1
- Fusion tool lists are dicts keyed 1..n; they are walked in key order
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any, Dict, List, Optional, Sequence

from overlay_sync.core.models import (
    CaptionEntry,
    Marker,
    OverlayClip,
    TemplateRef,
    TrackKind,
)
from overlay_sync.errors import HostUnavailableError
from overlay_sync.hosts.base import Component, Composition, TemplateFolder, TimelineHost

logger = logging.getLogger(__name__)

_SCRIPT_MODULE_DIRS: Dict[str, str] = {
    "darwin": "/Library/Application Support/Blackmagic Design/DaVinci Resolve/Developer/Scripting/Modules",
    "win32": os.path.join(
        os.getenv("PROGRAMDATA", r"C:\ProgramData"),
        "Blackmagic Design", "DaVinci Resolve", "Support", "Developer", "Scripting", "Modules",
    ),
    "linux": "/opt/resolve/Developer/Scripting/Modules",
}


def _script_module_dirs() -> List[str]:
    dirs: List[str] = []
    api_dir = os.getenv("RESOLVE_SCRIPT_API")
    if api_dir:
        dirs.append(os.path.join(api_dir, "Modules"))
    platform_dir = _SCRIPT_MODULE_DIRS.get(sys.platform)
    if platform_dir:
        dirs.append(platform_dir)
    return dirs


def connect_resolve() -> Any:
    """Return the Resolve scripting app handle.

    Raises:
        HostUnavailableError: DaVinciResolveScript cannot be imported or
            Resolve is not running.
    """
    for path in _script_module_dirs():
        if os.path.isdir(path) and path not in sys.path:
            sys.path.append(path)

    try:
        import DaVinciResolveScript as dvr_script  # type: ignore
    except ImportError as exc:
        raise HostUnavailableError(
            "Could not import DaVinciResolveScript. Make sure DaVinci Resolve is "
            "installed and its Scripting/Modules directory is on PYTHONPATH "
            "(or set RESOLVE_SCRIPT_API)."
        ) from exc

    resolve = dvr_script.scriptapp("Resolve")
    if resolve is None:
        raise HostUnavailableError("DaVinci Resolve is not running.")
    return resolve


# ---------------------------------------------------------------------------
# Fusion adapters
# ---------------------------------------------------------------------------


class ResolveComponent(Component):
    """A Fusion tool inside an overlay's composition."""

    def __init__(self, tool: Any) -> None:
        self._tool = tool
        self._name = (tool.GetAttrs() or {}).get("TOOLS_Name", "")
        self._inputs: Optional[Dict[str, Any]] = None

    def _input_map(self) -> Dict[str, Any]:
        if self._inputs is None:
            self._inputs = {}
            for inp in (self._tool.GetInputList() or {}).values():
                attrs = inp.GetAttrs() or {}
                input_id = attrs.get("INPS_ID")
                if input_id:
                    self._inputs[input_id] = attrs
        return self._inputs

    @property
    def name(self) -> str:
        return self._name

    def has_input(self, input_name: str) -> bool:
        return input_name in self._input_map()

    def is_input_visible(self, input_name: str) -> bool:
        attrs = self._input_map().get(input_name)
        return attrs is not None and bool(attrs.get("INPB_IC_Visible", True))

    def set_input(self, input_name: str, value: Any) -> bool:
        # Fusion's SetInput returns None on success
        result = self._tool.SetInput(input_name, value)
        return result is not False


class ResolveComposition(Composition):
    """Fusion composition of a placed overlay.

    RULES:
    - find_component() is FindTool by tool name
    - components() walks GetToolList(False) in key order, which is the
      order the graph was built in
    """

    def __init__(self, comp: Any) -> None:
        self._comp = comp

    def find_component(self, name: str) -> Optional[Component]:
        tool = self._comp.FindTool(name)
        return ResolveComponent(tool) if tool else None

    def components(self) -> List[Component]:
        tools = self._comp.GetToolList(False) or {}
        return [ResolveComponent(tools[key]) for key in sorted(tools)]


class ResolveFolder(TemplateFolder):
    """Media pool folder; its clips are candidate templates."""

    def __init__(self, folder: Any) -> None:
        self._folder = folder

    def templates(self) -> List[TemplateRef]:
        return [TemplateRef(name=clip.GetName(), handle=clip) for clip in (self._folder.GetClipList() or [])]

    def subfolders(self) -> List[TemplateFolder]:
        return [ResolveFolder(sub) for sub in (self._folder.GetSubFolderList() or [])]


# ---------------------------------------------------------------------------
# Host
# ---------------------------------------------------------------------------


class ResolveHost(TimelineHost):
    """TimelineHost bound to one Resolve timeline and its media pool."""

    def __init__(self, timeline: Any, media_pool: Any) -> None:
        self.timeline = timeline
        self.media_pool = media_pool

    @classmethod
    def from_resolve(cls, resolve: Any = None) -> "ResolveHost":
        """Bind to the current project's current timeline.

        Args:
            resolve: An existing app handle (e.g. the console's ``resolve``
                global); connects through DaVinciResolveScript when None.

        Raises:
            HostUnavailableError: No project or no timeline is open.
        """
        if resolve is None:
            resolve = connect_resolve()
        project = resolve.GetProjectManager().GetCurrentProject()
        if not project:
            raise HostUnavailableError("No project is open.")
        timeline = project.GetCurrentTimeline()
        if not timeline:
            raise HostUnavailableError("No timeline is open.")
        return cls(timeline, project.GetMediaPool())

    def timeline_name(self) -> str:
        return self.timeline.GetName()

    def timeline_start_offset(self) -> int:
        return int(self.timeline.GetStartFrame())

    def list_markers(self) -> Dict[int, Marker]:
        markers: Dict[int, Marker] = {}
        for frame, info in (self.timeline.GetMarkers() or {}).items():
            duration = info.get("duration")
            markers[int(frame)] = Marker(
                name=info.get("name", ""),
                frame=int(frame),
                duration=int(duration) if duration is not None else None,
            )
        return markers

    def list_track_names(self, kind: TrackKind) -> List[str]:
        count = int(self.timeline.GetTrackCount(kind.value) or 0)
        return [self.timeline.GetTrackName(kind.value, i) for i in range(1, count + 1)]

    def list_captions(self, track_index: int) -> List[CaptionEntry]:
        items = self.timeline.GetItemListInTrack(TrackKind.CAPTION.value, track_index) or []
        return [
            CaptionEntry(text=item.GetName(), start_abs=int(item.GetStart()), duration=int(item.GetDuration()))
            for item in items
        ]

    def list_overlays(self, track_index: int) -> List[OverlayClip]:
        items = self.timeline.GetItemListInTrack(TrackKind.VIDEO.value, track_index) or []
        return [
            OverlayClip(
                name=item.GetName(),
                start_abs=int(item.GetStart()),
                duration=int(item.GetDuration()),
                handle=item,
            )
            for item in items
        ]

    def delete_overlays(self, clips: Sequence[OverlayClip]) -> None:
        if not self.timeline.DeleteClips([clip.handle for clip in clips]):
            logger.warning("Resolve reported a failure deleting %d clip(s)", len(clips))

    def template_library(self) -> TemplateFolder:
        return ResolveFolder(self.media_pool.GetRootFolder())

    def append_overlay(
        self,
        template: TemplateRef,
        start_abs: int,
        duration: int,
        track_index: int,
    ) -> Optional[Any]:
        items = self.media_pool.AppendToTimeline([{
            "mediaPoolItem": template.handle,
            "startFrame": 0,
            "endFrame": duration,
            "recordFrame": start_abs,
            "trackIndex": track_index,
            "mediaType": 1,
        }])
        return items[0] if items else None

    def get_composition(self, overlay: Any) -> Optional[Composition]:
        comp = overlay.GetFusionCompByIndex(1)
        if not comp:
            logger.debug("Overlay %s has no Fusion composition", overlay.GetName())
            return None
        return ResolveComposition(comp)
