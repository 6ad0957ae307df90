"""Abstract timeline host and composition interfaces.

WHY: The engine must run against a live DaVinci Resolve session and
against an offline JSON snapshot (dry runs, tests). Both expose the same
narrow set of timeline operations; these base classes pin that contract
down so the core never touches a host object directly.

HOW: TimelineHost is an ABC listing every operation the engine drives.
TemplateFolder models one node of the template library tree so the
recursive lookup can live in the core. Composition and Component model a
placed overlay's Fusion graph for the text attribute search.

RULES:
- Track indices are 1-based and follow the host's own track order
- Markers are keyed by their relative frame
- append_overlay() returns None on failure; it never raises for a
  rejected placement
- delete_overlays() receives every clip of one region in a single call

To add a new host:
1. Create a new module in hosts/
2. Subclass TimelineHost (and Composition/Component/TemplateFolder)
3. Implement every abstract method
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence

from overlay_sync.core.models import (
    CaptionEntry,
    Marker,
    OverlayClip,
    TemplateRef,
    TrackKind,
)


class Component(ABC):
    """One node (tool) of an overlay's composition graph."""

    @property
    @abstractmethod
    def name(self) -> str:
        """The component's name inside its composition, e.g. 'Template'."""

    @abstractmethod
    def has_input(self, input_name: str) -> bool:
        """Whether the component exposes an input with this id."""

    @abstractmethod
    def is_input_visible(self, input_name: str) -> bool:
        """Whether the input is shown to the user (authoring-time hint)."""

    @abstractmethod
    def set_input(self, input_name: str, value: Any) -> bool:
        """Write a value into the input. Returns False when the write failed."""


class Composition(ABC):
    """The composition graph carried by a placed overlay."""

    @abstractmethod
    def find_component(self, name: str) -> Optional[Component]:
        """Look up a component by exact name, or None."""

    @abstractmethod
    def components(self) -> List[Component]:
        """All components in the graph, in the host's stable order."""


class TemplateFolder(ABC):
    """One folder of the template library."""

    @abstractmethod
    def templates(self) -> List[TemplateRef]:
        """Template clips directly inside this folder, in host order."""

    @abstractmethod
    def subfolders(self) -> List["TemplateFolder"]:
        """Child folders, in host order."""


class TimelineHost(ABC):
    """The timeline and media library the engine reads and mutates.

    Implementations bind to one open timeline for their whole lifetime.
    """

    @abstractmethod
    def timeline_name(self) -> str:
        """Display name of the bound timeline."""

    @abstractmethod
    def timeline_start_offset(self) -> int:
        """Absolute frame at which the timeline starts."""

    @abstractmethod
    def list_markers(self) -> Dict[int, Marker]:
        """All timeline markers keyed by relative frame."""

    @abstractmethod
    def list_track_names(self, kind: TrackKind) -> List[str]:
        """Track names of one kind; position i holds track index i + 1."""

    @abstractmethod
    def list_captions(self, track_index: int) -> List[CaptionEntry]:
        """Caption items on a subtitle track, in track order."""

    @abstractmethod
    def list_overlays(self, track_index: int) -> List[OverlayClip]:
        """Clips on a video track, in track order."""

    @abstractmethod
    def delete_overlays(self, clips: Sequence[OverlayClip]) -> None:
        """Delete the given clips from the timeline as one batch."""

    @abstractmethod
    def template_library(self) -> TemplateFolder:
        """Root folder of the template library."""

    @abstractmethod
    def append_overlay(
        self,
        template: TemplateRef,
        start_abs: int,
        duration: int,
        track_index: int,
    ) -> Optional[Any]:
        """Place a template instance; returns the overlay handle or None."""

    @abstractmethod
    def get_composition(self, overlay: Any) -> Optional[Composition]:
        """The composition graph of a placed overlay, or None."""
