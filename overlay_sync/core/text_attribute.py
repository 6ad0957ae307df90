"""Finding and writing the text input of a freshly placed overlay.

WHY: A Text+ title normally keeps its text in the ``StyledText`` input of
a tool named ``Template``, but user-built templates rename tools, nest
several text tools, or use a plainer ``Text`` input. The engine has to
find *some* text input reliably without guessing wildly.

HOW: An ordered tuple of strategies is evaluated with early exit:
  BY_CANONICAL_NAME     : the component named "Template", if it has a
                          text input
  BY_ATTRIBUTE_PRESENCE : the first component, in graph order, exposing a
                          text input; hidden inputs optionally skipped
  UNRESOLVED            : nothing found; the caller reports a soft error
Within one component the richer attribute name wins over the plainer one.

RULES:
- Attribute preference follows SyncSettings.attribute_names order
- Resolution never raises; host errors while probing a component only
  disqualify that component
- A failed write is reported exactly like an unresolved attribute
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple

from overlay_sync.config import CANONICAL_COMPONENT_NAME, TEXT_ATTRIBUTE_NAMES
from overlay_sync.hosts.base import Component, Composition

logger = logging.getLogger(__name__)


class ResolutionStrategy(str, enum.Enum):
    """Which tier located the text attribute."""

    BY_CANONICAL_NAME = "by_canonical_name"
    BY_ATTRIBUTE_PRESENCE = "by_attribute_presence"
    UNRESOLVED = "unresolved"


@dataclass
class TextTarget:
    """The component/attribute pair that will receive caption text."""

    strategy: ResolutionStrategy
    component: Optional[Component] = None
    attribute: Optional[str] = None

    @property
    def resolved(self) -> bool:
        return self.strategy != ResolutionStrategy.UNRESOLVED


UNRESOLVED = TextTarget(ResolutionStrategy.UNRESOLVED)


class TextAttributeResolver:
    """Tiered search for the text input of an overlay's composition.

    Each tier is a method taking a Composition and returning a TextTarget
    or None; they run in the order listed in ``self.strategies``.
    """

    def __init__(
        self,
        canonical_name: str = CANONICAL_COMPONENT_NAME,
        attribute_names: Sequence[str] = TEXT_ATTRIBUTE_NAMES,
        skip_hidden: bool = True,
    ) -> None:
        self.canonical_name = canonical_name
        self.attribute_names = tuple(attribute_names)
        self.skip_hidden = skip_hidden
        self.strategies: Tuple[Callable[[Composition], Optional[TextTarget]], ...] = (
            self._by_canonical_name,
            self._by_attribute_presence,
        )

    def _preferred_attribute(self, component: Component, check_visibility: bool) -> Optional[str]:
        for attribute in self.attribute_names:
            try:
                if not component.has_input(attribute):
                    continue
                if check_visibility and not component.is_input_visible(attribute):
                    logger.debug(
                        "Skipping hidden input %s on %s", attribute, component.name
                    )
                    continue
            except Exception:
                logger.debug("Could not inspect component for %s", attribute, exc_info=True)
                return None
            return attribute
        return None

    def _by_canonical_name(self, comp: Composition) -> Optional[TextTarget]:
        try:
            component = comp.find_component(self.canonical_name)
        except Exception:
            logger.debug("Canonical lookup of %s failed", self.canonical_name, exc_info=True)
            return None
        if component is None:
            return None
        attribute = self._preferred_attribute(component, check_visibility=False)
        if attribute is None:
            return None
        return TextTarget(ResolutionStrategy.BY_CANONICAL_NAME, component, attribute)

    def _by_attribute_presence(self, comp: Composition) -> Optional[TextTarget]:
        try:
            components = comp.components()
        except Exception:
            logger.debug("Listing composition components failed", exc_info=True)
            return None
        for component in components:
            attribute = self._preferred_attribute(component, check_visibility=self.skip_hidden)
            if attribute is not None:
                return TextTarget(ResolutionStrategy.BY_ATTRIBUTE_PRESENCE, component, attribute)
        return None

    def resolve(self, comp: Optional[Composition]) -> TextTarget:
        """Run the strategies in order; UNRESOLVED when all yield nothing."""
        if comp is None:
            return UNRESOLVED
        for strategy in self.strategies:
            target = strategy(comp)
            if target is not None:
                logger.debug(
                    "Text attribute %s on %s (%s)",
                    target.attribute,
                    target.component.name,
                    target.strategy.value,
                )
                return target
        return UNRESOLVED

    def set_text(self, comp: Optional[Composition], text: str) -> TextTarget:
        """Resolve the text attribute and write text into it.

        Returns:
            The TextTarget used, or UNRESOLVED when no attribute was found
            or the write failed.
        """
        target = self.resolve(comp)
        if not target.resolved:
            return UNRESOLVED
        try:
            written = target.component.set_input(target.attribute, text)
        except Exception:
            logger.debug("Writing %s failed", target.attribute, exc_info=True)
            written = False
        return target if written else UNRESOLVED

    def resolve_and_set(self, comp: Optional[Composition], text: str) -> bool:
        """True when the text was written into the overlay."""
        return self.set_text(comp, text).resolved
