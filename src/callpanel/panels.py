"""Insight panel collection."""

from __future__ import annotations

import itertools
import logging
from typing import Iterable, List, Optional, Union

from .config import PanelConfig
from .models import Gesture, GestureKind, InsightPanel, PanelType, Point

logger = logging.getLogger("callpanel")


class PanelCollectionManager:
    """Ordered, bounded set of insight panels.

    Every operation is total: unknown ids, unknown or duplicate types and a
    full collection are no-ops rather than errors.
    """

    def __init__(
        self,
        config: Optional[PanelConfig] = None,
        initial: Optional[Iterable[Union[PanelType, str]]] = None,
    ) -> None:
        self.config = config or PanelConfig()
        self._panels: List[InsightPanel] = []
        self._ids = itertools.count(1)
        self._gesture: Optional[Gesture] = None
        for panel_type in self.config.initial if initial is None else initial:
            self.add_panel(panel_type)

    @property
    def panels(self) -> List[InsightPanel]:
        return list(self._panels)

    @property
    def panel_ids(self) -> List[str]:
        return [panel.id for panel in self._panels]

    @property
    def is_full(self) -> bool:
        return len(self._panels) >= self.config.max_panels

    @property
    def gesture(self) -> Optional[Gesture]:
        return self._gesture

    def get(self, panel_id: str) -> Optional[InsightPanel]:
        for panel in self._panels:
            if panel.id == panel_id:
                return panel
        return None

    def available_types(self) -> List[PanelType]:
        if self.is_full:
            return []
        used = {panel.type for panel in self._panels}
        return [panel_type for panel_type in PanelType if panel_type not in used]

    def add_panel(self, panel_type: Union[PanelType, str]) -> Optional[InsightPanel]:
        parsed = PanelType.parse(panel_type)
        if parsed is None:
            logger.debug("Unknown panel type ignored: %s", panel_type)
            return None
        if self.is_full or any(panel.type is parsed for panel in self._panels):
            logger.debug("Add panel ignored: %s", parsed.value)
            return None
        panel = InsightPanel(
            id=f"{parsed.value}-{next(self._ids)}",
            type=parsed,
            height=max(self.config.min_height, self.config.default_height),
        )
        self._panels.append(panel)
        logger.info("Add panel %s", panel.id)
        return panel

    def remove_panel(self, panel_id: str) -> bool:
        panel = self.get(panel_id)
        if panel is None:
            return False
        self._panels.remove(panel)
        if self._gesture is not None and self._gesture.target == panel_id:
            self._gesture = None
        logger.info("Remove panel %s", panel_id)
        return True

    def toggle_collapse(self, panel_id: str) -> bool:
        panel = self.get(panel_id)
        if panel is None:
            return False
        panel.collapsed = not panel.collapsed
        return True

    def resize_panel(self, panel_id: str, new_height: float) -> bool:
        panel = self.get(panel_id)
        if panel is None or panel.collapsed:
            return False
        panel.height = max(self.config.min_height, new_height)
        return True

    def begin_resize(self, panel_id: str, pointer: Point) -> Optional[Gesture]:
        panel = self.get(panel_id)
        if panel is None or panel.collapsed or self._gesture is not None:
            return None
        self._gesture = Gesture(GestureKind.PANEL_RESIZE, pointer, panel.height, panel_id)
        logger.debug("Panel resize %s from %s", panel_id, pointer)
        return self._gesture

    def on_pointer_move(self, pointer: Point) -> None:
        gesture = self._gesture
        if gesture is None or gesture.target is None:
            return
        delta = pointer.y - gesture.origin_pointer.y
        self.resize_panel(gesture.target, gesture.origin_geometry + delta)

    def end_gesture(self) -> None:
        self._gesture = None
