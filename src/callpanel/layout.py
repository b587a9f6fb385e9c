"""Panel arrangement and the transcript/insight splitter."""

from __future__ import annotations

import logging
import math
from typing import Optional, Sequence, Union

from .config import LayoutConfig
from .geometry import clamp_between
from .models import Gesture, GestureKind, LayoutArrangement, Point

logger = logging.getLogger("callpanel")

FULL_SHARE = 1.0
SINGLE_PANEL_SHARE = 0.5
MULTI_PANEL_SHARE = 1.0 / 3.0


def compute_arrangement(panels: Union[int, Sequence[str]]) -> LayoutArrangement:
    """Map the panel count to the transcript share and column split.

    ``panels`` is either a count (columns then hold positional indices as
    strings) or the ordered panel ids. One or two panels stack in a single
    column; three or more split into two with the first ``ceil(n / 2)`` in
    the left column.
    """
    if isinstance(panels, int):
        if panels < 0:
            raise ValueError(f"panel count must be >= 0, got {panels}")
        ids = tuple(str(index) for index in range(panels))
    else:
        ids = tuple(panels)
    count = len(ids)

    if count == 0:
        return LayoutArrangement(FULL_SHARE, 0, ())
    if count == 1:
        return LayoutArrangement(SINGLE_PANEL_SHARE, 1, (ids,))
    if count == 2:
        return LayoutArrangement(MULTI_PANEL_SHARE, 1, (ids,))
    split = math.ceil(count / 2)
    return LayoutArrangement(MULTI_PANEL_SHARE, 2, (ids[:split], ids[split:]))


class SplitterState:
    """User override of the transcript width share.

    Unset until the first splitter drag; after that it wins over the
    arrangement's default share until the dialog is discarded.
    """

    def __init__(self, config: Optional[LayoutConfig] = None) -> None:
        self.config = config or LayoutConfig()
        self.override_share: Optional[float] = None
        self._gesture: Optional[Gesture] = None
        self._content_width = 0.0

    @property
    def gesture(self) -> Optional[Gesture]:
        return self._gesture

    def bounds(self, content_width: float) -> tuple[float, float]:
        low = self.config.transcript_min_width
        high = content_width - self.config.insights_min_width
        return low, high

    def effective_share(
        self, arrangement: LayoutArrangement, content_width: Optional[float] = None
    ) -> float:
        if arrangement.column_count == 0:
            return FULL_SHARE
        if self.override_share is None:
            return arrangement.transcript_width_share
        if not content_width:
            return self.override_share
        # Only a dragged width is held to the region minimums.
        low, high = self.bounds(content_width)
        return clamp_between(self.override_share * content_width, low, high) / content_width

    def begin(self, pointer: Point, content_width: float, current_share: float) -> Optional[Gesture]:
        if self._gesture is not None or content_width <= 0:
            return None
        self._content_width = content_width
        self._gesture = Gesture(
            GestureKind.SPLITTER, pointer, current_share * content_width
        )
        logger.debug("Splitter drag from %s", pointer)
        return self._gesture

    def on_pointer_move(self, pointer: Point) -> None:
        gesture = self._gesture
        if gesture is None:
            return
        low, high = self.bounds(self._content_width)
        width = clamp_between(
            gesture.origin_geometry + (pointer.x - gesture.origin_pointer.x), low, high
        )
        self.override_share = width / self._content_width

    def end_gesture(self) -> None:
        if self._gesture is not None and self.override_share is not None:
            logger.debug("Splitter share set to %.3f", self.override_share)
        self._gesture = None
