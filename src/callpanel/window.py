"""Window mode, position and size."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from .config import WindowConfig
from .geometry import (
    anchor_offset,
    drag_delta,
    maximized_geometry,
    minimized_geometry,
    resize_delta,
)
from .models import Gesture, GestureKind, Point, Size, WindowGeometry, WindowMode

logger = logging.getLogger("callpanel")


class WindowController:
    """Owns the dialog's mode and its retained normal-mode geometry.

    ``geometry`` is the effective rectangle for the current mode;
    ``normal_geometry`` is only ever replaced by drag/resize gestures, so
    minimize/maximize followed by restore returns the exact same value.
    """

    def __init__(
        self,
        initial_position: Point = Point(100, 100),
        config: Optional[WindowConfig] = None,
        on_close: Optional[Callable[[], None]] = None,
        close_blocked: Optional[Callable[[], bool]] = None,
    ) -> None:
        self.config = config or WindowConfig()
        self.mode = WindowMode.NORMAL
        self.viewport = Size(self.config.viewport_width, self.config.viewport_height)
        self._normal = WindowGeometry(
            initial_position.x,
            initial_position.y,
            max(self.config.width, self.config.min_width),
            max(self.config.height, self.config.min_height),
        )
        self._on_close = on_close
        self._close_blocked = close_blocked or (lambda: False)
        self._gesture: Optional[Gesture] = None
        self._anchor: Optional[Point] = None

    @property
    def normal_geometry(self) -> WindowGeometry:
        return self._normal

    @property
    def geometry(self) -> WindowGeometry:
        if self.mode is WindowMode.MINIMIZED:
            return minimized_geometry(
                self.viewport,
                self.config.minimized_width,
                self.config.minimized_height,
                self.config.minimized_margin,
            )
        if self.mode is WindowMode.MAXIMIZED:
            return maximized_geometry(self.viewport)
        return self._normal

    @property
    def gesture(self) -> Optional[Gesture]:
        return self._gesture

    @property
    def is_dragging(self) -> bool:
        return self._gesture is not None and self._gesture.kind is GestureKind.WINDOW_DRAG

    @property
    def is_resizing(self) -> bool:
        return self._gesture is not None and self._gesture.kind is GestureKind.WINDOW_RESIZE

    def set_viewport(self, viewport: Size) -> None:
        self.viewport = viewport

    def begin_drag(self, pointer: Point) -> Optional[Gesture]:
        if self.mode is not WindowMode.NORMAL or self._gesture is not None:
            return None
        self._anchor = anchor_offset(pointer, self._normal.position)
        self._gesture = Gesture(GestureKind.WINDOW_DRAG, pointer, self._normal)
        logger.debug("Window drag from %s", pointer)
        return self._gesture

    def begin_resize(self, pointer: Point) -> Optional[Gesture]:
        if self.mode is not WindowMode.NORMAL or self._gesture is not None:
            return None
        self._gesture = Gesture(GestureKind.WINDOW_RESIZE, pointer, self._normal)
        logger.debug("Window resize from %s", pointer)
        return self._gesture

    def on_pointer_move(self, pointer: Point) -> None:
        gesture = self._gesture
        if gesture is None:
            return
        origin = gesture.origin_geometry
        if gesture.kind is GestureKind.WINDOW_DRAG and self._anchor is not None:
            position = drag_delta(gesture.origin_pointer, pointer, self._anchor)
            self._normal = self._normal.moved_to(position)
        elif gesture.kind is GestureKind.WINDOW_RESIZE:
            size = resize_delta(
                gesture.origin_pointer,
                pointer,
                origin.size,
                self.config.min_width,
                self.config.min_height,
            )
            self._normal = self._normal.resized_to(size)

    def end_gesture(self) -> None:
        if self._gesture is not None:
            logger.debug("Window %s ended at %s", self._gesture.kind.value, self._normal)
        self._gesture = None
        self._anchor = None

    def minimize(self) -> None:
        self.end_gesture()
        if self.mode is not WindowMode.MINIMIZED:
            logger.info("Minimize window")
        self.mode = WindowMode.MINIMIZED

    def maximize(self) -> None:
        self.end_gesture()
        if self.mode is WindowMode.MAXIMIZED:
            self.mode = WindowMode.NORMAL
            logger.info("Restore window from maximized")
        else:
            self.mode = WindowMode.MAXIMIZED
            logger.info("Maximize window")

    def restore(self) -> None:
        self.end_gesture()
        if self.mode is not WindowMode.NORMAL:
            logger.info("Restore window")
        self.mode = WindowMode.NORMAL

    def request_close(self) -> bool:
        if self._close_blocked():
            logger.info("Close rejected: call is active")
            return False
        self.end_gesture()
        logger.info("Close dialog")
        if self._on_close is not None:
            self._on_close()
        return True
