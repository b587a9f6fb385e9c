"""Dialog composition and pointer routing."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Protocol, Tuple

from .call import CallController
from .config import Config
from .feed import MockFeed
from .layout import SplitterState, compute_arrangement
from .models import (
    CallState,
    Gesture,
    LayoutArrangement,
    Point,
    WindowGeometry,
    WindowMode,
)
from .panels import PanelCollectionManager
from .scheduler import ManualScheduler, Scheduler
from .window import WindowController

logger = logging.getLogger("callpanel")

TITLE_BUTTON_SIZE = 24
TITLE_BUTTON_PAD = 8


class GestureOwner(Protocol):
    def on_pointer_move(self, pointer: Point) -> None: ...

    def end_gesture(self) -> None: ...

    @property
    def gesture(self) -> Optional[Gesture]: ...


class HitRegion(Enum):
    NONE = "none"
    TITLE_BAR = "title_bar"
    MINIMIZE_BUTTON = "minimize_button"
    MAXIMIZE_BUTTON = "maximize_button"
    CLOSE_BUTTON = "close_button"
    MINIMIZED_BAR = "minimized_bar"
    RESIZE_HANDLE = "resize_handle"
    SPLITTER = "splitter"
    PANEL_EDGE = "panel_edge"
    CONTENT = "content"


@dataclass(frozen=True)
class Hit:
    region: HitRegion
    target: Optional[str] = None


@dataclass(frozen=True)
class PanelSlot:
    panel_id: str
    column: int
    bounds: WindowGeometry


class DialogShell:
    """The single call dialog, as seen by its host page.

    Controllers are created on open and discarded on close. Exactly one
    gesture owner is active at a time; pointer-downs while a gesture runs
    are ignored, and move/up events go only to the owner that began it.
    """

    def __init__(
        self,
        open: bool = True,
        on_close: Optional[Callable[[], None]] = None,
        initial_position: Point = Point(100, 100),
        config: Optional[Config] = None,
        scheduler: Optional[Scheduler] = None,
        feed_factory: Optional[Callable[[], MockFeed]] = None,
    ) -> None:
        if scheduler is None:
            scheduler = ManualScheduler()
        self.config = config or Config()
        self.scheduler = scheduler
        self.initial_position = initial_position
        self._host_on_close = on_close
        self._feed_factory = feed_factory or (
            lambda: MockFeed(seed=self.config.call.feed_seed)
        )
        self.is_open = False
        self.window: Optional[WindowController] = None
        self.call: Optional[CallController] = None
        self.panels: Optional[PanelCollectionManager] = None
        self.splitter: Optional[SplitterState] = None
        self.feed: Optional[MockFeed] = None
        self._active: Optional[Tuple[Gesture, GestureOwner]] = None
        if open:
            self.open()

    def open(self) -> None:
        if self.is_open:
            return
        self.feed = self._feed_factory()
        self.call = CallController(self.scheduler, self.feed, self.config.call)
        self.window = WindowController(
            initial_position=self.initial_position,
            config=self.config.window,
            on_close=self._handle_close,
            close_blocked=lambda: self.call is not None
            and self.call.state is CallState.ACTIVE,
        )
        self.panels = PanelCollectionManager(self.config.panels)
        self.splitter = SplitterState(self.config.layout)
        self._active = None
        self.is_open = True
        logger.info("Dialog opened at %s", self.initial_position)

    def close(self) -> bool:
        if not self.is_open or self.window is None:
            return False
        return self.window.request_close()

    def _handle_close(self) -> None:
        self._cancel_gesture()
        if self.call is not None:
            self.call.teardown()
        self.window = None
        self.call = None
        self.panels = None
        self.splitter = None
        self.feed = None
        self.is_open = False
        if self._host_on_close is not None:
            self._host_on_close()

    @property
    def active_gesture(self) -> Optional[Gesture]:
        self._drop_abandoned_gesture()
        return self._active[0] if self._active else None

    @property
    def arrangement(self) -> LayoutArrangement:
        ids = self.panels.panel_ids if self.panels is not None else []
        return compute_arrangement(ids)

    def _content_bounds(self) -> WindowGeometry:
        geom = self.window.geometry
        top = self.config.window.title_bar_height + self.config.window.controls_height
        return WindowGeometry(geom.x, geom.y + top, geom.width, max(0, geom.height - top))

    def transcript_share(self) -> float:
        content = self._content_bounds()
        return self.splitter.effective_share(self.arrangement, content.width)

    def panel_slots(self) -> List[PanelSlot]:
        arrangement = self.arrangement
        if arrangement.column_count == 0:
            return []
        content = self._content_bounds()
        transcript_width = self.transcript_share() * content.width
        region_x = content.x + transcript_width
        column_width = (content.width - transcript_width) / arrangement.column_count
        gap = self.config.layout.panel_gap
        slots: List[PanelSlot] = []
        for column_index, column in enumerate(arrangement.columns):
            top = content.y + gap
            for panel_id in column:
                panel = self.panels.get(panel_id)
                if panel is None:
                    continue
                height = self.config.panels.header_height if panel.collapsed else panel.height
                bounds = WindowGeometry(
                    region_x + column_index * column_width + gap,
                    top,
                    column_width - 2 * gap,
                    height,
                )
                slots.append(PanelSlot(panel_id, column_index, bounds))
                top += height + gap
        return slots

    def _title_buttons(self) -> Dict[HitRegion, WindowGeometry]:
        geom = self.window.geometry
        size = TITLE_BUTTON_SIZE
        title_h = (
            geom.height
            if self.window.mode is WindowMode.MINIMIZED
            else self.config.window.title_bar_height
        )
        y = geom.y + (title_h - size) / 2
        right = geom.x + geom.width - TITLE_BUTTON_PAD
        buttons = {}
        order = [HitRegion.CLOSE_BUTTON]
        if self.window.mode is not WindowMode.MINIMIZED:
            order += [HitRegion.MAXIMIZE_BUTTON, HitRegion.MINIMIZE_BUTTON]
        for region in order:
            right -= size
            buttons[region] = WindowGeometry(right, y, size, size)
            right -= 4
        return buttons

    def hit_test(self, pointer: Point) -> Hit:
        if not self.is_open:
            return Hit(HitRegion.NONE)
        geom = self.window.geometry
        if not geom.contains(pointer):
            return Hit(HitRegion.NONE)

        for region, bounds in self._title_buttons().items():
            if bounds.contains(pointer):
                return Hit(region)
        if self.window.mode is WindowMode.MINIMIZED:
            return Hit(HitRegion.MINIMIZED_BAR)

        handle = self.config.window.resize_handle_size
        if (
            self.window.mode is WindowMode.NORMAL
            and pointer.x >= geom.x + geom.width - handle
            and pointer.y >= geom.y + geom.height - handle
        ):
            return Hit(HitRegion.RESIZE_HANDLE)

        if pointer.y <= geom.y + self.config.window.title_bar_height:
            return Hit(HitRegion.TITLE_BAR)

        content = self._content_bounds()
        if not content.contains(pointer):
            return Hit(HitRegion.CONTENT)

        grab = self.config.layout.edge_grab
        for slot in self.panel_slots():
            bounds = slot.bounds
            bottom = bounds.y + bounds.height
            if bounds.x <= pointer.x <= bounds.x + bounds.width and abs(pointer.y - bottom) <= grab:
                return Hit(HitRegion.PANEL_EDGE, slot.panel_id)

        if self.arrangement.column_count:
            splitter_x = content.x + self.transcript_share() * content.width
            if abs(pointer.x - splitter_x) <= self.config.layout.splitter_grab:
                return Hit(HitRegion.SPLITTER)

        return Hit(HitRegion.CONTENT)

    def pointer_down(self, pointer: Point) -> Optional[Gesture]:
        if not self.is_open:
            return None
        self._drop_abandoned_gesture()
        if self._active is not None:
            logger.debug("Pointer down ignored: %s in progress", self._active[0].kind.value)
            return None
        hit = self.hit_test(pointer)
        region = hit.region

        if region is HitRegion.CLOSE_BUTTON:
            self.close()
            return None
        if region is HitRegion.MINIMIZE_BUTTON:
            self.window.minimize()
            return None
        if region is HitRegion.MAXIMIZE_BUTTON:
            self.window.maximize()
            return None
        if region is HitRegion.MINIMIZED_BAR:
            self.window.restore()
            return None

        gesture: Optional[Gesture] = None
        owner: Optional[GestureOwner] = None
        if region is HitRegion.TITLE_BAR:
            gesture, owner = self.window.begin_drag(pointer), self.window
        elif region is HitRegion.RESIZE_HANDLE:
            gesture, owner = self.window.begin_resize(pointer), self.window
        elif region is HitRegion.SPLITTER:
            content = self._content_bounds()
            gesture = self.splitter.begin(pointer, content.width, self.transcript_share())
            owner = self.splitter
        elif region is HitRegion.PANEL_EDGE and hit.target is not None:
            gesture, owner = self.panels.begin_resize(hit.target, pointer), self.panels

        if gesture is None or owner is None:
            return None
        self._active = (gesture, owner)
        return gesture

    def pointer_move(self, pointer: Point) -> None:
        self._drop_abandoned_gesture()
        if self._active is None:
            return
        self._active[1].on_pointer_move(pointer)

    def pointer_up(self, pointer: Optional[Point] = None) -> None:
        self._drop_abandoned_gesture()
        if self._active is None:
            return
        if pointer is not None:
            self._active[1].on_pointer_move(pointer)
        self._cancel_gesture()

    def _drop_abandoned_gesture(self) -> None:
        # Owners end their own gesture on minimize, maximize or panel removal.
        if self._active is not None and self._active[1].gesture is None:
            logger.debug("Dropping abandoned %s gesture", self._active[0].kind.value)
            self._active = None

    def _cancel_gesture(self) -> None:
        if self._active is None:
            return
        _, owner = self._active
        self._active = None
        owner.end_gesture()

    def view(self) -> Optional[Dict[str, Any]]:
        """Rendering instructions for the host, or None while closed."""
        if not self.is_open:
            return None
        geom = self.window.geometry
        mode = self.window.mode
        call = self.call
        payload: Dict[str, Any] = {
            "mode": mode.value,
            "bounds": geom,
            "title": (
                ("Call Active" if call.is_live else "Call Dialog")
                if mode is WindowMode.MINIMIZED
                else "Call Interface"
            ),
            "live": call.is_live,
            "buttons": {region.value: bounds for region, bounds in self._title_buttons().items()},
        }
        if mode is WindowMode.MINIMIZED:
            return payload

        content = self._content_bounds()
        share = self.transcript_share()
        slots = {slot.panel_id: slot for slot in self.panel_slots()}
        columns = []
        for column in self.arrangement.columns:
            entries = []
            for panel_id in column:
                panel = self.panels.get(panel_id)
                slot = slots.get(panel_id)
                if panel is None or slot is None:
                    continue
                entries.append(
                    {
                        "id": panel.id,
                        "type": panel.type.value,
                        "height": panel.height,
                        "collapsed": panel.collapsed,
                        "bounds": slot.bounds,
                    }
                )
            columns.append(entries)
        payload.update(
            {
                "call_state": call.state.value,
                "status": call.status_text,
                "controls": call.controls(),
                "muted": call.is_muted,
                "video_on": call.is_video_on,
                "elapsed_seconds": int(call.elapsed_seconds()),
                "content": content,
                "transcript": call.transcript,
                "transcript_width": share * content.width,
                "columns": columns,
                "insights": self.feed.insights(),
                "resizable": mode is WindowMode.NORMAL,
                "available_panels": [t.value for t in self.panels.available_types()],
            }
        )
        return payload
