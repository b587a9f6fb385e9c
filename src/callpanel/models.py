"""Data models for the call dialog."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)


@dataclass(frozen=True)
class Size:
    width: float
    height: float


@dataclass(frozen=True)
class WindowGeometry:
    x: float
    y: float
    width: float
    height: float

    @property
    def position(self) -> Point:
        return Point(self.x, self.y)

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)

    def moved_to(self, position: Point) -> "WindowGeometry":
        return WindowGeometry(position.x, position.y, self.width, self.height)

    def resized_to(self, size: Size) -> "WindowGeometry":
        return WindowGeometry(self.x, self.y, size.width, size.height)

    def contains(self, point: Point) -> bool:
        return (
            self.x <= point.x <= self.x + self.width
            and self.y <= point.y <= self.y + self.height
        )


class WindowMode(Enum):
    NORMAL = "normal"
    MINIMIZED = "minimized"
    MAXIMIZED = "maximized"


class CallState(Enum):
    IDLE = "idle"
    CONNECTING = "connecting"
    ACTIVE = "active"
    ENDED = "ended"


class PanelType(Enum):
    SENTIMENT = "sentiment"
    ANALYTICS = "analytics"
    KEYWORDS = "keywords"
    ACTIONS = "actions"
    SUMMARY = "summary"
    PARTICIPANTS = "participants"
    TIMELINE = "timeline"

    @classmethod
    def parse(cls, value: Union["PanelType", str]) -> Optional["PanelType"]:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


@dataclass(frozen=True)
class TranscriptionEntry:
    id: str
    speaker: str
    text: str
    timestamp: str
    confidence: float


@dataclass
class InsightPanel:
    id: str
    type: PanelType
    height: float
    collapsed: bool = False


@dataclass(frozen=True)
class LayoutArrangement:
    transcript_width_share: float
    column_count: int
    columns: Tuple[Tuple[str, ...], ...]


@dataclass
class InsightData:
    sentiment: str
    keywords: List[str] = field(default_factory=list)
    topics: List[str] = field(default_factory=list)
    action_items: List[str] = field(default_factory=list)
    summary: str = ""
    speaking_time: Dict[str, float] = field(default_factory=dict)
    timeline: List[Dict[str, str]] = field(default_factory=list)


class GestureKind(Enum):
    WINDOW_DRAG = "window_drag"
    WINDOW_RESIZE = "window_resize"
    SPLITTER = "splitter"
    PANEL_RESIZE = "panel_resize"


@dataclass(frozen=True)
class Gesture:
    """An in-progress pointer gesture.

    ``origin_geometry`` is whatever the owner restarts from on every move:
    the window geometry for window gestures, the transcript width for the
    splitter, the panel height for a panel edge.
    """

    kind: GestureKind
    origin_pointer: Point
    origin_geometry: Union[WindowGeometry, float]
    target: Optional[str] = None


@dataclass
class CallRecord:
    call_id: str
    title: str
    started_at: str
    duration_seconds: Optional[int]
    entries: List[TranscriptionEntry]
    panels: List[str] = field(default_factory=list)
    transcript_path: Optional[str] = None
    report_path: Optional[str] = None
