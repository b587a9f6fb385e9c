"""Pure geometry helpers for window and splitter gestures."""

from __future__ import annotations

from .models import Point, Size, WindowGeometry


def clamp_size(candidate: Size, min_width: float, min_height: float) -> Size:
    return Size(max(min_width, candidate.width), max(min_height, candidate.height))


def clamp_between(value: float, low: float, high: float) -> float:
    # A range that cannot satisfy both bounds collapses onto the lower one.
    if high < low:
        return low
    return max(low, min(high, value))


def anchor_offset(pointer_start: Point, window_position: Point) -> Point:
    return pointer_start - window_position


def drag_delta(pointer_start: Point, pointer_current: Point, anchor: Point) -> Point:
    """New top-left keeping the pointer on the spot it grabbed.

    ``anchor`` is ``pointer_start - window_position`` at gesture start, so the
    result equals ``window_position + (pointer_current - pointer_start)``.
    """
    return pointer_current - anchor


def resize_delta(
    pointer_start: Point,
    pointer_current: Point,
    start_size: Size,
    min_width: float,
    min_height: float,
) -> Size:
    delta = pointer_current - pointer_start
    candidate = Size(start_size.width + delta.x, start_size.height + delta.y)
    return clamp_size(candidate, min_width, min_height)


def minimized_geometry(
    viewport: Size, width: float, height: float, margin: float
) -> WindowGeometry:
    return WindowGeometry(
        x=viewport.width - margin - width,
        y=viewport.height - margin - height,
        width=width,
        height=height,
    )


def maximized_geometry(viewport: Size) -> WindowGeometry:
    return WindowGeometry(0, 0, viewport.width, viewport.height)
