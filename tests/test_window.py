from callpanel.config import WindowConfig
from callpanel.models import GestureKind, Point, Size, WindowGeometry, WindowMode
from callpanel.window import WindowController


def test_initial_geometry_uses_config_and_position():
    window = WindowController(initial_position=Point(100, 100))
    assert window.mode is WindowMode.NORMAL
    assert window.geometry == WindowGeometry(100, 100, 800, 600)


def test_drag_preserves_pointer_offset():
    window = WindowController(initial_position=Point(100, 100))
    gesture = window.begin_drag(Point(300, 120))
    assert gesture is not None and gesture.kind is GestureKind.WINDOW_DRAG
    window.on_pointer_move(Point(320, 150))
    window.on_pointer_move(Point(350, 170))
    window.end_gesture()
    assert window.geometry == WindowGeometry(150, 150, 800, 600)
    assert not window.is_dragging


def test_resize_clamps_to_minimum():
    window = WindowController()
    window.begin_resize(Point(900, 700))
    window.on_pointer_move(Point(1000, 750))
    assert window.geometry.size == Size(900, 650)
    window.on_pointer_move(Point(100, 50))
    assert window.geometry.size == Size(800, 600)
    window.end_gesture()


def test_configurable_minimums():
    config = WindowConfig(width=500, height=400, min_width=400, min_height=300)
    window = WindowController(config=config)
    window.begin_resize(Point(0, 0))
    window.on_pointer_move(Point(-1000, -1000))
    assert window.geometry.size == Size(400, 300)


def test_move_without_gesture_is_ignored():
    window = WindowController(initial_position=Point(10, 20))
    window.on_pointer_move(Point(500, 500))
    window.end_gesture()
    window.end_gesture()
    assert window.geometry == WindowGeometry(10, 20, 800, 600)


def test_gestures_only_in_normal_mode():
    window = WindowController()
    window.maximize()
    assert window.begin_drag(Point(10, 10)) is None
    assert window.begin_resize(Point(10, 10)) is None
    window.minimize()
    assert window.begin_drag(Point(10, 10)) is None


def test_second_gesture_is_refused_while_one_is_active():
    window = WindowController()
    assert window.begin_drag(Point(200, 110)) is not None
    assert window.begin_resize(Point(890, 690)) is None
    assert window.is_dragging


def test_minimize_then_restore_is_bit_identical():
    window = WindowController(initial_position=Point(133.5, 87.25))
    window.begin_resize(Point(0, 0))
    window.on_pointer_move(Point(61.75, 12.5))
    window.end_gesture()
    before = window.geometry

    window.minimize()
    assert window.mode is WindowMode.MINIMIZED
    assert window.geometry == WindowGeometry(1600, 1000, 300, 60)
    assert window.normal_geometry == before

    window.restore()
    assert window.mode is WindowMode.NORMAL
    assert window.geometry == before


def test_maximize_toggles():
    window = WindowController(initial_position=Point(50, 60))
    window.maximize()
    assert window.mode is WindowMode.MAXIMIZED
    assert window.geometry == WindowGeometry(0, 0, 1920, 1080)
    window.maximize()
    assert window.mode is WindowMode.NORMAL
    assert window.geometry == WindowGeometry(50, 60, 800, 600)


def test_maximize_follows_viewport():
    window = WindowController()
    window.set_viewport(Size(1280, 720))
    window.maximize()
    assert window.geometry == WindowGeometry(0, 0, 1280, 720)


def test_minimize_cancels_running_drag():
    window = WindowController(initial_position=Point(100, 100))
    window.begin_drag(Point(200, 110))
    window.minimize()
    window.on_pointer_move(Point(900, 900))
    window.restore()
    assert window.geometry.position == Point(100, 100)


def test_request_close_respects_guard():
    closed = []
    blocked = {"value": True}
    window = WindowController(
        on_close=lambda: closed.append(True),
        close_blocked=lambda: blocked["value"],
    )
    window.maximize()
    assert window.request_close() is False
    assert closed == []
    assert window.mode is WindowMode.MAXIMIZED

    blocked["value"] = False
    assert window.request_close() is True
    assert closed == [True]


def test_maximize_from_minimized():
    window = WindowController(initial_position=Point(50, 60))
    window.minimize()
    window.maximize()
    assert window.mode is WindowMode.MAXIMIZED
    assert window.geometry == WindowGeometry(0, 0, 1920, 1080)
    window.restore()
    assert window.mode is WindowMode.NORMAL
    assert window.geometry == WindowGeometry(50, 60, 800, 600)


def test_restore_from_maximized():
    window = WindowController(initial_position=Point(50, 60))
    window.begin_drag(Point(60, 70))
    window.on_pointer_move(Point(160, 120))
    window.end_gesture()
    before = window.geometry
    window.maximize()
    window.restore()
    assert window.mode is WindowMode.NORMAL
    assert window.geometry == before == WindowGeometry(150, 110, 800, 600)
