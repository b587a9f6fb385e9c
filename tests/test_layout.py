import pytest

from callpanel.config import LayoutConfig
from callpanel.layout import SplitterState, compute_arrangement
from callpanel.models import GestureKind, Point
from callpanel.panels import PanelCollectionManager


@pytest.mark.parametrize(
    "count, share, columns",
    [
        (0, 1.0, ()),
        (1, 0.5, (("0",),)),
        (2, 1 / 3, (("0", "1"),)),
        (3, 1 / 3, (("0", "1"), ("2",))),
        (4, 1 / 3, (("0", "1"), ("2", "3"))),
    ],
)
def test_arrangement_table(count, share, columns):
    arrangement = compute_arrangement(count)
    assert arrangement.transcript_width_share == pytest.approx(share)
    assert arrangement.column_count == len(columns)
    assert arrangement.columns == columns


def test_negative_count_is_rejected():
    with pytest.raises(ValueError):
        compute_arrangement(-1)


def test_three_panel_scenario_uses_ids():
    manager = PanelCollectionManager(initial=["sentiment"])
    manager.add_panel("analytics")
    manager.add_panel("keywords")
    arrangement = compute_arrangement(manager.panel_ids)
    assert arrangement.column_count == 2
    assert arrangement.columns == (
        ("sentiment-1", "analytics-2"),
        ("keywords-3",),
    )


def test_splitter_override_is_bounded():
    splitter = SplitterState(LayoutConfig(transcript_min_width=320, insights_min_width=240))
    arrangement = compute_arrangement(1)
    gesture = splitter.begin(Point(500, 300), 800, 0.5)
    assert gesture.kind is GestureKind.SPLITTER
    assert gesture.origin_geometry == 400

    splitter.on_pointer_move(Point(600, 310))
    assert splitter.override_share == pytest.approx(500 / 800)
    splitter.on_pointer_move(Point(1200, 310))
    assert splitter.override_share == pytest.approx(560 / 800)
    splitter.on_pointer_move(Point(-300, 310))
    assert splitter.override_share == pytest.approx(320 / 800)
    splitter.end_gesture()

    assert splitter.effective_share(arrangement, 800) == pytest.approx(0.4)


def test_override_survives_panel_count_changes():
    splitter = SplitterState()
    splitter.begin(Point(400, 0), 800, 0.5)
    splitter.on_pointer_move(Point(450, 0))
    splitter.end_gesture()
    assert splitter.effective_share(compute_arrangement(3)) == pytest.approx(450 / 800)
    assert splitter.effective_share(compute_arrangement(0)) == 1.0


def test_default_share_without_override():
    splitter = SplitterState()
    assert splitter.effective_share(compute_arrangement(2), 900) == pytest.approx(1 / 3)
    splitter.on_pointer_move(Point(10, 10))
    assert splitter.override_share is None


def test_default_share_is_not_held_to_region_minimums():
    splitter = SplitterState()
    assert splitter.effective_share(compute_arrangement(3), 800) == pytest.approx(1 / 3)
