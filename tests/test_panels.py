from callpanel.config import PanelConfig
from callpanel.models import GestureKind, PanelType, Point
from callpanel.panels import PanelCollectionManager


def test_default_config_opens_with_sentiment():
    manager = PanelCollectionManager()
    assert [panel.type for panel in manager.panels] == [PanelType.SENTIMENT]


def test_add_panel_appends_with_defaults():
    manager = PanelCollectionManager(initial=[])
    panel = manager.add_panel("analytics")
    assert panel is not None
    assert panel.type is PanelType.ANALYTICS
    assert panel.height == 200
    assert panel.collapsed is False
    assert manager.panel_ids == [panel.id]


def test_collection_is_bounded_and_unique():
    manager = PanelCollectionManager(initial=[])
    for panel_type in PanelType:
        manager.add_panel(panel_type)
        manager.add_panel(panel_type)
    types = [panel.type for panel in manager.panels]
    assert len(types) == 4
    assert len(set(types)) == 4
    assert types == list(PanelType)[:4]
    assert manager.is_full
    assert manager.available_types() == []


def test_duplicate_and_unknown_types_are_noops():
    manager = PanelCollectionManager(initial=["sentiment"])
    assert manager.add_panel(PanelType.SENTIMENT) is None
    assert manager.add_panel("weather") is None
    assert len(manager.panels) == 1


def test_remove_frees_the_slot():
    manager = PanelCollectionManager(
        initial=["sentiment", "analytics", "keywords", "actions"]
    )
    removed_id = manager.panel_ids[1]
    assert manager.add_panel("summary") is None
    assert manager.remove_panel(removed_id) is True
    again = manager.add_panel("analytics")
    assert again is not None
    assert again.id != removed_id
    assert [p.type.value for p in manager.panels] == [
        "sentiment",
        "keywords",
        "actions",
        "analytics",
    ]


def test_remove_unknown_id_is_noop():
    manager = PanelCollectionManager(initial=["sentiment", "keywords"])
    before = manager.panels
    assert manager.remove_panel("missing") is False
    assert manager.panels == before


def test_toggle_collapse():
    manager = PanelCollectionManager(initial=["sentiment"])
    panel_id = manager.panel_ids[0]
    assert manager.toggle_collapse(panel_id) is True
    assert manager.get(panel_id).collapsed is True
    manager.toggle_collapse(panel_id)
    assert manager.get(panel_id).collapsed is False
    assert manager.toggle_collapse("missing") is False


def test_resize_panel_floors_height():
    manager = PanelCollectionManager(PanelConfig(min_height=100), initial=["sentiment"])
    panel_id = manager.panel_ids[0]
    manager.resize_panel(panel_id, 320)
    assert manager.get(panel_id).height == 320
    manager.resize_panel(panel_id, 12)
    assert manager.get(panel_id).height == 100


def test_collapsed_panels_ignore_resize():
    manager = PanelCollectionManager(initial=["sentiment"])
    panel_id = manager.panel_ids[0]
    manager.toggle_collapse(panel_id)
    assert manager.resize_panel(panel_id, 400) is False
    assert manager.get(panel_id).height == 200
    assert manager.begin_resize(panel_id, Point(0, 0)) is None


def test_panel_edge_gesture():
    manager = PanelCollectionManager(initial=["sentiment", "keywords"])
    panel_id = manager.panel_ids[1]
    gesture = manager.begin_resize(panel_id, Point(600, 416))
    assert gesture.kind is GestureKind.PANEL_RESIZE
    assert gesture.target == panel_id
    manager.on_pointer_move(Point(600, 466))
    assert manager.get(panel_id).height == 250
    manager.on_pointer_move(Point(600, 100))
    assert manager.get(panel_id).height == 100
    manager.end_gesture()
    manager.on_pointer_move(Point(600, 900))
    assert manager.get(panel_id).height == 100
    assert manager.get(manager.panel_ids[0]).height == 200


def test_removing_panel_drops_its_gesture():
    manager = PanelCollectionManager(initial=["sentiment"])
    panel_id = manager.panel_ids[0]
    manager.begin_resize(panel_id, Point(0, 0))
    manager.remove_panel(panel_id)
    assert manager.gesture is None
    manager.on_pointer_move(Point(0, 50))
