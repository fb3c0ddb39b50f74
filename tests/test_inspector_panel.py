from __future__ import annotations

from PySide6 import QtWidgets

from searchinspector.app.state import InspectorStore
from searchinspector.app.ui.main_window import MainWindow
from searchinspector.app.ui.panels.inspector import InspectorPanel
from searchinspector.config import MULTI_EDIT_UNSUPPORTED_MESSAGE
from searchinspector.app.demo_scene import Rigidbody


_app = QtWidgets.QApplication.instance()
if _app is None:
    _app = QtWidgets.QApplication([])


def _top_labels(panel: InspectorPanel) -> list[str]:
    return [panel.tree.topLevelItem(i).text(0) for i in range(panel.tree.topLevelItemCount())]


def test_panel_lists_one_item_per_group(scenario_a) -> None:
    scene, *_ = scenario_a
    store = InspectorStore(scene)
    panel = InspectorPanel(store)

    store.tick()

    assert _top_labels(panel) == ["Transform (0)", "Renderer (0)", "Script (0)"]
    assert panel.header_label.text() == "A (+2 more)"


def test_search_shows_ancestor_then_match_with_full_subtree(scenario_a) -> None:
    scene, *_ = scenario_a
    store = InspectorStore(scene)
    panel = InspectorPanel(store)
    store.tick()

    panel.search_edit.setText("main color")

    renderer = panel.tree.topLevelItem(1)
    assert renderer.childCount() == 1
    material = renderer.child(0)
    assert material.text(0) == "Material"
    assert material.childCount() == 1
    main_color = material.child(0)
    assert main_color.text(0) == "Main Color"
    assert [main_color.child(i).text(0) for i in range(main_color.childCount())] == ["r", "g", "b"]
    assert main_color.child(0).text(1) == "1.0"

    panel.search_edit.setText("")
    assert panel.tree.topLevelItem(1).childCount() == 3


def test_fold_state_survives_refresh(scenario_a) -> None:
    scene, a, b, c = scenario_a
    store = InspectorStore(scene)
    panel = InspectorPanel(store)
    store.tick()
    script_group = store.current_groups()[2].group

    panel.tree.collapseItem(panel.group_item(script_group))
    assert store.controller.cache.view_state(script_group).expanded is False

    b.add(Rigidbody())
    store.tick()

    assert panel.group_item(script_group).isExpanded() is False
    assert panel.tree.topLevelItem(0).isExpanded() is True


def test_advisory_replaces_properties(scenario_a) -> None:
    scene, a, b, c = scenario_a
    for entity in (a, b, c):
        entity.add(Rigidbody())
    store = InspectorStore(scene)
    panel = InspectorPanel(store)
    store.tick()

    rigidbody = panel.tree.topLevelItem(3)
    assert rigidbody.text(0) == "Rigidbody (0)"
    assert rigidbody.childCount() == 1
    assert rigidbody.child(0).text(0) == MULTI_EDIT_UNSUPPORTED_MESSAGE


def test_main_window_pushes_hierarchy_selection(scenario_a) -> None:
    scene, a, b, c = scenario_a
    scene.select(a)
    store = InspectorStore(scene)
    window = MainWindow(scene, store)
    store.tick()
    assert _top_labels(window.inspector)[-1] == "Script (1)"

    window.hierarchy.setCurrentRow(1)
    window.hierarchy.item(0).setSelected(True)

    assert scene.current_selection()[0] is b
    assert {id(e) for e in scene.current_selection()} == {id(a), id(b)}
    assert _top_labels(window.inspector) == ["Transform (0)", "Renderer (0)", "Script (0)"]
