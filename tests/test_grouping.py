from __future__ import annotations

import pytest

from searchinspector.app.demo_scene import Renderer, Rigidbody, Script, Transform
from searchinspector.model.grouping import (
    ComponentGrouper, components_at_slot, slot_index_of, unique_selection
)
from searchinspector.model.scene import Entity, Scene


class SpecialScript(Script):
    pass


def test_scenario_a_keeps_complete_script_group_and_drops_partial(scenario_a) -> None:
    scene, a, b, c = scenario_a

    result = ComponentGrouper(scene).build(scene.current_selection())

    assert [g.type_name for g in result.groups] == ["Transform", "Renderer", "Script"]
    script = result.groups[2]
    assert script.slot_index == 0
    assert [m.label for m in script.members] == ["S1", "S1", "S1"]
    assert [m.entity for m in script.members] == [a, b, c]

    assert len(result.dropped) == 1
    assert result.dropped[0].members == (a.components[3],)
    assert result.dropped[0].slot_index == 1


def test_every_group_has_one_member_per_selected_entity(scenario_a) -> None:
    scene, a, b, c = scenario_a

    result = ComponentGrouper(scene).build([a, b, c])

    for group in result.groups:
        assert len(group) == 3
        assert {id(m.entity) for m in group.members} == {id(a), id(b), id(c)}


def test_slots_match_by_rank_within_exact_type() -> None:
    a = Entity("A", [Transform(), Script("a1"), Script("a2")])
    b = Entity("B", [Script("b1"), Transform(), Script("b2")])
    scene = Scene([a, b])

    groups = ComponentGrouper(scene).build([a, b]).groups

    assert [(g.type_name, g.slot_index) for g in groups] == [
        ("Transform", 0), ("Script", 0), ("Script", 1)
    ]
    assert [m.label for m in groups[1].members] == ["a1", "b1"]
    assert [m.label for m in groups[2].members] == ["a2", "b2"]


def test_subclass_is_not_the_same_type() -> None:
    a = Entity("A", [Transform(), Script()])
    b = Entity("B", [Transform(), SpecialScript()])
    scene = Scene([a, b])

    result = ComponentGrouper(scene).build([a, b])

    assert [g.type_name for g in result.groups] == ["Transform"]
    assert [g.type_name for g in result.dropped] == ["Script"]


def test_group_order_follows_primary_entity() -> None:
    a = Entity("A", [Renderer(), Transform()])
    b = Entity("B", [Transform(), Renderer()])
    scene = Scene([a, b])

    groups = ComponentGrouper(scene).build([a, b]).groups

    assert [g.type_name for g in groups] == ["Renderer", "Transform"]
    assert all(g.primary.entity is a for g in groups)


def test_destroyed_component_counts_as_no_match(scenario_a) -> None:
    scene, a, b, c = scenario_a
    scene.destroy(b.components[2])  # deferred: still listed by the host

    result = ComponentGrouper(scene).build([a, b, c])

    assert [g.type_name for g in result.groups] == ["Transform", "Renderer"]


def test_stale_entity_contributes_nothing(scenario_a) -> None:
    scene, a, b, c = scenario_a
    scene.destroy(c)

    result = ComponentGrouper(scene).build([a, b, c])

    assert result.groups == []
    assert len(result.dropped) == 4


def test_stale_or_non_entity_primary_yields_no_groups(scenario_a) -> None:
    scene, a, b, c = scenario_a

    assert ComponentGrouper(scene).build(["some asset", a]).groups == []

    scene.destroy(a)
    assert ComponentGrouper(scene).build([a, b, c]).groups == []


def test_non_entity_after_primary_is_ignored(scenario_a) -> None:
    scene, a, b, c = scenario_a
    grouper = ComponentGrouper(scene)

    result = grouper.build([a, b, "some asset"])

    assert result.selection_size == 2
    assert [g.type_name for g in result.groups] == ["Transform", "Renderer", "Script"]
    assert all(len(g) == 2 for g in result.groups)
    assert grouper.entities_of([a, "some asset", b, None]) == [a, b, None]


def test_single_selection_groups_every_component() -> None:
    a = Entity("A", [Transform(), Rigidbody(), Script(), Script()])
    scene = Scene([a])

    groups = ComponentGrouper(scene).build([a]).groups

    assert [(g.type_name, g.slot_index) for g in groups] == [
        ("Transform", 0), ("Rigidbody", 0), ("Script", 0), ("Script", 1)
    ]


def test_empty_selection() -> None:
    result = ComponentGrouper(Scene()).build([])
    assert result.groups == []
    assert result.selection_size == 0


def test_repeated_selection_entries_are_ignored(scenario_a) -> None:
    scene, a, b, c = scenario_a

    result = ComponentGrouper(scene).build([a, b, a])

    assert result.selection_size == 2
    assert all(len(g) == 2 for g in result.groups)
    assert unique_selection([a, b, a, c, b]) == [a, b, c]


def test_group_key_is_member_set() -> None:
    a = Entity("A", [Transform()])
    b = Entity("B", [Transform()])
    scene = Scene([a, b])
    grouper = ComponentGrouper(scene)

    first = grouper.build([a, b]).groups[0]
    second = grouper.build([b, a]).groups[0]

    assert first.key == second.key
    assert first.primary is not second.primary


def test_slot_helpers() -> None:
    s1, s2 = Script("s1"), Script("s2")
    components = [Transform(), s1, Renderer(), SpecialScript(), s2]

    assert slot_index_of(s1, components) == 0
    assert slot_index_of(s2, components) == 1
    assert components_at_slot(components, Script, 1) is s2
    assert components_at_slot(components, Script, 2) is None
    assert components_at_slot(components, SpecialScript, 0) is components[3]

    with pytest.raises(ValueError):
        slot_index_of(Script(), components)
