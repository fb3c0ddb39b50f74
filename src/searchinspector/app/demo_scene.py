"""
Demo Scene
==========
A handful of entities and component types to drive the inspector window
without a real engine behind it.
"""
from __future__ import annotations

from searchinspector.model.scene import Component, Entity, PropertyNode, Scene, prop


class Transform(Component):
    def build_properties(self) -> list[PropertyNode]:
        return [
            prop("Position", prop("x", value=0.0), prop("y", value=0.0), prop("z", value=0.0)),
            prop("Rotation", prop("x", value=0.0), prop("y", value=0.0), prop("z", value=0.0),
                 custom_drawer=True),
            prop("Scale", prop("x", value=1.0), prop("y", value=1.0), prop("z", value=1.0)),
        ]


class Renderer(Component):
    def build_properties(self) -> list[PropertyNode]:
        return [
            prop("Enabled", value=True),
            prop(
                "Material",
                prop("Main Color", prop("r", value=1.0), prop("g", value=1.0), prop("b", value=1.0)),
                prop("Shader", value="Standard"),
            ),
            prop("Cast Shadows", value=True),
            prop("Sorting Layer", value=0, hidden=True),
        ]


class Rigidbody(Component):
    multi_editable = False

    def build_properties(self) -> list[PropertyNode]:
        return [
            prop("Mass", value=1.0),
            prop("Drag", value=0.0),
            prop("Use Gravity", value=True),
        ]


class Script(Component):
    def build_properties(self) -> list[PropertyNode]:
        return [
            prop("Speed", value=5.0),
            prop("Target Color", prop("r", value=0.0), prop("g", value=0.0), prop("b", value=0.0)),
            prop("Tags", prop("Element 0", value="enemy")),
        ]


def _standard(name: str, *extra: Component) -> Entity:
    return Entity(name, [Transform(), Renderer(), Script("S1"), *extra])


def build_demo_scene() -> Scene:
    player = _standard("Player", Script("S2"))
    player.add(Rigidbody())
    enemy_a = _standard("Enemy A")
    enemy_a.add(Rigidbody())
    enemy_b = _standard("Enemy B")
    camera = Entity("Main Camera", [Transform()])

    scene = Scene([player, enemy_a, enemy_b, camera])
    scene.select(player, enemy_a)
    return scene
