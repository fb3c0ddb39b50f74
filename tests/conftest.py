from __future__ import annotations

import os

import pytest

# Qt tests run headless
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from searchinspector.app.demo_scene import Renderer, Script, Transform
from searchinspector.model.scene import Entity, Scene


@pytest.fixture
def scenario_a() -> tuple[Scene, Entity, Entity, Entity]:
    """A (primary), B, C share [Transform, Renderer, Script S1]; A also has Script S2."""
    a = Entity("A", [Transform(), Renderer(), Script("S1"), Script("S2")])
    b = Entity("B", [Transform(), Renderer(), Script("S1")])
    c = Entity("C", [Transform(), Renderer(), Script("S1")])
    scene = Scene([a, b, c])
    scene.select(a, b, c)
    return scene, a, b, c
