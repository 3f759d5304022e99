#
# PROJECT: wireframe-scene-mutator
# MODULE: scene_mutator/scene.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import math

from .color import Color
from .mesh import PlaneGeometry
from .objects import (Object3D, Mesh, ShadowMaterial, GridHelper,
                      AmbientLight, DirectionalLight)

BASE_OBJECT_NAMES = ("worldAmbientLight", "worldDirectionalLight", "worldGrid", "groundPlane")


class Scene(Object3D):
    """
    Root of the scene graph.

    Besides its children the scene carries a background color and an
    optional fog setting; both are part of the base configuration that a
    reset restores.
    """

    def __init__(self, background=0x020617):
        super().__init__("scene")
        self.background = Color(background)
        self.fog = None

    def count_objects(self) -> int:
        """Number of descendants, not counting the scene itself."""
        return len(self.iter_objects()) - 1


def add_base_objects(scene: Scene):
    """Populate a scene with the pristine lights, grid and ground plane."""
    ambient = AmbientLight(0xFFFFFF, 0.5)
    ambient.name = "worldAmbientLight"
    scene.add(ambient)

    directional = DirectionalLight(0xFFFFFF, 1.2)
    directional.name = "worldDirectionalLight"
    directional.position.set(6, 8, 4)
    directional.cast_shadow = True
    scene.add(directional)

    grid = GridHelper(20, 20, 0x334155, 0x1E293B)
    grid.name = "worldGrid"
    scene.add(grid)

    ground = Mesh(PlaneGeometry(40, 40), ShadowMaterial(opacity=0.2))
    ground.rotation.x = -math.pi / 2
    ground.position.y = -0.001
    ground.receive_shadow = True
    ground.name = "groundPlane"
    scene.add(ground)
