#
# PROJECT: wireframe-scene-mutator
# MODULE: scene_mutator/kit.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import math
import random
from types import SimpleNamespace

from .color import Color
from .math_utils import Vec3, Quaternion
from .mesh import (Geometry, BoxGeometry, PlaneGeometry, SphereGeometry,
                   CylinderGeometry, GridGeometry)
from .objects import (Object3D, Group, Mesh, GridHelper,
                      BasicMaterial, StandardMaterial, ShadowMaterial,
                      AmbientLight, DirectionalLight, PointLight)

_EXPORTS = (
    Vec3, Quaternion, Color,
    Object3D, Group, Mesh, GridHelper,
    Geometry, BoxGeometry, PlaneGeometry, SphereGeometry, CylinderGeometry, GridGeometry,
    BasicMaterial, StandardMaterial, ShadowMaterial,
    AmbientLight, DirectionalLight, PointLight,
)


def build_kit(seed: int = 0) -> SimpleNamespace:
    """
    Construction namespace bound as `kit` inside scene scripts.

    A new namespace is built for every execution so one script cannot
    rebind names another script (or a later replay) relies on. `random` is
    seeded per execution so replays are deterministic. The OBJ file loader
    is not exported.

    Classes are handed out as throwaway subclasses and `math` as a copy of
    its public names, so patching them from a script never reaches the
    host process or a later run.
    """
    kit = SimpleNamespace(**{cls.__name__: type(cls.__name__, (cls,), {}) for cls in _EXPORTS})
    kit.math = SimpleNamespace(**{name: getattr(math, name)
                                  for name in dir(math) if not name.startswith('_')})
    kit.PI = math.pi
    kit.random = random.Random(seed)
    return kit
