#
# PROJECT: wireframe-scene-mutator
# MODULE: scene_mutator/camera.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import math

from .math_utils import Vec3, Quaternion


class PerspectiveCamera:
    """
    Perspective camera state.

    Stores the world transform (position + orientation quaternion + up
    vector) and the projection parameters. The camera looks down its local
    -Z axis. `update_projection_matrix()` and `update_matrix_world()` must
    be called after changing the respective fields; the renderer reads the
    cached values they produce.
    """

    def __init__(self, fov: float = 60.0, aspect: float = 1.0,
                 near: float = 0.1, far: float = 1000.0):
        self.name = "camera"
        self.position = Vec3(0, 0, 0)
        self.quaternion = Quaternion()
        self.up = Vec3(0, 1, 0)
        self.fov = fov           # Vertical field of view (degrees)
        self.aspect = aspect
        self.near = near
        self.far = far
        self.zoom = 1.0
        self.focus = 10.0
        self.user_data = {}
        self.projection = None
        self.view_rotation = None
        self.update_projection_matrix()
        self.update_matrix_world()

    def look_at(self, target):
        if not isinstance(target, Vec3):
            target = Vec3.from_iterable(target)
        self.quaternion.set_from_look_at(self.position, target, self.up)
        self.update_matrix_world()

    def update_projection_matrix(self):
        """Recompute the cached projection scale (f / zoom) and clip planes."""
        fov = max(1e-3, min(179.0, self.fov))
        focal = 1.0 / math.tan(math.radians(fov) / 2.0)
        self.projection = (focal * self.zoom, self.aspect, self.near, self.far)

    def update_matrix_world(self, force: bool = False):
        """Recompute the cached world-to-camera rotation."""
        self.quaternion.normalize()
        self.view_rotation = self.quaternion.conjugate()

    def world_to_camera(self, point: Vec3) -> Vec3:
        return self.view_rotation.rotate(point - self.position)

    def get_world_direction(self) -> Vec3:
        return self.quaternion.rotate(Vec3(0, 0, -1))

    def adjust_fov(self, delta: float):
        """Adjust field of view by delta degrees, clamped to [10, 170]."""
        self.fov = max(10, min(170, self.fov + delta))
        self.update_projection_matrix()
