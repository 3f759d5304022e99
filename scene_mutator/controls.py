#
# PROJECT: wireframe-scene-mutator
# MODULE: scene_mutator/controls.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import math

from .camera import PerspectiveCamera
from .math_utils import Vec3

_EPS = 1e-6


class OrbitControls:
    """
    Orbit the camera around a target point.

    Input (keys, scripts) only queues rotation/dolly deltas; `update()`
    applies them. With damping enabled each update consumes
    `damping_factor` of the pending rotation so the camera eases into place
    over several frames; without damping the whole delta lands at once.
    """

    def __init__(self, camera: PerspectiveCamera, target=(0.0, 0.0, 0.0)):
        self.camera = camera
        self.target = Vec3.from_iterable(target)
        self.enabled = True
        self.enable_damping = False
        self.damping_factor = 0.05
        self.min_distance = 0.0
        self.max_distance = math.inf
        self.min_polar_angle = 0.0
        self.max_polar_angle = math.pi

        self._theta_delta = 0.0
        self._phi_delta = 0.0
        self._scale = 1.0

        self.target0 = None
        self.position0 = None
        self.zoom0 = None
        self.save_state()

    # ── Input ───────────────────────────────────────────────────────────
    def rotate_left(self, angle: float):
        if self.enabled:
            self._theta_delta -= angle

    def rotate_up(self, angle: float):
        if self.enabled:
            self._phi_delta -= angle

    def dolly_in(self, scale: float):
        if self.enabled and scale > 0:
            self._scale /= scale

    def dolly_out(self, scale: float):
        if self.enabled and scale > 0:
            self._scale *= scale

    def stop(self):
        """Drop any queued rotation/dolly."""
        self._theta_delta = 0.0
        self._phi_delta = 0.0
        self._scale = 1.0

    # ── Update ──────────────────────────────────────────────────────────
    def update(self) -> bool:
        """Apply pending motion and re-aim the camera. Returns True if it moved."""
        camera = self.camera
        offset = camera.position - self.target
        radius = offset.magnitude()
        theta = math.atan2(offset.x, offset.z)
        phi = math.acos(max(-1.0, min(1.0, offset.y / radius))) if radius > 0 else 0.0

        if self.enable_damping:
            theta += self._theta_delta * self.damping_factor
            phi += self._phi_delta * self.damping_factor
        else:
            theta += self._theta_delta
            phi += self._phi_delta

        lo = max(self.min_polar_angle, _EPS)
        hi = min(self.max_polar_angle, math.pi - _EPS)
        phi = max(lo, min(hi, phi))
        radius = max(self.min_distance, min(self.max_distance, radius * self._scale))

        sin_phi = math.sin(phi)
        new_offset = Vec3(radius * sin_phi * math.sin(theta),
                          radius * math.cos(phi),
                          radius * sin_phi * math.cos(theta))
        previous = camera.position.copy()
        camera.position.set(*(self.target + new_offset))
        camera.look_at(self.target)

        if self.enable_damping:
            self._theta_delta *= (1.0 - self.damping_factor)
            self._phi_delta *= (1.0 - self.damping_factor)
            if abs(self._theta_delta) < _EPS:
                self._theta_delta = 0.0
            if abs(self._phi_delta) < _EPS:
                self._phi_delta = 0.0
        else:
            self._theta_delta = 0.0
            self._phi_delta = 0.0
        self._scale = 1.0

        return previous.distance_to(camera.position) > _EPS

    # ── Saved state ─────────────────────────────────────────────────────
    def save_state(self):
        """Remember the current pose as the one `reset()` returns to."""
        self.target0 = self.target.copy()
        self.position0 = self.camera.position.copy()
        self.zoom0 = self.camera.zoom

    def reset(self):
        self.target = self.target0.copy()
        self.camera.position.set(*self.position0)
        self.camera.zoom = self.zoom0
        self.camera.update_projection_matrix()
        self.stop()
        self.update()
