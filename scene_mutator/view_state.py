#
# PROJECT: wireframe-scene-mutator
# MODULE: scene_mutator/view_state.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import math
from dataclasses import dataclass, asdict
from typing import Tuple

from .camera import PerspectiveCamera
from .controls import OrbitControls

Triple = Tuple[float, float, float]


@dataclass(frozen=True)
class ViewState:
    """Camera and orbit-control pose, independent of scene content."""
    camera_position: Triple
    camera_quaternion: Tuple[float, float, float, float]
    camera_up: Triple
    near: float
    far: float
    fov: float
    zoom: float
    focus: float
    control_target: Triple
    controls_enabled: bool

    def approx_equal(self, other: 'ViewState', tolerance: float = 1e-6) -> bool:
        if self.controls_enabled != other.controls_enabled:
            return False
        for name in ('camera_position', 'camera_quaternion', 'camera_up', 'control_target'):
            for a, b in zip(getattr(self, name), getattr(other, name)):
                if not math.isclose(a, b, rel_tol=tolerance, abs_tol=tolerance):
                    return False
        for name in ('near', 'far', 'fov', 'zoom', 'focus'):
            if not math.isclose(getattr(self, name), getattr(other, name),
                                rel_tol=tolerance, abs_tol=tolerance):
                return False
        return True

    def to_dict(self) -> dict:
        data = asdict(self)
        for key, value in data.items():
            if isinstance(value, tuple):
                data[key] = list(value)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> 'ViewState':
        return cls(
            camera_position=_floats(data['camera_position'], 3),
            camera_quaternion=_floats(data['camera_quaternion'], 4),
            camera_up=_floats(data['camera_up'], 3),
            near=float(data['near']),
            far=float(data['far']),
            fov=float(data['fov']),
            zoom=float(data['zoom']),
            focus=float(data['focus']),
            control_target=_floats(data['control_target'], 3),
            controls_enabled=bool(data['controls_enabled']),
        )


def _floats(values, n):
    values = tuple(float(v) for v in values)
    if len(values) != n:
        raise ValueError(f"expected {n} components, got {len(values)}")
    return values


def _settle(controls: OrbitControls):
    """Run one undamped update so pending motion lands fully."""
    previous_damping = controls.enable_damping
    controls.enable_damping = False
    try:
        controls.update()
    finally:
        controls.enable_damping = previous_damping


def capture_view_state(camera: PerspectiveCamera, controls: OrbitControls) -> ViewState:
    _settle(controls)
    return ViewState(
        camera_position=camera.position.to_tuple(),
        camera_quaternion=camera.quaternion.to_tuple(),
        camera_up=camera.up.to_tuple(),
        near=camera.near,
        far=camera.far,
        fov=camera.fov,
        zoom=camera.zoom,
        focus=camera.focus,
        control_target=controls.target.to_tuple(),
        controls_enabled=controls.enabled,
    )


def restore_view_state(camera: PerspectiveCamera, controls: OrbitControls, state: ViewState):
    """
    Apply a captured pose. Derived camera matrices are recomputed and the
    controls' saved state is re-synced, so the next interaction starts from
    the restored pose rather than the one before it.
    """
    if state is None:
        return
    camera.position.set(*state.camera_position)
    camera.quaternion.set(*state.camera_quaternion)
    camera.up.set(*state.camera_up)
    camera.near = state.near
    camera.far = state.far
    camera.fov = state.fov
    camera.zoom = state.zoom
    camera.focus = state.focus
    camera.update_projection_matrix()
    camera.update_matrix_world(True)

    controls.target.set(*state.control_target)
    controls.enabled = state.controls_enabled
    controls.stop()

    _settle(controls)
    controls.update()
    controls.save_state()
