from __future__ import annotations

from scene_mutator.view_state import ViewState


def fenced(script: str, prose: str = "Here you go.") -> str:
    return f"{prose}\n```python\n{script}\n```\n"


def object_names(scene) -> set:
    return {obj.name for obj in scene.iter_objects() if obj is not scene}


def make_view_state(x: float = 0.0) -> ViewState:
    return ViewState(
        camera_position=(x, 4.0, 5.0),
        camera_quaternion=(0.0, 0.0, 0.0, 1.0),
        camera_up=(0.0, 1.0, 0.0),
        near=0.1,
        far=1000.0,
        fov=60.0,
        zoom=1.0,
        focus=10.0,
        control_target=(0.0, 0.5, 0.0),
        controls_enabled=True,
    )
