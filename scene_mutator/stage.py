#
# PROJECT: wireframe-scene-mutator
# MODULE: scene_mutator/stage.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import logging

from .camera import PerspectiveCamera
from .color import Color
from .config import EngineConfig
from .controls import OrbitControls
from .frame_driver import Clock, FrameUpdateDriver
from .kit import build_kit
from .math_utils import Vec3
from .objects import Object3D, dispose_object_tree
from .renderer import Renderer
from .sandbox import ScriptSandbox
from .scene import Scene, add_base_objects
from .view_state import ViewState, capture_view_state, restore_view_state

logger = logging.getLogger(__name__)


class Stage:
    """
    The live scene and everything needed to mutate, animate and draw it.

    Scripts only ever see the four objects returned by `bindings()`; the
    controls, clock and frame driver stay on this side of the sandbox.
    """

    def __init__(self, config: EngineConfig = None, clock: Clock = None):
        self.config = config or EngineConfig()
        cfg = self.config

        self.scene = Scene(cfg.background)

        self.camera = PerspectiveCamera(cfg.camera_fov, 1.0, cfg.camera_near, cfg.camera_far)
        self.camera.position.set(*cfg.camera_position)

        self.renderer = Renderer(cfg.surface_width, cfg.surface_height, cfg.use_braille)

        self.controls = OrbitControls(self.camera, cfg.control_target)
        self.controls.enable_damping = cfg.enable_damping
        self.controls.damping_factor = cfg.damping_factor
        self.controls.update()
        self.controls.save_state()

        add_base_objects(self.scene)
        self.resize(cfg.surface_width, cfg.surface_height)

        self.sandbox = ScriptSandbox()
        self.clock = clock or Clock()
        self.driver = FrameUpdateDriver(self.scene, self.clock)
        self.disposed = False
        self._host_attrs = {obj: frozenset(vars(obj))
                            for obj in (self.scene, self.camera, self.renderer)}

    # ── Sandbox boundary ────────────────────────────────────────────────
    def bindings(self) -> dict:
        return {
            'scene': self.scene,
            'kit': build_kit(self.config.random_seed),
            'camera': self.camera,
            'renderer': self.renderer,
        }

    def execute(self, script: str) -> None:
        self.sandbox.execute(script, self.bindings())

    # ── View state ──────────────────────────────────────────────────────
    def capture_view_state(self) -> ViewState:
        return capture_view_state(self.camera, self.controls)

    def restore_view_state(self, state: ViewState) -> None:
        restore_view_state(self.camera, self.controls, state)

    # ── Scene content ───────────────────────────────────────────────────
    def reset_to_base(self) -> None:
        """Drop every object and scene setting a script could have changed."""
        scene = self.scene
        children = scene.children if isinstance(scene.children, list) else []
        for child in list(children):
            if isinstance(child, Object3D):
                child.parent = None
                dispose_object_tree(child)

        # Instance attributes added by scripts would shadow methods and settings.
        for obj, names in self._host_attrs.items():
            for name in set(vars(obj)) - names:
                delattr(obj, name)

        scene.name = "scene"
        scene.children = []
        scene.parent = None
        scene.background = Color(self.config.background)
        scene.fog = None
        scene.user_data = {}
        scene.position = Vec3(0, 0, 0)
        scene.rotation = Vec3(0, 0, 0)
        scene.scale = Vec3(1, 1, 1)
        scene.visible = True
        self.camera.user_data = {}

        add_base_objects(scene)

    def resize(self, width: int, height: int) -> None:
        self.renderer.set_size(width, height)
        w, h = self.renderer.get_size()
        self.camera.aspect = w / h
        self.camera.update_projection_matrix()

    # ── Frame loop ──────────────────────────────────────────────────────
    def frame(self):
        """Advance one frame: object callbacks, controls, render."""
        if self.disposed:
            return []
        self.driver.tick()
        self.controls.update()
        return self.renderer.render(self.scene, self.camera)

    def snapshot(self) -> str:
        """Render the current scene once, without advancing callbacks or controls."""
        return "\n".join(self.renderer.render(self.scene, self.camera))

    def dispose(self) -> None:
        self.disposed = True
        self.controls.enabled = False
        self.renderer.dispose()
