#
# PROJECT: wireframe-scene-mutator
# MODULE: scene_mutator/renderer.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

from .canvas import Canvas
from .camera import PerspectiveCamera
from .objects import Mesh
from .rasterizer import draw_line_dda
from .scene import Scene


class Renderer:
    """
    Wireframe renderer drawing into a Braille/ASCII text surface.

    render(scene, camera) draws one frame and returns it as a list of text
    rows; the last frame is also kept in `frame`.

    Pipeline:
      1. Build canvas from the surface size
      2. Collect visible meshes with live geometry, sorted by camera depth
      3. Per mesh: world transform -> camera space -> near/far test ->
         perspective projection
      4. Per face: draw the closed outline (or the single segment of a
         two-index face) with 2D clipping
    """

    def __init__(self, width: int = 160, height: int = 96, use_braille: bool = True):
        self.width = 1
        self.height = 1
        self.use_braille = use_braille
        self.frame = []
        self.info = {'frames': 0, 'meshes': 0, 'segments': 0}
        self.set_size(width, height)

    def set_size(self, width: int, height: int):
        """Set the drawing surface size in canvas pixels (2x4 per text cell)."""
        self.width = max(1, int(width))
        self.height = max(1, int(height))

    def get_size(self):
        return (self.width, self.height)

    def render(self, scene: Scene, camera: PerspectiveCamera):
        W, H = self.width, self.height
        canv = Canvas(W, H)
        aspect = W / H

        focal, _aspect, near_clip, far_clip = camera.projection
        half_w = W * 0.5
        half_h = H * 0.5

        # ── PASS 1: Collect meshes, sort by camera-space depth of origin ──
        render_queue = []

        def collect(obj):
            if not isinstance(obj, Mesh) or not obj.is_visible_in_tree():
                return
            if obj.geometry.disposed or not obj.material.visible:
                return
            world = obj.world_matrix()
            origin = camera.world_to_camera(world.mul_vec3((0.0, 0.0, 0.0)))
            render_queue.append((-origin.z, obj, world))

        scene.traverse(collect)
        render_queue.sort(key=lambda entry: entry[0])

        # ── PASS 2: Transform & draw ────────────────────────────────────
        segments = 0
        for _depth, mesh, world in render_queue:
            geometry = mesh.geometry
            proj_v = [None] * len(geometry.vertices)

            for i, v in enumerate(geometry.vertices):
                cam = camera.world_to_camera(world.mul_vec3(v))
                depth = -cam.z
                if depth <= near_clip or depth > far_clip:
                    continue
                px = (cam.x * focal / aspect / depth) * half_w + half_w
                py = (1.0 - (cam.y * focal / depth)) * half_h
                proj_v[i] = (px, py)

            for face in geometry.faces:
                if len(face) < 2:
                    continue
                pts = []
                for idx in face:
                    if idx >= len(proj_v) or proj_v[idx] is None:
                        pts = None
                        break
                    pts.append(proj_v[idx])
                if pts is None:
                    continue

                if len(pts) == 2:
                    if draw_line_dda(canv, pts[0], pts[1]):
                        segments += 1
                    continue
                for i in range(len(pts)):
                    if draw_line_dda(canv, pts[i], pts[(i + 1) % len(pts)]):
                        segments += 1

        self.frame = canv.rows(self.use_braille)
        self.info['frames'] += 1
        self.info['meshes'] = len(render_queue)
        self.info['segments'] = segments
        return self.frame

    def dispose(self):
        self.frame = []
