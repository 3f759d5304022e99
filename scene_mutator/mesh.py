#
# PROJECT: wireframe-scene-mutator
# MODULE: scene_mutator/mesh.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import logging
import math

logger = logging.getLogger(__name__)


class Geometry:
    """
    Vertex/face container shared by mesh instances.

    `faces` holds index lists: three or more indices form a closed polygon,
    two indices form a single line segment.
    """

    def __init__(self, vertices=None, faces=None):
        self.vertices = [list(map(float, v)) for v in (vertices or [])]
        self.faces = [list(f) for f in (faces or [])]
        self.disposed = False

    def dispose(self):
        """Mark the geometry as released; the renderer skips disposed data."""
        self.disposed = True


class BoxGeometry(Geometry):
    def __init__(self, width=1.0, height=1.0, depth=1.0):
        hx, hy, hz = width / 2.0, height / 2.0, depth / 2.0
        vertices = [
            [-hx, -hy, -hz], [ hx, -hy, -hz], [ hx,  hy, -hz], [-hx,  hy, -hz],
            [-hx, -hy,  hz], [ hx, -hy,  hz], [ hx,  hy,  hz], [-hx,  hy,  hz],
        ]
        faces = [
            [0, 1, 2, 3],  # back
            [5, 4, 7, 6],  # front
            [4, 0, 3, 7],  # left
            [1, 5, 6, 2],  # right
            [3, 2, 6, 7],  # top
            [4, 5, 1, 0],  # bottom
        ]
        super().__init__(vertices, faces)
        self.width, self.height, self.depth = width, height, depth


class PlaneGeometry(Geometry):
    """Single quad in the XY plane, facing +Z."""

    def __init__(self, width=1.0, height=1.0):
        hx, hy = width / 2.0, height / 2.0
        super().__init__(
            [[-hx, -hy, 0], [hx, -hy, 0], [hx, hy, 0], [-hx, hy, 0]],
            [[0, 1, 2, 3]],
        )
        self.width, self.height = width, height


class SphereGeometry(Geometry):
    """Latitude/longitude sphere made of quads (triangles at the poles)."""

    def __init__(self, radius=1.0, width_segments=12, height_segments=8):
        width_segments = max(3, int(width_segments))
        height_segments = max(2, int(height_segments))
        vertices = []
        for iy in range(height_segments + 1):
            phi = math.pi * iy / height_segments
            for ix in range(width_segments):
                theta = 2 * math.pi * ix / width_segments
                vertices.append([
                    -radius * math.cos(theta) * math.sin(phi),
                    radius * math.cos(phi),
                    radius * math.sin(theta) * math.sin(phi),
                ])
        faces = []
        for iy in range(height_segments):
            for ix in range(width_segments):
                a = iy * width_segments + ix
                b = iy * width_segments + (ix + 1) % width_segments
                c = (iy + 1) * width_segments + (ix + 1) % width_segments
                d = (iy + 1) * width_segments + ix
                if iy == 0:
                    faces.append([a, c, d])
                elif iy == height_segments - 1:
                    faces.append([a, b, d])
                else:
                    faces.append([a, b, c, d])
        super().__init__(vertices, faces)
        self.radius = radius


class CylinderGeometry(Geometry):
    """Open-sided cylinder (or cone) around the Y axis with capped ends."""

    def __init__(self, radius_top=1.0, radius_bottom=1.0, height=1.0, radial_segments=12):
        radial_segments = max(3, int(radial_segments))
        hy = height / 2.0
        vertices = []
        for y, r in ((hy, radius_top), (-hy, radius_bottom)):
            for i in range(radial_segments):
                theta = 2 * math.pi * i / radial_segments
                vertices.append([r * math.sin(theta), y, r * math.cos(theta)])
        faces = []
        n = radial_segments
        for i in range(n):
            j = (i + 1) % n
            faces.append([i, n + i, n + j, j])
        if radius_top > 0:
            faces.append(list(range(n)))
        if radius_bottom > 0:
            faces.append(list(range(2 * n - 1, n - 1, -1)))
        super().__init__(vertices, faces)
        self.radius_top, self.radius_bottom, self.height = radius_top, radius_bottom, height


class GridGeometry(Geometry):
    """Square grid of line segments in the XZ plane, centered at the origin."""

    def __init__(self, size=10.0, divisions=10):
        divisions = max(1, int(divisions))
        half = size / 2.0
        step = size / divisions
        vertices = []
        faces = []
        for i in range(divisions + 1):
            k = -half + i * step
            base = len(vertices)
            vertices.extend([[-half, 0, k], [half, 0, k], [k, 0, -half], [k, 0, half]])
            faces.append([base, base + 1])
            faces.append([base + 2, base + 3])
        super().__init__(vertices, faces)
        self.size, self.divisions = size, divisions


class ObjGeometry(Geometry):
    """Geometry loaded from a Wavefront OBJ file."""

    def __init__(self, filename=None):
        super().__init__()
        if filename:
            self.load_from_obj(filename)
        if not self.vertices or not self.faces:
            self._make_fallback_cube()

    def load_from_obj(self, filename):
        try:
            with open(filename, 'r') as f:
                for line in f:
                    if line.startswith('v '):
                        self.vertices.append([float(x) for x in line.split()[1:4]])
                    elif line.startswith('f '):
                        # Handle v/vt/vn format by splitting by '/'
                        face = [int(x.split('/')[0]) - 1 for x in line.split()[1:]]
                        self.faces.append(face)
        except (OSError, ValueError) as e:
            logger.warning("Could not load %r: %s", filename, e)
            self.vertices, self.faces = [], []

    def _make_fallback_cube(self):
        cube = BoxGeometry(2.0, 2.0, 2.0)
        self.vertices, self.faces = cube.vertices, cube.faces

    @classmethod
    def from_obj(cls, filename):
        return cls(filename)
