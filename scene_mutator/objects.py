#
# PROJECT: wireframe-scene-mutator
# MODULE: scene_mutator/objects.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

from .color import Color
from .math_utils import Vec3, Mat4
from .mesh import Geometry, GridGeometry


class Object3D:
    """
    Node of the scene graph.

    Holds a local transform (position, XYZ Euler rotation in radians,
    scale), a list of children and a free-form `user_data` attachment bag.
    """

    def __init__(self, name: str = ""):
        self.name = name
        self.position = Vec3(0, 0, 0)
        self.rotation = Vec3(0, 0, 0)
        self.scale = Vec3(1, 1, 1)
        self.visible = True
        self.children = []
        self.parent = None
        self.user_data = {}

    def __repr__(self):
        return f"{type(self).__name__}(name={self.name!r})"

    def add(self, *objects) -> 'Object3D':
        for obj in objects:
            if not isinstance(obj, Object3D):
                raise TypeError(f"Expected an Object3D, got {type(obj).__name__}")
            if obj is self:
                raise ValueError("An object cannot be added as a child of itself.")
            if self.has_ancestor(obj):
                raise ValueError(f"Cannot add {obj.name or 'an object'} below its own descendant.")
            if obj.parent is not None:
                obj.parent.remove(obj)
            obj.parent = self
            self.children.append(obj)
        return self

    def has_ancestor(self, obj) -> bool:
        node = self.parent
        while node is not None:
            if node is obj:
                return True
            node = node.parent
        return False

    def remove(self, *objects) -> 'Object3D':
        for obj in objects:
            if obj in self.children:
                self.children.remove(obj)
                obj.parent = None
        return self

    def clear(self) -> 'Object3D':
        for child in list(self.children):
            child.parent = None
        self.children.clear()
        return self

    def traverse(self, visitor):
        """Call visitor(obj) on this object and every descendant, depth first.

        Children are snapshotted per node, so a visitor may add or remove
        objects without breaking the walk.
        """
        visitor(self)
        for child in list(self.children):
            child.traverse(visitor)

    def iter_objects(self):
        found = []
        self.traverse(found.append)
        return found

    def get_object_by_name(self, name: str):
        if self.name == name:
            return self
        for child in self.children:
            hit = child.get_object_by_name(name)
            if hit is not None:
                return hit
        return None

    def local_matrix(self) -> Mat4:
        return Mat4.compose(self.position, self.rotation, self.scale)

    def world_matrix(self) -> Mat4:
        mat = self.local_matrix()
        node = self.parent
        while node is not None:
            mat = node.local_matrix() @ mat
            node = node.parent
        return mat

    def is_visible_in_tree(self) -> bool:
        node = self
        while node is not None:
            if not node.visible:
                return False
            node = node.parent
        return True


class Group(Object3D):
    pass


# ── Materials ───────────────────────────────────────────────────────────

class Material:
    def __init__(self, color=0xFFFFFF, opacity: float = 1.0, visible: bool = True):
        self.color = Color(color)
        self.opacity = float(opacity)
        self.visible = visible
        self.disposed = False

    def dispose(self):
        self.disposed = True


class BasicMaterial(Material):
    pass


class StandardMaterial(Material):
    def __init__(self, color=0xFFFFFF, opacity=1.0, visible=True,
                 roughness: float = 1.0, metalness: float = 0.0):
        super().__init__(color, opacity, visible)
        self.roughness = float(roughness)
        self.metalness = float(metalness)


class ShadowMaterial(Material):
    def __init__(self, opacity=0.5, visible=True):
        super().__init__(0x000000, opacity, visible)


# ── Renderables ─────────────────────────────────────────────────────────

class Mesh(Object3D):
    def __init__(self, geometry: Geometry = None, material: Material = None, name: str = ""):
        super().__init__(name)
        if geometry is not None and not isinstance(geometry, Geometry):
            raise TypeError(f"Expected a Geometry, got {type(geometry).__name__}")
        self.geometry = geometry if geometry is not None else Geometry()
        self.material = material if material is not None else BasicMaterial()
        self.cast_shadow = False
        self.receive_shadow = False


class GridHelper(Mesh):
    def __init__(self, size=10.0, divisions=10, color_center_line=0x444444, color_grid=0x888888):
        super().__init__(GridGeometry(size, divisions), BasicMaterial(color_grid))
        self.center_color = Color(color_center_line)


# ── Lights ──────────────────────────────────────────────────────────────

class Light(Object3D):
    def __init__(self, color=0xFFFFFF, intensity: float = 1.0):
        super().__init__()
        self.color = Color(color)
        self.intensity = float(intensity)


class AmbientLight(Light):
    pass


class DirectionalLight(Light):
    def __init__(self, color=0xFFFFFF, intensity=1.0):
        super().__init__(color, intensity)
        self.position.set(0, 1, 0)
        self.cast_shadow = False


class PointLight(Light):
    def __init__(self, color=0xFFFFFF, intensity=1.0, distance: float = 0.0):
        super().__init__(color, intensity)
        self.distance = float(distance)


def dispose_object_tree(root: Object3D):
    """Release geometry and material resources held by a subtree."""
    def _dispose(node):
        geometry = getattr(node, 'geometry', None)
        if geometry is not None:
            geometry.dispose()
        material = getattr(node, 'material', None)
        if material is not None:
            material.dispose()
    root.traverse(_dispose)
