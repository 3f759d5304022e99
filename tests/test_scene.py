import pytest

from scene_mutator.color import Color, parse_hex_color
from scene_mutator.mesh import BoxGeometry, ObjGeometry, SphereGeometry
from scene_mutator.objects import BasicMaterial, Group, Mesh
from scene_mutator.scene import BASE_OBJECT_NAMES, Scene, add_base_objects

from helpers import object_names


def test_add_reparents_and_remove_detaches():
    a, b = Group("a"), Group("b")
    child = Mesh(BoxGeometry(), name="child")
    a.add(child)
    b.add(child)

    assert child.parent is b
    assert child not in a.children

    b.remove(child)
    assert child.parent is None
    assert b.children == []


def test_add_rejects_self_and_non_objects():
    g = Group("g")
    with pytest.raises(ValueError):
        g.add(g)
    with pytest.raises(TypeError):
        g.add("not an object")


def test_add_rejects_ancestors():
    scene = Scene()
    outer, inner = Group("outer"), Group("inner")
    scene.add(outer)
    outer.add(inner)

    with pytest.raises(ValueError):
        outer.add(scene)
    with pytest.raises(ValueError):
        inner.add(scene)
    with pytest.raises(ValueError):
        inner.add(outer)

    assert scene.parent is None
    assert inner.children == []
    assert inner.has_ancestor(scene)
    assert not scene.has_ancestor(inner)


def test_traverse_is_depth_first_and_tolerates_removal():
    scene = Scene()
    outer = Group("outer")
    inner = Group("inner")
    outer.add(inner)
    scene.add(outer, Group("sibling"))

    seen = []

    def visit(obj):
        seen.append(obj.name)
        if obj.name == "outer":
            scene.remove(scene.get_object_by_name("sibling"))

    scene.traverse(visit)
    assert seen == ["scene", "outer", "inner", "sibling"]
    assert scene.get_object_by_name("sibling") is None


def test_world_matrix_includes_parent_transform():
    parent = Group("p")
    parent.position.set(1, 0, 0)
    child = Group("c")
    child.position.set(0, 2, 0)
    parent.add(child)

    assert child.world_matrix().mul_vec3((0, 0, 0)).to_tuple() == (1.0, 2.0, 0.0)


def test_visibility_is_inherited():
    parent = Group("p")
    child = Group("c")
    parent.add(child)
    parent.visible = False
    assert not child.is_visible_in_tree()


def test_base_objects():
    scene = Scene()
    add_base_objects(scene)

    assert object_names(scene) == set(BASE_OBJECT_NAMES)
    assert scene.get_object_by_name("worldDirectionalLight").position.to_tuple() == (6.0, 8.0, 4.0)
    assert scene.get_object_by_name("groundPlane").position.y == pytest.approx(-0.001)


def test_color_parsing():
    assert parse_hex_color("#FF8800") == (255, 136, 0)
    assert parse_hex_color("nope") is None
    assert Color(0x020617).hex_string() == "#020617"
    assert Color("#00ff00") == Color((0, 255, 0))
    with pytest.raises(ValueError):
        Color("#12")
    with pytest.raises(ValueError):
        Color(0x1000000)


def test_sphere_faces_reference_valid_vertices():
    geo = SphereGeometry(1.0, 8, 6)
    assert all(0 <= i < len(geo.vertices) for face in geo.faces for i in face)


def test_obj_geometry_loads_file(tmp_path):
    path = tmp_path / "tri.obj"
    path.write_text("v 0 0 0\nv 1 0 0\nv 0 1 0\nf 1/1/1 2/2/2 3/3/3\n")
    geo = ObjGeometry.from_obj(str(path))

    assert geo.vertices == [[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [0.0, 1.0, 0.0]]
    assert geo.faces == [[0, 1, 2]]


def test_obj_geometry_falls_back_to_cube(tmp_path):
    geo = ObjGeometry.from_obj(str(tmp_path / "missing.obj"))
    assert len(geo.vertices) == 8
    assert len(geo.faces) == 6


def test_reset_to_base_removes_and_disposes_script_objects(stage):
    material = BasicMaterial(0xFF0000)
    box = Mesh(BoxGeometry(), material, name="box")
    stage.scene.add(box)
    stage.scene.background.set(0xFFFFFF)
    stage.scene.fog = "dense"

    stage.reset_to_base()

    assert object_names(stage.scene) == set(BASE_OBJECT_NAMES)
    assert box.geometry.disposed and material.disposed
    assert stage.scene.background == Color(0x020617)
    assert stage.scene.fog is None
