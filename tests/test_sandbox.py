import pytest

from scene_mutator.errors import EmptyScript, ExecutionError, ScriptRejected
from scene_mutator.sandbox import BINDING_NAMES, UPDATE_KEY, ScriptSandbox

from helpers import object_names


@pytest.mark.parametrize("script", ["", "   ", "\n\t\n"])
def test_blank_script_raises_empty_script(stage, script):
    with pytest.raises(EmptyScript):
        stage.execute(script)


def test_script_sees_exactly_the_four_bindings(stage):
    stage.execute(
        "box = kit.Mesh(kit.BoxGeometry(1, 1, 1), kit.StandardMaterial(0xff0000), name='box')\n"
        "box.position.set(1, 2, 3)\n"
        "scene.add(box)\n"
        "camera.fov = 45\n"
        "camera.update_projection_matrix()\n"
        "renderer.set_size(40, 20)\n"
    )

    box = stage.scene.get_object_by_name("box")
    assert box is not None
    assert box.position.to_tuple() == (1.0, 2.0, 3.0)
    assert stage.camera.fov == 45
    assert stage.renderer.get_size() == (40, 20)


@pytest.mark.parametrize("script", [
    "import os",
    "from os import path",
    "def f():\n    import sys\n",
    "global scene",
    "class Thing:\n    pass",
    "scene.__class__",
    "x = kit.__dict__",
    "__builtins__",
    "open('/etc/passwd')",
    "eval('1 + 1')",
    "getattr(scene, 'name')",
    "'{0.name}'.format(scene)",
    "g = (x for x in [])\nf = g.gi_frame",
    "f = lambda _hidden: _hidden",
    "kit.Vec3.magnitude = lambda self: 123.0",
    "kit.math.sqrt = abs",
    "kit.PI += 1",
    "del kit.random",
])
def test_disallowed_constructs_are_rejected_before_running(stage, script):
    before = object_names(stage.scene)
    with pytest.raises(ScriptRejected):
        stage.execute("scene.add(kit.Group(name='should-not-exist'))\n" + script)
    assert object_names(stage.scene) == before


def test_rejection_is_an_execution_error(stage):
    with pytest.raises(ExecutionError):
        stage.execute("import os")


def test_unlisted_builtins_are_not_reachable(stage):
    with pytest.raises(ExecutionError) as info:
        stage.execute("hasattr(scene, 'name')")
    assert isinstance(info.value.cause, NameError)


def test_syntax_error_is_wrapped(stage):
    with pytest.raises(ExecutionError) as info:
        stage.execute("scene.add(")
    assert not isinstance(info.value, ScriptRejected)
    assert isinstance(info.value.cause, SyntaxError)


def test_runtime_error_carries_cause_and_line(stage):
    with pytest.raises(ExecutionError) as info:
        stage.execute("a = 1\nb = 2\nraise ValueError('boom')\n")
    assert isinstance(info.value.cause, ValueError)
    assert info.value.line == 3
    assert "boom" in str(info.value)


def test_partial_mutations_are_not_rolled_back(stage):
    with pytest.raises(ExecutionError):
        stage.execute("scene.add(kit.Group(name='partial'))\n1 / 0\n")
    assert stage.scene.get_object_by_name("partial") is not None


def test_update_callback_closure_survives_execution(stage):
    stage.execute(
        "cube = kit.Mesh(kit.BoxGeometry(), name='cube')\n"
        "scene.add(cube)\n"
        "def spin(t):\n"
        "    cube.rotation.y = t * 2\n"
        "cube.user_data['update'] = spin\n"
    )
    cube = stage.scene.get_object_by_name("cube")
    cube.user_data[UPDATE_KEY](1.5)
    assert cube.rotation.y == 3.0


def test_kit_is_fresh_for_every_execution(stage):
    stage.execute("k = kit\nk.Mesh = None")
    stage.execute("scene.add(kit.Mesh(kit.BoxGeometry(), name='still-works'))")
    assert stage.scene.get_object_by_name("still-works") is not None


def test_kit_random_is_deterministic(stage):
    script = "scene.add(kit.Group(name=str(kit.random.random())))"
    stage.execute(script)
    stage.execute(script)
    names = [c.name for c in stage.scene.children[-2:]]
    assert names[0] == names[1]


def test_bindings_must_match_exactly():
    sandbox = ScriptSandbox()
    with pytest.raises(ValueError):
        sandbox.execute("x = 1", {"scene": object()})
    with pytest.raises(ValueError):
        sandbox.execute("x = 1", dict.fromkeys(BINDING_NAMES + ("os",)))


def test_print_is_routed_to_the_log(stage, caplog):
    caplog.set_level("INFO", logger="scene_mutator.sandbox")
    stage.execute("print('hello', scene.name)")
    assert "hello scene" in caplog.text


@pytest.mark.parametrize("depth", [2000, 200000])
def test_deeply_nested_script_is_an_execution_error(stage, depth):
    with pytest.raises(ExecutionError):
        stage.execute("x = " + "-" * depth + "1")


def test_null_byte_is_an_execution_error(stage):
    with pytest.raises(ExecutionError):
        stage.execute("x = 1\0")


def test_patched_kit_class_does_not_leak(stage):
    from scene_mutator.math_utils import Vec3

    stage.execute(
        "V = kit.Vec3\n"
        "V.magnitude = lambda self: 123.0\n"
        "scene.add(kit.Group(name=str(kit.Vec3(3, 4, 0).magnitude())))\n"
    )
    assert "123.0" in object_names(stage.scene)
    assert Vec3(3, 4, 0).magnitude() == 5.0

    stage.execute("scene.add(kit.Group(name='next:' + str(kit.Vec3(3, 4, 0).magnitude())))")
    assert "next:5.0" in object_names(stage.scene)


def test_patched_kit_math_does_not_leak(stage):
    import math

    stage.execute("m = kit.math\nm.sqrt = lambda x: -1.0")
    assert math.sqrt(4) == 2.0

    stage.execute("scene.add(kit.Group(name=str(kit.math.sqrt(4))))")
    assert "2.0" in object_names(stage.scene)


def test_parenting_cycle_fails_the_script_and_frames_keep_running(stage):
    with pytest.raises(ExecutionError) as info:
        stage.execute("g = kit.Group(name='loop')\nscene.add(g)\ng.add(scene)\n")
    assert isinstance(info.value.cause, ValueError)
    assert stage.scene.parent is None

    rows = stage.frame()
    assert len(rows) == 12
