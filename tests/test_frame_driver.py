from scene_mutator.frame_driver import Clock, FrameUpdateDriver
from scene_mutator.mesh import BoxGeometry
from scene_mutator.objects import Group, Mesh
from scene_mutator.sandbox import UPDATE_KEY


def test_clock_measures_from_start(manual_time):
    manual_time.now = 10.0
    clock = Clock(time_source=manual_time)
    manual_time.now = 12.5
    assert clock.get_elapsed_time() == 2.5


def test_callbacks_receive_elapsed_time(stage, manual_time):
    seen = []
    obj = Group("watcher")
    obj.user_data[UPDATE_KEY] = seen.append
    stage.scene.add(obj)

    manual_time.now = 0.25
    stage.driver.tick()
    stage.driver.tick(elapsed=9.0)

    assert seen == [0.25, 9.0]


def test_failing_callback_is_detached_and_others_keep_running(stage):
    calls = {"good": 0, "bad": 0}

    def good(t):
        calls["good"] += 1

    def bad(t):
        calls["bad"] += 1
        raise RuntimeError("broken animation")

    bad_mesh = Mesh(BoxGeometry(), name="bad")
    bad_mesh.user_data[UPDATE_KEY] = bad
    bad_mesh.user_data["keep"] = True
    good_mesh = Mesh(BoxGeometry(), name="good")
    good_mesh.user_data[UPDATE_KEY] = good
    stage.scene.add(bad_mesh, good_mesh)

    assert stage.driver.tick(1.0) == 1
    assert stage.driver.tick(2.0) == 1

    assert calls == {"good": 2, "bad": 1}
    assert UPDATE_KEY not in bad_mesh.user_data
    assert bad_mesh.user_data["keep"] is True
    assert stage.driver.detached == ["bad"]


def test_detached_object_still_renders(stage):
    def bad(t):
        raise ValueError("nope")

    mesh = Mesh(BoxGeometry(), name="bad")
    mesh.user_data[UPDATE_KEY] = bad
    stage.scene.add(mesh)

    stage.frame()
    stage.frame()

    assert stage.scene.get_object_by_name("bad") is mesh
    # grid + ground plane + the detached mesh
    assert stage.renderer.info["meshes"] == 3
    assert stage.renderer.info["frames"] == 2


def test_failure_is_logged(stage, caplog):
    caplog.set_level("ERROR", logger="scene_mutator.frame_driver")
    obj = Group("noisy")
    obj.user_data[UPDATE_KEY] = lambda t: 1 / 0
    stage.scene.add(obj)

    stage.driver.tick(0.0)

    assert 'user_data.update failed for "noisy"' in caplog.text


def test_non_callable_entries_are_ignored(stage):
    obj = Group("inert")
    obj.user_data[UPDATE_KEY] = "not a function"
    stage.scene.add(obj)

    assert stage.driver.tick(0.0) == 0
    assert obj.user_data[UPDATE_KEY] == "not a function"


def test_callback_may_remove_objects_mid_frame(stage):
    victim = Group("victim")
    killer = Group("killer")
    killer.user_data[UPDATE_KEY] = lambda t: stage.scene.remove(victim)
    stage.scene.add(killer, victim)

    driver = FrameUpdateDriver(stage.scene)
    driver.tick(0.0)

    assert stage.scene.get_object_by_name("victim") is None
