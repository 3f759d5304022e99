import json

import pytest

from scene_mutator.errors import CorruptChain, EmptyScript, InvalidParent, UnknownState
from scene_mutator.versions import VersionNode, VersionTree

from helpers import make_view_state


class RecordingStage:
    def __init__(self):
        self.calls = []

    def reset_to_base(self):
        self.calls.append(("reset",))

    def execute(self, script):
        self.calls.append(("execute", script))

    def restore_view_state(self, state):
        self.calls.append(("restore", state))


@pytest.fixture
def tree():
    return VersionTree(make_view_state())


def test_new_tree_has_only_the_root(tree):
    assert len(tree) == 1
    root = tree[0]
    assert root.id == 0
    assert root.script is None
    assert root.parent_id is None


def test_append_assigns_sequential_ids(tree):
    assert tree.append("A", 0, make_view_state(1)) == 1
    assert tree.append("B", 1, make_view_state(2)) == 2
    assert tree[2].parent_id == 1


@pytest.mark.parametrize("parent", [-1, 1, 5, None, True])
def test_append_rejects_invalid_parent(tree, parent):
    with pytest.raises(InvalidParent):
        tree.append("A", parent, make_view_state())
    assert len(tree) == 1


def test_append_rejects_blank_script(tree):
    with pytest.raises(EmptyScript):
        tree.append("   ", 0, make_view_state())
    assert len(tree) == 1


def test_path_from_is_oldest_first(tree):
    tree.append("A", 0, make_view_state())
    tree.append("B", 1, make_view_state())
    tree.append("C", 2, make_view_state())

    assert tree.path_from(0) == []
    assert tree.path_from(3) == ["A", "B", "C"]


@pytest.mark.parametrize("target", [-1, 1, 99])
def test_path_from_unknown_state(tree, target):
    with pytest.raises(UnknownState):
        tree.path_from(target)


def test_path_from_detects_corrupt_chain(tree):
    tree.append("A", 0, make_view_state())
    tree.append("B", 1, make_view_state())
    tree._nodes[2] = VersionNode(2, "B", 7, make_view_state())

    with pytest.raises(CorruptChain):
        tree.path_from(2)


def test_branching_keeps_old_branch_revertable(tree):
    tree.append("A", 0, make_view_state())      # 1
    tree.append("B", 1, make_view_state())      # 2
    tree.append("C", 1, make_view_state())      # 3, sibling of 2

    assert tree.path_from(3) == ["A", "C"]
    assert tree.path_from(2) == ["A", "B"]
    assert tree.children(1) == [2, 3]


def test_revert_resets_replays_and_restores_view(tree):
    view = make_view_state(7)
    tree.append("A", 0, make_view_state())
    tree.append("B", 1, view)
    stage = RecordingStage()

    tree.revert(2, stage)

    assert stage.calls == [
        ("reset",),
        ("execute", "A"),
        ("execute", "B"),
        ("restore", view),
    ]


def test_revert_unknown_state_touches_nothing(tree):
    stage = RecordingStage()
    with pytest.raises(UnknownState):
        tree.revert(4, stage)
    assert stage.calls == []


def test_save_and_load_round_trip(tree, tmp_path):
    tree.append("A", 0, make_view_state(1))
    tree.append("B", 1, make_view_state(2))
    tree.append("C", 1, make_view_state(3))
    path = tmp_path / "versions.json"

    tree.save(path)
    loaded = VersionTree.load(path)

    assert len(loaded) == 4
    assert loaded.path_from(3) == ["A", "C"]
    assert loaded[2].view_state == tree[2].view_state


def test_open_starts_fresh_then_reloads_saved_tree(tmp_path):
    path = tmp_path / "versions.json"

    tree = VersionTree.open(path, make_view_state(0))
    assert len(tree) == 1
    assert tree.root.view_state == make_view_state(0)

    tree.append("A", 0, make_view_state(1))
    tree.save(path)

    reopened = VersionTree.open(path, make_view_state(9))
    assert len(reopened) == 2
    assert reopened.path_from(1) == ["A"]
    assert reopened.root.view_state == make_view_state(0)


def test_load_rejects_forward_parent_links(tree):
    tree.append("A", 0, make_view_state())
    data = json.loads(json.dumps(tree.to_dict()))
    data["nodes"][1]["parent_id"] = 1

    with pytest.raises(CorruptChain):
        VersionTree.from_dict(data)


def test_load_rejects_scripted_root(tree):
    data = tree.to_dict()
    data["nodes"][0]["script"] = "x = 1"

    with pytest.raises(CorruptChain):
        VersionTree.from_dict(data)
