#
# PROJECT: wireframe-scene-mutator
# MODULE: scene_mutator/versions.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .errors import EmptyScript, InvalidParent, CorruptChain, UnknownState
from .view_state import ViewState

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1


@dataclass(frozen=True)
class VersionNode:
    id: int
    script: Optional[str]
    parent_id: Optional[int]
    view_state: ViewState


class VersionTree:
    """
    Append-only arena of scene versions addressed by list index.

    Node 0 is the pristine base. Every other node records the script that
    produced it and the node it was applied on top of; parents always have
    a smaller index, so the parent links cannot form a cycle. Reverting to
    an old node and appending again creates a sibling branch, and the old
    branch stays revertable.
    """

    def __init__(self, root_view_state: ViewState):
        self._nodes: List[VersionNode] = [VersionNode(0, None, None, root_view_state)]

    def __len__(self):
        return len(self._nodes)

    def __getitem__(self, node_id: int) -> VersionNode:
        if not self.contains(node_id):
            raise UnknownState(node_id)
        return self._nodes[node_id]

    def __iter__(self):
        return iter(list(self._nodes))

    @property
    def root(self) -> VersionNode:
        return self._nodes[0]

    def contains(self, node_id) -> bool:
        return (isinstance(node_id, int) and not isinstance(node_id, bool)
                and 0 <= node_id < len(self._nodes))

    def append(self, script: str, parent_id: int, view_state: ViewState) -> int:
        if not self.contains(parent_id):
            raise InvalidParent(f"Parent #{parent_id} is outside the tree (size {len(self._nodes)}).")
        if not isinstance(script, str) or not script.strip():
            raise EmptyScript()
        node_id = len(self._nodes)
        self._nodes.append(VersionNode(node_id, script, parent_id, view_state))
        logger.debug("Appended state #%d on top of #%d", node_id, parent_id)
        return node_id

    def children(self, node_id: int) -> List[int]:
        return [n.id for n in self._nodes if n.parent_id == node_id]

    def ancestry(self, target_id: int) -> List[int]:
        """Node ids from `target_id` up to and including the root."""
        if not self.contains(target_id):
            raise UnknownState(target_id)
        chain = [target_id]
        cursor = target_id
        while cursor != 0:
            parent = self._nodes[cursor].parent_id
            if not isinstance(parent, int) or not 0 <= parent < cursor:
                raise CorruptChain(f"State #{cursor} has an invalid parent pointer.")
            chain.append(parent)
            cursor = parent
        return chain

    def path_from(self, target_id: int) -> List[str]:
        """Scripts on the path from the root to `target_id`, oldest first."""
        scripts = []
        for node_id in self.ancestry(target_id):
            script = self._nodes[node_id].script
            if isinstance(script, str) and script.strip():
                scripts.append(script)
        scripts.reverse()
        return scripts

    def revert(self, target_id: int, stage) -> None:
        """
        Rebuild the scene for `target_id` by full replay: reset the stage
        to its base configuration, re-run every script on the path, then
        restore the node's view state.
        """
        scripts = self.path_from(target_id)
        stage.reset_to_base()
        for script in scripts:
            stage.execute(script)
        stage.restore_view_state(self._nodes[target_id].view_state)
        logger.info("Replayed %d script(s) to reach state #%d", len(scripts), target_id)

    # ── Persistence ─────────────────────────────────────────────────────
    def to_dict(self) -> dict:
        return {
            'format': FORMAT_VERSION,
            'nodes': [
                {
                    'id': n.id,
                    'script': n.script,
                    'parent_id': n.parent_id,
                    'view_state': n.view_state.to_dict(),
                }
                for n in self._nodes
            ],
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'VersionTree':
        if data.get('format') != FORMAT_VERSION:
            raise CorruptChain(f"Unsupported version tree format: {data.get('format')!r}")
        raw_nodes = data.get('nodes') or []
        if not raw_nodes:
            raise CorruptChain("Version tree has no root node.")

        nodes = []
        for index, raw in enumerate(raw_nodes):
            node_id = raw.get('id')
            script = raw.get('script')
            parent_id = raw.get('parent_id')
            if node_id != index:
                raise CorruptChain(f"Node at index {index} has id {node_id!r}.")
            if index == 0:
                if script is not None or parent_id is not None:
                    raise CorruptChain("Root node must have no script and no parent.")
            else:
                if not isinstance(parent_id, int) or not 0 <= parent_id < index:
                    raise CorruptChain(f"State #{index} has an invalid parent pointer.")
                if not isinstance(script, str) or not script.strip():
                    raise CorruptChain(f"State #{index} has no script.")
            try:
                view_state = ViewState.from_dict(raw['view_state'])
            except (KeyError, TypeError, ValueError) as e:
                raise CorruptChain(f"State #{index} has an unreadable view state: {e}") from e
            nodes.append(VersionNode(index, script, parent_id, view_state))

        tree = cls(nodes[0].view_state)
        tree._nodes = nodes
        return tree

    def save(self, path) -> None:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, path) -> 'VersionTree':
        with open(path, 'r', encoding='utf-8') as f:
            return cls.from_dict(json.load(f))

    @classmethod
    def open(cls, path, root_view_state: ViewState) -> 'VersionTree':
        """Load the tree saved at `path`, or start a new one if nothing is saved there yet."""
        if not Path(path).exists():
            return cls(root_view_state)
        tree = cls.load(path)
        logger.info("Loaded %d scene states from %s", len(tree), path)
        return tree
