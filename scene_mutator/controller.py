#
# PROJECT: wireframe-scene-mutator
# MODULE: scene_mutator/controller.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import logging
from collections import deque
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, List, Optional

from .config import EngineConfig
from .errors import BusyError, EmptyScript, ExecutionError, SceneMutatorError, UnknownState
from .extraction import extract_script, strip_script_blocks
from .stage import Stage
from .versions import VersionTree

logger = logging.getLogger(__name__)

ROLES = ("user", "assistant")


@dataclass(frozen=True)
class ConversationEntry:
    role: str
    content: str

    def __post_init__(self):
        if self.role not in ROLES:
            raise ValueError(f"role must be one of {ROLES}, got {self.role!r}")


class ConversationHistory:
    """Most recent `limit` conversation turns, oldest dropped first."""

    def __init__(self, limit: int = 30):
        self._entries = deque(maxlen=limit)

    def __len__(self):
        return len(self._entries)

    def __iter__(self):
        return iter(list(self._entries))

    @property
    def limit(self) -> int:
        return self._entries.maxlen

    def append(self, role: str, content: str) -> None:
        self._entries.append(ConversationEntry(role, content))

    def entries(self) -> List[ConversationEntry]:
        return list(self._entries)


@dataclass
class RevertAction:
    """Revert handle exposed next to each applied response."""
    node_id: int
    controller: 'MutationController'

    @property
    def available(self) -> bool:
        return self.controller.tree.contains(self.node_id)

    def __call__(self) -> str:
        try:
            return self.controller.revert(self.node_id)
        except SceneMutatorError as e:
            logger.warning("Revert to #%d failed: %s", self.node_id, e)
            return f"Revert failed: {e}"


@dataclass
class SubmitResult:
    applied_script: bool
    display_text: str
    node_id: Optional[int] = None
    error: Optional[SceneMutatorError] = None
    revert_action: Optional[RevertAction] = None


class MutationController:
    """
    Turns model responses into recorded scene versions.

    One mutation at a time: while a model round trip, a script or a replay
    is in progress the controller is busy, and any further submit or revert
    fails with BusyError instead of queuing. The stage is only touched
    through script execution and replay.
    """

    def __init__(self, stage: Stage, tree: VersionTree = None,
                 config: EngineConfig = None,
                 extractor: Callable[[str], Optional[str]] = extract_script):
        self.stage = stage
        self.config = config or stage.config
        self.tree = tree if tree is not None else VersionTree(stage.capture_view_state())
        self.history = ConversationHistory(self.config.history_limit)
        self.revert_actions: List[RevertAction] = []
        self._extractor = extractor
        self._current = 0
        self._busy = False

    @property
    def current_node_id(self) -> int:
        return self._current

    @property
    def busy(self) -> bool:
        return self._busy

    @contextmanager
    def _exclusive(self, what: str):
        if self._busy:
            raise BusyError(f"Wait for the current request to finish before {what}.")
        self._busy = True
        try:
            yield
        finally:
            self._busy = False

    # ── Mutation ────────────────────────────────────────────────────────
    def submit(self, response_text: str) -> SubmitResult:
        """Apply a model response to the scene."""
        with self._exclusive("submitting"):
            return self._apply(response_text)

    def ask(self, prompt: str,
            send: Callable[[str, List[ConversationEntry], str], str]) -> SubmitResult:
        """
        Full round trip: hold the busy flag while `send(prompt, history,
        snapshot)` talks to the model, record both turns, then apply the
        response. `snapshot` is a fresh text rendering of the scene; if it
        cannot be taken nothing is sent. Errors raised while rendering or by
        `send` propagate; the busy flag is released.
        """
        with self._exclusive("sending"):
            snapshot = self.stage.snapshot()
            response_text = send(prompt, self.history.entries(), snapshot) or ""
            self.history.append("user", prompt)
            self.history.append("assistant", response_text)
            return self._apply(response_text)

    def _apply(self, response_text: str) -> SubmitResult:
        script = self._extractor(response_text)
        if not script:
            return SubmitResult(False, response_text or "No code block returned.")

        try:
            self.stage.execute(script)
        except (ExecutionError, EmptyScript) as e:
            logger.warning("Response script failed; state #%d kept as current: %s",
                           self._current, e)
            return SubmitResult(False, f"Code execution failed: {e}", error=e)

        view_state = self.stage.capture_view_state()
        node_id = self.tree.append(script, self._current, view_state)
        self._current = node_id
        action = RevertAction(node_id, self)
        self.revert_actions.append(action)
        logger.info("Applied response as state #%d", node_id)

        display = strip_script_blocks(response_text) or "Applied scene update."
        return SubmitResult(True, display, node_id=node_id, revert_action=action)

    # ── Revert ──────────────────────────────────────────────────────────
    def revert(self, node_id: int) -> str:
        """Replay the scene to `node_id` and make it current."""
        with self._exclusive("reverting"):
            if not self.tree.contains(node_id):
                raise UnknownState(node_id)
            self.tree.revert(node_id, self.stage)
            self._current = node_id

        message = f"Reverted to scene state #{node_id}."
        self.history.append("user", f"Revert to scene state #{node_id}.")
        self.history.append("assistant", message)
        return message
