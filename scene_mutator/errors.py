#
# PROJECT: wireframe-scene-mutator
# MODULE: scene_mutator/errors.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

from typing import Optional


class SceneMutatorError(RuntimeError):
    """Base error for scene mutation failures (fail fast, nothing retried)."""


class EmptyScript(SceneMutatorError):
    """A script was blank after trimming."""

    def __init__(self, message: str = "No executable code was provided."):
        super().__init__(message)


class ExecutionError(SceneMutatorError):
    """A script failed while compiling or running against the scene.

    Mutations the script made before failing are left in place.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None,
                 line: Optional[int] = None):
        super().__init__(message)
        self.cause = cause
        self.line = line


class ScriptRejected(ExecutionError):
    """A script used a construct the sandbox does not allow; nothing ran."""


class InvalidParent(SceneMutatorError):
    """append() was given a parent id outside the tree. Indicates a bug."""


class CorruptChain(SceneMutatorError):
    """A parent link in the version tree is missing or points forward. Indicates a bug."""


class UnknownState(SceneMutatorError):
    def __init__(self, node_id):
        super().__init__(f"State #{node_id} is not available.")
        self.node_id = node_id


class BusyError(SceneMutatorError):
    def __init__(self, message: str = "Wait for the current request to finish."):
        super().__init__(message)
