#
# PROJECT: wireframe-scene-mutator
# MODULE: scene_mutator/frame_driver.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import logging
import time

from .objects import Object3D
from .sandbox import UPDATE_KEY

logger = logging.getLogger(__name__)


class Clock:
    """Seconds elapsed since construction (or the last `start()`)."""

    def __init__(self, time_source=time.perf_counter):
        self._time_source = time_source
        self.start_time = 0.0
        self.start()

    def start(self):
        self.start_time = self._time_source()

    def get_elapsed_time(self) -> float:
        return self._time_source() - self.start_time


class FrameUpdateDriver:
    """
    Per-frame dispatcher for callbacks scripts attach to scene objects.

    Each tick walks the scene and calls `user_data["update"](elapsed)` on
    every object that has one. A callback that raises is logged and removed
    from its object for good; the rest of the scene keeps animating.
    """

    def __init__(self, scene: Object3D, clock: Clock = None):
        self.scene = scene
        self.clock = clock or Clock()
        self.detached = []  # names of objects whose callback was removed

    def tick(self, elapsed: float = None) -> int:
        """Run one frame of callbacks. Returns how many completed."""
        if elapsed is None:
            elapsed = self.clock.get_elapsed_time()
        completed = 0

        def visit(obj):
            nonlocal completed
            callback = obj.user_data.get(UPDATE_KEY)
            if not callable(callback):
                return
            try:
                callback(elapsed)
            except Exception:
                label = obj.name or "unnamed"
                logger.exception('user_data.update failed for "%s"; detaching it', label)
                obj.user_data.pop(UPDATE_KEY, None)
                self.detached.append(label)
            else:
                completed += 1

        self.scene.traverse(visit)
        return completed
