from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure repo root is importable so `import scene_mutator` works under pytest's import modes.
_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(_ROOT))

from scene_mutator.config import EngineConfig  # noqa: E402
from scene_mutator.controller import MutationController  # noqa: E402
from scene_mutator.frame_driver import Clock  # noqa: E402
from scene_mutator.stage import Stage  # noqa: E402


class ManualTime:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


@pytest.fixture
def manual_time():
    return ManualTime()


@pytest.fixture
def stage(manual_time):
    config = EngineConfig(surface_width=80, surface_height=48)
    return Stage(config, clock=Clock(time_source=manual_time))


@pytest.fixture
def controller(stage):
    return MutationController(stage)
