#
# PROJECT: wireframe-scene-mutator
# MODULE: scene_mutator/config.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import os
from dataclasses import dataclass
from typing import Optional, Tuple

ENV_PREFIX = "SCENE_MUTATOR_"


@dataclass
class EngineConfig:
    """Configuration for the stage, sandbox and mutation controller.

    Built once at process start and treated as read-only afterwards.
    """
    background: str = "#020617"
    camera_fov: float = 60.0
    camera_near: float = 0.1
    camera_far: float = 1000.0
    camera_position: Tuple[float, float, float] = (5.0, 4.0, 5.0)
    control_target: Tuple[float, float, float] = (0.0, 0.5, 0.0)
    enable_damping: bool = True
    damping_factor: float = 0.05
    history_limit: int = 30
    random_seed: int = 0
    use_braille: bool = True
    surface_width: int = 160
    surface_height: int = 96
    log_level: str = "INFO"
    log_file: Optional[str] = None

    def __post_init__(self):
        if self.history_limit < 1:
            raise ValueError("history_limit must be at least 1")
        if not 0.0 < self.damping_factor <= 1.0:
            raise ValueError("damping_factor must be in (0, 1]")
        if not 0.0 < self.camera_near < self.camera_far:
            raise ValueError("camera_near must be positive and below camera_far")
        if self.surface_width < 1 or self.surface_height < 1:
            raise ValueError("surface size must be positive")
        self.camera_position = tuple(float(v) for v in self.camera_position)
        self.control_target = tuple(float(v) for v in self.control_target)

    @classmethod
    def from_env(cls, environ=None) -> 'EngineConfig':
        """
        Build a config from SCENE_MUTATOR_* variables.
        Braille output is autodetected from TERM and LANG unless
        SCENE_MUTATOR_USE_BRAILLE says otherwise.
        """
        env = os.environ if environ is None else environ
        term = env.get('TERM', '').lower()
        lang = env.get('LANG', '').lower()

        is_linux_console = term == 'linux'
        supports_utf8 = 'utf-8' in lang or 'utf8' in lang

        kwargs = {
            # Linux console font often lacks braille, so default off there
            'use_braille': supports_utf8 and not is_linux_console,
        }
        readers = {
            'BACKGROUND': ('background', str),
            'CAMERA_FOV': ('camera_fov', float),
            'CAMERA_NEAR': ('camera_near', float),
            'CAMERA_FAR': ('camera_far', float),
            'ENABLE_DAMPING': ('enable_damping', _parse_bool),
            'DAMPING_FACTOR': ('damping_factor', float),
            'HISTORY_LIMIT': ('history_limit', int),
            'RANDOM_SEED': ('random_seed', int),
            'USE_BRAILLE': ('use_braille', _parse_bool),
            'LOG_LEVEL': ('log_level', str),
            'LOG_FILE': ('log_file', str),
        }
        for suffix, (name, parse) in readers.items():
            raw = env.get(ENV_PREFIX + suffix)
            if raw is None or raw.strip() == '':
                continue
            try:
                kwargs[name] = parse(raw.strip())
            except ValueError as e:
                raise ValueError(f"{ENV_PREFIX}{suffix}: {e}") from e
        return cls(**kwargs)


def _parse_bool(raw: str) -> bool:
    val = raw.lower()
    if val in ('1', 'true', 'yes', 'on'):
        return True
    if val in ('0', 'false', 'no', 'off'):
        return False
    raise ValueError(f"not a boolean: {raw!r}")
