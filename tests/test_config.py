import pytest

from scene_mutator.config import EngineConfig


def test_defaults():
    config = EngineConfig()
    assert config.history_limit == 30
    assert config.camera_position == (5.0, 4.0, 5.0)
    assert config.control_target == (0.0, 0.5, 0.0)
    assert config.enable_damping is True


@pytest.mark.parametrize("kwargs", [
    {"history_limit": 0},
    {"damping_factor": 0.0},
    {"camera_near": 10.0, "camera_far": 5.0},
    {"surface_width": 0},
])
def test_invalid_values_are_rejected(kwargs):
    with pytest.raises(ValueError):
        EngineConfig(**kwargs)


def test_from_env_detects_braille_support():
    assert EngineConfig.from_env({"LANG": "en_US.UTF-8", "TERM": "xterm"}).use_braille is True
    assert EngineConfig.from_env({"LANG": "en_US.UTF-8", "TERM": "linux"}).use_braille is False
    assert EngineConfig.from_env({"LANG": "C"}).use_braille is False


def test_from_env_overrides():
    config = EngineConfig.from_env({
        "SCENE_MUTATOR_HISTORY_LIMIT": "5",
        "SCENE_MUTATOR_ENABLE_DAMPING": "off",
        "SCENE_MUTATOR_USE_BRAILLE": "yes",
        "SCENE_MUTATOR_LOG_FILE": "/tmp/mutator.log",
    })
    assert config.history_limit == 5
    assert config.enable_damping is False
    assert config.use_braille is True
    assert config.log_file == "/tmp/mutator.log"


def test_from_env_reports_bad_values():
    with pytest.raises(ValueError, match="SCENE_MUTATOR_HISTORY_LIMIT"):
        EngineConfig.from_env({"SCENE_MUTATOR_HISTORY_LIMIT": "many"})
