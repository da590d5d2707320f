import json

import pytest

import sim_config
from sim_config import ConfigError, SimulationConfig, load_config


def test_defaults():
    config = SimulationConfig()
    assert config.ball_count == 30
    assert config.radius_range == (5.0, 25.0)
    assert config.speed_range == (1.0, 4.0)
    assert config.history_limit == 20
    assert config.width is None


def test_from_dict_converts_values():
    config = SimulationConfig.from_dict({
        'ball_count': "12", 'min_radius': 3, 'width': 640, 'height': None,
        'background': [0, 300, -4], 'show_history': "false",
    })
    assert config.ball_count == 12
    assert config.min_radius == 3.0
    assert config.width == 640
    assert config.background == (0, 255, 0)
    assert config.show_history is False


def test_from_dict_ignores_unknown_keys(caplog):
    config = SimulationConfig.from_dict({'gravity': 9.8})
    assert config == SimulationConfig()
    assert "gravity" in caplog.text


@pytest.mark.parametrize("key, value", [
    ('ball_count', "many"),
    ('max_speed', None),
    ('background', 12),
    ('show_history', "maybe"),
])
def test_from_dict_rejects_bad_values(key, value):
    with pytest.raises(ConfigError, match=key):
        SimulationConfig.from_dict({key: value})


def test_inverted_ranges_are_swapped():
    config = SimulationConfig(min_radius=30, max_radius=10, min_speed=5, max_speed=2)
    assert config.radius_range == (10, 30)
    assert config.speed_range == (2, 5)


def test_non_positive_radius_is_raised():
    config = SimulationConfig(min_radius=0, max_radius=0)
    assert config.min_radius == sim_config.MIN_RADIUS_FLOOR
    assert config.max_radius == sim_config.MIN_RADIUS_FLOOR


def test_bad_fps_falls_back():
    assert SimulationConfig(fps=0).fps == sim_config.FPS


def test_load_config_from_file(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps({'ball_count': 4, 'seed': 3}), encoding='utf-8')
    config = load_config(path)
    assert config.ball_count == 4
    assert config.seed == 3


def test_load_config_missing_file_gives_defaults(tmp_path):
    assert load_config(tmp_path / "nope.json") == SimulationConfig()


@pytest.mark.parametrize("content", ["{not json", "[1, 2]"])
def test_load_config_bad_file_gives_defaults(tmp_path, content, caplog):
    path = tmp_path / "cfg.json"
    path.write_text(content, encoding='utf-8')
    assert load_config(path) == SimulationConfig()
    assert "using defaults" in caplog.text


def test_load_config_without_path_looks_in_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / sim_config.CONFIG_FILE).write_text('{"fps": 30}', encoding='utf-8')
    monkeypatch.setattr(sim_config, "__file__", str(tmp_path / "elsewhere" / "sim_config.py"))
    assert load_config().fps == 30


def test_load_config_non_utf8_file_gives_defaults(tmp_path, caplog):
    path = tmp_path / "cfg.json"
    path.write_bytes(b'{"ball_count": 3, "title": "\xff"}')
    assert load_config(path) == SimulationConfig()
    assert "using defaults" in caplog.text


@pytest.mark.parametrize("low, high", [(0, 0), (-3, -1), (-2, 2)])
def test_non_positive_speed_is_raised(low, high):
    config = SimulationConfig.from_dict({'min_speed': low, 'max_speed': high})
    assert config.min_speed == sim_config.MIN_SPEED_FLOOR
    assert config.max_speed >= config.min_speed
    assert config.max_speed > 0


def test_floored_speed_balls_still_settle():
    from ball_field import ParticleField
    from conftest import RecordingSurface

    config = SimulationConfig.from_dict({'min_speed': 0, 'max_speed': 0})
    field = ParticleField.create(3, 100, 50, radius_range=(5, 5),
                                 speed_range=config.speed_range)
    for _ in range(1000):
        field.update_all(RecordingSurface(100, 50), 50)
    assert not any(ball.is_falling for ball in field)
