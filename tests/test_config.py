import json

import pytest

from core.config import (SimulationConfig, Presets, WalkerConfig, config_from_dict,
                         config_to_dict, load_config, save_config, reaching_segments_for)


def test_defaults():
    config = SimulationConfig()
    assert config.mode == "walker"
    assert config.body.preset == "simple"
    assert config.walker.walk_speed == 5.0
    assert config.walker.reaching_segments == ()
    # Цель на высоте таза - ходьба идёт по горизонтали
    assert config.target.y == config.body.base_y


def test_reaching_segments_follow_body_preset():
    config = SimulationConfig()
    assert reaching_segments_for(config) == ("left_arm", "right_arm")

    config.body.preset = "humanoid"
    assert reaching_segments_for(config) == (
        "left_lower_arm", "right_lower_arm", "left_hand", "right_hand"
    )

    config.walker.reaching_segments = ("left_hand",)
    assert reaching_segments_for(config) == ("left_hand",)


def test_presets():
    assert Presets.walker_demo().mode == "walker"
    assert Presets.snowball_demo().mode == "snowball"
    assert Presets.close_range().target.x == 150.0
    assert Presets.far_throw().snowball.target_x == 650.0
    for name in Presets.names():
        assert isinstance(Presets.by_name(name), SimulationConfig)


def test_unknown_preset():
    with pytest.raises(ValueError):
        Presets.by_name("chaos")


def test_presets_are_independent():
    first = Presets.walker_demo()
    first.target.x = 1.0
    assert Presets.walker_demo().target.x == 500.0


def test_json_round_trip(tmp_path):
    config = Presets.far_throw()
    config.walker = WalkerConfig(walk_speed=7.0, reaching_segments=("left_hand",))
    path = tmp_path / "config.json"

    save_config(config, str(path))
    loaded = load_config(str(path))

    assert loaded == config
    assert loaded.walker.reaching_segments == ("left_hand",)


def test_partial_dict_uses_defaults():
    config = config_from_dict({"mode": "snowball", "snowball": {"gravity": 5.0}})
    assert config.mode == "snowball"
    assert config.snowball.gravity == 5.0
    assert config.snowball.radius == 10.0
    assert config.body.base_x == 100.0


def test_unknown_field_is_rejected():
    with pytest.raises(ValueError):
        config_from_dict({"body": {"wings": 2}})


def test_unknown_mode_is_rejected(tmp_path):
    with pytest.raises(ValueError, match="Invalid configuration"):
        config_from_dict({"mode": "foo"})

    path = tmp_path / "bad_mode.json"
    path.write_text(json.dumps({"mode": "swimmer"}))
    with pytest.raises(ValueError, match="unknown mode"):
        load_config(str(path))


def test_to_dict_is_json_serializable():
    data = config_to_dict(SimulationConfig())
    assert json.loads(json.dumps(data))["walker"]["reaching_segments"] == []


def test_load_missing_file(tmp_path):
    with pytest.raises(ValueError):
        load_config(str(tmp_path / "missing.json"))


def test_load_broken_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")
    with pytest.raises(ValueError):
        load_config(str(path))


def test_load_non_object(tmp_path):
    path = tmp_path / "list.json"
    path.write_text("[1, 2, 3]")
    with pytest.raises(ValueError):
        load_config(str(path))
