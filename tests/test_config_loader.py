import json

import pytest

from config.config_loader import DEFAULT_CONFIG, load_config, save_config, validate_config


@pytest.fixture
def write_config(tmp_path):
    def _write(**overrides):
        path = tmp_path / "runtime_config.json"
        data = {"output_directory": str(tmp_path / "logs")}
        data.update(overrides)
        path.write_text(json.dumps(data), encoding="utf-8")
        return path
    return _write


def test_defaults_are_valid():
    validate_config(DEFAULT_CONFIG)


def test_load_merges_defaults(write_config, tmp_path):
    config = load_config(write_config(max_steps=25, origin_x=0))
    assert config["max_steps"] == 25
    assert config["origin_x"] == 0
    assert config["image_width"] == DEFAULT_CONFIG["image_width"]
    assert (tmp_path / "logs").is_dir()


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.json")


@pytest.mark.parametrize("overrides", [
    {"max_steps": "1000"},
    {"max_steps": True},
    {"show_head_move": 1},
    {"zoom": "10"},
])
def test_wrong_types(write_config, overrides):
    with pytest.raises(TypeError):
        load_config(write_config(**overrides))


@pytest.mark.parametrize("overrides", [
    {"max_steps": -1},
    {"image_width": 0},
    {"zoom": 0.0},
    {"origin_x": 1.5},
    {"initial_tape": "012"},
])
def test_bad_values(write_config, overrides):
    with pytest.raises(ValueError):
        load_config(write_config(**overrides))


def test_missing_key():
    config = dict(DEFAULT_CONFIG)
    del config["max_steps"]
    with pytest.raises(ValueError):
        validate_config(config)


def test_save_round_trip(tmp_path):
    path = tmp_path / "nested" / "runtime_config.json"
    config = dict(DEFAULT_CONFIG, output_directory=str(tmp_path / "logs"), max_steps=7)
    save_config(config, path)
    assert load_config(path) == config
