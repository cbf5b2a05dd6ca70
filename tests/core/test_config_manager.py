"""
test_config_manager.py
----------------------
Unit tests for JSON config loading and GameConfig construction.

Responsibilities
----------------
- Verify overrides merge over defaults and '_notes' keys are ignored.
- Test strict and lenient handling of missing or broken files.
- Validate derived fields (ground line, frame time) follow overrides.
"""

import json

import pytest

from dino_dash.core.services.config_manager import (
    GameConfig,
    default_config_dict,
    load_config,
    load_game_config,
)


def write_json(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


# ===========================================================
# load_config
# ===========================================================

def test_override_merges_over_defaults(tmp_path):
    path = write_json(tmp_path / "cfg.json", {"a": {"x": 5}, "_notes": "ignored"})

    merged = load_config(path, {"a": {"x": 1, "y": 2}, "b": 3})

    assert merged == {"a": {"x": 5, "y": 2}, "b": 3}


def test_nested_notes_are_ignored(tmp_path):
    path = write_json(tmp_path / "cfg.json", {"a": {"_notes": "doc", "x": 5}})

    assert load_config(path, {"a": {"x": 1}}) == {"a": {"x": 5}}


def test_defaults_are_not_mutated(tmp_path):
    defaults = {"a": {"x": 1}}
    path = write_json(tmp_path / "cfg.json", {"a": {"x": 9}})

    load_config(path, defaults)

    assert defaults == {"a": {"x": 1}}


def test_missing_file_returns_defaults(tmp_path):
    assert load_config(str(tmp_path / "none.json"), {"a": 1}) == {"a": 1}


def test_missing_file_raises_in_strict_mode(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "none.json"), {}, strict=True)


def test_broken_json_returns_defaults(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text("{broken", encoding="utf-8")

    assert load_config(str(path), {"a": 1}) == {"a": 1}


# ===========================================================
# GameConfig
# ===========================================================

def test_defaults_match_reference_tuning():
    config = GameConfig()

    assert config.ground_y == 340
    assert config.target_frame_ms == pytest.approx(1000 / 60)
    assert config.gravity == pytest.approx(0.8)
    assert config.jump_impulse == pytest.approx(-15)
    assert config.cache_ttl_ms == 300_000
    assert config.max_top_scores == 5


def test_from_dict_matches_dataclass_defaults():
    assert GameConfig.from_dict(default_config_dict()) == GameConfig()


def test_from_dict_applies_overrides_and_derived_fields():
    config = GameConfig.from_dict({
        "display": {"height": 600},
        "physics": {"gravity": 1.2, "reference_fps": 30},
    })

    assert config.gravity == pytest.approx(1.2)
    assert config.ground_y == 400
    assert config.target_frame_ms == pytest.approx(1000 / 30)
    assert config.screen_width == GameConfig().screen_width


def test_load_game_config_from_file(tmp_path):
    path = write_json(tmp_path / "dino_dash.json", {
        "_notes": "local tuning",
        "obstacles": {"speed": 7},
        "storage": {"data_file": "custom.json"},
    })

    config = load_game_config(path)

    assert config.obstacle_speed == 7
    assert config.data_file == "custom.json"


def test_load_game_config_without_file_uses_defaults(tmp_path):
    assert load_game_config(str(tmp_path / "absent.json")) == GameConfig()
