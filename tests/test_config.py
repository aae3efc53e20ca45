# tests/test_config.py
from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from tetris_drop.core.config.io import load_run_config, to_plain_dict
from tetris_drop.core.config.root import RunConfig
from tetris_drop.core.game.config import GameConfig


def test_defaults_match_the_reference_field() -> None:
    cfg = RunConfig()
    assert cfg.game.width == 10
    assert cfg.game.height == 100
    assert cfg.game.headroom is None
    assert cfg.game.field_mode == "persist"
    assert cfg.game.on_failure == "abort"


def test_game_config_normalizes_choices() -> None:
    cfg = GameConfig.model_validate({"field_mode": " RESET ", "on_failure": "skip-line"})
    assert cfg.field_mode == "reset"
    assert cfg.on_failure == "skip_line"


def test_game_config_rejects_unknown_keys() -> None:
    with pytest.raises(ValidationError, match="rotation"):
        GameConfig.model_validate({"rotation": True})


def test_game_config_rejects_bool_dimensions() -> None:
    with pytest.raises(ValidationError, match="must be an int, got bool"):
        GameConfig.model_validate({"width": True})


def test_game_config_rejects_non_positive_dimensions() -> None:
    with pytest.raises(ValidationError):
        GameConfig.model_validate({"height": 0})


def test_config_is_frozen() -> None:
    cfg = GameConfig()
    with pytest.raises(ValidationError):
        cfg.width = 12  # type: ignore[misc]


def test_load_run_config_yaml_then_overrides(tmp_path: Path) -> None:
    p = tmp_path / "run.yaml"
    p.write_text(
        "log_level: INFO\n"
        "game:\n"
        "  width: 8\n"
        "  field_mode: reset\n",
        encoding="utf-8",
    )
    cfg = load_run_config(p, overrides=["game.width=12", "game.headroom=5"])
    assert cfg.log_level == "info"
    assert cfg.game.width == 12
    assert cfg.game.headroom == 5
    assert cfg.game.field_mode == "reset"
    assert to_plain_dict(cfg)["game"]["width"] == 12


def test_load_run_config_without_file_uses_defaults() -> None:
    assert load_run_config() == RunConfig()


def test_load_run_config_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_run_config(tmp_path / "nope.yaml")


def test_example_config_file_is_valid() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    cfg = load_run_config(repo_root / "configs" / "drop.yaml")
    assert cfg.game == GameConfig()
