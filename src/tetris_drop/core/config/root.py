# src/tetris_drop/core/config/root.py
from __future__ import annotations

from typing import Literal

from pydantic import Field, field_validator

from tetris_drop.core.config.base import ConfigBase
from tetris_drop.core.game.config import GameConfig

LogLevel = Literal["debug", "info", "warning", "error", "critical"]


class RunConfig(ConfigBase):
    game: GameConfig = Field(default_factory=GameConfig)
    log_level: LogLevel = "warning"
    use_rich: bool = True
    dump_grid: bool = False

    @field_validator("log_level", mode="before")
    @classmethod
    def _level_lower(cls, v: object) -> str:
        return str(v).strip().lower()


__all__ = ["RunConfig", "LogLevel"]
