# src/tetris_drop/core/game/__init__.py
from __future__ import annotations

from tetris_drop.core.game.config import CellEncoding, FailurePolicy, FieldMode, GameConfig

__all__ = [
    "GameConfig",
    "FieldMode",
    "FailurePolicy",
    "CellEncoding",
]
