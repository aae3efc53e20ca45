# src/tetris_drop/game/core/__init__.py
from __future__ import annotations

from tetris_drop.game.core.algebra import collides, overlay, shift_right, try_fall_one, try_shift_down
from tetris_drop.game.core.cell import CellState, is_occupied
from tetris_drop.game.core.clearing import clear_solid_rows, clear_solid_rows_counted, solid_rows
from tetris_drop.game.core.drop import drop, drop_offset
from tetris_drop.game.core.errors import (
    ClobberError,
    GridShapeError,
    ParseError,
    PlacementImpossibleError,
    TetrisDropError,
)
from tetris_drop.game.core.grid import Grid
from tetris_drop.game.core.metrics import height_from_floor, highest_occupied_row

__all__ = [
    "CellState",
    "is_occupied",
    "Grid",
    "collides",
    "overlay",
    "shift_right",
    "try_fall_one",
    "try_shift_down",
    "drop",
    "drop_offset",
    "solid_rows",
    "clear_solid_rows",
    "clear_solid_rows_counted",
    "highest_occupied_row",
    "height_from_floor",
    "TetrisDropError",
    "ClobberError",
    "GridShapeError",
    "ParseError",
    "PlacementImpossibleError",
]
