# src/tetris_drop/game/core/clearing.py
from __future__ import annotations

from typing import Tuple

import numpy as np

from tetris_drop.game.core.constants import EMPTY_CELL
from tetris_drop.game.core.grid import Grid


def solid_rows(g: Grid) -> np.ndarray:
    """
    Return 1D int array of row indices whose every cell is occupied.

    A zero-width grid has no solid rows.
    """
    if g.width == 0:
        return np.zeros((0,), dtype=np.int32)
    full = np.all(g.cells != EMPTY_CELL, axis=1)
    return np.flatnonzero(full).astype(np.int32, copy=False)


def clear_solid_rows_counted(g: Grid) -> Tuple[Grid, int]:
    """
    Remove every solid row and compact. Returns (new_grid, cleared).

    Surviving rows keep their order and fall by the number of solid rows beneath
    them; the same number of empty rows appear at the top. This is the fixed point
    of repeatedly clearing the lowest solid row and rotating everything above it
    down by one.
    """
    if g.width == 0:
        return g, 0

    full = np.all(g.cells != EMPTY_CELL, axis=1)
    cleared = int(full.sum())
    if cleared <= 0:
        return g, 0

    kept = g.cells[~full]
    new_rows = np.zeros((cleared, g.width), dtype=g.cells.dtype)
    return Grid(np.vstack([new_rows, kept])), cleared


def clear_solid_rows(g: Grid) -> Grid:
    return clear_solid_rows_counted(g)[0]


__all__ = ["solid_rows", "clear_solid_rows", "clear_solid_rows_counted"]
