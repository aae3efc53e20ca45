# src/tetris_drop/game/core/algebra.py
"""
Grid algebra: masking overlay and shifts with edge falloff.

All functions are pure. Inputs are never mutated; every result is a new Grid.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from tetris_drop.game.core.constants import EMPTY_CELL
from tetris_drop.game.core.errors import ClobberError
from tetris_drop.game.core.grid import Grid, require_same_shape


def _clobbers(a: Grid, b: Grid) -> np.ndarray:
    return (a.cells != EMPTY_CELL) & (b.cells != EMPTY_CELL)


def collides(a: Grid, b: Grid) -> bool:
    require_same_shape(a, b, where="collides")
    return bool(np.any(_clobbers(a, b)))


def overlay(a: Grid, b: Grid) -> Grid:
    """
    Merge two same-sized grids cell by cell.

      empty / empty       -> empty
      occupied / empty    -> the occupied value (from whichever side has it)
      occupied / occupied -> ClobberError at the first such cell in row-major order
    """
    require_same_shape(a, b, where="overlay")
    both = _clobbers(a, b)
    if np.any(both):
        # argwhere walks in C (row-major) order
        row, col = np.argwhere(both)[0]
        raise ClobberError(row=int(row), col=int(col))
    return Grid(np.where(a.cells != EMPTY_CELL, a.cells, b.cells))


def shift_right(g: Grid, n: int) -> Grid:
    """
    Move every row right by n columns.

    Cells pushed past the right edge are dropped; n empty columns appear on the left.
    """
    k = int(n)
    if k < 0:
        raise ValueError(f"shift must be >= 0, got {k}")
    out = np.zeros(g.shape, dtype=g.cells.dtype)
    if k < g.width:
        out[:, k:] = g.cells[:, : g.width - k]
    return Grid(out)


def try_fall_one(g: Grid) -> Optional[Grid]:
    """
    Move every row down by one, or None if the bottom row has an occupied cell.

    The (empty) bottom row wraps around to become the new top row.
    """
    if g.height == 0:
        return g
    if np.any(g.cells[-1] != EMPTY_CELL):
        return None
    return Grid(np.roll(g.cells, 1, axis=0))


def try_shift_down(g: Grid, n: int) -> Optional[Grid]:
    k = int(n)
    if k < 0:
        raise ValueError(f"shift must be >= 0, got {k}")
    cur: Optional[Grid] = g
    for _ in range(k):
        cur = try_fall_one(cur)
        if cur is None:
            return None
    return cur


def cells_lost_by_shift_right(g: Grid, n: int) -> int:
    """Number of occupied cells shift_right(g, n) would push off the right edge."""
    k = int(n)
    if k <= 0 or g.width == 0:
        return 0
    lost = g.cells[:, max(0, g.width - k):]
    return int(np.count_nonzero(lost))


__all__ = [
    "collides",
    "overlay",
    "shift_right",
    "try_fall_one",
    "try_shift_down",
    "cells_lost_by_shift_right",
]
