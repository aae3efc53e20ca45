# src/tetris_drop/game/core/cell.py
from __future__ import annotations

from enum import IntEnum

import numpy as np

from tetris_drop.game.core.constants import EMPTY_CELL, OCCUPIED_CELL

CELL_DTYPE = np.uint8


class CellState(IntEnum):
    """
    Binary cell encoding.

    Contract:
      - UNOCCUPIED is the dtype default (0) and is the ONLY empty value.
      - any non-zero value is occupied; OCCUPIED is the canonical one.
      - categorical fields store board ids 1..K instead of OCCUPIED; the grid
        algebra never looks past "zero vs non-zero".
    """

    UNOCCUPIED = EMPTY_CELL
    OCCUPIED = OCCUPIED_CELL


def is_occupied(cell: int) -> bool:
    return int(cell) != EMPTY_CELL


__all__ = ["CELL_DTYPE", "CellState", "is_occupied"]
