# src/tetris_drop/game/core/metrics.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from tetris_drop.game.core.constants import EMPTY_CELL
from tetris_drop.game.core.grid import Grid


def highest_occupied_row(g: Grid) -> Optional[int]:
    """First row index (top-down, 0-based) with an occupied cell, or None if the grid is empty."""
    rows = np.flatnonzero(np.any(g.cells != EMPTY_CELL, axis=1))
    if rows.size == 0:
        return None
    return int(rows[0])


def height_from_floor(g: Grid) -> int:
    row = highest_occupied_row(g)
    if row is None:
        return 0
    return int(g.height - row)


def occupied_count(g: Grid) -> int:
    return g.occupied_count()


@dataclass(frozen=True)
class FieldSnapshotMetrics:
    """
    Summary of a field, logged after each input line.

    height:
      rows from the floor up to and including the tallest occupied row
    occupied:
      number of occupied cells
    """
    height: int
    occupied: int


def field_snapshot_metrics(g: Grid) -> FieldSnapshotMetrics:
    return FieldSnapshotMetrics(height=height_from_floor(g), occupied=occupied_count(g))


__all__ = [
    "highest_occupied_row",
    "height_from_floor",
    "occupied_count",
    "FieldSnapshotMetrics",
    "field_snapshot_metrics",
]
