# src/tetris_drop/game/core/drop.py
from __future__ import annotations

from typing import Optional, Tuple

from tetris_drop.game.core.algebra import overlay, try_fall_one
from tetris_drop.game.core.errors import ClobberError
from tetris_drop.game.core.grid import Grid, require_same_shape


def _deepest_overlay(field: Grid, shape: Grid) -> Optional[Tuple[Grid, int]]:
    """
    Scan offsets 0..h-1 top-down and keep the last overlay that worked.

    Descent is monotonic: once the shape hits the floor or the terrain, no deeper
    offset can succeed, so the scan stops at the first failure. The h bound keeps
    an all-empty shape (which never fails) from looping forever.
    """
    require_same_shape(field, shape, where="drop")

    try:
        best = overlay(field, shape)
    except ClobberError:
        return None
    best_offset = 0

    falling: Optional[Grid] = shape
    for s in range(1, field.height):
        falling = try_fall_one(falling)
        if falling is None:
            break
        try:
            best = overlay(field, falling)
        except ClobberError:
            break
        best_offset = s

    return best, best_offset


def drop(field: Grid, shape: Grid) -> Optional[Grid]:
    """
    Let `shape` fall from its current position onto `field`.

    Returns the field with the shape merged at its deepest resting position, or
    None when the shape already clobbers the field at offset 0.
    """
    res = _deepest_overlay(field, shape)
    if res is None:
        return None
    return res[0]


def drop_offset(field: Grid, shape: Grid) -> Optional[int]:
    """Rows the shape descends before it rests (None if it cannot be placed at all)."""
    res = _deepest_overlay(field, shape)
    if res is None:
        return None
    return int(res[1])


def drop_with_offset(field: Grid, shape: Grid) -> Optional[Tuple[Grid, int]]:
    return _deepest_overlay(field, shape)


__all__ = ["drop", "drop_offset", "drop_with_offset"]
