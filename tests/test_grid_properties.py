# tests/test_grid_properties.py
"""
Randomised invariants of the grid algebra.

Each test draws grids from a seeded numpy Generator so failures are reproducible
from the parametrized seed.
"""
from __future__ import annotations

import numpy as np
import pytest

from tetris_drop.game.core.algebra import overlay, shift_right, try_fall_one
from tetris_drop.game.core.clearing import clear_solid_rows, solid_rows
from tetris_drop.game.core.drop import drop, drop_offset
from tetris_drop.game.core.errors import ClobberError
from tetris_drop.game.core.grid import Grid
from tetris_drop.game.core.pieceset import PieceSet

SEEDS = list(range(30))


def _random_grid(rng: np.random.Generator, *, h: int, w: int, p: float) -> Grid:
    return Grid((rng.random((h, w)) < p).astype(np.uint8))


def _random_dims(rng: np.random.Generator) -> tuple[int, int]:
    return int(rng.integers(1, 9)), int(rng.integers(1, 9))


def _grid_with_solid_rows(rng: np.random.Generator) -> Grid:
    h, w = _random_dims(rng)
    g = (rng.random((h, w)) < 0.6).astype(np.uint8)
    g[rng.random(h) < 0.4, :] = 1
    return Grid(g)


@pytest.fixture(scope="module")
def pieces() -> PieceSet:
    return PieceSet.classic7()


@pytest.mark.parametrize("seed", SEEDS)
def test_overlay_commutes_on_disjoint_grids(seed: int) -> None:
    rng = np.random.default_rng(seed)
    h, w = _random_dims(rng)
    a = _random_grid(rng, h=h, w=w, p=0.4)
    b = Grid(np.where(a.occupancy(), 0, (rng.random((h, w)) < 0.5)).astype(np.uint8))
    assert overlay(a, b) == overlay(b, a)
    assert overlay(a, b).occupied_count() == a.occupied_count() + b.occupied_count()


@pytest.mark.parametrize("seed", SEEDS)
def test_overlay_with_empty_is_identity(seed: int) -> None:
    rng = np.random.default_rng(seed)
    h, w = _random_dims(rng)
    g = _random_grid(rng, h=h, w=w, p=0.5)
    assert overlay(g, Grid.empty(height=h, width=w)) == g
    assert overlay(Grid.empty(height=h, width=w), g) == g


@pytest.mark.parametrize("seed", SEEDS)
def test_clobber_position_is_occupied_in_both(seed: int) -> None:
    rng = np.random.default_rng(seed)
    h, w = _random_dims(rng)
    a = _random_grid(rng, h=h, w=w, p=0.5)
    b = _random_grid(rng, h=h, w=w, p=0.5)
    both = a.occupancy() & b.occupancy()
    if not both.any():
        assert overlay(a, b).occupied_count() == a.occupied_count() + b.occupied_count()
        return
    with pytest.raises(ClobberError) as ei:
        overlay(a, b)
    r, c = ei.value.row, ei.value.col
    assert a[r, c] != 0 and b[r, c] != 0
    assert (r, c) == tuple(int(x) for x in np.argwhere(both)[0])


@pytest.mark.parametrize("seed", SEEDS)
def test_shift_right_by_width_or_more_empties(seed: int) -> None:
    rng = np.random.default_rng(seed)
    h, w = _random_dims(rng)
    g = _random_grid(rng, h=h, w=w, p=0.7)
    n = w + int(rng.integers(0, 5))
    assert shift_right(g, n) == Grid.empty(height=h, width=w)


@pytest.mark.parametrize("seed", SEEDS)
def test_fall_one_fails_iff_bottom_row_occupied(seed: int) -> None:
    rng = np.random.default_rng(seed)
    h, w = _random_dims(rng)
    g = _random_grid(rng, h=h, w=w, p=0.15)
    out = try_fall_one(g)
    bottom_occupied = bool(g.occupancy()[-1].any())
    assert (out is None) == bottom_occupied
    if out is not None:
        assert out.occupied_count() == g.occupied_count()


@pytest.mark.parametrize("seed", SEEDS)
def test_drop_keeps_every_cell(seed: int, pieces: PieceSet) -> None:
    rng = np.random.default_rng(seed)
    h, w = 12, 10
    field = np.zeros((h, w), dtype=np.uint8)
    # random terrain in the bottom half only, so the top always has room
    field[h // 2:] = (rng.random((h - h // 2, w)) < 0.5).astype(np.uint8)
    field_g = Grid(field)

    kind = str(rng.choice(list(pieces.kinds())))
    mw = pieces.mask(kind).shape[1]
    col = int(rng.integers(0, w - mw + 1))
    shape = shift_right(pieces.shape_grid(kind, height=h, width=w), col)

    out = drop(field_g, shape)
    assert out is not None
    assert out.occupied_count() == field_g.occupied_count() + shape.occupied_count()
    offset = drop_offset(field_g, shape)
    assert offset is not None and offset >= 0
    # the field's own cells are untouched
    assert np.array_equal(out.cells[field_g.occupancy()], field_g.cells[field_g.occupancy()])


@pytest.mark.parametrize("seed", SEEDS)
def test_clear_solid_rows_is_idempotent(seed: int) -> None:
    rng = np.random.default_rng(seed)
    g = _grid_with_solid_rows(rng)
    once = clear_solid_rows(g)
    assert clear_solid_rows(once) == once
    assert solid_rows(once).size == 0


@pytest.mark.parametrize("seed", SEEDS)
def test_clear_solid_rows_keeps_other_rows_in_order(seed: int) -> None:
    rng = np.random.default_rng(seed)
    g = _grid_with_solid_rows(rng)
    rows = [row.copy() for row in g.iter_rows()]
    kept = [row for row in rows if not row.all()]
    expected = [np.zeros(g.width, dtype=np.uint8)] * (len(rows) - len(kept)) + kept
    assert clear_solid_rows(g) == Grid(np.asarray(expected, dtype=np.uint8).reshape(g.shape))
