# src/tetris_drop/game/core/grid.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Optional, Sequence, Tuple

import numpy as np

from tetris_drop.game.core.cell import CELL_DTYPE, CellState
from tetris_drop.game.core.constants import EMPTY_CELL
from tetris_drop.game.core.errors import GridShapeError

_ASCII_CELLS = {
    "#": int(CellState.OCCUPIED),
    ".": int(CellState.UNOCCUPIED),
}


@dataclass(frozen=True, eq=False, repr=False)
class Grid:
    """
    Fixed-dimension (h, w) cell matrix, row-major, row 0 is the top.

    Contracts:
      - cells is a PRIVATE read-only copy; nothing the caller holds aliases it.
      - 0 is empty, any non-zero value is occupied (see CellState).
      - every grid operation returns a NEW Grid; dimensions never change.
      - zero-sized grids (h == 0 and/or w == 0) are legal values.
    """

    cells: np.ndarray

    def __post_init__(self) -> None:
        src = np.asarray(self.cells)
        if src.ndim != 2:
            raise ValueError(f"grid cells must be 2D, got shape={src.shape}")
        if src.size > 0 and np.issubdtype(src.dtype, np.number):
            lo, hi = int(src.min()), int(src.max())
            info = np.iinfo(CELL_DTYPE)
            if lo < int(info.min) or hi > int(info.max):
                raise ValueError(f"cell values must be in [{info.min},{info.max}], got [{lo},{hi}]")
        arr = np.array(src, dtype=CELL_DTYPE, copy=True)
        arr.flags.writeable = False
        object.__setattr__(self, "cells", arr)

    # ------------------------------------------------------------------
    # construction
    # ------------------------------------------------------------------

    @classmethod
    def empty(cls, *, height: int, width: int) -> "Grid":
        h, w = int(height), int(width)
        if h < 0 or w < 0:
            raise ValueError(f"invalid grid size (h={h}, w={w})")
        return cls(np.zeros((h, w), dtype=CELL_DTYPE))

    @classmethod
    def from_ascii(cls, rows: Sequence[str], *, width: Optional[int] = None) -> "Grid":
        """
        Build a grid from text rows: '#' occupied, '.' empty, whitespace ignored.

        `width` is only needed for a grid with no rows.
        """
        out = []
        for r, raw in enumerate(rows):
            row = []
            for ch in str(raw):
                if ch.isspace():
                    continue
                if ch not in _ASCII_CELLS:
                    raise ValueError(f"row {r}: unexpected cell {ch!r} (use '#' or '.')")
                row.append(_ASCII_CELLS[ch])
            out.append(row)

        if not out:
            return cls.empty(height=0, width=int(width or 0))

        widths = {len(r) for r in out}
        if len(widths) != 1:
            raise ValueError(f"rows must have equal width, got widths {sorted(widths)}")
        if width is not None and int(width) != len(out[0]):
            raise ValueError(f"rows have width {len(out[0])}, expected {int(width)}")
        return cls(np.asarray(out, dtype=CELL_DTYPE).reshape(len(out), len(out[0])))

    # ------------------------------------------------------------------
    # access
    # ------------------------------------------------------------------

    @property
    def height(self) -> int:
        return int(self.cells.shape[0])

    @property
    def width(self) -> int:
        return int(self.cells.shape[1])

    @property
    def shape(self) -> Tuple[int, int]:
        return self.height, self.width

    def __getitem__(self, key: Any) -> Any:
        v = self.cells[key]
        if np.ndim(v) == 0:
            return int(v)
        return v

    def iter_rows(self) -> Iterator[np.ndarray]:
        for r in range(self.height):
            yield self.cells[r]

    def occupancy(self) -> np.ndarray:
        return self.cells != EMPTY_CELL

    def occupied_count(self) -> int:
        return int(np.count_nonzero(self.cells))

    def is_empty(self) -> bool:
        return self.occupied_count() == 0

    def to_numpy(self) -> np.ndarray:
        """Writable copy of the cells."""
        return np.array(self.cells, copy=True)

    def to_ascii(self) -> str:
        return "\n".join(
            "".join("#" if int(v) != EMPTY_CELL else "." for v in row) for row in self.cells
        )

    # ------------------------------------------------------------------
    # value semantics
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self.cells, other.cells))

    def __hash__(self) -> int:
        return hash((self.shape, self.cells.tobytes()))

    def __repr__(self) -> str:
        return f"Grid(h={self.height}, w={self.width}, occupied={self.occupied_count()})"

    def __rshift__(self, n: int) -> "Grid":
        from tetris_drop.game.core.algebra import shift_right

        return shift_right(self, n)


def require_same_shape(a: Grid, b: Grid, *, where: str) -> None:
    if a.shape != b.shape:
        raise GridShapeError(expected=a.shape, got=b.shape, where=where)


__all__ = ["Grid", "require_same_shape"]
