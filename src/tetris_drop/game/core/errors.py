# src/tetris_drop/game/core/errors.py
from __future__ import annotations

from typing import Optional, Tuple


class TetrisDropError(Exception):
    """Base class for every error raised by tetris_drop."""


class GridShapeError(TetrisDropError, ValueError):
    def __init__(self, *, expected: Tuple[int, int], got: Tuple[int, int], where: str = "grid") -> None:
        self.expected = (int(expected[0]), int(expected[1]))
        self.got = (int(got[0]), int(got[1]))
        super().__init__(
            f"{where} shape mismatch: expected (h={self.expected[0]}, w={self.expected[1]}), "
            f"got (h={self.got[0]}, w={self.got[1]})"
        )


class ClobberError(TetrisDropError):
    """
    Overlay found a cell occupied in both operands.

    row/col is the FIRST collision in row-major scan order.
    """

    def __init__(self, *, row: int, col: int) -> None:
        self.row = int(row)
        self.col = int(col)
        super().__init__(f"cells clobber at (row={self.row}, col={self.col})")


class PlacementImpossibleError(TetrisDropError):
    def __init__(
            self,
            *,
            kind: str,
            column: int,
            block_index: Optional[int] = None,
            reason: str = "field is congested at that column all the way to the top",
    ) -> None:
        self.kind = str(kind)
        self.column = int(column)
        self.block_index = None if block_index is None else int(block_index)
        self.reason = str(reason)
        where = "" if self.block_index is None else f" (block #{self.block_index})"
        super().__init__(f"cannot place {self.kind}{self.column}{where}: {self.reason}")


class ParseError(TetrisDropError, ValueError):
    def __init__(self, *, token: str, index: int, reason: str) -> None:
        self.token = str(token)
        self.index = int(index)
        self.reason = str(reason)
        super().__init__(f"bad input block {self.token!r} at position {self.index}: {self.reason}")


__all__ = [
    "TetrisDropError",
    "GridShapeError",
    "ClobberError",
    "PlacementImpossibleError",
    "ParseError",
]
