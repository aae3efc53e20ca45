# src/tetris_drop/game/core/pieceset.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
import yaml

from tetris_drop.game.core.cell import CELL_DTYPE, CellState
from tetris_drop.game.core.constants import CLASSIC_NUM_PIECES
from tetris_drop.game.core.grid import Grid
from tetris_drop.utils.paths import pieces_dir


def _parse_mask(rows: Sequence[str]) -> np.ndarray:
    if not isinstance(rows, (list, tuple)) or len(rows) == 0:
        raise ValueError("mask must be a non-empty list of strings")

    width = None
    out: List[List[int]] = []
    for r in rows:
        if not isinstance(r, str) or len(r) == 0:
            raise ValueError(f"mask rows must be non-empty strings, got {r!r}")
        if width is None:
            width = len(r)
        elif len(r) != width:
            raise ValueError(f"mask rows must have equal width, got widths {width} and {len(r)}")
        for ch in r:
            if ch not in "#.":
                raise ValueError(f"mask rows may only contain '#' or '.', got {r!r}")

        out.append([1 if ch == "#" else 0 for ch in r])

    arr = np.asarray(out, dtype=np.uint8)
    if int(arr.sum()) <= 0:
        raise ValueError("mask must have at least one filled cell ('#')")
    # shapes are anchored at the top-left so a column offset is the leftmost occupied column
    if not arr[0].any() or not arr[:, 0].any():
        raise ValueError("mask must be anchored at row 0 and column 0")
    return arr


@dataclass(frozen=True)
class PieceDef:
    kind: str
    mask: np.ndarray  # (H,W) uint8 mask 0/1, spawn orientation

    def cell_count(self) -> int:
        return int(self.mask.sum())

    def bbox_wh(self) -> Tuple[int, int]:
        h, w = self.mask.shape
        return int(w), int(h)


@dataclass(frozen=True)
class PieceSet:
    """
    Shape catalog loaded from YAML.

    Provides:
      - stable ordering of kinds (for board-id mapping)
      - mask(kind)
      - board_id(kind) in 1..K (for categorical fields; 0 reserved for empty)
      - shape_grid(kind, ...) : the shape placed at the top-left of an empty Grid

    Asset contract:
      - each kind lists `rotations`; only the first (spawn) orientation is used.
      - masks are anchored at row 0 / column 0.
    """

    pieces: Dict[str, PieceDef]
    kind_order: Tuple[str, ...]

    @staticmethod
    def default_classic7_path() -> Path:
        return pieces_dir() / "classic7.yaml"

    @classmethod
    def classic7(cls) -> "PieceSet":
        ps = cls.from_yaml(cls.default_classic7_path(), expected_cells=4)
        if len(ps.kinds()) != CLASSIC_NUM_PIECES:
            raise ValueError(f"classic7.yaml must define {CLASSIC_NUM_PIECES} kinds, got {list(ps.kinds())!r}")
        return ps

    @classmethod
    def from_yaml(cls, path: Path, *, expected_cells: Optional[int] = None) -> "PieceSet":
        p = Path(path)
        data = yaml.safe_load(p.read_text(encoding="utf-8"))

        if not isinstance(data, dict):
            raise ValueError(f"piece YAML must be a mapping at top-level, got {type(data)!r}")

        # Asset-level invariant: number of filled cells per piece
        if expected_cells is None:
            v = data.get("expected_cells", None)
            if isinstance(v, int):
                expected_cells = v
            elif isinstance(v, str):
                expected_cells = int(v)
            elif v is None:
                expected_cells = None
            else:
                raise TypeError(f"expected_cells must be int or str, got {type(v)!r}")

        pieces_node = data.get("pieces")
        if not isinstance(pieces_node, dict) or not pieces_node:
            raise ValueError("piece YAML must contain non-empty mapping 'pieces:'")

        pieces: Dict[str, PieceDef] = {}
        kind_order: List[str] = []

        for kind, spec in pieces_node.items():
            if not isinstance(kind, str) or len(kind) != 1 or not kind.isalpha():
                raise ValueError(f"piece key must be a single letter, got {kind!r}")
            if not isinstance(spec, dict):
                raise ValueError(f"piece spec for {kind!r} must be a mapping, got {type(spec)!r}")

            rotations_node = spec.get("rotations")
            if not isinstance(rotations_node, list) or not rotations_node:
                raise ValueError(f"{kind!r}: 'rotations' must be a non-empty list")
            spawn_rows = rotations_node[0]
            if not isinstance(spawn_rows, (list, tuple)):
                raise ValueError(f"{kind!r}: rotations[0] must be a list of strings, got {type(spawn_rows)!r}")
            mask = _parse_mask(spawn_rows)

            if expected_cells is not None and int(mask.sum()) != int(expected_cells):
                raise ValueError(f"{kind!r}: expected {expected_cells} filled cells, got {int(mask.sum())}")

            pieces[kind] = PieceDef(kind=kind, mask=mask)
            kind_order.append(kind)

        return cls(pieces=pieces, kind_order=tuple(kind_order))

    def kinds(self) -> Tuple[str, ...]:
        return self.kind_order

    def __contains__(self, kind: str) -> bool:
        return kind in self.pieces

    def get(self, kind: str) -> PieceDef:
        try:
            return self.pieces[kind]
        except KeyError as e:
            raise KeyError(f"unknown piece kind {kind!r}. known kinds={list(self.kind_order)!r}") from e

    def mask(self, kind: str) -> np.ndarray:
        return self.get(kind).mask

    def board_id(self, kind: str) -> int:
        try:
            idx = self.kind_order.index(kind)
        except ValueError as e:
            raise KeyError(f"unknown piece kind {kind!r}") from e
        return int(idx + 1)

    def board_id_to_kind(self, board_id: int) -> str:
        bid = int(board_id)
        if bid <= 0 or bid > len(self.kind_order):
            raise ValueError(f"board_id out of range: {bid} (valid 1..{len(self.kind_order)})")
        return self.kind_order[bid - 1]

    def max_bbox_size(self) -> tuple[int, int]:
        """
        Return (max_bbox_w, max_bbox_h) over all kinds.
        """
        mw, mh = 0, 0
        for kind in self.kinds():
            w, h = self.get(kind).bbox_wh()
            mw = max(mw, int(w))
            mh = max(mh, int(h))
        return int(mw), int(mh)

    def max_bbox_height(self) -> int:
        return int(self.max_bbox_size()[1])

    def max_bbox_width(self) -> int:
        return int(self.max_bbox_size()[0])

    def shape_grid(self, kind: str, *, height: int, width: int, cell: int = int(CellState.OCCUPIED)) -> Grid:
        """
        Place the kind's mask at the top-left of an empty (height, width) grid.

        `cell` is the value written into occupied cells (OCCUPIED, or a board id).
        """
        m = self.mask(kind)
        mh, mw = m.shape
        if mh > int(height) or mw > int(width):
            raise ValueError(
                f"shape {kind!r} ({mh}x{mw}) does not fit in a grid of (h={int(height)}, w={int(width)})"
            )
        c = int(cell)
        if c == CellState.UNOCCUPIED:
            raise ValueError("cell value for a shape must be non-zero")
        out = np.zeros((int(height), int(width)), dtype=CELL_DTYPE)
        out[:mh, :mw] = m * c
        return Grid(out)


__all__ = ["PieceDef", "PieceSet"]
