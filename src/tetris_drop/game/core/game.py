# src/tetris_drop/game/core/game.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple, Union

from tetris_drop.core.game.config import CellEncoding, FieldMode, GameConfig
from tetris_drop.game.core.algebra import cells_lost_by_shift_right, shift_right
from tetris_drop.game.core.cell import CellState
from tetris_drop.game.core.clearing import clear_solid_rows_counted
from tetris_drop.game.core.constants import FIELD_HEIGHT, FIELD_WIDTH
from tetris_drop.game.core.drop import drop_with_offset
from tetris_drop.game.core.errors import PlacementImpossibleError
from tetris_drop.game.core.grid import Grid
from tetris_drop.game.core.metrics import field_snapshot_metrics, height_from_floor
from tetris_drop.game.core.parsing import InputBlock, parse_line
from tetris_drop.game.core.pieceset import PieceSet
from tetris_drop.utils.paths import resolve_user_path

LOG = logging.getLogger(__name__)

BlockLike = Union[InputBlock, Tuple[str, int]]


@dataclass(frozen=True)
class PlacementResult:
    """
    Outcome of dropping one block.

    field_after is the post-drop, post-clear field. offset is how many rows the
    shape fell from row 0 before resting.
    """
    block: InputBlock
    field_after: Grid
    offset: int
    cleared_rows: int


def shape_for(
        block: BlockLike,
        *,
        pieces: PieceSet,
        height: int,
        width: int,
        cell_encoding: CellEncoding = "binary",
        index: Optional[int] = None,
) -> Grid:
    """
    Build the block's shape grid and move it to its starting column.

    A column that would push occupied cells off the right edge is rejected: the
    shape would otherwise lose cells silently.
    """
    b = InputBlock.of(block)
    cell = pieces.board_id(b.shape) if cell_encoding == "categorical" else int(CellState.OCCUPIED)
    try:
        shape = pieces.shape_grid(b.shape, height=height, width=width, cell=cell)
    except ValueError as e:
        raise PlacementImpossibleError(
            kind=b.shape, column=b.starting_column, block_index=index, reason=str(e)
        ) from e

    lost = cells_lost_by_shift_right(shape, b.starting_column)
    if lost > 0:
        raise PlacementImpossibleError(
            kind=b.shape,
            column=b.starting_column,
            block_index=index,
            reason=f"column pushes {lost} cell(s) past the right edge of a {width}-wide field",
        )
    return shift_right(shape, b.starting_column)


def place_block(
        field: Grid,
        block: BlockLike,
        *,
        pieces: PieceSet,
        cell_encoding: CellEncoding = "binary",
        index: Optional[int] = None,
) -> PlacementResult:
    """
    Drop one block onto `field` and clear solid rows. Pure: `field` is not touched.
    """
    b = InputBlock.of(block)
    shape = shape_for(
        b,
        pieces=pieces,
        height=field.height,
        width=field.width,
        cell_encoding=cell_encoding,
        index=index,
    )

    res = drop_with_offset(field, shape)
    if res is None:
        raise PlacementImpossibleError(kind=b.shape, column=b.starting_column, block_index=index)
    dropped, offset = res

    cleared_field, cleared = clear_solid_rows_counted(dropped)
    LOG.debug("drop %s -> offset=%d cleared=%d", b, offset, cleared)
    return PlacementResult(block=b, field_after=cleared_field, offset=int(offset), cleared_rows=int(cleared))


def process_blocks(
        field: Grid,
        blocks: Iterable[BlockLike],
        *,
        pieces: PieceSet,
        cell_encoding: CellEncoding = "binary",
) -> Grid:
    """Drop each block in order, clearing rows after every drop; return the final field."""
    for i, block in enumerate(blocks):
        field = place_block(field, block, pieces=pieces, cell_encoding=cell_encoding, index=i).field_after
    return field


def highest_block_after_processing(
        field: Grid,
        blocks: Iterable[BlockLike],
        *,
        pieces: PieceSet,
        cell_encoding: CellEncoding = "binary",
) -> int:
    return height_from_floor(process_blocks(field, blocks, pieces=pieces, cell_encoding=cell_encoding))


class DropGame:
    """
    Stateful driver around the pure placement functions.

    Contracts:
      - self.field is the only mutable state; it is REPLACED, never mutated.
      - play_line() commits the new field only when the whole line succeeds, so a
        failed line leaves the field as it was before the line.
      - field_mode="reset" starts every line from an empty field.
    """

    def __init__(
            self,
            *,
            width: int = FIELD_WIDTH,
            height: int = FIELD_HEIGHT,
            headroom: Optional[int] = None,
            piece_set: Optional[PieceSet] = None,
            field_mode: FieldMode = "persist",
            cell_encoding: CellEncoding = "binary",
    ) -> None:
        self.pieces = piece_set or PieceSet.classic7()
        if not self.pieces.kinds():
            raise ValueError("PieceSet has no kinds (empty pieceset is invalid).")

        self.visible_h = int(height)
        self.headroom = int(self.pieces.max_bbox_height() if headroom is None else headroom)
        self.w = int(width)
        if self.visible_h <= 0:
            raise ValueError(f"height must be positive, got {self.visible_h}")
        if self.headroom < 0:
            raise ValueError(f"headroom must be >= 0, got {self.headroom}")
        if self.w <= 0:
            raise ValueError(f"width must be positive, got {self.w}")
        self.h = int(self.visible_h + self.headroom)

        self.field_mode: FieldMode = field_mode
        self.cell_encoding: CellEncoding = cell_encoding
        self.field = Grid.empty(height=self.h, width=self.w)
        self.blocks_placed = 0
        self.rows_cleared = 0

    @classmethod
    def from_config(cls, cfg: GameConfig) -> "DropGame":
        pieces = None
        if cfg.pieces is not None:
            pieces = PieceSet.from_yaml(resolve_user_path(cfg.pieces))
        return cls(
            width=cfg.width,
            height=cfg.height,
            headroom=cfg.headroom,
            piece_set=pieces,
            field_mode=cfg.field_mode,
            cell_encoding=cfg.cell_encoding,
        )

    def reset(self) -> Grid:
        self.field = Grid.empty(height=self.h, width=self.w)
        return self.field

    def height(self) -> int:
        return height_from_floor(self.field)

    def play(self, blocks: Iterable[BlockLike]) -> int:
        """Drop a sequence of blocks and return the resulting height."""
        start = Grid.empty(height=self.h, width=self.w) if self.field_mode == "reset" else self.field

        field = start
        placed = 0
        cleared = 0
        for i, block in enumerate(blocks):
            res = place_block(field, block, pieces=self.pieces, cell_encoding=self.cell_encoding, index=i)
            field = res.field_after
            placed += 1
            cleared += res.cleared_rows

        self.field = field
        self.blocks_placed += placed
        self.rows_cleared += cleared

        m = field_snapshot_metrics(field)
        LOG.debug("placed=%d cleared=%d height=%d occupied=%d", placed, cleared, m.height, m.occupied)
        return int(m.height)

    def play_line(self, line: str) -> Optional[int]:
        """
        Parse and play one input line. Blank lines are ignored (returns None).
        """
        blocks: List[InputBlock] = parse_line(line, kinds=self.pieces.kinds())
        if not blocks:
            return None
        return self.play(blocks)


__all__ = [
    "PlacementResult",
    "shape_for",
    "place_block",
    "process_blocks",
    "highest_block_after_processing",
    "DropGame",
]
