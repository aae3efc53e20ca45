# src/tetris_drop/game/core/constants.py
from __future__ import annotations

# Board / cell encoding
EMPTY_CELL: int = 0
OCCUPIED_CELL: int = 1

# Playing field, from the brief: 10 wide, 100 tall (headroom for the tallest block comes from the piece set)
FIELD_WIDTH: int = 10
FIELD_HEIGHT: int = 100

# Classic tetromino set size
CLASSIC_NUM_PIECES: int = 7
