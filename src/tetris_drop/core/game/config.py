# src/tetris_drop/core/game/config.py
from __future__ import annotations

from typing import Literal, Optional

from pydantic import Field, field_validator, model_validator

from tetris_drop.core.config.base import ConfigBase
from tetris_drop.game.core.constants import FIELD_HEIGHT, FIELD_WIDTH

FieldMode = Literal["persist", "reset"]
FailurePolicy = Literal["abort", "skip_line"]
CellEncoding = Literal["binary", "categorical"]


def _as_int(value: object, *, where: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{where} must be an int, got bool")
    if not isinstance(value, (int, float, str, bytes, bytearray)):
        raise ValueError(f"{where} must be an int-like value, got {type(value)!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{where} must be an int-like value, got {value!r}") from e


class GameConfig(ConfigBase):
    """
    Game-level config (engine-facing).

    Field geometry:
      - width x (height + headroom) cells
      - headroom=None means "tallest shape in the piece set" (3 for classic7)

    Loop behavior:
      - field_mode: persist the field across input lines, or reset it per line
      - on_failure: abort the run on the first bad line, or skip the line and continue
      - cell_encoding: binary (1) or categorical (board id of the shape kind)
    """

    width: int = Field(default=FIELD_WIDTH, ge=1)
    height: int = Field(default=FIELD_HEIGHT, ge=1)
    headroom: Optional[int] = Field(default=None, ge=0)
    pieces: Optional[str] = None
    field_mode: FieldMode = "persist"
    on_failure: FailurePolicy = "abort"
    cell_encoding: CellEncoding = "binary"

    @field_validator("width", "height", mode="before")
    @classmethod
    def _dims_int(cls, v: object) -> int:
        return _as_int(v, where="game dimension")

    @field_validator("headroom", mode="before")
    @classmethod
    def _headroom_int(cls, v: object) -> Optional[int]:
        if v is None:
            return None
        return _as_int(v, where="game.headroom")

    @field_validator("field_mode", "on_failure", "cell_encoding", mode="before")
    @classmethod
    def _lower(cls, v: object) -> str:
        return str(v).strip().lower().replace("-", "_")

    @model_validator(mode="after")
    def _pieces_non_empty(self) -> "GameConfig":
        if self.pieces is not None and not str(self.pieces).strip():
            raise ValueError("game.pieces must be a non-empty path when set")
        return self


__all__ = ["GameConfig", "FieldMode", "FailurePolicy", "CellEncoding"]
