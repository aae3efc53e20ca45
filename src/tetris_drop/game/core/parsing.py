# src/tetris_drop/game/core/parsing.py
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from tetris_drop.game.core.errors import ParseError

_TOKEN_RE = re.compile(r"(?P<shape>[A-Za-z])(?P<starting_column>[0-9]+)")


@dataclass(frozen=True)
class InputBlock:
    shape: str
    starting_column: int

    @classmethod
    def of(cls, pair: "InputBlock | Tuple[str, int]") -> "InputBlock":
        if isinstance(pair, InputBlock):
            return pair
        shape, col = pair
        return cls(shape=str(shape), starting_column=int(col))

    def __str__(self) -> str:
        return f"{self.shape}{self.starting_column}"


def parse_token(token: str, *, index: int = 0, kinds: Optional[Iterable[str]] = None) -> InputBlock:
    """
    Parse one `<ShapeId><Column>` token, e.g. "Q8".

    When `kinds` is given the shape letter must be one of them.
    """
    t = str(token).strip()
    if not t:
        raise ParseError(token=token, index=index, reason="empty token")

    m = _TOKEN_RE.fullmatch(t)
    if m is None:
        raise ParseError(token=t, index=index, reason="expected a shape letter followed by a column number")

    shape = m.group("shape")
    if kinds is not None:
        known = tuple(kinds)
        if shape not in known:
            raise ParseError(token=t, index=index, reason=f"unknown shape {shape!r}, expected one of {list(known)!r}")

    return InputBlock(shape=shape, starting_column=int(m.group("starting_column")))


def parse_line(line: str, *, kinds: Optional[Iterable[str]] = None) -> List[InputBlock]:
    """
    Parse a comma-separated list of input blocks, e.g. "I0,I4,Q8".

    Surrounding whitespace is ignored. An empty line parses to [].
    """
    s = str(line).strip()
    if not s:
        return []
    known = None if kinds is None else tuple(kinds)
    return [parse_token(tok, index=i, kinds=known) for i, tok in enumerate(s.split(","))]


__all__ = ["InputBlock", "parse_token", "parse_line"]
