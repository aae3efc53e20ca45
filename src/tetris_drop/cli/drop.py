# src/tetris_drop/cli/drop.py
from __future__ import annotations

from typing import Optional, Sequence

from tetris_drop.apps.drop.entrypoint import parse_args, run


def main(argv: Optional[Sequence[str]] = None) -> int:
    return run(parse_args(argv))


if __name__ == "__main__":
    raise SystemExit(main())
