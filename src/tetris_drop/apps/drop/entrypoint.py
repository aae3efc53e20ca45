# src/tetris_drop/apps/drop/entrypoint.py
from __future__ import annotations

import argparse
import logging
import sys
from contextlib import ExitStack
from pathlib import Path
from typing import IO, List, Optional, Sequence

import yaml
from omegaconf.errors import OmegaConfBaseException
from pydantic import ValidationError

from tetris_drop.core.config.io import load_run_config
from tetris_drop.core.config.root import RunConfig
from tetris_drop.game.core.errors import TetrisDropError
from tetris_drop.game.core.game import DropGame
from tetris_drop.game.core.grid import Grid
from tetris_drop.game.core.metrics import highest_occupied_row
from tetris_drop.utils.logging import setup_logger

EXIT_OK = 0
EXIT_PLAY_FAILED = 1
EXIT_USAGE = 2

_DESCRIPTION = """\
Drop tetrominoes onto a 10 x 103 field and report the stack height.

For each line in the input, interpret that line as a comma-separated sequence of
INPUT_BLOCK, where
  INPUT_BLOCK : { 'Q', 'Z', 'S', 'T', 'I', 'L', 'J' } + COLUMN

Each block is placed with its leftmost cell at COLUMN and dropped. Solid rows
clear in typical tetris style. After a line has been processed, the height of
the tallest occupied row is printed.
"""


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="tetris-drop",
        description=_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    ap.add_argument("--infile", "-i", type=str, default=None, help="input file (default: stdin)")
    ap.add_argument("--outfile", "-o", type=str, default=None, help="output file (default: stdout)")
    ap.add_argument("--config", "-c", type=str, default=None, help="YAML run config")
    ap.add_argument(
        "--set",
        dest="overrides",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="config override in dotlist form, e.g. game.width=12 (repeatable)",
    )
    ap.add_argument(
        "--field-mode",
        choices=["persist", "reset"],
        default=None,
        help="keep the field across input lines (persist) or start each line empty (reset)",
    )
    ap.add_argument(
        "--on-failure",
        choices=["abort", "skip_line"],
        default=None,
        help="stop at the first bad line (abort) or report it and carry on (skip_line)",
    )
    ap.add_argument("--log-level", type=str, default=None, help="debug|info|warning|error")
    ap.add_argument("--no-rich", action="store_true", help="plain log formatting")
    ap.add_argument("--dump-grid", action="store_true", help="log the final field as text (info level)")
    return ap


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def _overrides_from_args(args: argparse.Namespace) -> List[str]:
    out = [str(o) for o in (args.overrides or [])]
    if args.field_mode is not None:
        out.append(f"game.field_mode={args.field_mode}")
    if args.on_failure is not None:
        out.append(f"game.on_failure={args.on_failure}")
    if args.log_level is not None:
        out.append(f"log_level={args.log_level}")
    if args.no_rich:
        out.append("use_rich=false")
    if args.dump_grid:
        out.append("dump_grid=true")
    return out


def _visible_rows(field: Grid) -> str:
    top = highest_occupied_row(field)
    if top is None:
        return "(empty)"
    return Grid(field.cells[top:]).to_ascii()


def run_lines(
        *,
        game: DropGame,
        lines: IO[str],
        out: IO[str],
        abort_on_failure: bool,
        logger: logging.Logger,
) -> int:
    """
    Play every input line, writing one height per played line.

    Returns the number of failed lines.
    """
    failures = 0
    for lineno, line in enumerate(lines, start=1):
        try:
            height = game.play_line(line)
        except TetrisDropError as e:
            failures += 1
            logger.error("line %d: %s", lineno, e)
            if abort_on_failure:
                break
            continue

        if height is None:
            continue
        out.write(f"{height}\n")
    out.flush()
    return failures


def run(args: argparse.Namespace) -> int:
    logger = setup_logger(
        name="tetris_drop",
        use_rich=not bool(args.no_rich),
        level=str(args.log_level or "warning"),
    )

    try:
        cfg: RunConfig = load_run_config(
            Path(args.config) if args.config else None,
            overrides=_overrides_from_args(args),
        )
    except (FileNotFoundError, TypeError, ValueError, ValidationError, OmegaConfBaseException) as e:
        logger.error("invalid configuration: %s", e)
        return EXIT_USAGE

    logger = setup_logger(name="tetris_drop", use_rich=cfg.use_rich, level=cfg.log_level)

    try:
        game = DropGame.from_config(cfg.game)
    except (OSError, ValueError, KeyError, TypeError, yaml.YAMLError) as e:
        logger.error("couldn't load piece set: %s", e)
        return EXIT_USAGE

    logger.info(
        "field %dx%d (height %d + headroom %d), field_mode=%s on_failure=%s",
        game.w,
        game.h,
        game.visible_h,
        game.headroom,
        cfg.game.field_mode,
        cfg.game.on_failure,
    )

    with ExitStack() as stack:
        try:
            lines: IO[str] = (
                stack.enter_context(open(args.infile, "r", encoding="utf-8")) if args.infile else sys.stdin
            )
        except OSError as e:
            logger.error("couldn't open input: %s", e)
            return EXIT_USAGE
        try:
            out: IO[str] = (
                stack.enter_context(open(args.outfile, "w", encoding="utf-8")) if args.outfile else sys.stdout
            )
        except OSError as e:
            logger.error("couldn't open output: %s", e)
            return EXIT_USAGE

        try:
            failures = run_lines(
                game=game,
                lines=lines,
                out=out,
                abort_on_failure=(cfg.game.on_failure == "abort"),
                logger=logger,
            )
        except OSError as e:
            logger.error("couldn't write output: %s", e)
            return EXIT_USAGE

    if cfg.dump_grid:
        logger.info("final field:\n%s", _visible_rows(game.field))

    logger.info("blocks placed=%d rows cleared=%d", game.blocks_placed, game.rows_cleared)
    if failures:
        return EXIT_PLAY_FAILED
    return EXIT_OK


__all__ = ["build_parser", "parse_args", "run", "run_lines"]
