# src/tetris_drop/utils/paths.py
from __future__ import annotations

from pathlib import Path


def package_root() -> Path:
    """
    Return the installed tetris_drop package directory.
    """
    return Path(__file__).resolve().parents[1]


def assets_dir() -> Path:
    """
    Return tetris_drop/assets (must exist).
    """
    p = package_root() / "assets"
    if not p.is_dir():
        raise FileNotFoundError(f"Assets directory not found: {p}")
    return p


def pieces_dir() -> Path:
    """
    Return tetris_drop/assets/pieces (must exist).
    """
    p = assets_dir() / "pieces"
    if not p.is_dir():
        raise FileNotFoundError(f"Pieces directory not found: {p}")
    return p


def resolve_user_path(raw: str, *, base: Path | None = None) -> Path:
    """
    Resolve a path given on the command line or in a config file.

    Relative paths are taken relative to `base` (default: the working directory).
    """
    s = str(raw).strip().strip('"').strip("'")
    if not s:
        raise ValueError("empty path")
    p = Path(s).expanduser()
    if p.is_absolute():
        return p
    return ((base or Path.cwd()) / p).resolve()


__all__ = ["package_root", "assets_dir", "pieces_dir", "resolve_user_path"]
