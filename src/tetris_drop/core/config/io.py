# src/tetris_drop/core/config/io.py
from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Sequence

from omegaconf import DictConfig, OmegaConf
from pydantic import BaseModel

from tetris_drop.core.config.root import RunConfig


def to_plain_dict(cfg: Any) -> dict[str, Any]:
    if isinstance(cfg, BaseModel):
        return cfg.model_dump(mode="json")
    if isinstance(cfg, DictConfig):
        data = OmegaConf.to_container(cfg, resolve=True)
        if not isinstance(data, dict):
            raise TypeError("config must resolve to a mapping")
        return {str(k): v for k, v in data.items()}
    raise TypeError(f"unsupported config type: {type(cfg).__name__}")


def load_run_config(
        path: Optional[Path] = None,
        *,
        overrides: Sequence[str] = (),
) -> RunConfig:
    """
    Build a RunConfig from an optional YAML file plus dotlist overrides.

    Precedence (last wins): model defaults < YAML file < overrides ("game.width=12").
    """
    merged = OmegaConf.create({})

    if path is not None:
        p = Path(path)
        if not p.is_file():
            raise FileNotFoundError(f"config file not found: {p}")
        loaded = OmegaConf.load(p)
        if not isinstance(loaded, DictConfig):
            raise TypeError(f"config file must contain a mapping at top-level: {p}")
        merged = OmegaConf.merge(merged, loaded)

    if overrides:
        merged = OmegaConf.merge(merged, OmegaConf.from_dotlist([str(o) for o in overrides]))

    return RunConfig.model_validate(to_plain_dict(merged))


__all__ = ["load_run_config", "to_plain_dict"]
