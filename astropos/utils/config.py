# astropos/utils/config.py
from __future__ import annotations

from dataclasses import dataclass, fields, replace
from functools import lru_cache
from typing import Any, Dict, Optional
import logging
import os

import yaml

__all__ = [
    "AttrDict",
    "Settings",
    "load_config",
    "settings_from_env",
    "settings_from_env_and_file",
    "get_settings",
    "configure_logging",
]

_PACKAGE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DEFAULT_VSOP87_PATH = os.path.join(_PACKAGE_DIR, "data", "vsop87c.json")


class AttrDict(dict):
    """Dict that also supports attribute access: cfg.log_level and cfg['log_level'] both work."""
    def __getattr__(self, item):
        try:
            return self[item]
        except KeyError as e:
            raise AttributeError(item) from e

    def __setattr__(self, key, value):
        self[key] = value


def _to_attr(obj):
    if isinstance(obj, dict):
        return AttrDict({k: _to_attr(v) for k, v in obj.items()})
    if isinstance(obj, list):
        return [_to_attr(x) for x in obj]
    return obj


def load_config(path: str) -> AttrDict:
    """
    Load a YAML config file. Optional env override:
      - ASTROPOS_VSOP87_PATH (overrides config['vsop87_path'] if set)
    Returns an AttrDict for convenient access.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: top-level YAML value must be a mapping")

    vsop_path = os.getenv("ASTROPOS_VSOP87_PATH")
    if vsop_path:
        data["vsop87_path"] = vsop_path

    return _to_attr(data)


# ───────────────────────────── Settings (single source) ─────────────────
@dataclass(frozen=True)
class Settings:
    vsop87_path: str
    log_level: str


def settings_from_env() -> Settings:
    return Settings(
        vsop87_path=(os.getenv("ASTROPOS_VSOP87_PATH", "").strip() or DEFAULT_VSOP87_PATH),
        log_level=(os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"),
    )


def settings_from_env_and_file(path: Optional[str] = None) -> Settings:
    """
    Env defaults, overridden by the YAML file at `path` (or $ASTROPOS_CONFIG).
    Unknown YAML keys are ignored.
    """
    base = settings_from_env()
    path = path or os.getenv("ASTROPOS_CONFIG", "").strip()
    if not path:
        return base

    cfg = load_config(path)
    known = {f.name for f in fields(Settings)}
    overrides: Dict[str, Any] = {k: str(v) for k, v in cfg.items() if k in known and v is not None}
    if "log_level" in overrides:
        overrides["log_level"] = overrides["log_level"].upper()
    return replace(base, **overrides)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process settings, read once. Tests call get_settings.cache_clear()."""
    return settings_from_env_and_file()


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(level=(level or get_settings().log_level))
