from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .game import Side

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "checkers.toml"


@dataclass
class OpponentConfig:
    side: str = "O"
    seed: Optional[int] = None  # None means an unseeded random source

    @property
    def side_enum(self) -> Side:
        return Side(self.side.upper())


@dataclass
class WebConfig:
    host: str = "127.0.0.1"
    port: int = 5000
    debug: bool = False


@dataclass
class Config:
    opponent: OpponentConfig = field(default_factory=OpponentConfig)
    web: WebConfig = field(default_factory=WebConfig)
    ui: Optional[str] = None  # "console" or "gui"; None means ask
    opponent_enabled: Optional[bool] = None  # None means ask
    log_level: str = "WARNING"

    @staticmethod
    def load_from_toml(path: str = DEFAULT_CONFIG_PATH) -> "Config":
        cfg = Config()
        if not os.path.exists(path):
            return cfg
        with open(path, "rb") as f:
            raw = tomllib.load(f)
        _merge(cfg.opponent, raw.get("opponent", {}))
        _merge(cfg.web, raw.get("web", {}))
        _merge(cfg, {k: v for k, v in raw.items() if not isinstance(v, dict)})
        if cfg.opponent.side.upper() not in {side.value for side in Side}:
            raise ValueError(f"Unknown opponent side {cfg.opponent.side!r} in {path}")
        return cfg


def _merge(target: Any, values: Dict[str, Any]) -> None:
    for key, value in values.items():
        if hasattr(target, key):
            setattr(target, key, value)
        else:
            logger.warning("Ignoring unknown config key %r", key)


def load_config(path: Optional[str] = None) -> Config:
    """Load the TOML config and apply ``CHECKERS_*`` environment overrides."""
    cfg = Config.load_from_toml(path or os.environ.get("CHECKERS_CONFIG_TOML", DEFAULT_CONFIG_PATH))

    seed = os.environ.get("CHECKERS_SEED")
    if seed:
        try:
            cfg.opponent.seed = int(seed)
        except ValueError:
            logger.warning("Ignoring non-integer CHECKERS_SEED=%r", seed)

    level = os.environ.get("CHECKERS_LOG_LEVEL")
    if level:
        cfg.log_level = level.upper()
    return cfg
