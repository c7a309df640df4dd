from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Dict, Optional, Tuple

import yaml

logger = logging.getLogger(__name__)

MESSAGE_TIERS = ("time_crunch", "flawless", "good", "okay", "retry")

_SECTIONS = ("grid", "timing", "scoring")


def _default_messages() -> Dict[str, Tuple[str, ...]]:
    return {
        "time_crunch": ("Phew! Just in time!",),
        "flawless": ("Fantastic focus!",),
        "good": ("Smooth moves!",),
        "okay": ("Got there in the end!",),
        "retry": ("Persistence pays off!",),
    }


@dataclass(frozen=True)
class GameConfig:
    """Tuning constants for the grid, the clock, scoring and reward messages."""

    rows: int = 5
    base_cols: int = 2
    levels_per_column: int = 5

    level_seconds: int = 30
    warn_seconds: int = 10
    danger_seconds: int = 5
    time_crunch_seconds: int = 5
    mistake_flash_ms: int = 300
    expiry_penalty_ms: int = 3000
    blink_interval_ms: int = 200
    blink_total_ms: int = 2000
    overlay_ms: int = 1100

    base_reward: int = 100
    level_reward: int = 10
    flawless_bonus: int = 200

    messages: Dict[str, Tuple[str, ...]] = field(default_factory=_default_messages)


def default_config_path() -> Path:
    return Path(__file__).resolve().parent.parent / "data" / "game.yaml"


def load_config(path: Optional[Path] = None) -> GameConfig:
    """Read a ``GameConfig`` from YAML (the bundled ``game.yaml`` by default)."""
    config_path = Path(path) if path is not None else default_config_path()
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ValueError(f"{config_path.name}: expected a mapping at the top level")

    values: Dict[str, object] = {}
    numeric = {f.name for f in fields(GameConfig) if f.name != "messages"}
    for section in _SECTIONS:
        block = raw.get(section) or {}
        if not isinstance(block, dict):
            raise ValueError(f"{config_path.name}: '{section}' must be a mapping")
        for key, value in block.items():
            if key not in numeric:
                logger.debug("Ignoring unknown config key %s.%s", section, key)
                continue
            # bool is an int subclass; reject it explicitly
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{config_path.name}: '{section}.{key}' must be an integer")
            if value < 0 or (value == 0 and key != "flawless_bonus"):
                raise ValueError(f"{config_path.name}: '{section}.{key}' must be positive")
            values[key] = value

    messages = _default_messages()
    raw_messages = raw.get("messages") or {}
    if not isinstance(raw_messages, dict):
        raise ValueError(f"{config_path.name}: 'messages' must be a mapping of tier -> list")
    for tier, pool in raw_messages.items():
        if tier not in MESSAGE_TIERS:
            logger.debug("Ignoring unknown message tier %s", tier)
            continue
        if not isinstance(pool, list):
            raise ValueError(f"{config_path.name}: 'messages.{tier}' must be a list")
        cleaned = tuple(str(item).strip() for item in pool if str(item).strip())
        if not cleaned:
            raise ValueError(f"{config_path.name}: 'messages.{tier}' has no messages")
        messages[tier] = cleaned
    values["messages"] = messages

    config = GameConfig(**values)
    if config.base_cols < 1 or config.rows < 1:
        raise ValueError(f"{config_path.name}: grid must have at least one row and column")
    logger.info("Loaded game config from %s", config_path)
    return config
