"""Engine tuning constants and their JSON loader."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, fields
from typing import Any, Mapping

logger = logging.getLogger(__name__)


def _default_multipliers() -> dict[str, float]:
    return {"easy": 0.0, "medium": 0.3, "hard": 0.6, "expert": 1.0}


@dataclass(frozen=True)
class EngineConfig:
    min_grid_size: int = 3
    max_grid_size: int = 8
    max_numbered_cells: int = 6
    max_obstacle_fraction: float = 0.15
    obstacle_multipliers: dict[str, float] = field(default_factory=_default_multipliers)
    max_generation_attempts: int = 50

    # Seconds.
    optimal_completion_time: int = 300
    max_completion_time: int = 3600

    three_star_efficiency: int = 95
    two_star_efficiency: int = 85
    three_star_time_bonus: int = 180
    two_star_time_bonus: int = 60

    def obstacle_multiplier(self, difficulty: str) -> float:
        return self.obstacle_multipliers.get(str(difficulty), 0.0)

    def clamp_grid_size(self, grid_size: int) -> int:
        return max(self.min_grid_size, min(grid_size, self.max_grid_size))


DEFAULT_CONFIG = EngineConfig()


def config_from_mapping(data: Mapping[str, Any]) -> EngineConfig:
    """Build a config from a plain dict, ignoring keys it does not know."""
    allowed_keys = {f.name for f in fields(EngineConfig)}
    unknown = sorted(set(data) - allowed_keys)
    if unknown:
        logger.warning("Ignoring unknown config keys: %s", ", ".join(unknown))

    filtered = {k: v for k, v in data.items() if k in allowed_keys}
    if "obstacle_multipliers" in filtered:
        merged = _default_multipliers()
        merged.update(
            {str(k): float(v) for k, v in dict(filtered["obstacle_multipliers"]).items()}
        )
        filtered["obstacle_multipliers"] = merged
    return EngineConfig(**filtered)


def load_config(config_path: str) -> EngineConfig:
    """
    Load engine settings from a JSON file shaped like ``{"engine": {...}}``.

    A missing or unreadable file falls back to the defaults with a warning.
    """
    if not os.path.exists(config_path):
        logger.warning("Config file not found: %s, using defaults", config_path)
        return DEFAULT_CONFIG

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return config_from_mapping(data.get("engine", {}))
    except (OSError, ValueError, TypeError, AttributeError) as exc:
        logger.warning("Error loading config %s: %s, using defaults", config_path, exc)
        return DEFAULT_CONFIG
