"""Engine configuration with JSON file overrides."""

from __future__ import annotations
import json
import logging
import os
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Optional

from .core.errors import ConfigError

logger = logging.getLogger(__name__)

SYMMETRIES = ("none", "central", "diagonal")


@dataclass(frozen=True)
class EngineConfig:
    """Tunable limits for the generator and the rater."""
    # Digging stops after this many consecutive failed removals
    max_remove_failures: int = 80
    # Easy puzzles keep at least this many clues
    easy_clue_floor: int = 40
    # Regeneration ceiling for easy puzzles failing the strict easy check
    max_easy_attempts: int = 25
    # Hard cap on replayed hint steps while rating
    max_rating_steps: int = 2000
    symmetry: str = "central"

    def __post_init__(self):
        if self.symmetry not in SYMMETRIES:
            raise ConfigError(f"symmetry must be one of {SYMMETRIES}, got {self.symmetry!r}")
        for name in ("max_remove_failures", "max_easy_attempts", "max_rating_steps"):
            if getattr(self, name) < 1:
                raise ConfigError(f"{name} must be at least 1")
        if not 17 <= self.easy_clue_floor <= 81:
            raise ConfigError(f"easy_clue_floor must be 17-81, got {self.easy_clue_floor}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> EngineConfig:
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


DEFAULT_CONFIG = EngineConfig()


def load_config(path: Optional[str] = None) -> EngineConfig:
    """
    Load configuration from a JSON file.

    Args:
        path: JSON file holding a subset of EngineConfig fields. If None,
              the defaults are returned.
    """
    if path is None:
        return DEFAULT_CONFIG
    if not os.path.exists(path):
        raise ConfigError(f"Config file not found: {path}")
    with open(path, "r") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Could not parse {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must hold a JSON object")
    config = EngineConfig.from_dict(data)
    logger.info("Loaded engine config from %s", path)
    return config
