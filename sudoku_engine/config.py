"""Engine tunables."""

from __future__ import annotations
import json
import logging
import os
from dataclasses import dataclass, fields, asdict
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


@dataclass
class EngineConfig:
    """Gameplay constants, overridable from a JSON file."""
    history_limit: int = 50
    max_lives: int = 5
    life_regen_seconds: int = 30 * 60
    time_limit_seconds: int = 10 * 60
    time_extension_seconds: int = 5 * 60
    three_star_seconds: int = 3 * 60
    two_star_seconds: int = 5 * 60
    level_count: int = 500

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> EngineConfig:
        """Build a config from a mapping, ignoring keys it does not know."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning("Ignoring unknown config keys: %s", ", ".join(unknown))

        config = cls(**{k: int(v) for k, v in data.items() if k in known})
        for f in fields(config):
            if getattr(config, f.name) <= 0:
                raise ValueError(f"Config value {f.name} must be positive")
        return config

    @classmethod
    def from_file(cls, path: Optional[str]) -> EngineConfig:
        """Load a JSON config file. A missing path gives the defaults."""
        if not path or not os.path.exists(path):
            return cls()
        with open(path, "r") as f:
            data = json.load(f)
        logger.info("Loaded engine config from %s", path)
        return cls.from_dict(data)
