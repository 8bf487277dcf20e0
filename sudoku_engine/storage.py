"""JSON persistence for saved games, settings, statistics, lives and levels.

Every record is an opaque JSON blob in its own file. A missing or unreadable
file loads as None so callers simply start fresh.
"""

from __future__ import annotations
import json
import logging
import os
from typing import Any, Optional

logger = logging.getLogger(__name__)


class JsonFileStore:
    """save/load/clear of one JSON document on disk."""

    def __init__(self, path: str):
        self.path = path

    def save(self, data: Any) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        tmp_path = self.path + ".tmp"
        try:
            with open(tmp_path, "w") as f:
                json.dump(data, f)
        except Exception:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise
        os.replace(tmp_path, self.path)

    def load(self) -> Optional[Any]:
        if not os.path.exists(self.path):
            return None
        try:
            with open(self.path, "r") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Could not read %s, starting fresh: %s", self.path, e)
            return None

    def clear(self) -> None:
        try:
            os.remove(self.path)
        except FileNotFoundError:
            pass

    def __repr__(self) -> str:
        return f"JsonFileStore({self.path!r})"


class GameStorage:
    """Named stores under one directory."""

    KEYS = ("game_state", "settings", "statistics", "lives", "levels")

    def __init__(self, directory: str):
        self.directory = directory
        for key in self.KEYS:
            setattr(self, key, JsonFileStore(os.path.join(directory, f"{key}.json")))

    def clear_all(self) -> None:
        for key in self.KEYS:
            getattr(self, key).clear()
