"""Level progression: unlocks, stars and best times."""

from __future__ import annotations
import logging
from dataclasses import dataclass, asdict, replace
from typing import Any, Dict, List, Optional

from ..config import EngineConfig
from ..generator import Difficulty, Puzzle, PuzzleGenerator

logger = logging.getLogger(__name__)

DEFAULT_LEVEL_COUNT = 500
DEFAULT_THREE_STAR_SECONDS = 3 * 60
DEFAULT_TWO_STAR_SECONDS = 5 * 60
SEED_MULTIPLIER = 12345


@dataclass(frozen=True)
class Level:
    id: int
    difficulty: Difficulty
    unlocked: bool = False
    completed: bool = False
    stars: int = 0
    best_time: Optional[int] = None
    seed: int = 0

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["difficulty"] = self.difficulty.value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Level:
        return cls(
            id=int(data["id"]),
            difficulty=Difficulty.parse(data["difficulty"]),
            unlocked=bool(data.get("unlocked", False)),
            completed=bool(data.get("completed", False)),
            stars=int(data.get("stars", 0)),
            best_time=data.get("best_time"),
            seed=int(data.get("seed", 0)),
        )


def difficulty_for_level(level_id: int) -> Difficulty:
    """Levels get harder in bands: 50 beginner, 50 easy, 100 medium, 150 hard, 100 expert, then evil."""
    if level_id <= 50:
        return Difficulty.BEGINNER
    if level_id <= 100:
        return Difficulty.EASY
    if level_id <= 200:
        return Difficulty.MEDIUM
    if level_id <= 350:
        return Difficulty.HARD
    if level_id <= 450:
        return Difficulty.EXPERT
    return Difficulty.EVIL


def stars_for_time(
    seconds: int,
    three_star_seconds: int = DEFAULT_THREE_STAR_SECONDS,
    two_star_seconds: int = DEFAULT_TWO_STAR_SECONDS,
) -> int:
    if seconds < three_star_seconds:
        return 3
    if seconds < two_star_seconds:
        return 2
    return 1


class LevelProgress:
    """The player's level map. Only level 1 starts unlocked."""

    def __init__(
        self,
        count: int = DEFAULT_LEVEL_COUNT,
        levels: Optional[List[Level]] = None,
        three_star_seconds: int = DEFAULT_THREE_STAR_SECONDS,
        two_star_seconds: int = DEFAULT_TWO_STAR_SECONDS,
    ):
        self.three_star_seconds = three_star_seconds
        self.two_star_seconds = two_star_seconds
        if levels is None:
            levels = [
                Level(
                    id=i,
                    difficulty=difficulty_for_level(i),
                    unlocked=i == 1,
                    seed=i * SEED_MULTIPLIER,
                )
                for i in range(1, count + 1)
            ]
        self._levels: Dict[int, Level] = {level.id: level for level in levels}

    @classmethod
    def from_config(cls, config: EngineConfig, levels: Optional[List[Level]] = None) -> LevelProgress:
        return cls(
            count=config.level_count,
            levels=levels,
            three_star_seconds=config.three_star_seconds,
            two_star_seconds=config.two_star_seconds,
        )

    @property
    def levels(self) -> List[Level]:
        return [self._levels[k] for k in sorted(self._levels)]

    def get(self, level_id: int) -> Optional[Level]:
        return self._levels.get(level_id)

    def unlock(self, level_id: int) -> None:
        level = self._levels.get(level_id)
        if level is not None and not level.unlocked:
            self._levels[level_id] = replace(level, unlocked=True)

    def stars_for(self, time_seconds: int) -> int:
        return stars_for_time(time_seconds, self.three_star_seconds, self.two_star_seconds)

    def complete(self, level_id: int, time_seconds: int, stars: Optional[int] = None) -> None:
        """
        Record a finished level and unlock the next one.

        Without ``stars`` the rating comes from this map's time thresholds.
        Best time and stars only ever improve.
        """
        level = self._levels.get(level_id)
        if level is None:
            return

        if stars is None:
            stars = self.stars_for(time_seconds)
        stars = max(0, min(3, stars))
        best_time = time_seconds if level.best_time is None else min(level.best_time, time_seconds)
        self._levels[level_id] = replace(
            level,
            completed=True,
            best_time=best_time,
            stars=max(level.stars, stars),
        )
        self.unlock(level_id + 1)
        logger.info("Level %d completed in %ds with %d stars", level_id, time_seconds, stars)

    def puzzle_for(self, level_id: int) -> Puzzle:
        """The level's puzzle; the same level always deals the same grid."""
        level = self._levels.get(level_id)
        if level is None:
            return PuzzleGenerator().generate(Difficulty.MEDIUM)
        return PuzzleGenerator(seed=level.seed).generate(level.difficulty)

    def to_dict(self) -> Dict[str, Any]:
        return {"levels": [level.to_dict() for level in self.levels]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any], config: Optional[EngineConfig] = None) -> LevelProgress:
        levels = [Level.from_dict(item) for item in data["levels"]]
        return cls.from_config(config or EngineConfig(), levels)

    def __len__(self) -> int:
        return len(self._levels)
