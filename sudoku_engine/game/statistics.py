"""Per-difficulty play statistics."""

from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Optional

from ..generator import Difficulty


def _counts() -> Dict[str, int]:
    return {d.value: 0 for d in Difficulty}


def _times() -> Dict[str, Optional[float]]:
    return {d.value: None for d in Difficulty}


@dataclass
class Statistics:
    """
    Games played/completed, best and average completion times per
    difficulty, plus win streaks and total play time. Times are seconds;
    None means no completed game yet.
    """
    games_played: Dict[str, int] = field(default_factory=_counts)
    games_completed: Dict[str, int] = field(default_factory=_counts)
    best_times: Dict[str, Optional[float]] = field(default_factory=_times)
    average_times: Dict[str, Optional[float]] = field(default_factory=_times)
    current_streak: int = 0
    longest_streak: int = 0
    total_play_time: int = 0

    def record_game_start(self, difficulty: Difficulty) -> None:
        self.games_played[difficulty.value] += 1

    def record_game_complete(self, difficulty: Difficulty, time_seconds: float) -> None:
        key = difficulty.value
        completed = self.games_completed[key] + 1
        self.games_completed[key] = completed

        best = self.best_times[key]
        self.best_times[key] = time_seconds if best is None else min(best, time_seconds)

        average = self.average_times[key]
        if average is None:
            self.average_times[key] = float(time_seconds)
        else:
            self.average_times[key] = (average * (completed - 1) + time_seconds) / completed

    def update_streak(self, won: bool) -> None:
        if won:
            self.current_streak += 1
            self.longest_streak = max(self.longest_streak, self.current_streak)
        else:
            self.current_streak = 0

    def add_play_time(self, seconds: int) -> None:
        self.total_play_time += seconds

    def reset(self) -> None:
        fresh = Statistics()
        self.__dict__.update(fresh.__dict__)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Statistics:
        stats = cls()
        for name in ("games_played", "games_completed", "best_times", "average_times"):
            getattr(stats, name).update(data.get(name, {}))
        stats.current_streak = int(data.get("current_streak", 0))
        stats.longest_streak = int(data.get("longest_streak", 0))
        stats.total_play_time = int(data.get("total_play_time", 0))
        return stats
