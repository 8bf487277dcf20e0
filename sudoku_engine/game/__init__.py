"""Game session, regulators and progression."""

from .session import GameSession, SessionState
from .history import BoundedHistory
from .countdown import CountdownTimer
from .lives import LivesState, update_lives, lose_life, add_life, time_until_next_life
from .levels import Level, LevelProgress, difficulty_for_level, stars_for_time
from .statistics import Statistics

__all__ = [
    "GameSession",
    "SessionState",
    "BoundedHistory",
    "CountdownTimer",
    "LivesState",
    "update_lives",
    "lose_life",
    "add_life",
    "time_until_next_life",
    "Level",
    "LevelProgress",
    "difficulty_for_level",
    "stars_for_time",
    "Statistics",
]
