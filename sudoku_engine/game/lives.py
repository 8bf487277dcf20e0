"""Lives with lazy, time-based regeneration.

All functions are pure: they take the stored state and the current wall-clock
time and return a new state. Calling them more or less often than once per
tick gives the same result because regeneration is recomputed from the
stored timestamp.
"""

from __future__ import annotations
from dataclasses import dataclass, replace, asdict
from typing import Any, Dict, Optional

LIFE_REGEN_SECONDS = 30 * 60
DEFAULT_MAX_LIVES = 5


@dataclass(frozen=True)
class LivesState:
    lives: int = DEFAULT_MAX_LIVES
    max_lives: int = DEFAULT_MAX_LIVES
    # Start of the current regeneration window, in seconds
    last_loss_timestamp: Optional[float] = None

    def __post_init__(self):
        if self.max_lives < 1:
            raise ValueError(f"max_lives must be at least 1, got {self.max_lives}")
        if not 0 <= self.lives <= self.max_lives:
            raise ValueError(f"lives must be within 0-{self.max_lives}, got {self.lives}")

    @property
    def is_full(self) -> bool:
        return self.lives >= self.max_lives

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> LivesState:
        return cls(
            lives=int(data["lives"]),
            max_lives=int(data.get("max_lives", DEFAULT_MAX_LIVES)),
            last_loss_timestamp=data.get("last_loss_timestamp"),
        )


def _elapsed(state: LivesState, now: float) -> int:
    return max(0, int(now - state.last_loss_timestamp))


def update_lives(state: LivesState, now: float, interval: int = LIFE_REGEN_SECONDS) -> LivesState:
    """Restore one life per full interval since the stored timestamp."""
    if state.is_full or state.last_loss_timestamp is None:
        return state

    regenerated = _elapsed(state, now) // interval
    if regenerated == 0:
        return state

    lives = min(state.lives + regenerated, state.max_lives)
    if lives == state.max_lives:
        return replace(state, lives=lives, last_loss_timestamp=None)
    return replace(
        state,
        lives=lives,
        last_loss_timestamp=state.last_loss_timestamp + regenerated * interval,
    )


def lose_life(state: LivesState, now: float) -> LivesState:
    """
    Take one life. The regeneration clock starts on the first loss from a
    full pool and is left alone for further losses.
    """
    if state.lives == 0:
        return state
    timestamp = now if state.is_full else state.last_loss_timestamp
    return replace(state, lives=state.lives - 1, last_loss_timestamp=timestamp)


def add_life(state: LivesState) -> LivesState:
    """Grant one life (e.g. a reward), up to the maximum."""
    if state.is_full:
        return state
    lives = state.lives + 1
    timestamp = None if lives == state.max_lives else state.last_loss_timestamp
    return replace(state, lives=lives, last_loss_timestamp=timestamp)


def time_until_next_life(state: LivesState, now: float, interval: int = LIFE_REGEN_SECONDS) -> int:
    """Seconds until the next life comes back; 0 while the pool is full."""
    if state.is_full or state.last_loss_timestamp is None:
        return 0
    return interval - (_elapsed(state, now) % interval)
