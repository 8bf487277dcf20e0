"""Bounded undo history."""

from __future__ import annotations
from collections import deque
from typing import Deque, Iterable, List, Optional

from ..core.cell import Board, copy_board

DEFAULT_HISTORY_LIMIT = 50


class BoundedHistory:
    """Stack of board snapshots that drops the oldest entry once full."""

    def __init__(self, limit: int = DEFAULT_HISTORY_LIMIT, snapshots: Iterable[Board] = ()):
        self.limit = limit
        self._snapshots: Deque[Board] = deque(maxlen=limit)
        for board in snapshots:
            self.push(board)

    def push(self, board: Board) -> None:
        self._snapshots.append(copy_board(board))

    def pop(self) -> Optional[Board]:
        if not self._snapshots:
            return None
        return self._snapshots.pop()

    def clear(self) -> None:
        self._snapshots.clear()

    def snapshots(self) -> List[Board]:
        """Oldest first."""
        return list(self._snapshots)

    def __len__(self) -> int:
        return len(self._snapshots)

    def __bool__(self) -> bool:
        return bool(self._snapshots)
