"""Shared puzzles and fixtures."""

import random

import pytest

from sudoku_engine.generator import Puzzle, Difficulty


# A known puzzle with a unique solution
TEST_PUZZLE = (
    "530070000"
    "600195000"
    "098000060"
    "800060003"
    "400803001"
    "700020006"
    "060000280"
    "000419005"
    "000080079"
)

TEST_SOLUTION = (
    "534678912"
    "672195348"
    "198342567"
    "859761423"
    "426853791"
    "713924856"
    "961537284"
    "287419635"
    "345286179"
)


class MemoryStore:
    """In-memory persistence collaborator."""

    def __init__(self, data=None):
        self.data = data
        self.saves = 0

    def save(self, data):
        self.data = data
        self.saves += 1

    def load(self):
        return self.data

    def clear(self):
        self.data = None


@pytest.fixture
def puzzle():
    return Puzzle.from_strings(TEST_PUZZLE, TEST_SOLUTION, Difficulty.MEDIUM)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def store():
    return MemoryStore()
