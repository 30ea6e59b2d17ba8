import random

import pytest

from flapline.sim.config import GameConfig
from flapline.storage import HighScoreStore, MemoryStore


@pytest.fixture
def config() -> GameConfig:
    return GameConfig()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def high_scores(memory_store) -> HighScoreStore:
    return HighScoreStore(memory_store)
