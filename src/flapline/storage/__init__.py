"""Persistence collaborators for FLAPLINE."""

from flapline.storage.kv import KeyValueStore, MemoryStore, JsonFileStore
from flapline.storage.high_score import HighScoreStore, HIGH_SCORE_KEY, parse_score

__all__ = [
    "KeyValueStore",
    "MemoryStore",
    "JsonFileStore",
    "HighScoreStore",
    "HIGH_SCORE_KEY",
    "parse_score",
]
