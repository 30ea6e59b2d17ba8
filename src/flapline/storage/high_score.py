"""High score persistence on top of a key-value store."""

from typing import Optional
import logging

from flapline.storage.kv import KeyValueStore

logger = logging.getLogger(__name__)

HIGH_SCORE_KEY = "highScore"


def parse_score(raw: Optional[str]) -> int:
    """Parse a stored score. Absent, non-numeric or negative values give 0."""
    if raw is None:
        return 0
    try:
        value = int(raw.strip(), 10)
    except ValueError:
        logger.warning(f"Ignoring malformed stored high score: {raw!r}")
        return 0
    if value < 0:
        logger.warning(f"Ignoring negative stored high score: {value}")
        return 0
    return value


class HighScoreStore:
    """Loads and saves the high score as a decimal string.

    Both operations swallow store failures after logging them, so callers
    never have to deal with I/O errors.
    """

    def __init__(self, store: KeyValueStore, key: str = HIGH_SCORE_KEY) -> None:
        self.store = store
        self.key = key

    def load(self) -> int:
        try:
            raw = self.store.get(self.key)
        except Exception as e:
            logger.error(f"Failed to load high score: {e}")
            return 0

        score = parse_score(raw)
        logger.info(f"Loaded high score: {score}")
        return score

    def save(self, score: int) -> bool:
        try:
            ok = self.store.set(self.key, str(score))
        except Exception as e:
            logger.error(f"Failed to save high score: {e}")
            return False

        if ok:
            logger.info(f"Saved high score: {score}")
        else:
            logger.error(f"Store rejected high score: {score}")
        return ok
