"""Simple rule-based pilot used by the headless runner."""

from typing import Optional, Tuple

from flapline.session import Snapshot
from flapline.sim.config import GameConfig


def next_gap(snapshot: Snapshot) -> Optional[Tuple[float, float]]:
    """Return the first obstacle whose trailing edge is still ahead of the bird."""
    config = snapshot.config
    bird_left = config.bird_center_x - config.bird_width / 2
    for x, gap_height in snapshot.obstacles:
        if x + config.pipe_width >= bird_left:
            return x, gap_height
    return None


def should_flap(snapshot: Snapshot, margin: float = 20.0) -> bool:
    """Flap when falling below the lowest safe point of the next gap.

    With no obstacle ahead, hold the middle of the open field instead.
    """
    config: GameConfig = snapshot.config
    gap = next_gap(snapshot)
    if gap is None:
        floor = config.ground_top / 2
    else:
        floor = gap[1] + config.pipe_gap - config.bird_height - margin

    return snapshot.bird_velocity >= 0 and snapshot.bird_y > floor
