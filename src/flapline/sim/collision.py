"""Collision checks between the bird, the pipes and the field boundaries."""

from enum import Enum, auto
from typing import Iterable, Optional

from flapline.sim.bird import BirdState, bird_rect
from flapline.sim.config import GameConfig
from flapline.sim.geometry import Rect
from flapline.sim.obstacles import Obstacle


class CollisionKind(Enum):
    """What ended the run."""
    GROUND = auto()
    OBSTACLE = auto()
    CEILING = auto()


def hits_ground(bird: Rect, config: GameConfig) -> bool:
    return bird.bottom >= config.ground_top


def hits_ceiling(bird: Rect) -> bool:
    return bird.top < 0


def hits_obstacle(bird: Rect, obstacle: Obstacle, config: GameConfig) -> bool:
    """Test the bird against the upper and lower body of one pipe pair.

    The upper body spans [0, gap_height) and the lower body starts at
    gap_height + pipe_gap. Only pipes overlapping the bird horizontally count.
    """
    if not bird.overlaps_x(obstacle.x, obstacle.x + config.pipe_width):
        return False
    gap_top = obstacle.gap_height
    gap_bottom = obstacle.gap_height + config.pipe_gap
    return bird.top < gap_top or bird.bottom > gap_bottom


def check_collision(
    bird: BirdState,
    obstacles: Iterable[Obstacle],
    config: GameConfig,
) -> Optional[CollisionKind]:
    """Return the kind of collision for this bird position, or None."""
    rect = bird_rect(bird, config)

    if hits_ground(rect, config):
        return CollisionKind.GROUND

    if config.ceiling_collision and hits_ceiling(rect):
        return CollisionKind.CEILING

    for obstacle in obstacles:
        if hits_obstacle(rect, obstacle, config):
            return CollisionKind.OBSTACLE

    return None
