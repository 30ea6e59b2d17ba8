"""
Obstacle stream: spawning, scrolling, retiring and scoring of pipe pairs.

The stream is a tuple ordered by spawn time. The first element is the
oldest (leftmost) obstacle and the last element is the newest one. Every
operation returns a new tuple and leaves its input untouched.
"""

import random
from dataclasses import dataclass, replace
from typing import Tuple

from flapline.sim.config import GameConfig


@dataclass(frozen=True)
class Obstacle:
    """A pipe pair.

    Attributes:
        x: Left edge of both pipe bodies
        gap_height: Top edge of the passable gap (bottom of the upper pipe)
        passed: Set once the trailing edge has crossed the bird's column
    """

    x: float
    gap_height: float
    passed: bool = False


Obstacles = Tuple[Obstacle, ...]


def spawn_obstacle(config: GameConfig, rng: random.Random) -> Obstacle:
    """Create an obstacle at the right edge with a random gap.

    The gap top is uniform over [0, field_height - pipe_gap - ground_margin).
    """
    return Obstacle(
        x=config.field_width,
        gap_height=rng.random() * config.max_gap_height,
    )


def advance(obstacles: Obstacles, config: GameConfig) -> Obstacles:
    """Scroll every obstacle left by the pipe speed."""
    return tuple(replace(o, x=o.x - config.pipe_speed) for o in obstacles)


def retire_offscreen(obstacles: Obstacles, config: GameConfig) -> Obstacles:
    """Drop obstacles whose trailing edge is past the left boundary."""
    return tuple(o for o in obstacles if o.x + config.pipe_width > 0)


def maybe_spawn(
    obstacles: Obstacles,
    config: GameConfig,
    rng: random.Random,
) -> Obstacles:
    """Append a new obstacle once the newest one has scrolled a spacing unit.

    Spawning is keyed on position rather than time so obstacle density stays
    locked to the scroll speed.
    """
    if not obstacles or obstacles[-1].x < config.field_width - config.pipe_spacing:
        return obstacles + (spawn_obstacle(config, rng),)
    return obstacles


def mark_passed(
    obstacles: Obstacles,
    bird_center_x: float,
    config: GameConfig,
) -> Tuple[Obstacles, int]:
    """Flag obstacles whose trailing edge crossed the bird's center.

    Returns:
        Tuple of (updated obstacles, number of newly passed obstacles)
    """
    gained = 0
    updated = []
    for obstacle in obstacles:
        if not obstacle.passed and obstacle.x + config.pipe_width < bird_center_x:
            obstacle = replace(obstacle, passed=True)
            gained += 1
        updated.append(obstacle)
    return tuple(updated), gained
