"""
Whole-world snapshot and the fixed-order tick function.

A tick never mutates its input. The next world is built from the previous
one in this order:

    gravity -> advance -> retire -> spawn -> mark passed / score -> collision

so scoring and collision both see this tick's obstacle positions.
"""

import random
from dataclasses import dataclass, replace
from typing import Optional

from flapline.sim.bird import BirdState, apply_gravity, apply_impulse, initial_bird
from flapline.sim.collision import CollisionKind, check_collision
from flapline.sim.config import GameConfig
from flapline.sim.obstacles import (
    Obstacles,
    advance,
    mark_passed,
    maybe_spawn,
    retire_offscreen,
    spawn_obstacle,
)


@dataclass(frozen=True)
class RunState:
    """Score and liveness of the current run."""

    score: int = 0
    is_active: bool = False
    is_over: bool = False


@dataclass(frozen=True)
class World:
    """Immutable state of one simulation tick."""

    bird: BirdState
    obstacles: Obstacles = ()
    run: RunState = RunState()
    tick: int = 0
    collision: Optional[CollisionKind] = None

    @property
    def is_running(self) -> bool:
        return self.run.is_active and not self.run.is_over


def idle_world(config: GameConfig) -> World:
    """World shown before the first run: bird parked, board empty."""
    return World(bird=initial_bird(config))


def initial_world(config: GameConfig, rng: random.Random) -> World:
    """Fresh active run with a single obstacle at the right edge."""
    return World(
        bird=initial_bird(config),
        obstacles=(spawn_obstacle(config, rng),),
        run=RunState(score=0, is_active=True, is_over=False),
    )


def with_impulse(world: World, config: GameConfig) -> World:
    """Apply a flap. Ignored unless the run is active and not over."""
    if not world.is_running:
        return world
    return replace(world, bird=apply_impulse(world.bird, config))


def step(world: World, config: GameConfig, rng: random.Random) -> World:
    """Advance the world by exactly one tick.

    Terminal or inactive worlds are returned unchanged.
    """
    if not world.is_running:
        return world

    bird = apply_gravity(world.bird, config)

    obstacles = advance(world.obstacles, config)
    obstacles = retire_offscreen(obstacles, config)
    obstacles = maybe_spawn(obstacles, config, rng)

    obstacles, gained = mark_passed(obstacles, config.bird_center_x, config)
    run = world.run
    if gained:
        run = replace(run, score=run.score + gained)

    collision = check_collision(bird, obstacles, config)
    if collision is not None:
        run = replace(run, is_active=False, is_over=True)

    return World(
        bird=bird,
        obstacles=obstacles,
        run=run,
        tick=world.tick + 1,
        collision=collision,
    )
