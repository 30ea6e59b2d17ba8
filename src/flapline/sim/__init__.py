"""Deterministic simulation core for FLAPLINE."""

from flapline.sim.config import GameConfig
from flapline.sim.bird import BirdState, apply_gravity, apply_impulse, bird_rect, initial_bird
from flapline.sim.obstacles import (
    Obstacle,
    advance,
    retire_offscreen,
    maybe_spawn,
    mark_passed,
    spawn_obstacle,
)
from flapline.sim.geometry import Rect
from flapline.sim.collision import CollisionKind, check_collision
from flapline.sim.world import (
    RunState,
    World,
    idle_world,
    initial_world,
    step,
    with_impulse,
)

__all__ = [
    "GameConfig",
    # Bird
    "BirdState",
    "apply_gravity",
    "apply_impulse",
    "bird_rect",
    "initial_bird",
    # Obstacles
    "Obstacle",
    "advance",
    "retire_offscreen",
    "maybe_spawn",
    "mark_passed",
    "spawn_obstacle",
    # Collision
    "CollisionKind",
    "Rect",
    "check_collision",
    # World
    "RunState",
    "World",
    "idle_world",
    "initial_world",
    "step",
    "with_impulse",
]
