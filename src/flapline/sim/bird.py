"""Bird state and its per-tick physics."""

from dataclasses import dataclass, replace

from flapline.sim.config import GameConfig
from flapline.sim.geometry import Rect


@dataclass(frozen=True)
class BirdState:
    """Vertical position (top edge) and velocity of the bird."""

    y: float
    velocity: float = 0.0


def initial_bird(config: GameConfig) -> BirdState:
    return BirdState(y=config.bird_start_y, velocity=0.0)


def apply_gravity(bird: BirdState, config: GameConfig) -> BirdState:
    """Integrate one tick: velocity first, then position with the new velocity.

    No clamping is applied here; boundaries are the collision check's job.
    """
    velocity = bird.velocity + config.gravity
    return BirdState(y=bird.y + velocity, velocity=velocity)


def apply_impulse(bird: BirdState, config: GameConfig) -> BirdState:
    """Override the velocity with the jump constant."""
    return replace(bird, velocity=config.jump_velocity)


def bird_rect(bird: BirdState, config: GameConfig) -> Rect:
    """Axis-aligned extent of the bird, centered on its fixed column."""
    return Rect(
        left=config.bird_center_x - config.bird_width / 2,
        top=bird.y,
        width=config.bird_width,
        height=config.bird_height,
    )
