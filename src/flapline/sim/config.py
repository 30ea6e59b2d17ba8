"""Tuning constants for the simulation."""

from dataclasses import dataclass


@dataclass(frozen=True)
class GameConfig:
    """All fixed constants one run is simulated with.

    Units are field pixels and ticks. The y axis points down, so a negative
    velocity moves the bird up.
    """

    # Play field
    field_width: float = 400.0
    field_height: float = 800.0
    ground_height: float = 80.0

    # Bird
    bird_width: float = 50.0
    bird_height: float = 64.0
    gravity: float = 1.5
    jump_velocity: float = -15.0

    # Pipes
    pipe_width: float = 50.0
    pipe_gap: float = 300.0
    pipe_speed: float = 5.0
    pipe_spacing: float = 400.0 / 1.5
    ground_margin: float = 100.0

    # Rules
    ceiling_collision: bool = False
    tick_ms: float = 16.0

    @property
    def bird_center_x(self) -> float:
        """Fixed horizontal center of the bird."""
        return self.field_width / 2

    @property
    def bird_start_y(self) -> float:
        return self.field_height / 2

    @property
    def ground_top(self) -> float:
        """Y coordinate where the ground band begins."""
        return self.field_height - self.ground_height

    @property
    def max_gap_height(self) -> float:
        """Exclusive upper bound for a spawned gap's top edge."""
        return max(0.0, self.field_height - self.pipe_gap - self.ground_margin)
