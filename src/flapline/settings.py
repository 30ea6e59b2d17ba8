"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
Nested groups use a double underscore, e.g. FLAPLINE_PHYSICS__GRAVITY=2.0.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from flapline.sim.config import GameConfig


class PhysicsSettings(BaseModel):
    """Bird and pipe motion, in field pixels per tick."""

    gravity: float = Field(default=1.5, gt=0)
    jump_velocity: float = Field(default=-15.0, lt=0)
    pipe_speed: float = Field(default=5.0, gt=0)
    tick_ms: float = Field(default=16.0, gt=0)


class FieldSettings(BaseModel):
    """Play field and sprite extents."""

    width: float = Field(default=400.0, gt=0)
    height: float = Field(default=800.0, gt=0)
    ground_height: float = Field(default=80.0, ge=0)
    ground_margin: float = Field(default=100.0, ge=0)

    bird_width: float = Field(default=50.0, gt=0)
    bird_height: float = Field(default=64.0, gt=0)

    pipe_width: float = Field(default=50.0, gt=0)
    pipe_gap: float = Field(default=300.0, gt=0)
    # Defaults to width / 1.5 when unset
    pipe_spacing: Optional[float] = Field(default=None, gt=0)


class RulesSettings(BaseModel):
    """Behaviour switches that differ between game variants."""

    start_gate: bool = True
    ceiling_collision: bool = False


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="FLAPLINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # Environment
    env: Literal["simulator", "headless"] = "simulator"
    debug: bool = False
    seed: Optional[int] = None

    # Persistence
    data_dir: Path = Field(default_factory=lambda: Path.home() / ".flapline")
    high_score_file: str = "scores.json"

    # Simulator window
    fps: int = Field(default=60, gt=0)
    window_scale: float = Field(default=1.0, gt=0)

    # Headless runner
    headless_ticks: int = Field(default=5000, gt=0)

    # Nested settings
    physics: PhysicsSettings = Field(default_factory=PhysicsSettings)
    field: FieldSettings = Field(default_factory=FieldSettings)
    rules: RulesSettings = Field(default_factory=RulesSettings)

    @property
    def high_score_path(self) -> Path:
        return self.data_dir / self.high_score_file

    def game_config(self) -> GameConfig:
        """Build the frozen simulation config from these settings."""
        f = self.field
        spacing = f.pipe_spacing if f.pipe_spacing is not None else f.width / 1.5
        return GameConfig(
            field_width=f.width,
            field_height=f.height,
            ground_height=f.ground_height,
            bird_width=f.bird_width,
            bird_height=f.bird_height,
            gravity=self.physics.gravity,
            jump_velocity=self.physics.jump_velocity,
            pipe_width=f.pipe_width,
            pipe_gap=f.pipe_gap,
            pipe_speed=self.physics.pipe_speed,
            pipe_spacing=spacing,
            ground_margin=f.ground_margin,
            ceiling_collision=self.rules.ceiling_collision,
            tick_ms=self.physics.tick_ms,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
