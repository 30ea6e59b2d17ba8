"""Renders session snapshots into RGB frame buffers."""

from flapline.core.state import Phase
from flapline.graphics.primitives import (
    Buffer,
    draw_centered_text,
    draw_circle,
    draw_ellipse,
    draw_rect,
    fill,
    new_buffer,
)
from flapline.session import Snapshot
from flapline.sim.config import GameConfig

SKY = (135, 206, 235)
GROUND = (222, 216, 149)
GROUND_EDGE = (84, 56, 71)
PIPE = (115, 191, 46)
PIPE_EDGE = (84, 130, 38)
BIRD = (250, 200, 40)
BIRD_WING = (240, 240, 220)
BIRD_BEAK = (245, 110, 40)
EYE = (20, 20, 20)
TEXT = (255, 255, 255)
TEXT_SHADOW = (0, 0, 0)
GAME_OVER = (230, 60, 40)

SCORE_SCALE = 8
LABEL_SCALE = 6


def new_frame(config: GameConfig) -> Buffer:
    """Allocate a buffer matching the play field."""
    return new_buffer(int(config.field_width), int(config.field_height))


def render_frame(buffer: Buffer, snapshot: Snapshot) -> None:
    """Draw the whole scene for one snapshot."""
    config = snapshot.config
    fill(buffer, SKY)

    for x, gap_height in snapshot.obstacles:
        _draw_pipe_pair(buffer, x, gap_height, config)

    _draw_ground(buffer, config)
    _draw_bird(buffer, snapshot.bird_y, snapshot.bird_velocity, config)
    _draw_hud(buffer, snapshot)


def _draw_pipe_pair(buffer: Buffer, x: float, gap_height: float, config: GameConfig) -> None:
    px = int(x)
    width = int(config.pipe_width)
    gap_top = int(gap_height)
    gap_bottom = int(gap_height + config.pipe_gap)
    lower_height = int(config.ground_top) - gap_bottom

    # Upper body [0, gap) and lower body [gap + pipe_gap, ground)
    draw_rect(buffer, px, 0, width, gap_top, PIPE)
    draw_rect(buffer, px, gap_bottom, width, lower_height, PIPE)

    # Lips
    lip = 12
    draw_rect(buffer, px - 3, gap_top - lip, width + 6, lip, PIPE_EDGE)
    draw_rect(buffer, px - 3, gap_bottom, width + 6, lip, PIPE_EDGE)


def _draw_ground(buffer: Buffer, config: GameConfig) -> None:
    top = int(config.ground_top)
    draw_rect(buffer, 0, top, buffer.shape[1], int(config.ground_height), GROUND)
    draw_rect(buffer, 0, top, buffer.shape[1], 4, GROUND_EDGE)


def _draw_bird(buffer: Buffer, y: float, velocity: float, config: GameConfig) -> None:
    rx = config.bird_width / 2
    ry = config.bird_height / 2
    cx = config.bird_center_x
    cy = y + ry

    draw_ellipse(buffer, cx, cy, rx, ry * 0.8, BIRD)

    # Wing flips up while climbing
    wing_dy = -ry * 0.25 if velocity < 0 else ry * 0.2
    draw_ellipse(buffer, cx - rx * 0.35, cy + wing_dy, rx * 0.45, ry * 0.25, BIRD_WING)

    draw_circle(buffer, cx + rx * 0.4, cy - ry * 0.3, max(2.0, rx * 0.12), EYE)
    draw_rect(buffer, int(cx + rx * 0.7), int(cy - 2), int(rx * 0.5), 8, BIRD_BEAK)


def _shadow_text(buffer: Buffer, text: str, y: int, color, scale: int) -> None:
    shadow = max(1, scale // 3)
    draw_centered_text(buffer, text, y + shadow, TEXT_SHADOW, scale)
    draw_centered_text(buffer, text, y, color, scale)


def _draw_hud(buffer: Buffer, snapshot: Snapshot) -> None:
    height = buffer.shape[0]

    if snapshot.phase == Phase.ACTIVE:
        _shadow_text(buffer, str(snapshot.score), 50, TEXT, SCORE_SCALE)

    elif snapshot.phase == Phase.READY:
        _shadow_text(buffer, "PRESS START", height // 3, TEXT, LABEL_SCALE)
        if snapshot.high_score:
            _shadow_text(buffer, f"BEST {snapshot.high_score}", height // 3 + 60, TEXT, LABEL_SCALE)

    elif snapshot.phase == Phase.OVER:
        top = height // 4
        _shadow_text(buffer, "GAME OVER", top, GAME_OVER, LABEL_SCALE + 1)
        _shadow_text(buffer, f"SCORE {snapshot.score}", top + 80, TEXT, LABEL_SCALE)
        best = f"NEW BEST {snapshot.high_score}" if snapshot.new_high_score else f"BEST {snapshot.high_score}"
        _shadow_text(buffer, best, top + 130, TEXT, LABEL_SCALE)
        _shadow_text(buffer, "START TO RETRY", top + 200, TEXT, LABEL_SCALE - 2)
