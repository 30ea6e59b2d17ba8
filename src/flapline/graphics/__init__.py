"""Graphics module for FLAPLINE rendering."""

from flapline.graphics.primitives import (
    draw_rect,
    draw_circle,
    draw_ellipse,
    draw_text,
    draw_centered_text,
    measure_text,
    fill,
    new_buffer,
)
from flapline.graphics.renderer import new_frame, render_frame

__all__ = [
    # Renderer
    "new_frame",
    "render_frame",
    # Primitives
    "draw_rect",
    "draw_circle",
    "draw_ellipse",
    "draw_text",
    "draw_centered_text",
    "measure_text",
    "fill",
    "new_buffer",
]
