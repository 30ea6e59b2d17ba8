"""Drawing primitives for FLAPLINE frame buffers.

Buffers are numpy arrays of shape (height, width, 3). Every primitive clips
to the buffer, so callers can pass shapes that hang off the edges.
"""

from typing import Dict, List, Tuple
import numpy as np
from numpy.typing import NDArray

# Type aliases
Color = Tuple[int, int, int]
Buffer = NDArray[np.uint8]

CHAR_WIDTH = 3
CHAR_HEIGHT = 5
CHAR_SPACING = 1


def new_buffer(width: int, height: int) -> Buffer:
    return np.zeros((height, width, 3), dtype=np.uint8)


def fill(buffer: Buffer, color: Color) -> None:
    """Fill entire buffer with color."""
    buffer[:, :] = color


def draw_rect(
    buffer: Buffer,
    x: int,
    y: int,
    width: int,
    height: int,
    color: Color,
    filled: bool = True,
    thickness: int = 1,
) -> None:
    """Draw a rectangle on the buffer.

    Args:
        buffer: Target numpy array (height, width, 3)
        x: Left edge x coordinate
        y: Top edge y coordinate
        width: Rectangle width
        height: Rectangle height
        color: RGB color tuple
        filled: If True, fill rectangle; if False, draw outline only
        thickness: Outline thickness (when filled=False)
    """
    if width <= 0 or height <= 0:
        return

    if not filled:
        t = min(thickness, width, height)
        draw_rect(buffer, x, y, width, t, color)
        draw_rect(buffer, x, y + height - t, width, t, color)
        draw_rect(buffer, x, y, t, height, color)
        draw_rect(buffer, x + width - t, y, t, height, color)
        return

    h, w = buffer.shape[:2]
    x1 = max(0, min(x, w))
    y1 = max(0, min(y, h))
    x2 = max(0, min(x + width, w))
    y2 = max(0, min(y + height, h))
    buffer[y1:y2, x1:x2] = color


def draw_ellipse(
    buffer: Buffer,
    cx: float,
    cy: float,
    rx: float,
    ry: float,
    color: Color,
) -> None:
    """Draw a filled axis-aligned ellipse."""
    if rx <= 0 or ry <= 0:
        return

    h, w = buffer.shape[:2]
    x1, x2 = max(0, int(cx - rx)), min(w, int(cx + rx) + 1)
    y1, y2 = max(0, int(cy - ry)), min(h, int(cy + ry) + 1)
    if x1 >= x2 or y1 >= y2:
        return

    ys, xs = np.ogrid[y1:y2, x1:x2]
    mask = ((xs - cx) / rx) ** 2 + ((ys - cy) / ry) ** 2 <= 1.0
    buffer[y1:y2, x1:x2][mask] = color


def draw_circle(buffer: Buffer, cx: float, cy: float, radius: float, color: Color) -> None:
    draw_ellipse(buffer, cx, cy, radius, radius, color)


def measure_text(text: str, scale: int = 1) -> Tuple[int, int]:
    """Measure text dimensions in pixels for the built-in 3x5 font."""
    if not text:
        return (0, 0)
    width = (len(text) * (CHAR_WIDTH + CHAR_SPACING) - CHAR_SPACING) * scale
    return (width, CHAR_HEIGHT * scale)


def draw_text(
    buffer: Buffer,
    text: str,
    x: int,
    y: int,
    color: Color,
    scale: int = 1,
) -> Tuple[int, int]:
    """Draw text with the built-in bitmap font.

    Unknown characters render as '?'.

    Returns:
        Tuple of (width, height) of rendered text in pixels
    """
    cursor_x = x
    step = (CHAR_WIDTH + CHAR_SPACING) * scale

    for char in text:
        if char != " ":
            glyph = FONT_3X5.get(char.upper(), FONT_3X5["?"])
            for row_idx, row in enumerate(glyph):
                for col_idx, pixel in enumerate(row):
                    if pixel:
                        draw_rect(
                            buffer,
                            cursor_x + col_idx * scale,
                            y + row_idx * scale,
                            scale,
                            scale,
                            color,
                        )
        cursor_x += step

    return measure_text(text, scale)


def draw_centered_text(
    buffer: Buffer,
    text: str,
    y: int,
    color: Color,
    scale: int = 1,
) -> Tuple[int, int]:
    """Draw text horizontally centered on the buffer."""
    text_w, _ = measure_text(text, scale)
    x = (buffer.shape[1] - text_w) // 2
    return draw_text(buffer, text, x, y, color, scale)


# Each glyph is 5 rows of 3 pixels
FONT_3X5: Dict[str, List[List[int]]] = {
    'A': [[0,1,0], [1,0,1], [1,1,1], [1,0,1], [1,0,1]],
    'B': [[1,1,0], [1,0,1], [1,1,0], [1,0,1], [1,1,0]],
    'C': [[0,1,1], [1,0,0], [1,0,0], [1,0,0], [0,1,1]],
    'D': [[1,1,0], [1,0,1], [1,0,1], [1,0,1], [1,1,0]],
    'E': [[1,1,1], [1,0,0], [1,1,0], [1,0,0], [1,1,1]],
    'F': [[1,1,1], [1,0,0], [1,1,0], [1,0,0], [1,0,0]],
    'G': [[0,1,1], [1,0,0], [1,0,1], [1,0,1], [0,1,1]],
    'H': [[1,0,1], [1,0,1], [1,1,1], [1,0,1], [1,0,1]],
    'I': [[1,1,1], [0,1,0], [0,1,0], [0,1,0], [1,1,1]],
    'J': [[0,0,1], [0,0,1], [0,0,1], [1,0,1], [0,1,0]],
    'K': [[1,0,1], [1,0,1], [1,1,0], [1,0,1], [1,0,1]],
    'L': [[1,0,0], [1,0,0], [1,0,0], [1,0,0], [1,1,1]],
    'M': [[1,0,1], [1,1,1], [1,0,1], [1,0,1], [1,0,1]],
    'N': [[1,0,1], [1,1,1], [1,1,1], [1,0,1], [1,0,1]],
    'O': [[0,1,0], [1,0,1], [1,0,1], [1,0,1], [0,1,0]],
    'P': [[1,1,0], [1,0,1], [1,1,0], [1,0,0], [1,0,0]],
    'Q': [[0,1,0], [1,0,1], [1,0,1], [1,1,1], [0,1,1]],
    'R': [[1,1,0], [1,0,1], [1,1,0], [1,0,1], [1,0,1]],
    'S': [[0,1,1], [1,0,0], [0,1,0], [0,0,1], [1,1,0]],
    'T': [[1,1,1], [0,1,0], [0,1,0], [0,1,0], [0,1,0]],
    'U': [[1,0,1], [1,0,1], [1,0,1], [1,0,1], [0,1,0]],
    'V': [[1,0,1], [1,0,1], [1,0,1], [0,1,0], [0,1,0]],
    'W': [[1,0,1], [1,0,1], [1,0,1], [1,1,1], [1,0,1]],
    'X': [[1,0,1], [1,0,1], [0,1,0], [1,0,1], [1,0,1]],
    'Y': [[1,0,1], [1,0,1], [0,1,0], [0,1,0], [0,1,0]],
    'Z': [[1,1,1], [0,0,1], [0,1,0], [1,0,0], [1,1,1]],
    '0': [[0,1,0], [1,0,1], [1,0,1], [1,0,1], [0,1,0]],
    '1': [[0,1,0], [1,1,0], [0,1,0], [0,1,0], [1,1,1]],
    '2': [[0,1,0], [1,0,1], [0,0,1], [0,1,0], [1,1,1]],
    '3': [[1,1,0], [0,0,1], [0,1,0], [0,0,1], [1,1,0]],
    '4': [[1,0,1], [1,0,1], [1,1,1], [0,0,1], [0,0,1]],
    '5': [[1,1,1], [1,0,0], [1,1,0], [0,0,1], [1,1,0]],
    '6': [[0,1,1], [1,0,0], [1,1,0], [1,0,1], [0,1,0]],
    '7': [[1,1,1], [0,0,1], [0,1,0], [0,1,0], [0,1,0]],
    '8': [[0,1,0], [1,0,1], [0,1,0], [1,0,1], [0,1,0]],
    '9': [[0,1,0], [1,0,1], [0,1,1], [0,0,1], [1,1,0]],
    '?': [[0,1,0], [1,0,1], [0,0,1], [0,0,0], [0,1,0]],
    '!': [[0,1,0], [0,1,0], [0,1,0], [0,0,0], [0,1,0]],
    ':': [[0,0,0], [0,1,0], [0,0,0], [0,1,0], [0,0,0]],
    '-': [[0,0,0], [0,0,0], [1,1,1], [0,0,0], [0,0,0]],
}
