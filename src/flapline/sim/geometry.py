"""Axis-aligned rectangles in field coordinates."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Rect:
    """Rectangle with its origin at the top-left corner."""

    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    def overlaps_x(self, left: float, right: float) -> bool:
        """Check for strict overlap with the horizontal span [left, right)."""
        return self.right > left and self.left < right
