"""FLAPLINE - a fixed-tick side-scrolling flap-through-the-pipes game."""

__version__ = "0.1.0"
