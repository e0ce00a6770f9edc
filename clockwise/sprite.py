"""Sprites with axis-aligned bounding boxes and game constants."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 64


class Direction(Enum):
    RIGHT = auto()
    LEFT = auto()
    UP = auto()
    DOWN = auto()


@dataclass
class Sprite:
    """A rectangle on the display."""

    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    def collided_with(self, other: Sprite) -> bool:
        """Return True when the two rectangles overlap."""
        return (
            self.x < other.x + other.width
            and self.x + self.width > other.x
            and self.y < other.y + other.height
            and self.y + self.height > other.y
        )

    def describe_position(self) -> str:
        """Return the position and size as a one-line text."""
        return f"x = {self.x}, y = {self.y}, w = {self.width}, h = {self.height}"

    def name(self) -> str:
        """Return the sprite's name; subclasses may override it."""
        return type(self).__name__