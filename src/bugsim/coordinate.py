"""
Grid coordinates for bugsim.

Coordinates are zero-based (x = column, y = row) with y growing downwards.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Coordinate:
    """
    Immutable 2D integer point.

    Attributes:
        x: Column index
        y: Row index
    """

    x: int
    y: int

    def add(self, other: "Coordinate") -> "Coordinate":
        """Componentwise sum."""
        return Coordinate(self.x + other.x, self.y + other.y)

    def __add__(self, other: "Coordinate") -> "Coordinate":
        """Same as `add`."""
        return self.add(other)

    def lower_any(self, other: "Coordinate") -> bool:
        """True if this point is below `other` on at least one axis."""
        return self.x < other.x or self.y < other.y

    def greater_any(self, other: "Coordinate") -> bool:
        """True if this point is above `other` on at least one axis."""
        return self.x > other.x or self.y > other.y


ORIGIN = Coordinate(0, 0)

# Orthogonal neighbor offsets
UP = Coordinate(0, -1)
DOWN = Coordinate(0, 1)
LEFT = Coordinate(-1, 0)
RIGHT = Coordinate(1, 0)

DIRECTIONS = (UP, DOWN, LEFT, RIGHT)
