"""
Grid state representation for bugsim.

The whole grid is packed into a single integer bitmask:
- bit index = y * size + x
- bit 1 = bug present, bit 0 = empty

Bit 0 is the top-left cell, bits run left-to-right then top-to-bottom.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator

import numpy as np

from .coordinate import Coordinate, DIRECTIONS, ORIGIN


BUG = "#"
EMPTY = "."


class GridIndexError(IndexError):
    """Raised when a coordinate outside the grid is read or written."""


@dataclass
class GridState:
    """
    Fixed-size square grid of booleans packed into an integer.

    Attributes:
        size: Width and height of the grid
        state: Bitmask with capacity size * size bits
    """

    size: int = 5
    state: int = 0

    def __post_init__(self) -> None:
        if self.size < 1:
            raise ValueError(f"size must be >= 1, got {self.size}")
        if self.state < 0:
            raise ValueError(f"state must be non-negative, got {self.state}")
        if self.state >> self.capacity:
            raise ValueError(
                f"state has bits set beyond capacity {self.capacity}: {self.state:#x}"
            )

    @property
    def capacity(self) -> int:
        """Number of cells (usable bits)."""
        return self.size * self.size

    @property
    def bug_count(self) -> int:
        """Number of infested cells."""
        return bin(self.state).count("1")

    def contains(self, pos: Coordinate) -> bool:
        """Whether `pos` lies inside [0, size-1] x [0, size-1]."""
        upper = Coordinate(self.size - 1, self.size - 1)
        return not pos.lower_any(ORIGIN) and not pos.greater_any(upper)

    def _bit(self, pos: Coordinate) -> int:
        if not self.contains(pos):
            raise GridIndexError(
                f"position ({pos.x}, {pos.y}) outside {self.size}x{self.size} grid"
            )
        return pos.y * self.size + pos.x

    def set(self, pos: Coordinate, value: bool) -> None:
        """Set or clear the cell at `pos`."""
        bit = self._bit(pos)
        if value:
            self.state |= 1 << bit
        else:
            self.state &= ~(1 << bit)

    def get(self, pos: Coordinate) -> bool:
        """Whether the cell at `pos` holds a bug."""
        bit = self._bit(pos)
        return bool((self.state >> bit) & 1)

    def count_adjacent(self, pos: Coordinate) -> int:
        """
        Count infested orthogonal neighbors of `pos`.

        Neighbors outside the grid are treated as empty; diagonals are
        never considered.

        Args:
            pos: Cell to inspect

        Returns:
            Neighbor count in [0, 4]
        """
        total = 0
        for direction in DIRECTIONS:
            neighbor = pos + direction
            if self.contains(neighbor) and self.get(neighbor):
                total += 1
        return total

    def serialize(self) -> int:
        """Raw bitmask, used as the key identifying this configuration."""
        return self.state

    def render(self) -> str:
        """
        Render the grid as text.

        Returns:
            `size` lines of `size` characters joined by newlines,
            '#' for a bug and '.' for an empty cell
        """
        mask = self.state
        rows = []
        for _ in range(self.size):
            row = ""
            for _ in range(self.size):
                row += BUG if mask & 1 else EMPTY
                mask >>= 1
            rows.append(row)
        return "\n".join(rows)

    def positions(self) -> Iterator[Coordinate]:
        """All grid coordinates in row-major order."""
        for y in range(self.size):
            for x in range(self.size):
                yield Coordinate(x, y)

    def clone(self) -> "GridState":
        """Create an independent copy."""
        return GridState(size=self.size, state=self.state)

    def to_array(self) -> np.ndarray:
        """Boolean array [size, size] indexed as [y, x]."""
        bits = [(self.state >> i) & 1 for i in range(self.capacity)]
        return np.array(bits, dtype=bool).reshape(self.size, self.size)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> "GridState":
        """Build a state from a square boolean array indexed as [y, x]."""
        arr = np.asarray(arr, dtype=bool)
        if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
            raise ValueError(f"expected a square 2D array, got shape {arr.shape}")

        grid = cls(size=arr.shape[0])
        for y, x in zip(*np.nonzero(arr)):
            grid.set(Coordinate(int(x), int(y)), True)
        return grid

    @classmethod
    def from_rows(cls, rows: Iterable[str]) -> "GridState":
        """
        Build a state from rendered rows ('#' = bug, anything else empty).

        Rows must form a square; see `bugsim.loader.parse_grid` for the
        validating text reader.
        """
        rows = list(rows)
        grid = cls(size=len(rows))
        for y, row in enumerate(rows):
            if len(row) != grid.size:
                raise ValueError(
                    f"row {y} has {len(row)} cells, expected {grid.size}"
                )
            for x, ch in enumerate(row):
                if ch == BUG:
                    grid.set(Coordinate(x, y), True)
        return grid


def create_empty_state(size: int = 5) -> GridState:
    """Grid of the given size with no bugs."""
    return GridState(size=size)
