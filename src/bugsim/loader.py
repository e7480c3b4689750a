"""
Reading the initial grid from text.

One line per row, '#' marks a bug and any other character is empty.
"""

from pathlib import Path
from typing import Iterable, Optional, Union

from .coordinate import Coordinate
from .state import BUG, GridState


class GridFormatError(ValueError):
    """Raised when input text does not describe a square grid of the expected size."""


def parse_grid(text: Union[str, Iterable[str]], size: Optional[int] = None) -> GridState:
    """
    Parse a grid from text.

    Args:
        text: Whole input as a string, or an iterable of lines
        size: Expected grid size (derived from the row count if None)

    Returns:
        GridState holding the parsed bugs

    Raises:
        GridFormatError: If the row count or any row length is wrong
    """
    if isinstance(text, str):
        lines = text.splitlines()
    else:
        lines = list(text)

    # Spaces are empty cells; only line terminators are stripped
    rows = [line.rstrip("\r\n") for line in lines]
    while rows and rows[-1] == "":
        rows.pop()

    if not rows:
        raise GridFormatError("input grid is empty")

    if size is None:
        size = len(rows)
    if len(rows) != size:
        raise GridFormatError(f"expected {size} rows, got {len(rows)}")

    grid = GridState(size=size)
    for y, row in enumerate(rows):
        if len(row) != size:
            raise GridFormatError(
                f"row {y} has {len(row)} characters, expected {size}"
            )
        for x, ch in enumerate(row):
            if ch == BUG:
                grid.set(Coordinate(x, y), True)

    return grid


def load_grid(path: Union[str, Path], size: Optional[int] = None) -> GridState:
    """
    Load a grid from a text file.

    Args:
        path: Input file path
        size: Expected grid size (derived from the file if None)

    Returns:
        Parsed GridState
    """
    with open(path, encoding="utf-8") as f:
        return parse_grid(f, size=size)
