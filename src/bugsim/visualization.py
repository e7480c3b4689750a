"""
Visualization utilities for bugsim.

Converts grids to RGB images and exports them as PNG files.
"""

from pathlib import Path
from typing import Sequence, Union

import numpy as np
import matplotlib.pyplot as plt

from .state import GridState


BUG_COLOR = (200, 60, 40)
EMPTY_COLOR = (235, 235, 225)
SEPARATOR_COLOR = (60, 60, 60)


def state_to_image(state: GridState, scale: int = 8) -> np.ndarray:
    """
    Convert a grid to an RGB image.

    Args:
        state: Grid to draw
        scale: Pixels per cell along each axis

    Returns:
        RGB image [size*scale, size*scale, 3] as uint8
    """
    if scale < 1:
        raise ValueError(f"scale must be >= 1, got {scale}")

    cells = state.to_array()

    rgb = np.empty((*cells.shape, 3), dtype=np.uint8)
    rgb[cells] = BUG_COLOR
    rgb[~cells] = EMPTY_COLOR

    # Upscale each cell to a scale x scale block
    return np.repeat(np.repeat(rgb, scale, axis=0), scale, axis=1)


def create_history_image(states: Sequence[GridState], scale: int = 8) -> np.ndarray:
    """
    Place generations side by side, separated by a one-pixel column.

    Args:
        states: Grids in generation order (all the same size)
        scale: Pixels per cell

    Returns:
        RGB image [size*scale, n*(size*scale+1)-1, 3] as uint8
    """
    if not states:
        raise ValueError("states must not be empty")

    size = states[0].size
    if any(s.size != size for s in states):
        raise ValueError("all states must have the same size")

    height = size * scale
    separator = np.empty((height, 1, 3), dtype=np.uint8)
    separator[:] = SEPARATOR_COLOR

    parts = []
    for i, state in enumerate(states):
        if i > 0:
            parts.append(separator)
        parts.append(state_to_image(state, scale))

    return np.concatenate(parts, axis=1)


def save_state_image(state: GridState, path: Union[str, Path], scale: int = 8) -> None:
    """Save a single grid as an image file."""
    plt.imsave(path, state_to_image(state, scale))


def save_history_image(
    states: Sequence[GridState],
    path: Union[str, Path],
    scale: int = 8,
) -> None:
    """Save a strip of generations as an image file."""
    plt.imsave(path, create_history_image(states, scale))


def save_state_images(
    state: GridState,
    output_dir: str,
    prefix: str = "frame",
    step: int = 0,
) -> Path:
    """
    Save one generation as a numbered frame.

    Args:
        state: Grid to draw
        output_dir: Output directory
        prefix: Filename prefix
        step: Generation number for filename

    Returns:
        Path of the written file
    """
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    path = output_path / f"{prefix}_{step:06d}.png"
    save_state_image(state, path)
    return path
