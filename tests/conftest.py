"""
Pytest configuration and fixtures for bugsim tests.
"""

import matplotlib

matplotlib.use("Agg")

import pytest

from bugsim.config import Config
from bugsim.loader import parse_grid
from bugsim.state import GridState


EXAMPLE_GRID = """\
....#
#..#.
#..##
..#..
#....
"""

EXAMPLE_AFTER_ONE = """\
#..#.
####.
###.#
##.##
.##.."""

EXAMPLE_FIRST_REPEAT = 2129920


@pytest.fixture
def default_config() -> Config:
    """Default configuration for tests."""
    return Config()


@pytest.fixture
def example_state() -> GridState:
    """Reference starting layout."""
    return parse_grid(EXAMPLE_GRID)


@pytest.fixture
def empty_state() -> GridState:
    """Empty 5x5 grid."""
    return GridState(size=5)


@pytest.fixture
def input_file(tmp_path):
    """Reference layout written to a file."""
    path = tmp_path / "input.txt"
    path.write_text(EXAMPLE_GRID)
    return path
