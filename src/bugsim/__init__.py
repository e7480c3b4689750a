"""
bugsim - Bug infestation automaton

Evolves a bounded grid of bugs until a layout repeats.
"""

__version__ = "0.1.0"

from .config import Config
from .coordinate import Coordinate
from .state import GridState, GridIndexError, create_empty_state
from .rules import compute_next_state
from .simulation import Simulation, CycleResult, GenerationLimitExceeded
from .loader import GridFormatError, load_grid, parse_grid

__all__ = [
    "Config",
    "Coordinate",
    "GridState",
    "GridIndexError",
    "create_empty_state",
    "compute_next_state",
    "Simulation",
    "CycleResult",
    "GenerationLimitExceeded",
    "GridFormatError",
    "load_grid",
    "parse_grid",
    "__version__",
]
