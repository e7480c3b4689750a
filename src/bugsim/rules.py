"""
Transition rule for the bug automaton.

Every cell is updated simultaneously from the previous generation:
- A bug survives only if exactly one orthogonal neighbor holds a bug.
- An empty cell becomes infested if one or two neighbors hold a bug.
"""

from .state import GridState


def next_cell_state(alive: bool, adjacent: int) -> bool:
    """
    Apply the rule to a single cell.

    Args:
        alive: Whether the cell currently holds a bug
        adjacent: Number of infested orthogonal neighbors

    Returns:
        Whether the cell holds a bug in the next generation
    """
    if alive:
        return adjacent == 1
    return adjacent == 1 or adjacent == 2


def compute_next_state(state: GridState) -> GridState:
    """
    Compute the next generation.

    Reads only from `state` and writes only into a fresh grid, so cells
    already updated in this pass never influence their neighbors.

    Args:
        state: Current generation (not modified)

    Returns:
        New GridState of the same size
    """
    new_state = GridState(size=state.size)

    for pos in state.positions():
        adjacent = state.count_adjacent(pos)
        new_state.set(pos, next_cell_state(state.get(pos), adjacent))

    return new_state
