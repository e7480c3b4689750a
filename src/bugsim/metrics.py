"""
Metrics and analysis utilities for bugsim.
"""

from typing import Any

from .simulation import CycleResult
from .state import GridState


def bug_count(state: GridState) -> int:
    """Number of infested cells."""
    return state.bug_count


def density(state: GridState) -> float:
    """Fraction of cells holding a bug."""
    return state.bug_count / state.capacity


def biodiversity_rating(state: GridState) -> int:
    """
    Sum of 2**i over every infested cell i, numbered row-major from the
    top-left. Equal to the serialized key by construction.
    """
    return sum(
        2 ** (pos.y * state.size + pos.x)
        for pos in state.positions()
        if state.get(pos)
    )


def compute_all_metrics(result: CycleResult) -> dict[str, Any]:
    """
    Summarize a finished run.

    Args:
        result: Outcome of Simulation.run

    Returns:
        Dictionary of metrics
    """
    final = result.final_state
    return {
        "grid_size": final.size,
        "generation": result.generation,
        "first_seen": result.first_seen,
        "cycle_length": result.cycle_length,
        "repeated_key": result.repeated_key,
        "bug_count": bug_count(final),
        "density": density(final),
        "biodiversity": biodiversity_rating(final),
    }


def print_metrics_summary(metrics: dict[str, Any]) -> None:
    """Print metrics in a readable form."""
    print("=" * 40)
    print("Run Summary")
    print("=" * 40)
    print(f"  Grid:          {metrics['grid_size']}x{metrics['grid_size']}")
    print(f"  Generations:   {metrics['generation']}")
    print(f"  First seen at: {metrics['first_seen']}")
    print(f"  Cycle length:  {metrics['cycle_length']}")
    print(f"  Bugs:          {metrics['bug_count']} ({metrics['density']:.1%})")
    print(f"  Biodiversity:  {metrics['biodiversity']}")
    print("=" * 40)
