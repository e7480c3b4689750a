#!/usr/bin/env python3
"""
Basic bugsim example.

This script demonstrates:
1. Loading a starting layout
2. Watching the first few generations
3. Running until a layout repeats
4. Summarizing the run
"""

from pathlib import Path

from bugsim import Config, Simulation, load_grid
from bugsim.metrics import compute_all_metrics, print_metrics_summary


def main():
    print("=" * 40)
    print("bugsim - Bug Infestation")
    print("Basic Simulation Example")
    print("=" * 40)
    print()

    initial = load_grid(Path(__file__).with_name("input.txt"))
    config = Config(grid_size=initial.size)

    sim = Simulation(config, initial_state=initial)

    print("Initial state:")
    print(sim.state.render())
    print()

    # Show the first generations explicitly
    for _ in range(4):
        if sim.step():
            break
        print(f"After {sim.step_count} generation(s):")
        print(sim.state.render())
        print()

    # Continue until a layout repeats
    result = sim.run(show_progress=True)
    print()

    print(
        f"Layout first seen at generation {result.first_seen} "
        f"recurs at generation {result.generation}:"
    )
    print(result.final_state.render())
    print()

    print_metrics_summary(compute_all_metrics(result))
    print()
    print("To export images, run:")
    print("  python -m bugsim.main examples/input.txt --save-history history.png")
    print()


if __name__ == "__main__":
    main()
