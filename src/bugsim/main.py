"""
Command-line interface for bugsim.

Usage:
    python -m bugsim.main --help
    python -m bugsim.main input.txt
    python -m bugsim.main input.txt --print-metrics --save-frames output/
"""

import argparse
import json
import sys
from typing import Optional

from .config import Config
from .loader import load_grid
from .metrics import compute_all_metrics, print_metrics_summary
from .simulation import GenerationLimitExceeded, Simulation
from .visualization import save_history_image, save_state_images


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser with all options."""
    parser = argparse.ArgumentParser(
        description="bugsim - evolve a bug infestation until a layout repeats",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "input",
        help="Text file with the initial grid ('#' = bug)"
    )

    # Grid options
    parser.add_argument(
        "--grid-size", type=int, default=None, dest="grid_size",
        help="Expected grid width and height (derived from input if omitted)"
    )
    parser.add_argument(
        "--max-generations", type=int, default=None, dest="max_generations",
        help="Give up after this many generations (unbounded if omitted)"
    )

    # Output options
    parser.add_argument(
        "--quiet", action="store_true",
        help="Do not print grid renderings"
    )
    parser.add_argument(
        "--progress", action="store_true",
        help="Show a progress bar"
    )
    parser.add_argument(
        "--print-metrics", action="store_true",
        help="Print run metrics at end"
    )
    parser.add_argument(
        "--save-metrics", type=str, default=None,
        help="Save metrics to JSON file"
    )

    # Image export options
    parser.add_argument(
        "--save-frames", type=str, default=None,
        help="Directory to save generation images"
    )
    parser.add_argument(
        "--save-interval", type=int, default=None, dest="callback_interval",
        help="Save a frame every N generations"
    )
    parser.add_argument(
        "--save-history", type=str, default=None,
        help="Path of a single image showing every generation"
    )

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        initial = load_grid(args.input, size=args.grid_size)
        if args.grid_size is None:
            args.grid_size = initial.size
        config = Config.from_args(args)
    except OSError as e:
        print(f"Cannot read {args.input}: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    sim = Simulation(config, initial_state=initial)

    if not args.quiet:
        print(initial.render())
        print()

    # Collect callbacks for image export
    history = [initial.clone()]
    callbacks = []

    if args.save_frames:
        save_state_images(initial, args.save_frames, "frame", 0)

        def frame_callback(s: Simulation) -> None:
            if s.halted or s.step_count % config.callback_interval == 0:
                save_state_images(s.state, args.save_frames, "frame", s.step_count)

        callbacks.append(frame_callback)

    if args.save_history:
        def history_callback(s: Simulation) -> None:
            history.append(s.state.clone())

        callbacks.append(history_callback)

    def run_callbacks(s: Simulation) -> None:
        for cb in callbacks:
            cb(s)

    # History needs every generation; frames apply their own interval
    try:
        result = sim.run(
            callback=run_callbacks if callbacks else None,
            callback_interval=1,
            show_progress=args.progress,
        )
    except GenerationLimitExceeded as e:
        print(f"Simulation stopped: {e}", file=sys.stderr)
        return 1

    print(
        f"Found recurring state at generation {result.generation} "
        f"(first seen at generation {result.first_seen})"
    )

    if not args.quiet:
        print(result.final_state.render())
        print()

    if args.save_history:
        save_history_image(history, args.save_history)

    if args.print_metrics or args.save_metrics:
        metrics = compute_all_metrics(result)

        if args.print_metrics:
            print_metrics_summary(metrics)

        if args.save_metrics:
            with open(args.save_metrics, "w") as f:
                json.dump(metrics, f, indent=2)

    print(result.repeated_key)
    return 0


if __name__ == "__main__":
    sys.exit(main())
