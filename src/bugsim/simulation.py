"""
Simulation driver for bugsim.

Evolves a grid generation by generation and halts as soon as a
configuration recurs.
"""

import itertools
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from tqdm import tqdm

from .config import Config
from .rules import compute_next_state
from .state import GridState, create_empty_state


class SimulationStatus(Enum):
    RUNNING = "running"
    HALTED = "halted"


class GenerationLimitExceeded(RuntimeError):
    """Raised when the generation bound is hit before any state recurs."""


@dataclass(frozen=True)
class CycleResult:
    """
    Outcome of a run that found a recurring state.

    Attributes:
        final_state: Grid at the generation where the repeat was found
        generation: Number of generations computed
        repeated_key: Serialized key of the recurring configuration
        first_seen: Generation at which that key was first recorded
    """

    final_state: GridState
    generation: int
    repeated_key: int
    first_seen: int

    @property
    def cycle_length(self) -> int:
        """Generations between the two occurrences of the repeated key."""
        return self.generation - self.first_seen


class Simulation:
    """
    Bug infestation simulation manager.

    Attributes:
        config: Simulation configuration
        state: Current grid
        step_count: Number of generations computed
        seen: Serialized key -> generation at which it was first observed
        status: Running until a repeated state is found
        result: Set once the simulation halts
    """

    def __init__(
        self,
        config: Config,
        initial_state: Optional[GridState] = None,
    ):
        """
        Initialize simulation.

        Args:
            config: Simulation configuration
            initial_state: Starting grid (empty grid if not provided)
        """
        self.config = config

        if initial_state is None:
            initial_state = create_empty_state(config.grid_size)
        elif initial_state.size != config.grid_size:
            raise ValueError(
                f"initial state is {initial_state.size}x{initial_state.size}, "
                f"config expects grid_size={config.grid_size}"
            )

        self.initial_state = initial_state.clone()
        self._start()

    def _start(self) -> None:
        self.state = self.initial_state.clone()
        self.step_count = 0
        # Initial key is recorded first so a fixed point is caught at generation 1
        self.seen: dict[int, int] = {self.state.serialize(): 0}
        self.status = SimulationStatus.RUNNING
        self.result: Optional[CycleResult] = None

    @property
    def halted(self) -> bool:
        return self.status is SimulationStatus.HALTED

    def step(self) -> bool:
        """
        Advance simulation by one generation.

        Returns:
            True if the new state was seen before (the simulation halts)
        """
        if self.halted:
            raise RuntimeError("simulation has halted; call reset() to run again")

        self.state = compute_next_state(self.state)
        self.step_count += 1

        key = self.state.serialize()
        if key in self.seen:
            self.status = SimulationStatus.HALTED
            self.result = CycleResult(
                final_state=self.state.clone(),
                generation=self.step_count,
                repeated_key=key,
                first_seen=self.seen[key],
            )
            return True

        self.seen[key] = self.step_count
        return False

    def run(
        self,
        max_generations: Optional[int] = None,
        callback: Optional[Callable[["Simulation"], None]] = None,
        callback_interval: Optional[int] = None,
        show_progress: bool = False,
    ) -> CycleResult:
        """
        Run until a previously seen state recurs.

        The state space is finite, so without a bound the loop always
        terminates.

        Args:
            max_generations: Optional bound (defaults to config.max_generations)
            callback: Optional function called periodically and on halt
            callback_interval: How often to call callback (defaults to config)
            show_progress: Whether to show progress bar

        Returns:
            CycleResult describing the repeat

        Raises:
            GenerationLimitExceeded: If the bound is reached with no repeat
        """
        if self.halted:
            return self.result

        if max_generations is None:
            max_generations = self.config.max_generations
        if callback_interval is None:
            callback_interval = self.config.callback_interval

        # The bound counts from generation 0, including earlier step() calls
        if max_generations is None:
            iterator = itertools.count()
            remaining = None
        else:
            remaining = max(max_generations - self.step_count, 0)
            iterator = range(remaining)
        if show_progress:
            iterator = tqdm(iterator, total=remaining, desc="Generations")

        for _ in iterator:
            found = self.step()

            if callback is not None and (found or self.step_count % callback_interval == 0):
                callback(self)

            if found:
                return self.result

        raise GenerationLimitExceeded(
            f"no repeated state within {max_generations} generations"
        )

    def reset(self) -> None:
        """Reset simulation to the initial state and forget history."""
        self._start()

    def get_state_dict(self) -> dict:
        """Get serializable state dictionary."""
        return {
            "step_count": self.step_count,
            "status": self.status.value,
            "config": self.config.to_dict(),
            "state": {
                "size": self.state.size,
                "key": self.state.serialize(),
                "grid": self.state.render().splitlines(),
            },
            "seen_count": len(self.seen),
        }
