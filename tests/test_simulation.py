"""
Tests for the cycle-detecting simulation driver.
"""

import numpy as np
import pytest

from bugsim.config import Config
from bugsim.loader import parse_grid
from bugsim.rules import compute_next_state
from bugsim.simulation import (
    CycleResult,
    GenerationLimitExceeded,
    Simulation,
    SimulationStatus,
)
from bugsim.state import GridState

from conftest import EXAMPLE_FIRST_REPEAT


class TestSimulationInit:
    """Tests for simulation setup."""

    def test_defaults_to_empty_grid(self, default_config):
        """Without an initial state the grid starts empty."""
        sim = Simulation(default_config)

        assert sim.state.serialize() == 0
        assert sim.state.size == default_config.grid_size
        assert sim.status is SimulationStatus.RUNNING

    def test_initial_key_recorded(self, default_config, example_state):
        """The starting layout is in the seen map before any step."""
        sim = Simulation(default_config, initial_state=example_state)

        assert sim.seen == {example_state.serialize(): 0}
        assert sim.step_count == 0

    def test_size_mismatch(self, example_state):
        """Initial state must match the configured size."""
        with pytest.raises(ValueError, match="grid_size"):
            Simulation(Config(grid_size=4), initial_state=example_state)

    def test_initial_state_copied(self, default_config, example_state):
        """Mutating the caller's grid does not affect the simulation."""
        key = example_state.serialize()
        sim = Simulation(default_config, initial_state=example_state)
        example_state.state = 0

        assert sim.state.serialize() == key


class TestStep:
    """Tests for single generations."""

    def test_step_advances(self, default_config, example_state):
        """One step applies the rule and records the new key."""
        sim = Simulation(default_config, initial_state=example_state)
        expected = compute_next_state(example_state).serialize()

        found = sim.step()

        assert not found
        assert sim.step_count == 1
        assert sim.state.serialize() == expected
        assert sim.seen[expected] == 1

    def test_empty_grid_repeats_at_generation_one(self, default_config):
        """All-empty maps to all-empty and is detected immediately."""
        sim = Simulation(default_config)

        assert sim.step()
        assert sim.halted
        assert sim.result.generation == 1
        assert sim.result.first_seen == 0
        assert sim.result.repeated_key == 0

    def test_step_after_halt(self, default_config):
        """A halted simulation refuses to step."""
        sim = Simulation(default_config)
        sim.step()

        with pytest.raises(RuntimeError, match="halted"):
            sim.step()


class TestRun:
    """Tests for the cycle-detection loop."""

    def test_reference_first_repeat(self, default_config, example_state):
        """Reference layout first repeats at a known key."""
        sim = Simulation(default_config, initial_state=example_state)

        result = sim.run()

        assert isinstance(result, CycleResult)
        assert result.repeated_key == EXAMPLE_FIRST_REPEAT
        assert result.final_state.render() == ".....\n.....\n.....\n#....\n.#..."
        assert result.first_seen < result.generation
        assert sim.status is SimulationStatus.HALTED

    def test_repeat_key_was_seen_earlier(self, default_config):
        """Random layouts terminate on a key recorded at an earlier generation."""
        rng = np.random.default_rng(7)

        for _ in range(5):
            state = GridState.from_array(rng.random((5, 5)) < 0.4)
            sim = Simulation(default_config, initial_state=state)
            result = sim.run()

            assert result.generation <= default_config.state_space_size
            assert 0 <= result.first_seen < result.generation
            assert sim.seen[result.repeated_key] == result.first_seen
            assert result.cycle_length >= 1

            # Replaying from scratch reaches the same key at first_seen
            replay = state
            for _ in range(result.first_seen):
                replay = compute_next_state(replay)
            assert replay.serialize() == result.repeated_key

    def test_one_cell_grid(self):
        """A lone 1x1 bug dies, then the empty grid repeats."""
        sim = Simulation(Config(grid_size=1), initial_state=parse_grid("#"))

        result = sim.run()

        assert result.generation == 2
        assert result.first_seen == 1
        assert result.repeated_key == 0

    def test_generation_limit(self, example_state):
        """Hitting the bound without a repeat raises."""
        sim = Simulation(Config(max_generations=1), initial_state=example_state)

        with pytest.raises(GenerationLimitExceeded):
            sim.run()

    def test_explicit_limit_overrides_config(self, default_config, example_state):
        """run() accepts its own bound."""
        sim = Simulation(default_config, initial_state=example_state)

        with pytest.raises(GenerationLimitExceeded, match="2 generations"):
            sim.run(max_generations=2)

    def test_limit_counts_from_generation_zero(self, default_config, example_state):
        """Generations stepped before run() count toward the bound."""
        sim = Simulation(default_config, initial_state=example_state)
        sim.step()
        sim.step()

        with pytest.raises(GenerationLimitExceeded):
            sim.run(max_generations=2)
        assert sim.step_count == 2

        with pytest.raises(GenerationLimitExceeded):
            sim.run(max_generations=3)
        assert sim.step_count == 3

    def test_callback_interval(self, default_config, example_state):
        """Callback fires every N generations and on halt."""
        sim = Simulation(default_config, initial_state=example_state)
        calls = []

        result = sim.run(callback=lambda s: calls.append(s.step_count), callback_interval=2)

        expected = [g for g in range(1, result.generation + 1) if g % 2 == 0]
        if result.generation % 2:
            expected.append(result.generation)
        assert calls == expected

    def test_run_when_halted_returns_result(self, default_config):
        """Running again returns the stored result."""
        sim = Simulation(default_config)
        first = sim.run()

        assert sim.run() is first

    def test_progress_bar(self, default_config, example_state):
        """Progress display does not change the outcome."""
        sim = Simulation(default_config, initial_state=example_state)

        result = sim.run(show_progress=True)

        assert result.repeated_key == EXAMPLE_FIRST_REPEAT


class TestResetAndExport:
    """Tests for reset and state dictionaries."""

    def test_reset(self, default_config, example_state):
        """Reset restores the initial layout and clears history."""
        sim = Simulation(default_config, initial_state=example_state)
        sim.run()

        sim.reset()

        assert sim.status is SimulationStatus.RUNNING
        assert sim.step_count == 0
        assert sim.result is None
        assert sim.state.serialize() == example_state.serialize()
        assert sim.seen == {example_state.serialize(): 0}

    def test_state_dict(self, default_config, example_state):
        """State dictionary reflects the current grid."""
        sim = Simulation(default_config, initial_state=example_state)
        sim.step()

        d = sim.get_state_dict()

        assert d["step_count"] == 1
        assert d["status"] == "running"
        assert d["config"]["grid_size"] == 5
        assert d["state"]["key"] == sim.state.serialize()
        assert len(d["state"]["grid"]) == 5
        assert d["seen_count"] == 2
