"""Tests for spatial_dilemma.simulation.engine module."""

from __future__ import annotations

from random import Random

import pytest

from spatial_dilemma.config.types import SimulationConfig
from spatial_dilemma.domain.snapshot import AgentSnapshot
from spatial_dilemma.errors import GridCapacityExceeded, InitializationError, PlacementIncomplete
from spatial_dilemma.simulation.engine import Simulation


class _CornerRandom(Random):
    """Random whose placement draws always land on the top-left cell."""

    def randrange(self, *args: object, **kwargs: object) -> int:  # type: ignore[override]
        return 0


def _adjacent(a: AgentSnapshot, b: AgentSnapshot) -> bool:
    return a.agent_id != b.agent_id and max(abs(a.x - b.x), abs(a.y - b.y)) == 1


def _assert_one_agent_per_cell(sim: Simulation) -> None:
    width, height = sim.get_grid_size()
    cells = [(a.x, a.y) for a in sim.get_agents()]
    assert len(cells) == len(set(cells))
    assert all(0 <= x < width and 0 <= y < height for x, y in cells)


class TestInitialize:
    def test_places_requested_agents(self) -> None:
        sim = Simulation.initialize(10, 10, 30, seed=1)
        stats = sim.get_statistics()
        assert stats.total_agents == 30
        assert stats.generation == 0
        assert stats.turn == 0
        assert sim.get_grid_size() == (10, 10)
        _assert_one_agent_per_cell(sim)

    def test_initial_agents_are_fresh(self) -> None:
        sim = Simulation.initialize(8, 8, 12, seed=2)
        for agent in sim.get_agents():
            assert agent.score == 0
            assert agent.cooperation_rate == 0.5
            assert 0.0 <= agent.mobility <= 1.0

    def test_capacity_exceeded(self) -> None:
        with pytest.raises(GridCapacityExceeded) as excinfo:
            Simulation.initialize(2, 2, 5, seed=0)
        assert excinfo.value.requested == 5
        assert excinfo.value.capacity == 4
        assert isinstance(excinfo.value, InitializationError)

    def test_placement_shortfall_is_reported(self) -> None:
        with pytest.raises(PlacementIncomplete) as excinfo:
            Simulation.initialize(5, 5, 3, rng=_CornerRandom(0))
        assert excinfo.value.placed == 1
        assert excinfo.value.requested == 3
        assert excinfo.value.shortfall == 2

    def test_rng_and_seed_are_exclusive(self) -> None:
        with pytest.raises(ValueError):
            Simulation.initialize(5, 5, 3, rng=Random(0), seed=0)

    def test_zero_agents(self) -> None:
        sim = Simulation.initialize(3, 3, 0, seed=0)
        assert sim.get_agents() == []
        stats = sim.step()
        assert stats.total_agents == 0
        assert stats.dominant_strategy() is None


class TestStep:
    def test_generation_turnover_end_to_end(self) -> None:
        config = SimulationConfig(turns_per_generation=1)
        sim = Simulation.initialize(10, 10, 10, config=config, seed=42)
        stats = sim.step()
        assert stats.turn == 0
        assert stats.generation == 1
        assert stats.total_agents == 10
        _assert_one_agent_per_cell(sim)

    def test_turn_counter_advances_within_generation(self) -> None:
        sim = Simulation.initialize(
            10, 10, 10, config=SimulationConfig(turns_per_generation=3), seed=9
        )
        assert sim.step().turn == 1
        assert sim.step().turn == 2
        stats = sim.step()
        assert (stats.generation, stats.turn) == (1, 0)
        assert sim.get_generation() == 1
        assert sim.get_turn() == 0

    def test_each_adjacent_pair_plays_once(self) -> None:
        # First encounters are mutual cooperation, so each game pays 3.
        sim = Simulation.initialize(
            6, 6, 20, config=SimulationConfig(turns_per_generation=50), seed=11
        )
        before = sim.get_agents()
        expected = {
            a.agent_id: 3 * sum(1 for b in before if _adjacent(a, b)) for a in before
        }
        sim.step()
        assert {a.agent_id: a.score for a in sim.get_agents()} == expected

    def test_torus_pairs_across_edges(self) -> None:
        config = SimulationConfig(turns_per_generation=50, torus_enabled=True)
        sim = Simulation.initialize(3, 3, 9, config=config, seed=0)
        sim.step()
        # Every cell of a full 3x3 torus touches the other eight.
        assert all(agent.score == 24 for agent in sim.get_agents())

    def test_population_and_occupancy_hold_over_many_steps(self) -> None:
        config = SimulationConfig(turns_per_generation=4, torus_enabled=True)
        sim = Simulation.initialize(12, 12, 60, config=config, seed=5)
        for _ in range(40):
            stats = sim.step()
            assert stats.total_agents == 60
            _assert_one_agent_per_cell(sim)
        assert sim.get_generation() == 10

    def test_dense_grid_generations_conserve_population(self) -> None:
        config = SimulationConfig(turns_per_generation=1)
        sim = Simulation.initialize(4, 4, 12, config=config, seed=3)
        for _ in range(10):
            assert sim.step().total_agents == 12
            _assert_one_agent_per_cell(sim)

    def test_same_seed_is_reproducible(self) -> None:
        config = SimulationConfig(turns_per_generation=5, strategy_penalty_enabled=True)
        runs = []
        for _ in range(2):
            sim = Simulation.initialize(10, 10, 25, config=config, seed=7)
            history = [sim.step() for _ in range(12)]
            runs.append((history, sim.get_agents()))
        assert runs[0] == runs[1]


class TestConfiguration:
    def test_setters_replace_config(self) -> None:
        sim = Simulation.initialize(5, 5, 5, seed=0)
        original = sim.config
        sim.set_torus_topology(True)
        sim.set_turns_per_generation(7)
        sim.set_strategy_penalty(True)
        assert sim.config.torus_enabled
        assert sim.config.turns_per_generation == 7
        assert sim.config.strategy_penalty_enabled
        assert sim.config.strategy_penalty_rate == original.strategy_penalty_rate
        assert not original.torus_enabled

    def test_penalty_rate_validation(self) -> None:
        sim = Simulation.initialize(5, 5, 5, seed=0)
        sim.set_strategy_penalty(True, 0.4)
        assert sim.config.strategy_penalty_rate == 0.4
        with pytest.raises(ValueError):
            sim.set_strategy_penalty(True, 1.5)
        assert sim.config.strategy_penalty_rate == 0.4

    def test_turns_per_generation_validation(self) -> None:
        sim = Simulation.initialize(5, 5, 5, seed=0)
        with pytest.raises(ValueError):
            sim.set_turns_per_generation(0)

    def test_reset_keeps_configuration(self) -> None:
        config = SimulationConfig(turns_per_generation=1)
        sim = Simulation.initialize(6, 6, 10, config=config, seed=4)
        sim.set_torus_topology(True)
        sim.step()
        sim.reset(8)
        stats = sim.get_statistics()
        assert stats.total_agents == 8
        assert (stats.generation, stats.turn) == (0, 0)
        assert sim.config.torus_enabled
        assert sim.config.turns_per_generation == 1

    def test_reset_propagates_placement_shortfall(self) -> None:
        sim = Simulation.initialize(5, 5, 1, rng=_CornerRandom(0))
        with pytest.raises(PlacementIncomplete) as excinfo:
            sim.reset(3)
        assert excinfo.value.shortfall == 2
        assert sim.get_statistics().total_agents == 1
        assert (sim.get_generation(), sim.get_turn()) == (0, 0)

    def test_reset_beyond_capacity_raises(self) -> None:
        sim = Simulation.initialize(2, 2, 2, seed=0)
        with pytest.raises(GridCapacityExceeded):
            sim.reset(5)


class TestReadOnlyViews:
    def test_get_agents_returns_detached_list(self) -> None:
        sim = Simulation.initialize(5, 5, 5, seed=0)
        agents = sim.get_agents()
        agents.clear()
        assert len(sim.get_agents()) == 5

    def test_snapshots_do_not_track_later_steps(self) -> None:
        sim = Simulation.initialize(
            4, 4, 10, config=SimulationConfig(turns_per_generation=50), seed=6
        )
        before = sim.get_agents()
        sim.step()
        assert all(agent.score == 0 for agent in before)
