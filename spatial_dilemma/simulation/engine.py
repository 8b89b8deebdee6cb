"""Turn and generation scheduler for the spatial dilemma.

One call to :meth:`Simulation.step` plays every adjacent pair once, moves
agents, and replaces the population when a generation completes. All
randomness comes from the single injected :class:`random.Random`.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import replace
from random import Random

from spatial_dilemma.config.constants import PLACEMENT_ATTEMPTS_PER_AGENT
from spatial_dilemma.config.types import SimulationConfig
from spatial_dilemma.domain.agent import Agent, random_agent
from spatial_dilemma.domain.game import play_game
from spatial_dilemma.domain.grid import PositionGrid
from spatial_dilemma.domain.position import Position
from spatial_dilemma.domain.snapshot import AgentSnapshot
from spatial_dilemma.errors import GridCapacityExceeded, PlacementIncomplete
from spatial_dilemma.simulation.evolution import evolve
from spatial_dilemma.simulation.movement import process_movements
from spatial_dilemma.simulation.statistics import SimulationStatistics

logger = logging.getLogger(__name__)


class Simulation:
    """Population on a grid advanced one turn at a time.

    Build instances with :meth:`initialize`, which places the random initial
    population.
    """

    def __init__(
        self,
        width: int,
        height: int,
        config: SimulationConfig | None = None,
        rng: Random | None = None,
    ) -> None:
        self._grid = PositionGrid(width, height)
        self._config = config or SimulationConfig()
        self._rng = rng if rng is not None else Random()
        self._ids = itertools.count()
        self._generation = 0
        self._turn = 0

    @classmethod
    def initialize(
        cls,
        width: int,
        height: int,
        agent_count: int,
        config: SimulationConfig | None = None,
        rng: Random | None = None,
        seed: int | None = None,
    ) -> Simulation:
        """Create a simulation with *agent_count* randomly placed agents.

        Pass either *rng* or *seed*; with neither, an unseeded generator is
        used. Raises :class:`GridCapacityExceeded` or
        :class:`PlacementIncomplete`.
        """
        if rng is not None and seed is not None:
            raise ValueError("pass either rng or seed, not both")
        generator = rng if rng is not None else Random(seed)
        simulation = cls(width, height, config=config, rng=generator)
        simulation._populate(agent_count)
        return simulation

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------

    @property
    def config(self) -> SimulationConfig:
        return self._config

    def get_agents(self) -> list[AgentSnapshot]:
        return [agent.snapshot() for agent in self._grid.agents()]

    def get_statistics(self) -> SimulationStatistics:
        return SimulationStatistics.calculate(
            self._grid.agents(), generation=self._generation, turn=self._turn
        )

    def get_grid_size(self) -> tuple[int, int]:
        return self._grid.width, self._grid.height

    def get_generation(self) -> int:
        return self._generation

    def get_turn(self) -> int:
        return self._turn

    # ------------------------------------------------------------------
    # Configuration setters (take effect from the next step)
    # ------------------------------------------------------------------

    def set_torus_topology(self, enabled: bool) -> None:
        self._config = replace(self._config, torus_enabled=enabled)

    def set_strategy_penalty(self, enabled: bool, rate: float | None = None) -> None:
        rate = self._config.strategy_penalty_rate if rate is None else rate
        self._config = replace(
            self._config, strategy_penalty_enabled=enabled, strategy_penalty_rate=rate
        )

    def set_turns_per_generation(self, turns: int) -> None:
        self._config = replace(self._config, turns_per_generation=turns)

    # ------------------------------------------------------------------
    # Mutating entry points
    # ------------------------------------------------------------------

    def step(self) -> SimulationStatistics:
        """Advance exactly one turn and return fresh statistics."""
        torus = self._config.torus_enabled
        for id1, id2 in self._adjacent_pairs(torus):
            play_game(self._grid.get_agent(id1), self._grid.get_agent(id2))
        process_movements(self._grid, torus, self._rng)

        self._turn += 1
        if self._turn >= self._config.turns_per_generation:
            self._next_generation()
        return self.get_statistics()

    def reset(self, agent_count: int) -> None:
        """Replace the population with fresh random agents, keeping the configuration."""
        self._grid.clear()
        self._generation = 0
        self._turn = 0
        self._populate(agent_count)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _next_id(self) -> int:
        return next(self._ids)

    def _populate(self, agent_count: int) -> None:
        grid = self._grid
        if agent_count > grid.capacity:
            raise GridCapacityExceeded(agent_count, grid.capacity)
        placed = 0
        attempts = 0
        max_attempts = agent_count * PLACEMENT_ATTEMPTS_PER_AGENT
        while placed < agent_count and attempts < max_attempts:
            attempts += 1
            position = Position(self._rng.randrange(grid.width), self._rng.randrange(grid.height))
            if not grid.is_free(position):
                continue
            grid.add_agent(
                random_agent(self._next_id(), position, self._rng, self._config.history_capacity)
            )
            placed += 1
        if placed < agent_count:
            raise PlacementIncomplete(placed, agent_count)

    def _adjacent_pairs(self, torus: bool) -> list[tuple[int, int]]:
        """Every unordered adjacent pair once, as ``(smaller_id, larger_id)``."""
        pairs: list[tuple[int, int]] = []
        for agent in self._grid.agents():
            for neighbor in self._grid.neighbor_agents(agent.position, torus):
                if agent.agent_id < neighbor.agent_id:
                    pairs.append((agent.agent_id, neighbor.agent_id))
        return pairs

    def _next_generation(self) -> None:
        population = list(self._grid.agents())
        offspring = evolve(
            population,
            self._grid.width,
            self._grid.height,
            self._rng,
            self._next_id,
            self._config,
        )
        self._repopulate(offspring)
        self._generation += 1
        self._turn = 0
        logger.debug(
            "generation %d: %d agents (from %d)",
            self._generation,
            len(self._grid),
            len(population),
        )

    def _repopulate(self, offspring: list[Agent]) -> None:
        """Place offspring at their assigned cells; collided ones go to a random free cell."""
        self._grid.clear()
        displaced: list[Agent] = []
        for child in offspring:
            if self._grid.is_free(child.position):
                self._grid.add_agent(child)
            else:
                displaced.append(child)
        if not displaced:
            return
        logger.debug("relocating %d offspring from colliding positions", len(displaced))
        free = self._grid.free_positions()
        for child, position in zip(displaced, self._rng.sample(free, len(displaced)), strict=True):
            child.position = position
            self._grid.add_agent(child)
