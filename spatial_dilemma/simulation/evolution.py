"""Generational replacement: roulette selection, crossover and mutation."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from random import Random

from spatial_dilemma.config.constants import POSITION_ATTEMPTS_PER_AGENT
from spatial_dilemma.config.types import SimulationConfig
from spatial_dilemma.domain.agent import Agent, crossover, mutate, random_agent
from spatial_dilemma.domain.position import Position
from spatial_dilemma.domain.strategy import COMPLEX_STRATEGIES


def selection_weights(
    agents: Sequence[Agent],
    penalty_enabled: bool = False,
    penalty_rate: float = 0.0,
) -> list[float]:
    """Shift scores so the minimum becomes 1, then apply the strategy penalty.

    With the penalty enabled, Tit-for-Tat and Pavlov weights are multiplied by
    ``1 - penalty_rate``.
    """
    if not agents:
        return []
    min_score = min(agent.score for agent in agents)
    weights: list[float] = []
    for agent in agents:
        weight = float(agent.score - min_score + 1)
        if penalty_enabled and agent.strategy in COMPLEX_STRATEGIES:
            weight *= 1.0 - penalty_rate
        weights.append(weight)
    return weights


def select_parents(
    agents: Sequence[Agent],
    rng: Random,
    penalty_enabled: bool = False,
    penalty_rate: float = 0.0,
) -> list[Agent]:
    """Draw ``len(agents)`` parents with replacement, proportionally to fitness.

    Each draw takes a value in ``(0, total]`` and subtracts weights in list
    order until it is non-positive. A non-positive total falls back to uniform
    sampling with replacement.
    """
    if not agents:
        return []
    weights = selection_weights(agents, penalty_enabled, penalty_rate)
    total = sum(weights)
    if total <= 0.0:
        return [rng.choice(agents) for _ in agents]

    # Rounding can leave remaining > 0 after the last weight.
    fallback = next(
        agent
        for agent, weight in zip(reversed(agents), reversed(weights), strict=True)
        if weight > 0.0
    )
    selected: list[Agent] = []
    for _ in agents:
        remaining = total * (1.0 - rng.random())
        chosen = fallback
        for agent, weight in zip(agents, weights, strict=True):
            remaining -= weight
            if remaining <= 0.0:
                chosen = agent
                break
        selected.append(chosen)
    return selected


def assign_positions(count: int, width: int, height: int, rng: Random) -> list[Position]:
    """Generate one random position per offspring.

    Draws avoid earlier positions for ``count * POSITION_ATTEMPTS_PER_AGENT``
    attempts; once that budget is spent, collisions are accepted so the loop
    always terminates.
    """
    positions: list[Position] = []
    taken: set[Position] = set()
    attempts_left = count * POSITION_ATTEMPTS_PER_AGENT
    while len(positions) < count:
        position = Position(rng.randrange(width), rng.randrange(height))
        if position in taken and attempts_left > 0:
            attempts_left -= 1
            continue
        attempts_left -= 1
        taken.add(position)
        positions.append(position)
    return positions


def evolve(
    agents: Sequence[Agent],
    width: int,
    height: int,
    rng: Random,
    next_id: Callable[[], int],
    config: SimulationConfig | None = None,
) -> list[Agent]:
    """Produce exactly ``len(agents)`` offspring for the next generation.

    Offspring carry their assigned position; placing them on a grid is the
    caller's job.
    """
    if not agents:
        return []
    cfg = config or SimulationConfig()
    parents = select_parents(
        agents,
        rng,
        penalty_enabled=cfg.strategy_penalty_enabled,
        penalty_rate=cfg.strategy_penalty_rate,
    )
    positions = assign_positions(len(agents), width, height, rng)

    offspring: list[Agent] = []
    for position in positions:
        if len(parents) < 2:
            offspring.append(random_agent(next_id(), position, rng, cfg.history_capacity))
            continue
        parent1 = rng.choice(parents)
        parent2 = rng.choice(parents)
        child = crossover(parent1, parent2, next_id(), position, rng, cfg.history_capacity)
        mutate(child, rng, cfg.mutation_rate)
        offspring.append(child)
    return offspring
