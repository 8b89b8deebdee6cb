"""Per-turn relocation of agents to empty neighbouring cells.

Movement is two-phase: every decision and target is computed from the frozen
pre-move occupancy, then the moves are applied one by one. An early move can
therefore neither open nor close a cell for an agent processed later in the
same turn, and claimed targets keep two agents from choosing the same cell.
"""

from __future__ import annotations

from collections.abc import Collection, Sequence
from random import Random

from spatial_dilemma.domain.agent import Agent, clamp_unit
from spatial_dilemma.domain.grid import PositionGrid
from spatial_dilemma.domain.position import Position
from spatial_dilemma.domain.strategy import MovementStrategy


def move_probability(agent: Agent, neighbors: Sequence[Agent] = ()) -> float:
    """Return the clamped probability that *agent* relocates this turn."""
    base = agent.mobility
    strategy = agent.movement_strategy

    if strategy is MovementStrategy.EXPLORER:
        probability = base * 1.2
    elif strategy is MovementStrategy.SETTLER:
        performance = agent.recent_performance()
        if performance > 0.5:
            probability = 0.0
        elif performance < -0.5:
            probability = base * 1.5
        else:
            probability = base * 0.3
    elif strategy is MovementStrategy.ADAPTIVE:
        performance = agent.recent_performance()
        if performance < 0.0:
            probability = base * 2.0
        elif performance > 0.0:
            probability = base * 0.5
        else:
            probability = base
    elif strategy is MovementStrategy.OPPORTUNIST:
        if neighbors:
            cooperation = sum(n.cooperation_rate() for n in neighbors) / len(neighbors)
        else:
            cooperation = 0.5
        if cooperation < 0.4:
            probability = base * 2.0
        elif cooperation > 0.7:
            probability = base * 0.3
        else:
            probability = base
    elif strategy is MovementStrategy.SOCIAL:
        same = sum(1 for n in neighbors if n.strategy is agent.strategy)
        probability = base * 1.5 if same < 2 else base * 0.5
    else:
        different = sum(1 for n in neighbors if n.strategy is not agent.strategy)
        probability = min(different * base * 0.3, 0.9)

    return clamp_unit(probability)


def should_move(agent: Agent, rng: Random, neighbors: Sequence[Agent] = ()) -> bool:
    return rng.random() < move_probability(agent, neighbors)


def choose_target(
    agent: Agent,
    grid: PositionGrid,
    torus: bool,
    rng: Random,
    claimed: Collection[Position] = (),
) -> Position | None:
    """Pick a uniformly random empty, unclaimed neighbour cell, or ``None``."""
    candidates = sorted(
        cell for cell in grid.empty_neighbors(agent.position, torus) if cell not in claimed
    )
    if not candidates:
        return None
    return rng.choice(candidates)


def plan_movements(grid: PositionGrid, torus: bool, rng: Random) -> list[tuple[int, Position]]:
    """Compute ``(agent_id, target)`` moves from the current occupancy without applying them."""
    moves: list[tuple[int, Position]] = []
    claimed: set[Position] = set()
    for agent in grid.agents():
        neighbors = grid.neighbor_agents(agent.position, torus)
        if not should_move(agent, rng, neighbors):
            continue
        target = choose_target(agent, grid, torus, rng, claimed)
        if target is None:
            continue
        claimed.add(target)
        moves.append((agent.agent_id, target))
    return moves


def process_movements(grid: PositionGrid, torus: bool, rng: Random) -> int:
    """Plan then apply this turn's moves; return how many agents moved."""
    moves = plan_movements(grid, torus, rng)
    for agent_id, target in moves:
        grid.move_agent(agent_id, target)
    return len(moves)
