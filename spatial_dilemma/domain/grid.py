"""Bounded or toroidal grid holding at most one agent per cell.

The grid owns its agents through an id -> Agent arena and keeps a secondary
position -> id index. Every mutating method leaves the two mappings
consistent: each agent's ``position`` equals the key it is indexed under and
no two agents share a cell.
"""

from __future__ import annotations

from collections.abc import Iterator

from spatial_dilemma.domain.agent import Agent
from spatial_dilemma.domain.position import Position
from spatial_dilemma.errors import AgentNotFound, PositionOccupied, PositionOutOfBounds


class PositionGrid:
    """Arena of agents plus occupancy index over a ``width x height`` lattice."""

    def __init__(self, width: int, height: int) -> None:
        if width < 1 or height < 1:
            raise ValueError("grid dimensions must be >= 1")
        self.width = width
        self.height = height
        self._agents: dict[int, Agent] = {}
        self._index: dict[Position, int] = {}

    @property
    def capacity(self) -> int:
        return self.width * self.height

    def __len__(self) -> int:
        return len(self._agents)

    def __contains__(self, agent_id: object) -> bool:
        return agent_id in self._agents

    def agents(self) -> Iterator[Agent]:
        """Iterate agents in insertion order."""
        return iter(self._agents.values())

    def agent_ids(self) -> list[int]:
        return list(self._agents)

    def get_agent(self, agent_id: int) -> Agent:
        try:
            return self._agents[agent_id]
        except KeyError:
            raise AgentNotFound(agent_id) from None

    def agent_at(self, position: Position) -> Agent | None:
        agent_id = self._index.get(position)
        return None if agent_id is None else self._agents[agent_id]

    def is_free(self, position: Position) -> bool:
        return position not in self._index

    def _check_bounds(self, position: Position) -> None:
        if not position.in_bounds(self.width, self.height):
            raise PositionOutOfBounds(position, self.width, self.height)

    def add_agent(self, agent: Agent) -> None:
        self._check_bounds(agent.position)
        if agent.position in self._index:
            raise PositionOccupied(agent.position)
        if agent.agent_id in self._agents:
            raise ValueError(f"agent {agent.agent_id} is already on the grid")
        self._agents[agent.agent_id] = agent
        self._index[agent.position] = agent.agent_id

    def remove_agent(self, agent_id: int) -> Agent:
        agent = self._agents.pop(agent_id, None)
        if agent is None:
            raise AgentNotFound(agent_id)
        del self._index[agent.position]
        return agent

    def move_agent(self, agent_id: int, new_position: Position) -> None:
        """Relocate an agent; all checks run before either mapping changes."""
        agent = self.get_agent(agent_id)
        self._check_bounds(new_position)
        if new_position in self._index:
            raise PositionOccupied(new_position)
        del self._index[agent.position]
        agent.position = new_position
        self._index[new_position] = agent_id

    def neighbors(self, position: Position, torus: bool = False) -> set[Position]:
        return position.neighbors(self.width, self.height, torus)

    def empty_neighbors(self, position: Position, torus: bool = False) -> set[Position]:
        return {cell for cell in self.neighbors(position, torus) if cell not in self._index}

    def neighbor_agents(self, position: Position, torus: bool = False) -> list[Agent]:
        """Agents on the occupied neighbour cells, ordered by position."""
        return [
            self._agents[self._index[cell]]
            for cell in sorted(self.neighbors(position, torus))
            if cell in self._index
        ]

    def free_positions(self) -> list[Position]:
        """All unoccupied cells in row-major order."""
        return [
            Position(x, y)
            for y in range(self.height)
            for x in range(self.width)
            if Position(x, y) not in self._index
        ]

    def clear(self) -> None:
        self._agents.clear()
        self._index.clear()
