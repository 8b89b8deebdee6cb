"""Recoverable error kinds raised by grid and initialization operations."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from spatial_dilemma.domain.position import Position


class SimulationError(Exception):
    """Base class for all simulation errors."""


class PositionOccupied(SimulationError):
    """Placement or move targeted a cell that already holds an agent."""

    def __init__(self, position: Position) -> None:
        super().__init__(f"position ({position.x}, {position.y}) is already occupied")
        self.position = position


class PositionOutOfBounds(SimulationError):
    """Placement or move targeted a cell outside the grid."""

    def __init__(self, position: Position, width: int, height: int) -> None:
        super().__init__(
            f"position ({position.x}, {position.y}) is out of bounds for grid {width}x{height}"
        )
        self.position = position


class AgentNotFound(SimulationError):
    """Operation referenced an agent id that is not on the grid."""

    def __init__(self, agent_id: int) -> None:
        super().__init__(f"agent {agent_id} not found")
        self.agent_id = agent_id


class InitializationError(SimulationError):
    """Random population could not be created."""


class GridCapacityExceeded(InitializationError):
    """Requested agent count exceeds the number of grid cells."""

    def __init__(self, requested: int, capacity: int) -> None:
        super().__init__(f"cannot place {requested} agents on a grid with {capacity} cells")
        self.requested = requested
        self.capacity = capacity


class PlacementIncomplete(InitializationError):
    """Random placement ran out of attempts before placing every agent."""

    def __init__(self, placed: int, requested: int) -> None:
        super().__init__(f"could only place {placed} out of {requested} agents")
        self.placed = placed
        self.requested = requested

    @property
    def shortfall(self) -> int:
        return self.requested - self.placed
