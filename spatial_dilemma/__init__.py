"""Spatial iterated prisoner's dilemma with movement and generational evolution."""

from spatial_dilemma.config.types import RunConfig, SimulationConfig
from spatial_dilemma.errors import (
    AgentNotFound,
    GridCapacityExceeded,
    InitializationError,
    PlacementIncomplete,
    PositionOccupied,
    PositionOutOfBounds,
    SimulationError,
)
from spatial_dilemma.simulation.engine import Simulation
from spatial_dilemma.simulation.statistics import SimulationStatistics

__all__ = [
    "AgentNotFound",
    "GridCapacityExceeded",
    "InitializationError",
    "PlacementIncomplete",
    "PositionOccupied",
    "PositionOutOfBounds",
    "RunConfig",
    "Simulation",
    "SimulationConfig",
    "SimulationError",
    "SimulationStatistics",
]
