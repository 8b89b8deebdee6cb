"""Simulation layer: movement, evolution, scheduling, statistics, and Parquet persistence."""

from spatial_dilemma.simulation.batch import deterministic_run_id, load_statistics_log, run_batch
from spatial_dilemma.simulation.engine import Simulation
from spatial_dilemma.simulation.evolution import (
    assign_positions,
    evolve,
    select_parents,
    selection_weights,
)
from spatial_dilemma.simulation.movement import (
    choose_target,
    move_probability,
    plan_movements,
    process_movements,
    should_move,
)
from spatial_dilemma.simulation.persistence import flush_columns
from spatial_dilemma.simulation.statistics import SimulationStatistics

__all__ = [
    "Simulation",
    "SimulationStatistics",
    "assign_positions",
    "choose_target",
    "deterministic_run_id",
    "evolve",
    "flush_columns",
    "load_statistics_log",
    "move_probability",
    "plan_movements",
    "process_movements",
    "run_batch",
    "select_parents",
    "selection_weights",
    "should_move",
]
