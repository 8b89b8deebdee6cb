"""Seeded batch driver persisting per-step statistics and agent logs."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from pathlib import Path
from random import Random

import pyarrow as pa
import pyarrow.parquet as pq

from spatial_dilemma.config.constants import FLUSH_THRESHOLD
from spatial_dilemma.config.types import RunConfig, RunResult
from spatial_dilemma.domain.strategy import MovementStrategy, StrategyType
from spatial_dilemma.io.paths import (
    agent_log_path,
    logs_dir,
    run_summary_path,
    runs_dir,
    statistics_log_path,
)
from spatial_dilemma.io.schemas import (
    AGENT_LOG_SCHEMA,
    RUN_PAYLOAD_SCHEMA_VERSION,
    STATISTICS_SCHEMA,
)
from spatial_dilemma.simulation.engine import Simulation
from spatial_dilemma.simulation.persistence import buffered_rows, flush_columns, new_columns
from spatial_dilemma.simulation.statistics import SimulationStatistics

logger = logging.getLogger(__name__)


def deterministic_run_id(config: RunConfig, seed: int) -> str:
    """Build reproducible run ID stable across runs for identical parameters."""
    return f"run_w{config.width}_h{config.height}_a{config.agent_count}_s{seed}"


def _append_statistics(
    columns: dict[str, list[object]], run_id: str, step: int, stats: SimulationStatistics
) -> None:
    columns["run_id"].append(run_id)
    columns["step"].append(step)
    columns["generation"].append(stats.generation)
    columns["turn"].append(stats.turn)
    columns["total_agents"].append(stats.total_agents)
    for strategy in StrategyType:
        columns[f"count_{strategy.value}"].append(stats.strategy_counts[strategy.value])
    for movement in MovementStrategy:
        columns[f"count_{movement.value}"].append(stats.movement_strategy_counts[movement.value])
    columns["average_cooperation_rate"].append(stats.average_cooperation_rate)
    columns["average_mobility"].append(stats.average_mobility)
    columns["average_score"].append(stats.average_score)


def _append_agents(
    columns: dict[str, list[object]], run_id: str, step: int, simulation: Simulation
) -> None:
    for snapshot in simulation.get_agents():
        columns["run_id"].append(run_id)
        columns["step"].append(step)
        for name, value in asdict(snapshot).items():
            columns[name].append(value)


def run_batch(config: RunConfig, out_dir: Path) -> list[RunResult]:
    """Run ``config.n_runs`` seeded simulations and persist Parquet/JSON outputs.

    Run ``i`` uses ``Random(config.base_seed + i)``, so identical configs
    reproduce identical logs.
    """
    out_dir = Path(out_dir)
    runs_dir(out_dir).mkdir(parents=True, exist_ok=True)
    logs_dir(out_dir).mkdir(parents=True, exist_ok=True)
    stats_path = statistics_log_path(out_dir)
    agents_path = agent_log_path(out_dir)

    stats_writer: pq.ParquetWriter | None = None
    agent_writer: pq.ParquetWriter | None = None
    stats_columns = new_columns(STATISTICS_SCHEMA)
    agent_columns = new_columns(AGENT_LOG_SCHEMA)
    results: list[RunResult] = []

    try:
        for i in range(config.n_runs):
            seed = config.base_seed + i
            run_id = deterministic_run_id(config, seed)
            logger.info("starting %s (%d steps)", run_id, config.steps)
            simulation = Simulation.initialize(
                config.width,
                config.height,
                config.agent_count,
                config=config.simulation,
                rng=Random(seed),
            )

            stats = simulation.get_statistics()
            for step in range(config.steps):
                stats = simulation.step()
                _append_statistics(stats_columns, run_id, step, stats)
                if config.record_agents:
                    _append_agents(agent_columns, run_id, step, simulation)
                if buffered_rows(stats_columns) >= FLUSH_THRESHOLD:
                    stats_writer = flush_columns(
                        stats_columns, STATISTICS_SCHEMA, stats_path, stats_writer
                    )
                if buffered_rows(agent_columns) >= FLUSH_THRESHOLD:
                    agent_writer = flush_columns(
                        agent_columns, AGENT_LOG_SCHEMA, agents_path, agent_writer
                    )

            result = RunResult(
                run_id=run_id,
                seed=seed,
                steps=config.steps,
                final_generation=stats.generation,
                final_turn=stats.turn,
                total_agents=stats.total_agents,
                average_cooperation_rate=stats.average_cooperation_rate,
                dominant_strategy=stats.dominant_strategy(),
            )
            payload = {
                "schema_version": RUN_PAYLOAD_SCHEMA_VERSION,
                **asdict(result),
                "grid_width": config.width,
                "grid_height": config.height,
                "agent_count": config.agent_count,
                "simulation_config": asdict(config.simulation),
                "final_strategy_counts": stats.strategy_counts,
                "final_movement_strategy_counts": stats.movement_strategy_counts,
            }
            run_summary_path(out_dir, run_id).write_text(
                json.dumps(payload, ensure_ascii=False, indent=2)
            )
            results.append(result)
            logger.info(
                "finished %s: generation=%d cooperation=%.3f",
                run_id,
                result.final_generation,
                result.average_cooperation_rate,
            )

        stats_writer = flush_columns(stats_columns, STATISTICS_SCHEMA, stats_path, stats_writer)
        if config.record_agents:
            agent_writer = flush_columns(
                agent_columns, AGENT_LOG_SCHEMA, agents_path, agent_writer
            )
            if agent_writer is None:
                pq.write_table(AGENT_LOG_SCHEMA.empty_table(), agents_path)
    finally:
        if stats_writer is not None:
            stats_writer.close()
        if agent_writer is not None:
            agent_writer.close()

    return results


def load_statistics_log(out_dir: Path) -> pa.Table:
    """Read back the statistics log written by :func:`run_batch`."""
    return pq.read_table(statistics_log_path(Path(out_dir)))
