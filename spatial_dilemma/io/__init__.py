"""I/O layer: Parquet schemas and output path conventions."""

from spatial_dilemma.io.paths import (
    agent_log_path,
    logs_dir,
    resolve_within_base,
    run_summary_path,
    runs_dir,
    statistics_log_path,
)
from spatial_dilemma.io.schemas import (
    AGENT_LOG_SCHEMA,
    MOVEMENT_COUNT_COLUMNS,
    RUN_PAYLOAD_SCHEMA_VERSION,
    STATISTICS_SCHEMA,
    STRATEGY_COUNT_COLUMNS,
)

__all__ = [
    "AGENT_LOG_SCHEMA",
    "MOVEMENT_COUNT_COLUMNS",
    "RUN_PAYLOAD_SCHEMA_VERSION",
    "STATISTICS_SCHEMA",
    "STRATEGY_COUNT_COLUMNS",
    "agent_log_path",
    "logs_dir",
    "resolve_within_base",
    "run_summary_path",
    "runs_dir",
    "statistics_log_path",
]
