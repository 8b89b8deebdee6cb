"""Parquet schema definitions for simulation artifacts.

Every Arrow schema used for persisting statistics and agent logs is
centralised here so that writers and readers work against the same column
contracts.
"""

from __future__ import annotations

import pyarrow as pa

from spatial_dilemma.domain.strategy import MovementStrategy, StrategyType

# ---------------------------------------------------------------------------
# Schema version constants
# ---------------------------------------------------------------------------

RUN_PAYLOAD_SCHEMA_VERSION = 1

# ---------------------------------------------------------------------------
# Column names derived from the closed strategy sets
# ---------------------------------------------------------------------------

STRATEGY_COUNT_COLUMNS = [f"count_{strategy.value}" for strategy in StrategyType]
MOVEMENT_COUNT_COLUMNS = [f"count_{strategy.value}" for strategy in MovementStrategy]

# ---------------------------------------------------------------------------
# Log schemas
# ---------------------------------------------------------------------------

STATISTICS_SCHEMA = pa.schema(
    [
        ("run_id", pa.string()),
        ("step", pa.int64()),
        ("generation", pa.int64()),
        ("turn", pa.int64()),
        ("total_agents", pa.int64()),
        *[(name, pa.int64()) for name in STRATEGY_COUNT_COLUMNS],
        *[(name, pa.int64()) for name in MOVEMENT_COUNT_COLUMNS],
        ("average_cooperation_rate", pa.float64()),
        ("average_mobility", pa.float64()),
        ("average_score", pa.float64()),
    ]
)

AGENT_LOG_SCHEMA = pa.schema(
    [
        ("run_id", pa.string()),
        ("step", pa.int64()),
        ("agent_id", pa.int64()),
        ("x", pa.int64()),
        ("y", pa.int64()),
        ("strategy", pa.string()),
        ("movement_strategy", pa.string()),
        ("mobility", pa.float64()),
        ("score", pa.int64()),
        ("cooperation_rate", pa.float64()),
    ]
)
