"""CLI entrypoint for seeded simulation batches.

This module owns CLI argument parsing only. All domain logic lives in:

- ``spatial_dilemma.config``            – configuration dataclasses
- ``spatial_dilemma.simulation.batch``  – ``run_batch`` driver
- ``spatial_dilemma.viz``               – optional PNG rendering
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from spatial_dilemma.config.constants import (
    GRID_HEIGHT,
    GRID_WIDTH,
    NUM_AGENTS,
    NUM_STEPS,
    STRATEGY_PENALTY_RATE,
    TURNS_PER_GENERATION,
)
from spatial_dilemma.config.types import RunConfig, SimulationConfig
from spatial_dilemma.errors import InitializationError
from spatial_dilemma.io.paths import statistics_log_path
from spatial_dilemma.simulation.batch import run_batch

# ---------------------------------------------------------------------------
# Value coercion helpers
# ---------------------------------------------------------------------------


def _coerce_bool(raw: object, key: str) -> bool:
    """Coerce raw value to bool with strict string-check."""
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        normalized = raw.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
    raise ValueError(f"{key} must be a boolean value")


def _coerce_int(raw: object, key: str) -> int:
    """Coerce raw value to int; rejects booleans and non-integer floats."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be an integer value")
    if isinstance(raw, float):
        if raw != int(raw):
            raise ValueError(f"{key} must be an integer value, got {raw!r}")
        return int(raw)
    if isinstance(raw, (int, str)):
        return int(raw)
    raise ValueError(f"{key} must be an integer value")


def _coerce_float(raw: object, key: str) -> float:
    """Coerce raw value to float; rejects booleans."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be a float value")
    if isinstance(raw, (int, float, str)):
        return float(raw)
    raise ValueError(f"{key} must be a float value")


def _coerce_text(raw: object, key: str) -> str:
    """Accept the grid-size string or an output path from argparse or the JSON file."""
    if isinstance(raw, (str, Path)):
        return str(raw)
    raise ValueError(f"{key} must be a string or path, got {type(raw).__name__}")


def _get_val(cli_val: object, key: str, file_cfg: dict[str, object], default: object) -> object:
    """CLI > file > default resolution."""
    if cli_val is not None:
        return cli_val
    return file_cfg.get(key, default)


def _parse_grid_size(raw: str) -> tuple[int, int]:
    """Parse a grid size formatted as ``WxH``."""
    tokens = raw.strip().lower().split("x")
    if len(tokens) != 2:
        raise ValueError("grid-size must use WxH format")
    try:
        width, height = int(tokens[0]), int(tokens[1])
    except ValueError as exc:
        raise ValueError("grid-size must use integer WxH values") from exc
    if width < 1 or height < 1:
        raise ValueError("grid-size must be >= 1x1")
    return width, height


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        description="Run seeded spatial prisoner's dilemma simulations"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON config file (CLI args override file values)",
    )
    parser.add_argument("--grid-size", type=str, default=None, help="grid size as WxH")
    parser.add_argument("--agents", type=int, default=None)
    parser.add_argument("--steps", type=int, default=None)
    parser.add_argument("--runs", type=int, default=None)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--turns-per-generation", type=int, default=None)
    parser.add_argument("--torus", action=argparse.BooleanOptionalAction, default=None)
    parser.add_argument(
        "--strategy-penalty", action=argparse.BooleanOptionalAction, default=None
    )
    parser.add_argument("--penalty-rate", type=float, default=None)
    parser.add_argument(
        "--record-agents",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Also write one row per agent per step to logs/agent_log.parquet",
    )
    parser.add_argument(
        "--plot",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Render strategy time series PNGs next to the logs",
    )
    parser.add_argument("--out-dir", type=Path, default=None)
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser


# ---------------------------------------------------------------------------
# Main CLI
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for batch execution.

    Supports ``--config path/to/config.json`` for experiment reproducibility.
    CLI arguments override config-file values; config-file values override
    built-in defaults.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))

    file_cfg: dict[str, object] = {}
    if args.config is not None:
        try:
            file_cfg = json.loads(Path(args.config).read_text())
        except FileNotFoundError:
            parser.error(f"Config file not found: {args.config}")
        except json.JSONDecodeError as exc:
            parser.error(f"Config file is not valid JSON: {args.config}: {exc}")

    try:
        width, height = _parse_grid_size(
            _coerce_text(
                _get_val(args.grid_size, "grid_size", file_cfg, f"{GRID_WIDTH}x{GRID_HEIGHT}"),
                "grid_size",
            )
        )
        simulation_config = SimulationConfig(
            turns_per_generation=_coerce_int(
                _get_val(
                    args.turns_per_generation,
                    "turns_per_generation",
                    file_cfg,
                    TURNS_PER_GENERATION,
                ),
                "turns_per_generation",
            ),
            torus_enabled=_coerce_bool(
                _get_val(args.torus, "torus", file_cfg, False), "torus"
            ),
            strategy_penalty_enabled=_coerce_bool(
                _get_val(args.strategy_penalty, "strategy_penalty", file_cfg, False),
                "strategy_penalty",
            ),
            strategy_penalty_rate=_coerce_float(
                _get_val(args.penalty_rate, "penalty_rate", file_cfg, STRATEGY_PENALTY_RATE),
                "penalty_rate",
            ),
        )
        run_config = RunConfig(
            width=width,
            height=height,
            agent_count=_coerce_int(
                _get_val(args.agents, "agents", file_cfg, NUM_AGENTS), "agents"
            ),
            steps=_coerce_int(_get_val(args.steps, "steps", file_cfg, NUM_STEPS), "steps"),
            n_runs=_coerce_int(_get_val(args.runs, "runs", file_cfg, 1), "runs"),
            base_seed=_coerce_int(_get_val(args.seed, "seed", file_cfg, 0), "seed"),
            record_agents=_coerce_bool(
                _get_val(args.record_agents, "record_agents", file_cfg, False), "record_agents"
            ),
            simulation=simulation_config,
        )
        plot = _coerce_bool(_get_val(args.plot, "plot", file_cfg, False), "plot")
        out_dir = Path(
            _coerce_text(_get_val(args.out_dir, "out_dir", file_cfg, "data"), "out_dir")
        )
    except ValueError as exc:
        parser.error(str(exc))

    try:
        results = run_batch(run_config, out_dir)
    except InitializationError as exc:
        parser.error(str(exc))

    if plot:
        from spatial_dilemma.viz.render import render_strategy_timeseries

        for result in results:
            render_strategy_timeseries(
                statistics_log_path(out_dir),
                out_dir / "plots" / f"{result.run_id}.png",
                run_id=result.run_id,
            )

    summary = {
        "runs": len(results),
        "grid_size": f"{width}x{height}",
        "agents": run_config.agent_count,
        "steps": run_config.steps,
        "final_generations": [r.final_generation for r in results],
        "dominant_strategies": [r.dominant_strategy for r in results],
        "mean_cooperation_rate": sum(r.average_cooperation_rate for r in results) / len(results),
    }
    print(json.dumps(summary, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
