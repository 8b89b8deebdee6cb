"""Path construction helpers for simulation output directories.

Centralises the directory/file naming conventions used by the batch driver
and the renderers.
"""

from __future__ import annotations

from pathlib import Path


def resolve_within_base(path: Path, base_dir: Path) -> Path:
    """Resolve *path* and ensure it stays within the trusted *base_dir*.

    Raises :exc:`ValueError` if the resolved path escapes the base directory.
    """
    candidate = path if path.is_absolute() else base_dir / path
    resolved = candidate.resolve()
    base_resolved = base_dir.resolve()
    if resolved != base_resolved and base_resolved not in resolved.parents:
        raise ValueError(f"Path escapes base_dir: {path}")
    return resolved


def runs_dir(out_dir: Path) -> Path:
    """Return path to the per-run summary subdirectory within an output directory."""
    return out_dir / "runs"


def logs_dir(out_dir: Path) -> Path:
    """Return path to the logs subdirectory within an output directory."""
    return out_dir / "logs"


def statistics_log_path(out_dir: Path) -> Path:
    """Return path to the per-step statistics Parquet file."""
    return logs_dir(out_dir) / "statistics_log.parquet"


def agent_log_path(out_dir: Path) -> Path:
    """Return path to the per-step agent Parquet file."""
    return logs_dir(out_dir) / "agent_log.parquet"


def run_summary_path(out_dir: Path, run_id: str) -> Path:
    """Return path to one run's JSON summary."""
    return runs_dir(out_dir) / f"{run_id}.json"
