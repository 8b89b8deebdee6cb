"""Matplotlib-based rendering of grid snapshots and strategy time series."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
import pyarrow.compute as pc
import pyarrow.parquet as pq
from matplotlib.colors import BoundaryNorm, ListedColormap
from matplotlib.patches import Patch

from spatial_dilemma.domain.snapshot import AgentSnapshot
from spatial_dilemma.domain.strategy import StrategyType
from spatial_dilemma.io.paths import resolve_within_base

STRATEGY_COLORS: dict[str, str] = {
    StrategyType.ALL_COOPERATE.value: "#2ca02c",
    StrategyType.ALL_DEFECT.value: "#d62728",
    StrategyType.TIT_FOR_TAT.value: "#1f77b4",
    StrategyType.PAVLOV.value: "#ff7f0e",
}
STRATEGY_LABELS: dict[str, str] = {
    StrategyType.ALL_COOPERATE.value: "All Cooperate",
    StrategyType.ALL_DEFECT.value: "All Defect",
    StrategyType.TIT_FOR_TAT.value: "Tit for Tat",
    StrategyType.PAVLOV.value: "Pavlov",
}
EMPTY_CELL_COLOR = "#f0f0f0"
GRID_LINE_COLOR = "#d0d0d0"

_STRATEGY_ORDER = [strategy.value for strategy in StrategyType]
_EMPTY_INDEX = len(_STRATEGY_ORDER)


def _resolve_output(output_path: Path, base_dir: Path | None) -> Path:
    path = Path(output_path)
    if base_dir is not None:
        path = resolve_within_base(path, Path(base_dir))
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def build_grid_array(snapshots: Sequence[AgentSnapshot], width: int, height: int) -> np.ndarray:
    """Return (H, W) int array of strategy indices, with the empty sentinel elsewhere.

    Out-of-bounds positions are silently skipped.
    """
    grid = np.full((height, width), _EMPTY_INDEX, dtype=int)
    for snapshot in snapshots:
        if 0 <= snapshot.x < width and 0 <= snapshot.y < height:
            grid[snapshot.y, snapshot.x] = _STRATEGY_ORDER.index(snapshot.strategy)
    return grid


def _strategy_cmap() -> tuple[ListedColormap, BoundaryNorm]:
    """Discrete colormap: one color per strategy plus empty cells."""
    colors = [STRATEGY_COLORS[name] for name in _STRATEGY_ORDER] + [EMPTY_CELL_COLOR]
    cmap = ListedColormap(colors)
    bounds = [i - 0.5 for i in range(len(colors) + 1)]
    return cmap, BoundaryNorm(bounds, cmap.N)


def render_snapshot(
    snapshots: Sequence[AgentSnapshot],
    width: int,
    height: int,
    output_path: Path,
    title: str | None = None,
    base_dir: Path | None = None,
) -> Path:
    """Render one population snapshot as a colored grid image."""
    path = _resolve_output(output_path, base_dir)
    grid = build_grid_array(snapshots, width, height)
    cmap, norm = _strategy_cmap()

    fig, ax = plt.subplots(figsize=(6, 6 * height / max(width, 1)))
    try:
        ax.imshow(grid, cmap=cmap, norm=norm, origin="upper", aspect="equal")
        for x in range(width + 1):
            ax.axvline(x - 0.5, color=GRID_LINE_COLOR, linewidth=0.5)
        for y in range(height + 1):
            ax.axhline(y - 0.5, color=GRID_LINE_COLOR, linewidth=0.5)
        ax.set_xticks([])
        ax.set_yticks([])
        handles = [
            Patch(facecolor=STRATEGY_COLORS[name], edgecolor="gray", label=STRATEGY_LABELS[name])
            for name in _STRATEGY_ORDER
        ]
        handles.append(Patch(facecolor=EMPTY_CELL_COLOR, edgecolor="gray", label="Empty"))
        ax.legend(handles=handles, loc="upper left", bbox_to_anchor=(1.01, 1.0), fontsize=8)
        if title:
            ax.set_title(title)
        fig.savefig(path, dpi=100, bbox_inches="tight")
    finally:
        plt.close(fig)
    return path


def render_strategy_timeseries(
    statistics_log_path: Path,
    output_path: Path,
    run_id: str | None = None,
    base_dir: Path | None = None,
) -> Path:
    """Plot per-strategy counts and mean cooperation rate over steps.

    With several runs in the log, *run_id* selects one; it is required when
    the log holds more than one run.
    """
    table = pq.read_table(statistics_log_path)
    run_ids = sorted(set(table.column("run_id").to_pylist()))
    if run_id is None:
        if len(run_ids) != 1:
            raise ValueError("run_id is required when the log holds more than one run")
        run_id = run_ids[0]
    elif run_id not in run_ids:
        raise ValueError(f"run_id not found in statistics log: {run_id}")
    table = table.filter(pc.equal(table.column("run_id"), run_id))

    path = _resolve_output(output_path, base_dir)
    steps = np.asarray(table.column("step").to_pylist())
    fig, (ax_counts, ax_coop) = plt.subplots(2, 1, figsize=(8, 6), sharex=True)
    try:
        for name in _STRATEGY_ORDER:
            counts = np.asarray(table.column(f"count_{name}").to_pylist())
            ax_counts.plot(steps, counts, color=STRATEGY_COLORS[name], label=STRATEGY_LABELS[name])
        ax_counts.set_ylabel("agents")
        ax_counts.legend(fontsize=8)
        ax_coop.plot(steps, table.column("average_cooperation_rate").to_pylist(), color="black")
        ax_coop.set_ylim(0.0, 1.0)
        ax_coop.set_ylabel("cooperation rate")
        ax_coop.set_xlabel("step")
        fig.suptitle(run_id)
        fig.savefig(path, dpi=100, bbox_inches="tight")
    finally:
        plt.close(fig)
    return path
