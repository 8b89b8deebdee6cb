"""Visualization layer: matplotlib renderers."""

from spatial_dilemma.viz.render import (
    STRATEGY_COLORS,
    build_grid_array,
    render_snapshot,
    render_strategy_timeseries,
)

__all__ = [
    "STRATEGY_COLORS",
    "build_grid_array",
    "render_snapshot",
    "render_strategy_timeseries",
]
