"""Experiment entrypoints."""

from spatial_dilemma.experiments.cli import main

__all__ = ["main"]
