"""Typed read-only views of agents handed out to callers.

Snapshots are detached copies: mutating or discarding them never affects the
simulation that produced them.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AgentSnapshot:
    """Immutable snapshot of a single agent at one point in time."""

    agent_id: int
    x: int
    y: int
    strategy: str
    movement_strategy: str
    mobility: float
    score: int
    cooperation_rate: float


Snapshot = tuple[AgentSnapshot, ...]
"""Ordered tuple of agent snapshots capturing the full population at one turn."""
