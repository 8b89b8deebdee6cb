"""Grid coordinates and Moore-neighbourhood enumeration."""

from __future__ import annotations

from dataclasses import dataclass

MOORE_OFFSETS: tuple[tuple[int, int], ...] = tuple(
    (dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1) if (dx, dy) != (0, 0)
)
"""The 8 relative offsets of the Moore neighbourhood."""


@dataclass(frozen=True, order=True)
class Position:
    """Immutable 0-based cell coordinate."""

    x: int
    y: int

    def in_bounds(self, width: int, height: int) -> bool:
        return 0 <= self.x < width and 0 <= self.y < height

    def neighbors(self, width: int, height: int, torus: bool = False) -> set[Position]:
        """Return the Moore neighbourhood of this cell.

        Bounded mode drops cells outside ``[0, width) x [0, height)``.
        Torus mode wraps coordinates, so every cell has 8 neighbours once
        both dimensions are >= 3; on smaller grids wrapped duplicates collapse
        and the cell itself is excluded.
        """
        cells: set[Position] = set()
        for dx, dy in MOORE_OFFSETS:
            nx_, ny_ = self.x + dx, self.y + dy
            if torus:
                cell = Position(nx_ % width, ny_ % height)
                if cell != self:
                    cells.add(cell)
            elif 0 <= nx_ < width and 0 <= ny_ < height:
                cells.add(Position(nx_, ny_))
        return cells
