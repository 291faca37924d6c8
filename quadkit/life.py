"""Conway's Game of Life on a bounded, non-wrapping grid."""

from __future__ import annotations

import random
from enum import Enum
from typing import Sequence

__all__ = ["CellState", "random_grid", "next_generation"]


class CellState(Enum):
    """State of a single cell."""

    ALIVE = "alive"
    DEAD = "dead"


_NEIGHBOUR_OFFSETS = [(i, j) for j in (-1, 0, 1) for i in (-1, 0, 1) if (i, j) != (0, 0)]


def random_grid(width: int, height: int, rng: random.Random) -> list[CellState]:
    """A row-major grid where each cell is alive with probability 1/5."""
    if width < 0 or height < 0:
        raise ValueError("grid dimensions must not be negative")
    return [
        CellState.ALIVE if rng.randrange(5) == 0 else CellState.DEAD
        for _ in range(width * height)
    ]


def _live_neighbours(cells: Sequence[CellState], width: int, height: int, x: int, y: int) -> int:
    count = 0
    for i, j in _NEIGHBOUR_OFFSETS:
        nx, ny = x + i, y + j
        if 0 <= nx < width and 0 <= ny < height and cells[ny * width + nx] is CellState.ALIVE:
            count += 1
    return count


def _rule(cell: CellState, neighbours: int) -> CellState:
    if cell is CellState.ALIVE:
        return CellState.ALIVE if neighbours in (2, 3) else CellState.DEAD
    return CellState.ALIVE if neighbours == 3 else cell


def next_generation(cells: Sequence[CellState], width: int, height: int) -> list[CellState]:
    """The grid one generation later; cells outside the grid count as dead."""
    if len(cells) != width * height:
        raise ValueError(f"expected {width * height} cells, got {len(cells)}")
    return [
        _rule(cells[y * width + x], _live_neighbours(cells, width, height, x, y))
        for y in range(height)
        for x in range(width)
    ]