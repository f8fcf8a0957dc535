"""Fixed-size board coordinates and movement directions."""

from __future__ import annotations

from enum import Enum

from .config import GRID_SIZE

Coordinate = tuple[int, int]


class Direction(Enum):
    """Movement direction; the value is the (dx, dy) step on the grid."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def opposite(self) -> Direction:
        return Direction((-self.dx, -self.dy))


def in_bounds(cell: Coordinate, size: int = GRID_SIZE) -> bool:
    x, y = cell
    return 0 <= x < size and 0 <= y < size


def offset(cell: Coordinate, direction: Direction) -> Coordinate:
    """Return the neighbouring cell one step away; may leave the board."""
    return (cell[0] + direction.dx, cell[1] + direction.dy)
