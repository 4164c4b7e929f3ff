"""Cell, direction and wall types for the square maze lattice."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, NamedTuple, Optional, Tuple

import numpy as np


class Direction(Enum):
    """Cardinal move direction. ``y`` grows downwards."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def delta(self) -> Tuple[int, int]:
        return _DELTAS[self]

    @classmethod
    def parse(cls, value: "Direction | str") -> "Direction":
        """Accept a Direction or its name (``top``/``bottom`` are aliases)."""

        if isinstance(value, cls):
            return value
        name = str(value).strip().lower()
        name = _ALIASES.get(name, name)
        try:
            return cls(name)
        except ValueError as exc:
            raise ValueError(f"Unknown direction: {value!r}") from exc


_DELTAS = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}

_ALIASES = {"top": "up", "bottom": "down"}


class Orientation(Enum):
    """Which side of a cell a canonical wall sits on."""

    RIGHT = "right"
    BOTTOM = "bottom"


class Cell(NamedTuple):
    x: int
    y: int


class Wall(NamedTuple):
    """Edge between two adjacent cells, always stored in canonical form."""

    x: int
    y: int
    orientation: Orientation

    @property
    def key(self) -> str:
        return f"{self.x},{self.y},{self.orientation.value}"

    @property
    def cells(self) -> Tuple[Cell, Cell]:
        if self.orientation is Orientation.RIGHT:
            return Cell(self.x, self.y), Cell(self.x + 1, self.y)
        return Cell(self.x, self.y), Cell(self.x, self.y + 1)

    def to_list(self) -> list:
        return [self.x, self.y, self.orientation.value]

    @classmethod
    def from_list(cls, value: Iterable) -> "Wall":
        x, y, orientation = value
        return cls(int(x), int(y), Orientation(str(orientation)))


@dataclass(frozen=True)
class Grid:
    """An N x N lattice of cells."""

    size: int

    def contains(self, cell: Cell) -> bool:
        return 0 <= cell[0] < self.size and 0 <= cell[1] < self.size

    def neighbor(self, cell: Cell, direction: Direction) -> Optional[Cell]:
        dx, dy = direction.delta
        candidate = Cell(cell[0] + dx, cell[1] + dy)
        if not self.contains(candidate):
            return None
        return candidate

    def edge_for(self, cell: Cell, direction: Direction) -> Wall:
        """Canonical wall crossed when leaving ``cell`` towards ``direction``.

        LEFT and UP moves cross the RIGHT/BOTTOM wall of the neighbouring
        cell. Bounds are not checked here; use :meth:`neighbor` first.
        """

        x, y = cell
        if direction is Direction.RIGHT:
            return Wall(x, y, Orientation.RIGHT)
        if direction is Direction.LEFT:
            return Wall(x - 1, y, Orientation.RIGHT)
        if direction is Direction.DOWN:
            return Wall(x, y, Orientation.BOTTOM)
        return Wall(x, y - 1, Orientation.BOTTOM)

    def is_valid_wall(self, wall: Wall) -> bool:
        if not self.contains(Cell(wall.x, wall.y)):
            return False
        if wall.orientation is Orientation.RIGHT:
            return wall.x < self.size - 1
        return wall.y < self.size - 1

    def candidate_walls(self) -> List[Wall]:
        """Every interior edge of the grid, ``2 * N * (N - 1)`` in total."""

        walls = [
            Wall(x, y, Orientation.RIGHT)
            for x in range(self.size - 1)
            for y in range(self.size)
        ]
        walls.extend(
            Wall(x, y, Orientation.BOTTOM)
            for x in range(self.size)
            for y in range(self.size - 1)
        )
        return walls


def wall_mask(walls: Iterable[Wall], size: int) -> np.ndarray:
    """Boolean array of shape ``(2, size, size)`` indexed ``[orientation, y, x]``.

    Plane 0 holds RIGHT walls, plane 1 holds BOTTOM walls.
    """

    mask = np.zeros((2, size, size), dtype=bool)
    for wall in walls:
        plane = 0 if wall.orientation is Orientation.RIGHT else 1
        mask[plane, wall.y, wall.x] = True
    return mask


__all__ = ["Cell", "Direction", "Grid", "Orientation", "Wall", "wall_mask"]
