"""Breadth-first reachability over the open edges of a maze."""

from __future__ import annotations

from collections import deque
from typing import AbstractSet, Dict, List, Optional, Sequence

import numpy as np

from .grid import Cell, Direction, Grid, Wall

_DIRECTIONS = (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)


def _open_neighbors(grid: Grid, walls: AbstractSet[Wall], cell: Cell):
    for direction in _DIRECTIONS:
        neighbor = grid.neighbor(cell, direction)
        if neighbor is None:
            continue
        if grid.edge_for(cell, direction) in walls:
            continue
        yield neighbor


def reachable(walls: AbstractSet[Wall], start: Cell, end: Cell, size: int) -> bool:
    """Return True when ``end`` can be reached from ``start`` without crossing a wall."""

    start, end = Cell(*start), Cell(*end)
    if start == end:
        return True
    grid = Grid(size)
    visited = np.zeros((size, size), dtype=bool)
    visited[start.y, start.x] = True
    queue: deque[Cell] = deque([start])
    while queue:
        cell = queue.popleft()
        for neighbor in _open_neighbors(grid, walls, cell):
            if visited[neighbor.y, neighbor.x]:
                continue
            if neighbor == end:
                return True
            visited[neighbor.y, neighbor.x] = True
            queue.append(neighbor)
    return False


def shortest_path(walls: AbstractSet[Wall], start: Cell, end: Cell, size: int) -> List[Cell]:
    """Cells of a shortest open path from ``start`` to ``end`` (both included).

    Returns an empty list when ``end`` is unreachable.
    """

    start, end = Cell(*start), Cell(*end)
    grid = Grid(size)
    parents: Dict[Cell, Optional[Cell]] = {start: None}
    queue: deque[Cell] = deque([start])
    while queue:
        cell = queue.popleft()
        if cell == end:
            break
        for neighbor in _open_neighbors(grid, walls, cell):
            if neighbor not in parents:
                parents[neighbor] = cell
                queue.append(neighbor)

    if end not in parents:
        return []
    node: Optional[Cell] = end
    result: List[Cell] = []
    while node is not None:
        result.append(node)
        node = parents[node]
    result.reverse()
    return result


def path_to_moves(path: Sequence[Cell]) -> List[Direction]:
    """Translate consecutive adjacent cells into the directions that walk them."""

    by_delta = {direction.delta: direction for direction in _DIRECTIONS}
    moves: List[Direction] = []
    for (x0, y0), (x1, y1) in zip(path, path[1:]):
        try:
            moves.append(by_delta[(x1 - x0, y1 - y0)])
        except KeyError as exc:
            raise ValueError(f"Cells {(x0, y0)} and {(x1, y1)} are not adjacent") from exc
    return moves


__all__ = ["path_to_moves", "reachable", "shortest_path"]
