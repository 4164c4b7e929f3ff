"""Solvable invisible-maze generation and level-pack builder."""

from __future__ import annotations

import argparse
import logging
import random
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, FrozenSet, List, MutableSequence, Optional, Protocol, Set

import numpy as np

from .base import AbstractLevelGenerator, PathLike
from .connectivity import reachable
from .difficulty import DIFFICULTIES, Difficulty, get_difficulty
from .grid import Cell, Grid, Wall, wall_mask

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    def random(self) -> float:
        ...


@dataclass(frozen=True)
class Maze:
    size: int
    walls: FrozenSet[Wall]
    start: Cell
    key: Cell
    door: Cell
    target_walls: int = 0

    def __post_init__(self) -> None:
        if self.size < 2:
            raise ValueError("Maze size must be at least 2")
        grid = self.grid
        for name in ("start", "key", "door"):
            cell = getattr(self, name)
            if not grid.contains(cell):
                raise ValueError(f"{name} cell {tuple(cell)} is outside a {self.size}x{self.size} grid")
        if self.key == self.start or self.key == self.door:
            raise ValueError("Key must not share a cell with the start or the door")
        if self.start == self.door:
            raise ValueError("Start and door must be different cells")
        invalid = [wall for wall in self.walls if not grid.is_valid_wall(wall)]
        if invalid:
            raise ValueError(f"Walls out of bounds for size {self.size}: {[w.key for w in invalid]}")

    @property
    def grid(self) -> Grid:
        return Grid(self.size)

    @property
    def wall_count(self) -> int:
        return len(self.walls)

    def has_wall(self, wall: Wall) -> bool:
        return wall in self.walls

    def is_solvable(self) -> bool:
        return _is_solvable(self.walls, self.start, self.key, self.door, self.size)

    def wall_mask(self) -> np.ndarray:
        return wall_mask(self.walls, self.size)


def _is_solvable(walls, start: Cell, key: Cell, door: Cell, size: int) -> bool:
    return reachable(walls, start, key, size) and reachable(walls, key, door, size)


def _shuffle(items: MutableSequence, rng: RandomSource) -> None:
    """In-place Fisher-Yates shuffle driven by ``rng.random()``."""

    for i in range(len(items) - 1, 0, -1):
        j = int(rng.random() * (i + 1))
        items[i], items[j] = items[j], items[i]


def _random_cell(size: int, rng: RandomSource) -> Cell:
    return Cell(int(rng.random() * size), int(rng.random() * size))


def generate(size: int, target_walls: int, rng: Optional[RandomSource] = None) -> Maze:
    """Build a maze with up to ``target_walls`` walls that stays solvable.

    Start sits in the bottom-left corner and the door in the top-right one.
    Candidate walls are tried in random order and each is kept only if the
    start->key and key->door paths survive it, so the result may carry fewer
    walls than requested when the grid is too small to hold them.
    """

    if size < 2:
        raise ValueError("size must be at least 2")
    if target_walls < 0:
        raise ValueError("target_walls must be non-negative")
    if rng is None:
        rng = random.Random()

    start = Cell(0, size - 1)
    door = Cell(size - 1, 0)
    key = _random_cell(size, rng)
    while key == start or key == door:
        key = _random_cell(size, rng)

    candidates = Grid(size).candidate_walls()
    _shuffle(candidates, rng)

    walls: Set[Wall] = set()
    rejected = 0
    for wall in candidates:
        if len(walls) >= target_walls:
            break
        walls.add(wall)
        if not _is_solvable(walls, start, key, door, size):
            walls.discard(wall)
            rejected += 1

    if len(walls) < target_walls:
        logger.debug(
            "Only placed %d of %d walls on a %dx%d grid (%d candidates rejected)",
            len(walls),
            target_walls,
            size,
            size,
            rejected,
        )
    return Maze(
        size=size,
        walls=frozenset(walls),
        start=start,
        key=key,
        door=door,
        target_walls=target_walls,
    )


@dataclass
class LevelRecord:
    id: str
    difficulty: str
    size: int
    target_walls: int
    seed: int
    start: Cell
    key: Cell
    door: Cell
    walls: List[Wall] = field(default_factory=list)

    @classmethod
    def from_maze(cls, level_id: str, difficulty: str, seed: int, maze: Maze) -> "LevelRecord":
        return cls(
            id=level_id,
            difficulty=difficulty,
            size=maze.size,
            target_walls=maze.target_walls,
            seed=seed,
            start=maze.start,
            key=maze.key,
            door=maze.door,
            walls=sorted(maze.walls, key=lambda wall: (wall.orientation.value, wall.y, wall.x)),
        )

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "LevelRecord":
        try:
            return cls(
                id=str(payload["id"]),
                difficulty=str(payload["difficulty"]),
                size=int(payload["size"]),
                target_walls=int(payload["target_walls"]),
                seed=int(payload["seed"]),
                start=Cell(*map(int, payload["start"])),
                key=Cell(*map(int, payload["key"])),
                door=Cell(*map(int, payload["door"])),
                walls=[Wall.from_list(item) for item in payload["walls"]],
            )
        except KeyError as exc:
            raise ValueError(f"Level record is missing field {exc.args[0]!r}") from exc
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Malformed level record {payload.get('id')!r}: {exc}") from exc

    def to_maze(self) -> Maze:
        return Maze(
            size=self.size,
            walls=frozenset(self.walls),
            start=self.start,
            key=self.key,
            door=self.door,
            target_walls=self.target_walls,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "difficulty": self.difficulty,
            "size": self.size,
            "target_walls": self.target_walls,
            "wall_count": len(self.walls),
            "seed": self.seed,
            "start": list(self.start),
            "key": list(self.key),
            "door": list(self.door),
            "walls": [wall.to_list() for wall in self.walls],
        }


class LevelGenerator(AbstractLevelGenerator[LevelRecord]):
    """Generate seeded, replayable maze levels for one difficulty tier."""

    def __init__(
        self,
        output_dir: PathLike = "data/levels",
        *,
        difficulty: str = "EASY",
        size: Optional[int] = None,
        walls: Optional[int] = None,
        seed: Optional[int] = None,
    ) -> None:
        super().__init__(output_dir)
        preset = get_difficulty(difficulty)
        self.difficulty = Difficulty(
            preset.name,
            size=preset.size if size is None else size,
            walls=preset.walls if walls is None else walls,
        )
        if self.difficulty.size < 2:
            raise ValueError("size must be at least 2")
        if self.difficulty.walls < 0:
            raise ValueError("walls must be non-negative")
        self._rng = random.Random(seed)

    def create_level(self, *, seed: int, level_id: Optional[str] = None) -> LevelRecord:
        level_uuid = level_id or str(uuid.uuid4())
        maze = generate(self.difficulty.size, self.difficulty.walls, random.Random(seed))
        logger.debug(
            "Generated level %s (%s, seed=%d) with %d/%d walls, key at %s",
            level_uuid,
            self.difficulty.name,
            seed,
            maze.wall_count,
            maze.target_walls,
            tuple(maze.key),
        )
        return LevelRecord.from_maze(level_uuid, self.difficulty.name, seed, maze)

    def create_random_level(self) -> LevelRecord:
        return self.create_level(seed=self._rng.randrange(2**32))


__all__ = ["LevelGenerator", "LevelRecord", "Maze", "RandomSource", "generate"]


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate solvable invisible-maze levels")
    parser.add_argument("count", type=int, help="Number of levels to generate")
    parser.add_argument("--output-dir", type=Path, default=Path("data/levels"), help="Where to write levels.json")
    parser.add_argument("--difficulty", choices=sorted(DIFFICULTIES), default="EASY")
    parser.add_argument("--size", type=int, default=None, help="Override the preset grid size")
    parser.add_argument("--walls", type=int, default=None, help="Override the preset wall target")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--overwrite", action="store_true", help="Replace levels.json instead of appending")
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )
    generator = LevelGenerator(
        output_dir=args.output_dir,
        difficulty=args.difficulty,
        size=args.size,
        walls=args.walls,
        seed=args.seed,
    )
    records = generator.generate_pack(
        args.count,
        metadata_path=generator.metadata_path,
        append=not args.overwrite,
    )
    logger.info("Wrote %d %s levels to %s", len(records), generator.difficulty.name, generator.metadata_path)


if __name__ == "__main__":
    main()
