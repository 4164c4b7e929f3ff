"""Actor movement, collision handling and wall reveal for a single run."""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, Set

import numpy as np

from .generator import Maze
from .grid import Cell, Direction, Wall, wall_mask

logger = logging.getLogger(__name__)

Clock = Callable[[], float]

BASE_SCORE = 1000
TIME_PENALTY = 5
ATTEMPT_PENALTY = 50


class Mode(Enum):
    PRACTICE = "PRACTICE"
    CHALLENGE = "CHALLENGE"

    @classmethod
    def parse(cls, value: "Mode | str") -> "Mode":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError as exc:
            raise ValueError(f"Unknown mode: {value!r}") from exc


class RunStatus(Enum):
    PLAYING = "PLAYING"
    LEVEL_COMPLETE = "LEVEL_COMPLETE"
    LEVEL_FAILED = "LEVEL_FAILED"


class OutcomeKind(Enum):
    NONE = "NONE"
    COLLISION = "COLLISION"
    KEY_ACQUIRED = "KEY_ACQUIRED"
    LEVEL_COMPLETE = "LEVEL_COMPLETE"
    LEVEL_FAILED = "LEVEL_FAILED"


def compute_score(elapsed_seconds: int, attempts: int) -> int:
    return max(0, BASE_SCORE - TIME_PENALTY * elapsed_seconds - ATTEMPT_PENALTY * attempts)


@dataclass
class MoveOutcome:
    kind: OutcomeKind
    moved: bool = False
    edge: Optional[Wall] = None
    elapsed_seconds: Optional[int] = None
    attempts: Optional[int] = None
    score: Optional[int] = None

    @property
    def is_terminal(self) -> bool:
        return self.kind in (OutcomeKind.LEVEL_COMPLETE, OutcomeKind.LEVEL_FAILED)

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "moved": self.moved,
            "edge": self.edge.to_list() if self.edge is not None else None,
            "elapsed_seconds": self.elapsed_seconds,
            "attempts": self.attempts,
            "score": self.score,
        }


@dataclass
class RunState:
    """Mutable per-level state owned by whoever drives the game."""

    position: Cell
    mode: Mode = Mode.PRACTICE
    has_key: bool = False
    attempts: int = 0
    revealed: Set[Wall] = field(default_factory=set)
    status: RunStatus = RunStatus.PLAYING
    started_at: float = 0.0
    ended_at: Optional[float] = None

    @classmethod
    def start(cls, maze: Maze, mode: Mode = Mode.PRACTICE, clock: Clock = time.monotonic) -> "RunState":
        return cls(position=maze.start, mode=Mode.parse(mode), started_at=clock())

    @property
    def is_playing(self) -> bool:
        return self.status is RunStatus.PLAYING

    def elapsed_seconds(self, clock: Clock = time.monotonic) -> int:
        """Whole seconds since the level started, frozen once it has ended."""

        now = self.ended_at if self.ended_at is not None else clock()
        return max(0, math.floor(now - self.started_at))

    def reveal(self, wall: Wall) -> bool:
        """Add ``wall`` to the revealed set; False if it was already known."""

        if wall in self.revealed:
            return False
        self.revealed.add(wall)
        return True

    def revealed_mask(self, size: int) -> np.ndarray:
        return wall_mask(self.revealed, size)


def attempt_move(
    maze: Maze,
    state: RunState,
    direction: Direction,
    clock: Clock = time.monotonic,
) -> MoveOutcome:
    """Resolve one move request against the maze, mutating ``state``.

    Leaving the grid, or moving after the level has ended, changes nothing.
    Hitting a wall counts an attempt, reveals that wall and sends the actor
    back to the start; the key stays collected. In CHALLENGE mode the first
    hit also fails the level.
    """

    if not state.is_playing:
        return MoveOutcome(OutcomeKind.NONE)
    direction = Direction.parse(direction)
    grid = maze.grid
    target = grid.neighbor(state.position, direction)
    if target is None:
        return MoveOutcome(OutcomeKind.NONE)

    edge = grid.edge_for(state.position, direction)
    if maze.has_wall(edge):
        state.attempts += 1
        newly_revealed = state.reveal(edge)
        state.position = maze.start
        logger.debug(
            "Collision with wall %s (attempt %d, new=%s)", edge.key, state.attempts, newly_revealed
        )
        if state.mode is Mode.CHALLENGE:
            state.status = RunStatus.LEVEL_FAILED
            state.ended_at = clock()
            logger.info("Level failed after collision with %s", edge.key)
            return MoveOutcome(OutcomeKind.LEVEL_FAILED, edge=edge, attempts=state.attempts)
        return MoveOutcome(OutcomeKind.COLLISION, edge=edge, attempts=state.attempts)

    state.position = target
    if target == maze.key and not state.has_key:
        state.has_key = True
        return MoveOutcome(OutcomeKind.KEY_ACQUIRED, moved=True)
    if target == maze.door and state.has_key:
        state.status = RunStatus.LEVEL_COMPLETE
        state.ended_at = clock()
        elapsed = state.elapsed_seconds(clock)
        score = compute_score(elapsed, state.attempts)
        logger.info(
            "Level complete in %ds with %d attempts (score %d)", elapsed, state.attempts, score
        )
        return MoveOutcome(
            OutcomeKind.LEVEL_COMPLETE,
            moved=True,
            elapsed_seconds=elapsed,
            attempts=state.attempts,
            score=score,
        )
    return MoveOutcome(OutcomeKind.NONE, moved=True)


__all__ = [
    "ATTEMPT_PENALTY",
    "BASE_SCORE",
    "Clock",
    "Mode",
    "MoveOutcome",
    "OutcomeKind",
    "RunState",
    "RunStatus",
    "TIME_PENALTY",
    "attempt_move",
    "compute_score",
]
