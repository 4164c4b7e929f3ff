"""Level lifecycle for one player: difficulty, mode, level counter and timer."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import List, Optional

from .difficulty import Difficulty, get_difficulty
from .generator import Maze, RandomSource, generate
from .grid import Direction
from .navigation import Clock, Mode, MoveOutcome, OutcomeKind, RunState, attempt_move

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoreEntry:
    score: int
    difficulty: str
    mode: str
    level: int
    elapsed_seconds: int
    attempts: int

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "difficulty": self.difficulty,
            "mode": self.mode,
            "level": self.level,
            "elapsed_seconds": self.elapsed_seconds,
            "attempts": self.attempts,
        }


class GameSession:
    """Drives consecutive levels; every start builds a fresh maze and run state."""

    def __init__(
        self,
        difficulty: str = "EASY",
        mode: Mode = Mode.PRACTICE,
        *,
        rng: Optional[RandomSource] = None,
        clock: Clock = time.monotonic,
    ) -> None:
        self.difficulty: Difficulty = get_difficulty(difficulty)
        self.mode = Mode.parse(mode)
        self.level = 1
        self.maze: Optional[Maze] = None
        self.state: Optional[RunState] = None
        self.last_score: Optional[int] = None
        self.scores: List[ScoreEntry] = []
        self._rng = rng
        self._clock = clock

    def select_difficulty(self, name: str) -> Difficulty:
        self.difficulty = get_difficulty(name)
        return self.difficulty

    def set_mode(self, mode: Mode) -> Mode:
        self.mode = Mode.parse(mode)
        return self.mode

    @property
    def is_playing(self) -> bool:
        return self.state is not None and self.state.is_playing

    def start(self, reset_level: bool = True) -> Maze:
        if reset_level:
            self.level = 1
        self.maze = generate(self.difficulty.size, self.difficulty.walls, self._rng)
        self.state = RunState.start(self.maze, self.mode, self._clock)
        logger.info(
            "Level %d started (%s, %s): %d walls, key at %s",
            self.level,
            self.difficulty.name,
            self.mode.value,
            self.maze.wall_count,
            tuple(self.maze.key),
        )
        return self.maze

    def next_level(self) -> Maze:
        self.level += 1
        return self.start(reset_level=False)

    def restart(self) -> Maze:
        return self.start(reset_level=False)

    def move(self, direction: Direction) -> MoveOutcome:
        if self.maze is None or self.state is None:
            return MoveOutcome(OutcomeKind.NONE)
        outcome = attempt_move(self.maze, self.state, direction, self._clock)
        if outcome.kind is OutcomeKind.LEVEL_COMPLETE:
            self.last_score = outcome.score
            self.scores.append(
                ScoreEntry(
                    score=outcome.score,
                    difficulty=self.difficulty.name,
                    mode=self.mode.value,
                    level=self.level,
                    elapsed_seconds=outcome.elapsed_seconds,
                    attempts=outcome.attempts,
                )
            )
        return outcome

    def elapsed_seconds(self) -> int:
        if self.state is None:
            return 0
        return self.state.elapsed_seconds(self._clock)

    def format_elapsed(self) -> str:
        minutes, seconds = divmod(self.elapsed_seconds(), 60)
        return f"{minutes:02d}:{seconds:02d}"


__all__ = ["GameSession", "ScoreEntry"]
