"""Replay recorded move sequences against a stored level pack."""

from __future__ import annotations

import argparse
import json
import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .base import AbstractLevelEvaluator
from .generator import LevelRecord, Maze, generate
from .grid import Direction, Wall
from .navigation import Mode, OutcomeKind, RunState, RunStatus, attempt_move

logger = logging.getLogger(__name__)


@dataclass
class ReplayResult:
    level_id: str
    completed: bool
    failed: bool
    solvable: bool
    reproducible: bool
    attempts: int
    has_key: bool
    final_position: Tuple[int, int]
    revealed_walls: List[Wall]
    moves_applied: int
    score: Optional[int]
    message: str

    def to_dict(self) -> dict:
        return {
            "level_id": self.level_id,
            "completed": self.completed,
            "failed": self.failed,
            "solvable": self.solvable,
            "reproducible": self.reproducible,
            "attempts": self.attempts,
            "has_key": self.has_key,
            "final_position": list(self.final_position),
            "revealed_walls": [wall.to_list() for wall in self.revealed_walls],
            "moves_applied": self.moves_applied,
            "score": self.score,
            "message": self.message,
        }


class ReplayEvaluator(AbstractLevelEvaluator[LevelRecord]):
    """Check stored levels and score a sequence of moves played on them."""

    def parse_record(self, payload: Dict[str, Any]) -> LevelRecord:
        record = LevelRecord.from_dict(payload)
        # Building the maze enforces its invariants before any replay.
        record.to_maze()
        return record

    def is_reproducible(self, record: LevelRecord, maze: Maze) -> bool:
        """True when regenerating from the stored seed yields the stored layout."""

        regenerated = generate(record.size, record.target_walls, random.Random(record.seed))
        return regenerated.walls == maze.walls and regenerated.key == maze.key

    def evaluate(
        self,
        level_id: str,
        moves: Sequence[Direction],
        *,
        mode: Mode = Mode.PRACTICE,
        elapsed_seconds: int = 0,
    ) -> ReplayResult:
        record = self.get_record(level_id)
        maze = record.to_maze()
        solvable = maze.is_solvable()
        reproducible = self.is_reproducible(record, maze)

        def clock() -> float:
            return float(elapsed_seconds)

        state = RunState.start(maze, mode, clock=lambda: 0.0)
        score: Optional[int] = None
        applied = 0
        for raw in moves:
            if not state.is_playing:
                break
            outcome = attempt_move(maze, state, Direction.parse(raw), clock)
            applied += 1
            if outcome.kind is OutcomeKind.LEVEL_COMPLETE:
                score = outcome.score

        completed = state.status is RunStatus.LEVEL_COMPLETE
        failed = state.status is RunStatus.LEVEL_FAILED
        if not solvable:
            message = "Stored level is not solvable."
        elif completed:
            message = "Moves reach the key and then the door."
        elif failed:
            message = "Run ended on a wall collision in challenge mode."
        elif state.has_key:
            message = "Key collected but the door was not reached."
        else:
            message = "Key was not collected."
        if not reproducible:
            logger.warning("Level %s does not regenerate from seed %d", level_id, record.seed)

        return ReplayResult(
            level_id=level_id,
            completed=completed,
            failed=failed,
            solvable=solvable,
            reproducible=reproducible,
            attempts=state.attempts,
            has_key=state.has_key,
            final_position=tuple(state.position),
            revealed_walls=sorted(state.revealed, key=lambda wall: wall.key),
            moves_applied=applied,
            score=score,
            message=message,
        )


__all__ = ["ReplayEvaluator", "ReplayResult"]


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Replay moves on a stored invisible-maze level")
    parser.add_argument("metadata", type=Path, help="Path to levels.json")
    parser.add_argument("level_id", type=str, help="Identifier of the level to replay")
    parser.add_argument("moves", nargs="*", help="Moves such as up down left right")
    parser.add_argument("--mode", choices=[mode.value for mode in Mode], default=Mode.PRACTICE.value)
    parser.add_argument("--elapsed", type=int, default=0, help="Seconds to charge when scoring")
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )
    evaluator = ReplayEvaluator(args.metadata)
    result = evaluator.evaluate(
        args.level_id,
        [Direction.parse(move) for move in args.moves],
        mode=Mode.parse(args.mode),
        elapsed_seconds=args.elapsed,
    )
    print(json.dumps(result.to_dict(), indent=2))


if __name__ == "__main__":
    main()
