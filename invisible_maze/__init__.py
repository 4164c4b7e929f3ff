"""Invisible maze: solvable wall layouts revealed one collision at a time."""

__all__ = [
    "AbstractLevelGenerator",
    "AbstractLevelEvaluator",
    "Cell",
    "Direction",
    "Grid",
    "Orientation",
    "Wall",
    "wall_mask",
    "reachable",
    "shortest_path",
    "path_to_moves",
    "DIFFICULTIES",
    "Difficulty",
    "get_difficulty",
    "Maze",
    "LevelRecord",
    "LevelGenerator",
    "generate",
    "Mode",
    "MoveOutcome",
    "OutcomeKind",
    "RunState",
    "RunStatus",
    "attempt_move",
    "compute_score",
    "GameSession",
    "ScoreEntry",
    "ReplayEvaluator",
    "ReplayResult",
]

from .base import AbstractLevelGenerator, AbstractLevelEvaluator
from .grid import Cell, Direction, Grid, Orientation, Wall, wall_mask
from .connectivity import reachable, shortest_path, path_to_moves
from .difficulty import DIFFICULTIES, Difficulty, get_difficulty
from .generator import Maze, LevelRecord, LevelGenerator, generate
from .navigation import (
    Mode,
    MoveOutcome,
    OutcomeKind,
    RunState,
    RunStatus,
    attempt_move,
    compute_score,
)
from .session import GameSession, ScoreEntry
from .evaluator import ReplayEvaluator, ReplayResult
