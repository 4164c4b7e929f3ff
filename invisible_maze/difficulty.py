"""Difficulty presets: grid size and target wall count per tier."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class Difficulty:
    name: str
    size: int
    walls: int

    def to_dict(self) -> dict:
        return {"name": self.name, "size": self.size, "walls": self.walls}


DIFFICULTIES: Dict[str, Difficulty] = {
    "EASY": Difficulty("EASY", size=3, walls=2),
    "MEDIUM": Difficulty("MEDIUM", size=4, walls=6),
    "HARD": Difficulty("HARD", size=5, walls=12),
}


def get_difficulty(name: str) -> Difficulty:
    try:
        return DIFFICULTIES[str(name).upper()]
    except KeyError as exc:
        choices = ", ".join(DIFFICULTIES)
        raise ValueError(f"Unknown difficulty '{name}' (expected one of: {choices})") from exc


__all__ = ["DIFFICULTIES", "Difficulty", "get_difficulty"]
