#!/usr/bin/env python3
"""Generate levels for every difficulty tier into one pack sorted by difficulty."""

from __future__ import annotations

import argparse
import json
import random
import sys
from pathlib import Path
from typing import List

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from invisible_maze import DIFFICULTIES, LevelGenerator


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--per-difficulty",
        type=int,
        default=10,
        help="Number of levels to generate for each difficulty tier",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("data/levels"),
        help="Directory to write the level pack into",
    )
    parser.add_argument(
        "--metadata",
        type=Path,
        default=None,
        help="Optional path for the difficulty-sorted metadata JSON",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Optional RNG seed; each tier derives its own seed from it",
    )
    return parser.parse_args()


def main() -> None:
    args = _parse_args()
    master = random.Random(args.seed)
    records: List[dict] = []
    tiers = sorted(DIFFICULTIES.values(), key=lambda tier: (tier.size, tier.walls))
    for tier in tiers:
        generator = LevelGenerator(
            output_dir=args.output_dir,
            difficulty=tier.name,
            seed=master.randrange(2**32),
        )
        for index in range(1, args.per_difficulty + 1):
            record = generator.create_random_level()
            if not record.to_maze().is_solvable():
                raise RuntimeError(f"Generated unsolvable level {record.id}")
            records.append(record.to_dict())
            print(
                f"[{tier.name} {index}/{args.per_difficulty}] generated {record.id} "
                f"({len(record.walls)}/{record.target_walls} walls)"
            )

    metadata_path = args.metadata or (args.output_dir / "levels.json")
    metadata_path.parent.mkdir(parents=True, exist_ok=True)
    metadata_path.write_text(json.dumps(records, indent=2), encoding="utf-8")
    print(f"Wrote {len(records)} levels to {metadata_path}")


if __name__ == "__main__":
    main()
