"""Level-pack persistence shared by the level builder and the replay evaluator."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Generic, Iterable, List, Optional, TypeVar, Union

PathLike = Union[str, Path]
RecordT = TypeVar("RecordT")

METADATA_FILENAME = "levels.json"


def read_level_file(path: PathLike) -> List[Dict[str, Any]]:
    """Load a level pack and check that every entry is an object with an id."""

    entries = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(entries, list):
        raise ValueError(f"Level pack {path} must hold a list of levels")
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ValueError(f"Level #{index} in {path} is not an object")
        if not entry.get("id"):
            raise ValueError(f"Level #{index} in {path} has no 'id'")
    return entries


def _find_duplicate(ids: Iterable[str]) -> Optional[str]:
    seen = set()
    for level_id in ids:
        if level_id in seen:
            return level_id
        seen.add(level_id)
    return None


class AbstractLevelGenerator(ABC, Generic[RecordT]):
    """Builds levels and appends them to a ``levels.json`` pack."""

    def __init__(self, output_dir: PathLike) -> None:
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    @property
    def metadata_path(self) -> Path:
        return self.output_dir / METADATA_FILENAME

    @abstractmethod
    def create_level(self, *args, **kwargs) -> RecordT:
        """Create a level from explicit parameters."""

    @abstractmethod
    def create_random_level(self) -> RecordT:
        """Create a single randomized level."""

    def generate_pack(
        self,
        count: int,
        *,
        metadata_path: Optional[PathLike] = None,
        append: bool = True,
    ) -> List[RecordT]:
        if count < 0:
            raise ValueError("count must be non-negative")
        records = [self.create_random_level() for _ in range(count)]
        if metadata_path is not None:
            self.write_metadata(records, metadata_path, append=append)
        return records

    def write_metadata(
        self,
        records: Iterable[RecordT],
        metadata_path: PathLike,
        *,
        append: bool = True,
    ) -> None:
        """Write ``records`` to the pack, keeping earlier levels when appending.

        Level ids must stay unique across the whole pack; a clash raises
        ``ValueError`` and leaves the file untouched.
        """

        path = Path(metadata_path)
        existing = read_level_file(path) if append and path.exists() else []
        payload = [record.to_dict() for record in records]
        duplicate = _find_duplicate(str(entry["id"]) for entry in existing + payload)
        if duplicate is not None:
            raise ValueError(f"Level id '{duplicate}' already present in {path}")
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(existing + payload, indent=2), encoding="utf-8")


class AbstractLevelEvaluator(ABC, Generic[RecordT]):
    """Loads a level pack up front, parsing every entry into a record."""

    def __init__(self, metadata_path: PathLike) -> None:
        self.metadata_path = Path(metadata_path)
        if not self.metadata_path.exists():
            raise FileNotFoundError(f"Metadata file not found: {self.metadata_path}")
        self._records = self._load_metadata()

    @property
    def records(self) -> Dict[str, RecordT]:
        return self._records

    @abstractmethod
    def parse_record(self, payload: Dict[str, Any]) -> RecordT:
        """Turn one JSON entry into a record, raising ValueError if it is malformed."""

    def _load_metadata(self) -> Dict[str, RecordT]:
        entries = read_level_file(self.metadata_path)
        duplicate = _find_duplicate(str(entry["id"]) for entry in entries)
        if duplicate is not None:
            raise ValueError(f"Level id '{duplicate}' appears more than once in {self.metadata_path}")
        return {str(entry["id"]): self.parse_record(entry) for entry in entries}

    def get_record(self, level_id: str) -> RecordT:
        try:
            return self._records[level_id]
        except KeyError as exc:
            raise KeyError(f"Level id '{level_id}' not found in {self.metadata_path}") from exc

    @abstractmethod
    def evaluate(self, level_id: str, *args, **kwargs):
        """Evaluate a candidate play-through of the given level."""


__all__ = [
    "AbstractLevelGenerator",
    "AbstractLevelEvaluator",
    "METADATA_FILENAME",
    "PathLike",
    "read_level_file",
]
