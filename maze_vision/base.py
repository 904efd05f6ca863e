"""Abstract interface for generators that emit batches of maze records."""

from __future__ import annotations

import dataclasses
import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Generic, Iterable, List, Optional, TypeVar, Union

PathLike = Union[str, Path]
RecordT = TypeVar("RecordT")


class AbstractMazeGenerator(ABC, Generic[RecordT]):
    """Base class for dataset builders that emit maze records."""

    def __init__(self, output_dir: PathLike) -> None:
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    @abstractmethod
    def create_maze(self, *args, **kwargs) -> RecordT:
        """Create one maze record."""

    def create_random_maze(self) -> RecordT:
        return self.create_maze()

    def generate_dataset(
        self,
        count: int,
        *,
        metadata_path: Optional[PathLike] = None,
        append: bool = True,
    ) -> List[RecordT]:
        """Generate a batch of mazes and optionally persist metadata."""
        records = [self.create_random_maze() for _ in range(count)]
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
        """Serialize records to JSON, appending to an existing list if requested."""

        path = Path(metadata_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        existing: List[Dict[str, Any]] = []
        if append and path.exists():
            existing = json.loads(path.read_text(encoding="utf-8"))
            if not isinstance(existing, list):
                raise ValueError(f"Existing metadata at {path} is not a list of records")
        payload = [self.record_to_dict(record) for record in records]
        path.write_text(json.dumps(existing + payload, indent=2), encoding="utf-8")

    def record_to_dict(self, record: RecordT) -> Dict[str, Any]:
        if hasattr(record, "to_dict"):
            return getattr(record, "to_dict")()
        return dataclasses.asdict(record)

    def relativize_path(self, path: Path) -> str:
        """Map an absolute path into the output directory when possible."""

        try:
            return path.relative_to(self.output_dir).as_posix()
        except ValueError:
            return path.as_posix()


__all__ = ["AbstractMazeGenerator", "PathLike"]
