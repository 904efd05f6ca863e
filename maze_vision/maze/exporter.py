"""Batch maze export: description metadata plus hidden/revealed preview images."""

from __future__ import annotations

import argparse
import json
import logging
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from tqdm import tqdm

from maze_vision.base import AbstractMazeGenerator, PathLike
from maze_vision.maze.builder import MazeBuilder, MazeConfig, MazeDescription
from maze_vision.maze.render import DEFAULT_CELL_SIZE, render_maze


@dataclass
class MazeRecord:
    """Serializable metadata for one exported maze."""

    id: str
    config: Dict[str, Any]
    description: Dict[str, Any]
    hidden_image: Optional[str] = None
    revealed_image: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "id": self.id,
            "config": dict(self.config),
            "hidden_image": self.hidden_image,
            "revealed_image": self.revealed_image,
        }
        payload.update(self.description)
        for key, value in self.extra.items():
            if key not in payload:
                payload[key] = value
        return payload


class MazeExporter(AbstractMazeGenerator[MazeRecord]):
    """Generate mazes with a ``MazeBuilder`` and store them on disk."""

    DEFAULT_OUTPUT_DIR: PathLike = "data/maze_vision"

    def __init__(
        self,
        output_dir: Optional[PathLike] = None,
        *,
        config: Optional[MazeConfig] = None,
        seed: Optional[int] = None,
        cell_size: int = DEFAULT_CELL_SIZE,
        preview: bool = True,
        builder: Optional[MazeBuilder] = None,
    ) -> None:
        resolved_output = output_dir if output_dir is not None else self.DEFAULT_OUTPUT_DIR
        super().__init__(resolved_output)
        if cell_size <= 0:
            raise ValueError("cell_size must be positive")
        self.builder = builder if builder is not None else MazeBuilder(config, seed=seed)
        self.cell_size = int(cell_size)
        self.preview = preview
        self.preview_dir = self.output_dir / "previews"
        if self.preview:
            self.preview_dir.mkdir(parents=True, exist_ok=True)

    def next_id(self) -> str:
        return str(uuid.uuid4())

    def create_maze(self, *, maze_id: Optional[str] = None) -> MazeRecord:
        record_id = maze_id or self.next_id()
        description = self.builder.generate()
        hidden_image = revealed_image = None
        if self.preview:
            hidden_path, revealed_path = self.save_previews(record_id, description)
            hidden_image = self.relativize_path(hidden_path)
            revealed_image = self.relativize_path(revealed_path)
        return MazeRecord(
            id=record_id,
            config=self.builder.config.to_dict(),
            description=description.to_dict(),
            hidden_image=hidden_image,
            revealed_image=revealed_image,
        )

    def save_previews(self, record_id: str, description: MazeDescription) -> Tuple[Path, Path]:
        hidden_path = self.preview_dir / f"{record_id}_hidden.png"
        revealed_path = self.preview_dir / f"{record_id}_revealed.png"
        render_maze(description, cell_size=self.cell_size, revealed=False).save(hidden_path)
        render_maze(description, cell_size=self.cell_size, revealed=True).save(revealed_path)
        return hidden_path, revealed_path

    @staticmethod
    def load_config(path: Optional[Path], args: argparse.Namespace) -> MazeConfig:
        """Merge a JSON config file with explicit command line overrides."""

        payload: Dict[str, Any] = {}
        if path is not None:
            if not path.exists():
                raise FileNotFoundError(f"Config file not found: {path}")
            payload = json.loads(path.read_text(encoding="utf-8"))
            if not isinstance(payload, dict):
                raise ValueError("Maze config file must contain a JSON object")
        for key in ("rows", "cols", "fake_wall_chance", "invis_wall_chance"):
            value = getattr(args, key, None)
            if value is not None:
                payload[key] = value
        return MazeConfig.from_dict(payload)

    @classmethod
    def _parse_args(cls, argv: Optional[List[str]] = None) -> argparse.Namespace:
        parser = argparse.ArgumentParser(description="Generate mazes with disguised obstacles")
        parser.add_argument("count", type=int, help="Number of mazes to generate")
        parser.add_argument("--output-dir", type=Path, default=None, help="Where to save assets")
        parser.add_argument("--config", type=Path, default=None, help="JSON file with maze options")
        parser.add_argument("--rows", type=int, default=None, help="Grid rows (normalized to odd, >= 11)")
        parser.add_argument("--cols", type=int, default=None, help="Grid columns (normalized to odd, >= 11)")
        parser.add_argument("--fake-wall-chance", type=float, default=None)
        parser.add_argument("--invis-wall-chance", type=float, default=None)
        parser.add_argument("--cell-size", type=int, default=DEFAULT_CELL_SIZE, help="Preview cell size in pixels")
        parser.add_argument("--seed", type=int, default=None)
        parser.add_argument("--no-preview", action="store_true", help="Skip writing preview images")
        return parser.parse_args(argv)

    @classmethod
    def main(cls, argv: Optional[List[str]] = None) -> None:
        args = cls._parse_args(argv)
        logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
        config = cls.load_config(args.config, args)
        exporter = cls(
            output_dir=args.output_dir,
            config=config,
            seed=args.seed,
            cell_size=args.cell_size,
            preview=not args.no_preview,
        )

        logging.info(f"Generating {args.count} mazes ({config.rows}x{config.cols}) into {exporter.output_dir}")
        records: List[MazeRecord] = []
        for _ in tqdm(range(max(1, args.count)), desc="Mazes"):
            try:
                records.append(exporter.create_random_maze())
            except (OSError, ValueError) as e:
                logging.warning(f"Failed to generate maze: {e}")

        metadata_path = exporter.output_dir / "data.json"
        logging.info(f"Saving metadata for {len(records)} mazes to {metadata_path}")
        exporter.write_metadata(records, metadata_path)


__all__ = ["MazeExporter", "MazeRecord"]


def main(argv: Optional[List[str]] = None) -> None:
    MazeExporter.main(argv)


if __name__ == "__main__":
    MazeExporter.main()
