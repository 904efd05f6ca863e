import math
import random
import unittest

from maze_vision.maze.carver import carve
from maze_vision.maze.grid import Grid
from maze_vision.maze.obstacles import Obstacle, ObstacleClassifier, ObstacleType


def _carved_grid(seed: int, rows: int = 15, cols: int = 15) -> Grid:
    grid = Grid(rows, cols)
    carve(grid, (1, 1), random.Random(seed))
    return grid


class ObstacleClassifierTests(unittest.TestCase):
    def test_zero_chances_place_only_solid_walls(self) -> None:
        grid = _carved_grid(1)
        result = ObstacleClassifier(0.0, 0.0, random.Random(1)).classify(grid, (1, 1))
        self.assertEqual(result.fake_walls, [])
        self.assertEqual(result.invisible_walls, [])
        self.assertEqual(len(result.solid), len(grid.wall_cells()))
        self.assertEqual(result.diagnostics, [])

    def test_border_walls_are_never_fake(self) -> None:
        grid = _carved_grid(2)
        result = ObstacleClassifier(1.0, 0.0, random.Random(2)).classify(grid, (1, 1))
        self.assertTrue(result.fake_walls)
        for obstacle in result.fake_walls:
            self.assertFalse(grid.is_border(*obstacle.cell))
        self.assertTrue(all(grid.is_border(*o.cell) for o in result.solid))

    def test_invisible_wall_count_is_exact(self) -> None:
        for chance in (0.05, 0.1, 0.3):
            grid = _carved_grid(5, rows=21, cols=25)
            result = ObstacleClassifier(0.15, chance, random.Random(5)).classify(grid, (1, 1))
            interior_paths = [cell for cell in grid.path_cells() if grid.is_interior(*cell)]
            expected = math.floor((len(interior_paths) - 1) * chance)
            self.assertEqual(len(result.invisible_walls), expected)

    def test_invisible_walls_sit_on_paths_away_from_entry(self) -> None:
        grid = _carved_grid(7)
        result = ObstacleClassifier(0.0, 0.3, random.Random(7)).classify(grid, (1, 1))
        cells = [o.cell for o in result.invisible_walls]
        self.assertEqual(len(cells), len(set(cells)))
        for cell in cells:
            self.assertTrue(grid.is_path(*cell))
            self.assertNotEqual(cell, (1, 1))

    def test_everything_starts_hidden(self) -> None:
        grid = _carved_grid(9)
        result = ObstacleClassifier(0.3, 0.3, random.Random(9)).classify(grid, (1, 1))
        for obstacle in result.fake_walls + result.invisible_walls:
            self.assertFalse(obstacle.revealed)
            self.assertTrue(obstacle.attached)

    def test_same_seed_gives_same_classification(self) -> None:
        grid = _carved_grid(4)
        first = ObstacleClassifier(0.2, 0.2, random.Random(99)).classify(grid, (1, 1))
        second = ObstacleClassifier(0.2, 0.2, random.Random(99)).classify(grid, (1, 1))
        self.assertEqual([o.cell for o in first.fake_walls], [o.cell for o in second.fake_walls])
        self.assertEqual([o.cell for o in first.invisible_walls], [o.cell for o in second.invisible_walls])

    def test_out_of_range_chance_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            ObstacleClassifier(1.5, 0.1, random.Random(0))
        with self.assertRaises(ValueError):
            ObstacleClassifier(0.1, -0.1, random.Random(0))

    def test_missing_template_skips_placement_with_diagnostic(self) -> None:
        grid = _carved_grid(3)
        templates = {ObstacleType.SOLID: Obstacle, ObstacleType.INVISIBLE_WALL: None}
        with self.assertLogs(level="WARNING"):
            result = ObstacleClassifier(0.0, 0.3, random.Random(3), templates=templates).classify(grid, (1, 1))
        self.assertEqual(result.invisible_walls, [])
        self.assertTrue(result.diagnostics)
        self.assertIn("invisible_wall", result.diagnostics[0])


class ObstacleBehaviourTests(unittest.TestCase):
    def test_fake_wall_reveal_is_visual_only(self) -> None:
        wall = Obstacle((2, 3), ObstacleType.FAKE_WALL)
        self.assertFalse(wall.blocks_movement)
        self.assertTrue(wall.looks_solid)
        wall.set_revealed(True)
        self.assertFalse(wall.blocks_movement)
        self.assertFalse(wall.looks_solid)

    def test_invisible_wall_reveal_is_visual_only(self) -> None:
        wall = Obstacle((3, 3), ObstacleType.INVISIBLE_WALL)
        self.assertTrue(wall.blocks_movement)
        self.assertFalse(wall.is_visible)
        wall.set_revealed(True)
        self.assertTrue(wall.blocks_movement)
        self.assertTrue(wall.is_visible)

    def test_solid_wall(self) -> None:
        wall = Obstacle((0, 0), ObstacleType.SOLID)
        self.assertTrue(wall.blocks_movement)
        self.assertTrue(wall.looks_solid)
        self.assertEqual(wall.world_position, (0.0, 0.0, 0.0))
        self.assertEqual(wall.to_dict(), {"cell": [0, 0], "type": "solid", "revealed": False})

    def test_detach_hides(self) -> None:
        wall = Obstacle((1, 2), ObstacleType.FAKE_WALL, revealed=True)
        wall.detach()
        self.assertFalse(wall.attached)
        self.assertFalse(wall.revealed)


if __name__ == "__main__":
    unittest.main()
