import unittest

from invisible_maze import Cell, Direction, Orientation, Wall, path_to_moves, reachable, shortest_path


class ReachabilityTests(unittest.TestCase):
    def test_open_grid_connects_opposite_corners(self) -> None:
        self.assertTrue(reachable(set(), Cell(0, 3), Cell(3, 0), 4))

    def test_same_cell_is_reachable_even_when_enclosed(self) -> None:
        walls = {Wall(0, 0, Orientation.RIGHT), Wall(0, 0, Orientation.BOTTOM)}
        self.assertTrue(reachable(walls, Cell(0, 0), Cell(0, 0), 3))

    def test_enclosed_corner_is_unreachable(self) -> None:
        walls = {Wall(0, 0, Orientation.RIGHT), Wall(0, 0, Orientation.BOTTOM)}
        self.assertFalse(reachable(walls, Cell(2, 2), Cell(0, 0), 3))
        self.assertFalse(reachable(walls, Cell(0, 0), Cell(2, 2), 3))

    def test_full_column_of_walls_splits_the_grid(self) -> None:
        walls = {Wall(0, y, Orientation.RIGHT) for y in range(3)}
        self.assertFalse(reachable(walls, Cell(0, 0), Cell(2, 0), 3))
        self.assertTrue(reachable(walls, Cell(0, 0), Cell(0, 2), 3))
        self.assertTrue(reachable(walls, Cell(1, 2), Cell(2, 0), 3))

    def test_accepts_plain_tuples(self) -> None:
        self.assertTrue(reachable(frozenset(), (0, 1), (1, 0), 2))


class ShortestPathTests(unittest.TestCase):
    def test_path_detours_around_wall(self) -> None:
        walls = {Wall(0, 2, Orientation.RIGHT)}
        path = shortest_path(walls, Cell(0, 2), Cell(1, 2), 3)
        self.assertEqual(path, [Cell(0, 2), Cell(0, 1), Cell(1, 1), Cell(1, 2)])
        self.assertEqual(path_to_moves(path), [Direction.UP, Direction.RIGHT, Direction.DOWN])

    def test_unreachable_target_gives_empty_path(self) -> None:
        walls = {Wall(0, y, Orientation.RIGHT) for y in range(3)}
        self.assertEqual(shortest_path(walls, Cell(0, 0), Cell(2, 2), 3), [])

    def test_path_to_same_cell(self) -> None:
        self.assertEqual(shortest_path(set(), Cell(1, 1), Cell(1, 1), 3), [Cell(1, 1)])
        self.assertEqual(path_to_moves([Cell(1, 1)]), [])

    def test_non_adjacent_cells_are_rejected(self) -> None:
        with self.assertRaises(ValueError):
            path_to_moves([Cell(0, 0), Cell(1, 1)])


if __name__ == "__main__":
    unittest.main()
