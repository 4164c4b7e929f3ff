import random
import unittest

from invisible_maze import GameSession, Mode, OutcomeKind, path_to_moves, shortest_path


class FakeClock:
    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


class GameSessionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.clock = FakeClock()
        self.session = GameSession(rng=random.Random(3), clock=self.clock)

    def _solve(self):
        maze = self.session.maze
        to_key = shortest_path(maze.walls, maze.start, maze.key, maze.size)
        to_door = shortest_path(maze.walls, maze.key, maze.door, maze.size)
        return path_to_moves(to_key) + path_to_moves(to_door)

    def test_move_before_start_is_ignored(self) -> None:
        self.assertFalse(self.session.is_playing)
        self.assertIs(self.session.move("up").kind, OutcomeKind.NONE)

    def test_start_builds_preset_level(self) -> None:
        maze = self.session.start()
        self.assertEqual(self.session.level, 1)
        self.assertEqual(maze.size, 3)
        self.assertEqual(maze.wall_count, 2)
        self.assertEqual(self.session.state.position, maze.start)
        self.assertEqual(self.session.state.attempts, 0)
        self.assertTrue(self.session.is_playing)

    def test_level_counter(self) -> None:
        self.session.start()
        self.session.next_level()
        self.session.next_level()
        self.assertEqual(self.session.level, 3)
        self.session.restart()
        self.assertEqual(self.session.level, 3)
        self.session.start()
        self.assertEqual(self.session.level, 1)

    def test_new_level_clears_revealed_walls(self) -> None:
        maze = self.session.start()
        self.session.state.reveal(next(iter(maze.walls)))
        self.session.state.attempts = 4
        self.session.next_level()
        self.assertEqual(self.session.state.revealed, set())
        self.assertEqual(self.session.state.attempts, 0)
        self.assertFalse(self.session.state.has_key)

    def test_restart_clears_revealed_walls_and_attempts(self) -> None:
        maze = self.session.start()
        self.session.next_level()
        self.session.state.reveal(next(iter(self.session.maze.walls)))
        self.session.state.attempts = 2
        self.session.state.has_key = True
        self.session.restart()
        self.assertEqual(self.session.level, 2)
        self.assertEqual(self.session.state.revealed, set())
        self.assertEqual(self.session.state.attempts, 0)
        self.assertFalse(self.session.state.has_key)
        self.assertEqual(self.session.state.position, maze.start)
        self.assertTrue(self.session.is_playing)

    def test_completed_levels_are_kept_in_score_history(self) -> None:
        self.assertEqual(self.session.scores, [])
        self.session.set_mode("challenge")
        self.session.start()
        for move in self._solve():
            self.session.move(move)
        self.session.select_difficulty("medium")
        self.session.next_level()
        self.clock.now += 30
        for move in self._solve():
            self.session.move(move)

        self.assertEqual(len(self.session.scores), 2)
        first, second = self.session.scores
        self.assertEqual((first.difficulty, first.mode, first.level, first.score), ("EASY", "CHALLENGE", 1, 1000))
        self.assertEqual((second.difficulty, second.level, second.score), ("MEDIUM", 2, 850))
        self.assertEqual(second.elapsed_seconds, 30)
        self.assertEqual(second.to_dict()["attempts"], 0)

        self.session.restart()
        self.assertEqual(len(self.session.scores), 2)

    def test_difficulty_and_mode_selection(self) -> None:
        self.session.select_difficulty("hard")
        self.session.set_mode("challenge")
        maze = self.session.start()
        self.assertEqual(maze.size, 5)
        self.assertIs(self.session.state.mode, Mode.CHALLENGE)
        with self.assertRaises(ValueError):
            self.session.select_difficulty("impossible")
        with self.assertRaises(ValueError):
            self.session.set_mode("arcade")

    def test_timer_text(self) -> None:
        self.assertEqual(self.session.format_elapsed(), "00:00")
        self.session.start()
        self.clock.now += 75.9
        self.assertEqual(self.session.elapsed_seconds(), 75)
        self.assertEqual(self.session.format_elapsed(), "01:15")

    def test_solving_every_difficulty_records_score(self) -> None:
        for name in ("EASY", "MEDIUM", "HARD"):
            self.session.select_difficulty(name)
            for _ in range(5):
                self.session.start()
                outcomes = [self.session.move(move) for move in self._solve()]
                self.assertIs(outcomes[-1].kind, OutcomeKind.LEVEL_COMPLETE)
                self.assertFalse(self.session.is_playing)
                self.assertEqual(self.session.last_score, 1000)


if __name__ == "__main__":
    unittest.main()
