"""Tests for the Snake module."""

from snake_leaderboard.snake import Axis, Direction, Snake


class TestDirection:
    def test_unit_deltas(self):
        assert Direction.UP.value == (0, -1)
        assert Direction.DOWN.value == (0, 1)
        assert Direction.LEFT.value == (-1, 0)
        assert Direction.RIGHT.value == (1, 0)

    def test_axes(self):
        assert Direction.LEFT.axis == Direction.RIGHT.axis == Axis.HORIZONTAL
        assert Direction.UP.axis == Direction.DOWN.axis == Axis.VERTICAL


class TestSnake:
    def test_default_creation(self):
        snake = Snake((10, 10))
        assert snake.head == snake.tail == (10, 10)
        assert len(snake) == 1
        assert snake.direction == Direction.RIGHT

    def test_next_head(self):
        snake = Snake((5, 5))
        assert snake.next_head(Direction.RIGHT) == (6, 5)
        assert snake.next_head(Direction.UP) == (5, 4)

    def test_length_one_never_hits_itself(self):
        snake = Snake((5, 5))
        assert not snake.hits_body((5, 5))

    def test_hits_body_excludes_tail(self):
        snake = Snake((5, 5))
        snake.body.extend([(4, 5), (4, 6), (5, 6)])
        assert snake.hits_body((4, 6))
        assert not snake.hits_body((5, 6))
