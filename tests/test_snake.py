"""Tests for the Snake module."""

from collections import deque

import pytest

from snake_rules.difficulty import Difficulty
from snake_rules.errors import InvalidInputError
from snake_rules.grid import Tile
from snake_rules.items import Apple, GoldenApple, PoisonedApple
from snake_rules.snake import Direction, Snake


class TestDirection:
    def test_key_codes(self):
        assert Direction.from_key(37) is Direction.LEFT
        assert Direction.from_key(38) is Direction.UP
        assert Direction.from_key(39) is Direction.RIGHT
        assert Direction.from_key(40) is Direction.DOWN
        assert Direction.from_key(87) is Direction.UP

    def test_unbound_key(self):
        with pytest.raises(InvalidInputError, match="Unbound key"):
            Direction.from_key(13)

    def test_unhashable_key(self):
        with pytest.raises(InvalidInputError):
            Direction.from_key([38])

    def test_perpendicular(self):
        assert Direction.RIGHT.is_perpendicular(Direction.UP)
        assert Direction.UP.is_perpendicular(Direction.LEFT)
        assert not Direction.RIGHT.is_perpendicular(Direction.LEFT)
        assert not Direction.RIGHT.is_perpendicular(Direction.RIGHT)
        assert not Direction.UP.is_perpendicular(Direction.DOWN)


class TestSnakeInit:
    def test_default_creation(self):
        snake = Snake(Tile(5, 5))
        assert snake.head == Tile(5, 5)
        assert len(snake) == 3
        assert snake.alive
        assert snake.direction == Direction.RIGHT
        assert snake.score == 0
        assert snake.starter_length == 3

    def test_body_extends_opposite_to_direction(self):
        snake = Snake(Tile(5, 5), Direction.RIGHT, length=3)
        assert list(snake.body) == [Tile(5, 5), Tile(4, 5), Tile(3, 5)]

    def test_body_extends_up(self):
        snake = Snake(Tile(5, 5), Direction.UP, length=3)
        assert list(snake.body) == [Tile(5, 5), Tile(5, 6), Tile(5, 7)]

    def test_baseline_score(self):
        assert Snake(Tile(5, 5), score=120).score == 120

    def test_minimum_length(self):
        with pytest.raises(ValueError, match="at least 1"):
            Snake(Tile(0, 0), length=0)


class TestSnakeMovement:
    def test_next_head(self):
        snake = Snake(Tile(5, 5), Direction.RIGHT)
        assert snake.next_head() == Tile(6, 5)

    def test_move_without_growth(self):
        snake = Snake(Tile(5, 5), Direction.RIGHT, length=3)
        vacated = snake.move()
        assert snake.head == Tile(6, 5)
        assert len(snake) == 3
        assert vacated == Tile(3, 5)

    def test_scheduled_growth(self):
        snake = Snake(Tile(5, 5), Direction.RIGHT, length=2)
        snake.schedule_growth(2)
        assert snake.move() is None
        assert len(snake) == 3
        snake.move()
        assert len(snake) == 4
        vacated = snake.move()
        assert len(snake) == 4
        assert vacated is not None

    def test_set_direction_overwrites(self):
        snake = Snake(Tile(5, 5), Direction.RIGHT)
        snake.set_direction(Direction.DOWN)
        snake.move()
        assert snake.head == Tile(5, 6)


class TestSnakeCollision:
    def test_contains_tile(self):
        snake = Snake(Tile(5, 5), Direction.RIGHT, length=3)
        assert snake.contains_tile(Tile(5, 5))
        assert snake.contains_tile(Tile(4, 5))
        assert not snake.contains_tile(Tile(0, 0))

    def test_running_into_body_kills(self):
        snake = Snake(Tile(5, 5), Direction.RIGHT, length=5)
        for direction in (Direction.DOWN, Direction.LEFT, Direction.UP):
            snake.set_direction(direction)
            snake.move()
        assert not snake.alive
        # Position is kept for inspection.
        assert snake.head == Tile(4, 5)

    def test_following_the_tail_is_safe(self):
        snake = Snake(Tile(1, 1), length=4)
        snake.body = deque([Tile(1, 0), Tile(0, 0), Tile(0, 1), Tile(1, 1)])
        snake.set_direction(Direction.DOWN)
        snake.move()
        assert snake.alive
        assert snake.head == Tile(1, 1)

    def test_self_collision(self):
        snake = Snake(Tile(5, 5), Direction.RIGHT, length=1)
        assert not snake.self_collision()
        snake.body.appendleft(Tile(5, 5))
        assert snake.self_collision()


class TestSnakeItems:
    def test_apple(self):
        snake = Snake(Tile(5, 5))
        delta = snake.add_item(Apple(Tile(5, 5)), Difficulty.SLOW)
        assert delta == 10
        assert snake.score == 10
        assert snake.grow_pending == 1
        assert snake.starter_length == 4

    def test_golden_apple_scaled_by_level(self):
        snake = Snake(Tile(5, 5))
        delta = snake.add_item(GoldenApple(Tile(5, 5)), Difficulty.MEDIUM)
        assert delta == 100
        assert snake.grow_pending == 3
        assert snake.starter_length == 6

    def test_poisoned_apple(self):
        snake = Snake(Tile(5, 5), length=3, score=30)
        delta = snake.add_item(PoisonedApple(Tile(5, 5)), Difficulty.FAST)
        assert delta == -20
        assert snake.score == 10
        assert len(snake) == 1
        assert snake.starter_length == 1

    def test_poison_respects_length_floor(self):
        snake = Snake(Tile(5, 5), length=2)
        snake.add_item(PoisonedApple(Tile(5, 5)), Difficulty.SLOW)
        assert len(snake) == 1
        assert snake.starter_length == 1

    def test_poison_score_floor(self):
        snake = Snake(Tile(5, 5), score=5)
        delta = snake.add_item(PoisonedApple(Tile(5, 5)), Difficulty.SLOW)
        assert snake.score == 0
        assert delta == -5

    def test_poison_cancels_pending_growth_first(self):
        snake = Snake(Tile(5, 5), length=3)
        snake.schedule_growth(1)
        snake.add_item(PoisonedApple(Tile(5, 5)), Difficulty.SLOW)
        assert snake.grow_pending == 0
        assert len(snake) == 2


class TestSnakeSerialization:
    def test_to_dict(self):
        snake = Snake(Tile(5, 5), Direction.RIGHT, length=2, score=7)
        d = snake.to_dict()
        assert d["body"] == [[5, 5], [4, 5]]
        assert d["direction"] == "RIGHT"
        assert d["score"] == 7
        assert d["alive"] is True
