"""Rules of a grid snake game: steering, movement, fruit and collisions."""

from __future__ import annotations

import random
from collections import deque
from typing import Optional

__all__ = ["UP", "DOWN", "LEFT", "RIGHT", "SnakeGame"]

Point = tuple[int, int]

UP: Point = (0, -1)
DOWN: Point = (0, 1)
RIGHT: Point = (1, 0)
LEFT: Point = (-1, 0)

_DIRECTIONS = (UP, DOWN, RIGHT, LEFT)


class SnakeGame:
    """A snake moving on a square board of `squares` x `squares` cells."""

    SQUARES = 16
    START_SPEED = 0.3
    FRUIT_SCORE = 100

    def __init__(self, rng: Optional[random.Random] = None, squares: int = SQUARES) -> None:
        if squares <= 0:
            raise ValueError("board size must be positive")
        self.rng = rng if rng is not None else random.Random()
        self.squares = squares
        self.restart()

    def _random_point(self) -> Point:
        return (self.rng.randrange(self.squares), self.rng.randrange(self.squares))

    def restart(self) -> None:
        """Start a new game."""
        self.head: Point = (0, 0)
        self.direction: Point = RIGHT
        self.body: deque[Point] = deque()
        self.fruit: Point = self._random_point()
        self.score = 0
        self.speed = self.START_SPEED
        self.game_over = False

    def steer(self, direction: Point) -> None:
        """Turn the snake; reversing straight into its own body is ignored."""
        direction = tuple(direction)
        if direction not in _DIRECTIONS:
            raise ValueError(f"not a direction: {direction!r}")
        if self.game_over:
            return
        if direction != (-self.direction[0], -self.direction[1]):
            self.direction = direction

    def step(self) -> None:
        """Move the snake one cell, eating fruit and checking for death."""
        if self.game_over:
            return
        self.body.appendleft(self.head)
        self.head = (self.head[0] + self.direction[0], self.head[1] + self.direction[1])
        if self.head == self.fruit:
            self.fruit = self._random_point()
            self.score += self.FRUIT_SCORE
            self.speed *= 0.9
        else:
            self.body.pop()

        x, y = self.head
        if not (0 <= x < self.squares and 0 <= y < self.squares):
            self.game_over = True
        if self.head in self.body:
            self.game_over = True