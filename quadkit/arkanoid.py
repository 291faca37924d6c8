"""Rules of a small brick-breaker game in a 20x20 unit playfield."""

from __future__ import annotations

from quadkit.geometry import Rect

__all__ = ["Breakout"]


class Breakout:
    """Paddle, ball and a 10x10 wall of blocks."""

    BLOCKS_W = 10
    BLOCKS_H = 10
    SCR_W = 20.0
    SCR_H = 20.0
    PLATFORM_WIDTH = 5.0
    PLATFORM_HEIGHT = 0.2
    PLATFORM_SPEED = 3.0

    def __init__(self) -> None:
        self.blocks = [[True] * self.BLOCKS_W for _ in range(self.BLOCKS_H)]
        self.ball_x = 12.0
        self.ball_y = 7.0
        self.dx = 3.5
        self.dy = -3.5
        self.platform_x = 10.0
        self.stick = True

    @property
    def blocks_remaining(self) -> int:
        return sum(row.count(True) for row in self.blocks)

    def block_rect(self, i: int, j: int) -> Rect:
        """Hit area of the block in column i, row j."""
        block_w = self.SCR_W / self.BLOCKS_W
        block_h = 7.0 / self.BLOCKS_H
        return Rect(i * block_w + 0.05, j * block_h + 0.05, block_w, block_h)

    def update(self, dt: float, left: bool = False, right: bool = False, launch: bool = False) -> None:
        """Advance the game by dt seconds with the given controls held."""
        half = self.PLATFORM_WIDTH / 2.0
        if right and self.platform_x < self.SCR_W - half:
            self.platform_x += self.PLATFORM_SPEED * dt
        if left and self.platform_x > half:
            self.platform_x -= self.PLATFORM_SPEED * dt

        if not self.stick:
            self.ball_x += self.dx * dt
            self.ball_y += self.dy * dt
        else:
            self.ball_x = self.platform_x
            self.ball_y = self.SCR_H - 0.5
            self.stick = not launch

        if self.ball_x <= 0.0 or self.ball_x > self.SCR_W:
            self.dx = -self.dx
        on_platform = (
            self.ball_y > self.SCR_H - self.PLATFORM_HEIGHT - 0.15 / 2.0
            and self.platform_x - half <= self.ball_x <= self.platform_x + half
        )
        if self.ball_y <= 0.0 or on_platform:
            self.dy = -self.dy
        if self.ball_y >= self.SCR_H:
            self.ball_y = 10.0
            self.dy = -abs(self.dy)
            self.stick = True

        for j, row in enumerate(self.blocks):
            for i, alive in enumerate(row):
                if not alive:
                    continue
                rect = self.block_rect(i, j)
                if rect.left <= self.ball_x < rect.right and rect.top <= self.ball_y < rect.bottom:
                    self.dy = -self.dy
                    row[i] = False