"""Rules of an asteroids game: ship movement, shooting, splitting rocks."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import Optional

from quadkit.geometry import Vec2

__all__ = ["SHIP_HEIGHT", "SHIP_BASE", "wrap_around", "Ship", "Bullet", "Asteroid", "AsteroidsGame"]

SHIP_HEIGHT = 25.0
SHIP_BASE = 22.0


def wrap_around(pos: Vec2, width: float, height: float) -> Vec2:
    """Move a point that left the screen to the opposite edge."""
    x, y = pos.x, pos.y
    if x > width:
        x = 0.0
    if x < 0.0:
        x = width
    if y > height:
        y = 0.0
    if y < 0.0:
        y = height
    return Vec2(x, y)


@dataclass
class Ship:
    """The player's ship; rot is in degrees, 0 pointing up."""

    pos: Vec2
    rot: float = 0.0
    vel: Vec2 = field(default_factory=Vec2)


@dataclass
class Bullet:
    pos: Vec2
    vel: Vec2
    shot_at: float
    collided: bool = False


@dataclass
class Asteroid:
    pos: Vec2
    vel: Vec2
    rot: float
    rot_speed: float
    size: float
    sides: int
    collided: bool = False


class AsteroidsGame:
    """Ship, bullets and asteroids on a wrapping screen."""

    ASTEROID_COUNT = 10
    SHOT_COOLDOWN = 0.1
    BULLET_LIFETIME = 1.5
    BULLET_SPEED = 7.0
    MAX_SPEED = 5.0
    TURN_SPEED = 5.0

    def __init__(
        self,
        width: float = 800.0,
        height: float = 600.0,
        rng: Optional[random.Random] = None,
        start_time: float = 0.0,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("screen dimensions must be positive")
        self.width = float(width)
        self.height = float(height)
        self.rng = rng if rng is not None else random.Random()
        self.last_shot = start_time
        self.restart()

    @property
    def center(self) -> Vec2:
        return Vec2(self.width / 2.0, self.height / 2.0)

    @property
    def won(self) -> bool:
        """True once every asteroid has been destroyed."""
        return self.game_over and not self.asteroids

    def _random_direction(self) -> Vec2:
        while True:
            candidate = Vec2(self.rng.uniform(-1.0, 1.0), self.rng.uniform(-1.0, 1.0))
            if candidate.length() > 0.0:
                return candidate.normalize()

    def restart(self) -> None:
        """Put the ship in the middle and surround it with fresh asteroids."""
        self.ship = Ship(pos=self.center)
        self.bullets: list[Bullet] = []
        self.game_over = False
        short_side = min(self.width, self.height)
        self.asteroids: list[Asteroid] = [
            Asteroid(
                pos=self.center + self._random_direction() * short_side / 2.0,
                vel=Vec2(self.rng.uniform(-1.0, 1.0), self.rng.uniform(-1.0, 1.0)),
                rot=0.0,
                rot_speed=self.rng.uniform(-2.0, 2.0),
                size=short_side / 10.0,
                sides=6,
            )
            for _ in range(self.ASTEROID_COUNT)
        ]

    def _split(self, asteroid: Asteroid, direction: Vec2) -> Asteroid:
        return Asteroid(
            pos=asteroid.pos,
            vel=direction.normalize() * self.rng.uniform(1.0, 3.0),
            rot=self.rng.uniform(0.0, 360.0),
            rot_speed=self.rng.uniform(-2.0, 2.0),
            size=asteroid.size * 0.8,
            sides=asteroid.sides - 1,
        )

    def update(
        self,
        frame_time: float,
        up: bool = False,
        left: bool = False,
        right: bool = False,
        shoot: bool = False,
    ) -> None:
        """Advance one frame at time frame_time (seconds) with the given controls held."""
        if self.game_over:
            return

        ship = self.ship
        rotation = math.radians(ship.rot)
        heading = Vec2(math.sin(rotation), -math.cos(rotation))

        acc = -ship.vel / 10.0
        if up:
            acc = heading / 3.0

        if shoot and frame_time - self.last_shot > self.SHOT_COOLDOWN:
            self.bullets.append(
                Bullet(
                    pos=ship.pos + heading * SHIP_HEIGHT / 2.0,
                    vel=heading * self.BULLET_SPEED,
                    shot_at=frame_time,
                )
            )
            self.last_shot = frame_time

        if right:
            ship.rot += self.TURN_SPEED
        elif left:
            ship.rot -= self.TURN_SPEED

        ship.vel = ship.vel + acc
        if ship.vel.length() > self.MAX_SPEED:
            ship.vel = ship.vel.normalize() * self.MAX_SPEED
        ship.pos = wrap_around(ship.pos + ship.vel, self.width, self.height)

        for bullet in self.bullets:
            bullet.pos = bullet.pos + bullet.vel
        for asteroid in self.asteroids:
            asteroid.pos = wrap_around(asteroid.pos + asteroid.vel, self.width, self.height)
            asteroid.rot += asteroid.rot_speed

        self.bullets = [b for b in self.bullets if b.shot_at + self.BULLET_LIFETIME > frame_time]

        new_asteroids: list[Asteroid] = []
        for asteroid in self.asteroids:
            if (asteroid.pos - ship.pos).length() < asteroid.size + SHIP_HEIGHT / 3.0:
                self.game_over = True
                break
            for bullet in self.bullets:
                if (asteroid.pos - bullet.pos).length() < asteroid.size:
                    asteroid.collided = True
                    bullet.collided = True
                    if asteroid.sides > 4:
                        new_asteroids.append(self._split(asteroid, Vec2(bullet.vel.y, -bullet.vel.x)))
                        new_asteroids.append(self._split(asteroid, Vec2(-bullet.vel.y, bullet.vel.x)))
                    break

        self.bullets = [
            b
            for b in self.bullets
            if b.shot_at + self.BULLET_LIFETIME > frame_time and not b.collided
        ]
        self.asteroids = [a for a in self.asteroids if not a.collided]
        self.asteroids.extend(new_asteroids)

        if not self.asteroids:
            self.game_over = True