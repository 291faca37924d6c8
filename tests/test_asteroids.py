import math
import random

import pytest

from quadkit.asteroids import (
    SHIP_HEIGHT,
    Asteroid,
    AsteroidsGame,
    Bullet,
    wrap_around,
)
from quadkit.geometry import Vec2


def far_rock() -> Asteroid:
    return Asteroid(pos=Vec2(5.0, 5.0), vel=Vec2(0.0, 0.0), rot=0.0, rot_speed=0.0, size=4.0, sides=6)


@pytest.fixture
def game() -> AsteroidsGame:
    g = AsteroidsGame(800.0, 600.0, random.Random(7))
    g.asteroids = [far_rock()]
    return g


def test_wrap_around_edges():
    assert wrap_around(Vec2(801.0, 50.0), 800.0, 600.0) == Vec2(0.0, 50.0)
    assert wrap_around(Vec2(-1.0, 50.0), 800.0, 600.0) == Vec2(800.0, 50.0)
    assert wrap_around(Vec2(50.0, 601.0), 800.0, 600.0) == Vec2(50.0, 0.0)
    assert wrap_around(Vec2(50.0, -3.0), 800.0, 600.0) == Vec2(50.0, 600.0)


def test_wrap_around_inside_unchanged():
    assert wrap_around(Vec2(10.0, 20.0), 800.0, 600.0) == Vec2(10.0, 20.0)


def test_invalid_screen():
    with pytest.raises(ValueError):
        AsteroidsGame(0.0, 600.0)


def test_restart_layout():
    g = AsteroidsGame(800.0, 600.0, random.Random(1))
    assert len(g.asteroids) == AsteroidsGame.ASTEROID_COUNT
    for rock in g.asteroids:
        assert rock.sides == 6
        assert rock.size == pytest.approx(600.0 / 10.0)
        assert (rock.pos - g.center).length() == pytest.approx(300.0)
    assert g.ship.pos == g.center
    assert not g.game_over


def test_thrust_moves_ship_forward(game):
    start = game.ship.pos
    game.update(0.0, up=True)
    assert game.ship.pos.y < start.y
    assert game.ship.pos.x == pytest.approx(start.x)


def test_speed_is_clamped(game):
    for frame in range(100):
        game.update(frame * 0.016, up=True)
    assert game.ship.vel.length() <= AsteroidsGame.MAX_SPEED + 1e-9
    assert game.ship.vel.length() > 0.0


def test_turning(game):
    game.update(0.0, right=True)
    game.update(0.0, right=True)
    assert game.ship.rot == pytest.approx(2 * AsteroidsGame.TURN_SPEED)
    game.update(0.0, left=True)
    assert game.ship.rot == pytest.approx(AsteroidsGame.TURN_SPEED)


def test_shot_cooldown(game):
    game.update(1.0, shoot=True)
    game.update(1.05, shoot=True)
    assert len(game.bullets) == 1
    game.update(1.2, shoot=True)
    assert len(game.bullets) == 2


def test_bullet_expires(game):
    game.update(1.0, shoot=True)
    assert len(game.bullets) == 1
    game.update(1.0 + AsteroidsGame.BULLET_LIFETIME, shoot=False)
    assert game.bullets == []


def test_bullet_splits_asteroid(game):
    rock = Asteroid(pos=Vec2(100.0, 100.0), vel=Vec2(0.0, 0.0), rot=0.0, rot_speed=0.0, size=20.0, sides=6)
    game.asteroids = [far_rock(), rock]
    game.bullets = [Bullet(pos=Vec2(100.0, 100.0), vel=Vec2(7.0, 0.0), shot_at=3.0)]
    game.update(3.0)
    assert game.bullets == []
    children = [a for a in game.asteroids if a.pos == Vec2(100.0, 100.0)]
    assert len(children) == 2
    for child in children:
        assert child.sides == 5
        assert child.size < 20.0
        assert 1.0 <= child.vel.length() <= 3.0
    assert children[0].size == children[1].size
    assert not game.game_over


def test_smallest_asteroid_vanishes_and_player_wins(game):
    rock = Asteroid(pos=Vec2(100.0, 100.0), vel=Vec2(0.0, 0.0), rot=0.0, rot_speed=0.0, size=20.0, sides=4)
    game.asteroids = [rock]
    game.bullets = [Bullet(pos=Vec2(100.0, 100.0), vel=Vec2(7.0, 0.0), shot_at=3.0)]
    game.update(3.0)
    assert game.asteroids == []
    assert game.game_over
    assert game.won


def test_collision_with_ship_ends_game(game):
    game.asteroids = [
        Asteroid(pos=game.ship.pos, vel=Vec2(0.0, 0.0), rot=0.0, rot_speed=0.0, size=10.0, sides=6)
    ]
    game.update(0.0)
    assert game.game_over
    assert not game.won


def test_no_updates_after_game_over(game):
    game.asteroids = [
        Asteroid(pos=game.ship.pos, vel=Vec2(0.0, 0.0), rot=0.0, rot_speed=0.0, size=10.0, sides=6)
    ]
    game.update(0.0)
    pos = game.ship.pos
    game.update(1.0, up=True)
    assert game.ship.pos == pos


def test_restart_after_game_over(game):
    game.asteroids = []
    game.update(0.0)
    assert game.game_over
    game.restart()
    assert not game.game_over
    assert len(game.asteroids) == AsteroidsGame.ASTEROID_COUNT
    assert game.bullets == []


def test_bullet_starts_at_ship_nose(game):
    start = game.ship.pos
    game.update(1.0, shoot=True)
    bullet = game.bullets[0]
    # spawned at the nose, then moved one step
    nose = start + Vec2(0.0, -SHIP_HEIGHT / 2.0)
    assert bullet.pos.x == pytest.approx(nose.x)
    assert bullet.pos.y == pytest.approx(nose.y - AsteroidsGame.BULLET_SPEED)
    assert math.isclose(bullet.vel.length(), AsteroidsGame.BULLET_SPEED)