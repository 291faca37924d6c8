# quadkit

Game logic for small 2D games in plain Python, with no dependencies outside
the standard library. Everything here is simulation state that you step,
inspect and test yourself; drawing, input and sound output are left to
whatever front end you put on top.

## Modules

- `quadkit.geometry`: the immutable `Vec2` (arithmetic, `length()`,
  `normalize()`), the axis-aligned `Rect` (`contains()`, `overlaps()`) and
  `polar_to_cartesian()`.
- `quadkit.platformer`: a pixel-stepped collision world. `World` holds static
  tile layers (`add_static_tiled_layer`), moving platforms (`add_solid`,
  `solid_move`) and actors (`add_actor`, `move_h`, `move_v`). Tiles are
  `Tile.EMPTY`, `Tile.SOLID`, `Tile.JUMP_THROUGH` and `Tile.COLLIDER`.
  Actors can drop through jump-through tiles (`descent`), ride on top of a
  moving solid, and are marked `squished` when a solid pushes them into a wall.
  `collide_check`, `collide_solids`, `collide_tag`, `solid_at` and `tag_at`
  answer collision queries.
- `quadkit.particle_config`: everything an emitter is configured with:
  `EmitterConfig`, size curves (`Curve`, sampled by `batch()` into a
  `BatchedCurve`), `Color` and `ColorCurve`, emission shapes
  (`PointEmission`, `RectEmission`, `SphereEmission`), particle meshes
  (`RectangleShape`, `CircleShape`, `CustomMeshShape`, each with `mesh()`),
  `BlendMode`, sprite-sheet layouts (`AtlasConfig.frame_uv`),
  `ParticleMaterial` and `PostProcessing`.
- `quadkit.emitter`: the particle simulation. `Emitter.update(dt)` spawns,
  animates and retires `Particle` objects; `Emitter.draw(pos, dt)` moves the
  emitter and returns the particles to render; `Emitter.emit(pos, n)` bursts
  particles immediately. `EmittersCache` recycles short-lived emitters that
  share one config.
- `quadkit.life`: Conway's Game of Life on a bounded grid (`CellState`,
  `random_grid`, `next_generation`).
- `quadkit.snake`: `SnakeGame` with `steer`, `step` and `restart`, plus the
  direction constants `UP`, `DOWN`, `LEFT`, `RIGHT`.
- `quadkit.arkanoid`: `Breakout`, a paddle, ball and 10x10 wall of blocks,
  advanced by `update(dt, left, right, launch)`.
- `quadkit.asteroids`: `AsteroidsGame` with `Ship`, `Bullet` and `Asteroid`,
  advanced by `update(frame_time, up, left, right, shoot)`; asteroids split
  when shot. `wrap_around` moves off-screen points to the opposite edge.
- `quadkit.camera_math`: `short_angle_dist`, `angle_lerp` and
  `wheel_rotation` for smooth camera rotation in degrees.
- `quadkit.inventory`: an `Inventory` of bought items and labelled `Slot`s,
  changed by the commands `Fit`, `Unfit` and `Refit` through `apply()`.
- `quadkit.audio`: an `AudioContext` that loads sound data
  (`load_sound`, `load_sound_from_bytes`) and returns `Sound` handles, and
  records playback state set by `play_sound`, `play_sound_once`,
  `stop_sound` and `set_sound_volume`. An unreadable file raises `FileError`.

## Install

```
pip install .
```

Tests need the `test` extra:

```
pip install ".[test]"
pytest
```

## Examples

An actor falling onto a floor of solid tiles:

```python
from quadkit.geometry import Vec2
from quadkit.platformer import Tile, World

world = World()
empty_row = [Tile.EMPTY] * 10
floor_row = [Tile.SOLID] * 10
world.add_static_tiled_layer(empty_row * 5 + floor_row, 8.0, 8.0, 10, 1)

player = world.add_actor(Vec2(16.0, 8.0), 8, 8)
while world.move_v(player, 1.0):
    pass  # falls one pixel per call until blocked

print(world.actor_pos(player))  # Vec2(x=16.0, y=32.0)
```

Stepping a particle emitter with an explicit time delta:

```python
from quadkit.emitter import Emitter
from quadkit.geometry import Vec2
from quadkit.particle_config import EmitterConfig

emitter = Emitter(EmitterConfig(amount=20, lifetime=0.8))
particles = emitter.draw(Vec2(50.0, 50.0), 1 / 60)
for particle in particles:
    print(particle.position, particle.size, particle.color)
```

A blinker in the Game of Life:

```python
from quadkit.life import CellState, next_generation

D, A = CellState.DEAD, CellState.ALIVE
cells = [D, D, D,
         A, A, A,
         D, D, D]
print(next_generation(cells, 3, 3) == [D, A, D, D, A, D, D, A, D])  # True
```

Games that use randomness take a `random.Random`, so runs can be repeated:

```python
import random
from quadkit.snake import DOWN, SnakeGame

game = SnakeGame(rng=random.Random(1))
game.steer(DOWN)
game.step()
print(game.head, game.game_over)  # (0, 1) False
```

## What this package does not do

quadkit has no window, renderer, input handling or game loop. The emitter
computes particle positions, sizes, colours and texture rectangles but does
not draw them; `AudioContext` stores sound bytes and playback flags but does
not decode or play audio. The game models are driven by the booleans and
time values you pass in, and there is no command-line program to run.