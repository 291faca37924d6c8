"""Particle emitters: spawning, animating and retiring particles on the CPU."""

from __future__ import annotations

import dataclasses
import math
import random
from dataclasses import dataclass
from typing import Optional

from quadkit.geometry import Vec2
from quadkit.particle_config import BatchedCurve, BlendMode, Color, EmitterConfig

__all__ = ["Particle", "Emitter", "EmittersCache"]

_FULL_TEXTURE_UV = (0.0, 0.0, 1.0, 1.0)


@dataclass
class Particle:
    """One live particle: what is drawn plus the state that drives it."""

    position: Vec2
    rotation: float
    size: float
    uv: tuple[float, float, float, float]
    spawn_index: float
    life_fraction: float
    color: Color
    velocity: Vec2
    angular_velocity: float
    lived: float
    lifetime: float
    frame: int
    initial_size: float


def _random_initial_vector(rng: random.Random, direction: Vec2, spread: float, velocity: float) -> Vec2:
    angle = rng.uniform(-spread / 2.0, spread / 2.0)
    cos_a, sin_a = math.cos(angle), math.sin(angle)
    rotated = Vec2(
        direction.x * cos_a - direction.y * sin_a,
        direction.x * sin_a + direction.y * cos_a,
    )
    return rotated * velocity


def _reduced(rng: random.Random, value: float, randomness: float) -> float:
    """value minus a random fraction (up to `randomness`) of itself."""
    return value - value * rng.uniform(0.0, randomness)


class Emitter:
    """Spawns particles according to an EmitterConfig and advances them over time."""

    MAX_PARTICLES = 10000

    def __init__(self, config: Optional[EmitterConfig] = None, rng: Optional[random.Random] = None) -> None:
        self.config = config if config is not None else EmitterConfig()
        self.rng = rng if rng is not None else random.Random()
        self.particles: list[Particle] = []
        self.last_emit_time = 0.0
        self.time_passed = 0.0
        self.particles_spawned = 0
        self.position = Vec2(0.0, 0.0)
        self.blend_mode: BlendMode = self.config.blend_mode
        self.mesh = self.config.shape.mesh()
        self.mesh_dirty = False
        self.batched_size_curve: Optional[BatchedCurve] = None
        self.rebuild_size_curve()

    def reset(self) -> None:
        """Drop all particles and restart the emission cycle."""
        self.particles.clear()
        self.last_emit_time = 0.0
        self.time_passed = 0.0
        self.particles_spawned = 0

    def rebuild_size_curve(self) -> None:
        """Re-sample the size curve after config.size_curve was changed."""
        curve = self.config.size_curve
        self.batched_size_curve = curve.batch() if curve is not None else None

    def update_particle_mesh(self) -> None:
        """Rebuild the particle mesh from config.shape on the next update."""
        self.mesh_dirty = True

    def _emit_particle(self, offset: Vec2) -> None:
        config = self.config
        rng = self.rng
        offset = offset + config.emission_shape.random_point(rng)

        size = _reduced(rng, config.size, config.size_randomness)
        rotation = _reduced(rng, config.initial_rotation, config.initial_rotation_randomness)
        position = offset if config.local_coords else self.position + offset

        velocity = _random_initial_vector(
            rng,
            Vec2(config.initial_direction.x, config.initial_direction.y),
            config.initial_direction_spread,
            _reduced(rng, config.initial_velocity, config.initial_velocity_randomness),
        )
        angular_velocity = _reduced(
            rng, config.initial_angular_velocity, config.initial_angular_velocity_randomness
        )
        lifetime = _reduced(rng, config.lifetime, config.lifetime_randomness)

        self.particles.append(
            Particle(
                position=position,
                rotation=rotation,
                size=size,
                uv=(1.0, 1.0, 0.0, 0.0),
                spawn_index=float(self.particles_spawned),
                life_fraction=0.0,
                color=config.colors_curve.start,
                velocity=velocity,
                angular_velocity=angular_velocity,
                lived=0.0,
                lifetime=lifetime,
                frame=0,
                initial_size=size,
            )
        )
        self.particles_spawned += 1

    def emit(self, pos: Vec2, n: int) -> None:
        """Immediately emit n particles, ignoring the emitting and amount settings."""
        for _ in range(n):
            self._emit_particle(pos)
            self.particles_spawned += 1

    def _spawn_count(self) -> int:
        config = self.config
        if config.amount <= 0:
            return 0
        gap = (config.lifetime / config.amount) * (1.0 - config.explosiveness)
        if gap < 0.001:
            return config.amount
        return int((self.time_passed - self.last_emit_time) / gap)

    def update(self, dt: float) -> None:
        """Advance the emitter by dt seconds: spawn, animate and retire particles."""
        config = self.config
        if self.mesh_dirty:
            self.mesh = config.shape.mesh()
            self.mesh_dirty = False

        if config.emitting:
            self.time_passed += dt
            for _ in range(self._spawn_count()):
                self.last_emit_time = self.time_passed
                if self.particles_spawned < config.amount:
                    self._emit_particle(Vec2(0.0, 0.0))
                if len(self.particles) >= config.amount:
                    break

        if config.one_shot and self.time_passed > config.lifetime:
            self.time_passed = 0.0
            self.last_emit_time = 0.0
            config.emitting = False

        for particle in self.particles:
            self._animate(particle, dt)

        survivors = []
        for particle in self.particles:
            expired = particle.lived >= particle.lifetime or particle.lived > config.lifetime
            if not expired:
                survivors.append(particle)
            elif particle.lived != particle.lifetime:
                self.particles_spawned -= 1
        self.particles = survivors

    def _animate(self, particle: Particle, dt: float) -> None:
        config = self.config
        particle.velocity = particle.velocity + particle.velocity * (config.linear_accel * dt)
        particle.angular_velocity += particle.angular_velocity * config.angular_accel * dt
        particle.angular_velocity *= 1.0 - config.angular_damping

        fraction = particle.lived / particle.lifetime if particle.lifetime != 0.0 else 0.0
        particle.color = config.colors_curve.at(fraction)
        particle.position = particle.position + particle.velocity * dt
        particle.rotation += particle.angular_velocity * dt

        scale = self.batched_size_curve.get(fraction) if self.batched_size_curve is not None else 1.0
        particle.size = particle.initial_size * scale

        if particle.lifetime != 0.0:
            particle.life_fraction = fraction

        particle.lived = min(particle.lived + dt, particle.lifetime)
        particle.velocity = particle.velocity + config.gravity * dt

        atlas = config.atlas
        if atlas is not None:
            if particle.lifetime != 0.0:
                span = atlas.end_index - atlas.start_index
                particle.frame = int(particle.lived / particle.lifetime * span) + atlas.start_index
            particle.uv = atlas.frame_uv(particle.frame)
        else:
            particle.uv = _FULL_TEXTURE_UV

    def draw(self, pos: Vec2, dt: float) -> list[Particle]:
        """Place the emitter at pos, advance it by dt and return the particles to render."""
        self.position = pos
        self.update(dt)
        if self.config.blend_mode is not self.blend_mode:
            self.blend_mode = self.config.blend_mode
        return list(self.particles)


class EmittersCache:
    """Many short-lived emitters sharing one config, recycled instead of recreated."""

    CACHE_DEFAULT_SIZE = 10

    def __init__(self, config: EmitterConfig, rng: Optional[random.Random] = None) -> None:
        self.config = config
        self.rng = rng if rng is not None else random.Random()
        self.cache: list[Emitter] = [
            Emitter(dataclasses.replace(config, emitting=False), self.rng)
            for _ in range(self.CACHE_DEFAULT_SIZE)
        ]
        self.active: list[tuple[Emitter, Vec2]] = []

    def spawn(self, pos: Vec2) -> Emitter:
        """Start an emitter at pos, reusing a cached one when available."""
        if self.cache:
            emitter = self.cache.pop()
        else:
            emitter = Emitter(dataclasses.replace(self.config), self.rng)
        emitter.mesh_dirty = True
        emitter.config.emitting = True
        emitter.reset()
        self.active.append((emitter, pos))
        return emitter

    def update(self, dt: float) -> list[Particle]:
        """Advance every active emitter; finished ones go back to the cache."""
        still_active = []
        particles: list[Particle] = []
        for emitter, pos in self.active:
            emitter.position = pos
            emitter.update(dt)
            particles.extend(emitter.particles)
            if emitter.config.emitting:
                still_active.append((emitter, pos))
            else:
                self.cache.append(emitter)
        self.active = still_active
        return particles