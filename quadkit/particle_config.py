"""Configuration types for particle emitters: curves, shapes, atlases and colours."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from quadkit.geometry import Vec2, polar_to_cartesian

__all__ = [
    "Interpolation",
    "Curve",
    "BatchedCurve",
    "Color",
    "WHITE",
    "ColorCurve",
    "PointEmission",
    "RectEmission",
    "SphereEmission",
    "EmissionShape",
    "RectangleShape",
    "CircleShape",
    "CustomMeshShape",
    "ParticleShape",
    "BlendMode",
    "AtlasConfig",
    "ParticleMaterial",
    "PostProcessing",
    "EmitterConfig",
]


class Interpolation(Enum):
    """How the key points of a curve are joined."""

    LINEAR = "linear"
    BEZIER = "bezier"


@dataclass
class BatchedCurve:
    """A curve sampled at evenly spaced points, ready for fast lookup."""

    points: list[float]

    def get(self, t: float) -> float:
        """Value of the curve at t in 0..1, interpolated between samples."""
        if not self.points:
            raise ValueError("cannot sample an empty curve")
        count = len(self.points)
        t_scaled = t * count
        previous_ix = min(max(int(t_scaled), 0), count - 1)
        next_ix = min(previous_ix + 1, count - 1)
        previous = self.points[previous_ix]
        following = self.points[next_ix]
        return previous + (following - previous) * (t_scaled - previous_ix)


@dataclass
class Curve:
    """A piecewise curve through key points (x, y), x running from 0 to 1."""

    points: list[tuple[float, float]] = field(default_factory=list)
    interpolation: Interpolation = Interpolation.LINEAR
    resolution: int = 20

    def batch(self) -> BatchedCurve:
        """Sample the curve with a step of 1 / resolution."""
        if self.interpolation is not Interpolation.LINEAR:
            raise ValueError(f"{self.interpolation.value} interpolation is not supported")
        if self.resolution <= 0:
            raise ValueError("curve resolution must be positive")

        step = 1.0 / self.resolution
        x = 0.0
        samples: list[float] = []
        for start, end in zip(self.points, self.points[1:]):
            while x <= end[0]:
                t = (x - start[0]) / (end[0] - start[0])
                samples.append(start[1] + (end[1] - start[1]) * t)
                x += step
        return BatchedCurve(samples)


@dataclass(frozen=True)
class Color:
    """An RGBA colour with float channels in 0..1."""

    r: float
    g: float
    b: float
    a: float = 1.0

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.r, self.g, self.b, self.a)

    def _mix(self, other: Color, t: float) -> Color:
        return Color(
            *(mine * (1.0 - t) + theirs * t for mine, theirs in zip(self.as_tuple(), other.as_tuple()))
        )


WHITE = Color(1.0, 1.0, 1.0, 1.0)


@dataclass(frozen=True)
class ColorCurve:
    """Colour over a particle's life: start, middle and end."""

    start: Color = WHITE
    mid: Color = WHITE
    end: Color = WHITE

    def at(self, t: float) -> Color:
        """Colour at life fraction t: start to mid over the first half, mid to end after."""
        if t < 0.5:
            return self.start._mix(self.mid, t * 2.0)
        return self.mid._mix(self.end, (t - 0.5) * 2.0)


@dataclass(frozen=True)
class PointEmission:
    """Particles spawn exactly at the emitter position."""

    def random_point(self, rng: random.Random) -> Vec2:
        return Vec2(0.0, 0.0)


@dataclass(frozen=True)
class RectEmission:
    """Particles spawn inside a rectangle centred on the emitter."""

    width: float
    height: float

    def random_point(self, rng: random.Random) -> Vec2:
        return Vec2(
            rng.uniform(-self.width / 2.0, self.width / 2.0),
            rng.uniform(-self.height / 2.0, self.height / 2.0),
        )


@dataclass(frozen=True)
class SphereEmission:
    """Particles spawn uniformly inside a disc centred on the emitter."""

    radius: float

    def random_point(self, rng: random.Random) -> Vec2:
        rho = math.sqrt(rng.uniform(0.0, self.radius * self.radius))
        phi = rng.uniform(0.0, math.pi * 2.0)
        return polar_to_cartesian(rho, phi)


EmissionShape = Union[PointEmission, RectEmission, SphereEmission]

# Each mesh vertex is: position (3), uv (2), colour (4).
_WHITE_RGBA = [1.0, 1.0, 1.0, 1.0]


@dataclass(frozen=True)
class RectangleShape:
    """A quad particle, its width scaled by the aspect ratio."""

    aspect_ratio: float = 1.0

    def mesh(self) -> tuple[list[float], list[int]]:
        """Interleaved vertex data and triangle indices."""
        a = self.aspect_ratio
        corners = [(-a, -1.0, 0.0, 0.0), (a, -1.0, 1.0, 0.0), (a, 1.0, 1.0, 1.0), (-a, 1.0, 0.0, 1.0)]
        vertices: list[float] = []
        for x, y, u, v in corners:
            vertices.extend([x, y, 0.0, u, v, *_WHITE_RGBA])
        return vertices, [0, 1, 2, 0, 2, 3]


@dataclass(frozen=True)
class CircleShape:
    """A unit disc particle made of a triangle fan."""

    subdivisions: int

    def mesh(self) -> tuple[list[float], list[int]]:
        """Interleaved vertex data and triangle indices."""
        if self.subdivisions < 1:
            raise ValueError("a circle needs at least one subdivision")
        vertices: list[float] = [0.0, 0.0, 0.0, 0.0, 0.0, *_WHITE_RGBA]
        indices: list[int] = []
        for i in range(self.subdivisions + 1):
            angle = i / self.subdivisions * math.pi * 2.0
            rx, ry = math.cos(angle), math.sin(angle)
            vertices.extend([rx, ry, 0.0, rx, ry, 1.0, 1.0, 1.0, 1.0])
            if i != self.subdivisions:
                indices.extend([0, i + 1, i + 2])
        return vertices, indices


@dataclass(frozen=True)
class CustomMeshShape:
    """A particle with user-supplied interleaved vertices and indices."""

    vertices: tuple[float, ...]
    indices: tuple[int, ...]

    def mesh(self) -> tuple[list[float], list[int]]:
        return list(self.vertices), list(self.indices)


ParticleShape = Union[RectangleShape, CircleShape, CustomMeshShape]


class BlendMode(Enum):
    """How overlapping particles are combined."""

    ALPHA = "alpha"
    """Blended by the alpha channel."""
    ADDITIVE = "additive"
    """Colours added together."""


@dataclass(frozen=True)
class AtlasConfig:
    """Spritesheet layout: n columns, m rows, frames start_index up to end_index (exclusive)."""

    n: int
    m: int
    start_index: int = 0
    end_index: Optional[int] = None

    def __post_init__(self) -> None:
        if self.n <= 0 or self.m <= 0:
            raise ValueError("atlas dimensions must be positive")
        if self.end_index is None:
            object.__setattr__(self, "end_index", self.n * self.m)

    def frame_uv(self, frame: int) -> tuple[float, float, float, float]:
        """Texture rectangle (u, v, width, height) of a frame."""
        x = frame % self.n
        y = frame // self.n
        return (x / self.n, y / self.m, 1.0 / self.n, 1.0 / self.m)


@dataclass(frozen=True)
class ParticleMaterial:
    """Custom shader sources used to draw particles."""

    vertex: str
    fragment: str


@dataclass(frozen=True)
class PostProcessing:
    """Render particles to an offscreen target before drawing them."""


@dataclass
class EmitterConfig:
    """Everything that controls how an emitter spawns and animates particles."""

    local_coords: bool = False
    emission_shape: EmissionShape = field(default_factory=PointEmission)
    one_shot: bool = False
    lifetime: float = 1.0
    lifetime_randomness: float = 0.0
    explosiveness: float = 0.0
    amount: int = 8
    shape: ParticleShape = field(default_factory=RectangleShape)
    emitting: bool = True
    initial_direction: Vec2 = field(default_factory=lambda: Vec2(0.0, -1.0))
    initial_direction_spread: float = 0.0
    initial_velocity: float = 50.0
    initial_velocity_randomness: float = 0.0
    linear_accel: float = 0.0
    initial_rotation: float = 0.0
    initial_rotation_randomness: float = 0.0
    initial_angular_velocity: float = 0.0
    initial_angular_velocity_randomness: float = 0.0
    angular_accel: float = 0.0
    angular_damping: float = 0.0
    size: float = 10.0
    size_randomness: float = 0.0
    size_curve: Optional[Curve] = None
    blend_mode: BlendMode = BlendMode.ALPHA
    colors_curve: ColorCurve = field(default_factory=ColorCurve)
    gravity: Vec2 = field(default_factory=lambda: Vec2(0.0, 0.0))
    texture: object = None
    atlas: Optional[AtlasConfig] = None
    material: Optional[ParticleMaterial] = None
    post_processing: Optional[PostProcessing] = None