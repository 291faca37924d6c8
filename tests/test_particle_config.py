import dataclasses
import math
import random

import pytest

from quadkit.geometry import Vec2
from quadkit.particle_config import (
    WHITE,
    AtlasConfig,
    BatchedCurve,
    BlendMode,
    CircleShape,
    Color,
    ColorCurve,
    Curve,
    CustomMeshShape,
    EmitterConfig,
    Interpolation,
    ParticleMaterial,
    PointEmission,
    RectangleShape,
    RectEmission,
    SphereEmission,
)


@pytest.fixture
def rng():
    return random.Random(1234)


def test_curve_batch_starts_at_first_key_value():
    curve = Curve(points=[(0.0, 0.5), (0.5, 1.0), (1.0, 0.0)])
    batched = curve.batch()
    assert batched.points[0] == pytest.approx(0.5)
    assert all(0.0 - 1e-9 <= p <= 1.0 + 1e-9 for p in batched.points)
    assert max(batched.points) == pytest.approx(1.0)


def test_curve_batch_sample_count_follows_resolution():
    coarse = Curve(points=[(0.0, 0.0), (1.0, 1.0)], resolution=5).batch()
    fine = Curve(points=[(0.0, 0.0), (1.0, 1.0)], resolution=50).batch()
    assert len(fine.points) > len(coarse.points)


def test_curve_linear_samples_are_increasing():
    batched = Curve(points=[(0.0, 0.0), (1.0, 1.0)]).batch()
    assert batched.points == sorted(batched.points)


def test_curve_bezier_rejected():
    curve = Curve(points=[(0.0, 0.0), (1.0, 1.0)], interpolation=Interpolation.BEZIER)
    with pytest.raises(ValueError):
        curve.batch()


def test_curve_without_points_batches_empty():
    assert Curve().batch().points == []


def test_batched_curve_ends():
    batched = BatchedCurve([2.0, 4.0, 6.0])
    assert batched.get(0.0) == pytest.approx(2.0)
    assert batched.get(1.0) == pytest.approx(6.0)


def test_batched_curve_constant():
    batched = BatchedCurve([3.0, 3.0, 3.0, 3.0])
    for t in (0.0, 0.1, 0.5, 0.99):
        assert batched.get(t) == pytest.approx(3.0)


def test_batched_curve_empty_raises():
    with pytest.raises(ValueError):
        BatchedCurve([]).get(0.5)


def test_color_as_tuple():
    assert Color(0.1, 0.2, 0.3, 0.4).as_tuple() == (0.1, 0.2, 0.3, 0.4)


def test_color_curve_key_points():
    start = Color(1.0, 0.0, 0.0, 1.0)
    mid = Color(0.0, 1.0, 0.0, 1.0)
    end = Color(0.0, 0.0, 1.0, 0.0)
    curve = ColorCurve(start, mid, end)
    assert curve.at(0.0).as_tuple() == pytest.approx(start.as_tuple())
    assert curve.at(0.5).as_tuple() == pytest.approx(mid.as_tuple())
    assert curve.at(1.0).as_tuple() == pytest.approx(end.as_tuple())


def test_color_curve_default_is_white():
    assert ColorCurve().at(0.3) == WHITE


def test_point_emission(rng):
    assert PointEmission().random_point(rng) == Vec2(0.0, 0.0)


def test_rect_emission_within_bounds(rng):
    shape = RectEmission(width=10.0, height=4.0)
    for _ in range(200):
        p = shape.random_point(rng)
        assert -5.0 <= p.x <= 5.0
        assert -2.0 <= p.y <= 2.0


def test_sphere_emission_within_radius(rng):
    shape = SphereEmission(radius=3.0)
    for _ in range(200):
        assert shape.random_point(rng).length() <= 3.0 + 1e-9


def test_rectangle_mesh_layout():
    vertices, indices = RectangleShape().mesh()
    assert indices == [0, 1, 2, 0, 2, 3]
    assert len(vertices) == 4 * 9
    assert vertices[:9] == [-1.0, -1.0, 0.0, 0.0, 0.0, 1.0, 1.0, 1.0, 1.0]


def test_rectangle_mesh_aspect_scales_x():
    vertices, _ = RectangleShape(aspect_ratio=2.0).mesh()
    xs = vertices[0::9]
    ys = vertices[1::9]
    assert max(xs) == 2.0 and min(xs) == -2.0
    assert max(ys) == 1.0 and min(ys) == -1.0


@pytest.mark.parametrize("subdivisions", [3, 8, 16])
def test_circle_mesh(subdivisions):
    vertices, indices = CircleShape(subdivisions).mesh()
    assert len(vertices) == (subdivisions + 2) * 9
    assert len(indices) == 3 * subdivisions
    assert max(indices) == subdivisions + 1
    rim = [vertices[i * 9 : i * 9 + 2] for i in range(1, subdivisions + 2)]
    for x, y in rim:
        assert math.hypot(x, y) == pytest.approx(1.0)


def test_circle_mesh_needs_subdivisions():
    with pytest.raises(ValueError):
        CircleShape(0).mesh()


def test_custom_mesh_roundtrip():
    verts = (0.0, 1.0, 2.0)
    idx = (0, 1, 2)
    vertices, indices = CustomMeshShape(verts, idx).mesh()
    assert vertices == list(verts)
    assert indices == list(idx)


def test_atlas_default_range():
    atlas = AtlasConfig(4, 4)
    assert atlas.start_index == 0
    assert atlas.end_index == 16


def test_atlas_explicit_range():
    atlas = AtlasConfig(4, 4, 8)
    assert atlas.start_index == 8
    assert atlas.end_index == 16


def test_atlas_frame_uv():
    atlas = AtlasConfig(4, 2)
    assert atlas.frame_uv(0) == (0.0, 0.0, 0.25, 0.5)
    u, v, w, h = atlas.frame_uv(5)
    assert (u, v) == (0.25, 0.5)
    assert (w, h) == (0.25, 0.5)


def test_atlas_rejects_bad_dimensions():
    with pytest.raises(ValueError):
        AtlasConfig(0, 4)


def test_emitter_config_defaults():
    config = EmitterConfig()
    assert config.lifetime == 1.0
    assert config.amount == 8
    assert config.emitting is True
    assert config.initial_direction == Vec2(0.0, -1.0)
    assert config.initial_velocity == 50.0
    assert config.size == 10.0
    assert config.blend_mode is BlendMode.ALPHA
    assert config.shape == RectangleShape(1.0)
    assert config.emission_shape == PointEmission()
    assert config.size_curve is None


def test_emitter_config_replace_keeps_original():
    config = EmitterConfig(amount=30)
    other = dataclasses.replace(config, emitting=False)
    assert config.emitting is True
    assert other.emitting is False
    assert other.amount == 30


def test_particle_material_holds_sources():
    material = ParticleMaterial("vs", "fs")
    assert (material.vertex, material.fragment) == ("vs", "fs")