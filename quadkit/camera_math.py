"""Angle helpers for smoothly rotating a camera."""

from __future__ import annotations

import math

__all__ = ["short_angle_dist", "angle_lerp", "wheel_rotation"]

_FULL_TURN = 360.0


def short_angle_dist(a0: float, a1: float) -> float:
    """Signed shortest angular distance in degrees from a0 to a1."""
    da = math.fmod(a1 - a0, _FULL_TURN)
    return math.fmod(2.0 * da, _FULL_TURN) - da


def angle_lerp(a0: float, a1: float, t: float) -> float:
    """Interpolate from a0 towards a1 along the shorter way round."""
    return a0 + short_angle_dist(a0, a1) * t


def wheel_rotation(rotation: float, y: float) -> float:
    """Apply a mouse-wheel step of y (10 degrees per unit), keeping 0 <= angle < 360."""
    rotation += 10.0 * y
    if rotation >= _FULL_TURN:
        return rotation - _FULL_TURN
    if rotation < 0.0:
        return rotation + _FULL_TURN
    return rotation