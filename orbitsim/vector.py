"""Two-dimensional vector type and the geometry helpers built on it."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator

PI = math.pi


@dataclass(frozen=True)
class Vec2:
    """An immutable 2D vector with x going right and y going down."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vec2) -> Vec2:
        if not isinstance(other, Vec2):
            return NotImplemented
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        if not isinstance(other, Vec2):
            return NotImplemented
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vec2:
        if isinstance(scalar, Vec2):
            return NotImplemented
        return Vec2(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: float) -> Vec2:
        return self.__mul__(scalar)

    def __truediv__(self, scalar: float) -> Vec2:
        if isinstance(scalar, Vec2):
            return NotImplemented
        return Vec2(self.x / scalar, self.y / scalar)

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y


def _ieee_div(numerator: float, denominator: float) -> float:
    """Divide like floating-point hardware: zero divisors give inf or nan."""
    if denominator != 0:
        return numerator / denominator
    if numerator == 0 or math.isnan(numerator):
        return math.nan
    return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)


def deg_to_rad(value: float) -> float:
    return value * PI / 180.0


def rad_to_deg(value: float) -> float:
    return value * 180.0 / PI


def dot(a: Vec2, b: Vec2) -> float:
    return a.x * b.x + a.y * b.y


def norm(v: Vec2) -> float:
    return math.hypot(v.x, v.y)


def norm2(v: Vec2) -> float:
    return dot(v, v)


def angle(v: Vec2) -> float:
    return math.atan2(v.y, v.x)


def angle_between(a: Vec2, b: Vec2, c: Vec2) -> float:
    """Angle ABC measured at b, in [0, 2*pi)."""
    res = angle(a - b) - angle(c - b)
    return res + 2 * PI if res < 0 else res


def cross(a: Vec2, b: Vec2) -> float:
    """Vertical component of the cross product of two 2D vectors."""
    return a.x * b.y - a.y * b.x


def perpendicular(v: Vec2, wind_left: bool) -> Vec2:
    """Vector perpendicular to v, going to its left or to its right."""
    return Vec2(v.y, -v.x) if wind_left else Vec2(-v.y, v.x)


def perpendicular_towards(v: Vec2, d: Vec2) -> Vec2:
    """Vector perpendicular to v with a non-negative dot product with d."""
    res = Vec2(v.y, -v.x)
    return -res if dot(res, d) < 0 else res


def rotate(v: Vec2, angle: float) -> Vec2:
    c, s = math.cos(angle), math.sin(angle)
    return Vec2(v.x * c - v.y * s, v.x * s + v.y * c)


def intersection(a: Vec2, b: Vec2, c: Vec2, d: Vec2) -> tuple[float, float]:
    """Barycentric coordinates (u, v) of the crossing of lines AB and CD.

    The crossing point is a + u * (b - a) == c + v * (d - c). Parallel lines
    give infinite or nan coordinates.
    """
    ab = b - a
    cd = d - c
    ca = a - c
    cd_x_ab = cross(cd, ab)
    return _ieee_div(cross(ca, cd), cd_x_ab), _ieee_div(cross(ca, ab), cd_x_ab)


def closest_point(a: Vec2, b: Vec2, p: Vec2) -> Vec2:
    """Closest point to p on the segment AB."""
    ab = b - a
    length2 = norm2(ab)
    if length2 == 0:
        return a
    c = dot(ab, p - a) / length2
    if c < 0:
        return a
    if c > 1:
        return b
    return a + c * ab


def clamp_vector(v: Vec2, minimum: Vec2, maximum: Vec2) -> Vec2:
    """Bring v between minimum and maximum while keeping its aspect ratio."""
    aspect_ratio = v.x / v.y
    if v.x > maximum.x:
        v = Vec2(maximum.x, maximum.x / aspect_ratio)
    if v.y > maximum.y:
        v = Vec2(maximum.y * aspect_ratio, minimum.y)
    if v.x < minimum.x:
        v = Vec2(minimum.x, minimum.x / aspect_ratio)
    if v.y < minimum.y:
        v = Vec2(minimum.y * aspect_ratio, minimum.y)
    return v