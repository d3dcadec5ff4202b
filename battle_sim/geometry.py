"""Two-dimensional vectors and rigid transforms between local and world space."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True)
class Vec2:
    """An immutable 2D vector."""

    x: float = 0.0
    y: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def __add__(self, other: Vec2) -> Vec2:
        if not isinstance(other, Vec2):
            return NotImplemented
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        if not isinstance(other, Vec2):
            return NotImplemented
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float | Vec2) -> Vec2:
        if isinstance(scalar, Vec2):
            return Vec2(self.x * scalar.x, self.y * scalar.y)
        if isinstance(scalar, (int, float)):
            return Vec2(self.x * scalar, self.y * scalar)
        return NotImplemented

    def __rmul__(self, scalar: float) -> Vec2:
        return self.__mul__(scalar)

    def __truediv__(self, scalar: float) -> Vec2:
        if not isinstance(scalar, (int, float)):
            return NotImplemented
        return Vec2(self.x / scalar, self.y / scalar)

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def dot(self, other: Vec2) -> float:
        """Scalar product."""
        return self.x * other.x + self.y * other.y

    def cross(self, other: Vec2) -> float:
        """Z component of the 3D cross product."""
        return self.x * other.y - self.y * other.x

    def length(self) -> float:
        """Euclidean length."""
        return math.hypot(self.x, self.y)

    def normalized(self) -> Vec2:
        """Unit vector in the same direction; the zero vector has none."""
        norm = self.length()
        if norm == 0.0:
            raise ValueError("cannot normalize a zero-length vector")
        return Vec2(self.x / norm, self.y / norm)

    def rotated(self, angle: float) -> Vec2:
        """This vector rotated counter-clockwise by ``angle`` radians."""
        c, s = math.cos(angle), math.sin(angle)
        return Vec2(self.x * c - self.y * s, self.x * s + self.y * c)


def rotate(v: Vec2, angle: float) -> Vec2:
    """Rotate ``v`` counter-clockwise by ``angle`` radians."""
    return v.rotated(angle)


def local_to_world(point: Vec2, position: Vec2, rotation: float) -> Vec2:
    """Map a point from an object's local frame into world space."""
    return position + point.rotated(rotation)


def world_to_local(point: Vec2, position: Vec2, rotation: float) -> Vec2:
    """Map a world-space point into the local frame of an object."""
    return (point - position).rotated(-rotation)