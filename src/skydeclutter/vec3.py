"""Minimal vector helpers over Vec3."""

import math

from skydeclutter.models import Vec3


def sub(a: Vec3, b: Vec3) -> Vec3:
    return Vec3(a.x - b.x, a.y - b.y, a.z - b.z)


def dot(a: Vec3, b: Vec3) -> float:
    return a.x * b.x + a.y * b.y + a.z * b.z


def length_sq(v: Vec3) -> float:
    return dot(v, v)


def distance(a: Vec3, b: Vec3) -> float:
    """Euclidean distance between two points."""
    return math.sqrt(length_sq(sub(a, b)))
