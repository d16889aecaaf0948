"""
Vector helpers for plant geometry.

Vectors are plain numpy arrays of dtype float64 so they compose with
numpy arithmetic. Control points of profile curves reuse the same type
with overloaded axes: (parameter, unused, value).
"""

import numpy as np
from typing import Sequence

EPSILON = 1e-10


def vec2(x: float = 0.0, y: float = 0.0) -> np.ndarray:
    return np.array([x, y], dtype=float)


def vec3(x: float = 0.0, y: float = 0.0, z: float = 0.0) -> np.ndarray:
    return np.array([x, y, z], dtype=float)


def vec4(x: float = 0.0, y: float = 0.0, z: float = 0.0, w: float = 0.0) -> np.ndarray:
    return np.array([x, y, z, w], dtype=float)


def as_vec(value: Sequence[float]) -> np.ndarray:
    """Copy any sequence of floats into a float64 array."""
    return np.array(value, dtype=float)


def nan_vec3() -> np.ndarray:
    return np.full(3, np.nan)


def to_vec4(vec: np.ndarray, w: float) -> np.ndarray:
    return vec4(vec[0], vec[1], vec[2], w)


def to_vec3(vec: np.ndarray) -> np.ndarray:
    return vec3(vec[0], vec[1], vec[2])


def dot(a: np.ndarray, b: np.ndarray) -> float:
    return float(np.dot(a, b))


def cross(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return np.cross(a, b).astype(float)


def magnitude(vec: np.ndarray) -> float:
    return float(np.linalg.norm(vec))


def normalize(vec: np.ndarray) -> np.ndarray:
    """
    Return a unit-length copy of ``vec``.

    A zero vector is returned unchanged instead of dividing by zero.
    """
    m = magnitude(vec)
    if m < EPSILON:
        return np.zeros_like(vec, dtype=float)
    return np.asarray(vec, dtype=float) / m


def is_zero(vec: np.ndarray) -> bool:
    return bool(np.all(np.asarray(vec) == 0.0))


def is_nan(vec: np.ndarray) -> bool:
    return bool(np.any(np.isnan(vec)))


def lerp(a: np.ndarray, b: np.ndarray, t: float) -> np.ndarray:
    return (1.0 - t) * np.asarray(a, dtype=float) + t * np.asarray(b, dtype=float)


def project(a: np.ndarray, b: np.ndarray) -> float:
    """Scalar projection factor of ``a`` onto ``b``."""
    return dot(a, b) / dot(b, b)


def project_onto_plane(vec: np.ndarray, normal: np.ndarray) -> np.ndarray:
    return vec - dot(vec, normal) * normal


def rotate_around_axis(vec: np.ndarray, axis: np.ndarray, n: float) -> np.ndarray:
    """Rodrigues rotation of ``vec`` about a unit ``axis`` by ``n`` radians."""
    a = np.cos(n) * vec
    b = np.sin(n) * cross(axis, vec)
    c = (1.0 - np.cos(n)) * dot(axis, vec) * axis
    return normalize(a + b + c)


def angle(a: np.ndarray, b: np.ndarray) -> float:
    c = dot(a, b) / (magnitude(a) * magnitude(b))
    return float(np.arccos(np.clip(c, -1.0, 1.0)))


def perp(vec: np.ndarray) -> np.ndarray:
    """Counter-clockwise perpendicular of a 2D vector."""
    return vec2(-vec[1], vec[0])


def vectors_equal(a: Sequence[np.ndarray], b: Sequence[np.ndarray]) -> bool:
    """Exact element-wise comparison of two sequences of vectors."""
    if len(a) != len(b):
        return False
    return all(np.array_equal(x, y, equal_nan=True) for x, y in zip(a, b))


__all__ = [
    "EPSILON",
    "vec2",
    "vec3",
    "vec4",
    "as_vec",
    "nan_vec3",
    "to_vec4",
    "to_vec3",
    "dot",
    "cross",
    "magnitude",
    "normalize",
    "is_zero",
    "is_nan",
    "lerp",
    "project",
    "project_onto_plane",
    "rotate_around_axis",
    "angle",
    "perp",
    "vectors_equal",
]
