"""
4x4 matrix helpers.

Matrices are numpy arrays of shape (4, 4) using the row-vector convention:
translation lives in the last row and points transform as ``v @ m``.
"""

import numpy as np

from .vector import vec4, cross, dot


def identity() -> np.ndarray:
    return np.identity(4, dtype=float)


def translate(vec: np.ndarray) -> np.ndarray:
    m = identity()
    m[3, :3] = vec[:3]
    return m


def scale(vec: np.ndarray) -> np.ndarray:
    m = identity()
    m[0, 0] = vec[0]
    m[1, 1] = vec[1]
    m[2, 2] = vec[2]
    return m


def transpose(mat: np.ndarray) -> np.ndarray:
    return np.array(mat, dtype=float).T.copy()


def rotate_xy(x: float, y: float) -> np.ndarray:
    sx, cx = np.sin(x), np.cos(x)
    sy, cy = np.sin(y), np.cos(y)
    return np.array([
        [cy, 0.0, sy, 0.0],
        [sx * sy, cx, -sx * cy, 0.0],
        [-cx * sy, sx, cx * cy, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ])


def rotate_zyx(z: float, y: float, x: float) -> np.ndarray:
    cz, sz = np.cos(z), np.sin(z)
    cy, sy = np.cos(y), np.sin(y)
    cx, sx = np.cos(x), np.sin(x)
    return np.array([
        [cz * cy, sz * cy, -sy, 0.0],
        [cz * sy * sx - sz * cx, sz * sy * sx + cz * cx, cy * sx, 0.0],
        [cz * sy * cx + sz * sx, sz * sy * cx - cz * sx, cy * cx, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ])


def rotate_into_vec(normal: np.ndarray, direction: np.ndarray) -> np.ndarray:
    """Rotation matrix taking unit vector ``normal`` onto ``direction``."""
    v = cross(normal, direction)
    e = dot(normal, direction)
    h = 1.0 / (1.0 + e)
    return np.array([
        [e + h * v[0] * v[0], h * v[0] * v[1] + v[2], h * v[0] * v[2] - v[1], 0.0],
        [h * v[0] * v[1] - v[2], e + h * v[1] * v[1], h * v[1] * v[2] + v[0], 0.0],
        [h * v[0] * v[2] + v[1], h * v[1] * v[2] - v[0], e + h * v[2] * v[2], 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ])


def apply(mat: np.ndarray, vec: np.ndarray, w: float = 1.0) -> np.ndarray:
    """Transform a 3D vector with homogeneous coordinate ``w``."""
    result = vec4(vec[0], vec[1], vec[2], w) @ mat
    return result[:3].copy()


__all__ = [
    "identity",
    "translate",
    "scale",
    "transpose",
    "rotate_xy",
    "rotate_zyx",
    "rotate_into_vec",
    "apply",
]
