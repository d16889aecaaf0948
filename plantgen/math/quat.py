"""
Quaternion type used for leaf orientation and joint keyframes.
"""

from dataclasses import dataclass
import numpy as np

from .vector import vec3, dot, cross


@dataclass
class Quat:
    """Rotation quaternion stored as (x, y, z, w)."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0

    @property
    def vector(self) -> np.ndarray:
        return vec3(self.x, self.y, self.z)

    def __mul__(self, other):
        if isinstance(other, Quat):
            m = self.vector
            n = other.vector
            s = self.w * other.w - dot(m, n)
            f = cross(m, n) + other.w * m + self.w * n
            return Quat(float(f[0]), float(f[1]), float(f[2]), float(s))
        return Quat(self.x * other, self.y * other, self.z * other, self.w * other)

    def __rmul__(self, other):
        return Quat(self.x * other, self.y * other, self.z * other, self.w * other)

    def __add__(self, other: "Quat") -> "Quat":
        return Quat(self.x + other.x, self.y + other.y, self.z + other.z, self.w + other.w)

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z, self.w], dtype=float)

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "z": self.z, "w": self.w}

    @classmethod
    def from_dict(cls, d: dict) -> "Quat":
        return cls(d["x"], d["y"], d["z"], d["w"])

    @classmethod
    def identity(cls) -> "Quat":
        return cls(0.0, 0.0, 0.0, 1.0)


def to_quat(vec: np.ndarray, w: float = 0.0) -> Quat:
    return Quat(float(vec[0]), float(vec[1]), float(vec[2]), float(w))


def conjugate(q: Quat) -> Quat:
    return Quat(-q.x, -q.y, -q.z, q.w)


def norm(q: Quat) -> float:
    return float(np.sqrt(q.x * q.x + q.y * q.y + q.z * q.z + q.w * q.w))


def normalize(q: Quat) -> Quat:
    n = norm(q)
    if n == 0.0:
        return Quat.identity()
    return Quat(q.x / n, q.y / n, q.z / n, q.w / n)


def inverse(q: Quat) -> Quat:
    n = norm(q)
    return conjugate(q) * (1.0 / (n * n))


def from_axis_angle(axis: np.ndarray, theta: float) -> Quat:
    a = theta / 2.0
    b = np.sin(a)
    return Quat(float(axis[0] * b), float(axis[1] * b), float(axis[2] * b), float(np.cos(a)))


def nlerp(a: Quat, b: Quat, t: float) -> Quat:
    """Normalized linear interpolation between two rotations."""
    t = float(t)
    return normalize((1.0 - t) * a + t * b)


def slerp(a: Quat, b: Quat, t: float) -> Quat:
    """Spherical linear interpolation; returns ``a`` for (near) identical inputs."""
    theta = a.x * b.x + a.y * b.y + a.z * b.z + a.w * b.w
    if theta >= 1.0:
        return Quat(a.x, a.y, a.z, a.w)
    i = np.arccos(theta)
    j = np.sin(i)
    x = np.sin(i * (1.0 - t)) / j
    y = np.sin(i * t) / j
    return Quat(
        float(x * a.x + y * b.x),
        float(x * a.y + y * b.y),
        float(x * a.z + y * b.z),
        float(x * a.w + y * b.w),
    )


def rotate_into_vec_q(normal: np.ndarray, direction: np.ndarray) -> Quat:
    """
    Shortest-arc rotation taking unit vector ``normal`` onto ``direction``.

    Opposite vectors have no unique shortest arc; a half turn about an
    axis perpendicular to ``normal`` is returned for them.
    """
    d = dot(normal, direction)
    if d <= -1.0 + 1e-9:
        axis = cross(normal, vec3(1.0, 0.0, 0.0))
        if np.linalg.norm(axis) < 1e-6:
            axis = cross(normal, vec3(0.0, 1.0, 0.0))
        axis = axis / np.linalg.norm(axis)
        return Quat(float(axis[0]), float(axis[1]), float(axis[2]), 0.0)
    e = np.sqrt(2.0 * (1.0 + d))
    v = (1.0 / e) * cross(normal, direction)
    return Quat(float(v[0]), float(v[1]), float(v[2]), float(e / 2.0))


def rotate(q: Quat, vec: np.ndarray) -> np.ndarray:
    """Rotate a 3D vector by a unit quaternion (q v q*)."""
    result = q * to_quat(vec, 0.0) * conjugate(q)
    return result.vector


def to_mat4(q: Quat) -> np.ndarray:
    m = np.zeros((4, 4), dtype=float)
    m[0][0] = 1.0 - 2.0 * (q.y * q.y + q.z * q.z)
    m[1][0] = 2.0 * (q.x * q.y - q.w * q.z)
    m[2][0] = 2.0 * (q.x * q.z + q.w * q.y)
    m[0][1] = 2.0 * (q.x * q.y + q.w * q.z)
    m[1][1] = 1.0 - 2.0 * (q.x * q.x + q.z * q.z)
    m[2][1] = 2.0 * (q.y * q.z - q.w * q.x)
    m[0][2] = 2.0 * (q.x * q.z - q.w * q.y)
    m[1][2] = 2.0 * (q.y * q.z + q.w * q.x)
    m[2][2] = 1.0 - 2.0 * (q.x * q.x + q.y * q.y)
    m[3][3] = 1.0
    return m


__all__ = [
    "Quat",
    "to_quat",
    "conjugate",
    "norm",
    "normalize",
    "inverse",
    "from_axis_angle",
    "nlerp",
    "slerp",
    "rotate_into_vec_q",
    "rotate",
    "to_mat4",
]
