"""
Sampled paths along splines.

A ``Path`` caches a polyline sampled from its ``Spline``. The polyline is
stale after any spline edit until ``generate`` runs again; ``set_spline`` and
``set_resolution`` regenerate immediately, direct edits to the spline object
do not.

Two index spaces are involved: control indices address the spline and
sample indices address the polyline. ``to_path_index`` converts between them
using the resolution and start mode of the most recent ``generate`` so later
resolution changes cannot silently skew distances.

UNIT CONVENTIONS
----------------
Distances are arc lengths in the same units as the control points.
"""

from dataclasses import dataclass, field
from typing import List, Optional
import numpy as np

from ..math import magnitude, normalize, is_zero, nan_vec3, vectors_equal
from .spline import Spline, DEFAULT_TANGENT

DEFAULT_RESOLUTION = 2
DEFAULT_MIN_RADIUS = 0.02
DEFAULT_MAX_RADIUS = 0.2


def _direction_or_default(vec: np.ndarray) -> np.ndarray:
    if is_zero(vec):
        return np.array(DEFAULT_TANGENT, dtype=float)
    return normalize(vec)


@dataclass
class RadiusProfile:
    """
    Radius of a path as a function of arc-length fraction.

    ``spline`` is a profile curve whose z value is a fraction of
    ``max_radius``; results never drop below ``min_radius``.
    """
    spline: Spline = field(default_factory=lambda: Spline(1))
    min_radius: float = DEFAULT_MIN_RADIUS
    max_radius: float = DEFAULT_MAX_RADIUS

    def evaluate(self, t: float) -> float:
        z = float(self.spline.get_point(t)[2]) * self.max_radius
        return self.min_radius if z < self.min_radius else z

    def copy(self) -> "RadiusProfile":
        return RadiusProfile(self.spline.copy(), self.min_radius, self.max_radius)


class Path:
    """
    Polyline sampled from a spline at ``resolution`` samples per segment.

    Parameters
    ----------
    spline : Spline, optional
        Centerline; the polyline is generated immediately
    resolution : int
        Samples per curve segment
    profile : RadiusProfile, optional
        Radius profile, turning the path into a volumetric one
    """

    def __init__(
        self,
        spline: Optional[Spline] = None,
        resolution: int = DEFAULT_RESOLUTION,
        profile: Optional[RadiusProfile] = None,
    ):
        self.spline = spline.copy() if spline is not None else Spline()
        self.resolution = resolution
        self.profile = profile
        self._points: List[np.ndarray] = []
        self._sampled_resolution = resolution
        self._sampled_linear_start = False
        if spline is not None:
            self.generate()

    def __eq__(self, other) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return (
            self.spline == other.spline
            and self.resolution == other.resolution
            and self.profile == other.profile
            and vectors_equal(self._points, other._points)
        )

    def __ne__(self, other) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(curves={self.spline.get_curve_count()}, "
            f"resolution={self.resolution}, samples={len(self._points)})"
        )

    def copy(self) -> "Path":
        other = type(self).__new__(type(self))
        other.spline = self.spline.copy()
        other.resolution = self.resolution
        other.profile = self.profile.copy() if self.profile is not None else None
        other._points = [p.copy() for p in self._points]
        other._sampled_resolution = self._sampled_resolution
        other._sampled_linear_start = self._sampled_linear_start
        return other

    def set_spline(self, spline: Spline) -> None:
        self.spline = spline.copy()
        self.generate(self._sampled_linear_start)

    def get_spline(self) -> Spline:
        return self.spline.copy()

    def set_resolution(self, resolution: int) -> None:
        """Set the samples per curve segment and regenerate."""
        self.resolution = resolution
        self.generate(self._sampled_linear_start)

    def get_resolution(self) -> int:
        return self.resolution

    def generate(self, linear_start: bool = False) -> None:
        """
        Rebuild the sampled polyline from the spline.

        Parameters
        ----------
        linear_start : bool
            Treat the first segment as a straight line so it contributes only
            its start point. Stems attached to a parent use this to avoid
            duplicating the attachment point.
        """
        controls = self.spline.get_controls()
        self._sampled_resolution = self.resolution
        self._sampled_linear_start = linear_start
        self._points = []
        if not controls:
            return

        step = 1.0 / self.resolution
        for curve in range(self.spline.get_curve_count()):
            if curve == 0 and linear_start:
                self._points.append(controls[0].copy())
                continue
            for i in range(self.resolution):
                self._points.append(self.spline.get_curve_point(curve, step * i))
        self._points.append(controls[-1].copy())

    @property
    def points(self) -> List[np.ndarray]:
        return [p.copy() for p in self._points]

    def get(self, index: Optional[int] = None):
        """Return every sample, or the sample at ``index``."""
        if index is None:
            return self.points
        return self._points[index].copy()

    @property
    def size(self) -> int:
        return len(self._points)

    def get_size(self) -> int:
        return len(self._points)

    def to_path_index(self, control_index: int) -> int:
        """
        Map a spline control index to the sample index of its segment start.

        Handles map onto the sample of the anchor that starts their segment.
        """
        curve = control_index // self.spline.get_degree()
        if self._sampled_linear_start:
            if curve == 0:
                return 0
            return 1 + (curve - 1) * self._sampled_resolution
        return curve * self._sampled_resolution

    def _segment_length(self, index: int) -> float:
        return magnitude(self._points[index + 1] - self._points[index])

    def get_length(self) -> float:
        return sum(self._segment_length(i) for i in range(len(self._points) - 1))

    def get_distance_between(self, start: int, end: int) -> float:
        """Arc length between two sample indices."""
        return sum(self._segment_length(i) for i in range(start, end))

    def get_distance(self, control_index: int) -> float:
        """Arc length from the path start to the sample of a control point."""
        return self.get_distance_between(0, self.to_path_index(control_index))

    def get_intermediate_distance(self, control_index: int) -> float:
        """Arc length between a control point's sample and the next anchor's."""
        degree = self.spline.get_degree()
        start = self.to_path_index(control_index)
        end = self.to_path_index(control_index + degree)
        return self.get_distance_between(start, end)

    def get_direction(self, index: int) -> np.ndarray:
        """Direction of the polyline segment starting at sample ``index``."""
        if index >= len(self._points) - 1:
            return _direction_or_default(self._points[index] - self._points[index - 1])
        return _direction_or_default(self._points[index + 1] - self._points[index])

    def get_average_direction(self, index: int) -> np.ndarray:
        """Average of the incoming and outgoing directions at sample ``index``."""
        last = len(self._points) - 1
        if index == 0 or index >= last:
            return self.get_direction(index)
        before = normalize(self._points[index] - self._points[index - 1])
        after = normalize(self._points[index + 1] - self._points[index])
        return _direction_or_default(before + after)

    def get_intermediate(self, distance: float) -> np.ndarray:
        """
        Point at arc length ``distance`` along the path.

        Distances past either end clamp to the end points. A path with fewer
        than two samples has no arc length and yields a NaN vector.
        """
        if len(self._points) < 2:
            return nan_vec3()
        if distance <= 0.0:
            return self._points[0].copy()

        point = nan_vec3()
        total = 0.0
        for i in range(len(self._points) - 1):
            length = self._segment_length(i)
            if total + length >= distance:
                point = (distance - total) * self.get_direction(i) + self._points[i]
                break
            total += length
        if np.isnan(point[0]):
            return self._points[-1].copy()
        return point

    def get_intermediate_direction(self, distance: float) -> np.ndarray:
        """Direction of the segment containing arc length ``distance``."""
        return self.get_direction(self.get_index(distance))

    def get_index(self, distance: float) -> int:
        """Sample index starting the segment that contains ``distance``."""
        total = 0.0
        for i in range(len(self._points) - 1):
            total += self._segment_length(i)
            if total >= distance:
                return i
        return max(len(self._points) - 2, 0)

    def get_radius(self, index: int) -> float:
        """Radius at sample ``index``; paths without a profile have zero radius."""
        if self.profile is None:
            return 0.0
        length = self.get_length()
        t = self.get_distance_between(0, index) / length if length > 0.0 else 0.0
        return self.profile.evaluate(t)

    def get_intermediate_radius(self, t: float) -> float:
        """Radius at arc-length fraction ``t`` in [0, 1]."""
        if self.profile is None:
            return 0.0
        return self.profile.evaluate(t)


class VolumetricPath(Path):
    """
    A ``Path`` that always carries a radius profile.

    The profile's spline is a 1D curve with the radius fraction in z.
    """

    def __init__(
        self,
        spline: Optional[Spline] = None,
        resolution: int = DEFAULT_RESOLUTION,
        profile: Optional[RadiusProfile] = None,
    ):
        super().__init__(spline, resolution, profile or RadiusProfile())

    def set_radius(self, spline: Spline) -> None:
        self.profile.spline = spline.copy()

    def get_radius_curve(self) -> Spline:
        return self.profile.spline.copy()

    def set_min_radius(self, radius: float) -> None:
        self.profile.min_radius = radius

    def get_min_radius(self) -> float:
        return self.profile.min_radius

    def set_max_radius(self, radius: float) -> None:
        self.profile.max_radius = radius

    def get_max_radius(self) -> float:
        return self.profile.max_radius


__all__ = [
    "Path",
    "VolumetricPath",
    "RadiusProfile",
    "DEFAULT_RESOLUTION",
    "DEFAULT_MIN_RADIUS",
    "DEFAULT_MAX_RADIUS",
]
