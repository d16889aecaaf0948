"""
Path sampling policy.

UNIT CONVENTIONS
----------------
Radii are in plant units.
"""

from dataclasses import dataclass, asdict
from typing import Dict, Any, List

from .base import alias_fields, coerce_float, coerce_int


@dataclass
class PathPolicy:
    """
    Defaults applied to the paths of newly created stems.

    Attributes:
        resolution: Samples per curve segment. Default 2.
        min_radius: Radius floor of the radius profile. Default 0.02.
        max_radius: Radius at a profile value of 1. Default 0.2.
        radius_curve: Spline preset used for the radius profile. Default 0.
    """
    resolution: int = 2
    min_radius: float = 0.02
    max_radius: float = 0.2
    radius_curve: int = 0

    def validate(self) -> List[str]:
        errors = []
        if self.resolution < 1:
            errors.append(f"resolution must be at least 1, got {self.resolution}")
        if self.min_radius < 0:
            errors.append(f"min_radius must be non-negative, got {self.min_radius}")
        if self.max_radius < self.min_radius:
            errors.append(
                f"max_radius ({self.max_radius}) is below min_radius ({self.min_radius})"
            )
        if self.radius_curve not in (0, 1, 2):
            errors.append(f"Unknown radius_curve preset: {self.radius_curve}")
        return errors

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "PathPolicy":
        d = alias_fields(d, {"divisions": "resolution"})
        defaults = cls()
        return cls(
            resolution=coerce_int(d.get("resolution"), defaults.resolution),
            min_radius=coerce_float(d.get("min_radius"), defaults.min_radius),
            max_radius=coerce_float(d.get("max_radius"), defaults.max_radius),
            radius_curve=coerce_int(d.get("radius_curve"), defaults.radius_curve),
        )


__all__ = ["PathPolicy"]
