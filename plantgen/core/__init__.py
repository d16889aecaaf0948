"""Plant geometry: splines, paths, stems and the plant hierarchy."""

from .spline import Spline, SUPPORTED_DEGREES, DEFAULT_TANGENT
from .curve import Curve
from .path import Path, VolumetricPath, RadiusProfile
from .ids import IDGenerator
from .joint import Joint
from .leaf import Leaf
from .stem import Stem, StemMaterial, update_positions
from .plant import Plant, PlantError, StemPool, ExtractedStem, POOL_CAPACITY

__all__ = [
    "Spline",
    "SUPPORTED_DEGREES",
    "DEFAULT_TANGENT",
    "Curve",
    "Path",
    "VolumetricPath",
    "RadiusProfile",
    "IDGenerator",
    "Joint",
    "Leaf",
    "Stem",
    "StemMaterial",
    "update_positions",
    "Plant",
    "PlantError",
    "StemPool",
    "ExtractedStem",
    "POOL_CAPACITY",
]
