"""
plantgen - procedural plant geometry and wind animation.

Usage:
    from plantgen import Plant, Wind
    plant = Plant()
    root = plant.set_default()
    animation, report = Wind().generate(plant)
"""

from .core import (
    Spline,
    Curve,
    Path,
    VolumetricPath,
    IDGenerator,
    Joint,
    Leaf,
    Stem,
    StemMaterial,
    Plant,
    PlantError,
    StemPool,
    ExtractedStem,
)
from .params import ParameterTree, DerivationTree, StemData, LeafData, Derivation
from .animation import KeyFrame, Animation, Wind, skeleton, joints_in_order

__version__ = "0.1.0"

__all__ = [
    "Spline",
    "Curve",
    "Path",
    "VolumetricPath",
    "IDGenerator",
    "Joint",
    "Leaf",
    "Stem",
    "StemMaterial",
    "Plant",
    "PlantError",
    "StemPool",
    "ExtractedStem",
    "ParameterTree",
    "DerivationTree",
    "StemData",
    "LeafData",
    "Derivation",
    "KeyFrame",
    "Animation",
    "Wind",
    "skeleton",
    "joints_in_order",
]
