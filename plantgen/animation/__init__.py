"""Wind skeleton generation and keyframe animation."""

from .animation import KeyFrame, Animation
from .wind import Wind, SWAY_FACTOR
from .skeleton import joints_in_order, skeleton, skeleton_root

__all__ = [
    "KeyFrame",
    "Animation",
    "Wind",
    "SWAY_FACTOR",
    "joints_in_order",
    "skeleton",
    "skeleton_root",
]
