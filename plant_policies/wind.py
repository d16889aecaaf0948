"""
Wind animation policy.

UNIT CONVENTIONS
----------------
``time_step`` is in animation ticks per keyframe; ``direction`` need not be
normalized.
"""

from dataclasses import dataclass, asdict
from typing import Dict, Any, List, Optional, Tuple

from .base import alias_fields, coerce_float, coerce_int, coerce_vec3


@dataclass
class WindPolicy:
    """
    Parameters of the wind sway animation.

    Attributes:
        direction: Wind direction. Default +x.
        speed: Wind speed; 0 disables the animation. Default 1.0.
        resistance: Stiffness of the plant; sway intensity is divided by
            it. Default 1.0.
        threshold: Joints on stems thinner than this do not sway.
            Default 0.0.
        time_step: Ticks between keyframes. Default 30.
        frame_count: Keyframes per joint. Default 21.
        seed: Seed of the phase offsets. Default None, which draws them
            from the plant's ID generator.

    JSON Schema:
    {
        "direction": [float, float, float],
        "speed": float,
        "resistance": float,
        "threshold": float,
        "time_step": int,
        "frame_count": int (legacy alias "frames"),
        "seed": int or null
    }
    """
    direction: Tuple[float, float, float] = (1.0, 0.0, 0.0)
    speed: float = 1.0
    resistance: float = 1.0
    threshold: float = 0.0
    time_step: int = 30
    frame_count: int = 21
    seed: Optional[int] = None

    def __post_init__(self):
        self.direction = coerce_vec3(self.direction, (1.0, 0.0, 0.0))

    @property
    def duration(self) -> int:
        """Length of the animation in ticks."""
        return (self.frame_count - 1) * self.time_step

    def validate(self) -> List[str]:
        errors = []
        if self.time_step < 1:
            errors.append(f"time_step must be at least 1, got {self.time_step}")
        if self.frame_count < 2:
            errors.append(f"frame_count must be at least 2, got {self.frame_count}")
        if self.resistance <= 0:
            errors.append(f"resistance must be positive, got {self.resistance}")
        if self.direction == (0.0, 0.0, 0.0):
            errors.append("direction must be non-zero")
        return errors

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["direction"] = list(self.direction)
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "WindPolicy":
        d = alias_fields(d, {"frames": "frame_count", "timestep": "time_step"})
        defaults = cls()
        return cls(
            direction=coerce_vec3(d.get("direction"), defaults.direction),
            speed=coerce_float(d.get("speed"), defaults.speed),
            resistance=coerce_float(d.get("resistance"), defaults.resistance),
            threshold=coerce_float(d.get("threshold"), defaults.threshold),
            time_step=coerce_int(d.get("time_step"), defaults.time_step),
            frame_count=coerce_int(d.get("frame_count"), defaults.frame_count),
            seed=coerce_int(d.get("seed"), defaults.seed),
        )


__all__ = ["WindPolicy"]
