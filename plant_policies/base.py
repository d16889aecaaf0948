"""
Shared helpers for plant policies.

Policies are plain dataclasses holding the tunable defaults of an operation.
Operations that can degrade gracefully return an ``OperationReport`` next to
their result so callers can see which inputs were adjusted or ignored.
"""

from dataclasses import dataclass, field, asdict
from typing import Optional, Dict, Any, List, Tuple
import json


def validate_policy(policy: Any, required_fields: Optional[List[str]] = None) -> List[str]:
    """
    Check that the named fields of a policy are present and set.

    Parameters
    ----------
    policy : Any
        Policy dataclass instance to validate
    required_fields : List[str], optional
        Field names that must be non-None

    Returns
    -------
    List[str]
        Validation error messages (empty if valid)
    """
    errors = []
    for field_name in required_fields or []:
        if not hasattr(policy, field_name):
            errors.append(f"Missing required field: {field_name}")
        elif getattr(policy, field_name) is None:
            errors.append(f"Required field is None: {field_name}")
    return errors


def coerce_float(value: Any, default: float = 0.0) -> float:
    """Convert ``value`` to float, returning ``default`` if that fails."""
    if value is None:
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def coerce_int(value: Any, default: int = 0) -> int:
    """Convert ``value`` to int, returning ``default`` if that fails."""
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def coerce_vec3(
    value: Any,
    default: Tuple[float, float, float] = (0.0, 0.0, 0.0)
) -> Tuple[float, float, float]:
    """
    Convert a value to a 3D vector tuple.

    Accepts a sequence of three numbers (including numpy arrays), an object
    with ``x``, ``y`` and ``z`` attributes, or a dict with those keys.
    Anything else yields ``default``.
    """
    if value is None:
        return default

    if hasattr(value, "__len__") and not isinstance(value, (str, dict)) and len(value) >= 3:
        try:
            return (float(value[0]), float(value[1]), float(value[2]))
        except (TypeError, ValueError, KeyError):
            return default

    if hasattr(value, "x") and hasattr(value, "y") and hasattr(value, "z"):
        try:
            return (float(value.x), float(value.y), float(value.z))
        except (TypeError, ValueError):
            return default

    if isinstance(value, dict) and "x" in value and "y" in value and "z" in value:
        try:
            return (float(value["x"]), float(value["y"]), float(value["z"]))
        except (TypeError, ValueError):
            return default

    return default


def alias_fields(d: Dict[str, Any], aliases: Dict[str, str]) -> Dict[str, Any]:
    """
    Rename legacy keys of ``d`` to their canonical names.

    A legacy key is dropped in favour of its canonical key when both exist.
    """
    result = d.copy()
    for legacy_name, canonical_name in aliases.items():
        if legacy_name in result:
            value = result.pop(legacy_name)
            result.setdefault(canonical_name, value)
    return result


@dataclass
class OperationReport:
    """
    Outcome of a policy-driven operation.

    Records the policy as requested and as actually applied, plus warnings,
    errors and operation-specific metrics.
    """
    operation: str = "unknown"
    success: bool = True
    requested_policy: Dict[str, Any] = field(default_factory=dict)
    effective_policy: Dict[str, Any] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    metrics: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)

    def add_error(self, message: str) -> None:
        """Add an error message and mark the operation as failed."""
        self.errors.append(message)
        self.success = False

    def merge(self, other: "OperationReport") -> None:
        """Fold another report into this one."""
        self.warnings.extend(other.warnings)
        self.errors.extend(other.errors)
        if not other.success:
            self.success = False
        self.metrics.update(other.metrics)


__all__ = [
    "OperationReport",
    "validate_policy",
    "coerce_float",
    "coerce_int",
    "coerce_vec3",
    "alias_fields",
]
