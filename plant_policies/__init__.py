"""
Plant policies: JSON-serializable configuration for plant operations.

Usage:
    from plant_policies import PathPolicy, WindPolicy, OperationReport
"""

from .base import (
    OperationReport,
    validate_policy,
    coerce_float,
    coerce_int,
    coerce_vec3,
    alias_fields,
)
from .path import PathPolicy
from .wind import WindPolicy

__all__ = [
    "OperationReport",
    "validate_policy",
    "coerce_float",
    "coerce_int",
    "coerce_vec3",
    "alias_fields",
    "PathPolicy",
    "WindPolicy",
]
