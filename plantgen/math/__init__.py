"""Vector, quaternion and matrix kernel for plant geometry."""

from .vector import (
    EPSILON,
    vec2,
    vec3,
    vec4,
    as_vec,
    nan_vec3,
    to_vec4,
    to_vec3,
    dot,
    cross,
    magnitude,
    normalize,
    is_zero,
    is_nan,
    lerp,
    project,
    project_onto_plane,
    rotate_around_axis,
    angle,
    perp,
    vectors_equal,
)
from .quat import (
    Quat,
    to_quat,
    conjugate,
    from_axis_angle,
    nlerp,
    slerp,
    rotate_into_vec_q,
    rotate,
    to_mat4,
)
from .bezier import bezier, cubic_bezier, linear_bezier, quadratic_bezier, bernstein_term
from . import mat4

__all__ = [
    "EPSILON",
    "vec2",
    "vec3",
    "vec4",
    "as_vec",
    "nan_vec3",
    "to_vec4",
    "to_vec3",
    "dot",
    "cross",
    "magnitude",
    "normalize",
    "is_zero",
    "is_nan",
    "lerp",
    "project",
    "project_onto_plane",
    "rotate_around_axis",
    "angle",
    "perp",
    "vectors_equal",
    "Quat",
    "to_quat",
    "conjugate",
    "from_axis_angle",
    "nlerp",
    "slerp",
    "rotate_into_vec_q",
    "rotate",
    "to_mat4",
    "bezier",
    "cubic_bezier",
    "linear_bezier",
    "quadratic_bezier",
    "bernstein_term",
    "mat4",
]
