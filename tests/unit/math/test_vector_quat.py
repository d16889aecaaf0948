"""
Unit tests for the vector, quaternion, matrix and Bezier kernel.
"""

import math

import pytest
import numpy as np

from plantgen.math import (
    Quat,
    vec2,
    vec3,
    normalize,
    magnitude,
    is_nan,
    nan_vec3,
    perp,
    lerp,
    rotate,
    from_axis_angle,
    rotate_into_vec_q,
    nlerp,
    slerp,
    conjugate,
    bezier,
    cubic_bezier,
    bernstein_term,
    vectors_equal,
    mat4,
)
from plantgen.math.quat import inverse, normalize as normalize_quat


class TestVectors:
    """Tests for vector helpers."""

    def test_vec2_magnitude(self):
        """A (0, 2) vector has magnitude 2."""
        assert magnitude(vec2(0.0, 2.0)) == 2.0

    def test_normalize_zero_vector_stays_zero(self):
        """Normalizing a zero vector must not produce NaN."""
        result = normalize(vec3())
        assert not is_nan(result)
        np.testing.assert_array_equal(result, vec3())

    def test_normalize_unit_length(self):
        """Normalized vectors have unit length."""
        assert magnitude(normalize(vec3(3.0, 4.0, 12.0))) == pytest.approx(1.0)

    def test_perp_is_counter_clockwise(self):
        """perp rotates a 2D vector a quarter turn counter-clockwise."""
        np.testing.assert_array_equal(perp(vec2(1.0, 0.0)), vec2(-0.0, 1.0))

    def test_lerp_midpoint(self):
        """lerp at 0.5 is the midpoint."""
        np.testing.assert_allclose(lerp(vec3(0, 0, 0), vec3(2, 4, 6), 0.5), vec3(1, 2, 3))

    def test_vectors_equal_treats_nan_as_equal(self):
        """NaN sentinels compare equal to each other."""
        assert vectors_equal([nan_vec3()], [nan_vec3()])
        assert not vectors_equal([vec3()], [vec3(), vec3()])


class TestQuat:
    """Tests for quaternion arithmetic and rotations."""

    def test_hamilton_product_i_times_j_is_k(self):
        """i * j = k."""
        result = Quat(1.0, 0.0, 0.0, 0.0) * Quat(0.0, 1.0, 0.0, 0.0)
        assert result == Quat(0.0, 0.0, 1.0, 0.0)

    def test_identity_is_neutral(self):
        """Multiplying by the identity leaves a quaternion unchanged."""
        q = Quat(0.1, 0.2, 0.3, 0.9)
        assert q * Quat.identity() == q
        assert Quat.identity() * q == q

    def test_scalar_multiplication(self):
        """Scalars scale every component from either side."""
        q = Quat(1.0, 2.0, 3.0, 4.0)
        assert q * 2.0 == Quat(2.0, 4.0, 6.0, 8.0)
        assert 2.0 * q == Quat(2.0, 4.0, 6.0, 8.0)

    def test_rotate_quarter_turn_about_z(self):
        """A quarter turn about z takes +x to +y."""
        q = from_axis_angle(vec3(0.0, 0.0, 1.0), math.pi / 2)
        np.testing.assert_allclose(rotate(q, vec3(1.0, 0.0, 0.0)), vec3(0.0, 1.0, 0.0), atol=1e-12)

    def test_rotate_into_vec_q(self):
        """The shortest-arc rotation maps the normal onto the direction."""
        q = rotate_into_vec_q(vec3(0.0, 0.0, 1.0), vec3(1.0, 0.0, 0.0))
        np.testing.assert_allclose(rotate(q, vec3(0.0, 0.0, 1.0)), vec3(1.0, 0.0, 0.0), atol=1e-12)

    def test_rotate_into_opposite_vector(self):
        """Opposite vectors get a half turn instead of a degenerate result."""
        q = rotate_into_vec_q(vec3(0.0, 0.0, 1.0), vec3(0.0, 0.0, -1.0))
        np.testing.assert_allclose(rotate(q, vec3(0.0, 0.0, 1.0)), vec3(0.0, 0.0, -1.0), atol=1e-12)

    def test_conjugate_undoes_unit_rotation(self):
        """q * conj(q) is the identity for unit quaternions."""
        q = from_axis_angle(normalize(vec3(1.0, 1.0, 0.0)), 0.7)
        result = q * conjugate(q)
        assert result.w == pytest.approx(1.0)
        np.testing.assert_allclose(result.vector, vec3(), atol=1e-12)

    def test_inverse_of_scaled_quaternion(self):
        """inverse works for non-unit quaternions."""
        q = Quat(0.0, 0.0, 0.0, 2.0)
        assert inverse(q) == Quat(-0.0, -0.0, -0.0, 0.5)

    def test_normalize_zero_quaternion_is_identity(self):
        """A zero quaternion normalizes to the identity."""
        assert normalize_quat(Quat(0.0, 0.0, 0.0, 0.0)) == Quat.identity()

    def test_nlerp_endpoints(self):
        """nlerp returns its endpoints at t = 0 and t = 1."""
        a = Quat.identity()
        b = from_axis_angle(vec3(0.0, 1.0, 0.0), 1.0)
        assert nlerp(a, b, 0.0) == a
        end = nlerp(a, b, 1.0)
        np.testing.assert_allclose(end.to_array(), b.to_array(), atol=1e-12)

    def test_nlerp_accepts_numpy_scalar(self):
        """numpy scalars are accepted as blend factors."""
        result = nlerp(Quat.identity(), Quat.identity(), np.float64(0.5))
        assert isinstance(result, Quat)

    def test_slerp_identical_returns_copy(self):
        """slerp between identical rotations returns the first one."""
        a = Quat.identity()
        result = slerp(a, Quat.identity(), 0.3)
        assert result == a
        assert result is not a

    def test_dict_round_trip(self):
        """Quaternions serialize to plain dicts."""
        q = Quat(0.1, 0.2, 0.3, 0.4)
        assert Quat.from_dict(q.to_dict()) == q


class TestMat4:
    """Tests for 4x4 matrix helpers."""

    def test_translate_moves_points_not_directions(self):
        """Translation applies with w = 1 and is ignored with w = 0."""
        m = mat4.translate(vec3(1.0, 2.0, 3.0))
        np.testing.assert_allclose(mat4.apply(m, vec3()), vec3(1.0, 2.0, 3.0))
        np.testing.assert_allclose(mat4.apply(m, vec3(1.0, 0.0, 0.0), 0.0), vec3(1.0, 0.0, 0.0))

    def test_scale(self):
        """Scaling multiplies each axis."""
        m = mat4.scale(vec3(2.0, 3.0, 4.0))
        np.testing.assert_allclose(mat4.apply(m, vec3(1.0, 1.0, 1.0)), vec3(2.0, 3.0, 4.0))

    def test_rotate_into_vec_matches_quaternion(self):
        """The matrix and quaternion forms agree."""
        normal = vec3(0.0, 0.0, 1.0)
        direction = vec3(1.0, 0.0, 0.0)
        m = mat4.rotate_into_vec(normal, direction)
        np.testing.assert_allclose(mat4.apply(m, normal, 0.0), direction, atol=1e-12)

    def test_transpose(self):
        """transpose swaps rows and columns."""
        m = mat4.translate(vec3(1.0, 2.0, 3.0))
        t = mat4.transpose(m)
        np.testing.assert_array_equal(t[:3, 3], [1.0, 2.0, 3.0])


class TestBezier:
    """Tests for Bezier evaluation."""

    def test_cubic_with_even_controls_is_linear(self):
        """Evenly spaced collinear controls give a linear parameterization."""
        points = [vec3(0, 0, 0), vec3(1, 0, 0), vec3(2, 0, 0), vec3(3, 0, 0)]
        np.testing.assert_allclose(bezier(0.5, points), vec3(1.5, 0.0, 0.0))

    def test_endpoints(self):
        """Bezier curves interpolate their end points."""
        points = [vec3(0, 0, 0), vec3(0, 5, 0), vec3(3, 5, 0), vec3(3, 0, 0)]
        np.testing.assert_allclose(cubic_bezier(0.0, *points), points[0])
        np.testing.assert_allclose(cubic_bezier(1.0, *points), points[3])

    def test_general_degree_matches_closed_form(self):
        """The Bernstein sum agrees with the cubic closed form."""
        points = [vec3(0, 0, 0), vec3(0, 5, 0), vec3(3, 5, 0), vec3(3, 0, 0)]
        t = 0.3
        expected = cubic_bezier(t, *points)
        result = sum(bernstein_term(t, i, 3) * p for i, p in enumerate(points))
        np.testing.assert_allclose(result, expected)

    def test_quartic_falls_back_to_bernstein(self):
        """Five control points evaluate through the general form."""
        points = [vec3(float(i), 0.0, 0.0) for i in range(5)]
        np.testing.assert_allclose(bezier(0.5, points), vec3(2.0, 0.0, 0.0))
