"""
Unit tests for leaves, joints, curves and ID allocation.
"""


import pytest
import numpy as np

from plantgen.core import Leaf, Joint, Curve, IDGenerator, Spline
from plantgen.math import vec3


class TestIDGenerator:
    """Tests for IDGenerator."""

    def test_ids_increase(self):
        """IDs are handed out in increasing order."""
        ids = IDGenerator()
        assert [ids.next_id() for _ in range(3)] == [1, 2, 3]

    def test_reserve_skips_used_ids(self):
        """Reserved IDs are never handed out again."""
        ids = IDGenerator()
        ids.reserve(10)
        assert ids.next_id() == 11
        ids.reserve(5)
        assert ids.peek() == 12

    def test_seeded_rng_is_reproducible(self):
        """Generators with the same seed produce the same stream."""
        a = IDGenerator(seed=3).rng.uniform(size=4)
        b = IDGenerator(seed=3).rng.uniform(size=4)
        np.testing.assert_array_equal(a, b)


class TestLeaf:
    """Tests for Leaf."""

    def test_ids_come_from_generator(self):
        """Leaves sharing a generator get distinct IDs."""
        ids = IDGenerator()
        assert Leaf(ids).id != Leaf(ids).id

    def test_leaf_without_generator_has_no_id(self):
        """Leaves built without a generator get an ID later."""
        assert Leaf().id is None

    def test_structural_equality(self):
        """Equality compares every field."""
        leaf = Leaf(IDGenerator())
        duplicate = leaf.copy()
        assert duplicate == leaf
        duplicate.set_scale(vec3(2.0, 2.0, 2.0))
        assert duplicate != leaf

    def test_default_orientation_faces_stem(self):
        """The default orientation turns the leaf normal along the stem."""
        leaf = Leaf()
        direction = leaf.get_direction(vec3(1.0, 0.0, 0.0))
        np.testing.assert_allclose(direction, vec3(1.0, 0.0, 0.0), atol=1e-12)


class TestJoint:
    """Tests for Joint."""

    def test_defaults(self):
        """A default joint is a skeleton root."""
        joint = Joint()
        assert joint.parent_id == -1
        np.testing.assert_array_equal(joint.location, vec3())

    def test_update_location_and_dict(self):
        """Locations are stored as vectors and exported as lists."""
        joint = Joint(3, 1, 4)
        joint.update_location((1.0, 2.0, 3.0))
        d = joint.to_dict()
        assert d == {"id": 3, "parent_id": 1, "path_index": 4, "location": [1.0, 2.0, 3.0]}
        assert joint.copy() == joint


class TestCurve:
    """Tests for Curve."""

    def test_named_preset(self):
        """Curves wrap a copy of their spline."""
        spline = Spline(0)
        curve = Curve(spline, "Bulge")
        spline.set_default(1)
        assert curve.spline == Spline(0)
        assert curve.name == "Bulge"

    def test_copy_equality(self):
        """Copies compare equal."""
        curve = Curve(preset=2, name="Ramp")
        assert curve.copy() == curve
        assert curve != Curve(preset=1, name="Ramp")
