"""
Unit tests for wind skeleton generation and keyframes.

The test plant is a stepped stem of four cubic segments with six children
sharing its path, positioned at arc lengths 0 to 3 along the root.
"""

import logging

import pytest
import numpy as np

from plant_policies import WindPolicy
from plantgen.animation import Wind, joints_in_order
from plantgen.core import IDGenerator, Plant, Spline, VolumetricPath
from plantgen.math import Quat, vec3

CHILD_POSITIONS = (0.0, 0.5, 1.0, 2.0, 2.5, 3.0)


def stepped_path():
    spline = Spline()
    spline.add_control(vec3(0.0, 0.0, 0.0))
    for i in range(4):
        spline.add_control(vec3(i, i + 0.5, i))
        spline.add_control(vec3(i, i + 0.5, i))
        spline.add_control(vec3(i, i + 1.0, i))
    return VolumetricPath(spline, resolution=2)


def build_plant(seed=None):
    plant = Plant(IDGenerator(seed=seed))
    root = plant.create_root()
    path = stepped_path()
    root.set_path(path)
    for position in CHILD_POSITIONS:
        child = plant.add_stem(root)
        child.set_path(path)
        child.set_position(position)
    return plant


class TestJointGeneration:
    """Tests for the skeleton built by Wind.generate."""

    def test_joint_count(self):
        """Root anchors and child anchors past the first become joints."""
        plant = build_plant()
        animation, report = Wind().generate(plant)
        assert report.success
        assert report.metrics["joint_count"] == 22
        assert animation.joint_count == 22
        root = plant.get_root()
        assert len(root.joints) == 4
        assert all(len(child.joints) == 3 for child in root.iter_children())

    def test_ids_are_dense_and_ordered(self):
        """Joint IDs run from zero and parents precede children."""
        plant = build_plant()
        Wind().generate(plant)
        joints = joints_in_order(plant)
        assert [joint.id for joint in joints] == list(range(22))
        assert joints[0].parent_id == -1
        assert plant.get_root().joints[0].id == 0
        assert all(0 <= joint.parent_id < joint.id for joint in joints[1:])

    def test_joint_data(self):
        """Joints index into their stem's samples and carry world locations."""
        plant = build_plant()
        Wind().generate(plant)
        for stem in plant.iter_stems():
            for joint in stem.joints:
                assert 0 <= joint.path_index < stem.path.get_size()
                assert 0.0 <= joint.location[1] <= 100.0
                expected = stem.location + stem.path.get(joint.path_index)
                np.testing.assert_allclose(joint.location, expected)

    def test_children_attach_to_enclosing_joint(self):
        """Children hang from the first root joint that reaches past them."""
        plant = build_plant()
        Wind().generate(plant)
        root = plant.get_root()
        first = root.joints[0].id
        for child in root.iter_children():
            if child.position < 1.0:
                assert child.joints[0].parent_id == first
            else:
                assert child.joints[0].parent_id != first

    def test_regenerate_replaces_joints(self):
        """Running the wind twice does not accumulate joints."""
        plant = build_plant()
        wind = Wind()
        wind.generate(plant)
        animation, _ = wind.generate(plant)
        assert len(joints_in_order(plant)) == 22
        assert animation.joint_count == 22


class TestKeyFrames:
    """Tests for the synthesized keyframes."""

    def test_frame_layout(self):
        """Every joint gets one keyframe per frame."""
        policy = WindPolicy(frame_count=5, time_step=10)
        animation, report = Wind(policy).generate(build_plant())
        assert animation.frame_count == 5
        assert all(len(frames) == 5 for frames in animation.frames)
        assert animation.duration == 40
        assert report.metrics["duration"] == 40
        assert [frame.time for frame in animation.frames[0]] == [0, 10, 20, 30, 40]

    def test_first_joint_of_each_stem_is_rigid(self):
        """Stem base joints only translate."""
        plant = build_plant()
        animation, _ = Wind().generate(plant)
        for stem in plant.iter_stems():
            frames = animation.frames[stem.joints[0].id]
            assert all(frame.rotation == Quat.identity() for frame in frames)

    def test_root_translation_is_stem_location(self):
        """The skeleton root is placed at the root stem's location."""
        plant = build_plant()
        animation, _ = Wind().generate(plant)
        np.testing.assert_array_equal(animation.frames[0][0].translation, vec3())

    def test_translations_are_relative(self):
        """Joint translations are offsets from the parent joint."""
        plant = build_plant()
        animation, _ = Wind().generate(plant)
        root = plant.get_root()
        a, b = root.joints[0], root.joints[1]
        np.testing.assert_allclose(
            animation.frames[b.id][3].translation, b.location - a.location
        )

    def test_sway_rotations_are_unit(self):
        """Swaying joints get unit rotations that are not all identity."""
        plant = build_plant()
        animation, _ = Wind().generate(plant)
        joint = plant.get_root().joints[1]
        rotations = [frame.rotation for frame in animation.frames[joint.id]]
        norms = [np.linalg.norm(q.to_array()) for q in rotations]
        np.testing.assert_allclose(norms, 1.0)
        assert any(q != Quat.identity() for q in rotations)

    def test_same_seed_is_deterministic(self):
        """Equal seeds produce identical keyframes."""
        first, _ = Wind(WindPolicy(seed=7)).generate(build_plant())
        second, _ = Wind(WindPolicy(seed=7)).generate(build_plant())
        assert first.frames == second.frames

    def test_unseeded_wind_uses_plant_rng(self):
        """Without a policy seed the phases come from the plant's generator."""
        first, _ = Wind().generate(build_plant(seed=11))
        second, _ = Wind().generate(build_plant(seed=11))
        third, _ = Wind().generate(build_plant(seed=12))
        assert first.frames == second.frames
        assert first.frames != third.frames

    def test_threshold_stills_thin_stems(self):
        """Stems thinner than the threshold do not sway."""
        animation, _ = Wind(WindPolicy(threshold=10.0)).generate(build_plant())
        for frames in animation.frames:
            assert all(frame.rotation == Quat.identity() for frame in frames)


class TestWindDegenerate:
    """Tests for inputs that produce no animation."""

    def test_no_root(self, caplog):
        """An empty plant yields an empty animation and a warning."""
        with caplog.at_level(logging.WARNING):
            animation, report = Wind().generate(Plant())
        assert animation.joint_count == 0
        assert report.warnings
        assert "no root" in caplog.text

    def test_zero_speed(self):
        """A still wind produces no joints."""
        plant = build_plant()
        animation, report = Wind(WindPolicy(speed=0.0)).generate(plant)
        assert animation.joint_count == 0
        assert report.success
        assert report.warnings
        assert joints_in_order(plant) == []

    def test_invalid_policy(self):
        """Validation errors fail the report."""
        animation, report = Wind(WindPolicy(frame_count=1)).generate(build_plant())
        assert not report.success
        assert animation.joint_count == 0
        assert any("frame_count" in error for error in report.errors)
