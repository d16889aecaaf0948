"""
Unit tests for keyframe blending in Animation.get_frame.

The hand-built skeleton has a root joint rotated a quarter turn about +z and
one child joint one unit further along +x.
"""

import math

import pytest
import numpy as np

from plantgen.animation import Animation, KeyFrame
from plantgen.core import Joint, Plant
from plantgen.math import Quat, from_axis_angle, rotate, vec3

QUARTER_TURN = from_axis_angle(vec3(0.0, 0.0, 1.0), math.pi / 2.0)


def two_joint_plant():
    plant = Plant()
    root = plant.set_default()
    child = plant.add_stem(root)
    root.add_joint(Joint(0, -1, 0))
    child.add_joint(Joint(1, 0, 0))
    return plant


def two_joint_animation(first_rotation=QUARTER_TURN):
    root_frames = [
        KeyFrame(first_rotation, vec3(1.0, 0.0, 0.0)),
        KeyFrame(QUARTER_TURN, vec3(1.0, 0.0, 0.0)),
    ]
    child_frames = [
        KeyFrame(Quat.identity(), vec3(1.0, 0.0, 0.0)),
        KeyFrame(Quat.identity(), vec3(1.0, 0.0, 0.0)),
    ]
    return Animation(30, [root_frames, child_frames])


class TestAnimationBlend:
    """Tests for blending and composing keyframes."""

    def test_counts(self):
        """Counts and duration follow the keyframe table."""
        animation = two_joint_animation()
        assert animation.joint_count == 2
        assert animation.get_frame_count() == 2
        assert animation.duration == 30

    def test_keyframe_is_reproduced(self):
        """On a keyframe tick the root pose is the stored keyframe."""
        plant = two_joint_plant()
        animation = two_joint_animation()
        frames = animation.get_frame(0, plant.get_root())
        assert frames[0].rotation == animation.frames[0][0].rotation
        np.testing.assert_array_equal(frames[0].translation, vec3(1.0, 0.0, 0.0))
        np.testing.assert_array_equal(frames[0].final_translation, vec3(1.0, 0.0, 0.0))

    def test_child_composition(self):
        """Child poses accumulate the parent's translation and rotation."""
        plant = two_joint_plant()
        frames = two_joint_animation().get_frame(0, plant.get_root())
        child = frames[1]
        np.testing.assert_allclose(child.translation, vec3(2.0, 0.0, 0.0))
        np.testing.assert_allclose(child.final_translation, vec3(1.0, 1.0, 0.0), atol=1e-12)
        assert child.rotation.z == pytest.approx(QUARTER_TURN.z)
        assert child.rotation.w == pytest.approx(QUARTER_TURN.w)

    def test_blend_between_keyframes(self):
        """Half way between keyframes the rotation is half way too."""
        plant = two_joint_plant()
        animation = two_joint_animation(first_rotation=Quat.identity())
        frames = animation.get_frame(15, plant.get_root())
        half = math.sqrt(0.5)
        direction = rotate(frames[0].rotation, vec3(1.0, 0.0, 0.0))
        np.testing.assert_allclose(direction, vec3(half, half, 0.0), atol=1e-12)
        np.testing.assert_allclose(
            frames[1].final_translation, vec3(1.0 + half, half, 0.0), atol=1e-12
        )

    def test_ticks_past_end_hold_last_frame(self):
        """Late ticks clamp to the final keyframe."""
        plant = two_joint_plant()
        animation = two_joint_animation(first_rotation=Quat.identity())
        frames = animation.get_frame(1000, plant.get_root())
        assert frames[0].rotation == QUARTER_TURN
        assert frames[0].time == 1000

    def test_empty_animation(self):
        """Animations without joints blend to nothing."""
        plant = two_joint_plant()
        assert Animation().get_frame(10, plant.get_root()) == []

    def test_keyframe_copy(self):
        """Copied keyframes are equal and independent."""
        frame = KeyFrame(QUARTER_TURN, vec3(1.0, 2.0, 3.0))
        duplicate = frame.copy()
        assert duplicate == frame
        duplicate.translation[0] = 5.0
        assert frame.translation[0] == 1.0

    def test_blended_pose_is_detached(self):
        """Editing a blended pose leaves the stored keyframes untouched."""
        plant = two_joint_plant()
        animation = two_joint_animation()
        frames = animation.get_frame(0, plant.get_root())
        frames[0].rotation.x = 5.0
        frames[0].translation[0] = 7.0
        assert animation.frames[0][0].rotation.x == 0.0
        np.testing.assert_array_equal(animation.frames[0][0].translation, vec3(1.0, 0.0, 0.0))
