"""
Keyframed skeletal animation.

``Animation.frames[joint_id][frame]`` holds one ``KeyFrame`` per joint and
frame, with each joint's rotation and translation relative to its parent
joint. ``get_frame`` blends the two keyframes around a tick and composes the
results down the joint tree (forward kinematics).
"""

from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from ..math import Quat, vec3, nlerp, rotate
from ..core.stem import Stem


@dataclass
class KeyFrame:
    """
    Pose of one joint.

    Attributes:
        rotation: Rotation relative to the parent joint.
        translation: Offset from the parent joint.
        final_translation: Offset from the skeleton root after the
            ancestors' rotations are applied (set on blended frames).
        time: Tick at which the keyframe is reached.
    """
    rotation: Quat = field(default_factory=Quat.identity)
    translation: np.ndarray = field(default_factory=vec3)
    final_translation: np.ndarray = field(default_factory=vec3)
    time: int = 0

    def __eq__(self, other) -> bool:
        if not isinstance(other, KeyFrame):
            return NotImplemented
        return (
            self.rotation == other.rotation
            and np.array_equal(self.translation, other.translation)
            and np.array_equal(self.final_translation, other.final_translation)
            and self.time == other.time
        )

    def copy(self) -> "KeyFrame":
        return KeyFrame(
            Quat(self.rotation.x, self.rotation.y, self.rotation.z, self.rotation.w),
            self.translation.copy(),
            self.final_translation.copy(),
            self.time,
        )


class Animation:
    """
    Keyframes for every joint of a skeleton.

    Parameters
    ----------
    time_step : int
        Ticks between consecutive keyframes
    frames : list of list of KeyFrame, optional
        Keyframes indexed by joint ID, then frame
    """

    def __init__(self, time_step: int = 30, frames: Optional[List[List[KeyFrame]]] = None):
        self.time_step = time_step
        self.frames: List[List[KeyFrame]] = frames if frames is not None else []
        self._mixed: List[KeyFrame] = []

    def __repr__(self) -> str:
        return (
            f"Animation(joints={len(self.frames)}, frames={self.frame_count}, "
            f"time_step={self.time_step})"
        )

    @property
    def joint_count(self) -> int:
        return len(self.frames)

    @property
    def frame_count(self) -> int:
        return len(self.frames[0]) if self.frames else 0

    def get_frame_count(self) -> int:
        return self.frame_count

    @property
    def duration(self) -> int:
        """Ticks from the first to the last keyframe."""
        return max(self.frame_count - 1, 0) * self.time_step

    def get_frame(self, ticks: int, root: Stem) -> List[KeyFrame]:
        """
        Blended pose of every joint at ``ticks``.

        Parameters
        ----------
        ticks : int
            Time since the start of the animation; ticks past the end hold
            the last keyframe
        root : Stem
            Root of the stem tree the skeleton was generated from

        Returns
        -------
        list of KeyFrame
            One blended frame per joint, indexed by joint ID
        """
        if not self.frames:
            return []
        last = self.frame_count - 1
        index1 = min(ticks // self.time_step, last)
        index2 = min(index1 + 1, last)
        t = (ticks % self.time_step) / float(self.time_step)
        if index1 == last:
            t = 0.0

        self._mixed = [KeyFrame(time=ticks) for _ in self.frames]
        stack = [root]
        while stack:
            stem = stack.pop()
            self._blend_stem(stem, index1, index2, t)
            stack.extend(reversed(list(stem.iter_children())))
        return self._mixed

    def _blend_stem(self, stem: Stem, index1: int, index2: int, t: float) -> None:
        for joint in stem.joints:
            frame1 = self.frames[joint.id][index1]
            frame2 = self.frames[joint.id][index2]
            frame = self._mixed[joint.id]
            if t == 0.0:
                r = frame1.rotation
                rotation = Quat(r.x, r.y, r.z, r.w)
            else:
                rotation = nlerp(frame1.rotation, frame2.rotation, t)

            if joint.parent_id >= 0:
                prev = self._mixed[joint.parent_id]
                frame.translation = prev.translation + frame1.translation
                frame.rotation = rotation * prev.rotation
                frame.final_translation = (
                    rotate(prev.rotation, frame1.translation) + prev.final_translation
                )
            else:
                frame.rotation = rotation
                frame.translation = frame1.translation.copy()
                frame.final_translation = frame1.translation.copy()


__all__ = ["KeyFrame", "Animation"]
