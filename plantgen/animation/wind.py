"""
Wind sway animation.

``Wind.generate`` runs two passes over a finished plant:

1. Joint generation. Every spline anchor of every stem becomes a joint,
   chained along the stem. A child stem is attached to the first parent
   joint placed past the child's position, so joint IDs increase in
   pre-order and every parent joint has a smaller ID than its children.
2. Keyframe synthesis. Each joint after the first on a stem sways around
   its rest direction with an intensity that grows with the segment length
   and the wind speed and shrinks with the stem radius.
"""

from typing import Optional, Tuple
import logging
import math

import numpy as np

from plant_policies import OperationReport, WindPolicy

from ..math import (
    Quat,
    as_vec,
    cross,
    is_zero,
    lerp,
    normalize,
    rotate_into_vec_q,
)
from ..core.joint import Joint
from ..core.plant import Plant
from ..core.stem import Stem
from .animation import Animation, KeyFrame

logger = logging.getLogger(__name__)

# Scale of the sway angle relative to distance * speed / radius^2.
SWAY_FACTOR = 0.1


class Wind:
    """
    Generates a skeleton and sway keyframes for a plant.

    Parameters
    ----------
    policy : WindPolicy, optional
        Direction, speed, timing and seed of the wind
    """

    def __init__(self, policy: Optional[WindPolicy] = None):
        self.policy = policy or WindPolicy()
        self._rng = None
        self._direction = normalize(as_vec(self.policy.direction))

    def __repr__(self) -> str:
        return f"Wind(policy={self.policy!r})"

    @property
    def duration(self) -> int:
        return self.policy.duration

    def generate(self, plant: Plant) -> Tuple[Animation, OperationReport]:
        """
        Build the skeleton of ``plant`` and its sway animation.

        Joints are stored on the stems (with world locations); the returned
        animation holds their keyframes.

        Returns
        -------
        Animation
            Keyframes indexed by joint ID (empty if nothing sways)
        OperationReport
            Requested/effective policy and joint/frame counts
        """
        policy = self.policy
        report = OperationReport(
            operation="wind",
            requested_policy=policy.to_dict(),
            effective_policy=policy.to_dict(),
        )
        animation = Animation(policy.time_step)

        root = plant.get_root()
        if root is None:
            report.add_warning("Plant has no root; nothing to animate")
            logger.warning("Wind animation skipped: plant has no root")
            return animation, report
        if policy.speed <= 0.0:
            report.add_warning(f"Wind speed {policy.speed} disables the animation")
            logger.warning(f"Wind animation skipped: speed is {policy.speed}")
            return animation, report
        for error in policy.validate():
            report.add_error(error)
        if not report.success:
            return animation, report

        if policy.seed is not None:
            self._rng = np.random.default_rng(policy.seed)
        else:
            self._rng = plant.id_gen.rng
        self._direction = normalize(as_vec(policy.direction))
        for stem in plant.iter_stems():
            stem.clear_joints()

        count = self.generate_joints(root) + 1
        animation.frames = [
            [KeyFrame(time=f * policy.time_step) for f in range(policy.frame_count)]
            for _ in range(count)
        ]
        if count > 0:
            self._transform_joints(plant, root, root.get_location(), animation)
        else:
            report.add_warning("Root stem has no anchors; skeleton is empty")

        report.metrics = {
            "joint_count": count,
            "frame_count": policy.frame_count,
            "duration": policy.duration,
        }
        logger.debug(f"Generated {count} joints with {policy.frame_count} keyframes each")
        return animation, report

    def generate_joints(self, stem: Stem, last_id: int = -1, parent_id: int = -1) -> int:
        """
        Place joints on ``stem`` and, recursively, on its children.

        Parameters
        ----------
        stem : Stem
            Stem whose anchors become joints
        last_id : int
            ID of the most recently created joint
        parent_id : int
            ID of the joint the first new joint attaches to

        Returns
        -------
        int
            ID of the last joint created
        """
        path = stem.path
        degree = path.spline.get_degree()
        control_count = path.spline.size
        distance = 0.0

        start_control = degree if stem.parent_handle is not None else 0
        for i in range(start_control, control_count - 1, degree):
            start = path.to_path_index(i)
            end = path.to_path_index(i + degree)
            distance += path.get_distance_between(start, end)

            last_id += 1
            stem.add_joint(Joint(last_id, parent_id, start))
            parent_id = last_id

            for child in stem.iter_children():
                if child.position < distance and not child.has_joints():
                    last_id = self.generate_joints(child, last_id, parent_id)
        return last_id

    def _transform_joints(
        self,
        plant: Plant,
        stem: Stem,
        prev_location: np.ndarray,
        animation: Animation,
    ) -> None:
        path = stem.path
        for i, joint in enumerate(stem.joints):
            index = joint.path_index
            location = stem.location + path.get(index)
            joint.update_location(location)

            radius = plant.get_radius(stem, index)
            if i > 0 and radius >= self.policy.threshold:
                distance = path.get_distance_between(index - 1, index)
                self._set_rotation(joint.id, distance, radius, path.get_direction(index), animation)
            else:
                self._set_no_rotation(joint.id, animation)

            if i > 0 or stem.parent_handle is not None:
                self._set_translation(joint.id, location - prev_location, animation)
            else:
                self._set_translation(joint.id, stem.location, animation)

            for child in stem.iter_children():
                if child.has_joints() and child.joints[0].parent_id == joint.id:
                    self._transform_joints(plant, child, location, animation)

            prev_location = location

    def _set_rotation(
        self,
        joint_id: int,
        distance: float,
        radius: float,
        direction: np.ndarray,
        animation: Animation,
    ) -> None:
        radius += 1.0
        resistance = radius * radius * self.policy.resistance
        intensity = SWAY_FACTOR * distance * self.policy.speed / resistance
        orthogonal = cross(self._direction, direction)
        offset = self._rng.uniform(0.0, math.pi)
        frame_count = self.policy.frame_count

        for i, frame in enumerate(animation.frames[joint_id]):
            x = i * 2.0 * math.pi / (frame_count - 1) + offset
            wave = math.sin(x) * math.cos(2.0 * x + math.pi * 0.25)
            rotation = _sway(direction, self._direction, intensity * wave)

            wave = math.sin(x + math.pi * 0.5) * math.cos(2.0 * x + math.pi * 0.25)
            frame.rotation = rotation * _sway(direction, orthogonal, intensity * wave)

    def _set_no_rotation(self, joint_id: int, animation: Animation) -> None:
        for frame in animation.frames[joint_id]:
            frame.rotation = Quat.identity()

    def _set_translation(self, joint_id: int, translation, animation: Animation) -> None:
        for frame in animation.frames[joint_id]:
            frame.translation = np.array(translation, dtype=float)


def _sway(direction: np.ndarray, target: np.ndarray, t: float) -> Quat:
    """Rotation bending ``direction`` toward ``target`` by fraction ``t``."""
    movement = lerp(direction, target, t)
    if is_zero(movement):
        return Quat.identity()
    return rotate_into_vec_q(direction, normalize(movement))


__all__ = ["Wind", "SWAY_FACTOR"]
