"""Skeleton joints generated from stem spline anchors."""

import numpy as np

from ..math import vec3, as_vec


class Joint:
    """
    One node of the flattened wind skeleton.

    Parameters
    ----------
    id : int
        Unique joint ID within a generated skeleton
    parent_id : int
        ID of the parent joint, -1 for the skeleton root
    path_index : int
        Sample index on the owning stem's path
    """

    def __init__(self, id: int = 0, parent_id: int = -1, path_index: int = 0):
        self.id = id
        self.parent_id = parent_id
        self.path_index = path_index
        self.location = vec3()

    def __eq__(self, other) -> bool:
        if not isinstance(other, Joint):
            return NotImplemented
        return (
            self.id == other.id
            and self.parent_id == other.parent_id
            and self.path_index == other.path_index
            and np.array_equal(self.location, other.location)
        )

    def __repr__(self) -> str:
        return f"Joint(id={self.id}, parent_id={self.parent_id}, path_index={self.path_index})"

    def update_location(self, location) -> None:
        self.location = as_vec(location)

    def copy(self) -> "Joint":
        joint = Joint(self.id, self.parent_id, self.path_index)
        joint.location = self.location.copy()
        return joint

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "parent_id": self.parent_id,
            "path_index": self.path_index,
            "location": self.location.tolist(),
        }


__all__ = ["Joint"]
