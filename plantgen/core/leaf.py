"""Leaves attached to stems."""

from typing import Optional
import numpy as np

from ..math import vec3, as_vec, Quat, rotate, normalize, rotate_into_vec_q
from .ids import IDGenerator

# Leaves lie in their local xz plane facing +z before orientation.
LEAF_NORMAL = (0.0, 0.0, 1.0)


class Leaf:
    """
    A leaf placed at ``position`` (arc length) along its stem's path.

    Parameters
    ----------
    id_gen : IDGenerator, optional
        Source of the leaf's unique ID. Leaves created without one keep
        ``id`` as ``None`` until they are added to a stem.
    """

    def __init__(self, id_gen: Optional[IDGenerator] = None):
        self.id: Optional[int] = id_gen.next_id() if id_gen is not None else None
        self.position = -1.0
        self.scale = vec3(1.0, 1.0, 1.0)
        self.rotation = Quat.identity()
        self.material = 0
        self.mesh = 0

    def __eq__(self, other) -> bool:
        if not isinstance(other, Leaf):
            return NotImplemented
        return (
            self.id == other.id
            and self.position == other.position
            and np.array_equal(self.scale, other.scale)
            and self.material == other.material
            and self.rotation == other.rotation
            and self.mesh == other.mesh
        )

    def __ne__(self, other) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __repr__(self) -> str:
        return f"Leaf(id={self.id}, position={self.position})"

    def copy(self) -> "Leaf":
        leaf = Leaf()
        leaf.id = self.id
        leaf.position = self.position
        leaf.scale = self.scale.copy()
        leaf.rotation = Quat(self.rotation.x, self.rotation.y, self.rotation.z, self.rotation.w)
        leaf.material = self.material
        leaf.mesh = self.mesh
        return leaf

    def set_scale(self, scale) -> None:
        self.scale = as_vec(scale)

    def get_default_orientation(self, stem_direction: np.ndarray) -> Quat:
        """Rotation turning the leaf normal to face along the stem."""
        return rotate_into_vec_q(vec3(*LEAF_NORMAL), normalize(stem_direction))

    def get_direction(self, stem_direction: np.ndarray) -> np.ndarray:
        """Facing direction of the leaf after its own rotation is applied."""
        q = self.rotation * self.get_default_orientation(stem_direction)
        return rotate(q, vec3(*LEAF_NORMAL))


__all__ = ["Leaf"]
