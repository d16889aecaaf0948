"""
Stems: nodes of the plant hierarchy.

Stems live in a ``StemPool`` arena and refer to their parent, first child
and siblings by integer handle. A stem's ``location`` is its world-space
origin and depends on every ancestor: it is recomputed from the parent's
sampled path whenever the stem's ``position`` or any ancestor's path
changes.

UNIT CONVENTIONS
----------------
``position`` is an arc length along the parent's path; ``location`` is in
world units.
"""

from enum import IntEnum
from typing import TYPE_CHECKING, Dict, Iterator, List, Optional
import logging
import numpy as np

from ..math import vec2, vec3, as_vec, is_nan
from ..params import ParameterTree, DerivationTree
from .ids import IDGenerator
from .joint import Joint
from .leaf import Leaf
from .path import VolumetricPath

if TYPE_CHECKING:
    from .plant import StemPool

logger = logging.getLogger(__name__)


class StemMaterial(IntEnum):
    OUTER = 0
    INNER = 1


class Stem:
    """
    One curved segment of the plant.

    Stems are created by ``Plant.add_stem`` (or ``StemPool.allocate``); a
    stem built directly is detached and has no relatives.

    Parameters
    ----------
    handle : int, optional
        Slot of the stem in its pool
    pool : StemPool, optional
        Arena resolving the handles of relatives
    id_gen : IDGenerator, optional
        Source of IDs for leaves added without one
    """

    def __init__(
        self,
        handle: Optional[int] = None,
        pool: Optional["StemPool"] = None,
        id_gen: Optional[IDGenerator] = None,
    ):
        self.handle = handle
        self._pool = pool
        self._id_gen = id_gen

        self.parent_handle: Optional[int] = None
        self.child_handle: Optional[int] = None
        self.next_handle: Optional[int] = None
        self.prev_handle: Optional[int] = None

        self.depth = 0
        self.position = 0.0
        self.location = vec3()
        self.path = VolumetricPath()
        self.leaves: Dict[int, Leaf] = {}
        self.materials = [0, 0]
        self.swelling = vec2(1.5, 3.0)
        self.custom = False
        self.joints: List[Joint] = []
        self._parameter_tree = ParameterTree()
        self._derivation_tree = DerivationTree()

    def __eq__(self, other) -> bool:
        if not isinstance(other, Stem):
            return NotImplemented
        return (
            self.depth == other.depth
            and self.position == other.position
            and np.array_equal(self.location, other.location, equal_nan=True)
            and self.path == other.path
            and self.leaves == other.leaves
            and self.materials == other.materials
            and np.array_equal(self.swelling, other.swelling)
            and self.custom == other.custom
            and self._parameter_tree == other._parameter_tree
            and self._derivation_tree == other._derivation_tree
            and self.joints == other.joints
        )

    def __ne__(self, other) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __repr__(self) -> str:
        return f"Stem(handle={self.handle}, depth={self.depth}, position={self.position})"

    def copy(self) -> "Stem":
        """Detached copy of the stem's own data; tree links are not copied."""
        stem = Stem(id_gen=self._id_gen)
        stem.depth = self.depth
        stem.position = self.position
        stem.location = self.location.copy()
        stem.path = self.path.copy()
        stem.leaves = {key: leaf.copy() for key, leaf in self.leaves.items()}
        stem.materials = list(self.materials)
        stem.swelling = self.swelling.copy()
        stem.custom = self.custom
        stem.joints = [joint.copy() for joint in self.joints]
        stem._parameter_tree = self._parameter_tree.copy()
        stem._derivation_tree = self._derivation_tree.copy()
        return stem

    def _resolve(self, handle: Optional[int]) -> Optional["Stem"]:
        if handle is None or self._pool is None:
            return None
        return self._pool.get(handle)

    @property
    def parent(self) -> Optional["Stem"]:
        return self._resolve(self.parent_handle)

    @property
    def child(self) -> Optional["Stem"]:
        return self._resolve(self.child_handle)

    @property
    def sibling(self) -> Optional["Stem"]:
        return self._resolve(self.next_handle)

    @property
    def prev_sibling(self) -> Optional["Stem"]:
        return self._resolve(self.prev_handle)

    def get_parent(self) -> Optional["Stem"]:
        return self.parent

    def get_child(self) -> Optional["Stem"]:
        return self.child

    def get_sibling(self) -> Optional["Stem"]:
        return self.sibling

    def get_prev_sibling(self) -> Optional["Stem"]:
        return self.prev_sibling

    def iter_children(self) -> Iterator["Stem"]:
        child = self.child
        while child is not None:
            yield child
            child = child.sibling

    def get_depth(self) -> int:
        return self.depth

    def is_descendant_of(self, stem: "Stem") -> bool:
        """True if ``stem`` is a strict ancestor of this stem."""
        if stem is None or self.depth <= stem.depth:
            return False
        ancestor = self.parent
        while ancestor is not None and ancestor.depth >= stem.depth:
            if ancestor is stem:
                return True
            ancestor = ancestor.parent
        return False

    def set_path(self, path: VolumetricPath) -> None:
        """
        Replace the path and move every descendant onto it.

        The stored path is regenerated with a linear start when the stem is
        attached to a parent.
        """
        self.path = path.copy()
        self.path.generate(self.parent_handle is not None)
        update_positions(self)

    def get_path(self) -> VolumetricPath:
        return self.path.copy()

    def set_resolution(self, resolution: int) -> None:
        self.path.set_resolution(resolution)
        update_positions(self)

    def get_resolution(self) -> int:
        return self.path.get_resolution()

    def set_position(self, position: float) -> None:
        """
        Move the stem to arc length ``position`` along its parent's path.

        A parent path too short to evaluate leaves ``location`` NaN. The
        root has no parent and ignores the call.
        """
        parent = self.parent
        if parent is None:
            return
        self.position = position
        if not self._reposition(parent):
            logger.warning(
                f"Stem {self.handle} has no location at position {position}: "
                "parent path is degenerate"
            )
        update_positions(self)

    def _reposition(self, parent: Optional["Stem"] = None) -> bool:
        parent = parent or self.parent
        if parent is None:
            return True
        point = parent.path.get_intermediate(self.position)
        if is_nan(point):
            self.location = point
            return False
        self.location = parent.location + point
        return True

    def get_position(self) -> float:
        return self.position

    def get_location(self) -> np.ndarray:
        return self.location.copy()

    def set_material(self, kind: StemMaterial, material: int) -> None:
        self.materials[int(kind)] = material

    def get_material(self, kind: StemMaterial) -> int:
        return self.materials[int(kind)]

    def set_swelling(self, swelling) -> None:
        self.swelling = as_vec(swelling)

    def get_swelling(self) -> np.ndarray:
        return self.swelling.copy()

    def set_custom(self, custom: bool) -> None:
        self.custom = custom

    def is_custom(self) -> bool:
        return self.custom

    def set_parameter_tree(self, tree: ParameterTree) -> None:
        self._parameter_tree = tree.copy()

    def get_parameter_tree(self) -> ParameterTree:
        return self._parameter_tree.copy()

    @property
    def parameter_tree(self) -> ParameterTree:
        return self._parameter_tree

    def set_derivation_tree(self, tree: DerivationTree) -> None:
        self._derivation_tree = tree.copy()

    def get_derivation_tree(self) -> DerivationTree:
        return self._derivation_tree.copy()

    @property
    def derivation_tree(self) -> DerivationTree:
        return self._derivation_tree

    def add_leaf(self, leaf: Leaf) -> int:
        """
        Take ownership of ``leaf``.

        Leaves without an ID get one from the plant's ID generator.

        Returns
        -------
        int
            The leaf's ID
        """
        if leaf.id is None:
            if self._id_gen is None:
                raise ValueError("Leaf has no ID and the stem has no ID generator")
            leaf.id = self._id_gen.next_id()
        self.leaves[leaf.id] = leaf
        return leaf.id

    def get_leaf(self, leaf_id: int) -> Optional[Leaf]:
        return self.leaves.get(leaf_id)

    def get_leaves(self) -> Dict[int, Leaf]:
        return self.leaves

    def get_leaf_count(self) -> int:
        return len(self.leaves)

    def remove_leaf(self, leaf_id: int) -> Optional[Leaf]:
        return self.leaves.pop(leaf_id, None)

    def add_joint(self, joint: Joint) -> None:
        self.joints.append(joint)

    def clear_joints(self) -> None:
        self.joints = []

    def has_joints(self) -> bool:
        return bool(self.joints)

    def get_joints(self) -> List[Joint]:
        return self.joints


def update_positions(stem: Stem) -> None:
    """Recompute the location of every descendant of ``stem``."""
    stack = list(stem.iter_children())
    while stack:
        child = stack.pop()
        child._reposition()
        stack.extend(child.iter_children())


__all__ = ["Stem", "StemMaterial", "update_positions"]
