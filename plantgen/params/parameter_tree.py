"""
Per-level stem generation parameters.

``StemData`` describes how child stems are grown along a parent and
``LeafData`` how leaves are scattered along it. A ``ParameterTree`` holds
one ``StemData`` per branching level, addressed by dotted names.

UNIT CONVENTIONS
----------------
Lengths and distances are in plant units; angles are in radians.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple
import math

from ..core.spline import Spline
from .tree import DottedTree, TreeNode

# Preset used for every density curve of freshly created nodes.
DEFAULT_DENSITY_PRESET = 1


@dataclass
class LeafData:
    """
    Leaf placement parameters for one branching level.

    Attributes:
        density_curve: Leaf density along the stem (x = length fraction).
        scale: Leaf scale.
        density: Leaves per unit length, scaled by ``density_curve``.
        distance: Minimum spacing between leaf nodes.
        rotation: Rotation between consecutive leaf nodes (radians).
        min_up, max_up: Range of the bias toward the stem's up vector.
        local_up, global_up: Weights of the local and world up vectors.
        min_forward, max_forward: Range of the bias along the stem.
        gravity: Downward pull applied to leaf orientation.
        leaves_per_node: Leaves emitted at each node.
    """
    density_curve: Spline = field(default_factory=lambda: Spline(DEFAULT_DENSITY_PRESET))
    scale: Tuple[float, float, float] = (1.0, 1.0, 1.0)
    density: float = 0.0
    distance: float = 2.0
    rotation: float = math.pi
    min_up: float = 0.0
    max_up: float = 1.0
    local_up: float = 1.0
    global_up: float = 1.0
    min_forward: float = 0.0
    max_forward: float = 1.0
    gravity: float = 0.0
    leaves_per_node: int = 1


@dataclass
class StemData:
    """
    Stem growth parameters for one branching level.

    Attributes:
        density_curve: Child stem density along the parent.
        incline_curve: Incline of child stems along the parent.
        length_curve: Length of child stems along the parent.
        density: Child stems per unit length, scaled by ``density_curve``.
        distance: Minimum spacing between child stems.
        start: Arc length at which children begin.
        scale: Scale applied to the parent's radius.
        length: Length of child stems.
        angle_variation: Random variation of the branching angle.
        radius_threshold: Children thinner than this are not grown.
        incline_variation: Random variation of the incline.
        radius_variation: Random variation of the radius.
        point_density: Spline anchors per unit length.
        gravity: Downward pull along the stem.
        radius: Radius factor relative to the parent.
        fork: Probability of forking at the tip.
        fork_angle: Angle between forked tips (radians).
        fork_scale: Scale of forked tips.
        noise: Random perturbation of spline points.
        max_depth: Deepest level this node applies to.
        seed: Seed for the level's random stream.
        leaf: Leaf parameters of the level.
    """
    density_curve: Spline = field(default_factory=lambda: Spline(DEFAULT_DENSITY_PRESET))
    incline_curve: Spline = field(default_factory=lambda: Spline(2))
    length_curve: Spline = field(default_factory=lambda: Spline(1))
    density: float = 0.0
    distance: float = 0.0
    start: float = 0.0
    scale: float = 1.0
    length: float = 60.0
    angle_variation: float = 0.5
    radius_threshold: float = 0.01
    incline_variation: float = 0.0
    radius_variation: float = 0.1
    point_density: float = 1.0
    gravity: float = 0.1
    radius: float = 1.0
    fork: float = 0.0
    fork_angle: float = 0.5
    fork_scale: float = 1.0
    noise: float = 0.05
    max_depth: int = 1
    seed: int = 0
    leaf: LeafData = field(default_factory=LeafData)


class ParameterNode(TreeNode[StemData]):
    """Node of a ``ParameterTree``."""

    __slots__ = ()


class ParameterTree(DottedTree[StemData]):
    """
    Dotted-address tree of ``StemData``.

    The root's seed drives every random stream derived from the tree.

    Examples
    --------
    >>> tree = ParameterTree()
    >>> node = tree.add_child("")
    >>> node = tree.add_sibling("1")
    >>> node = tree.add_child("1")
    >>> tree.get_names()
    ['1', '1.1', '2']
    """

    node_type = ParameterNode

    def __init__(self, with_root: bool = True, seed: int = 0):
        self.seed = seed
        super().__init__(with_root)

    def create_data(self) -> StemData:
        return StemData()

    def initialize_data(self, data: StemData) -> None:
        data.density_curve.set_default(DEFAULT_DENSITY_PRESET)
        data.leaf.density_curve.set_default(DEFAULT_DENSITY_PRESET)

    def _copy_attributes(self, other: "ParameterTree") -> None:
        other.seed = self.seed

    def __eq__(self, other) -> bool:
        result = super().__eq__(other)
        if result is NotImplemented:
            return result
        return result and self.seed == other.seed

    def set_seed(self, seed: int) -> None:
        self.seed = seed

    def get_seed(self) -> int:
        return self.seed


__all__ = ["LeafData", "StemData", "ParameterNode", "ParameterTree", "DEFAULT_DENSITY_PRESET"]
