"""
Derivation parameters.

A ``Derivation`` is a condensed set of growth rules (stem and leaf density,
spacing and orientation ranges) for one branching level. ``DerivationTree``
shares the dotted addressing of ``ParameterTree`` and carries its own seed.
"""

from dataclasses import dataclass, field
from typing import Tuple

from ..core.spline import Spline
from .tree import DottedTree, TreeNode
from .parameter_tree import DEFAULT_DENSITY_PRESET


@dataclass
class Derivation:
    """
    Condensed growth rules for one branching level.

    Attributes:
        stem_density_curve: Child stem density along the parent.
        leaf_density_curve: Leaf density along the stem.
        leaf_scale: Leaf scale.
        stem_density: Child stems per unit length.
        leaf_density: Leaves per unit length.
        stem_start: Arc length at which children begin.
        leaf_distance: Minimum spacing between leaf nodes.
        length_factor: Child length relative to the parent.
        radius_threshold: Children thinner than this are not grown.
        leaf_rotation: Rotation between consecutive leaf nodes (radians).
        min_up, max_up: Range of the bias toward the up vector.
        min_direction, max_direction: Range of the bias along the stem.
        leaves_per_node: Leaves emitted at each node.
    """
    stem_density_curve: Spline = field(default_factory=lambda: Spline(DEFAULT_DENSITY_PRESET))
    leaf_density_curve: Spline = field(default_factory=lambda: Spline(DEFAULT_DENSITY_PRESET))
    leaf_scale: Tuple[float, float, float] = (1.0, 1.0, 1.0)
    stem_density: float = 0.0
    leaf_density: float = 0.0
    stem_start: float = 0.0
    leaf_distance: float = 2.0
    length_factor: float = 1.0
    radius_threshold: float = 0.0
    leaf_rotation: float = 0.0
    min_up: float = 0.0
    max_up: float = 1.0
    min_direction: float = 0.0
    max_direction: float = 1.0
    leaves_per_node: int = 1


class DerivationNode(TreeNode[Derivation]):
    """Node of a ``DerivationTree``."""

    __slots__ = ()


class DerivationTree(DottedTree[Derivation]):
    """Dotted-address tree of ``Derivation`` payloads with a generation seed."""

    node_type = DerivationNode

    def __init__(self, with_root: bool = True, seed: int = 0):
        self.seed = seed
        super().__init__(with_root)

    def create_data(self) -> Derivation:
        return Derivation()

    def initialize_data(self, data: Derivation) -> None:
        data.stem_density_curve.set_default(DEFAULT_DENSITY_PRESET)
        data.leaf_density_curve.set_default(DEFAULT_DENSITY_PRESET)

    def _copy_attributes(self, other: "DerivationTree") -> None:
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


__all__ = ["Derivation", "DerivationNode", "DerivationTree"]
