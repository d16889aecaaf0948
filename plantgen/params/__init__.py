"""Hierarchical generation parameters addressed by dotted names."""

from .tree import DottedTree, TreeNode, parse_name
from .parameter_tree import LeafData, StemData, ParameterNode, ParameterTree
from .derivation import Derivation, DerivationNode, DerivationTree

__all__ = [
    "DottedTree",
    "TreeNode",
    "parse_name",
    "LeafData",
    "StemData",
    "ParameterNode",
    "ParameterTree",
    "Derivation",
    "DerivationNode",
    "DerivationTree",
]
