"""
Graph view of a generated wind skeleton.

Exporters of skinned meshes need the flattened joint list with parent links
and world locations; ``skeleton`` exposes it as a ``networkx.DiGraph`` with
edges from parent joint to child joint.
"""

from typing import List

import networkx as nx

from ..core.joint import Joint
from ..core.plant import Plant


def joints_in_order(plant: Plant) -> List[Joint]:
    """Every joint of the plant in pre-order of the joint tree (ascending ID)."""
    joints: List[Joint] = []
    for stem in plant.iter_stems():
        joints.extend(stem.joints)
    return sorted(joints, key=lambda joint: joint.id)


def skeleton(plant: Plant) -> nx.DiGraph:
    """
    Build the joint graph of a plant after ``Wind.generate``.

    Node keys are joint IDs with attributes ``location`` (world position),
    ``path_index`` and ``stem`` (handle of the owning stem).
    """
    graph = nx.DiGraph()
    for stem in plant.iter_stems():
        for joint in stem.joints:
            graph.add_node(
                joint.id,
                location=joint.location.copy(),
                path_index=joint.path_index,
                stem=stem.handle,
            )
    for stem in plant.iter_stems():
        for joint in stem.joints:
            if joint.parent_id >= 0:
                graph.add_edge(joint.parent_id, joint.id)
    return graph


def skeleton_root(graph: nx.DiGraph):
    """ID of the joint without a parent, or ``None`` for an empty skeleton."""
    roots = [node for node, degree in graph.in_degree() if degree == 0]
    return roots[0] if roots else None


__all__ = ["joints_in_order", "skeleton", "skeleton_root"]
