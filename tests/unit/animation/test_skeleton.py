"""
Unit tests for the joint graph exported after wind generation.
"""

import networkx as nx

from plantgen.animation import Wind, joints_in_order, skeleton, skeleton_root
from plantgen.core import Plant, Spline, VolumetricPath
from plantgen.math import vec3


def branching_plant():
    """Root of three cubic segments along +y with two children along +x."""
    spline = Spline(controls=[vec3(0.0, float(i), 0.0) for i in range(10)])
    side = Spline(controls=[vec3(float(i), 0.0, 0.0) for i in range(7)])
    plant = Plant()
    root = plant.create_root()
    root.set_path(VolumetricPath(spline))
    for position in (0.5, 4.0):
        child = plant.add_stem(root)
        child.set_path(VolumetricPath(side))
        child.set_position(position)
    return plant


class TestSkeleton:
    """Tests for the skeleton graph."""

    def test_graph_shape(self):
        """The graph is a tree rooted at joint zero."""
        plant = branching_plant()
        Wind().generate(plant)
        graph = skeleton(plant)
        assert graph.number_of_nodes() == 5
        assert graph.number_of_edges() == 4
        assert nx.is_arborescence(graph)
        assert skeleton_root(graph) == 0

    def test_node_attributes(self):
        """Nodes carry the joint location and owning stem."""
        plant = branching_plant()
        Wind().generate(plant)
        graph = skeleton(plant)
        root = plant.get_root()
        for joint in root.joints:
            node = graph.nodes[joint.id]
            assert node["stem"] == root.handle
            assert node["path_index"] == joint.path_index
            assert (node["location"] == joint.location).all()

    def test_edges_follow_parent_ids(self):
        """Every edge points from a parent joint to its child."""
        plant = branching_plant()
        Wind().generate(plant)
        graph = skeleton(plant)
        for joint in joints_in_order(plant)[1:]:
            assert graph.has_edge(joint.parent_id, joint.id)

    def test_empty_plant(self):
        """A plant without joints has an empty skeleton."""
        graph = skeleton(Plant())
        assert graph.number_of_nodes() == 0
        assert skeleton_root(graph) is None
