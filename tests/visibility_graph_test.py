"""Tests for visibility graph construction."""

import math
import unittest

import networkx as nx
import numpy as np

from edge import Edge
from errors import InvalidInputError
from octagon import octagon, octagon_from_apothem
from path_planner import a_star, path_length, shortest_path
from visibility_graph import VisibilityGraph

BLOCK = [(40, -10), (60, -10), (60, 10), (40, 10)]


def three_octagon_scene():
    centers = [(100, 300), (200, 200), (500, 100)]
    obstacles = [octagon_from_apothem(c, 50) for c in centers]
    return VisibilityGraph((10, 10), (630, 470), obstacles, 0.0)


class NoObstacleTest(unittest.TestCase):

    def test_single_straight_segment(self):
        graph = VisibilityGraph((0, 0), (30, 40), [])
        self.assertEqual(len(graph.vertices), 2)
        self.assertEqual(len(graph.obstacle_edges), 0)
        self.assertEqual(len(graph.visibility_edges), 1)
        self.assertAlmostEqual(graph.visibility_edges[0].weight, 50.0)

        path = shortest_path(graph)
        self.assertEqual(len(path), 1)
        np.testing.assert_allclose(path[0], (30, 40))

    def test_start_and_end_points(self):
        graph = VisibilityGraph((1, 2), (3, 4), [])
        np.testing.assert_allclose(graph.start_point, (1, 2))
        np.testing.assert_allclose(graph.end_point, (3, 4))
        self.assertEqual(graph.start.group_id, 0)
        self.assertEqual(graph.goal.group_id, 0)


class GraphStructureTest(unittest.TestCase):

    def setUp(self):
        self.graph = three_octagon_scene()

    def test_vertex_pool(self):
        self.assertEqual(len(self.graph.vertices), 2 + 3 * 8)
        self.assertEqual([v.index for v in self.graph.vertices],
                         list(range(len(self.graph.vertices))))
        self.assertEqual(sorted({v.group_id for v in self.graph.vertices}), [0, 1, 2, 3])

    def test_edge_pools(self):
        self.assertEqual(len(self.graph.obstacle_edges), 24)
        self.assertTrue(all(e.solid for e in self.graph.obstacle_edges))
        self.assertTrue(all(not e.solid for e in self.graph.visibility_edges))
        self.assertEqual(len(self.graph.all_edges()), len(self.graph.edges))
        self.assertEqual([e.index for e in self.graph.edges], list(range(len(self.graph.edges))))

    def test_adjacency_is_bidirectional(self):
        for edge in self.graph.visibility_edges:
            a, b = edge.a, edge.b
            self.assertIn((b.index, edge.index), a.neighbors)
            self.assertIn((a.index, edge.index), b.neighbors)

    def test_obstacle_edges_in_adjacency(self):
        for edge in self.graph.obstacle_edges:
            self.assertIn((edge.b.index, edge.index), edge.a.neighbors)

    def test_no_visibility_edge_within_an_obstacle(self):
        for edge in self.graph.visibility_edges:
            same_group = edge.a.group_id == edge.b.group_id
            self.assertFalse(same_group and edge.a.group_id != 0)

    def test_visibility_edges_cross_no_obstacle_edge(self):
        for edge in self.graph.visibility_edges:
            for solid in self.graph.obstacle_edges:
                if not edge.incident_to(solid):
                    self.assertFalse(edge.intersects(solid))

    def test_neighbors_accessor(self):
        pairs = self.graph.neighbors(0)
        self.assertTrue(pairs)
        for vertex, edge in pairs:
            self.assertTrue(edge.a is self.graph.start or edge.b is self.graph.start)
            self.assertIsNot(vertex, self.graph.start)

    def test_networkx_export_matches_a_star(self):
        g = self.graph.to_networkx()
        self.assertEqual(g.number_of_nodes(), len(self.graph.vertices))
        self.assertEqual(g.number_of_edges(), len(self.graph.edges))
        expected = nx.dijkstra_path_length(g, 0, 1, weight="weight")
        _, length = a_star(self.graph)
        self.assertAlmostEqual(length, expected)

    def test_rebuild_is_independent(self):
        other = three_octagon_scene()
        self.assertEqual(len(other.visibility_edges), len(self.graph.visibility_edges))
        self.assertIsNot(other.vertices[0], self.graph.vertices[0])


class BlockingTest(unittest.TestCase):

    def test_path_goes_around_obstacle(self):
        graph = VisibilityGraph((0, 0), (100, 0), [BLOCK])
        direct = [e for e in graph.visibility_edges if {e.a.index, e.b.index} == {0, 1}]
        self.assertEqual(direct, [])

        path = shortest_path(graph)
        self.assertEqual(len(path), 3)
        np.testing.assert_allclose(path[-1], (100, 0))
        self.assertAlmostEqual(abs(path[0][1]), 10)
        self.assertAlmostEqual(path[0][1], path[1][1])
        self.assertAlmostEqual(path_length((0, 0), path), 20 + 2 * math.sqrt(1700))

    def test_agent_radius_grows_obstacle(self):
        graph = VisibilityGraph((0, 0), (100, 0), [BLOCK], agent_radius=5)
        path = shortest_path(graph)
        self.assertEqual(len(path), 3)
        self.assertAlmostEqual(abs(path[0][1]), 15)
        np.testing.assert_allclose(sorted(abs(p[0]) for p in path[:2]), [35, 65])

    def test_tie_break_is_deterministic(self):
        first = shortest_path(VisibilityGraph((0, 0), (100, 0), [BLOCK]))
        second = shortest_path(VisibilityGraph((0, 0), (100, 0), [BLOCK]))
        np.testing.assert_allclose(first, second)


class OverlappingObstacleTest(unittest.TestCase):

    WALL = [(0, -100), (10, -100), (10, 100), (0, 100)]
    SPIKE = [(-10, 0), (20, -1), (20, 1)]

    def setUp(self):
        self.graph = VisibilityGraph((-20, 0), (30, 0), [self.WALL, self.SPIKE])

    def test_sides_crossing_another_obstacle_are_not_walkable(self):
        wall_id, spike_id = 1, 2
        spike_sides = [e for e in self.graph.obstacle_edges if e.a.group_id == spike_id]
        self.assertEqual(len(spike_sides), 3)
        for edge in spike_sides:
            crosses_wall = any(
                edge.intersects(solid) for solid in self.graph.obstacle_edges
                if solid.a.group_id == wall_id
            )
            linked = (edge.b.index, edge.index) in edge.a.neighbors
            self.assertEqual(linked, not crosses_wall)

    def test_blocked_sides_still_block(self):
        self.assertEqual(len(self.graph.obstacle_edges), 7)
        self.assertEqual(len(self.graph.all_edges()), len(self.graph.edges))

    def test_path_goes_around_wall(self):
        indices, length = a_star(self.graph)
        self.assertIsNotNone(indices)
        for i, j in zip(indices, indices[1:]):
            segment = Edge(self.graph.vertices[i], self.graph.vertices[j], False)
            for solid in self.graph.obstacle_edges:
                if not segment.incident_to(solid):
                    self.assertFalse(segment.intersects(solid))

        self.assertTrue(any(abs(self.graph.vertices[i].pos[1]) == 100 for i in indices))
        self.assertGreater(length, 200)

    def test_networkx_export_skips_blocked_sides(self):
        g = self.graph.to_networkx()
        _, length = a_star(self.graph)
        self.assertAlmostEqual(nx.dijkstra_path_length(g, 0, 1, weight="weight"), length)


class UnreachableTest(unittest.TestCase):

    def test_enclosed_end_point(self):
        enclosure = [(0, 0), (100, 0), (100, 100), (0, 100)]
        graph = VisibilityGraph((-50, -50), (50, 50), [enclosure])
        for edge in graph.visibility_edges:
            self.assertNotIn(1, (edge.a.index, edge.b.index))

        self.assertEqual(a_star(graph), (None, math.inf))
        self.assertEqual(shortest_path(graph), [])


class RoundTripTest(unittest.TestCase):

    def setUp(self):
        self.center = (315, 235)
        self.graph = VisibilityGraph((10, 10), (630, 470), [octagon(self.center, 150)], 0.0)

    def test_path_avoids_obstacle(self):
        indices, _ = a_star(self.graph)
        self.assertIsNotNone(indices)
        self.assertGreaterEqual(len(indices) - 1, 2)

        obstacle = self.graph.obstacles[0]
        for i, j in zip(indices, indices[1:]):
            segment = Edge(self.graph.vertices[i], self.graph.vertices[j], False)
            for solid in self.graph.obstacle_edges:
                if not segment.incident_to(solid):
                    self.assertFalse(segment.intersects(solid))
            self.assertFalse(obstacle.contains((segment.a.pos + segment.b.pos) / 2))

    def test_shorter_than_bounding_box_detours(self):
        path = shortest_path(self.graph)
        np.testing.assert_allclose(path[-1], (630, 470))

        length = path_length((10, 10), path)
        corners = [(165, 385), (465, 85)]
        for corner in corners:
            self.assertLess(length, path_length((10, 10), [corner, (630, 470)]))
        self.assertGreater(length, math.dist((10, 10), (630, 470)))


class InvalidInputTest(unittest.TestCase):

    def test_negative_radius(self):
        with self.assertRaises(InvalidInputError):
            VisibilityGraph((0, 0), (1, 1), [], agent_radius=-1)

    def test_short_polygon(self):
        with self.assertRaises(InvalidInputError):
            VisibilityGraph((0, 0), (1, 1), [[(0, 0), (1, 0)]])

    def test_bad_point(self):
        with self.assertRaises(InvalidInputError):
            VisibilityGraph((0, 0, 0), (1, 1), [])


if __name__ == "__main__":
    unittest.main()
