import logging

import networkx as nx
import numpy as np

import config
from edge import Edge, Vertex
from errors import InvalidInputError
from obstacle import Obstacle
from vector_line import as_point

logger = logging.getLogger(__name__)

START_IDX = 0
GOAL_IDX = 1


class Graph:
    """
    Weighted graph with a designated start and goal vertex.

    Vertices and edges are kept in index-addressed lists owned by the graph;
    vertex adjacency refers to them by index. The first two vertices added
    are the start and the goal.
    """

    def __init__(self):
        self.vertices = []
        self.edges = []

    def add_vertex(self, vertex):
        vertex.index = len(self.vertices)
        self.vertices.append(vertex)
        return vertex

    def add_edge(self, edge, link=True):
        """
        Register an edge in the arena.

        Args:
            edge: Edge
            link: bool, also make the endpoints neighbours of each other
        """
        edge.index = len(self.edges)
        self.edges.append(edge)
        if link:
            self.link(edge)
        return edge

    def link(self, edge):
        """Make the endpoints of a registered edge neighbours of each other."""
        edge.a.add_neighbor(edge.b, edge)
        edge.b.add_neighbor(edge.a, edge)

    @property
    def start(self):
        return self.vertices[START_IDX]

    @property
    def goal(self):
        return self.vertices[GOAL_IDX]

    @property
    def start_point(self):
        return self.start.pos

    @property
    def end_point(self):
        return self.goal.pos

    def neighbors(self, index):
        """
        Args:
            index: int, vertex index

        Returns:
            list: (neighbor_vertex, edge) pairs
        """
        return [(self.vertices[v], self.edges[e]) for v, e in self.vertices[index].neighbors]

    def positions(self):
        """np.array of shape (N, 2) with all vertex positions in index order."""
        return np.array([v.pos for v in self.vertices])

    def to_networkx(self):
        """
        Export the traversable part of the graph for inspection.

        Only edges present in the adjacency are exported; registered but
        unlinked edges (blocked obstacle sides) are left out.

        Returns:
            nx.Graph: nodes are vertex indices with 'pos' and 'group_id',
                      edges carry 'weight' and 'solid'
        """
        g = nx.Graph()
        for v in self.vertices:
            g.add_node(v.index, pos=tuple(v.pos), group_id=v.group_id)
        for v in self.vertices:
            for neighbor, edge_idx in v.neighbors:
                e = self.edges[edge_idx]
                g.add_edge(v.index, neighbor, weight=e.weight, solid=e.solid)
        return g


class VisibilityGraph(Graph):
    """
    Visibility graph over start, goal and (grown) obstacle vertices.

    The graph is built completely in the constructor and never updated
    afterwards: when obstacles move, build a new one.

    Start and goal are free vertices (group 0). One lying exactly on an
    obstacle boundary touches a side it is not incident to and ends up
    with no visibility edges.

    Example:
        graph = VisibilityGraph((10, 10), (630, 470), [square], agent_radius=5)
        path = shortest_path(graph)
    """

    def __init__(self, start, goal, obstacles, agent_radius=config.DEFAULT_AGENT_RADIUS):
        """
        Args:
            start: [x, y] start position
            goal: [x, y] goal position
            obstacles: iterable of polygons, each a counter-clockwise list of
                       at least 3 [x, y] points
            agent_radius: float, obstacles are grown by this much (>= 0)
        """
        if agent_radius < 0:
            raise InvalidInputError(f"Agent radius must be non-negative, got {agent_radius}")

        super().__init__()
        self.agent_radius = agent_radius
        self.obstacle_edges = []
        self.visibility_edges = []
        self.obstacles = []

        self.add_vertex(Vertex(as_point(start), 0))
        self.add_vertex(Vertex(as_point(goal), 0))

        # Group ids are local to this build; 0 is reserved for start/goal
        for group_id, polygon in enumerate(obstacles, start=1):
            self._add_obstacle(Obstacle(polygon, agent_radius, group_id))

        self._link_obstacle_edges()
        self.construct_naive()
        logger.debug(
            "Visibility graph built: %d vertices, %d obstacle edges, %d visibility edges",
            len(self.vertices), len(self.obstacle_edges), len(self.visibility_edges)
        )

    def _add_obstacle(self, obstacle):
        self.obstacles.append(obstacle)
        for vertex in obstacle.vertices:
            self.add_vertex(vertex)
        for edge in obstacle.edges:
            self.obstacle_edges.append(self.add_edge(edge, link=False))

    def _link_obstacle_edges(self):
        """
        Make obstacle sides traversable where no other obstacle blocks them.

        Every side keeps blocking visibility candidates; only sides that
        pass the same visibility test are walkable. A side running into
        an overlapping obstacle is left out of the adjacency.
        """
        for edge in self.obstacle_edges:
            if self._is_visible(edge):
                self.link(edge)
            else:
                logger.debug("Obstacle side %d-%d blocked by another obstacle",
                             edge.a.index, edge.b.index)

    def _is_visible(self, candidate):
        """
        Check a candidate edge against every obstacle.

        Touching an obstacle edge at one of the candidate's own endpoints
        does not block it. A candidate whose midpoint is inside an obstacle
        runs through its interior and is blocked.

        Args:
            candidate: Edge, non-solid edge between two vertices

        Returns:
            bool: True if the candidate is a valid line of sight
        """
        for obstacle_edge in self.obstacle_edges:
            if candidate.incident_to(obstacle_edge):
                continue
            if candidate.intersects(obstacle_edge):
                return False

        midpoint = (candidate.a.pos + candidate.b.pos) / 2
        for obstacle in self.obstacles:
            if obstacle.contains(midpoint):
                return False

        return True

    def construct_naive(self):
        """
        Add a visibility edge for every mutually visible vertex pair.

        Tests each of the O(n^2) pairs against all m obstacle edges,
        O(n^2 * m) overall. Vertices of the same obstacle are only
        connected by that obstacle's own solid edges.
        """
        n = len(self.vertices)
        for i in range(n):
            center = self.vertices[i]
            for j in range(i + 1, n):
                vertex = self.vertices[j]

                if center.group_id != 0 and center.group_id == vertex.group_id:
                    continue

                candidate = Edge(center, vertex, False)
                if self._is_visible(candidate):
                    self.visibility_edges.append(self.add_edge(candidate))

    def all_edges(self):
        """Obstacle edges followed by visibility edges."""
        return self.obstacle_edges + self.visibility_edges

    def __repr__(self):
        return (f"VisibilityGraph(vertices={len(self.vertices)}, "
                f"obstacle_edges={len(self.obstacle_edges)}, "
                f"visibility_edges={len(self.visibility_edges)})")
