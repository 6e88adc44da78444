import heapq
import itertools
import logging

import numpy as np
from scipy.spatial import distance

import config
from visibility_graph import VisibilityGraph

logger = logging.getLogger(__name__)


def a_star(graph):
    """
    A* search from graph.start to graph.goal.

    Parameters
    ----------
    graph : VisibilityGraph
        Built graph; edge weights are Euclidean lengths.

    Returns
    -------
    path_indices : list[int] or None
        Vertex indices from start to goal (inclusive). None if no path.
    path_length : float
        Total length of the path (np.inf if no path).
    """
    start_idx = graph.start.index
    goal_idx = graph.goal.index
    n = len(graph.vertices)

    # Straight-line distance to the goal never overestimates the remaining cost
    h_score = distance.cdist(graph.positions(), graph.end_point[np.newaxis, :])[:, 0]

    g_score = np.full(n, np.inf)
    g_score[start_idx] = 0.0
    f_score = g_score + h_score

    came_from = {}
    closed_set = set()

    # Counter breaks f ties by insertion order
    counter = itertools.count()
    open_heap = [(f_score[start_idx], next(counter), start_idx)]

    while open_heap:
        current_f, _, current = heapq.heappop(open_heap)

        # Skip outdated heap entries
        if current in closed_set or current_f > f_score[current]:
            continue
        closed_set.add(current)

        if current == goal_idx:
            path = [current]
            while current in came_from:
                current = came_from[current]
                path.append(current)
            return path[::-1], float(g_score[goal_idx])

        for neighbor, edge_idx in graph.vertices[current].neighbors:
            if neighbor in closed_set:
                continue

            tentative_g = g_score[current] + graph.edges[edge_idx].weight
            tentative_f = tentative_g + h_score[neighbor]

            if tentative_f < f_score[neighbor]:
                came_from[neighbor] = current
                g_score[neighbor] = tentative_g
                f_score[neighbor] = tentative_f
                heapq.heappush(open_heap, (tentative_f, next(counter), neighbor))

    return None, np.inf


def shortest_path(graph):
    """
    Waypoints of the shortest path through a visibility graph.

    The start point itself is not included: the list runs from the first
    waypoint after the start through the goal.

    Args:
        graph: VisibilityGraph

    Returns:
        list: np.array [x, y] waypoints, empty if the goal is unreachable
    """
    path_indices, path_length = a_star(graph)
    if path_indices is None:
        logger.info("No path from %s to %s", graph.start_point.tolist(), graph.end_point.tolist())
        return []

    logger.debug("Path through %s, length %.2f", path_indices, path_length)
    return [graph.vertices[i].pos for i in path_indices[1:]]


def path_length(start, waypoints):
    """Length of the polyline from start through all waypoints."""
    points = np.vstack([np.asarray(start, dtype=float)] + [np.asarray(p) for p in waypoints])
    return float(np.sum(np.linalg.norm(np.diff(points, axis=0), axis=1)))


class PathPlanner:
    """A* path planning on a visibility graph of grown obstacles."""

    def __init__(self, agent_radius=config.DEFAULT_AGENT_RADIUS):
        """
        Args:
            agent_radius: float, obstacles are grown by this much before planning
        """
        self.agent_radius = agent_radius
        self.graph = None

    def compute_path(self, start, goal, obstacles):
        """
        Compute shortest path from start to goal avoiding obstacles.

        A new graph is built for every call and kept on self.graph for
        inspection.

        Start and goal must lie strictly outside every grown obstacle. A
        point exactly on an obstacle vertex or side touches that side, which
        blocks every line of sight from it, so the result is empty. This
        includes replanning from a waypoint returned by an earlier call with
        the same obstacles: pass a point moved slightly off the boundary
        instead.

        Args:
            start: [x, y] start position
            goal: [x, y] goal position
            obstacles: list of counter-clockwise polygons

        Returns:
            list: Waypoints after start as np.array [x, y], empty if no path exists
        """
        self.graph = VisibilityGraph(start, goal, obstacles, self.agent_radius)
        return shortest_path(self.graph)
