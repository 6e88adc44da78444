import logging

import cv2
import numpy as np

import config
from edge import Edge, Vertex
from errors import InvalidInputError
from vector_line import VectorLine, as_point

logger = logging.getLogger(__name__)


def polygon_points(points):
    """
    Validate a polygon given as an ordered vertex list.

    Args:
        points: list of [x, y] points, at least 3

    Returns:
        np.array: float array of shape (N, 2)
    """
    if len(points) < 3:
        raise InvalidInputError(f"A polygon needs at least 3 vertices, got {len(points)}")
    return np.array([as_point(p) for p in points])


def signed_area(points):
    """Shoelace area; positive for counter-clockwise vertex order."""
    x, y = points[:, 0], points[:, 1]
    return 0.5 * float(np.dot(x, np.roll(y, -1)) - np.dot(np.roll(x, -1), y))


def offset_lines(points, distance):
    """
    Lines parallel to each polygon edge, moved outward by distance.

    Edge i runs from points[i] to points[i + 1]. Its outward normal is the
    edge direction rotated by -90 degrees, which points out of a
    counter-clockwise polygon.

    Returns:
        list: VectorLine per edge, or None for zero-length edges
    """
    n = len(points)
    lines = []
    for i in range(n):
        a = points[i]
        direction = points[(i + 1) % n] - a
        normal = np.array([direction[1], -direction[0]])
        norm_sq = np.dot(normal, normal)
        if norm_sq == 0:
            lines.append(None)
            continue

        # Orthogonal projection of the edge start onto the normal lands on
        # the edge's line; shift it along the unit normal
        foot = normal * np.dot(a, normal) / norm_sq
        start = foot + distance * normal / np.sqrt(norm_sq)
        lines.append(VectorLine(start, direction))
    return lines


def grow_polygon(points, distance):
    """
    Offset a counter-clockwise polygon outward.

    Every new vertex is the intersection of the offset lines of the two
    edges meeting at it. When those lines are parallel the corner cannot
    be grown and the vertex keeps its previous position.

    Args:
        points: np.array of shape (N, 2), counter-clockwise
        distance: float, growth distance (>= 0)

    Returns:
        tuple: (grown_points, degenerate_indices)
    """
    grown = np.array(points, dtype=float)
    if distance <= 0:
        return grown, []

    lines = offset_lines(grown, distance)
    degenerate = []
    for i in range(len(grown)):
        before, after = lines[i - 1], lines[i]
        corner = None
        if before is not None and after is not None:
            corner = before.intersect(after)

        if corner is None:
            degenerate.append(i)
            continue
        grown[i] = corner

    return grown, degenerate


class Obstacle:
    """Closed polygon with solid edges, optionally grown by the agent radius."""

    def __init__(self, points, growth=0.0, group_id=1):
        """
        Args:
            points: list of [x, y] vertices, counter-clockwise
            growth: float, outward offset accounting for agent radius
            group_id: int, non-zero id shared by all vertices of this obstacle
        """
        if growth < 0:
            raise InvalidInputError(f"Growth distance must be non-negative, got {growth}")

        points = polygon_points(points)
        if signed_area(points) < 0:
            logger.debug("Obstacle %d given clockwise, reversing vertex order", group_id)
            points = points[::-1].copy()

        self.group_id = group_id
        self.original_points = points

        grown, self.degenerate_corners = grow_polygon(points, growth)
        for i in self.degenerate_corners:
            logger.warning(
                "Degenerate corner %d of obstacle %d could not be grown, keeping %s",
                i, group_id, grown[i].tolist()
            )

        self.vertices = [Vertex(p, group_id) for p in grown]
        n = len(self.vertices)
        self.edges = [Edge(self.vertices[i], self.vertices[(i + 1) % n], True)
                      for i in range(n)]

        self._contour = grown.astype(np.float32).reshape(-1, 1, 2)

    @property
    def points(self):
        return np.array([v.pos for v in self.vertices])

    def contains(self, point):
        """
        Check if a point lies strictly inside the (grown) polygon.

        Points on the boundary or within config.INTERIOR_TOLERANCE of it
        are not inside.
        """
        signed_dist = cv2.pointPolygonTest(
            self._contour, (float(point[0]), float(point[1])), True
        )
        return signed_dist > config.INTERIOR_TOLERANCE

    def __len__(self):
        return len(self.vertices)

    def __repr__(self):
        return f"Obstacle(id={self.group_id}, vertices={len(self.vertices)})"
