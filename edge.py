from scipy.spatial import distance

import config
from vector_line import VectorLine, as_point, cross


class Vertex:
    """Graph node: a position tagged with the id of the obstacle owning it."""

    def __init__(self, pos, group_id=0):
        """
        Args:
            pos: np.array [x, y]
            group_id: int, 0 for free points (start/end), obstacle id otherwise
        """
        self.pos = as_point(pos)
        self.group_id = group_id
        # Slot in the graph arena, set when the vertex is registered
        self.index = None
        # (neighbour vertex index, edge index) pairs
        self.neighbors = []

    def add_neighbor(self, vertex, edge):
        self.neighbors.append((vertex.index, edge.index))

    def __repr__(self):
        return f"Vertex(index={self.index}, pos={self.pos.tolist()}, group={self.group_id})"


class Edge:
    """Segment between two vertices, either an obstacle side or a line of sight."""

    def __init__(self, a, b, solid):
        """
        Args:
            a: Vertex, first endpoint
            b: Vertex, second endpoint
            solid: bool, True for obstacle boundary edges
        """
        self.a = a
        self.b = b
        self.solid = solid
        self.weight = distance.euclidean(a.pos, b.pos)
        self.index = None

    def line(self):
        return VectorLine(self.a.pos, self.b.pos - self.a.pos)

    def incident_to(self, other):
        """True if both edges share an endpoint vertex (by identity)."""
        return (self.a is other.a or self.a is other.b or
                self.b is other.a or self.b is other.b)

    def contains_box(self, point):
        """
        Check if a point lies in the closed bounding box of this edge.

        Only meaningful for points already known to lie on the edge's line.
        """
        tol = config.DISTANCE_TOLERANCE
        lo_x, hi_x = sorted((self.a.pos[0], self.b.pos[0]))
        lo_y, hi_y = sorted((self.a.pos[1], self.b.pos[1]))
        return (lo_x - tol <= point[0] <= hi_x + tol and
                lo_y - tol <= point[1] <= hi_y + tol)

    def touches(self, point):
        """Check if a point lies on this segment."""
        if self.weight == 0:
            return distance.euclidean(self.a.pos, point) <= config.DISTANCE_TOLERANCE
        offset = cross(self.b.pos - self.a.pos, point - self.a.pos) / self.weight
        return abs(offset) <= config.DISTANCE_TOLERANCE and self.contains_box(point)

    def intersects(self, other):
        """
        Check if two edges intersect (touching counts).

        Args:
            other: Edge

        Returns:
            bool: True if the segments share at least one point
        """
        if self.weight == 0:
            return other.touches(self.a.pos)
        if other.weight == 0:
            return self.touches(other.a.pos)

        l0 = self.line()
        l1 = other.line()

        # Collinear: overlap of the boxes is overlap of the segments
        if l0.is_equivalent_to(l1):
            return (self.contains_box(other.a.pos) or self.contains_box(other.b.pos) or
                    other.contains_box(self.a.pos) or other.contains_box(self.b.pos))

        point = l0.intersect(l1)
        if point is None:
            return False

        return self.contains_box(point) and other.contains_box(point)

    def __repr__(self):
        kind = "solid" if self.solid else "visible"
        return f"Edge({self.a.index}-{self.b.index}, {kind}, weight={self.weight:.2f})"
