import numpy as np

import config
from errors import InvalidInputError


def as_point(p):
    """
    Convert a coordinate pair to a float point.

    Args:
        p: sequence or np.array [x, y]

    Returns:
        np.array: float array of shape (2,)
    """
    point = np.asarray(p, dtype=float)
    if point.shape != (2,):
        raise InvalidInputError(f"Expected a 2D point, got shape {point.shape}")
    if not np.all(np.isfinite(point)):
        raise InvalidInputError(f"Point has non-finite coordinates: {point}")
    return point


def cross(u, v):
    """z component of the cross product of two 2D vectors."""
    return u[0] * v[1] - u[1] * v[0]


class VectorLine:
    """Infinite line in vector form: b + t * v."""

    def __init__(self, b, v):
        """
        Args:
            b: np.array [x, y], starting point
            v: np.array [x, y], direction vector (must be non-zero)
        """
        self.b = np.asarray(b, dtype=float)
        self.v = np.asarray(v, dtype=float)
        if not np.any(self.v):
            raise InvalidInputError("Direction vector of a line must be non-zero")

    def point_at(self, t):
        return self.b + t * self.v

    def unit_normal(self):
        """Unit vector orthogonal to the direction (direction rotated by +90 degrees)."""
        normal = np.array([-self.v[1], self.v[0]])
        return normal / np.linalg.norm(normal)

    def is_parallel_to(self, other):
        """
        Check if both lines have the same or opposite direction.

        The sine of the angle between the directions is compared against
        config.PARALLEL_TOLERANCE, so the test does not depend on the
        length of either direction vector.
        """
        scale = np.linalg.norm(self.v) * np.linalg.norm(other.v)
        return abs(cross(self.v, other.v)) <= config.PARALLEL_TOLERANCE * scale

    def is_equivalent_to(self, other):
        """Check if both lines describe the same set of points."""
        if not self.is_parallel_to(other):
            return False
        normal = self.unit_normal()
        offset = np.dot(normal, self.b) - np.dot(normal, other.b)
        return abs(offset) <= config.DISTANCE_TOLERANCE

    def intersect(self, other):
        """
        Intersection point of two lines.

        Solves b0 + s * v0 = b1 + t * v1 for s with Cramer's rule.

        Args:
            other: VectorLine

        Returns:
            np.array: [x, y] intersection point, or None if the lines are
                      parallel (no intersection or infinitely many)
        """
        if self.is_parallel_to(other):
            return None
        s = cross(other.b - self.b, other.v) / cross(self.v, other.v)
        return self.point_at(s)

    def __repr__(self):
        return f"VectorLine(b={self.b.tolist()}, v={self.v.tolist()})"
