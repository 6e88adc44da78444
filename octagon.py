import numpy as np

from vector_line import VectorLine, as_point


def regular_polygon(center, radius, sides, start_angle=0.0):
    """
    Vertices of a regular polygon, counter-clockwise.

    Args:
        center: [x, y] polygon center
        radius: float, distance from center to each vertex
        sides: int, number of vertices (>= 3)
        start_angle: float, angle of the first vertex in degrees

    Returns:
        list: np.array [x, y] vertices
    """
    center = as_point(center)
    angles = np.radians(start_angle + 360.0 * np.arange(sides) / sides)
    return [center + radius * np.array([np.cos(a), np.sin(a)]) for a in angles]


def octagon(center, radius):
    """Octagon with vertex k at 45 * k degrees from the center."""
    return regular_polygon(center, radius, 8)


def octagon_from_apothem(center, apothem):
    """
    Octagon whose edges lie at the given inner radius from the center.

    Edge k touches the circle of radius apothem at 45 * k degrees; each
    vertex is the intersection of two neighbouring edge lines.

    Returns:
        list: np.array [x, y] vertices, counter-clockwise
    """
    center = as_point(center)
    lines = []
    for midpoint in regular_polygon(center, apothem, 8):
        radial = midpoint - center
        lines.append(VectorLine(midpoint, np.array([-radial[1], radial[0]])))

    return [lines[i].intersect(lines[(i + 1) % 8]) for i in range(8)]
