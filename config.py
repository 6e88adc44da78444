import logging

# Sine of the angle below which two directions count as parallel
PARALLEL_TOLERANCE = 1e-9
# Absolute slack for collinearity offsets and bounding-box containment
DISTANCE_TOLERANCE = 1e-7
# Signed distance a point must lie inside an obstacle to count as interior
INTERIOR_TOLERANCE = 1e-3

DEFAULT_AGENT_RADIUS = 0.0

LOG_LEVEL = logging.INFO

# Demo scene
START_POINT = (10.0, 10.0)
END_POINT = (630.0, 470.0)
OCTAGON_CENTERS = [(100.0, 300.0), (200.0, 200.0), (500.0, 100.0)]
OCTAGON_INNER_RADIUS = 50.0

# Single-obstacle scene
ROUND_TRIP_CENTER = (315.0, 235.0)
ROUND_TRIP_RADIUS = 150.0
