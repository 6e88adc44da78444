class InvalidInputError(ValueError):
    """Raised when a polygon, point or radius violates a precondition."""
