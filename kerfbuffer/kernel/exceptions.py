class OffsetError(Exception):
    """
    This root offset exception is provided so callers can catch every failure of an
    offset computation with a single except clause.
    """


class EdgeError(OffsetError):
    """
    EdgeError is raised when the normal of an edge cannot be established, which happens
    when both vertices of the edge overlap.

    The line offset routine catches it and falls back to a point buffer. Any other place
    that needs a valid normal lets it propagate.
    """

    def __init__(self, start=None, end=None):
        self.start = start
        self.end = end
        super().__init__(start, end)

    def __str__(self):
        return f"Edge error: vertices overlap ({self.start} -> {self.end})"


class UnknownGeometry(OffsetError, TypeError):
    """
    Exception raised when a value outside the supported geometry set is given to offset.
    """

    def __init__(self, geometry=None):
        self.geometry = geometry
        super().__init__(type(geometry).__name__)

    def __str__(self):
        return f"Unknown geometry: {type(self.geometry).__name__}"
