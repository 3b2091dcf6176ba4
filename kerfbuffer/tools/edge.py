"""
Directed edges and their parallel offsets.

Vertices are complex numbers (x + y * 1j). An edge knows its direction and can produce
the two unit normals:

- inwards normal: direction rotated by +90 degrees, (-dy, dx) / |d|
- outwards normal: direction rotated by -90 degrees, (dy, -dx) / |d|

A zero length edge has no normal, asking for one raises EdgeError.
"""
from math import isfinite

from ..kernel.exceptions import EdgeError


class Edge:
    __slots__ = ("start", "end")

    def __init__(self, start: complex, end: complex):
        self.start = complex(start)
        self.end = complex(end)

    def __repr__(self):
        return f"Edge({self.start!r}, {self.end!r})"

    def __eq__(self, other):
        if not isinstance(other, Edge):
            return NotImplemented
        return self.start == other.start and self.end == other.end

    def __hash__(self):
        return hash((self.start, self.end))

    @property
    def direction(self) -> complex:
        return self.end - self.start

    @property
    def length(self) -> float:
        return abs(self.direction)

    def inwards_normal(self) -> complex:
        """
        Unit normal on the left hand side of the edge.

        @raise EdgeError: if the vertices of the edge overlap.
        """
        direction = self.direction
        length = abs(direction)
        if length == 0:
            raise EdgeError(self.start, self.end)
        # Multiplying by 1j rotates counter-clockwise by 90 degrees.
        normal = direction * 1j / length
        if not (isfinite(normal.real) and isfinite(normal.imag)):
            raise EdgeError(self.start, self.end)
        return normal

    def outwards_normal(self) -> complex:
        """
        Unit normal on the right hand side of the edge.

        @raise EdgeError: if the vertices of the edge overlap.
        """
        return -self.inwards_normal()

    def with_offset(self, dx: float, dy: float) -> "Edge":
        """
        Edge translated by (dx, dy), same orientation.
        """
        delta = complex(dx, dy)
        return Edge(self.start + delta, self.end + delta)

    def inverse_with_offset(self, dx: float, dy: float) -> "Edge":
        """
        Edge translated by (dx, dy) running the other way, from end to start.
        """
        delta = complex(dx, dy)
        return Edge(self.end + delta, self.start + delta)
