"""
Glue between shapely geometries and the complex number vertices used by the offset core.

shapely provides every geometry kind the offset accepts except the single edge, which is
the Line value defined here.
"""
import numpy as np
from shapely.geometry import MultiPolygon, Point, Polygon


def as_complex(value) -> complex:
    """
    Converts a coordinate-like value into a complex vertex.

    Accepts complex numbers, (x, y) sequences, shapely Points and objects with x and y
    attributes.
    """
    if isinstance(value, complex):
        return value
    if isinstance(value, (int, float)):
        return complex(value)
    if isinstance(value, Point):
        return complex(value.x, value.y)
    if hasattr(value, "x") and hasattr(value, "y"):
        return complex(float(value.x), float(value.y))
    x, y = value[0], value[1]
    return complex(float(x), float(y))


def coords_to_complex(coords) -> list:
    points = np.asarray(coords, dtype=float)
    if len(points) == 0:
        return []
    return list(points[:, 0] + points[:, 1] * 1j)


class Line:
    """
    A single directed edge from start to end.

    Line is an immutable value: start and end are stored as complex vertices.
    """

    __slots__ = ("_start", "_end")

    def __init__(self, start, end):
        object.__setattr__(self, "_start", as_complex(start))
        object.__setattr__(self, "_end", as_complex(end))

    def __setattr__(self, key, value):
        raise AttributeError("Line is immutable")

    @property
    def start(self) -> complex:
        return self._start

    @property
    def end(self) -> complex:
        return self._end

    @property
    def coords(self):
        return [
            (self._start.real, self._start.imag),
            (self._end.real, self._end.imag),
        ]

    def is_degenerate(self) -> bool:
        return self._start == self._end

    def __iter__(self):
        yield self._start
        yield self._end

    def __eq__(self, other):
        if not isinstance(other, Line):
            return NotImplemented
        return self._start == other._start and self._end == other._end

    def __hash__(self):
        return hash((self._start, self._end))

    def __repr__(self):
        return f"Line(({self._start.real}, {self._start.imag}), ({self._end.real}, {self._end.imag}))"


def polygon_from_vertices(vertices) -> Polygon:
    # shapely wants points as (x, y) rows and not as x + y * 1j
    complex_array = np.array(vertices, dtype=complex)
    return Polygon(np.column_stack((complex_array.real, complex_array.imag)))


def empty_multipolygon() -> MultiPolygon:
    return MultiPolygon()
