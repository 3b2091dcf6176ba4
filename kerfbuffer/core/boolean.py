"""
Boolean merge of polygon sets.

The polygon clipping itself is done by shapely (GEOS). This module only guarantees that
every call is total: operands are repaired with make_valid, collapsed parts (lines and
points left behind by zero-width shapes) are dropped, and the outcome is always a
MultiPolygon.
"""
import shapely
from shapely.errors import GEOSException
from shapely.geometry import GeometryCollection, MultiPolygon, Polygon

from ..kernel.channel import get_channel

channel = get_channel("boolean")


def _polygons(geometry):
    if geometry is None or geometry.is_empty:
        return
    if isinstance(geometry, Polygon):
        yield geometry
    elif isinstance(geometry, MultiPolygon):
        yield from geometry.geoms
    elif isinstance(geometry, GeometryCollection):
        for g in geometry.geoms:
            yield from _polygons(g)


def as_multipolygon(geometry) -> MultiPolygon:
    """
    Normalizes a shapely result into a MultiPolygon of valid, non-empty polygons.
    """
    if geometry is None:
        return MultiPolygon()
    if not geometry.is_valid:
        geometry = shapely.make_valid(geometry)
    return MultiPolygon([p for p in _polygons(geometry) if not p.is_empty])


def _operate(name, operation, a, b):
    a = as_multipolygon(a)
    b = as_multipolygon(b)
    try:
        result = operation(a, b)
    except GEOSException as e:
        # Robustness failure of the overlay: retry on snapped precision.
        if channel:
            channel(f"{name} failed ({e}), retrying with snapped grid")
        result = operation(a, b, grid_size=1e-9)
    return as_multipolygon(result)


def union(a, b) -> MultiPolygon:
    """
    Set union of two polygonal geometries. Operand order does not matter.
    """
    if a is None or a.is_empty:
        return as_multipolygon(b)
    if b is None or b.is_empty:
        return as_multipolygon(a)
    return _operate("union", shapely.union, a, b)


def difference(a, b) -> MultiPolygon:
    """
    Set difference a - b of two polygonal geometries.
    """
    if a is None or a.is_empty:
        return MultiPolygon()
    if b is None or b.is_empty:
        return as_multipolygon(a)
    return _operate("difference", shapely.difference, a, b)
