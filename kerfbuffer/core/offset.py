"""
Offset (buffer) of 2D geometries by a signed distance.

Every supported geometry is turned into a MultiPolygon:

- Point: a regular polygon approximating the circle of radius distance.
- Line: a capsule, the two parallel offset segments joined by round caps.
- LineString: the union of the capsules of all of its edges.
- Polygon: its rings are buffered like line strings and merged with the polygon itself,
  by union for positive distances and by difference for negative distances.
- MultiPoint, MultiLineString, MultiPolygon, GeometryCollection: the union of the
  offsets of their members.

Shapes without an interior (points and lines) have nothing to erode, a negative distance
returns the empty MultiPolygon for them.

Offset Direction Convention:
- The inwards normal of an edge is its direction rotated by +90 degrees, the outwards
  normal by -90 degrees. Positive distance always grows the shape.

Rounded joints are tessellated with arc_segments segments (DEFAULT_ARC_SEGMENTS by
default), always forced to an odd number.
"""
from math import cos, isfinite, sin, tau
from numbers import Integral

from shapely.geometry import (
    GeometryCollection,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
)

from ..kernel.channel import get_channel
from ..kernel.exceptions import EdgeError, UnknownGeometry
from ..tools.arc import create_arc
from ..tools.edge import Edge
from .boolean import as_multipolygon, difference, union
from .geometry import (
    Line,
    as_complex,
    coords_to_complex,
    empty_multipolygon,
    polygon_from_vertices,
)

# Arcs around corners are made of 5 segments by default.
DEFAULT_ARC_SEGMENTS = 5

channel = get_channel("offset")


def offset(geometry, distance: float) -> MultiPolygon:
    """
    Offsets the geometry by distance using DEFAULT_ARC_SEGMENTS for the rounded joints.
    """
    return offset_with_arc_segments(geometry, distance, DEFAULT_ARC_SEGMENTS)


def offset_with_arc_segments(
    geometry, distance: float, arc_segments: int
) -> MultiPolygon:
    """
    Offsets the geometry by distance.

    @param geometry: Point, Line, LineString, Polygon, MultiPoint, MultiLineString,
        MultiPolygon or GeometryCollection
    @param distance: positive values dilate, negative values erode
    @param arc_segments: number of segments used for rounded joints, at least 1
    @return: MultiPolygon, possibly empty
    @raise ValueError: arc_segments is not an integer of at least 1, or distance is not finite
    @raise UnknownGeometry: geometry is not one of the supported kinds
    @raise EdgeError: an edge without a normal was met outside of a line offset
    """
    if isinstance(arc_segments, bool) or not isinstance(arc_segments, Integral):
        raise ValueError(f"arc_segments must be an integer, got {arc_segments!r}")
    if arc_segments < 1:
        raise ValueError(f"arc_segments must be at least 1, got {arc_segments}")
    distance = float(distance)
    if not isfinite(distance):
        raise ValueError(f"distance must be finite, got {distance}")
    return _dispatch(geometry, distance, int(arc_segments))


def _dispatch(geometry, distance, arc_segments):
    if channel:
        channel(f"offset {type(geometry).__name__} by {distance}")
    if isinstance(geometry, Point):
        return offset_point(geometry, distance, arc_segments)
    elif isinstance(geometry, Line):
        return offset_line(geometry, distance, arc_segments)
    elif isinstance(geometry, LineString):
        # LinearRing is a closed LineString.
        return offset_line_string(geometry, distance, arc_segments)
    elif isinstance(geometry, Polygon):
        return offset_polygon(geometry, distance, arc_segments)
    elif isinstance(geometry, MultiPoint):
        return offset_multi_point(geometry, distance, arc_segments)
    elif isinstance(geometry, MultiLineString):
        return offset_multi_line_string(geometry, distance, arc_segments)
    elif isinstance(geometry, MultiPolygon):
        return offset_multi_polygon(geometry, distance, arc_segments)
    elif isinstance(geometry, GeometryCollection):
        return offset_geometry_collection(geometry, distance, arc_segments)
    raise UnknownGeometry(geometry)


def _fold_union(members, distance, arc_segments):
    result = empty_multipolygon()
    count = 0
    for member in members:
        result = union(result, _dispatch(member, distance, arc_segments))
        count += 1
    if channel:
        channel(f"union of {count} members: {len(result.geoms)} polygons")
    return result


def offset_geometry_collection(
    collection: GeometryCollection, distance: float, arc_segments=DEFAULT_ARC_SEGMENTS
) -> MultiPolygon:
    return _fold_union(collection.geoms, distance, arc_segments)


def offset_multi_polygon(
    multi_polygon: MultiPolygon, distance: float, arc_segments=DEFAULT_ARC_SEGMENTS
) -> MultiPolygon:
    return _fold_union(multi_polygon.geoms, distance, arc_segments)


def offset_multi_line_string(
    multi_line_string, distance: float, arc_segments=DEFAULT_ARC_SEGMENTS
) -> MultiPolygon:
    """
    Union of the offsets of every line string. Accepts a MultiLineString or any iterable
    of line strings.
    """
    if distance < 0:
        return empty_multipolygon()
    if isinstance(multi_line_string, MultiLineString):
        multi_line_string = multi_line_string.geoms
    return _fold_union(multi_line_string, distance, arc_segments)


def offset_multi_point(
    multi_point: MultiPoint, distance: float, arc_segments=DEFAULT_ARC_SEGMENTS
) -> MultiPolygon:
    if distance < 0:
        return empty_multipolygon()
    return _fold_union(multi_point.geoms, distance, arc_segments)


def offset_polygon(
    polygon: Polygon, distance: float, arc_segments=DEFAULT_ARC_SEGMENTS
) -> MultiPolygon:
    """
    The rings are buffered by the absolute distance. Growing adds those buffers to the
    polygon, shrinking removes them from it.
    """
    width = abs(distance)
    exterior_with_offset = offset_line_string(polygon.exterior, width, arc_segments)
    interiors_with_offset = offset_multi_line_string(
        list(polygon.interiors), width, arc_segments
    )
    if distance >= 0:
        return union(union(polygon, exterior_with_offset), interiors_with_offset)
    return difference(
        difference(polygon, exterior_with_offset), interiors_with_offset
    )


def offset_line_string(
    line_string: LineString, distance: float, arc_segments=DEFAULT_ARC_SEGMENTS
) -> MultiPolygon:
    """
    Unites the capsules of all edges, then keeps the first polygon of that union as the
    outer shell and subtracts every following polygon from it, in order.
    """
    if distance < 0:
        return empty_multipolygon()

    vertices = coords_to_complex(line_string.coords)
    line_string_with_offset = empty_multipolygon()
    for start, end in zip(vertices, vertices[1:]):
        line_with_offset = offset_line(Line(start, end), distance, arc_segments)
        line_string_with_offset = union(line_string_with_offset, line_with_offset)

    polygons = list(line_string_with_offset.geoms)
    if not polygons:
        return empty_multipolygon()
    result = MultiPolygon([polygons[0]])
    for hole in polygons[1:]:
        result = difference(result, hole)
    return result


def offset_line(line: Line, distance: float, arc_segments=DEFAULT_ARC_SEGMENTS) -> MultiPolygon:
    """
    Capsule around the line: both parallel offsets joined by an outwards arc around each
    end. A line whose vertices overlap is buffered like a point.
    A zero distance collapses the capsule, which yields the empty MultiPolygon.
    """
    if distance < 0:
        return empty_multipolygon()

    v1 = line.start
    v2 = line.end
    edge = Edge(v1, v2)
    try:
        in_normal = edge.inwards_normal()
        out_normal = edge.outwards_normal()
    except EdgeError:
        if channel:
            channel(f"degenerate edge at {v1}, falling back to point buffer")
        return offset_point(v1, distance, arc_segments)

    offsets = (
        edge.with_offset(in_normal.real * distance, in_normal.imag * distance),
        edge.inverse_with_offset(out_normal.real * distance, out_normal.imag * distance),
    )
    vertices = []
    for i, center in enumerate((v1, v2)):
        current_edge = offsets[i]
        prev_edge = offsets[(i + 1) % 2]
        create_arc(
            vertices,
            center,
            distance,
            prev_edge.end,
            current_edge.start,
            arc_segments,
            True,
        )
    return as_multipolygon(polygon_from_vertices(vertices))


def offset_point(point, distance: float, arc_segments=DEFAULT_ARC_SEGMENTS) -> MultiPolygon:
    """
    Regular polygon around the point with 2 * arc_segments vertices, bumped to the next
    odd count. Vertices run counter-clockwise, the first one a full step past angle 0.
    A zero distance collapses the polygon to its center, which yields the empty MultiPolygon.
    """
    if distance < 0:
        return empty_multipolygon()
    if isinstance(point, Point) and point.is_empty:
        return empty_multipolygon()

    center = as_complex(point)
    vertex_count = arc_segments * 2
    if vertex_count % 2 == 0:
        vertex_count += 1

    step = tau / vertex_count
    contour = []
    angle = 0.0
    for _ in range(vertex_count):
        angle += step
        contour.append(
            complex(
                center.real + distance * cos(angle),
                center.imag + distance * sin(angle),
            )
        )
    return as_multipolygon(polygon_from_vertices(contour))
