"""
This module provides the tessellation of circular arcs into straight segments
"""
from math import atan2, cos, sin, tau


def normalized_angle(vertex: complex, center: complex) -> float:
    """
    Angle of vertex as seen from center, within [0, tau).
    """
    delta = vertex - center
    angle = atan2(delta.imag, delta.real)
    if angle < 0:
        angle += tau
    return angle


def create_arc(
    vertices: list,
    center: complex,
    radius: float,
    start_vertex: complex,
    end_vertex: complex,
    segment_count: int,
    outwards: bool,
):
    """
    Appends the polyline approximation of the arc around center from start_vertex to
    end_vertex to vertices.

    The first and last appended points are start_vertex and end_vertex themselves, only
    the interior points are computed on the circle of the given radius.

    An even segment_count is lowered by one, the subdivision always has an odd number of
    segments. With outwards set the arc runs clockwise from start to end, which bulges
    away from the shape for convex corners and caps; otherwise it sweeps the
    complementary way around.
    """
    start_angle = normalized_angle(start_vertex, center)
    end_angle = normalized_angle(end_vertex, center)

    if segment_count % 2 == 0:
        segment_count -= 1

    if start_angle > end_angle:
        angle = start_angle - end_angle
    else:
        angle = start_angle + tau - end_angle

    segment_angle = (-angle if outwards else tau - angle) / segment_count

    vertices.append(start_vertex)
    for i in range(1, segment_count):
        a = start_angle + segment_angle * i
        vertices.append(
            complex(center.real + cos(a) * radius, center.imag + sin(a) * radius)
        )
    vertices.append(end_vertex)
    return vertices
