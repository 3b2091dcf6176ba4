import unittest
from math import hypot, pi, sin

import numpy as np
from shapely.geometry import (
    GeometryCollection,
    LinearRing,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
)

from kerfbuffer import (
    DEFAULT_ARC_SEGMENTS,
    Line,
    UnknownGeometry,
    offset,
    offset_line,
    offset_line_string,
    offset_multi_line_string,
    offset_point,
    offset_with_arc_segments,
)
from kerfbuffer.kernel.channel import get_channel

UNIT_SQUARE = Polygon([(0, 0), (1, 0), (1, 1), (0, 1)])


def square(x0, y0, size):
    return [(x0, y0), (x0 + size, y0), (x0 + size, y0 + size), (x0, y0 + size)]


class TestOffsetPoint(unittest.TestCase):
    def test_point_default_vertex_count(self):
        result = offset(Point(0, 0), 2)
        self.assertIsInstance(result, MultiPolygon)
        self.assertEqual(len(result.geoms), 1)
        ring = result.geoms[0].exterior
        # 2 * 5 = 10 is even, bumped to 11, plus the closing coordinate.
        self.assertEqual(len(ring.coords), 12)
        for x, y in ring.coords:
            self.assertAlmostEqual(hypot(x, y), 2.0)

    def test_point_vertex_count_per_segments(self):
        for arc_segments in (1, 2, 3, 8, 16):
            result = offset_with_arc_segments(Point(5, -3), 1.5, arc_segments)
            coords = list(result.geoms[0].exterior.coords)
            self.assertEqual(len(coords) - 1, 2 * arc_segments + 1)
            for x, y in coords:
                self.assertAlmostEqual(hypot(x - 5, y + 3), 1.5)

    def test_point_first_vertex_past_zero(self):
        result = offset_point(Point(0, 0), 1.0, 5)
        x, y = result.geoms[0].exterior.coords[0]
        self.assertGreater(y, 0)
        self.assertLess(x, 1.0)
        # Last vertex lands on angle zero.
        x, y = result.geoms[0].exterior.coords[-2]
        self.assertAlmostEqual(x, 1.0)
        self.assertAlmostEqual(y, 0.0)

    def test_point_counter_clockwise(self):
        result = offset(Point(1, 1), 3)
        self.assertTrue(result.geoms[0].exterior.is_ccw)

    def test_point_accepts_coordinates(self):
        a = offset_point((2, 3), 1.0)
        b = offset_point(Point(2, 3), 1.0)
        self.assertEqual(list(a.geoms[0].exterior.coords), list(b.geoms[0].exterior.coords))

    def test_point_negative(self):
        result = offset(Point(0, 0), -1)
        self.assertIsInstance(result, MultiPolygon)
        self.assertTrue(result.is_empty)

    def test_point_zero_distance(self):
        for distance in (0, -0.0):
            result = offset(Point(3, 4), distance)
            self.assertIsInstance(result, MultiPolygon)
            self.assertTrue(result.is_empty)

    def test_point_empty(self):
        result = offset(Point(), 1)
        self.assertIsInstance(result, MultiPolygon)
        self.assertTrue(result.is_empty)


class TestOffsetLine(unittest.TestCase):
    def test_line_capsule_area(self):
        result = offset(Line((0, 0), (10, 0)), 1)
        self.assertEqual(len(result.geoms), 1)
        polygon = result.geoms[0]
        self.assertEqual(len(polygon.interiors), 0)
        # Rectangle plus two half 5-gons.
        self.assertAlmostEqual(polygon.area, 20 + 5 * sin(pi / 5), places=6)
        self.assertTrue(polygon.is_valid)

    def test_line_capsule_bounds(self):
        result = offset(Line((0, 0), (0, 4)), 0.5)
        minx, miny, maxx, maxy = result.bounds
        self.assertAlmostEqual(minx, -0.5)
        self.assertAlmostEqual(maxx, 0.5)
        self.assertLess(miny, 0)
        self.assertGreater(maxy, 4)
        self.assertGreaterEqual(miny, -0.5)
        self.assertLessEqual(maxy, 4.5)

    def test_line_degenerate_is_point(self):
        for arc_segments in (1, 4, 5, 12):
            line = offset_with_arc_segments(Line((1, 1), (1, 1)), 2, arc_segments)
            point = offset_with_arc_segments(Point(1, 1), 2, arc_segments)
            self.assertEqual(
                list(line.geoms[0].exterior.coords),
                list(point.geoms[0].exterior.coords),
            )

    def test_line_negative(self):
        self.assertTrue(offset_line(Line((0, 0), (1, 1)), -1).is_empty)

    def test_line_zero_distance(self):
        self.assertTrue(offset(Line((0, 0), (4, 0)), 0).is_empty)
        self.assertTrue(offset(Line((2, 2), (2, 2)), 0).is_empty)
        self.assertTrue(offset(LineString([(0, 0), (4, 0), (4, 4)]), 0).is_empty)

    def test_line_immutable(self):
        line = Line((0, 0), (1, 1))
        with self.assertRaises(AttributeError):
            line.start = 5
        self.assertEqual(line, Line(0j, 1 + 1j))
        self.assertEqual(line.coords, [(0.0, 0.0), (1.0, 1.0)])
        self.assertFalse(line.is_degenerate())


class TestOffsetLineString(unittest.TestCase):
    def test_line_string_single_edge(self):
        a = offset(LineString([(0, 0), (10, 0)]), 1)
        b = offset(Line((0, 0), (10, 0)), 1)
        self.assertAlmostEqual(a.area, b.area)

    def test_line_string_bend_is_connected(self):
        result = offset(LineString([(0, 0), (10, 0), (10, 10)]), 1)
        self.assertEqual(len(result.geoms), 1)
        self.assertEqual(len(result.geoms[0].interiors), 0)
        self.assertGreater(result.area, 40)
        self.assertLess(result.area, 44 + pi)

    def test_line_string_closed_loop_leaves_hole(self):
        ring = LineString(square(0, 0, 10) + [(0, 0)])
        result = offset(ring, 1)
        self.assertEqual(len(result.geoms), 1)
        polygon = result.geoms[0]
        self.assertEqual(len(polygon.interiors), 1)
        self.assertAlmostEqual(Polygon(polygon.interiors[0]).area, 64.0, places=6)

    def test_line_string_linear_ring(self):
        result = offset(LinearRing(square(0, 0, 10)), 1)
        self.assertEqual(len(result.geoms), 1)
        self.assertEqual(len(result.geoms[0].interiors), 1)

    def test_line_string_degenerate_edge(self):
        result = offset(LineString([(0, 0), (0, 0), (5, 0)]), 1)
        self.assertEqual(len(result.geoms), 1)
        self.assertGreater(result.area, 10)

    def test_line_string_negative(self):
        self.assertTrue(offset(LineString([(0, 0), (1, 0)]), -0.5).is_empty)
        self.assertTrue(offset_line_string(LineString([(0, 0), (1, 0)]), -2).is_empty)

    def test_line_string_empty(self):
        self.assertTrue(offset(LineString(), 1).is_empty)


class TestOffsetPolygon(unittest.TestCase):
    def test_unit_square(self):
        result = offset_with_arc_segments(UNIT_SQUARE, 1, 5)
        self.assertEqual(len(result.geoms), 1)
        expected = 1 + 4 + pi
        self.assertAlmostEqual(result.area, expected, delta=0.2)
        self.assertLess(result.area, expected)

    def test_unit_square_converges(self):
        expected = 1 + 4 + pi
        coarse = abs(offset_with_arc_segments(UNIT_SQUARE, 1, 5).area - expected)
        fine = abs(offset_with_arc_segments(UNIT_SQUARE, 1, 25).area - expected)
        self.assertLess(fine, coarse)
        self.assertAlmostEqual(offset_with_arc_segments(UNIT_SQUARE, 1, 25).area, expected, delta=0.01)

    def test_polygon_zero_distance(self):
        polygon = Polygon(square(2, 3, 4))
        result = offset(polygon, 0)
        self.assertAlmostEqual(result.area, polygon.area)
        result = offset(polygon, -0.0)
        self.assertAlmostEqual(result.area, polygon.area)

    def test_polygon_monotonic_dilation(self):
        polygon = Polygon([(0, 0), (6, 0), (6, 2), (2, 2), (2, 6), (0, 6)])
        areas = [offset(polygon, d).area for d in (0, 0.25, 0.5, 1, 2, 4)]
        self.assertGreaterEqual(areas[0], polygon.area - 1e-9)
        for a, b in zip(areas, areas[1:]):
            self.assertGreaterEqual(b, a)

    def test_polygon_erosion(self):
        result = offset(Polygon(square(0, 0, 4)), -1)
        self.assertEqual(len(result.geoms), 1)
        self.assertAlmostEqual(result.area, 4.0, places=6)
        minx, miny, maxx, maxy = result.bounds
        self.assertAlmostEqual(minx, 1.0)
        self.assertAlmostEqual(maxy, 3.0)

    def test_polygon_erosion_to_nothing(self):
        result = offset(Polygon(square(0, 0, 1)), -1)
        self.assertIsInstance(result, MultiPolygon)
        self.assertTrue(result.is_empty)

    def test_polygon_hole_kept(self):
        polygon = Polygon(square(0, 0, 10), [square(3, 3, 4)])
        result = offset(polygon, 1)
        self.assertEqual(len(result.geoms), 1)
        interiors = result.geoms[0].interiors
        self.assertEqual(len(interiors), 1)
        self.assertAlmostEqual(Polygon(interiors[0]).area, 4.0, places=6)

    def test_polygon_hole_closed(self):
        polygon = Polygon(square(0, 0, 10), [square(4, 4, 2)])
        result = offset(polygon, 1)
        self.assertEqual(len(result.geoms), 1)
        self.assertEqual(len(result.geoms[0].interiors), 0)

    def test_polygon_hole_erosion(self):
        polygon = Polygon(square(0, 0, 10), [square(3, 3, 4)])
        result = offset(polygon, -1)
        self.assertAlmostEqual(result.area, 64 - (32 + pi), delta=0.25)
        self.assertLess(result.area, polygon.area)

    def test_polygon_result_valid(self):
        polygon = Polygon([(0, 0), (10, 0), (10, 10), (9, 1), (0, 10)])
        for d in (0.5, 1, 3, -0.2):
            result = offset(polygon, d)
            self.assertTrue(result.is_valid)


class TestOffsetCollections(unittest.TestCase):
    def test_multi_point_disjoint(self):
        result = offset(MultiPoint([(0, 0), (10, 0)]), 1)
        self.assertEqual(len(result.geoms), 2)

    def test_multi_point_overlapping(self):
        result = offset(MultiPoint([(0, 0), (1, 0)]), 1)
        self.assertEqual(len(result.geoms), 1)

    def test_multi_point_negative(self):
        self.assertTrue(offset(MultiPoint([(0, 0), (1, 0)]), -1).is_empty)

    def test_multi_line_string(self):
        lines = MultiLineString([[(0, 0), (5, 0)], [(0, 10), (5, 10)]])
        result = offset(lines, 1)
        self.assertEqual(len(result.geoms), 2)
        self.assertTrue(offset(lines, -1).is_empty)

    def test_multi_polygon(self):
        polygons = MultiPolygon([Polygon(square(0, 0, 1)), Polygon(square(1.5, 0, 1))])
        result = offset(polygons, 1)
        self.assertEqual(len(result.geoms), 1)
        single = offset(Polygon(square(0, 0, 1)), 1)
        self.assertGreater(result.area, single.area)

    def test_geometry_collection(self):
        collection = GeometryCollection(
            [
                Point(0, 0),
                LineString([(20, 0), (30, 0)]),
                Polygon(square(40, 0, 2)),
            ]
        )
        result = offset(collection, 1)
        self.assertEqual(len(result.geoms), 3)

    def test_geometry_collection_nested(self):
        inner = GeometryCollection([Point(0, 0), Point(0.5, 0)])
        collection = GeometryCollection([inner, MultiPoint([(10, 10)])])
        result = offset(collection, 1)
        self.assertEqual(len(result.geoms), 2)

    def test_geometry_collection_empty(self):
        result = offset(GeometryCollection(), 1)
        self.assertIsInstance(result, MultiPolygon)
        self.assertTrue(result.is_empty)

    def test_union_order_independent(self):
        members = [Point(0, 0), Point(1.5, 0), Point(0.7, 1)]
        a = offset(GeometryCollection(members), 1)
        b = offset(GeometryCollection(members[::-1]), 1)
        self.assertAlmostEqual(a.area, b.area, places=6)
        self.assertEqual(len(a.geoms), len(b.geoms))


class TestOffsetErrors(unittest.TestCase):
    def test_unknown_geometry(self):
        for value in (None, "polygon", 42, [(0, 0), (1, 1)]):
            with self.assertRaises(UnknownGeometry):
                offset(value, 1)

    def test_unknown_geometry_short_circuits(self):
        with self.assertRaises(UnknownGeometry):
            offset_multi_line_string([LineString([(0, 0), (1, 0)]), object()], 1)

    def test_arc_segments_validated(self):
        for arc_segments in (0, -3, 2.5, True, "5"):
            with self.assertRaises(ValueError):
                offset_with_arc_segments(Point(0, 0), 1, arc_segments)

    def test_arc_segments_numpy_integer(self):
        a = offset_with_arc_segments(Point(0, 0), 1, np.int64(3))
        b = offset_with_arc_segments(Point(0, 0), 1, 3)
        self.assertEqual(list(a.geoms[0].exterior.coords), list(b.geoms[0].exterior.coords))
        with self.assertRaises(ValueError):
            offset_with_arc_segments(Point(0, 0), 1, np.int32(0))

    def test_distance_must_be_finite(self):
        geometries = (
            Point(0, 0),
            Line((0, 0), (1, 0)),
            LineString([(0, 0), (1, 0), (1, 1)]),
            UNIT_SQUARE,
        )
        for geometry in geometries:
            for distance in (float("nan"), float("inf"), float("-inf")):
                with self.assertRaises(ValueError):
                    offset(geometry, distance)

    def test_default_arc_segments(self):
        self.assertEqual(DEFAULT_ARC_SEGMENTS, 5)
        a = offset(Point(0, 0), 1)
        b = offset_with_arc_segments(Point(0, 0), 1, 5)
        self.assertTrue(a.equals(b))


class TestOffsetChannel(unittest.TestCase):
    def test_offset_channel_reports(self):
        messages = []
        channel = get_channel("offset")
        watcher = messages.append
        channel.watch(watcher)
        try:
            offset(Line((0, 0), (0, 0)), 1)
        finally:
            channel.unwatch(watcher)
        self.assertTrue(any("Line" in m for m in messages))
        self.assertTrue(any("degenerate" in m for m in messages))
        self.assertFalse(channel)
