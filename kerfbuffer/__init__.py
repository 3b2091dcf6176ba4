"""
kerfbuffer: rounded offset (buffer) of 2D geometries.

    from shapely.geometry import Polygon
    from kerfbuffer import offset

    grown = offset(Polygon([(0, 0), (1, 0), (1, 1), (0, 1)]), 1.0)
"""

from .core.geometry import Line
from .core.offset import (
    DEFAULT_ARC_SEGMENTS,
    offset,
    offset_geometry_collection,
    offset_line,
    offset_line_string,
    offset_multi_line_string,
    offset_multi_point,
    offset_multi_polygon,
    offset_point,
    offset_polygon,
    offset_with_arc_segments,
)
from .core.parameters import OffsetParameters
from .kernel.exceptions import EdgeError, OffsetError, UnknownGeometry

APPLICATION_NAME = "kerfbuffer"
APPLICATION_VERSION = "0.1.0"
