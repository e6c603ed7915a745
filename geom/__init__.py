"""
geom — Planar geometry primitives
=================================

Map-space geometry shared by the topology model and the renderers.
Coordinates are metres with *y growing downwards*, the same orientation
as the screen, so a map point and a screen point only differ by an
offset and a scale.

Modules
-------
pt
    :class:`Pt2D` point and centroid helper.
line
    :class:`Line` segment with perpendicular shift / reverse.
polyline
    :class:`PolyLine` lane and turn centre lines, dashing.
polygon
    :class:`Polygon` fill shapes, hit-testing, rectangles.
bounds
    :class:`Bounds` axis-aligned bounding box.
"""

from .pt import Pt2D
from .line import Line
from .polyline import PolyLine
from .polygon import Polygon
from .bounds import Bounds

__all__ = [
    "Pt2D",
    "Line",
    "PolyLine",
    "Polygon",
    "Bounds",
]
