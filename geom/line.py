"""
geom/line.py
============
Straight segment between two points.

:meth:`Line.shift` moves the whole segment sideways.  With y pointing
down, a positive shift lands on the *right* of the direction of travel,
which is where right-hand traffic keeps its kerb.  Shapely measures
offsets in a y-up frame, where the same side is its *left*, so a
positive width maps straight onto a positive ``offset_curve`` distance.
"""

from __future__ import annotations

from dataclasses import dataclass

from shapely.geometry import LineString

from .polygon import Polygon
from .pt import Pt2D


@dataclass(frozen=True)
class Line:
    """Directed segment ``pt1 -> pt2``."""

    pt1: Pt2D
    pt2: Pt2D

    def as_shape(self) -> LineString:
        return LineString([self.pt1.as_tuple(), self.pt2.as_tuple()])

    def length(self) -> float:
        return self.pt1.dist_to(self.pt2)

    def angle(self) -> float:
        """Heading in radians; a zero-length line has none."""
        if self.length() == 0.0:
            raise ValueError(f"zero-length line at {self.pt1}")
        return self.pt1.angle_to(self.pt2)

    def reverse(self) -> Line:
        return Line(self.pt2, self.pt1)

    def shift(self, width: float) -> Line:
        """Parallel copy moved *width* to the right of travel."""
        if self.length() == 0.0:
            raise ValueError(f"cannot shift zero-length line at {self.pt1}")
        if width == 0.0:
            return self
        if width < 0.0:
            # Only positive offsets keep the direction on every GEOS version.
            return self.reverse().shift(-width).reverse()
        coords = self.as_shape().offset_curve(width).coords
        return Line(Pt2D(*coords[0]), Pt2D(*coords[-1]))

    def dist_along(self, dist: float) -> Pt2D:
        """Point *dist* metres from ``pt1`` towards ``pt2``, clamped to the segment."""
        pt = self.as_shape().interpolate(dist)
        return Pt2D(pt.x, pt.y)

    def make_polygon(self, thickness: float) -> Polygon:
        """Rectangle of *thickness* centred on this line."""
        half = thickness / 2.0
        right = self.shift(half)
        left = self.shift(-half)
        return Polygon([right.pt1, right.pt2, left.pt2, left.pt1])
