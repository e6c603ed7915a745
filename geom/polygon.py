"""
geom/polygon.py
===============
Filled polygons: intersection footprints, sidewalk corners, crosswalk
stripes, lane surfaces and panel rectangles.

Hit-testing and bounds come from the wrapped shapely polygon; the numpy
vertex array feeds the per-frame screen transform.
"""

from __future__ import annotations

from typing import List, Sequence

import numpy as np
from shapely.geometry import Point
from shapely.geometry import Polygon as ShapelyPolygon

from .bounds import Bounds
from .pt import Pt2D


class Polygon:
    """Simple polygon over an ordered point list.

    The ring may or may not repeat its first point at the end; both
    forms fill and hit-test identically.
    """

    def __init__(self, pts: Sequence[Pt2D]) -> None:
        if len(pts) < 3:
            raise ValueError(f"Polygon needs at least 3 points, got {len(pts)}")
        self.points: List[Pt2D] = list(pts)
        self._arr = np.array([(p.x, p.y) for p in self.points], dtype=float)
        self._shape = ShapelyPolygon(self._arr)

    def __repr__(self) -> str:
        return f"Polygon({self.points!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Polygon) and self.points == other.points

    def __hash__(self) -> int:
        return hash(tuple(self.points))

    @staticmethod
    def rectangle_topleft(top_left: Pt2D, width: float, height: float) -> Polygon:
        x, y = top_left.x, top_left.y
        return Polygon([
            Pt2D(x, y),
            Pt2D(x + width, y),
            Pt2D(x + width, y + height),
            Pt2D(x, y + height),
        ])

    def as_array(self) -> np.ndarray:
        """``(n, 2)`` float array of the vertices (a copy)."""
        return self._arr.copy()

    def get_bounds(self) -> Bounds:
        return Bounds(*self._shape.bounds)

    def contains_pt(self, pt: Pt2D) -> bool:
        """Strictly inside; points on the outline do not count."""
        return bool(self._shape.contains(Point(pt.x, pt.y)))
