"""
geom/polyline.py
================
Open chain of line segments: lane centre lines and turn paths.

Measures along the chain go through a shapely ``LineString``.
"""

from __future__ import annotations

from typing import List, Sequence

from shapely.geometry import LineString
from shapely.ops import substring

from .line import Line
from .polygon import Polygon
from .pt import Pt2D

_EPSILON = 1e-9


class PolyLine:
    """At least two points; consecutive points must differ."""

    def __init__(self, pts: Sequence[Pt2D]) -> None:
        if len(pts) < 2:
            raise ValueError(f"PolyLine needs at least 2 points, got {len(pts)}")
        for a, b in zip(pts, pts[1:]):
            if a.approx_eq(b, _EPSILON):
                raise ValueError(f"PolyLine has a repeated point {a}")
        self.pts: List[Pt2D] = list(pts)
        self._shape = LineString([p.as_tuple() for p in self.pts])

    def __repr__(self) -> str:
        return f"PolyLine({self.pts!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, PolyLine) and self.pts == other.pts

    def __hash__(self) -> int:
        return hash(tuple(self.pts))

    def lines(self) -> List[Line]:
        return [Line(a, b) for a, b in zip(self.pts, self.pts[1:])]

    def first_line(self) -> Line:
        return Line(self.pts[0], self.pts[1])

    def last_line(self) -> Line:
        return Line(self.pts[-2], self.pts[-1])

    def first_pt(self) -> Pt2D:
        return self.pts[0]

    def last_pt(self) -> Pt2D:
        return self.pts[-1]

    def length(self) -> float:
        return self._shape.length

    def slice_lines(self, start: float, end: float) -> List[Line]:
        """Pieces of the chain between *start* and *end* metres along it."""
        if end - start <= _EPSILON:
            return []
        piece = substring(self._shape, start, end)
        if piece.geom_type != "LineString":
            return []
        pts = [Pt2D(x, y) for x, y in piece.coords]
        return [Line(a, b) for a, b in zip(pts, pts[1:]) if a.dist_to(b) > _EPSILON]

    def dashed_lines(self, dash_len: float, dash_gap: float) -> List[Line]:
        """Split into dashes of *dash_len* separated by *dash_gap*."""
        if dash_len <= 0.0 or dash_gap < 0.0:
            raise ValueError(f"bad dash pattern {dash_len}/{dash_gap}")
        total = self.length()
        period = dash_len + dash_gap
        dashes: List[Line] = []
        dist = 0.0
        while dist < total:
            dashes.extend(self.slice_lines(dist, min(dist + dash_len, total)))
            dist += period
        return dashes

    def make_polygons(self, thickness: float) -> List[Polygon]:
        """One rectangle per segment, *thickness* wide."""
        return [line.make_polygon(thickness) for line in self.lines()]
