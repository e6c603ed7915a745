"""
geom/pt.py
==========
The 2D point type used everywhere in map space.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple

import numpy as np


@dataclass(frozen=True)
class Pt2D:
    """Immutable map-space point (metres, y down)."""

    x: float
    y: float

    @staticmethod
    def center(pts: Sequence[Pt2D]) -> Pt2D:
        """Arithmetic mean of *pts*.

        Callers working with a closed ring must drop the repeated closing
        point first, otherwise that vertex is counted twice.
        """
        if not pts:
            raise ValueError("center of an empty point list")
        arr = np.array([(p.x, p.y) for p in pts], dtype=float)
        cx, cy = arr.mean(axis=0)
        return Pt2D(float(cx), float(cy))

    @staticmethod
    def from_array(arr: Iterable[Tuple[float, float]]) -> list:
        return [Pt2D(float(x), float(y)) for x, y in arr]

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def dist_to(self, other: Pt2D) -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    def angle_to(self, other: Pt2D) -> float:
        """Heading from this point to *other* in radians."""
        if self.x == other.x and self.y == other.y:
            raise ValueError(f"no angle between coincident points {self}")
        return math.atan2(other.y - self.y, other.x - self.x)

    def project_away(self, dist: float, angle: float) -> Pt2D:
        return Pt2D(self.x + dist * math.cos(angle),
                    self.y + dist * math.sin(angle))

    def offset(self, dx: float, dy: float) -> Pt2D:
        return Pt2D(self.x + dx, self.y + dy)

    def approx_eq(self, other: Pt2D, eps: float = 1e-6) -> bool:
        return abs(self.x - other.x) <= eps and abs(self.y - other.y) <= eps
