"""
geom/bounds.py
==============
Axis-aligned bounding boxes.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

from shapely.geometry import MultiPoint

from .pt import Pt2D


@dataclass(frozen=True)
class Bounds:
    """Box from ``(min_x, min_y)`` to ``(max_x, max_y)``; the default is empty."""

    min_x: float = math.inf
    min_y: float = math.inf
    max_x: float = -math.inf
    max_y: float = -math.inf

    @classmethod
    def from_points(cls, pts: Iterable[Pt2D]) -> Bounds:
        coords = [p.as_tuple() for p in pts]
        if not coords:
            return cls()
        return cls(*MultiPoint(coords).bounds)

    def is_empty(self) -> bool:
        return self.min_x > self.max_x

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def top_left(self) -> Pt2D:
        return Pt2D(self.min_x, self.min_y)

    def contains(self, pt: Pt2D) -> bool:
        return (self.min_x <= pt.x <= self.max_x
                and self.min_y <= pt.y <= self.max_y)
