"""
ui/draw_lane.py
===============
Lane and sidewalk surfaces.
"""

from __future__ import annotations

from typing import Tuple

from geom import Polygon
from sim.network import LANE_THICKNESS, Lane

from .canvas import GfxCtx
from .types import RenderCtx, RenderOptions


class DrawLane:
    def __init__(self, lane: Lane) -> None:
        self.id = lane.id
        self.is_sidewalk = lane.is_sidewalk()
        self.polygons: Tuple[Polygon, ...] = tuple(
            lane.center_pts.make_polygons(LANE_THICKNESS)
        )

    def __repr__(self) -> str:
        return f"DrawLane(id={self.id}, sidewalk={self.is_sidewalk})"

    def draw(self, g: GfxCtx, opts: RenderOptions, ctx: RenderCtx) -> None:
        color = opts.color or ctx.cs.get("sidewalk" if self.is_sidewalk else "driving lane")
        g.draw_polygons(color, list(self.polygons))
