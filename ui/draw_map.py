"""
ui/draw_map.py
==============
Scene-lifetime cache of every renderable map object.

Geometry is derived once here, when the map loads, and reused by every
frame afterwards.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from geom import Bounds, Pt2D
from sim.network import RoadMap

from .canvas import GfxCtx
from .draw_intersection import DrawIntersection
from .draw_lane import DrawLane
from .types import RenderCtx, RenderOptions

log = logging.getLogger(__name__)


class DrawMap:
    def __init__(self, road_map: RoadMap) -> None:
        self.lanes: List[DrawLane] = [DrawLane(l) for l in road_map.all_lanes()]
        self.intersections: Dict[int, DrawIntersection] = {
            i.id: DrawIntersection(i, road_map) for i in road_map.all_intersections()
        }

        self.bounds = Bounds.from_points(
            [pt for lane in self.lanes for polygon in lane.polygons for pt in polygon.points]
            + [pt for inter in self.intersections.values() for pt in inter.polygon.points]
        )

        log.debug(
            "prepared %d lanes, %d intersections, %d crosswalks, %d sidewalk corners",
            len(self.lanes),
            len(self.intersections),
            sum(len(i.crosswalks) for i in self.intersections.values()),
            sum(len(i.sidewalk_corners) for i in self.intersections.values()),
        )

    def get_i(self, i: int) -> DrawIntersection:
        return self.intersections[i]

    def intersection_at(self, pt: Pt2D) -> Optional[int]:
        """Id of the intersection whose footprint contains *pt*, if any."""
        for inter in self.intersections.values():
            if inter.get_bounds().contains(pt) and inter.contains_pt(pt):
                return inter.id
        return None

    def draw(
        self,
        g: GfxCtx,
        ctx: RenderCtx,
        debug_mode: bool = False,
        selected: Optional[int] = None,
    ) -> None:
        plain = RenderOptions(debug_mode=debug_mode)
        for lane in self.lanes:
            lane.draw(g, plain, ctx)
        for inter in self.intersections.values():
            opts = plain
            if inter.id == selected:
                opts = RenderOptions(color=ctx.cs.get("selected"), debug_mode=debug_mode)
            inter.draw(g, opts, ctx)
