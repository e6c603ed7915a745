"""
ui/draw_intersection.py
=======================
Intersection footprint renderer and the shared signal-cycle painter.

:class:`DrawIntersection` is built once per intersection when the map
loads and keeps its derived pedestrian geometry for the scene's
lifetime.  :func:`draw_signal_cycle` paints one cycle's protected and
yielding movements; both the in-scene overlay and the signal diagram
use it, so the two never disagree.
"""

from __future__ import annotations

from typing import Dict, Tuple

from config import MIN_ZOOM_FOR_MARKINGS
from geom import Bounds, Polygon, Pt2D
from sim.network import Intersection, IntersectionType, RoadMap
from sim.traffic_signal import Cycle, TurnPriority

from .canvas import GfxCtx
from .draw_crosswalk import DrawCrosswalk
from .draw_turn import draw_dashed, draw_full
from .intersection_geometry import SidewalkCorner, calculate_corners, calculate_crosswalks
from .types import RenderCtx, RenderOptions, Text

_TYPE_COLORS: Dict[IntersectionType, str] = {
    IntersectionType.BORDER: "border intersection",
    IntersectionType.STOP_SIGN: "stop sign intersection",
    IntersectionType.TRAFFIC_SIGNAL: "traffic signal intersection",
}


class DrawIntersection:
    def __init__(self, inter: Intersection, road_map: RoadMap) -> None:
        self.id = inter.id
        self.intersection_type = inter.intersection_type
        self.polygon = Polygon(inter.polygon)
        # Don't skew the center towards the repeated closing point.
        self.center = Pt2D.center(inter.polygon[:-1])
        self.crosswalks: Tuple[DrawCrosswalk, ...] = tuple(calculate_crosswalks(inter.id, road_map))
        self.sidewalk_corners: Tuple[SidewalkCorner, ...] = tuple(
            calculate_corners(inter.id, road_map)
        )

    def __repr__(self) -> str:
        return (f"DrawIntersection(id={self.id}, crosswalks={len(self.crosswalks)}, "
                f"corners={len(self.sidewalk_corners)})")

    def draw(self, g: GfxCtx, opts: RenderOptions, ctx: RenderCtx) -> None:
        color = opts.color or ctx.cs.get(_TYPE_COLORS[self.intersection_type])
        g.draw_polygon(color, self.polygon)

        if opts.debug_mode:
            # First and last point are repeated
            for idx, pt in enumerate(ctx.road_map.get_i(self.id).polygon[1:]):
                ctx.canvas.draw_text_at(g, Text.from_line(str(idx + 1)), pt)
        elif ctx.canvas.cam_zoom >= MIN_ZOOM_FOR_MARKINGS:
            corner_color = ctx.cs.get("sidewalk corner")
            for corner in self.sidewalk_corners:
                g.draw_polygon(corner_color, corner.polygon)

            if self.intersection_type is IntersectionType.TRAFFIC_SIGNAL:
                if ctx.hints.suppress_traffic_signal_details != self.id:
                    self._draw_traffic_signal(g, ctx)
            else:
                crosswalk_color = ctx.cs.get("crosswalk")
                for crosswalk in self.crosswalks:
                    crosswalk.draw(g, crosswalk_color)

    def _draw_traffic_signal(self, g: GfxCtx, ctx: RenderCtx) -> None:
        # A signal without cycles raises ValueError here.
        if not ctx.sim.is_in_overtime(self.id):
            cycle, _ = ctx.sim.current_cycle_and_remaining_time(self.id)
            draw_signal_cycle(cycle, g, ctx)

    def get_bounds(self) -> Bounds:
        return self.polygon.get_bounds()

    def contains_pt(self, pt: Pt2D) -> bool:
        return self.polygon.contains_pt(pt)


def draw_signal_cycle(cycle: Cycle, g: GfxCtx, ctx: RenderCtx) -> None:
    """Paint the crosswalks and turn paths *cycle* lets through.

    Pedestrians either walk or wait, so a crosswalk is drawn only when
    protected.  Sidewalk-to-sidewalk turns are shown through the
    crosswalks, never as turn paths.
    """
    priority_color = ctx.cs.get("turns protected by traffic signal right now")
    yield_color = ctx.cs.get("turns allowed with yielding by traffic signal right now")
    crosswalk_color = ctx.cs.get("crosswalk")

    for crosswalk in ctx.draw_map.get_i(cycle.parent).crosswalks:
        if cycle.get_priority(crosswalk.turn_id) is TurnPriority.PRIORITY:
            crosswalk.draw(g, crosswalk_color)
    for t in sorted(cycle.priority_turns):
        turn = ctx.road_map.get_t(t)
        if not turn.between_sidewalks():
            draw_full(turn, g, priority_color)
    for t in sorted(cycle.yield_turns):
        turn = ctx.road_map.get_t(t)
        if not turn.between_sidewalks():
            draw_dashed(turn, g, yield_color)
