"""
ui/draw_crosswalk.py
====================
Zebra stripes for one physical crosswalk.
"""

from __future__ import annotations

import math
from typing import Tuple

from geom import Line, Polygon
from sim.network import LANE_THICKNESS, Turn, TurnID

from .canvas import GfxCtx
from .constants import CROSSWALK_STRIPE_FRAC, CROSSWALK_TILE_EVERY_FRAC
from .types import ColorRGBA

DedupKey = Tuple[int, int, int]


class DrawCrosswalk:
    """Stripes laid across the road along a crosswalk turn.

    ``turn_id`` is the directed turn the stripes were built from; the
    signal renderer asks the cycle about exactly that turn.
    """

    def __init__(self, turn: Turn, dedup_key: DedupKey) -> None:
        self.turn_id: TurnID = turn.id
        self.dedup_key = dedup_key
        self.polygons: Tuple[Polygon, ...] = _stripes(
            Line(turn.geom.first_pt(), turn.geom.last_pt())
        )

    def __repr__(self) -> str:
        return f"DrawCrosswalk({self.turn_id}, stripes={len(self.polygons)})"

    def draw(self, g: GfxCtx, color: ColorRGBA) -> None:
        g.draw_polygons(color, list(self.polygons))


def _stripes(line: Line) -> Tuple[Polygon, ...]:
    # Skip half a sidewalk at each end.
    boundary = LANE_THICKNESS / 2.0
    tile_every = CROSSWALK_TILE_EVERY_FRAC * LANE_THICKNESS
    stripe_len = CROSSWALK_STRIPE_FRAC * tile_every
    available = line.length() - 2.0 * boundary
    if available <= 0.0:
        return ()
    count = int(math.floor(available / tile_every))
    dist = boundary + (available - tile_every * count) / 2.0
    stripes = []
    for _ in range(count + 1):
        if dist + stripe_len > line.length():
            break
        stripe = Line(line.dist_along(dist), line.dist_along(dist + stripe_len))
        stripes.append(stripe.make_polygon(LANE_THICKNESS))
        dist += tile_every
    return tuple(stripes)
