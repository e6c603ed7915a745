"""
ui/draw_turn.py
===============
Turn paths drawn as thick arrows: solid for protected movements,
dashed for movements that must yield.
"""

from __future__ import annotations

import math
from functools import lru_cache
from typing import Tuple

from geom import Polygon
from sim.network import Turn

from .canvas import GfxCtx
from .constants import TURN_ARROW_LEN, TURN_DASH_GAP, TURN_DASH_LEN, TURN_THICKNESS
from .types import ColorRGBA


def _arrow_head(turn: Turn) -> Polygon:
    last = turn.geom.last_line()
    angle = last.angle()
    tip = last.pt2
    base = tip.project_away(TURN_ARROW_LEN, angle + math.pi)
    side = angle + math.pi / 2.0
    half = TURN_ARROW_LEN / 2.0
    return Polygon([tip, base.project_away(half, side), base.project_away(-half, side)])


@lru_cache(maxsize=None)
def _full_polygons(turn: Turn) -> Tuple[Polygon, ...]:
    return tuple(turn.geom.make_polygons(TURN_THICKNESS)) + (_arrow_head(turn),)


@lru_cache(maxsize=None)
def _dashed_polygons(turn: Turn) -> Tuple[Polygon, ...]:
    dashes = turn.geom.dashed_lines(TURN_DASH_LEN, TURN_DASH_GAP)
    return tuple(d.make_polygon(TURN_THICKNESS) for d in dashes) + (_arrow_head(turn),)


def draw_full(turn: Turn, g: GfxCtx, color: ColorRGBA) -> None:
    for polygon in _full_polygons(turn):
        g.draw_polygon(color, polygon)


def draw_dashed(turn: Turn, g: GfxCtx, color: ColorRGBA) -> None:
    for polygon in _dashed_polygons(turn):
        g.draw_polygon(color, polygon)
