"""
ui/intersection_geometry.py
===========================
Static pedestrian geometry derived from an intersection's turns:
crosswalk stripes and shared-sidewalk-corner fills.

Every physical crosswalk or corner appears in the topology twice, once
per walking direction.  Both directions share a canonical *dedup key*
``(intersection, lower lane id, higher lane id)``; for each key we keep
the single turn whose source lane flows *into* this intersection.  The
result does not depend on the order turns are listed in.

All functions are pure: same topology in, same artifacts out.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Tuple

from geom import Polygon
from sim.network import LANE_THICKNESS, Lane, RoadMap, Turn, TurnID, TurnType

from .draw_crosswalk import DedupKey, DrawCrosswalk

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SidewalkCorner:
    """Fill bridging two sidewalks around a kerb corner."""

    turn_id: TurnID
    dedup_key: DedupKey
    polygon: Polygon


def dedup_key(turn_id: TurnID) -> DedupKey:
    """Same key for ``a -> b`` and ``b -> a`` at one intersection."""
    return (turn_id.parent, min(turn_id.src, turn_id.dst), max(turn_id.src, turn_id.dst))


def owning_turns(i: int, road_map: RoadMap, turn_type: TurnType) -> List[Tuple[DedupKey, Turn]]:
    """One ``(key, turn)`` per physical artifact of *turn_type*, sorted by key."""
    groups: Dict[DedupKey, List[Turn]] = {}
    for turn in road_map.get_turns_in_intersection(i):
        if turn.turn_type is turn_type:
            groups.setdefault(dedup_key(turn.id), []).append(turn)

    owners: List[Tuple[DedupKey, Turn]] = []
    for key in sorted(groups):
        qualifying = sorted(
            (t for t in groups[key] if road_map.get_l(t.id.src).dst_i == i),
            key=lambda t: t.id,
        )
        if not qualifying:
            log.debug("intersection %s: no inbound direction for %s %s",
                      i, turn_type.value, key)
            continue
        if len(qualifying) > 1:
            log.warning("intersection %s: %d inbound directions for %s %s, using %s",
                        i, len(qualifying), turn_type.value, key, qualifying[0].id)
        owners.append((key, qualifying[0]))
    return owners


def calculate_crosswalks(i: int, road_map: RoadMap) -> List[DrawCrosswalk]:
    return [DrawCrosswalk(turn, key)
            for key, turn in owning_turns(i, road_map, TurnType.CROSSWALK)]


def corner_polygon(src: Lane, dst: Lane) -> Polygon:
    """Quadrilateral joining the end of *src* to the start of *dst*.

    Uses both kerb edges of each sidewalk: the right edge (shifted
    forward line) and the left edge (shifted reversed line).
    """
    half = LANE_THICKNESS / 2.0
    shared_pt1 = src.last_line().shift(half).pt2
    pt1 = src.last_line().reverse().shift(half).pt1
    pt2 = dst.first_line().reverse().shift(half).pt2
    shared_pt2 = dst.first_line().shift(half).pt1
    return Polygon([shared_pt1, pt1, pt2, shared_pt2])


def calculate_corners(i: int, road_map: RoadMap) -> List[SidewalkCorner]:
    corners = []
    for key, turn in owning_turns(i, road_map, TurnType.SHARED_SIDEWALK_CORNER):
        src = road_map.get_l(turn.id.src)
        dst = road_map.get_l(turn.id.dst)
        corners.append(SidewalkCorner(turn.id, key, corner_polygon(src, dst)))
    return corners
