"""
sim/grid_map.py
===============
Procedural demo map: a grid of four-way junctions joined by two-way
roads, with border intersections capping every dead-end arm.

Every road carries four lanes, listed from the right kerb (relative to
the road's own direction) to the left kerb::

    sidewalk (forward) | driving (forward) | driving (back) | sidewalk (back)

Grid junctions alternate between traffic signals and stop signs;
border intersections carry no turns at all.
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import numpy as np

from geom import Line, Pt2D, PolyLine
from sim.network import (
    LANE_THICKNESS,
    Intersection,
    IntersectionType,
    Lane,
    LaneType,
    Road,
    RoadMap,
    Turn,
    TurnID,
    TurnType,
)
from sim.traffic_policy import SignalPolicy
from sim.traffic_signal import ControlTrafficSignal, default_cycles

log = logging.getLogger(__name__)

# ── Constants ─────────────────────────────────────────────────────────────────
ROAD_HALF_W: float = 2.0 * LANE_THICKNESS
_BORDER_DEPTH: float = 2.0
_STRAIGHT_TOLERANCE_DEG: float = 30.0
_CORNER_MAX_GAP: float = 2.0 * LANE_THICKNESS
_CURVE_SAMPLES: int = 8

_DIRECTIONS: Dict[str, Tuple[int, int]] = {
    "N": (0, -1),
    "E": (1, 0),
    "S": (0, 1),
    "W": (-1, 0),
}


@dataclass
class _Node:
    id: int
    center: Pt2D
    kind: IntersectionType
    trim: float
    outward: Optional[Tuple[int, int]] = None


# ══════════════════════════════════════════════════════════════════════════════
#  PUBLIC  default_map()
# ══════════════════════════════════════════════════════════════════════════════

def default_map(
    rows: int = 2,
    cols: int = 2,
    spacing: float = 60.0,
    arm_length: float = 25.0,
    seed: Optional[int] = None,
    policy: SignalPolicy = SignalPolicy(),
) -> RoadMap:
    """Build a ``rows x cols`` grid and attach default signal timing.

    Parameters
    ----------
    rows, cols : int
        Grid size; both must be at least 1.
    spacing : float
        Centre-to-centre distance between neighbouring junctions (m).
    arm_length : float
        Length of every dead-end arm, footprint edge to border (m).
    seed : int or None
        Picks which junctions (after the first) get a traffic signal.
    policy : SignalPolicy
        Timing used for the default cycles.
    """
    if rows < 1 or cols < 1:
        raise ValueError(f"grid must be at least 1x1, got {rows}x{cols}")
    if spacing <= 2.0 * ROAD_HALF_W:
        raise ValueError(f"spacing {spacing} leaves no room for roads")

    rng = random.Random(seed)
    margin = ROAD_HALF_W + arm_length + _BORDER_DEPTH + 5.0

    nodes: List[_Node] = []
    grid: Dict[Tuple[int, int], _Node] = {}
    for r in range(rows):
        for c in range(cols):
            first = not nodes
            kind = (IntersectionType.TRAFFIC_SIGNAL
                    if first or rng.random() < 0.5
                    else IntersectionType.STOP_SIGN)
            node = _Node(len(nodes), Pt2D(margin + c * spacing, margin + r * spacing),
                         kind, ROAD_HALF_W)
            nodes.append(node)
            grid[(r, c)] = node

    # (from_node, to_node) pairs; grid roads always run east or south.
    links: List[Tuple[_Node, _Node]] = []
    for (r, c), node in sorted(grid.items()):
        for arm, (dx, dy) in _DIRECTIONS.items():
            neighbour = grid.get((r + dy, c + dx))
            if neighbour is not None:
                if arm in ("E", "S"):
                    links.append((node, neighbour))
                continue
            reach = ROAD_HALF_W + arm_length
            border = _Node(len(nodes), node.center.offset(dx * reach, dy * reach),
                           IntersectionType.BORDER, 0.0, outward=(dx, dy))
            nodes.append(border)
            # Mix road orientations: east/south arms leave the junction,
            # north/west arms enter it.
            if arm in ("E", "S"):
                links.append((node, border))
            else:
                links.append((border, node))

    roads: List[Road] = []
    lanes: List[Lane] = []
    for a, b in links:
        road, road_lanes = _make_road(len(roads), len(lanes), a, b)
        roads.append(road)
        lanes.extend(road_lanes)

    lanes_by_id = {l.id: l for l in lanes}
    roads_at: Dict[int, List[Road]] = {n.id: [] for n in nodes}
    for road in roads:
        roads_at[road.src_i].append(road)
        roads_at[road.dst_i].append(road)

    intersections: List[Intersection] = []
    turns: List[Turn] = []
    for node in nodes:
        node_turns: List[Turn] = []
        if node.kind is not IntersectionType.BORDER:
            node_lanes = [lanes_by_id[l] for road in roads_at[node.id] for l in road.lanes]
            node_turns = (_driving_turns(node.id, node_lanes)
                          + _crosswalk_turns(node.id, roads_at[node.id], lanes_by_id)
                          + _corner_turns(node.id, node_lanes))
            node_turns.sort(key=lambda t: t.id)
        turns.extend(node_turns)
        intersections.append(Intersection(
            id=node.id,
            polygon=_footprint(node),
            intersection_type=node.kind,
            turns=tuple(t.id for t in node_turns),
            roads=tuple(r.id for r in roads_at[node.id]),
        ))

    road_map = RoadMap(intersections, roads, lanes, turns)
    for inter in road_map.all_intersections():
        if inter.is_traffic_signal():
            road_map.attach_traffic_signal(
                ControlTrafficSignal(inter.id, default_cycles(road_map, inter.id, policy))
            )
    log.info(
        "built %dx%d grid: %d intersections, %d roads, %d lanes, %d turns",
        rows, cols, len(intersections), len(roads), len(lanes), len(turns),
    )
    return road_map


# ══════════════════════════════════════════════════════════════════════════════
#  PRIVATE helpers
# ══════════════════════════════════════════════════════════════════════════════

def _footprint(node: _Node) -> Tuple[Pt2D, ...]:
    """Closed ring around *node* (first point repeated last)."""
    cx, cy = node.center.x, node.center.y
    if node.kind is not IntersectionType.BORDER:
        h = ROAD_HALF_W
        ring = [Pt2D(cx - h, cy - h), Pt2D(cx + h, cy - h),
                Pt2D(cx + h, cy + h), Pt2D(cx - h, cy + h)]
    else:
        dx, dy = node.outward
        nx, ny = -dy, dx
        h = ROAD_HALF_W
        d = _BORDER_DEPTH
        ring = [
            Pt2D(cx + nx * h, cy + ny * h),
            Pt2D(cx + nx * h + dx * d, cy + ny * h + dy * d),
            Pt2D(cx - nx * h + dx * d, cy - ny * h + dy * d),
            Pt2D(cx - nx * h, cy - ny * h),
        ]
    return tuple(ring + [ring[0]])


def _make_road(road_id: int, first_lane: int, a: _Node, b: _Node) -> Tuple[Road, List[Lane]]:
    dist = a.center.dist_to(b.center)
    ux = (b.center.x - a.center.x) / dist
    uy = (b.center.y - a.center.y) / dist
    start = a.center.offset(ux * a.trim, uy * a.trim)
    end = b.center.offset(-ux * b.trim, -uy * b.trim)
    center = PolyLine([start, end])
    # Right-hand normal in a y-down frame.
    nx, ny = -uy, ux

    layout = (
        (LaneType.SIDEWALK, 1.5, True),
        (LaneType.DRIVING, 0.5, True),
        (LaneType.DRIVING, -0.5, False),
        (LaneType.SIDEWALK, -1.5, False),
    )
    lanes: List[Lane] = []
    for k, (lane_type, offset, forward) in enumerate(layout):
        shift = offset * LANE_THICKNESS
        pts = [start.offset(nx * shift, ny * shift), end.offset(nx * shift, ny * shift)]
        if not forward:
            pts.reverse()
        lanes.append(Lane(
            id=first_lane + k,
            lane_type=lane_type,
            parent=road_id,
            src_i=a.id if forward else b.id,
            dst_i=b.id if forward else a.id,
            center_pts=PolyLine(pts),
        ))
    road = Road(road_id, a.id, b.id, center, tuple(l.id for l in lanes))
    return road, lanes


def _signed_turn_angle(src: Lane, dst: Lane) -> float:
    """Heading change in degrees, folded into ``(-180, 180]``; positive is a right turn."""
    diff = math.degrees(dst.first_line().angle() - src.last_line().angle())
    diff = (diff + 180.0) % 360.0 - 180.0
    return 180.0 if diff == -180.0 else diff


def _curve(src: Line, dst: Line) -> PolyLine:
    """Quadratic curve from the end of *src* to the start of *dst*."""
    p = np.array(src.pt2.as_tuple())
    q = np.array(dst.pt1.as_tuple())
    u = np.array([math.cos(src.angle()), math.sin(src.angle())])
    v = np.array([math.cos(dst.angle()), math.sin(dst.angle())])
    cross = u[0] * v[1] - u[1] * v[0]
    if abs(cross) < 1e-9:
        return PolyLine([src.pt2, dst.pt1])
    w = q - p
    s = (w[0] * v[1] - w[1] * v[0]) / cross
    ctrl = p + s * u
    ts = np.linspace(0.0, 1.0, _CURVE_SAMPLES)[:, None]
    pts = (1 - ts) ** 2 * p + 2 * (1 - ts) * ts * ctrl + ts ** 2 * q
    return PolyLine(Pt2D.from_array(pts))


def _driving_turns(i: int, lanes: List[Lane]) -> List[Turn]:
    incoming = [l for l in lanes if l.lane_type is LaneType.DRIVING and l.dst_i == i]
    outgoing = [l for l in lanes if l.lane_type is LaneType.DRIVING and l.src_i == i]
    turns: List[Turn] = []
    for src in incoming:
        for dst in outgoing:
            if src.parent == dst.parent:
                continue
            angle = _signed_turn_angle(src, dst)
            if abs(angle) < _STRAIGHT_TOLERANCE_DEG:
                turn_type = TurnType.STRAIGHT
            elif angle > 0.0:
                turn_type = TurnType.RIGHT
            else:
                turn_type = TurnType.LEFT
            turns.append(Turn(TurnID(i, src.id, dst.id), turn_type,
                              _curve(src.last_line(), dst.first_line())))
    return turns


def _crosswalk_pt(lane: Lane, i: int) -> Pt2D:
    """Sidewalk end at *i*, pulled half a lane back along the road."""
    if lane.dst_i == i:
        line = lane.last_line()
        return line.pt2.project_away(LANE_THICKNESS / 2.0, line.angle() + math.pi)
    line = lane.first_line()
    return line.pt1.project_away(LANE_THICKNESS / 2.0, line.angle())


def _crosswalk_turns(i: int, roads: List[Road], lanes_by_id: Dict[int, Lane]) -> List[Turn]:
    turns: List[Turn] = []
    for road in roads:
        right, left = lanes_by_id[road.lanes[0]], lanes_by_id[road.lanes[-1]]
        a, b = _crosswalk_pt(right, i), _crosswalk_pt(left, i)
        turns.append(Turn(TurnID(i, right.id, left.id), TurnType.CROSSWALK, PolyLine([a, b])))
        turns.append(Turn(TurnID(i, left.id, right.id), TurnType.CROSSWALK, PolyLine([b, a])))
    return turns


def _corner_turns(i: int, lanes: List[Lane]) -> List[Turn]:
    sidewalks = [l for l in lanes if l.is_sidewalk()]
    turns: List[Turn] = []
    seen = set()
    for s in sidewalks:
        others = [o for o in sidewalks if o.parent != s.parent]
        if not others:
            continue
        partner = min(others, key=lambda o: s.endpoint(i).dist_to(o.endpoint(i)))
        if s.endpoint(i).dist_to(partner.endpoint(i)) > _CORNER_MAX_GAP:
            continue
        key = (min(s.id, partner.id), max(s.id, partner.id))
        if key in seen:
            continue
        seen.add(key)
        pa, pb = s.endpoint(i), partner.endpoint(i)
        turns.append(Turn(TurnID(i, s.id, partner.id),
                          TurnType.SHARED_SIDEWALK_CORNER, PolyLine([pa, pb])))
        turns.append(Turn(TurnID(i, partner.id, s.id),
                          TurnType.SHARED_SIDEWALK_CORNER, PolyLine([pb, pa])))
    return turns
