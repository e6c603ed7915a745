"""
sim/network.py
==============
Read-only road-network topology: intersections, roads, lanes and turns.

Defines the id and record types plus :class:`RoadMap`, the lookup
facade every renderer queries.  Nothing here is mutated after the map
is built; renderers derive their geometry once from a snapshot.

:func:`sim.grid_map.default_map` builds a demo grid.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Dict, Iterable, List, Tuple

from geom import Line, Pt2D, PolyLine

if TYPE_CHECKING:
    from sim.traffic_signal import ControlTrafficSignal

# Width of one lane in metres.  Sidewalks use the same width.
LANE_THICKNESS: float = 2.5


# ── Enumerations ──────────────────────────────────────────────────────────────

class IntersectionType(Enum):
    BORDER = "border"
    STOP_SIGN = "stop_sign"
    TRAFFIC_SIGNAL = "traffic_signal"


class LaneType(Enum):
    DRIVING = "driving"
    SIDEWALK = "sidewalk"


class TurnType(Enum):
    STRAIGHT = "straight"
    LEFT = "left"
    RIGHT = "right"
    CROSSWALK = "crosswalk"
    SHARED_SIDEWALK_CORNER = "shared_sidewalk_corner"


# ── Records ───────────────────────────────────────────────────────────────────

@dataclass(frozen=True, order=True)
class TurnID:
    """A directed movement ``src -> dst`` through intersection ``parent``."""

    parent: int
    src: int
    dst: int


@dataclass(frozen=True)
class Lane:
    """One lane or sidewalk, flowing from ``src_i`` into ``dst_i``."""

    id: int
    lane_type: LaneType
    parent: int
    src_i: int
    dst_i: int
    center_pts: PolyLine

    def is_sidewalk(self) -> bool:
        return self.lane_type is LaneType.SIDEWALK

    def first_line(self) -> Line:
        return self.center_pts.first_line()

    def last_line(self) -> Line:
        return self.center_pts.last_line()

    def endpoint(self, i: int) -> Pt2D:
        """Where this lane touches intersection *i*."""
        if i == self.dst_i:
            return self.center_pts.last_pt()
        if i == self.src_i:
            return self.center_pts.first_pt()
        raise ValueError(f"lane {self.id} does not touch intersection {i}")


@dataclass(frozen=True)
class Road:
    """Bundle of lanes between two intersections.

    ``lanes`` is ordered from the right kerb (relative to ``src_i ->
    dst_i``) to the left kerb.
    """

    id: int
    src_i: int
    dst_i: int
    center_pts: PolyLine
    lanes: Tuple[int, ...] = ()

    def axis_angle(self) -> float:
        """Undirected heading in degrees, folded into ``[0, 180)``."""
        return math.degrees(self.center_pts.first_line().angle()) % 180.0


@dataclass(frozen=True)
class Turn:
    id: TurnID
    turn_type: TurnType
    geom: PolyLine

    def between_sidewalks(self) -> bool:
        return self.turn_type in (TurnType.CROSSWALK,
                                  TurnType.SHARED_SIDEWALK_CORNER)


@dataclass(frozen=True)
class Intersection:
    """A junction and its footprint.

    ``polygon`` is a closed ring: the first point is repeated last.
    """

    id: int
    polygon: Tuple[Pt2D, ...]
    intersection_type: IntersectionType
    turns: Tuple[TurnID, ...] = ()
    roads: Tuple[int, ...] = field(default=())

    def __post_init__(self) -> None:
        if len(self.polygon) < 4 or self.polygon[0] != self.polygon[-1]:
            raise ValueError(
                f"intersection {self.id}: polygon must be a closed ring "
                f"of at least 3 distinct points"
            )

    def is_traffic_signal(self) -> bool:
        return self.intersection_type is IntersectionType.TRAFFIC_SIGNAL


# ── Road map ──────────────────────────────────────────────────────────────────

class RoadMap:
    """Immutable lookup over every topology record.

    All getters raise :class:`KeyError` for unknown ids: an unknown id
    means the caller holds a stale or foreign reference.
    """

    def __init__(
        self,
        intersections: Iterable[Intersection],
        roads: Iterable[Road],
        lanes: Iterable[Lane],
        turns: Iterable[Turn],
    ) -> None:
        self._intersections: Dict[int, Intersection] = {i.id: i for i in intersections}
        self._roads: Dict[int, Road] = {r.id: r for r in roads}
        self._lanes: Dict[int, Lane] = {l.id: l for l in lanes}
        self._turns: Dict[TurnID, Turn] = {t.id: t for t in turns}
        self._signals: Dict[int, "ControlTrafficSignal"] = {}

        for turn in self._turns.values():
            if turn.id.src not in self._lanes or turn.id.dst not in self._lanes:
                raise KeyError(f"turn {turn.id} references a missing lane")

    # ── queries ───────────────────────────────────────────────────────────

    def get_i(self, i: int) -> Intersection:
        return self._intersections[i]

    def get_r(self, r: int) -> Road:
        return self._roads[r]

    def get_l(self, l: int) -> Lane:
        return self._lanes[l]

    def get_t(self, t: TurnID) -> Turn:
        return self._turns[t]

    def all_intersections(self) -> List[Intersection]:
        return [self._intersections[k] for k in sorted(self._intersections)]

    def all_lanes(self) -> List[Lane]:
        return [self._lanes[k] for k in sorted(self._lanes)]

    def get_turns_in_intersection(self, i: int) -> List[Turn]:
        return [self._turns[t] for t in self.get_i(i).turns]

    # ── traffic signals ───────────────────────────────────────────────────

    def attach_traffic_signal(self, signal: "ControlTrafficSignal") -> None:
        """Register the controller for a signalized intersection.

        Only done while the map is being built.
        """
        inter = self.get_i(signal.id)
        if not inter.is_traffic_signal():
            raise ValueError(f"intersection {signal.id} is not signalized")
        self._signals[signal.id] = signal

    def get_traffic_signal(self, i: int) -> "ControlTrafficSignal":
        return self._signals[i]

    def all_traffic_signals(self) -> List["ControlTrafficSignal"]:
        return [self._signals[k] for k in sorted(self._signals)]
