"""
sim/traffic_signal.py
=====================
Fixed-time traffic-signal controller.

A :class:`ControlTrafficSignal` owns an ordered tuple of
:class:`Cycle` snapshots.  Each cycle says which turns are protected
(priority) and which may go after yielding; everything else is banned.
Cycles rotate in index order and the rotation repeats forever.

:func:`default_cycles` derives one cycle per road axis from the
intersection's topology.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, List, Sequence, Tuple

from sim.network import LaneType, RoadMap, TurnID, TurnType
from sim.traffic_policy import SignalPolicy, axis_key, cycle_duration_for

log = logging.getLogger(__name__)


class TurnPriority(Enum):
    BANNED = "banned"
    YIELD = "yield"
    PRIORITY = "priority"


@dataclass(frozen=True)
class Cycle:
    """One phase of a signal.

    Parameters
    ----------
    parent : int
        Intersection this cycle controls.
    idx : int
        Position in the rotation (0-based).
    duration : float
        Green time in seconds.
    priority_turns, yield_turns : frozenset of TurnID
        Disjoint sets of protected and permissive movements.
    """

    parent: int
    idx: int
    duration: float
    priority_turns: FrozenSet[TurnID] = frozenset()
    yield_turns: FrozenSet[TurnID] = frozenset()

    def __post_init__(self) -> None:
        if self.duration <= 0.0:
            raise ValueError(f"cycle {self.idx} of {self.parent}: non-positive duration")
        overlap = self.priority_turns & self.yield_turns
        if overlap:
            raise ValueError(
                f"cycle {self.idx} of {self.parent}: turns both protected "
                f"and yielding: {sorted(overlap)}"
            )
        for t in self.priority_turns | self.yield_turns:
            if t.parent != self.parent:
                raise ValueError(f"cycle {self.idx} of {self.parent}: foreign turn {t}")

    def get_priority(self, turn: TurnID) -> TurnPriority:
        if turn in self.priority_turns:
            return TurnPriority.PRIORITY
        if turn in self.yield_turns:
            return TurnPriority.YIELD
        return TurnPriority.BANNED


class ControlTrafficSignal:
    """Ordered, read-only cycle list for one intersection."""

    def __init__(self, i: int, cycles: Sequence[Cycle]) -> None:
        for expected, cycle in enumerate(cycles):
            if cycle.parent != i or cycle.idx != expected:
                raise ValueError(
                    f"signal {i}: cycle #{expected} is {cycle.idx} of {cycle.parent}"
                )
        self.id = i
        self.cycles: Tuple[Cycle, ...] = tuple(cycles)

    def __repr__(self) -> str:
        return f"ControlTrafficSignal(id={self.id}, cycles={len(self.cycles)})"

    def total_duration(self) -> float:
        return sum(c.duration for c in self.cycles)

    def current_cycle_and_remaining_time(self, now: float) -> Tuple[Cycle, float]:
        """Cycle active at *now* seconds and the seconds it has left."""
        if not self.cycles:
            raise ValueError(f"signal {self.id} has no cycles")
        t = now % self.total_duration()
        for cycle in self.cycles:
            if t < cycle.duration:
                return cycle, cycle.duration - t
            t -= cycle.duration
        # Float rounding can leave t a hair past the last boundary.
        return self.cycles[0], self.cycles[0].duration


def default_cycles(
    road_map: RoadMap, i: int, policy: SignalPolicy = SignalPolicy(),
) -> List[Cycle]:
    """One cycle per road axis meeting at *i*.

    During the cycle for axis ``A``:

    * straight (and right, per policy) turns from roads on ``A`` are protected;
    * left turns from roads on ``A`` yield (or are banned, per policy);
    * crosswalks over roads *not* on ``A`` are protected, since those
      pedestrians walk parallel to the moving traffic;
    * shared sidewalk corners are always protected.
    """
    axes: Dict[int, List[int]] = {}
    inter = road_map.get_i(i)
    for r in inter.roads:
        key = axis_key(road_map.get_r(r).axis_angle(), policy)
        axes.setdefault(key, []).append(r)

    cycles: List[Cycle] = []
    for idx, key in enumerate(sorted(axes)):
        on_axis = set(axes[key])
        priority = set()
        yielding = set()
        for turn in road_map.get_turns_in_intersection(i):
            src = road_map.get_l(turn.id.src)
            if turn.turn_type is TurnType.SHARED_SIDEWALK_CORNER:
                priority.add(turn.id)
            elif turn.turn_type is TurnType.CROSSWALK:
                if src.parent not in on_axis:
                    priority.add(turn.id)
            elif src.lane_type is LaneType.DRIVING and src.parent in on_axis:
                if turn.turn_type is TurnType.STRAIGHT:
                    priority.add(turn.id)
                elif turn.turn_type is TurnType.RIGHT:
                    (priority if policy.right_turns_protected else yielding).add(turn.id)
                elif turn.turn_type is TurnType.LEFT and policy.left_turns_yield:
                    yielding.add(turn.id)
        cycles.append(Cycle(
            parent=i,
            idx=idx,
            duration=cycle_duration_for(idx, policy),
            priority_turns=frozenset(priority),
            yield_turns=frozenset(yielding),
        ))
    log.debug("intersection %s: %d default cycles", i, len(cycles))
    return cycles
