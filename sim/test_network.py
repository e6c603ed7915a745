#!/usr/bin/env python3
"""
Tests for the road topology model and the procedural grid builder.
"""

from __future__ import annotations

import unittest

from geom import Pt2D, PolyLine
from sim.grid_map import ROAD_HALF_W, default_map
from sim.network import (
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
from sim.traffic_signal import ControlTrafficSignal

_SQUARE = (Pt2D(0, 0), Pt2D(4, 0), Pt2D(4, 4), Pt2D(0, 4), Pt2D(0, 0))


class TopologyTests(unittest.TestCase):
    def test_open_ring_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            Intersection(0, _SQUARE[:-1], IntersectionType.STOP_SIGN)

    def test_turn_with_missing_lane_is_rejected(self) -> None:
        lane = Lane(0, LaneType.DRIVING, 0, 1, 0, PolyLine([Pt2D(-10, 2), Pt2D(0, 2)]))
        turn = Turn(TurnID(0, 0, 99), TurnType.STRAIGHT, PolyLine([Pt2D(0, 2), Pt2D(4, 2)]))
        inter = Intersection(0, _SQUARE, IntersectionType.STOP_SIGN, turns=(turn.id,))
        with self.assertRaises(KeyError):
            RoadMap([inter], [], [lane], [turn])

    def test_signal_needs_signalized_intersection(self) -> None:
        road_map = RoadMap([Intersection(0, _SQUARE, IntersectionType.STOP_SIGN)], [], [], [])
        with self.assertRaises(ValueError):
            road_map.attach_traffic_signal(ControlTrafficSignal(0, []))

    def test_lane_endpoint(self) -> None:
        lane = Lane(3, LaneType.SIDEWALK, 0, 1, 2, PolyLine([Pt2D(0, 0), Pt2D(5, 0)]))
        self.assertEqual(lane.endpoint(2), Pt2D(5, 0))
        self.assertEqual(lane.endpoint(1), Pt2D(0, 0))
        with self.assertRaises(ValueError):
            lane.endpoint(7)

    def test_road_axis_is_undirected(self) -> None:
        east = Road(0, 0, 1, PolyLine([Pt2D(0, 0), Pt2D(10, 0)]))
        west = Road(1, 1, 0, PolyLine([Pt2D(10, 0), Pt2D(0, 0)]))
        self.assertAlmostEqual(east.axis_angle(), 0.0)
        self.assertAlmostEqual(west.axis_angle(), 0.0)

    def test_turn_id_ordering(self) -> None:
        ids = [TurnID(1, 0, 5), TurnID(0, 9, 1), TurnID(0, 2, 3)]
        self.assertEqual(sorted(ids)[0], TurnID(0, 2, 3))


class GridMapTests(unittest.TestCase):
    def setUp(self) -> None:
        self.road_map = default_map(rows=1, cols=1, seed=0)

    def test_single_junction_counts(self) -> None:
        self.assertEqual(len(self.road_map.all_intersections()), 5)
        self.assertEqual(len(self.road_map.get_i(0).roads), 4)
        self.assertEqual(len(self.road_map.all_lanes()), 16)
        turns = self.road_map.get_turns_in_intersection(0)
        by_type = {}
        for t in turns:
            by_type[t.turn_type] = by_type.get(t.turn_type, 0) + 1
        self.assertEqual(by_type[TurnType.CROSSWALK], 8)
        self.assertEqual(by_type[TurnType.SHARED_SIDEWALK_CORNER], 8)
        self.assertEqual(by_type[TurnType.STRAIGHT] + by_type[TurnType.LEFT]
                         + by_type[TurnType.RIGHT], 12)

    def test_first_junction_is_signalized(self) -> None:
        self.assertTrue(self.road_map.get_i(0).is_traffic_signal())
        self.assertEqual([s.id for s in self.road_map.all_traffic_signals()], [0])

    def test_borders_have_no_turns(self) -> None:
        borders = [i for i in self.road_map.all_intersections()
                   if i.intersection_type is IntersectionType.BORDER]
        self.assertEqual(len(borders), 4)
        for inter in borders:
            self.assertEqual(inter.turns, ())

    def test_every_turn_joins_its_lanes(self) -> None:
        for inter in self.road_map.all_intersections():
            for turn in self.road_map.get_turns_in_intersection(inter.id):
                src = self.road_map.get_l(turn.id.src)
                dst = self.road_map.get_l(turn.id.dst)
                self.assertIn(inter.id, (src.src_i, src.dst_i))
                self.assertIn(inter.id, (dst.src_i, dst.dst_i))
                if not turn.between_sidewalks():
                    self.assertEqual(src.dst_i, inter.id)
                    self.assertEqual(dst.src_i, inter.id)

    def test_turns_from_lane(self) -> None:
        inbound = [l for l in self.road_map.all_lanes()
                   if l.lane_type is LaneType.DRIVING and l.dst_i == 0]
        self.assertEqual(len(inbound), 4)
        for lane in inbound:
            driving = [t for t in self.road_map.get_turns_in_intersection(0)
                       if t.id.src == lane.id and not t.between_sidewalks()]
            self.assertEqual(len(driving), 3)

    def test_junction_footprint(self) -> None:
        ring = self.road_map.get_i(0).polygon
        xs = [p.x for p in ring]
        self.assertAlmostEqual(max(xs) - min(xs), 2 * ROAD_HALF_W)

    def test_grid_size_validation(self) -> None:
        with self.assertRaises(ValueError):
            default_map(rows=0, cols=2)
        with self.assertRaises(ValueError):
            default_map(rows=1, cols=1, spacing=5.0)

    def test_same_seed_same_map(self) -> None:
        a = default_map(rows=2, cols=3, seed=11)
        b = default_map(rows=2, cols=3, seed=11)
        self.assertEqual(
            [i.intersection_type for i in a.all_intersections()],
            [i.intersection_type for i in b.all_intersections()],
        )


if __name__ == "__main__":
    unittest.main()
