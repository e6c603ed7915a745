#!/usr/bin/env python3
"""
Tests for the live signal clock: rotation, hold / overtime and override.
"""

from __future__ import annotations

import math
import unittest

from sim.grid_map import default_map
from sim.signal_clock import CycleProgress, SignalClock


class SignalClockTests(unittest.TestCase):
    def setUp(self) -> None:
        # One signalized junction (id 0) with cycles of 45 s and 30 s.
        self.road_map = default_map(rows=1, cols=1, seed=0)
        self.sim = SignalClock(self.road_map)

    def test_follows_fixed_rotation(self) -> None:
        self.assertEqual(self.sim.progress(0), CycleProgress(0, 45.0))
        self.sim.step(10.0)
        self.assertEqual(self.sim.progress(0), CycleProgress(0, 35.0))
        self.sim.step(40.0)
        self.assertEqual(self.sim.progress(0), CycleProgress(1, 25.0))

    def test_held_cycle_runs_into_overtime(self) -> None:
        self.sim.step(10.0)
        self.sim.hold(0)
        self.sim.step(30.0)
        self.assertFalse(self.sim.is_in_overtime(0))
        self.sim.step(10.0)
        self.assertTrue(self.sim.is_in_overtime(0))
        cycle, time_left = self.sim.current_cycle_and_remaining_time(0)
        self.assertEqual(cycle.idx, 0)
        self.assertAlmostEqual(time_left, -5.0)

    def test_step_landing_on_cycle_end_is_not_overtime(self) -> None:
        self.sim.hold(0)
        self.sim.step(45.0)
        cycle, time_left = self.sim.current_cycle_and_remaining_time(0)
        self.assertEqual(cycle.idx, 0)
        self.assertEqual(time_left, 0.0)
        self.assertFalse(math.copysign(1.0, time_left) < 0.0)
        self.assertFalse(self.sim.is_in_overtime(0))

        self.sim.step(0.5)
        cycle, time_left = self.sim.current_cycle_and_remaining_time(0)
        self.assertEqual(cycle.idx, 0)
        self.assertAlmostEqual(time_left, -0.5)
        self.assertTrue(self.sim.is_in_overtime(0))

    def test_overtime_flag_matches_time_left(self) -> None:
        self.sim.hold(0)
        for dt in (20.0, 25.0, 0.0, 0.25, 3.0):
            self.sim.step(dt)
            _, time_left = self.sim.current_cycle_and_remaining_time(0)
            self.assertEqual(self.sim.is_in_overtime(0), time_left < 0.0, msg=str(self.sim.time))

    def test_release_continues_with_next_cycle(self) -> None:
        self.sim.hold(0)
        self.sim.step(50.0)
        self.sim.step(7.0)
        self.assertAlmostEqual(self.sim.progress(0).time_left, -12.0)
        self.sim.release(0)
        self.assertFalse(self.sim.is_in_overtime(0))
        self.assertFalse(self.sim.is_held(0))
        self.assertEqual(self.sim.progress(0).cycle_idx, 1)
        self.assertAlmostEqual(self.sim.progress(0).time_left, 30.0)

    def test_release_before_overtime_changes_nothing(self) -> None:
        self.sim.hold(0)
        self.sim.step(5.0)
        self.sim.release(0)
        self.assertEqual(self.sim.progress(0), CycleProgress(0, 40.0))

    def test_override_has_no_time_left(self) -> None:
        self.sim.override(0, 1)
        self.assertTrue(self.sim.is_overridden(0))
        cycle, time_left = self.sim.current_cycle_and_remaining_time(0)
        self.assertEqual(cycle.idx, 1)
        self.assertIsNone(time_left)
        self.sim.step(100.0)
        self.assertEqual(self.sim.progress(0), CycleProgress(1, None))
        self.sim.clear_override(0)
        self.assertFalse(self.sim.is_overridden(0))
        # Rotation kept running underneath: 100 s into a 75 s period.
        self.assertEqual(self.sim.progress(0), CycleProgress(0, 20.0))

    def test_override_hides_overtime(self) -> None:
        self.sim.hold(0)
        self.sim.step(60.0)
        self.assertTrue(self.sim.is_in_overtime(0))
        self.sim.override(0, 0)
        self.assertFalse(self.sim.is_in_overtime(0))

    def test_bad_override_index(self) -> None:
        with self.assertRaises(IndexError):
            self.sim.override(0, 2)

    def test_unknown_signal(self) -> None:
        with self.assertRaises(KeyError):
            self.sim.hold(99)

    def test_time_only_moves_forward(self) -> None:
        with self.assertRaises(ValueError):
            self.sim.step(-1.0)

    def test_overtime_is_logged(self) -> None:
        self.sim.hold(0)
        with self.assertLogs("signals", level="INFO") as logs:
            self.sim.step(46.0)
        self.assertIn("overtime", logs.output[0])


if __name__ == "__main__":
    unittest.main()
