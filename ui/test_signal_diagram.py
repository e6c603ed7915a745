#!/usr/bin/env python3
"""
Tests for the signal timing diagram layout and painting.
"""

from __future__ import annotations

import os
import unittest
from unittest import mock

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame

from config import DIAGRAM_LABEL_MARGIN, DIAGRAM_PADDING, DIAGRAM_ZOOM
from geom import Bounds
from sim.grid_map import default_map
from sim.signal_clock import SignalClock
from sim.traffic_signal import ControlTrafficSignal, Cycle
from ui.canvas import Canvas
from ui.color_scheme import ColorScheme
from ui.draw_map import DrawMap
from ui.signal_diagram import (
    cycle_label,
    draw_signal_diagram,
    format_duration,
    layout_signal_diagram,
)
from ui.types import Camera, RenderCtx

_Y1 = 10.0


class LabelTests(unittest.TestCase):
    def setUp(self) -> None:
        self.cs = ColorScheme()
        self.cycle = Cycle(0, 0, 30.0)

    def test_duration_format(self) -> None:
        self.assertEqual(format_duration(30.0), "30s")
        self.assertEqual(format_duration(12.5), "12.5s")

    def test_inactive_cycle(self) -> None:
        txt = cycle_label(1, self.cycle, False, 4.0, self.cs)
        self.assertEqual(txt.plain(), "Cycle 2: 30s")

    def test_active_cycle_shows_elapsed(self) -> None:
        txt = cycle_label(0, self.cycle, True, 17.5, self.cs)
        self.assertEqual(txt.plain(), "Cycle 1: 12.5s / 30s")

    def test_active_cycle_without_time(self) -> None:
        txt = cycle_label(0, self.cycle, True, None, self.cs)
        self.assertEqual(txt.plain(), "Cycle 1: 30s")

    def test_overtime(self) -> None:
        txt = cycle_label(0, self.cycle, True, -2.0, self.cs)
        self.assertEqual(txt.plain(), "Cycle 1: OVERTIME")
        spans = txt.lines[0]
        self.assertEqual(spans[-1].text, "OVERTIME")
        self.assertEqual(spans[-1].color, self.cs.get("signal overtime"))
        self.assertIsNone(spans[0].color)


class DiagramTests(unittest.TestCase):
    def setUp(self) -> None:
        pygame.font.init()
        # Junction 0: 10 m square footprint, two cycles (45 s, 30 s).
        self.road_map = default_map(rows=1, cols=1, seed=0)
        self.canvas = Canvas(1000, 800, camera=Camera(0.0, 0.0, 4.0))
        self.ctx = RenderCtx(self.road_map, DrawMap(self.road_map), ColorScheme(),
                             self.canvas, SignalClock(self.road_map))
        self.g = self.canvas.begin_frame(pygame.Surface((1000, 800)))
        self.bounds = Bounds.from_points(self.road_map.get_i(0).polygon)

    def test_panel_geometry(self) -> None:
        layout = layout_signal_diagram(0, 1, 12.0, _Y1, self.ctx)
        w, h = self.bounds.width, self.bounds.height
        self.assertEqual(len(layout.rows), 2)
        self.assertAlmostEqual(layout.panel_height, (DIAGRAM_PADDING + h) * DIAGRAM_ZOOM * 2)
        self.assertAlmostEqual(layout.panel_width,
                               w * DIAGRAM_ZOOM + layout.label_width + DIAGRAM_LABEL_MARGIN)
        self.assertAlmostEqual(layout.panel_x + layout.panel_width, 1000.0)
        self.assertEqual(layout.panel_y, _Y1)
        self.assertEqual(layout.highlight_row, 1)

        highlight = layout.highlight().get_bounds()
        self.assertAlmostEqual(highlight.min_y, _Y1 + (DIAGRAM_PADDING + h) * DIAGRAM_ZOOM)
        self.assertAlmostEqual(highlight.height, (DIAGRAM_PADDING + h) * DIAGRAM_ZOOM)

    def test_label_width_is_widest_label(self) -> None:
        layout = layout_signal_diagram(0, 0, 3.0, _Y1, self.ctx)
        widths = [self.canvas.text_dims(row.label)[0] for row in layout.rows]
        self.assertEqual(layout.label_width, max(widths))
        self.assertEqual(layout.rows[0].label.plain(), "Cycle 1: 42.0s / 45s")
        self.assertEqual(layout.rows[1].label.plain(), "Cycle 2: 30s")

    def test_rows_map_footprint_into_their_slot(self) -> None:
        layout = layout_signal_diagram(0, 0, 3.0, _Y1, self.ctx)
        h = self.bounds.height
        for idx, row in enumerate(layout.rows):
            with self.g.forked(row.frame_origin, layout.zoom):
                sx, sy = self.g.map_to_screen(self.bounds.top_left)
            self.assertAlmostEqual(sx, layout.panel_x)
            self.assertAlmostEqual(sy, _Y1 + (h * idx + DIAGRAM_PADDING * (idx + 1)) * DIAGRAM_ZOOM)
            self.assertAlmostEqual(row.label_pt.x,
                                   layout.panel_x + DIAGRAM_LABEL_MARGIN
                                   + self.bounds.width * DIAGRAM_ZOOM)
            self.assertAlmostEqual(row.label_pt.y,
                                   _Y1 + (DIAGRAM_PADDING + h) * idx * DIAGRAM_ZOOM)

    def test_overtime_label_in_layout(self) -> None:
        layout = layout_signal_diagram(0, 0, -4.0, _Y1, self.ctx)
        self.assertEqual(layout.rows[0].label.plain(), "Cycle 1: OVERTIME")
        self.assertEqual(layout.rows[0].label.lines[0][-1].color,
                         self.ctx.cs.get("signal overtime"))

    def test_label_agrees_with_clock_at_cycle_end(self) -> None:
        clock = self.ctx.sim
        clock.hold(0)
        clock.step(45.0)
        _, time_left = clock.current_cycle_and_remaining_time(0)
        layout = layout_signal_diagram(0, 0, time_left, _Y1, self.ctx)
        self.assertEqual(layout.rows[0].label.plain(), "Cycle 1: 45.0s / 45s")
        self.assertFalse(clock.is_in_overtime(0))

        clock.step(1.0)
        _, time_left = clock.current_cycle_and_remaining_time(0)
        layout = layout_signal_diagram(0, 0, time_left, _Y1, self.ctx)
        self.assertEqual(layout.rows[0].label.plain(), "Cycle 1: OVERTIME")
        self.assertTrue(clock.is_in_overtime(0))

    def test_current_cycle_out_of_range(self) -> None:
        with self.assertRaises(IndexError):
            layout_signal_diagram(0, 2, 1.0, _Y1, self.ctx)

    def test_no_cycles(self) -> None:
        self.road_map.attach_traffic_signal(ControlTrafficSignal(0, []))
        layout = layout_signal_diagram(0, 0, None, _Y1, self.ctx)
        self.assertEqual(layout.rows, ())
        self.assertIsNone(layout.highlight_row)
        self.assertIsNone(layout.highlight())
        self.assertAlmostEqual(layout.panel_height, DIAGRAM_PADDING * DIAGRAM_ZOOM)

        before = self.g.transform
        with mock.patch("ui.signal_diagram.draw_signal_cycle") as draw_cycle:
            draw_signal_diagram(0, 0, None, _Y1, self.g, self.ctx)
        draw_cycle.assert_not_called()
        self.assertEqual(self.g.fork_depth, 0)
        self.assertEqual(self.g.transform, before)

    def test_each_row_drawn_in_its_own_frame(self) -> None:
        seen = []

        def record(cycle, g, ctx):
            seen.append((cycle.idx, g.fork_depth, g.transform))

        before = self.g.transform
        with mock.patch("ui.signal_diagram.draw_signal_cycle", side_effect=record):
            layout = draw_signal_diagram(0, 0, 3.0, _Y1, self.g, self.ctx)
        self.assertEqual([s[0] for s in seen], [0, 1])
        for (_, depth, frame), row in zip(seen, layout.rows):
            self.assertEqual(depth, 2)
            self.assertEqual(frame.zoom, DIAGRAM_ZOOM)
            self.assertEqual((frame.origin_x, frame.origin_y),
                             (row.frame_origin.x, row.frame_origin.y))
        self.assertEqual(self.g.fork_depth, 0)
        self.assertEqual(self.g.transform, before)

    def test_frame_restored_when_drawing_fails(self) -> None:
        before = self.g.transform
        with mock.patch("ui.signal_diagram.draw_signal_cycle",
                        side_effect=RuntimeError("boom")):
            with self.assertRaises(RuntimeError):
                draw_signal_diagram(0, 0, 3.0, _Y1, self.g, self.ctx)
        self.assertEqual(self.g.fork_depth, 0)
        self.assertEqual(self.g.transform, before)

    def test_paints_panel_and_highlight(self) -> None:
        self.g.surface.fill((255, 255, 255))
        layout = draw_signal_diagram(0, 1, 3.0, _Y1, self.g, self.ctx)
        # Inside the highlighted row, right of the miniature, below the label text.
        x = int(layout.panel_x + layout.panel_width - 2)
        y = int(_Y1 + layout.row_height * 1.5)
        r, g, b, _ = self.g.surface.get_at((x, y))
        self.assertGreater(b, r)
        self.assertGreater(b, g)


if __name__ == "__main__":
    unittest.main()
