#!/usr/bin/env python3
"""
Tests for the frame stack and viewport maths.
"""

from __future__ import annotations

import os
import unittest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame

from geom import Pt2D
from ui.canvas import Canvas, FrameTransform, GfxCtx
from ui.types import Camera, ScreenPt


class GfxCtxTests(unittest.TestCase):
    def setUp(self) -> None:
        self.g = GfxCtx(pygame.Surface((100, 100)), Camera(10.0, 20.0, 2.0))

    def test_initial_frame_is_the_camera(self) -> None:
        self.assertEqual(self.g.transform, FrameTransform(10.0, 20.0, 2.0))
        self.assertEqual(self.g.map_to_screen(Pt2D(15, 25)), (10.0, 10.0))

    def test_fork_and_unfork(self) -> None:
        old = self.g.fork(Pt2D(1, 1), 5.0)
        self.assertEqual(self.g.fork_depth, 1)
        self.assertEqual(self.g.map_to_screen(Pt2D(2, 3)), (5.0, 10.0))
        self.g.unfork(old)
        self.assertEqual(self.g.fork_depth, 0)
        self.assertEqual(self.g.transform, old)

    def test_screenspace_is_identity(self) -> None:
        with self.g.screenspace():
            self.assertEqual(self.g.map_to_screen(Pt2D(7, 9)), (7.0, 9.0))
        self.assertEqual(self.g.fork_depth, 0)

    def test_unfork_without_fork(self) -> None:
        with self.assertRaises(RuntimeError):
            self.g.unfork(self.g.transform)

    def test_unfork_out_of_order(self) -> None:
        outer = self.g.fork(Pt2D(0, 0), 1.0)
        self.g.fork(Pt2D(5, 5), 3.0)
        with self.assertRaises(RuntimeError):
            self.g.unfork(outer)

    def test_forked_restores_on_error(self) -> None:
        before = self.g.transform
        with self.assertRaises(ZeroDivisionError):
            with self.g.screenspace():
                with self.g.forked(Pt2D(3, 3), 10.0):
                    self.assertEqual(self.g.fork_depth, 2)
                    1 / 0
        self.assertEqual(self.g.fork_depth, 0)
        self.assertEqual(self.g.transform, before)

    def test_draw_translucent_polygon(self) -> None:
        from geom import Polygon

        surface = self.g.surface
        surface.fill((0, 0, 0))
        with self.g.screenspace():
            self.g.draw_polygon((255, 0, 0, 255), Polygon.rectangle_topleft(Pt2D(0, 0), 10, 10))
            self.g.draw_polygon((0, 0, 255, 128), Polygon.rectangle_topleft(Pt2D(50, 50), 10, 10))
        self.assertEqual(surface.get_at((5, 5))[:3], (255, 0, 0))
        r, g, b, _ = surface.get_at((55, 55))
        self.assertEqual((r, g), (0, 0))
        self.assertGreater(b, 100)
        self.assertLess(b, 160)


class CanvasTests(unittest.TestCase):
    def setUp(self) -> None:
        pygame.font.init()
        self.canvas = Canvas(800, 600, camera=Camera(0.0, 0.0, 4.0))

    def test_zoom_keeps_anchor(self) -> None:
        anchor = ScreenPt(200.0, 150.0)
        before = self.canvas.screen_to_map(anchor)
        self.canvas.zoom_about(2.0, anchor, 0.5, 40.0)
        self.assertAlmostEqual(self.canvas.cam_zoom, 8.0)
        after = self.canvas.screen_to_map(anchor)
        self.assertAlmostEqual(before.x, after.x)
        self.assertAlmostEqual(before.y, after.y)

    def test_zoom_is_clamped(self) -> None:
        self.canvas.zoom_about(100.0, ScreenPt(0.0, 0.0), 0.5, 40.0)
        self.assertEqual(self.canvas.cam_zoom, 40.0)

    def test_center_on(self) -> None:
        self.canvas.center_on(Pt2D(100.0, 50.0))
        mid = self.canvas.screen_to_map(ScreenPt(400.0, 300.0))
        self.assertAlmostEqual(mid.x, 100.0)
        self.assertAlmostEqual(mid.y, 50.0)

    def test_text_dims_grow_with_text(self) -> None:
        from ui.types import Text

        short_w, short_h = self.canvas.text_dims(Text.from_line("Cycle 1"))
        long_w, _ = self.canvas.text_dims(Text.from_line("Cycle 1: 12.5s / 30s"))
        self.assertGreater(long_w, short_w)
        self.assertGreater(short_h, 0)


if __name__ == "__main__":
    unittest.main()
