#!/usr/bin/env python3
"""
Main view class — combines the UI mixins into one runnable Pygame window.

Module layout
─────────────
    ui/
    ├── types.py                  – colours, Camera, Text, RenderCtx
    ├── constants.py              – theme defaults + ViewConstants mixin
    ├── color_scheme.py           – immutable ColorScheme
    ├── helpers.py                – alpha drawing / text utilities
    ├── canvas.py                 – GfxCtx frame stack + Canvas viewport
    ├── intersection_geometry.py  – crosswalk / sidewalk corner derivation
    ├── draw_crosswalk.py         – zebra stripes
    ├── draw_turn.py              – solid / dashed turn arrows
    ├── draw_lane.py              – lane surfaces
    ├── draw_intersection.py      – intersection renderer + signal cycles
    ├── draw_map.py               – scene cache, hit-testing
    ├── signal_diagram.py         – cycle timing diagram
    ├── hud.py                    – HudRenderer mixin (HUD, legend, debug)
    └── pygame_view.py            – SignalMapView (this file – main loop)
"""

from __future__ import annotations

import logging
import os
from datetime import datetime
from typing import Optional

import pygame

from config import INITIAL_ZOOM
from sim.network import RoadMap
from sim.signal_clock import SignalClock

from .canvas import Canvas, GfxCtx
from .color_scheme import ColorScheme
from .constants import ViewConstants
from .draw_map import DrawMap
from .hud import HudRenderer
from .signal_diagram import draw_signal_diagram
from .types import Camera, DrawHints, RenderCtx, ScreenPt

log = logging.getLogger(__name__)


class SignalMapView(ViewConstants, HudRenderer):
    """Interactive map of intersections and their live signal cycles.

    Click an intersection to select it.  A selected traffic signal gets
    its timing diagram in the top-right corner and can be held or
    pinned to a cycle from the keyboard.
    """

    def __init__(
        self,
        road_map: RoadMap,
        sim: SignalClock,
        cs: Optional[ColorScheme] = None,
        width: int = 1280,
        height: int = 800,
        fps: int = 60,
        font_size: int = 18,
    ):
        self.road_map = road_map
        self.sim = sim
        self.cs = cs or ColorScheme()
        self.width = width
        self.height = height
        self.fps = fps

        self.screen: Optional[pygame.Surface] = None
        self.clock: Optional[pygame.time.Clock] = None
        self.font_small: Optional[pygame.font.Font] = None
        self.font_tiny: Optional[pygame.font.Font] = None
        self.font_title: Optional[pygame.font.Font] = None

        self.draw_map = DrawMap(road_map)
        self.canvas = Canvas(
            width, height,
            camera=Camera(zoom=INITIAL_ZOOM),
            font_size=font_size,
            text_color=self.cs.get("text"),
            text_bg=self.cs.get("text background"),
        )
        self._reset_camera()

        # UI state
        self.paused = False
        self.show_debug = False
        self.show_legend = True
        self.selected: Optional[int] = None
        self.suppress_selected = False
        self._screenshot_flash_until = 0.0
        self._time_seconds = 0.0

    # ------------------------------------------------------------------ #
    #  Camera                                                              #
    # ------------------------------------------------------------------ #
    def _reset_camera(self) -> None:
        b = self.draw_map.bounds
        if b.is_empty():
            return
        self.canvas.camera.zoom = INITIAL_ZOOM
        self.canvas.center_on(b.top_left.offset(b.width / 2.0, b.height / 2.0))

    def _zoom(self, factor: float) -> None:
        self.canvas.zoom_about(
            factor, ScreenPt(self.width / 2.0, self.height / 2.0),
            self.MIN_ZOOM, self.MAX_ZOOM,
        )

    def _pan(self, dx_px: float, dy_px: float) -> None:
        cam = self.canvas.camera
        cam.world_x += dx_px / cam.zoom
        cam.world_y += dy_px / cam.zoom

    def _mouse_pt(self) -> ScreenPt:
        x, y = pygame.mouse.get_pos()
        return ScreenPt(float(x), float(y))

    # ------------------------------------------------------------------ #
    #  Resize                                                              #
    # ------------------------------------------------------------------ #
    def _handle_resize(self, new_w: int, new_h: int) -> None:
        self.width = max(400, new_w)
        self.height = max(300, new_h)
        self.canvas.resize(self.width, self.height)
        self.screen = pygame.display.set_mode(
            (self.width, self.height), pygame.RESIZABLE
        )

    # ------------------------------------------------------------------ #
    #  Screenshot                                                          #
    # ------------------------------------------------------------------ #
    def _take_screenshot(self) -> None:
        if self.screen is None:
            return
        os.makedirs(self.SCREENSHOT_DIR, exist_ok=True)
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        path = os.path.join(self.SCREENSHOT_DIR, f"signals_{stamp}.png")
        pygame.image.save(self.screen, path)
        log.info("screenshot saved to %s", path)
        self._screenshot_flash_until = self._time_seconds + 0.35

    # ------------------------------------------------------------------ #
    #  Selection / signal controls                                         #
    # ------------------------------------------------------------------ #
    def _selected_signal(self) -> Optional[int]:
        if self.selected is None:
            return None
        if not self.road_map.get_i(self.selected).is_traffic_signal():
            return None
        return self.selected

    def _select_at(self, pt: ScreenPt) -> None:
        self.selected = self.draw_map.intersection_at(self.canvas.screen_to_map(pt))
        log.debug("selected intersection %s", self.selected)

    def _toggle_hold(self) -> None:
        i = self._selected_signal()
        if i is None:
            return
        if self.sim.is_held(i):
            self.sim.release(i)
        else:
            self.sim.hold(i)

    def _next_override(self) -> None:
        i = self._selected_signal()
        if i is None:
            return
        n = len(self.road_map.get_traffic_signal(i).cycles)
        if n == 0:
            return
        current = self.sim.progress(i).cycle_idx
        self.sim.override(i, (current + 1) % n if self.sim.is_overridden(i) else current)

    def _clear_override(self) -> None:
        i = self._selected_signal()
        if i is not None:
            self.sim.clear_override(i)

    # ------------------------------------------------------------------ #
    #  Rendering                                                           #
    # ------------------------------------------------------------------ #
    def _render_ctx(self) -> RenderCtx:
        suppressed = self._selected_signal() if self.suppress_selected else None
        return RenderCtx(
            road_map=self.road_map,
            draw_map=self.draw_map,
            cs=self.cs,
            canvas=self.canvas,
            sim=self.sim,
            hints=DrawHints(suppress_traffic_signal_details=suppressed),
        )

    def _draw_scene(self, g: GfxCtx, ctx: RenderCtx) -> None:
        self.draw_map.draw(g, ctx, debug_mode=self.show_debug, selected=self.selected)

        i = self._selected_signal()
        if i is None:
            return
        if self.road_map.get_traffic_signal(i).cycles:
            progress = self.sim.progress(i)
            draw_signal_diagram(i, progress.cycle_idx, progress.time_left,
                                self.DIAGRAM_TOP_PX, g, ctx)
        else:
            draw_signal_diagram(i, 0, None, self.DIAGRAM_TOP_PX, g, ctx)

    # ------------------------------------------------------------------ #
    #  Main loop                                                           #
    # ------------------------------------------------------------------ #
    def run(self) -> None:
        pygame.init()
        pygame.display.set_caption("SIGNAL VIZ")
        self.screen = pygame.display.set_mode(
            (self.width, self.height), pygame.RESIZABLE
        )
        self.clock = pygame.time.Clock()
        self.font_small = pygame.font.Font(None, 18)
        self.font_tiny = pygame.font.Font(None, 15)
        self.font_title = pygame.font.Font(None, 40)
        log.info("view started: %dx%d @ %d fps", self.width, self.height, self.fps)

        running = True
        while running:
            delta_time = self.clock.tick(self.fps) / 1000.0
            self._time_seconds += delta_time

            # ---- events ------------------------------------------------- #
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.VIDEORESIZE:
                    self._handle_resize(event.w, event.h)
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    self._select_at(ScreenPt(float(event.pos[0]), float(event.pos[1])))
                elif event.type == pygame.MOUSEWHEEL:
                    self._zoom(self.ZOOM_STEP if event.y > 0 else 1.0 / self.ZOOM_STEP)
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        if self.selected is None:
                            running = False
                        self.selected = None
                    elif event.key == pygame.K_SPACE:
                        self.paused = not self.paused
                    elif event.key == pygame.K_F3:
                        self.show_debug = not self.show_debug
                    elif event.key == pygame.K_l:
                        self.show_legend = not self.show_legend
                    elif event.key == pygame.K_r:
                        self._reset_camera()
                    elif event.key == pygame.K_s:
                        self.suppress_selected = not self.suppress_selected
                    elif event.key == pygame.K_F12:
                        self._take_screenshot()
                    elif event.key == pygame.K_h:
                        self._toggle_hold()
                    elif event.key == pygame.K_o:
                        self._next_override()
                    elif event.key == pygame.K_c:
                        self._clear_override()
                    elif event.key in (pygame.K_EQUALS, pygame.K_PLUS, pygame.K_KP_PLUS):
                        self._zoom(self.ZOOM_STEP)
                    elif event.key in (pygame.K_MINUS, pygame.K_KP_MINUS):
                        self._zoom(1.0 / self.ZOOM_STEP)
                    elif event.key == pygame.K_LEFT:
                        self._pan(-self.PAN_STEP_PX, 0)
                    elif event.key == pygame.K_RIGHT:
                        self._pan(self.PAN_STEP_PX, 0)
                    elif event.key == pygame.K_UP:
                        self._pan(0, -self.PAN_STEP_PX)
                    elif event.key == pygame.K_DOWN:
                        self._pan(0, self.PAN_STEP_PX)

            # ---- simulation tick ---------------------------------------- #
            if not self.paused:
                self.sim.step(delta_time)

            # ---- render ------------------------------------------------- #
            self.screen.fill(self.cs.get("map background")[:3])
            g = self.canvas.begin_frame(self.screen)
            self._draw_scene(g, self._render_ctx())

            # HUD layers (drawn on top, unzoomed)
            self.draw_hud(self.screen, self.selected)
            if self.show_legend:
                self._draw_legend(self.screen)
                self._draw_help(self.screen)
            if self.show_debug:
                self._draw_debug_overlay(self.screen, delta_time)
            if self.paused:
                self._draw_pause_banner(self.screen)
            if self._time_seconds < self._screenshot_flash_until:
                flash = pygame.Surface(
                    (self.width, self.height), pygame.SRCALPHA
                )
                flash.fill((255, 255, 255, 40))
                self.screen.blit(flash, (0, 0))

            pygame.display.flip()

        pygame.quit()


# ---------------------------------------------------------------------- #
#  Convenience entry point                                                 #
# ---------------------------------------------------------------------- #
def run_signal_view(
    road_map: RoadMap,
    sim: SignalClock,
    cs: Optional[ColorScheme] = None,
    width: int = 1280,
    height: int = 700,
    fps: int = 60,
    font_size: int = 18,
) -> None:
    view = SignalMapView(road_map, sim, cs=cs, width=width, height=height,
                         fps=fps, font_size=font_size)
    view.run()
