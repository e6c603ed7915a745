"""
ui/canvas.py
============
Drawing surface and viewport.

:class:`GfxCtx` wraps a pygame surface for one frame and owns the
current *frame transform* (map origin + zoom).  Nested drawing can
re-map that transform; every re-map is pushed on a stack and must be
popped again, which :meth:`GfxCtx.forked` and :meth:`GfxCtx.screenspace`
guarantee even when the body raises.

:class:`Canvas` is the long-lived viewport: window size, camera, font
and text measurement.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

import numpy as np
import pygame

from geom import Polygon, Pt2D

from .helpers import draw_alpha_polygon, draw_alpha_rect
from .types import Camera, ColorRGBA, ScreenPt, Text


@dataclass(frozen=True)
class FrameTransform:
    """``screen = (map - origin) * zoom``"""

    origin_x: float
    origin_y: float
    zoom: float


class GfxCtx:
    """Per-frame drawing context over a pygame surface."""

    def __init__(self, surface: pygame.Surface, camera: Camera) -> None:
        self.surface = surface
        self._transform = FrameTransform(camera.world_x, camera.world_y, camera.zoom)
        self._stack: List[FrameTransform] = []

    # ── frame transform ───────────────────────────────────────────────────

    @property
    def transform(self) -> FrameTransform:
        return self._transform

    @property
    def fork_depth(self) -> int:
        """How many re-maps are currently active."""
        return len(self._stack)

    def map_to_screen(self, pt: Pt2D) -> Tuple[float, float]:
        t = self._transform
        return (pt.x - t.origin_x) * t.zoom, (pt.y - t.origin_y) * t.zoom

    def fork(self, top_left: Pt2D, zoom: float) -> FrameTransform:
        """Map *top_left* to the screen origin at *zoom*; returns the old frame.

        Prefer :meth:`forked`, which cannot leave the frame re-mapped.
        """
        old = self._transform
        self._stack.append(old)
        self._transform = FrameTransform(top_left.x, top_left.y, zoom)
        return old

    def fork_screenspace(self) -> FrameTransform:
        """Identity frame: map coordinates are screen pixels."""
        return self.fork(Pt2D(0.0, 0.0), 1.0)

    def unfork(self, old: FrameTransform) -> None:
        if not self._stack:
            raise RuntimeError("unfork without a matching fork")
        restored = self._stack.pop()
        if restored is not old:
            raise RuntimeError("unbalanced fork/unfork")
        self._transform = restored

    @contextmanager
    def forked(self, top_left: Pt2D, zoom: float) -> Iterator[GfxCtx]:
        old = self.fork(top_left, zoom)
        try:
            yield self
        finally:
            self.unfork(old)

    @contextmanager
    def screenspace(self) -> Iterator[GfxCtx]:
        old = self.fork_screenspace()
        try:
            yield self
        finally:
            self.unfork(old)

    # ── primitives ────────────────────────────────────────────────────────

    def _project(self, polygon: Polygon) -> List[Tuple[float, float]]:
        t = self._transform
        arr = (polygon.as_array() - np.array([t.origin_x, t.origin_y])) * t.zoom
        return [(float(x), float(y)) for x, y in arr]

    def draw_polygon(self, color: ColorRGBA, polygon: Polygon) -> None:
        pts = self._project(polygon)
        if len(color) == 4 and color[3] < 255:
            draw_alpha_polygon(self.surface, color, pts)
        else:
            pygame.draw.polygon(self.surface, color[:3], pts)

    def draw_polygons(self, color: ColorRGBA, polygons: List[Polygon]) -> None:
        for polygon in polygons:
            self.draw_polygon(color, polygon)


class Canvas:
    """Viewport state that outlives a single frame.

    Parameters
    ----------
    window_width, window_height : int
        Size of the drawable window in pixels.
    camera : Camera, optional
        Initial camera; defaults to the origin at zoom 4.
    font : pygame.font.Font, optional
        Label font.  Loaded lazily (``pygame.font`` must be initialised).
    """

    def __init__(
        self,
        window_width: int,
        window_height: int,
        camera: Optional[Camera] = None,
        font: Optional[pygame.font.Font] = None,
        font_size: int = 18,
        text_color: ColorRGBA = (240, 240, 240, 255),
        text_bg: Optional[ColorRGBA] = (0, 0, 0, 153),
    ) -> None:
        self.window_width = window_width
        self.window_height = window_height
        self.camera = camera or Camera()
        self.font_size = font_size
        self.text_color = text_color
        self.text_bg = text_bg
        self._font = font

    @property
    def cam_zoom(self) -> float:
        return self.camera.zoom

    @property
    def font(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.Font(None, self.font_size)
        return self._font

    def resize(self, width: int, height: int) -> None:
        self.window_width = width
        self.window_height = height

    def begin_frame(self, surface: pygame.Surface) -> GfxCtx:
        return GfxCtx(surface, self.camera)

    # ── camera ────────────────────────────────────────────────────────────

    def screen_to_map(self, pt: ScreenPt) -> Pt2D:
        x, y = self.camera.screen_to_world(pt.x, pt.y)
        return Pt2D(x, y)

    def center_on(self, pt: Pt2D) -> None:
        z = self.camera.zoom
        self.camera.world_x = pt.x - self.window_width / (2.0 * z)
        self.camera.world_y = pt.y - self.window_height / (2.0 * z)

    def zoom_about(self, factor: float, anchor: ScreenPt, lo: float, hi: float) -> None:
        """Zoom by *factor*, keeping the map point under *anchor* fixed."""
        before = self.screen_to_map(anchor)
        self.camera.zoom = min(hi, max(lo, self.camera.zoom * factor))
        self.camera.world_x = before.x - anchor.x / self.camera.zoom
        self.camera.world_y = before.y - anchor.y / self.camera.zoom

    # ── text ──────────────────────────────────────────────────────────────

    def text_dims(self, txt: Text) -> Tuple[float, float]:
        """Pixel width and height of *txt* in the canvas font."""
        font = self.font
        width = 0
        for line in txt.lines:
            width = max(width, sum(font.size(span.text)[0] for span in line))
        return float(width), float(len(txt.lines) * font.get_linesize())

    def draw_text_at(self, g: GfxCtx, txt: Text, pt: Pt2D) -> None:
        """Centre *txt* on map point *pt* under the current frame."""
        sx, sy = g.map_to_screen(pt)
        w, h = self.text_dims(txt)
        self._blit_text(g.surface, txt, sx - w / 2.0, sy - h / 2.0)

    def draw_text_at_screenspace_topleft(self, g: GfxCtx, txt: Text, pt: ScreenPt) -> None:
        self._blit_text(g.surface, txt, pt.x, pt.y)

    def _blit_text(self, surface: pygame.Surface, txt: Text, x: float, y: float) -> None:
        font = self.font
        w, h = self.text_dims(txt)
        if self.text_bg is not None:
            draw_alpha_rect(surface, self.text_bg, pygame.Rect(int(x), int(y), int(w), int(h)))
        line_h = font.get_linesize()
        for row, line in enumerate(txt.lines):
            cursor = x
            for span in line:
                color = span.color or self.text_color
                img = font.render(span.text, True, color[:3])
                surface.blit(img, (int(cursor), int(y + row * line_h)))
                cursor += img.get_width()
