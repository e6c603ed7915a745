#!/usr/bin/env python3

from .types import ColorRGB, ColorRGBA, Camera, DrawHints, RenderCtx, RenderOptions, ScreenPt, Text
from .constants import DEFAULT_COLORS, ViewConstants
from .color_scheme import ColorScheme, UnknownColorError
from .canvas import Canvas, FrameTransform, GfxCtx
from .intersection_geometry import SidewalkCorner, calculate_corners, calculate_crosswalks
from .draw_crosswalk import DrawCrosswalk
from .draw_intersection import DrawIntersection, draw_signal_cycle
from .draw_map import DrawMap
from .signal_diagram import DiagramLayout, DiagramRow, draw_signal_diagram, layout_signal_diagram
from .hud import HudRenderer
from .pygame_view import SignalMapView, run_signal_view

__all__ = [
    "ColorRGB",
    "ColorRGBA",
    "Camera",
    "DrawHints",
    "RenderCtx",
    "RenderOptions",
    "ScreenPt",
    "Text",
    "DEFAULT_COLORS",
    "ViewConstants",
    "ColorScheme",
    "UnknownColorError",
    "Canvas",
    "FrameTransform",
    "GfxCtx",
    "SidewalkCorner",
    "calculate_corners",
    "calculate_crosswalks",
    "DrawCrosswalk",
    "DrawIntersection",
    "draw_signal_cycle",
    "DrawMap",
    "DiagramLayout",
    "DiagramRow",
    "draw_signal_diagram",
    "layout_signal_diagram",
    "HudRenderer",
    "SignalMapView",
    "run_signal_view",
]
