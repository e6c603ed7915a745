#!/usr/bin/env python3
"""Visual constants shared across all renderers."""

from __future__ import annotations

from typing import Dict, Sequence, Tuple

from .types import ColorRGB, ColorRGBA, grey, rgba

# ── Geometry of drawn markings (map metres) ───────────────────────────────────
TURN_THICKNESS: float = 0.5
TURN_ARROW_LEN: float = 1.2
TURN_DASH_LEN: float = 1.0
TURN_DASH_GAP: float = 0.6
CROSSWALK_TILE_EVERY_FRAC: float = 0.6  # of LANE_THICKNESS
CROSSWALK_STRIPE_FRAC: float = 0.5      # of the tile

# ── Theme colour names ────────────────────────────────────────────────────────
# Every name a renderer may look up.  ColorScheme refuses anything else.
DEFAULT_COLORS: Dict[str, ColorRGBA] = {
    "map background": (36, 38, 40, 255),
    "driving lane": (58, 58, 62, 255),
    "sidewalk": grey(0.8),
    "selected": rgba(0, 191, 255, 0.8),
    "border intersection": rgba(50, 205, 50),
    "stop sign intersection": grey(0.6),
    "traffic signal intersection": grey(0.4),
    "sidewalk corner": grey(0.7),
    "crosswalk": (255, 255, 255, 255),
    "turns protected by traffic signal right now": (0, 255, 0, 255),
    "turns allowed with yielding by traffic signal right now": rgba(255, 105, 180, 0.8),
    "signal overtime": (255, 0, 0, 255),
    "signal editor panel": rgba(0, 0, 0, 0.95),
    "current cycle in signal editor panel": rgba(0, 0, 255, 0.95),
    "text": (240, 240, 240, 255),
    "text background": rgba(0, 0, 0, 0.6),
}


class ViewConstants:
    """Mixin providing every HUD / window constant."""

    HUD_BG_COLOR: ColorRGB = (22, 22, 22)
    HUD_BORDER_COLOR: ColorRGB = (42, 42, 42)
    HUD_TEXT_COLOR: ColorRGB = (200, 200, 200)
    DEBUG_TEXT_COLOR: ColorRGB = (0, 255, 127)

    ZOOM_STEP = 1.15
    MIN_ZOOM = 0.5
    MAX_ZOOM = 40.0
    PAN_STEP_PX = 40
    DIAGRAM_TOP_PX = 10.0

    # (label, theme colour name) pairs shown in the legend.
    LEGEND_ITEMS: Sequence[Tuple[str, str]] = (
        ("PROTECTED", "turns protected by traffic signal right now"),
        ("YIELD", "turns allowed with yielding by traffic signal right now"),
        ("CROSSWALK", "crosswalk"),
        ("OVERTIME", "signal overtime"),
    )

    SCREENSHOT_DIR = "screenshots"
