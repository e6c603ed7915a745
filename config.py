#!/usr/bin/env python3
"""
config.py
=========
Application-wide configuration constants.

Values can be overridden via environment variables (see :mod:`main`).
This module is a thin, import-safe leaf — it never imports from
other project packages.
"""

# ── Map defaults ─────────────────────────────────────────────────────────────
DEFAULT_GRID_ROWS: int = 2
DEFAULT_GRID_COLS: int = 3
DEFAULT_GRID_SPACING_M: float = 60.0
DEFAULT_SEED: int = 7

# ── Rendering ────────────────────────────────────────────────────────────────
MIN_ZOOM_FOR_MARKINGS: float = 3.0
INITIAL_ZOOM: float = 6.0

# ── Signal diagram panel ─────────────────────────────────────────────────────
DIAGRAM_PADDING: float = 5.0
DIAGRAM_ZOOM: float = 10.0
DIAGRAM_LABEL_MARGIN: float = 10.0

# ── UI defaults ──────────────────────────────────────────────────────────────
WINDOW_WIDTH: int = 1280
WINDOW_HEIGHT: int = 800
TARGET_FPS: int = 60
FONT_SIZE: int = 18

# ── Theme / logging ──────────────────────────────────────────────────────────
THEME_PATH: str = ""
LOG_LEVEL: str = "INFO"
