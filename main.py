#!/usr/bin/env python3
"""
main.py
=======
Entry point: builds the demo grid, starts the signal clock and opens the
pygame view.

Environment overrides
---------------------
``SIGNALVIZ_ROWS`` / ``SIGNALVIZ_COLS``   grid size
``SIGNALVIZ_SEED``                         junction type shuffle
``SIGNALVIZ_THEME``                        JSON colour theme
``SIGNALVIZ_LOG_LEVEL``                    ``DEBUG``, ``INFO``, ...
``SIGNALVIZ_WIDTH`` / ``SIGNALVIZ_HEIGHT`` window size in pixels
"""

import logging
import os

import config
from logging_setup import setup_logging
from sim.grid_map import default_map
from sim.signal_clock import SignalClock
from ui.color_scheme import ColorScheme
from ui.pygame_view import run_signal_view


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise SystemExit(f"{name} must be an integer, got {raw!r}") from None


def apply_env_overrides() -> None:
    """Copy ``SIGNALVIZ_*`` environment variables onto :mod:`config`."""
    config.DEFAULT_GRID_ROWS = _env_int("SIGNALVIZ_ROWS", config.DEFAULT_GRID_ROWS)
    config.DEFAULT_GRID_COLS = _env_int("SIGNALVIZ_COLS", config.DEFAULT_GRID_COLS)
    config.DEFAULT_SEED = _env_int("SIGNALVIZ_SEED", config.DEFAULT_SEED)
    config.WINDOW_WIDTH = _env_int("SIGNALVIZ_WIDTH", config.WINDOW_WIDTH)
    config.WINDOW_HEIGHT = _env_int("SIGNALVIZ_HEIGHT", config.WINDOW_HEIGHT)
    config.THEME_PATH = os.environ.get("SIGNALVIZ_THEME", config.THEME_PATH)
    config.LOG_LEVEL = os.environ.get("SIGNALVIZ_LOG_LEVEL", config.LOG_LEVEL).upper()


def main() -> None:
    apply_env_overrides()
    setup_logging(getattr(logging, config.LOG_LEVEL, logging.INFO))
    log = logging.getLogger("main")
    log.info("Starting signal viewer...")

    road_map = default_map(
        rows=config.DEFAULT_GRID_ROWS,
        cols=config.DEFAULT_GRID_COLS,
        spacing=config.DEFAULT_GRID_SPACING_M,
        seed=config.DEFAULT_SEED,
    )
    sim = SignalClock(road_map)
    cs = ColorScheme.load(config.THEME_PATH) if config.THEME_PATH else ColorScheme()

    try:
        run_signal_view(
            road_map,
            sim,
            cs=cs,
            width=config.WINDOW_WIDTH,
            height=config.WINDOW_HEIGHT,
            fps=config.TARGET_FPS,
            font_size=config.FONT_SIZE,
        )
    except KeyboardInterrupt:
        log.info("Shutting down...")


if __name__ == "__main__":
    main()
