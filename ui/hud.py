#!/usr/bin/env python3
"""HUD panel, legend, debug overlay, help text, and pause banner (mixin)."""

from __future__ import annotations

from typing import List, Optional

import pygame

from .helpers import draw_alpha_rect, render_text


class HudRenderer:
    """Mixin that draws every overlay / HUD element."""

    HELP_LINES = (
        "CLICK  Select intersection",
        "SPACE  Pause/Resume",
        "+ / -  Zoom in/out",
        "ARROWS Pan",
        "H      Hold/release signal",
        "O      Cycle override",
        "C      Clear override",
        "S      Hide live signal detail",
        "F3     Debug labels",
        "L      Legend",
        "R      Reset view",
        "F12    Screenshot",
        "ESC    Deselect / quit",
    )

    # ------------------------------------------------------------------ #
    #  Selection panel                                                     #
    # ------------------------------------------------------------------ #

    def draw_hud(self, surface: pygame.Surface, selected: Optional[int]) -> None:
        if self.font_small is None or self.font_tiny is None:
            return

        lines: List[str] = []
        warn: Optional[str] = None
        if selected is None:
            lines.append("NO INTERSECTION SELECTED")
        else:
            inter = self.road_map.get_i(selected)
            kind = inter.intersection_type.value.replace("_", " ").upper()
            lines.append(f"INTERSECTION {selected}   {kind}")
            signal = self.road_map.get_traffic_signal(selected) if inter.is_traffic_signal() else None
            if signal is not None and signal.cycles:
                progress = self.sim.progress(selected)
                lines.append(
                    f"CYCLE {progress.cycle_idx + 1}/{len(signal.cycles)}   "
                    f"PERIOD {signal.total_duration():.0f}s"
                )
                if self.sim.is_overridden(selected):
                    warn = "OVERRIDE"
                elif progress.time_left is not None and progress.time_left < 0.0:
                    warn = "OVERTIME"
                elif self.sim.is_held(selected):
                    warn = "HELD"
                if progress.time_left is not None and progress.time_left >= 0.0:
                    lines.append(f"LEFT {progress.time_left:>5.1f}s")

        row_height = 16
        panel_height = 12 + (len(lines) + (1 if warn else 0)) * row_height
        panel_rect = pygame.Rect(16, self.height - panel_height - 16, 280, panel_height)
        pygame.draw.rect(surface, self.HUD_BG_COLOR, panel_rect, border_radius=6)
        pygame.draw.rect(surface, self.HUD_BORDER_COLOR, panel_rect, width=1, border_radius=6)

        y = panel_rect.y + 6
        for i, line in enumerate(lines):
            font = self.font_small if i == 0 else self.font_tiny
            render_text(surface, font, line, (panel_rect.x + 10, y), self.HUD_TEXT_COLOR)
            y += row_height
        if warn:
            render_text(surface, self.font_small, warn, (panel_rect.x + 10, y),
                        self.cs.get("signal overtime")[:3])

    # ------------------------------------------------------------------ #
    #  Legend                                                               #
    # ------------------------------------------------------------------ #

    def _draw_legend(self, surface: pygame.Surface) -> None:
        if self.font_tiny is None:
            return
        x = 16
        y = 16
        box_w, box_h = 130, len(self.LEGEND_ITEMS) * 18 + 10
        pygame.draw.rect(
            surface, self.HUD_BG_COLOR, (x - 6, y - 4, box_w, box_h), border_radius=4
        )
        pygame.draw.rect(
            surface, self.HUD_BORDER_COLOR, (x - 6, y - 4, box_w, box_h), width=1, border_radius=4
        )
        for label, color_name in self.LEGEND_ITEMS:
            pygame.draw.circle(surface, self.cs.get(color_name)[:3], (x + 4, y + 6), 4)
            render_text(surface, self.font_tiny, label, (x + 14, y), self.HUD_TEXT_COLOR)
            y += 18

    # ------------------------------------------------------------------ #
    #  Debug / FPS overlay                                                 #
    # ------------------------------------------------------------------ #

    def _draw_debug_overlay(self, surface: pygame.Surface, dt: float) -> None:
        if self.font_tiny is None:
            return
        fps = self.clock.get_fps() if self.clock else 0.0
        cursor = self.canvas.screen_to_map(self._mouse_pt())
        lines = [
            f"FPS  {fps:.1f}",
            f"DT   {dt * 1000:.1f} ms",
            f"ZOOM {self.canvas.cam_zoom:.2f}x",
            f"RES  {self.width}x{self.height}",
            f"TIME {self.sim.time:.1f}s",
            f"MAP  {cursor.x:.1f}, {cursor.y:.1f}",
            f"SIG  {len(self.road_map.all_traffic_signals())}",
        ]
        x, y = 16, self.height // 2
        for line in lines:
            render_text(surface, self.font_tiny, line, (x, y), self.DEBUG_TEXT_COLOR)
            y += 14

    def _draw_help(self, surface: pygame.Surface) -> None:
        if self.font_tiny is None:
            return
        y = self.height - 16 - len(self.HELP_LINES) * 14
        for line in self.HELP_LINES:
            render_text(surface, self.font_tiny, line, (self.width - 16, y),
                        (120, 120, 120), anchor="topright")
            y += 14

    # ------------------------------------------------------------------ #
    #  Pause banner                                                        #
    # ------------------------------------------------------------------ #

    def _draw_pause_banner(self, surface: pygame.Surface) -> None:
        draw_alpha_rect(surface, (0, 0, 0, 100), pygame.Rect(0, 0, self.width, self.height))
        if self.font_title:
            render_text(surface, self.font_title, "PAUSED",
                        (self.width // 2, self.height // 2), (220, 220, 220), anchor="center")
