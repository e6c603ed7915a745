"""
ui/helpers.py
=============
Pure pygame utility functions shared across UI modules:
alpha-surface drawing and text blitting.
"""

from __future__ import annotations

from typing import Sequence, Tuple

import pygame


# ── Alpha drawing helpers ────────────────────────────────────────────────────

def draw_alpha_rect(
    target: pygame.Surface,
    color: Tuple[int, ...],
    rect: pygame.Rect,
    border_radius: int = 0,
) -> None:
    """Draw a semi-transparent rectangle (colour tuple with 4 channels)."""
    if rect.w <= 0 or rect.h <= 0:
        return
    tmp = pygame.Surface((rect.w, rect.h), pygame.SRCALPHA)
    pygame.draw.rect(tmp, color, (0, 0, rect.w, rect.h), border_radius=border_radius)
    target.blit(tmp, rect.topleft)


def draw_alpha_polygon(
    target: pygame.Surface,
    color: Tuple[int, ...],
    points: Sequence[Tuple[float, float]],
) -> None:
    """Draw a semi-transparent polygon given in screen pixels."""
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    left, top = int(min(xs)), int(min(ys))
    bbox = pygame.Rect(left, top, int(max(xs)) - left + 1, int(max(ys)) - top + 1)
    # Only allocate the visible part; zoomed-in polygons can be huge.
    area = target.get_clip().clip(bbox)
    if area.w <= 0 or area.h <= 0:
        return
    tmp = pygame.Surface(area.size, pygame.SRCALPHA)
    pygame.draw.polygon(tmp, color, [(x - area.x, y - area.y) for x, y in points])
    target.blit(tmp, area.topleft)


# ── Text helper ──────────────────────────────────────────────────────────────

def render_text(
    surface: pygame.Surface,
    font: pygame.font.Font,
    text: str,
    pos: Tuple[int, int],
    color: Tuple[int, ...] = (230, 230, 235),
    anchor: str = "topleft",
) -> pygame.Rect:
    """Render text with flexible *anchor* ('topleft', 'center', 'midright' …)."""
    img = font.render(text, True, color)
    rect = img.get_rect(**{anchor: pos})
    surface.blit(img, rect)
    return rect
