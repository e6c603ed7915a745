"""
ui/types.py
===========
Lightweight data containers used across every UI module.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, List, Optional, Tuple

if TYPE_CHECKING:
    from sim.network import RoadMap
    from sim.signal_clock import SignalClock
    from ui.canvas import Canvas
    from ui.color_scheme import ColorScheme

ColorRGB = Tuple[int, int, int]
ColorRGBA = Tuple[int, int, int, int]


def rgba(r: int, g: int, b: int, a: float = 1.0) -> ColorRGBA:
    """Colour with a 0-1 alpha, stored as four bytes."""
    return (r, g, b, int(round(a * 255)))


def grey(level: float) -> ColorRGBA:
    v = int(round(level * 255))
    return (v, v, v, 255)


@dataclass
class Camera:
    """Viewport mapping map coordinates to screen pixels.

    ``world_x``/``world_y`` is the map point shown at the screen's
    top-left corner.  Both frames are y-down, so there is no flip.
    """
    world_x: float = 0.0
    world_y: float = 0.0
    zoom: float = 4.0

    def screen_to_world(self, sx: float, sy: float) -> Tuple[float, float]:
        return sx / self.zoom + self.world_x, sy / self.zoom + self.world_y


@dataclass(frozen=True)
class ScreenPt:
    x: float
    y: float


@dataclass(frozen=True)
class TextSpan:
    text: str
    color: Optional[ColorRGBA] = None


class Text:
    """Multi-line text where every line is a run of coloured spans.

    A span without a colour uses the canvas' default text colour.
    """

    def __init__(self) -> None:
        self.lines: List[List[TextSpan]] = []

    @classmethod
    def from_line(cls, line: str, color: Optional[ColorRGBA] = None) -> Text:
        txt = cls()
        txt.add_line(line, color)
        return txt

    def add_line(self, line: str, color: Optional[ColorRGBA] = None) -> None:
        self.lines.append([TextSpan(line, color)])

    def append(self, line: str, color: Optional[ColorRGBA] = None) -> None:
        """Extend the last line with another span."""
        if not self.lines:
            self.lines.append([])
        self.lines[-1].append(TextSpan(line, color))

    def plain(self) -> str:
        return "\n".join("".join(s.text for s in line) for line in self.lines)

    def __repr__(self) -> str:
        return f"Text({self.plain()!r})"


@dataclass(frozen=True)
class RenderOptions:
    """Per-object draw switches chosen by the host view."""
    color: Optional[ColorRGBA] = None
    debug_mode: bool = False


@dataclass(frozen=True)
class DrawHints:
    """Scene-wide hints; one intersection may opt out of live signal detail."""
    suppress_traffic_signal_details: Optional[int] = None


@dataclass
class RenderCtx:
    """Everything a renderer may read during one frame."""
    road_map: "RoadMap"
    draw_map: Any
    cs: "ColorScheme"
    canvas: "Canvas"
    sim: "SignalClock"
    hints: DrawHints = field(default_factory=DrawHints)
