"""
ui/signal_diagram.py
====================
Timing diagram for one traffic signal, anchored to the right edge of
the window.

One row per cycle, top to bottom in rotation order.  Each row holds a
miniature of the intersection painted by
:func:`ui.draw_intersection.draw_signal_cycle` and a label with the
cycle's duration; the active cycle's row is highlighted and its label
shows elapsed time, or ``OVERTIME`` once the cycle ran past its end.

Layout and painting are split: :func:`layout_signal_diagram` does all
the arithmetic and :func:`draw_signal_diagram` only paints the result.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from config import DIAGRAM_LABEL_MARGIN, DIAGRAM_PADDING, DIAGRAM_ZOOM
from geom import Bounds, Polygon, Pt2D
from sim.traffic_signal import Cycle

from .canvas import GfxCtx
from .color_scheme import ColorScheme
from .draw_intersection import draw_signal_cycle
from .types import RenderCtx, ScreenPt, Text


@dataclass(frozen=True)
class DiagramRow:
    cycle: Cycle
    label: Text
    # Map point that lands on the row's drawing origin at diagram zoom.
    frame_origin: Pt2D
    label_pt: ScreenPt


@dataclass(frozen=True)
class DiagramLayout:
    panel_x: float
    panel_y: float
    panel_width: float
    panel_height: float
    row_height: float
    label_width: float
    zoom: float
    highlight_row: Optional[int]
    rows: Tuple[DiagramRow, ...]

    def panel(self) -> Polygon:
        return Polygon.rectangle_topleft(
            Pt2D(self.panel_x, self.panel_y), self.panel_width, self.panel_height
        )

    def highlight(self) -> Optional[Polygon]:
        if self.highlight_row is None:
            return None
        return Polygon.rectangle_topleft(
            Pt2D(self.panel_x, self.panel_y + self.row_height * self.highlight_row),
            self.panel_width,
            self.row_height,
        )


def format_duration(seconds: float) -> str:
    if float(seconds).is_integer():
        return f"{int(seconds)}s"
    return f"{seconds:.1f}s"


def cycle_label(
    idx: int,
    cycle: Cycle,
    active: bool,
    time_left: Optional[float],
    cs: ColorScheme,
) -> Text:
    """``Cycle n: ...`` label for one row."""
    if active and time_left is not None:
        if time_left < 0.0:
            txt = Text.from_line(f"Cycle {idx + 1}: ")
            txt.append("OVERTIME", cs.get("signal overtime"))
            return txt
        return Text.from_line(
            f"Cycle {idx + 1}: {cycle.duration - time_left:.1f}s / "
            f"{format_duration(cycle.duration)}"
        )
    return Text.from_line(f"Cycle {idx + 1}: {format_duration(cycle.duration)}")


def layout_signal_diagram(
    i: int,
    current_cycle: int,
    time_left: Optional[float],
    y1_screen: float,
    ctx: RenderCtx,
) -> DiagramLayout:
    padding = DIAGRAM_PADDING
    zoom = DIAGRAM_ZOOM
    bounds = Bounds.from_points(ctx.road_map.get_i(i).polygon)
    top_left = bounds.top_left
    width, height = bounds.width, bounds.height
    cycles = ctx.road_map.get_traffic_signal(i).cycles
    if cycles and not 0 <= current_cycle < len(cycles):
        raise IndexError(f"signal {i} has no cycle {current_cycle}")

    labels: List[Text] = [
        cycle_label(idx, cycle, idx == current_cycle, time_left, ctx.cs)
        for idx, cycle in enumerate(cycles)
    ]
    label_width = max((ctx.canvas.text_dims(txt)[0] for txt in labels), default=0.0)
    total_width = width * zoom + label_width + DIAGRAM_LABEL_MARGIN
    x1_screen = ctx.canvas.window_width - total_width
    row_height = (padding + height) * zoom

    rows = []
    for idx, (txt, cycle) in enumerate(zip(labels, cycles)):
        origin = Pt2D(
            top_left.x - x1_screen / zoom,
            top_left.y - y1_screen / zoom - height * idx - padding * (idx + 1),
        )
        label_pt = ScreenPt(
            x1_screen + DIAGRAM_LABEL_MARGIN + width * zoom,
            y1_screen + row_height * idx,
        )
        rows.append(DiagramRow(cycle, txt, origin, label_pt))

    return DiagramLayout(
        panel_x=x1_screen,
        panel_y=y1_screen,
        panel_width=total_width,
        panel_height=row_height * len(cycles) if cycles else padding * zoom,
        row_height=row_height,
        label_width=label_width,
        zoom=zoom,
        highlight_row=current_cycle if cycles else None,
        rows=tuple(rows),
    )


def draw_signal_diagram(
    i: int,
    current_cycle: int,
    time_left: Optional[float],
    y1_screen: float,
    g: GfxCtx,
    ctx: RenderCtx,
) -> DiagramLayout:
    """Paint the diagram for signal *i*; returns the layout used."""
    layout = layout_signal_diagram(i, current_cycle, time_left, y1_screen, ctx)

    with g.screenspace():
        g.draw_polygon(ctx.cs.get("signal editor panel"), layout.panel())
        highlight = layout.highlight()
        if highlight is not None:
            g.draw_polygon(ctx.cs.get("current cycle in signal editor panel"), highlight)

        for row in layout.rows:
            with g.forked(row.frame_origin, layout.zoom):
                draw_signal_cycle(row.cycle, g, ctx)
            ctx.canvas.draw_text_at_screenspace_topleft(g, row.label, row.label_pt)

    return layout
