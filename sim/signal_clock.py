#!/usr/bin/env python3
"""
sim/signal_clock.py
===================
Live simulation clock for every traffic signal on a map.

Signals normally follow their fixed-time rotation.  Two extra modes
exist on top of it:

* **hold** — the intersection is not clear, so the active cycle keeps
  running past its end.  Once past it the signal is *in overtime* and
  its remaining time goes negative.  :meth:`SignalClock.release` lets
  the rotation continue from the next cycle.
* **override** — a cycle is pinned by hand (signal editing).  There is
  no remaining time to report.

Renderers only read from this object during a frame.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from sim.network import RoadMap
from sim.traffic_signal import ControlTrafficSignal, Cycle

log = logging.getLogger("signals")


@dataclass
class _SignalRun:
    """Mutable per-signal bookkeeping."""

    offset: float = 0.0
    held: bool = False
    overtime_cycle: Optional[int] = None
    overtime_since: float = 0.0
    override_cycle: Optional[int] = None


@dataclass(frozen=True)
class CycleProgress:
    """Snapshot handed to the diagram: which cycle and how long is left.

    ``time_left`` is ``None`` for an overridden signal and negative in
    overtime.
    """

    cycle_idx: int
    time_left: Optional[float]


class SignalClock:
    """Advances simulated time and tracks hold / override state."""

    def __init__(self, road_map: RoadMap, start_time: float = 0.0) -> None:
        self.road_map = road_map
        self.time = float(start_time)
        self._runs: Dict[int, _SignalRun] = {
            s.id: _SignalRun() for s in road_map.all_traffic_signals()
        }

    # ── time ──────────────────────────────────────────────────────────────

    def step(self, dt: float) -> None:
        """Advance by *dt* seconds, entering overtime where a held cycle ends."""
        if dt < 0.0:
            raise ValueError(f"negative time step {dt}")
        for i, run in self._runs.items():
            if not run.held or run.overtime_cycle is not None or run.override_cycle is not None:
                continue
            cycle, remaining = self._signal(i).current_cycle_and_remaining_time(
                self.time - run.offset
            )
            if dt >= remaining:
                run.overtime_cycle = cycle.idx
                run.overtime_since = self.time + remaining
                log.info("signal %s: cycle %d in overtime", i, cycle.idx + 1)
        self.time += dt

    # ── controls ──────────────────────────────────────────────────────────

    def hold(self, i: int) -> None:
        """Keep the current cycle of *i* running past its end."""
        run = self._run(i)
        run.held = True
        log.debug("signal %s: hold", i)

    def release(self, i: int) -> None:
        """Resume the rotation of *i* with the cycle after the held one."""
        run = self._run(i)
        if run.overtime_cycle is not None:
            run.offset += self.time - run.overtime_since
            log.info("signal %s: overtime ended after %.1fs",
                     i, self.time - run.overtime_since)
        run.held = False
        run.overtime_cycle = None

    def override(self, i: int, cycle_idx: int) -> None:
        """Pin *i* to ``cycles[cycle_idx]`` until :meth:`clear_override`."""
        signal = self._signal(i)
        if not 0 <= cycle_idx < len(signal.cycles):
            raise IndexError(f"signal {i} has no cycle {cycle_idx}")
        self._run(i).override_cycle = cycle_idx
        log.debug("signal %s: override to cycle %d", i, cycle_idx + 1)

    def clear_override(self, i: int) -> None:
        self._run(i).override_cycle = None

    # ── queries ───────────────────────────────────────────────────────────

    def is_in_overtime(self, i: int) -> bool:
        run = self._run(i)
        if run.override_cycle is not None or run.overtime_cycle is None:
            return False
        return self.time > run.overtime_since

    def is_held(self, i: int) -> bool:
        return self._run(i).held

    def is_overridden(self, i: int) -> bool:
        return self._run(i).override_cycle is not None

    def current_cycle_and_remaining_time(self, i: int) -> Tuple[Cycle, Optional[float]]:
        signal = self._signal(i)
        run = self._run(i)
        if run.override_cycle is not None:
            return signal.cycles[run.override_cycle], None
        if run.overtime_cycle is not None:
            return signal.cycles[run.overtime_cycle], run.overtime_since - self.time
        return signal.current_cycle_and_remaining_time(self.time - run.offset)

    def progress(self, i: int) -> CycleProgress:
        cycle, time_left = self.current_cycle_and_remaining_time(i)
        return CycleProgress(cycle.idx, time_left)

    # ── internals ─────────────────────────────────────────────────────────

    def _signal(self, i: int) -> ControlTrafficSignal:
        return self.road_map.get_traffic_signal(i)

    def _run(self, i: int) -> _SignalRun:
        return self._runs[i]
