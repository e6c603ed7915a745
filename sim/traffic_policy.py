#!/usr/bin/env python3
"""
sim/traffic_policy.py
=====================
Tunable timing parameters for fixed-time traffic signals.  Every
constant lives in the frozen :class:`SignalPolicy` dataclass so that
experiments can swap policies without touching code.

Also provides two stateless helpers used when grouping approaches into
signal phases:

* :func:`axis_key` — bucket a road heading into a phase axis.
* :func:`cycle_duration_for` — duration of the n-th phase.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SignalPolicy:
    """Immutable bag of every tunable signal-timing parameter."""

    # ── Phase timing ──────────────────────────────────────────────────────
    cycle_duration_s: float = 30.0
    """Duration of every phase except the first."""

    major_axis_duration_s: float = 45.0
    """Duration of the first phase (the major axis gets longer green)."""

    # ── Movement classes ──────────────────────────────────────────────────
    left_turns_yield: bool = True
    """Left turns run permissive (yield to oncoming); otherwise banned."""

    right_turns_protected: bool = True
    """Right turns ride along with the straight movement of their axis."""

    # ── Grouping ──────────────────────────────────────────────────────────
    axis_tolerance_deg: float = 20.0
    """Roads whose folded headings differ by less than this share a phase."""


def axis_key(angle_deg: float, policy: SignalPolicy) -> int:
    """Bucket a folded heading (``[0, 180)``) into a phase axis index.

    Headings close to 180 wrap around to the 0 bucket, so a road at
    179 deg and one at 1 deg land in the same phase.
    """
    width = max(1.0, policy.axis_tolerance_deg)
    bucket = int(round(angle_deg / width))
    buckets = int(round(180.0 / width))
    return bucket % buckets


def cycle_duration_for(index: int, policy: SignalPolicy) -> float:
    """Seconds of green for the *index*-th phase."""
    if index == 0:
        return policy.major_axis_duration_s
    return policy.cycle_duration_s
