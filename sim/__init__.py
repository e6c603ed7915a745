"""
sim — Road topology and signal timing
=====================================

Modules
-------
network
    :class:`RoadMap` with intersections, roads, lanes and turns.
traffic_policy
    :class:`SignalPolicy` tunable timing constants and helpers.
traffic_signal
    :class:`Cycle`, :class:`ControlTrafficSignal`, default cycle plans.
signal_clock
    :class:`SignalClock` live rotation with hold / overtime / override.
grid_map
    :func:`default_map` procedural demo grid.
"""
