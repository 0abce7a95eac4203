"""Worst-case latency estimate from hop count.

This is a planning approximation. A packet crossing the fabric traverses
``numTiers * 2`` hops and every hop is assumed to ride a 10 m fiber run; no
cable lengths are measured.
"""

from __future__ import annotations

from fabricmetrics.config import ENGINE_CONFIG
from fabricmetrics.model.metrics import LatencyMetrics
from fabricmetrics.normalize import ConfigInput, normalize_configuration


def calculate_latency(config: ConfigInput) -> LatencyMetrics:
    """Return hop count plus switch, fiber and total latency.

    Latency units follow ``latencyParameters``: switch latency per switch and
    fiber latency per km.
    """
    cfg = normalize_configuration(config)

    hops = cfg.num_tiers * 2
    switch_latency = hops * cfg.switch_latency
    fiber_latency = hops * ENGINE_CONFIG.fiber_km_per_hop * cfg.fiber_latency

    return LatencyMetrics(
        hops=hops,
        switch_latency=switch_latency,
        fiber_latency=fiber_latency,
        total=switch_latency + fiber_latency,
    )
