"""Leaf oversubscription: server-facing versus spine-facing bandwidth.

For a current record with ``S`` spines, ``L`` leaves and spine breakout
factor ``f``:

    uplink_ports_per_leaf   = ceil(S / f)
    uplink_capacity         = uplink_ports_per_leaf * spine_gbps * L
    downlink_ports_per_leaf = max(0, leaf_ports - uplink_ports_per_leaf)
    downlink_capacity       = downlink_ports_per_leaf * downlink_gbps * L
    ratio                   = downlink_capacity / uplink_capacity

One physical spine port broken out ``f`` ways serves ``f`` leaves, hence the
division. Leaf downlink breakout changes the number of server ports but not
the bandwidth, so it only shows up in ``logical_downlink_ports_per_leaf``.
Legacy records take ``sum(count * S)`` over ``linkTypes`` as the uplink port
count. With zero uplink capacity the ratio is undefined and reported as
``ENGINE_CONFIG.undefined_ratio``.
"""

from __future__ import annotations

import math

from fabricmetrics.breakout import speed_to_gbps
from fabricmetrics.config import ENGINE_CONFIG
from fabricmetrics.logging import get_logger
from fabricmetrics.model.metrics import OversubscriptionMetrics
from fabricmetrics.normalize import (
    ConfigInput,
    NormalizedConfiguration,
    normalize_configuration,
)

logger = get_logger(__name__)


def uplink_ports_per_leaf(config: NormalizedConfiguration) -> int:
    """Physical leaf ports needed to reach every spine."""
    if config.is_legacy:
        return sum(lt.count * config.num_spines for lt in config.link_types)
    return math.ceil(config.num_spines / config.spine_breakout.factor)


def calculate_oversubscription(config: ConfigInput) -> OversubscriptionMetrics:
    """Return uplink/downlink capacities (Gbps), port counts and the ratio.

    Args:
        config: Configuration in any accepted form.

    Returns:
        Oversubscription metrics. ``ratio`` is formatted to two decimals, or
        is the undefined marker when there is no uplink capacity.
    """
    cfg = normalize_configuration(config)

    spine_gbps = speed_to_gbps(cfg.spine.port_speed)
    uplink_ports = uplink_ports_per_leaf(cfg)
    uplink_per_leaf = uplink_ports * spine_gbps
    total_uplink = uplink_per_leaf * cfg.num_leafs

    leaf_ports = cfg.leaf.port_count or ENGINE_CONFIG.fallback_leaf_port_count
    downlink_ports = max(0, leaf_ports - uplink_ports)
    downlink_gbps = speed_to_gbps(
        cfg.leaf.downlink_speed, default=ENGINE_CONFIG.fallback_downlink_gbps
    )
    leaf_factor = cfg.leaf_breakout.factor
    downlink_per_leaf = downlink_ports * downlink_gbps
    total_downlink = downlink_per_leaf * cfg.num_leafs

    if total_uplink > 0:
        ratio_value = total_downlink / total_uplink
        ratio = ENGINE_CONFIG.format_ratio(ratio_value)
    else:
        ratio_value = None
        ratio = ENGINE_CONFIG.undefined_ratio

    logger.debug(
        "Oversubscription: spines=%d leafs=%d spine_gbps=%d spine_factor=%d "
        "uplink_ports=%d uplink_per_leaf=%d uplink_total=%d "
        "downlink_ports=%d downlink_gbps=%d leaf_factor=%d "
        "downlink_per_leaf=%d downlink_total=%d ratio=%s",
        cfg.num_spines,
        cfg.num_leafs,
        spine_gbps,
        cfg.spine_breakout.factor,
        uplink_ports,
        uplink_per_leaf,
        total_uplink,
        downlink_ports,
        downlink_gbps,
        leaf_factor,
        downlink_per_leaf,
        total_downlink,
        ratio,
    )

    return OversubscriptionMetrics(
        uplink_capacity=total_uplink,
        downlink_capacity=total_downlink,
        uplink_ports_per_leaf=uplink_ports,
        downlink_ports_per_leaf=downlink_ports,
        ratio=ratio,
        ratio_value=ratio_value,
        uplink_capacity_per_leaf=uplink_per_leaf,
        downlink_capacity_per_leaf=downlink_per_leaf,
        spine_breakout_factor=cfg.spine_breakout.factor,
        leaf_breakout_factor=leaf_factor,
        logical_downlink_ports_per_leaf=downlink_ports * leaf_factor,
    )
