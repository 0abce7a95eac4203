"""Fabric optics accounting shared by the cost and power models.

Every spine has one logical adjacency to every leaf, and each link needs one
optic at each end. Current records price optics at the lane speed of the
spine breakout mode; legacy records price each ``linkTypes`` entry at its own
speed label.
"""

from __future__ import annotations

from typing import Dict, Mapping

from fabricmetrics.config import ENGINE_CONFIG
from fabricmetrics.logging import get_logger
from fabricmetrics.normalize import NormalizedConfiguration

logger = get_logger(__name__)


def fabric_optics(config: NormalizedConfiguration) -> Dict[str, int]:
    """Return the number of fabric optics needed per speed label.

    Args:
        config: Normalized configuration.

    Returns:
        Mapping of speed label to optic count. Empty for a legacy record
        without link types.
    """
    per_link = ENGINE_CONFIG.optics_per_link
    units: Dict[str, int] = {}
    if config.is_legacy:
        for link_type in config.link_types:
            links = config.num_spines * config.num_leafs * link_type.count
            units[link_type.type] = units.get(link_type.type, 0) + links * per_link
        return units

    units[config.spine_breakout.wire_speed] = config.logical_links * per_link
    return units


def price_optics(units: Mapping[str, int], unit_values: Mapping[str, float]) -> float:
    """Sum ``count * unit_values[speed]`` over ``units``.

    A speed without an entry in ``unit_values`` contributes zero.
    """
    total = 0.0
    for speed, count in units.items():
        value = unit_values.get(speed)
        if value is None:
            if count:
                logger.debug(
                    "No per-optic value for %s; counting %d optics as 0", speed, count
                )
            continue
        total += count * value
    return total
