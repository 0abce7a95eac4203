"""Rack footprint of the switches, assuming standard 42U racks."""

from __future__ import annotations

import math

from fabricmetrics.config import ENGINE_CONFIG
from fabricmetrics.model.metrics import RackSpaceMetrics
from fabricmetrics.normalize import ConfigInput, normalize_configuration


def calculate_rack_space(config: ConfigInput) -> RackSpaceMetrics:
    cfg = normalize_configuration(config)

    spine_units = cfg.num_spines * cfg.spine_rack_units
    leaf_units = cfg.num_leafs * cfg.leaf_rack_units
    total = spine_units + leaf_units

    return RackSpaceMetrics(
        spine_rack_units=spine_units,
        leaf_rack_units=leaf_units,
        total_rack_units=total,
        racks_needed=math.ceil(total / ENGINE_CONFIG.rack_units_per_rack),
    )
