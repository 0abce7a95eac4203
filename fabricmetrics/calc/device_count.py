"""Switch counts."""

from __future__ import annotations

from fabricmetrics.model.metrics import DeviceCount
from fabricmetrics.normalize import ConfigInput, normalize_configuration


def calculate_device_count(config: ConfigInput) -> DeviceCount:
    """Return spine, leaf and total switch counts."""
    cfg = normalize_configuration(config)
    return DeviceCount(
        spines=cfg.num_spines,
        leafs=cfg.num_leafs,
        total=cfg.num_spines + cfg.num_leafs,
    )
