"""Power model: switches plus fabric optics, in watts."""

from __future__ import annotations

from fabricmetrics.calc.optics import fabric_optics, price_optics
from fabricmetrics.logging import get_logger
from fabricmetrics.model.metrics import PowerBreakdown, SwitchBreakdown
from fabricmetrics.normalize import ConfigInput, normalize_configuration

logger = get_logger(__name__)


def calculate_power_usage(config: ConfigInput) -> PowerBreakdown:
    """Return the power draw of a fabric.

    Mirrors `fabricmetrics.calc.cost.calculate_cost` with ``powerUsage``
    in place of the cost tables.
    """
    cfg = normalize_configuration(config)

    spine = cfg.num_spines * cfg.spine_unit_power
    leaf = cfg.num_leafs * cfg.leaf_unit_power
    switches = SwitchBreakdown(spine=spine, leaf=leaf, total=spine + leaf)

    optics = price_optics(fabric_optics(cfg), cfg.optics_power)

    logger.debug("Power: switches=%.2fW optics=%.2fW", switches.total, optics)
    return PowerBreakdown(
        switches=switches, optics=optics, total=switches.total + optics
    )
