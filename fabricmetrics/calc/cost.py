"""Capital cost model: switches plus fabric optics."""

from __future__ import annotations

from fabricmetrics.calc.optics import fabric_optics, price_optics
from fabricmetrics.logging import get_logger
from fabricmetrics.model.metrics import CostBreakdown, SwitchBreakdown
from fabricmetrics.normalize import ConfigInput, normalize_configuration

logger = get_logger(__name__)


def calculate_cost(config: ConfigInput) -> CostBreakdown:
    """Return the capital cost of a fabric.

    Switch cost is ``numSpines * spine + numLeafs * leaf`` using the unit
    costs after device overrides. Optics cost is the number of fabric optics
    per speed times ``opticsCost[speed]``; unpriced speeds cost nothing.

    Args:
        config: Configuration in any accepted form.

    Returns:
        Cost breakdown with ``total = switches.total + optics``.
    """
    cfg = normalize_configuration(config)

    spine = cfg.num_spines * cfg.spine_unit_cost
    leaf = cfg.num_leafs * cfg.leaf_unit_cost
    switches = SwitchBreakdown(spine=spine, leaf=leaf, total=spine + leaf)

    units = fabric_optics(cfg)
    optics = price_optics(units, cfg.optics_cost)

    logger.debug(
        "Cost: switches=%.2f optics=%.2f units=%s", switches.total, optics, units
    )
    return CostBreakdown(
        switches=switches, optics=optics, total=switches.total + optics
    )
