"""Physical spine/leaf cable counts under breakout."""

from __future__ import annotations

import math

from fabricmetrics.breakout import legacy_breakout_factor
from fabricmetrics.logging import get_logger
from fabricmetrics.model.metrics import CablingMetrics
from fabricmetrics.normalize import ConfigInput, normalize_configuration

logger = get_logger(__name__)


def calculate_cabling(config: ConfigInput) -> CablingMetrics:
    """Return standard, breakout and total cable counts.

    Current records: with spine breakout factor ``f > 1`` one breakout cable
    carries ``f`` logical links, so ``ceil(links / f)`` breakout cables are
    needed; otherwise every logical link is one standard cable.

    Legacy records: each ``linkTypes`` entry is counted separately, using the
    first enabled legacy breakout option whose label contains the entry's
    speed.
    """
    cfg = normalize_configuration(config)

    standard = 0
    breakout = 0

    if cfg.is_legacy:
        for link_type in cfg.link_types:
            links = cfg.num_spines * cfg.num_leafs * link_type.count
            factor = legacy_breakout_factor(
                cfg.legacy_breakout_options, link_type.type
            )
            if factor is not None:
                breakout += math.ceil(links / factor)
            else:
                standard += links
    else:
        links = cfg.logical_links
        factor = cfg.spine_breakout.factor
        if factor > 1:
            breakout = math.ceil(links / factor)
        else:
            standard = links

    logger.debug("Cabling: standard=%d breakout=%d", standard, breakout)
    return CablingMetrics(
        standard=standard, breakout=breakout, total=standard + breakout
    )
