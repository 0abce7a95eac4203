"""Per-metric calculators.

Each calculator accepts a configuration in any form understood by
`fabricmetrics.normalize.normalize_configuration` and returns one metric
record.
"""

from fabricmetrics.calc.cabling import calculate_cabling
from fabricmetrics.calc.cost import calculate_cost
from fabricmetrics.calc.device_count import calculate_device_count
from fabricmetrics.calc.latency import calculate_latency
from fabricmetrics.calc.oversubscription import calculate_oversubscription
from fabricmetrics.calc.power import calculate_power_usage
from fabricmetrics.calc.rack_space import calculate_rack_space

__all__ = [
    "calculate_cabling",
    "calculate_cost",
    "calculate_device_count",
    "calculate_latency",
    "calculate_oversubscription",
    "calculate_power_usage",
    "calculate_rack_space",
]
