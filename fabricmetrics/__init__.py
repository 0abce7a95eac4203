"""fabricmetrics: engineering metrics for spine/leaf Clos fabrics.

Computes device counts, capital cost, power draw, latency, oversubscription,
rack footprint and cable counts for a topology record, in either the current
(``spineConfig``/``leafConfig``) or the legacy (``linkTypes``) shape.

Primary API:
    calculate_all_metrics() - All metrics of one topology
    compare_topologies() - Metrics for several topologies, in input order
    calculate_*() - Individual metric calculators
    load_topology_yaml() - Parse and validate a topology record

Example:
    from fabricmetrics import calculate_all_metrics, get_template

    metrics = calculate_all_metrics(get_template("Medium Leaf-Spine"))
    print(metrics.oversubscription.ratio, metrics.cost.total)
"""

from __future__ import annotations

from fabricmetrics import logging
from fabricmetrics._version import __version__
from fabricmetrics.calc import (
    calculate_cabling,
    calculate_cost,
    calculate_device_count,
    calculate_latency,
    calculate_oversubscription,
    calculate_power_usage,
    calculate_rack_space,
)
from fabricmetrics.catalog import (
    Device,
    DeviceCatalog,
    builtin_catalog,
    select_device,
)
from fabricmetrics.config import ENGINE_CONFIG, EngineConfig
from fabricmetrics.engine import (
    TopologyComparisonError,
    calculate_all_metrics,
    compare_topologies,
)
from fabricmetrics.loader import (
    dump_topology_yaml,
    load_topology_dict,
    load_topology_yaml,
)
from fabricmetrics.model import (
    ComparisonResult,
    Topology,
    TopologyConfiguration,
    TopologyMetrics,
)
from fabricmetrics.normalize import (
    ConfigSchema,
    NormalizedConfiguration,
    normalize_configuration,
)
from fabricmetrics.report import comparison_frame
from fabricmetrics.templates import apply_template, get_builtin_templates, get_template
from fabricmetrics.validation import (
    ValidationResult,
    validate_configuration,
    validate_parallel_links,
)

UNDEFINED_RATIO = ENGINE_CONFIG.undefined_ratio

__all__ = [
    "ComparisonResult",
    "ConfigSchema",
    "Device",
    "DeviceCatalog",
    "ENGINE_CONFIG",
    "EngineConfig",
    "NormalizedConfiguration",
    "Topology",
    "TopologyComparisonError",
    "TopologyConfiguration",
    "TopologyMetrics",
    "UNDEFINED_RATIO",
    "ValidationResult",
    "__version__",
    "apply_template",
    "builtin_catalog",
    "calculate_all_metrics",
    "calculate_cabling",
    "calculate_cost",
    "calculate_device_count",
    "calculate_latency",
    "calculate_oversubscription",
    "calculate_power_usage",
    "calculate_rack_space",
    "compare_topologies",
    "comparison_frame",
    "dump_topology_yaml",
    "get_builtin_templates",
    "get_template",
    "load_topology_dict",
    "load_topology_yaml",
    "logging",
    "normalize_configuration",
    "select_device",
    "validate_configuration",
    "validate_parallel_links",
]
