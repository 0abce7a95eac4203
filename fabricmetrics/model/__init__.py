"""Input records and output metric records."""

from fabricmetrics.model.metrics import (
    CablingMetrics,
    ComparisonResult,
    CostBreakdown,
    DeviceCount,
    LatencyMetrics,
    OversubscriptionMetrics,
    PowerBreakdown,
    RackSpaceMetrics,
    SwitchBreakdown,
    TopologyMetrics,
)
from fabricmetrics.model.topology import (
    BreakoutOption,
    DeviceSelection,
    LatencyParameters,
    LeafConfig,
    LegacyBreakoutOption,
    LinkType,
    PowerUsage,
    RackSpaceParameters,
    RoleSelection,
    SpineConfig,
    SwitchCost,
    Topology,
    TopologyConfiguration,
)

__all__ = [
    "BreakoutOption",
    "CablingMetrics",
    "ComparisonResult",
    "CostBreakdown",
    "DeviceCount",
    "DeviceSelection",
    "LatencyMetrics",
    "LatencyParameters",
    "LeafConfig",
    "LegacyBreakoutOption",
    "LinkType",
    "OversubscriptionMetrics",
    "PowerBreakdown",
    "PowerUsage",
    "RackSpaceMetrics",
    "RackSpaceParameters",
    "RoleSelection",
    "SpineConfig",
    "SwitchBreakdown",
    "SwitchCost",
    "Topology",
    "TopologyConfiguration",
    "TopologyMetrics",
]
