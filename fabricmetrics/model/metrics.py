"""Immutable metric records returned by the calculators.

Each record renders to the camelCase output format with ``to_dict()``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class DeviceCount:
    spines: int
    leafs: int
    total: int

    def to_dict(self) -> Dict[str, Any]:
        return {"spines": self.spines, "leafs": self.leafs, "total": self.total}


@dataclass(frozen=True)
class SwitchBreakdown:
    """Per-role switch totals (cost in currency units or power in watts)."""

    spine: float
    leaf: float
    total: float

    def to_dict(self) -> Dict[str, Any]:
        return {"spine": self.spine, "leaf": self.leaf, "total": self.total}


@dataclass(frozen=True)
class CostBreakdown:
    """Capital cost of switches and fabric optics.

    Attributes:
        switches: Spine, leaf and combined switch cost.
        optics: Cost of all fabric optics.
        total: ``switches.total + optics``.
    """

    switches: SwitchBreakdown
    optics: float
    total: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "switches": self.switches.to_dict(),
            "optics": self.optics,
            "total": self.total,
        }


@dataclass(frozen=True)
class PowerBreakdown:
    """Power draw in watts, same structure as `CostBreakdown`."""

    switches: SwitchBreakdown
    optics: float
    total: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "switches": self.switches.to_dict(),
            "optics": self.optics,
            "total": self.total,
        }


@dataclass(frozen=True)
class LatencyMetrics:
    hops: int
    switch_latency: float
    fiber_latency: float
    total: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hops": self.hops,
            "switchLatency": self.switch_latency,
            "fiberLatency": self.fiber_latency,
            "total": self.total,
        }


@dataclass(frozen=True)
class OversubscriptionMetrics:
    """Downlink versus uplink capacity of the leaf tier.

    Capacities are in Gbps. ``uplink_capacity`` and ``downlink_capacity`` are
    fabric-wide totals; the ``*_per_leaf`` fields are per leaf switch.

    Attributes:
        uplink_capacity: Total leaf-to-spine capacity.
        downlink_capacity: Total server-facing capacity.
        uplink_ports_per_leaf: Physical leaf ports facing the spines.
        downlink_ports_per_leaf: Physical leaf ports facing servers.
        ratio: Ratio formatted to two decimals, or the undefined marker when
            the uplink capacity is zero.
        ratio_value: Unformatted ratio, None when undefined.
        uplink_capacity_per_leaf: Uplink Gbps of one leaf.
        downlink_capacity_per_leaf: Downlink Gbps of one leaf.
        spine_breakout_factor: Leaves served by one physical spine port.
        leaf_breakout_factor: Logical server ports per physical downlink port.
        logical_downlink_ports_per_leaf: Server ports per leaf after breakout.
    """

    uplink_capacity: float
    downlink_capacity: float
    uplink_ports_per_leaf: int
    downlink_ports_per_leaf: int
    ratio: str
    ratio_value: Optional[float] = None
    uplink_capacity_per_leaf: float = 0.0
    downlink_capacity_per_leaf: float = 0.0
    spine_breakout_factor: int = 1
    leaf_breakout_factor: int = 1
    logical_downlink_ports_per_leaf: int = 0

    @property
    def is_defined(self) -> bool:
        return self.ratio_value is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "uplinkCapacity": self.uplink_capacity,
            "downlinkCapacity": self.downlink_capacity,
            "uplinkPortsPerLeaf": self.uplink_ports_per_leaf,
            "downlinkPortsPerLeaf": self.downlink_ports_per_leaf,
            "ratio": self.ratio,
            "uplinkCapacityPerLeaf": self.uplink_capacity_per_leaf,
            "downlinkCapacityPerLeaf": self.downlink_capacity_per_leaf,
            "spineBreakoutFactor": self.spine_breakout_factor,
            "leafBreakoutFactor": self.leaf_breakout_factor,
            "logicalDownlinkPortsPerLeaf": self.logical_downlink_ports_per_leaf,
        }


@dataclass(frozen=True)
class RackSpaceMetrics:
    spine_rack_units: int
    leaf_rack_units: int
    total_rack_units: int
    racks_needed: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "spineRackUnits": self.spine_rack_units,
            "leafRackUnits": self.leaf_rack_units,
            "totalRackUnits": self.total_rack_units,
            "racksNeeded": self.racks_needed,
        }


@dataclass(frozen=True)
class CablingMetrics:
    standard: int
    breakout: int
    total: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "standard": self.standard,
            "breakout": self.breakout,
            "total": self.total,
        }


@dataclass(frozen=True)
class TopologyMetrics:
    """All metrics of one topology, built fresh per calculation."""

    device_count: DeviceCount
    cost: CostBreakdown
    power: PowerBreakdown
    latency: LatencyMetrics
    oversubscription: OversubscriptionMetrics
    rack_space: RackSpaceMetrics
    cabling: CablingMetrics

    def to_dict(self) -> Dict[str, Any]:
        return {
            "deviceCount": self.device_count.to_dict(),
            "cost": self.cost.to_dict(),
            "power": self.power.to_dict(),
            "latency": self.latency.to_dict(),
            "oversubscription": self.oversubscription.to_dict(),
            "rackSpace": self.rack_space.to_dict(),
            "cabling": self.cabling.to_dict(),
        }


@dataclass(frozen=True)
class ComparisonResult:
    id: str
    name: str
    metrics: TopologyMetrics

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "metrics": self.metrics.to_dict()}
