"""Topology records supplied by the caller.

The dataclasses here mirror the camelCase record format exchanged with the
storage and import/export side. Two historical shapes exist:

- current: ``spineConfig``/``leafConfig`` plus ``breakoutOptions`` as a
  mapping from port speed to a list of ``{type, factor}`` options;
- legacy: ``linkTypes`` as a list of ``{type, count}`` plus
  ``breakoutOptions`` as a list of ``{type, enabled}`` flags.

Both parse into `TopologyConfiguration`; which one applies is decided once by
`fabricmetrics.normalize`. Parsing never touches the input mapping.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union


def _require_mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise TypeError(f"{what} must be a mapping, got {type(data).__name__}")
    return data


def _optional_float(value: Any) -> Optional[float]:
    return None if value is None else float(value)


@dataclass
class SpineConfig:
    """Spine switch port layout.

    Attributes:
        port_count: Physical ports per spine.
        port_speed: Physical port speed label, e.g. "800G".
        breakout_mode: Breakout label "<factor>x<speed>", e.g. "4x200G".
    """

    port_count: int
    port_speed: str
    breakout_mode: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SpineConfig:
        data = _require_mapping(data, "spineConfig")
        return cls(
            port_count=int(data.get("portCount", 0)),
            port_speed=str(data.get("portSpeed", "")),
            breakout_mode=str(data.get("breakoutMode", "")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "portCount": self.port_count,
            "portSpeed": self.port_speed,
            "breakoutMode": self.breakout_mode,
        }


@dataclass
class LeafConfig:
    """Leaf switch port layout.

    Attributes:
        port_count: Physical ports per leaf (uplinks and downlinks together).
        downlink_speed: Server-facing port speed label, e.g. "100G".
        breakout_mode: Breakout label applied to downlink ports.
    """

    port_count: int
    downlink_speed: str
    breakout_mode: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LeafConfig:
        data = _require_mapping(data, "leafConfig")
        return cls(
            port_count=int(data.get("portCount", 0)),
            downlink_speed=str(data.get("downlinkSpeed", "")),
            breakout_mode=str(data.get("breakoutMode", "")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "portCount": self.port_count,
            "downlinkSpeed": self.downlink_speed,
            "breakoutMode": self.breakout_mode,
        }


@dataclass(frozen=True)
class BreakoutOption:
    """One way to split a physical port (current schema)."""

    type: str
    factor: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> BreakoutOption:
        data = _require_mapping(data, "breakout option")
        return cls(type=str(data.get("type", "")), factor=int(data.get("factor", 1)))

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "factor": self.factor}


@dataclass(frozen=True)
class LegacyBreakoutOption:
    """Breakout flag of the legacy schema; the factor lives in the label."""

    type: str
    enabled: bool

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LegacyBreakoutOption:
        data = _require_mapping(data, "legacy breakout option")
        return cls(
            type=str(data.get("type", "")), enabled=bool(data.get("enabled", False))
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "enabled": self.enabled}


@dataclass(frozen=True)
class LinkType:
    """Legacy link declaration: ``count`` links of speed ``type`` per spine."""

    type: str
    count: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LinkType:
        data = _require_mapping(data, "link type")
        return cls(type=str(data.get("type", "")), count=int(data.get("count", 0)))

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "count": self.count}


BreakoutOptions = Dict[str, List[BreakoutOption]]
BreakoutOptionsField = Union[BreakoutOptions, List[LegacyBreakoutOption], None]


@dataclass
class SwitchCost:
    spine: float = 0.0
    leaf: float = 0.0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SwitchCost:
        data = _require_mapping(data, "switchCost")
        return cls(
            spine=float(data.get("spine", 0.0)), leaf=float(data.get("leaf", 0.0))
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"spine": self.spine, "leaf": self.leaf}


@dataclass
class PowerUsage:
    """Per-switch watts and per-optic watts keyed by speed label."""

    spine: float = 0.0
    leaf: float = 0.0
    optics: Dict[str, float] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PowerUsage:
        data = _require_mapping(data, "powerUsage")
        optics = _require_mapping(data.get("optics") or {}, "powerUsage.optics")
        return cls(
            spine=float(data.get("spine", 0.0)),
            leaf=float(data.get("leaf", 0.0)),
            optics={str(k): float(v) for k, v in optics.items()},
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"spine": self.spine, "leaf": self.leaf, "optics": dict(self.optics)}


@dataclass
class LatencyParameters:
    """Latency inputs.

    Attributes:
        switch_latency: Per-switch forwarding latency (microseconds).
        fiber_latency: Propagation latency per km of fiber (microseconds/km).
    """

    switch_latency: float = 0.0
    fiber_latency: float = 0.0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LatencyParameters:
        data = _require_mapping(data, "latencyParameters")
        return cls(
            switch_latency=float(data.get("switchLatency", 0.0)),
            fiber_latency=float(data.get("fiberLatency", 0.0)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "switchLatency": self.switch_latency,
            "fiberLatency": self.fiber_latency,
        }


@dataclass
class RackSpaceParameters:
    spine_rack_units: int = 0
    leaf_rack_units: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RackSpaceParameters:
        data = _require_mapping(data, "rackSpaceParameters")
        return cls(
            spine_rack_units=int(data.get("spineRackUnits", 0)),
            leaf_rack_units=int(data.get("leafRackUnits", 0)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "spineRackUnits": self.spine_rack_units,
            "leafRackUnits": self.leaf_rack_units,
        }


@dataclass
class RoleSelection:
    """Catalog device chosen for one role, with optional unit overrides.

    Attributes:
        device_id: Catalog identifier of the chosen device.
        use_default_config: Whether the device's own figures were applied.
        cost_override: Unit switch cost replacing ``switchCost.<role>``.
        power_override: Unit switch watts replacing ``powerUsage.<role>``.
    """

    device_id: str
    use_default_config: bool = False
    cost_override: Optional[float] = None
    power_override: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RoleSelection:
        data = _require_mapping(data, "deviceSelection entry")
        return cls(
            device_id=str(data.get("deviceId", "")),
            use_default_config=bool(data.get("useDefaultConfig", False)),
            cost_override=_optional_float(data.get("costOverride")),
            power_override=_optional_float(data.get("powerOverride")),
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "deviceId": self.device_id,
            "useDefaultConfig": self.use_default_config,
        }
        if self.cost_override is not None:
            out["costOverride"] = self.cost_override
        if self.power_override is not None:
            out["powerOverride"] = self.power_override
        return out


@dataclass
class DeviceSelection:
    spine: Optional[RoleSelection] = None
    leaf: Optional[RoleSelection] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DeviceSelection:
        data = _require_mapping(data, "deviceSelection")
        spine = data.get("spine")
        leaf = data.get("leaf")
        return cls(
            spine=RoleSelection.from_dict(spine) if spine is not None else None,
            leaf=RoleSelection.from_dict(leaf) if leaf is not None else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        if self.spine is not None:
            out["spine"] = self.spine.to_dict()
        if self.leaf is not None:
            out["leaf"] = self.leaf.to_dict()
        return out


def _parse_breakout_options(raw: Any) -> BreakoutOptionsField:
    if raw is None:
        return None
    if isinstance(raw, list):
        return [LegacyBreakoutOption.from_dict(item) for item in raw]
    raw = _require_mapping(raw, "breakoutOptions")
    parsed: BreakoutOptions = {}
    for speed, options in raw.items():
        if not isinstance(options, list):
            raise ValueError(f"breakoutOptions['{speed}'] must be a list")
        parsed[str(speed)] = [BreakoutOption.from_dict(opt) for opt in options]
    return parsed


def _dump_breakout_options(value: BreakoutOptionsField) -> Any:
    if value is None:
        return None
    if isinstance(value, list):
        return [opt.to_dict() for opt in value]
    return {speed: [opt.to_dict() for opt in opts] for speed, opts in value.items()}


@dataclass
class TopologyConfiguration:
    """Fabric description in either the current or the legacy shape.

    ``spine_config``, ``leaf_config`` and ``breakout_options`` may be absent;
    `fabricmetrics.normalize.normalize_configuration` fills them in.
    """

    num_spines: int = 0
    num_leafs: int = 0
    num_tiers: int = 2
    spine_config: Optional[SpineConfig] = None
    leaf_config: Optional[LeafConfig] = None
    breakout_options: BreakoutOptionsField = None
    link_types: Optional[List[LinkType]] = None
    switch_cost: SwitchCost = field(default_factory=SwitchCost)
    optics_cost: Dict[str, float] = field(default_factory=dict)
    power_usage: PowerUsage = field(default_factory=PowerUsage)
    latency_parameters: LatencyParameters = field(default_factory=LatencyParameters)
    rack_space_parameters: RackSpaceParameters = field(
        default_factory=RackSpaceParameters
    )
    disjointed_spines: bool = False
    rail_optimized: bool = False
    parallel_links_enabled: bool = False
    parallel_links_per_spine: Optional[int] = None
    parallel_links_mode: str = "auto"
    device_selection: Optional[DeviceSelection] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TopologyConfiguration:
        """Build a configuration from a camelCase record.

        Args:
            data: Record in the current or legacy shape.

        Returns:
            A new configuration; ``data`` is left untouched.

        Raises:
            TypeError: If ``data`` or a nested section is not a mapping.
            ValueError: If ``breakoutOptions`` entries are malformed.
        """
        data = _require_mapping(data, "configuration")

        spine = data.get("spineConfig")
        leaf = data.get("leafConfig")
        link_types = data.get("linkTypes")
        selection = data.get("deviceSelection")
        per_spine = data.get("parallelLinksPerSpine")
        optics_cost = _require_mapping(data.get("opticsCost") or {}, "opticsCost")

        if link_types is not None and not isinstance(link_types, list):
            raise ValueError("linkTypes must be a list")

        return cls(
            num_spines=int(data.get("numSpines", 0)),
            num_leafs=int(data.get("numLeafs", 0)),
            num_tiers=int(data.get("numTiers", 2)),
            spine_config=SpineConfig.from_dict(spine) if spine else None,
            leaf_config=LeafConfig.from_dict(leaf) if leaf else None,
            breakout_options=_parse_breakout_options(data.get("breakoutOptions")),
            link_types=(
                [LinkType.from_dict(lt) for lt in link_types]
                if link_types is not None
                else None
            ),
            switch_cost=SwitchCost.from_dict(data.get("switchCost") or {}),
            optics_cost={str(k): float(v) for k, v in optics_cost.items()},
            power_usage=PowerUsage.from_dict(data.get("powerUsage") or {}),
            latency_parameters=LatencyParameters.from_dict(
                data.get("latencyParameters") or {}
            ),
            rack_space_parameters=RackSpaceParameters.from_dict(
                data.get("rackSpaceParameters") or {}
            ),
            disjointed_spines=bool(data.get("disjointedSpines", False)),
            rail_optimized=bool(data.get("railOptimized", False)),
            parallel_links_enabled=bool(data.get("parallelLinksEnabled", False)),
            parallel_links_per_spine=int(per_spine) if per_spine is not None else None,
            parallel_links_mode=str(data.get("parallelLinksMode", "auto")),
            device_selection=(
                DeviceSelection.from_dict(selection) if selection is not None else None
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Return the camelCase record; absent optional sections are omitted."""
        out: Dict[str, Any] = {
            "numSpines": self.num_spines,
            "numLeafs": self.num_leafs,
            "numTiers": self.num_tiers,
        }
        if self.spine_config is not None:
            out["spineConfig"] = self.spine_config.to_dict()
        if self.leaf_config is not None:
            out["leafConfig"] = self.leaf_config.to_dict()
        if self.breakout_options is not None:
            out["breakoutOptions"] = _dump_breakout_options(self.breakout_options)
        if self.link_types is not None:
            out["linkTypes"] = [lt.to_dict() for lt in self.link_types]
        out.update(
            {
                "disjointedSpines": self.disjointed_spines,
                "railOptimized": self.rail_optimized,
                "parallelLinksEnabled": self.parallel_links_enabled,
                "parallelLinksMode": self.parallel_links_mode,
                "switchCost": self.switch_cost.to_dict(),
                "opticsCost": dict(self.optics_cost),
                "powerUsage": self.power_usage.to_dict(),
                "latencyParameters": self.latency_parameters.to_dict(),
                "rackSpaceParameters": self.rack_space_parameters.to_dict(),
            }
        )
        if self.parallel_links_per_spine is not None:
            out["parallelLinksPerSpine"] = self.parallel_links_per_spine
        if self.device_selection is not None:
            out["deviceSelection"] = self.device_selection.to_dict()
        return out


@dataclass
class Topology:
    """A named fabric design as stored by the caller.

    Attributes:
        id: Caller-assigned identifier.
        name: Display name.
        description: Free text.
        created_at: ISO timestamp string (opaque to the engine).
        updated_at: ISO timestamp string (opaque to the engine).
        configuration: Fabric description, or None for an incomplete record.
        imported_at: Set by the import side, if any.
        exported_at: Set by the export side, if any.
        export_version: Export format version, if any.
    """

    id: str = ""
    name: str = ""
    description: str = ""
    created_at: str = ""
    updated_at: str = ""
    configuration: Optional[TopologyConfiguration] = None
    imported_at: Optional[str] = None
    exported_at: Optional[str] = None
    export_version: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Topology:
        data = _require_mapping(data, "topology")
        config = data.get("configuration")
        return cls(
            id=str(data.get("id", "")),
            name=str(data.get("name", "")),
            description=str(data.get("description", "")),
            created_at=str(data.get("createdAt", "")),
            updated_at=str(data.get("updatedAt", "")),
            configuration=(
                TopologyConfiguration.from_dict(config) if config is not None else None
            ),
            imported_at=data.get("importedAt"),
            exported_at=data.get("exportedAt"),
            export_version=data.get("exportVersion"),
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
            "configuration": (
                self.configuration.to_dict() if self.configuration is not None else None
            ),
        }
        for key, value in (
            ("importedAt", self.imported_at),
            ("exportedAt", self.exported_at),
            ("exportVersion", self.export_version),
        ):
            if value is not None:
                out[key] = value
        return out
