"""Resolve a possibly partial or legacy configuration into one canonical value.

`normalize_configuration` is the only place that inspects which schema a
record uses, fills in missing spine/leaf settings, applies per-device unit
overrides and resolves breakout modes. Calculators read the resulting
`NormalizedConfiguration` and never look at the raw record again.

The input is never modified; every collection in the result is a fresh copy.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple, Union

from fabricmetrics.breakout import BreakoutResolution, resolve_breakout
from fabricmetrics.config import ENGINE_CONFIG
from fabricmetrics.logging import get_logger
from fabricmetrics.model.topology import (
    BreakoutOption,
    LeafConfig,
    LegacyBreakoutOption,
    LinkType,
    RoleSelection,
    SpineConfig,
    TopologyConfiguration,
)

logger = get_logger(__name__)


class ConfigSchema(str, Enum):
    """Record shape a configuration was written in."""

    current = "current"
    legacy = "legacy"


@dataclass(frozen=True)
class NormalizedConfiguration:
    """Complete, defaulted configuration tagged with its schema.

    Attributes:
        schema: `ConfigSchema.current` or `ConfigSchema.legacy`.
        num_spines: Spine switch count.
        num_leafs: Leaf switch count.
        num_tiers: Fabric tiers (1 means a leaf-only fabric).
        spine: Spine port layout (defaulted when absent).
        leaf: Leaf port layout (defaulted when absent).
        breakout_options: Current-schema options per speed, factors >= 1.
        legacy_breakout_options: Legacy ``{type, enabled}`` flags.
        link_types: Legacy link declarations.
        spine_breakout: Resolved spine breakout (factor 1 for legacy records).
        leaf_breakout: Resolved leaf downlink breakout.
        spine_unit_cost: Cost of one spine, after device overrides.
        leaf_unit_cost: Cost of one leaf, after device overrides.
        spine_unit_power: Watts of one spine, after device overrides.
        leaf_unit_power: Watts of one leaf, after device overrides.
        optics_cost: Price of one optic per speed label.
        optics_power: Watts of one optic per speed label.
        switch_latency: Per-switch latency.
        fiber_latency: Fiber latency per km.
        spine_rack_units: Rack units of one spine.
        leaf_rack_units: Rack units of one leaf.
        parallel_links_per_spine: Links per spine/leaf adjacency (>= 1).
        parallel_links_enabled: Whether parallel links were requested.
    """

    schema: ConfigSchema
    num_spines: int
    num_leafs: int
    num_tiers: int
    spine: SpineConfig
    leaf: LeafConfig
    breakout_options: Mapping[str, Tuple[BreakoutOption, ...]]
    legacy_breakout_options: Tuple[LegacyBreakoutOption, ...]
    link_types: Tuple[LinkType, ...]
    spine_breakout: BreakoutResolution
    leaf_breakout: BreakoutResolution
    spine_unit_cost: float
    leaf_unit_cost: float
    spine_unit_power: float
    leaf_unit_power: float
    optics_cost: Mapping[str, float]
    optics_power: Mapping[str, float]
    switch_latency: float
    fiber_latency: float
    spine_rack_units: int
    leaf_rack_units: int
    parallel_links_per_spine: int = 1
    parallel_links_enabled: bool = False

    @property
    def is_legacy(self) -> bool:
        return self.schema is ConfigSchema.legacy

    @property
    def logical_links(self) -> int:
        """Spine/leaf links of the full mesh, including parallel links."""
        return self.num_spines * self.num_leafs * self.parallel_links_per_spine


ConfigInput = Union[TopologyConfiguration, NormalizedConfiguration, Mapping[str, Any]]


def classify_schema(config: TopologyConfiguration) -> ConfigSchema:
    """Decide whether ``config`` is a current or a legacy record.

    A ``spineConfig`` always means current; list-shaped ``breakoutOptions``
    then match no speed and resolve to factor 1. Without a ``spineConfig``,
    ``linkTypes`` or list-shaped ``breakoutOptions`` mean legacy.
    """
    if config.spine_config is not None:
        return ConfigSchema.current
    if config.link_types is not None or isinstance(config.breakout_options, list):
        return ConfigSchema.legacy
    return ConfigSchema.current


def auto_parallel_links(num_spines: int, leaf_port_count: int) -> int:
    """Parallel links per spine that fit the leaf's uplink share of ports."""
    if num_spines <= 0:
        return 1
    downlink_ports = math.floor(
        leaf_port_count * ENGINE_CONFIG.auto_parallel_downlink_share
    )
    available_uplinks = leaf_port_count - downlink_ports
    return max(1, available_uplinks // num_spines)


def parallel_links_per_spine(config: TopologyConfiguration) -> int:
    """Links between each spine/leaf pair; 1 unless the feature is enabled."""
    if not config.parallel_links_enabled:
        return 1
    manual = config.parallel_links_per_spine
    if config.parallel_links_mode == "manual" and manual:
        return manual
    leaf_ports = (
        config.leaf_config.port_count if config.leaf_config is not None else 0
    ) or ENGINE_CONFIG.fallback_leaf_port_count
    return auto_parallel_links(config.num_spines, leaf_ports)


def _default_spine() -> SpineConfig:
    return SpineConfig(
        port_count=ENGINE_CONFIG.default_spine_port_count,
        port_speed=ENGINE_CONFIG.default_spine_port_speed,
        breakout_mode=ENGINE_CONFIG.default_spine_breakout_mode,
    )


def _default_leaf() -> LeafConfig:
    return LeafConfig(
        port_count=ENGINE_CONFIG.default_leaf_port_count,
        downlink_speed=ENGINE_CONFIG.default_leaf_downlink_speed,
        breakout_mode=ENGINE_CONFIG.default_leaf_breakout_mode,
    )


def _sanitized_options(
    config: TopologyConfiguration,
) -> Mapping[str, Tuple[BreakoutOption, ...]]:
    raw = config.breakout_options
    if not isinstance(raw, Mapping):
        return MappingProxyType({})
    out = {}
    for speed, options in raw.items():
        cleaned = []
        for option in options:
            if option.factor < 1:
                logger.warning(
                    "Breakout option %s for %s has factor %d; using 1",
                    option.type,
                    speed,
                    option.factor,
                )
                option = BreakoutOption(type=option.type, factor=1)
            cleaned.append(option)
        out[speed] = tuple(cleaned)
    return MappingProxyType(out)


def _unit(selection: Optional[RoleSelection], attr: str, default: float) -> float:
    if selection is None:
        return default
    value = getattr(selection, attr)
    return default if value is None else value


def normalize_configuration(config: ConfigInput) -> NormalizedConfiguration:
    """Return a complete, schema-tagged copy of ``config``.

    Args:
        config: A `TopologyConfiguration`, a camelCase record in either
            schema, or an already normalized configuration (returned as is).

    Returns:
        New `NormalizedConfiguration`; the input is not modified.

    Raises:
        TypeError: If ``config`` is none of the accepted types.
    """
    if isinstance(config, NormalizedConfiguration):
        return config
    if isinstance(config, Mapping):
        config = TopologyConfiguration.from_dict(config)
    if not isinstance(config, TopologyConfiguration):
        raise TypeError(
            f"Unsupported configuration type: {type(config).__name__}"
        )

    schema = classify_schema(config)
    spine = (
        SpineConfig(**vars(config.spine_config))
        if config.spine_config is not None
        else _default_spine()
    )
    leaf = (
        LeafConfig(**vars(config.leaf_config))
        if config.leaf_config is not None
        else _default_leaf()
    )

    options = _sanitized_options(config)
    legacy_options = (
        tuple(config.breakout_options)
        if isinstance(config.breakout_options, list)
        else ()
    )

    if schema is ConfigSchema.current:
        spine_breakout = resolve_breakout(
            options, spine.port_speed, spine.breakout_mode
        )
    else:
        spine_breakout = BreakoutResolution(
            factor=1, wire_speed=spine.port_speed, matched=False
        )
    leaf_breakout = resolve_breakout(options, leaf.downlink_speed, leaf.breakout_mode)

    selection = config.device_selection
    spine_sel = selection.spine if selection is not None else None
    leaf_sel = selection.leaf if selection is not None else None

    normalized = NormalizedConfiguration(
        schema=schema,
        num_spines=config.num_spines,
        num_leafs=config.num_leafs,
        num_tiers=config.num_tiers,
        spine=spine,
        leaf=leaf,
        breakout_options=options,
        legacy_breakout_options=legacy_options,
        link_types=tuple(config.link_types or ()),
        spine_breakout=spine_breakout,
        leaf_breakout=leaf_breakout,
        spine_unit_cost=_unit(spine_sel, "cost_override", config.switch_cost.spine),
        leaf_unit_cost=_unit(leaf_sel, "cost_override", config.switch_cost.leaf),
        spine_unit_power=_unit(spine_sel, "power_override", config.power_usage.spine),
        leaf_unit_power=_unit(leaf_sel, "power_override", config.power_usage.leaf),
        optics_cost=MappingProxyType(dict(config.optics_cost)),
        optics_power=MappingProxyType(dict(config.power_usage.optics)),
        switch_latency=config.latency_parameters.switch_latency,
        fiber_latency=config.latency_parameters.fiber_latency,
        spine_rack_units=config.rack_space_parameters.spine_rack_units,
        leaf_rack_units=config.rack_space_parameters.leaf_rack_units,
        parallel_links_per_spine=parallel_links_per_spine(config),
        parallel_links_enabled=bool(config.parallel_links_enabled),
    )
    logger.debug(
        "Normalized %s configuration: spines=%d leafs=%d tiers=%d "
        "spine_breakout=%d leaf_breakout=%d parallel_links=%d",
        schema.value,
        normalized.num_spines,
        normalized.num_leafs,
        normalized.num_tiers,
        spine_breakout.factor,
        leaf_breakout.factor,
        normalized.parallel_links_per_spine,
    )
    return normalized
