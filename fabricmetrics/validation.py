"""Advisory checks on a configuration.

The calculators never call these functions and accept any configuration;
the checks only report what a planner would consider inconsistent.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from fabricmetrics.config import ENGINE_CONFIG
from fabricmetrics.model.topology import TopologyConfiguration
from fabricmetrics.normalize import (
    ConfigInput,
    NormalizedConfiguration,
    normalize_configuration,
)

VALID_TIERS = (1, 2, 3)


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    error: Optional[str] = None


def _parallel_links_error(cfg: NormalizedConfiguration) -> Optional[str]:
    if not cfg.parallel_links_enabled:
        return None
    required = cfg.parallel_links_per_spine * cfg.num_spines
    available = cfg.leaf.port_count or ENGINE_CONFIG.fallback_leaf_port_count
    if required > available:
        return (
            f"Parallel links need {required} uplink ports per leaf "
            f"({cfg.parallel_links_per_spine} x {cfg.num_spines} spines) but "
            f"leaves only have {available} ports"
        )
    return None


def validate_parallel_links(config: ConfigInput) -> ValidationResult:
    """Check that each leaf has enough ports for its parallel spine links.

    Args:
        config: Configuration in any accepted form.

    Returns:
        ``ValidationResult(True)`` when parallel links are disabled or
        ``links_per_spine * numSpines`` fits into the leaf port count (48
        when unset), otherwise a result carrying a message with
        the required and available ports.
    """
    error = _parallel_links_error(normalize_configuration(config))
    return ValidationResult(valid=error is None, error=error)


def validate_configuration(config: ConfigInput) -> List[str]:
    """Return human-readable problems with ``config``; empty when none.

    Checks leaf count, tier count, tier/spine consistency, breakout factors
    and the parallel-link port budget. Never raises for a parseable record.
    """
    cfg = normalize_configuration(config)
    problems: List[str] = []

    if cfg.num_spines < 0:
        problems.append(f"numSpines must be >= 0, got {cfg.num_spines}")
    if cfg.num_leafs < 2:
        problems.append(f"numLeafs must be >= 2, got {cfg.num_leafs}")
    if cfg.num_tiers not in VALID_TIERS:
        problems.append(f"numTiers must be one of 1, 2, 3, got {cfg.num_tiers}")
    elif cfg.num_tiers == 1 and cfg.num_spines != 0:
        problems.append("A single-tier fabric must not have spines")
    elif cfg.num_tiers > 1 and cfg.num_spines < 1:
        problems.append(f"A {cfg.num_tiers}-tier fabric needs at least one spine")

    # Factors below 1 were already clamped; flag them from the source record
    if not isinstance(config, NormalizedConfiguration):
        problems.extend(_raw_factor_problems(config))

    if cfg.num_spines > 0:
        error = _parallel_links_error(cfg)
        if error:
            problems.append(error)
    return problems


def _raw_factor_problems(config: ConfigInput) -> List[str]:
    raw = (
        config
        if isinstance(config, TopologyConfiguration)
        else TopologyConfiguration.from_dict(config)
    )
    if not isinstance(raw.breakout_options, dict):
        return []
    return [
        f"Breakout option {option.type} for {speed} has factor "
        f"{option.factor}; factors must be >= 1"
        for speed, options in raw.breakout_options.items()
        for option in options
        if option.factor < 1
    ]
