"""Compose per-metric calculators into full results and batch comparisons.

`calculate_all_metrics` normalizes a topology's configuration once and hands
the normalized value to every calculator. `compare_topologies` maps it over a
list, preserving input order, and fails on the first topology that cannot be
computed instead of dropping it.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Any, List, Mapping, Optional, Sequence, Union

from fabricmetrics.calc import (
    calculate_cabling,
    calculate_cost,
    calculate_device_count,
    calculate_latency,
    calculate_oversubscription,
    calculate_power_usage,
    calculate_rack_space,
)
from fabricmetrics.logging import get_logger
from fabricmetrics.model.metrics import ComparisonResult, TopologyMetrics
from fabricmetrics.model.topology import Topology
from fabricmetrics.normalize import normalize_configuration

logger = get_logger(__name__)

TopologyInput = Union[Topology, Mapping[str, Any]]


class TopologyComparisonError(RuntimeError):
    """Raised when one topology of a comparison batch cannot be computed.

    Attributes:
        index: Position of the failing topology in the input sequence.
        topology_id: Identifier of the failing topology.
        topology_name: Display name of the failing topology.
    """

    def __init__(
        self, index: int, topology_id: str, topology_name: str, reason: str
    ) -> None:
        self.index = index
        self.topology_id = topology_id
        self.topology_name = topology_name
        super().__init__(
            f"Cannot compute metrics for topology #{index} "
            f"(id={topology_id!r}, name={topology_name!r}): {reason}"
        )


def _as_topology(topology: TopologyInput) -> Topology:
    if isinstance(topology, Topology):
        return topology
    return Topology.from_dict(topology)


def calculate_all_metrics(
    topology: Optional[TopologyInput],
) -> Optional[TopologyMetrics]:
    """Compute every metric of one topology.

    Args:
        topology: A `Topology` or its camelCase record.

    Returns:
        A new `TopologyMetrics`, or None when the topology or its
        configuration is missing. The input is not modified.
    """
    if topology is None:
        return None
    topo = _as_topology(topology)
    if topo.configuration is None:
        logger.debug("Topology %r has no configuration; no metrics", topo.name)
        return None

    cfg = normalize_configuration(topo.configuration)
    return TopologyMetrics(
        device_count=calculate_device_count(cfg),
        cost=calculate_cost(cfg),
        power=calculate_power_usage(cfg),
        latency=calculate_latency(cfg),
        oversubscription=calculate_oversubscription(cfg),
        rack_space=calculate_rack_space(cfg),
        cabling=calculate_cabling(cfg),
    )


def _compare_one(index: int, topology: TopologyInput) -> ComparisonResult:
    try:
        topo = _as_topology(topology)
    except (TypeError, ValueError) as exc:
        raw = topology if isinstance(topology, Mapping) else {}
        raise TopologyComparisonError(
            index, str(raw.get("id", "")), str(raw.get("name", "")), str(exc)
        ) from exc

    try:
        metrics = calculate_all_metrics(topo)
    except Exception as exc:
        raise TopologyComparisonError(index, topo.id, topo.name, str(exc)) from exc
    if metrics is None:
        raise TopologyComparisonError(
            index, topo.id, topo.name, "topology has no configuration"
        )
    return ComparisonResult(id=topo.id, name=topo.name, metrics=metrics)


def compare_topologies(
    topologies: Optional[Sequence[TopologyInput]], parallelism: int = 1
) -> Optional[List[ComparisonResult]]:
    """Compute metrics for several topologies side by side.

    Args:
        topologies: Topologies to compare.
        parallelism: Number of worker threads; 1 computes serially.

    Returns:
        One `ComparisonResult` per topology in input order, or None when
        ``topologies`` is empty or None.

    Raises:
        TopologyComparisonError: For the first topology (in input order)
            whose metrics cannot be computed, including one without a
            configuration. The underlying error is chained as the cause.
    """
    if not topologies:
        return None

    items = list(topologies)
    logger.info(
        "Comparing %d topologies (parallelism=%d)", len(items), max(1, parallelism)
    )

    if parallelism > 1:
        # Parallel execution
        with ThreadPoolExecutor(max_workers=parallelism) as executor:
            futures = [
                executor.submit(_compare_one, index, topology)
                for index, topology in enumerate(items)
            ]
            # Collect in submission order so the first failure by index wins
            results = [future.result() for future in futures]
    else:
        # Serial execution
        results = [
            _compare_one(index, topology) for index, topology in enumerate(items)
        ]

    logger.info("Compared %d topologies", len(results))
    return results
