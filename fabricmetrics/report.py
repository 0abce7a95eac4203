"""Tabular view of topology comparisons."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

import pandas as pd

from fabricmetrics.model.metrics import ComparisonResult

COLUMNS = [
    "id",
    "name",
    "spines",
    "leafs",
    "devices",
    "switch_cost",
    "optics_cost",
    "total_cost",
    "total_power_w",
    "latency",
    "hops",
    "oversubscription",
    "oversubscription_value",
    "rack_units",
    "racks",
    "standard_cables",
    "breakout_cables",
    "total_cables",
]


def _row(result: ComparisonResult) -> Dict[str, Any]:
    m = result.metrics
    return {
        "id": result.id,
        "name": result.name,
        "spines": m.device_count.spines,
        "leafs": m.device_count.leafs,
        "devices": m.device_count.total,
        "switch_cost": m.cost.switches.total,
        "optics_cost": m.cost.optics,
        "total_cost": m.cost.total,
        "total_power_w": m.power.total,
        "latency": m.latency.total,
        "hops": m.latency.hops,
        "oversubscription": m.oversubscription.ratio,
        "oversubscription_value": m.oversubscription.ratio_value,
        "rack_units": m.rack_space.total_rack_units,
        "racks": m.rack_space.racks_needed,
        "standard_cables": m.cabling.standard,
        "breakout_cables": m.cabling.breakout,
        "total_cables": m.cabling.total,
    }


def comparison_frame(results: Optional[Sequence[ComparisonResult]]) -> pd.DataFrame:
    """Return one row per compared topology, in input order.

    ``oversubscription`` holds the formatted ratio (possibly the undefined
    marker); ``oversubscription_value`` holds the number, NaN when undefined.
    An empty or None input gives an empty frame with the same columns.
    """
    rows: List[Dict[str, Any]] = [_row(r) for r in results or ()]
    df = pd.DataFrame(rows, columns=COLUMNS)
    df["oversubscription_value"] = pd.to_numeric(
        df["oversubscription_value"], errors="coerce"
    )
    return df
