"""Built-in topology templates for common data-center fabric designs.

Templates are starting points: `apply_template` copies a template's name,
description and configuration onto a topology while keeping its identity and
timestamps. Every call returns fresh objects, so callers may modify what they
get back.
"""

from __future__ import annotations

from copy import deepcopy
from dataclasses import replace
from typing import Any, Dict, List, Optional

from fabricmetrics.logging import get_logger
from fabricmetrics.model.topology import Topology

logger = get_logger(__name__)

_BASE_CONFIGURATION: Dict[str, Any] = {
    "numSpines": 2,
    "numLeafs": 4,
    "numTiers": 2,
    "spineConfig": {"portCount": 64, "portSpeed": "800G", "breakoutMode": "1x800G"},
    "leafConfig": {"portCount": 48, "downlinkSpeed": "100G", "breakoutMode": "1x100G"},
    "breakoutOptions": {
        "800G": [
            {"type": "1x800G", "factor": 1},
            {"type": "2x400G", "factor": 2},
            {"type": "4x200G", "factor": 4},
            {"type": "8x100G", "factor": 8},
        ],
        "400G": [
            {"type": "1x400G", "factor": 1},
            {"type": "2x200G", "factor": 2},
            {"type": "4x100G", "factor": 4},
            {"type": "8x50G", "factor": 8},
        ],
        "100G": [
            {"type": "1x100G", "factor": 1},
            {"type": "4x25G", "factor": 4},
        ],
    },
    "disjointedSpines": False,
    "railOptimized": False,
    "switchCost": {"spine": 15000, "leaf": 10000},
    "opticsCost": {"50G": 300, "100G": 500, "200G": 1000, "400G": 2000, "800G": 4000},
    "powerUsage": {
        "spine": 500,
        "leaf": 300,
        "optics": {"50G": 3, "100G": 5, "200G": 10, "400G": 15, "800G": 25},
    },
    # microseconds and microseconds per km
    "latencyParameters": {"switchLatency": 0.5, "fiberLatency": 5},
    "rackSpaceParameters": {"spineRackUnits": 2, "leafRackUnits": 1},
}


def _spine(port_speed: str, breakout_mode: str) -> Dict[str, Any]:
    return {"portCount": 64, "portSpeed": port_speed, "breakoutMode": breakout_mode}


def _leaf(port_count: int, downlink_speed: str) -> Dict[str, Any]:
    return {
        "portCount": port_count,
        "downlinkSpeed": downlink_speed,
        "breakoutMode": f"1x{downlink_speed}",
    }


# name, description, configuration overrides
_TEMPLATES = [
    (
        "Small Leaf-Spine",
        "A small leaf-spine topology with 2 spine switches and 4 leaf switches, "
        "suitable for small data centers or POCs.",
        {
            "numSpines": 2,
            "numLeafs": 4,
            "spineConfig": _spine("400G", "1x400G"),
            "leafConfig": _leaf(48, "25G"),
        },
    ),
    (
        "Medium Leaf-Spine",
        "A medium-sized leaf-spine topology with 4 spine switches and 16 leaf "
        "switches, suitable for medium-sized data centers.",
        {
            "numSpines": 4,
            "numLeafs": 16,
            "spineConfig": _spine("400G", "1x400G"),
            "leafConfig": _leaf(48, "100G"),
        },
    ),
    (
        "Large Leaf-Spine",
        "A large leaf-spine topology with 8 spine switches and 64 leaf switches, "
        "suitable for large data centers.",
        {
            "numSpines": 8,
            "numLeafs": 64,
            "spineConfig": _spine("800G", "1x800G"),
            "leafConfig": _leaf(64, "100G"),
        },
    ),
    (
        "3-Tier Clos",
        "A 3-tier Clos topology with super-spine, spine, and leaf layers, "
        "suitable for very large data centers.",
        {
            "numSpines": 8,
            "numLeafs": 32,
            "numTiers": 3,
            "spineConfig": _spine("800G", "1x800G"),
            "leafConfig": _leaf(64, "100G"),
        },
    ),
    (
        "High-Density Breakout",
        "A high-density topology using breakout cables to maximize port "
        "utilization.",
        {
            "numSpines": 4,
            "numLeafs": 32,
            "spineConfig": _spine("800G", "4x200G"),
            "leafConfig": _leaf(48, "100G"),
        },
    ),
    (
        "Disjointed Spines",
        "A topology with disjointed spine switches forming multiple independent "
        "fabrics.",
        {
            "numSpines": 4,
            "numLeafs": 16,
            "disjointedSpines": True,
            "spineConfig": _spine("400G", "1x400G"),
            "leafConfig": _leaf(48, "100G"),
        },
    ),
    (
        "Rail-Optimized",
        "A rail-optimized topology designed for efficient cabling and power "
        "distribution.",
        {
            "numSpines": 4,
            "numLeafs": 24,
            "railOptimized": True,
            "spineConfig": _spine("400G", "1x400G"),
            "leafConfig": _leaf(48, "100G"),
        },
    ),
    (
        "Rail-Only",
        "A single-tier, leaf-only fabric without spine switches.",
        {
            "numSpines": 0,
            "numLeafs": 8,
            "numTiers": 1,
            "railOptimized": True,
            "leafConfig": _leaf(64, "400G"),
        },
    ),
]


def _build(name: str, description: str, overrides: Dict[str, Any]) -> Topology:
    configuration = deepcopy(_BASE_CONFIGURATION)
    configuration.update(deepcopy(overrides))
    return Topology.from_dict(
        {"name": name, "description": description, "configuration": configuration}
    )


def get_builtin_templates() -> List[Topology]:
    """Return new `Topology` objects for every built-in template."""
    return [_build(*entry) for entry in _TEMPLATES]


def get_template(name: str) -> Optional[Topology]:
    """Return a new copy of the template called ``name``, or None."""
    for entry in _TEMPLATES:
        if entry[0] == name:
            return _build(*entry)
    return None


def apply_template(topology: Topology, name: str) -> Topology:
    """Return ``topology`` with the template's name, description and configuration.

    Args:
        topology: Topology to start from; not modified.
        name: Template name, e.g. "Medium Leaf-Spine".

    Returns:
        A new topology keeping ``topology``'s id and timestamps, or
        ``topology`` itself when no template has that name.
    """
    template = get_template(name)
    if template is None:
        logger.warning("Unknown template '%s'; topology left unchanged", name)
        return topology
    return replace(
        topology,
        name=template.name,
        description=template.description,
        configuration=template.configuration,
    )
