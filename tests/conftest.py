"""Shared pytest fixtures and record builders."""

from __future__ import annotations

import logging
from copy import deepcopy
from typing import Any, Dict

import pytest

from fabricmetrics.logging import set_global_log_level


def build_config(**overrides: Any) -> Dict[str, Any]:
    """Return a current-shape camelCase configuration with sensible defaults.

    Keyword arguments replace top-level keys of the record.
    """
    config: Dict[str, Any] = {
        "numSpines": 4,
        "numLeafs": 8,
        "numTiers": 2,
        "spineConfig": {"portCount": 32, "portSpeed": "100G", "breakoutMode": "1x100G"},
        "leafConfig": {
            "portCount": 48,
            "downlinkSpeed": "10G",
            "breakoutMode": "1x10G",
        },
        "breakoutOptions": {
            "100G": [
                {"type": "1x100G", "factor": 1},
                {"type": "4x25G", "factor": 4},
            ],
            "800G": [
                {"type": "1x800G", "factor": 1},
                {"type": "2x400G", "factor": 2},
                {"type": "4x200G", "factor": 4},
            ],
            "10G": [{"type": "1x10G", "factor": 1}],
        },
        "switchCost": {"spine": 40000, "leaf": 10000},
        "opticsCost": {"100G": 200, "200G": 600, "400G": 1000},
        "powerUsage": {
            "spine": 500,
            "leaf": 300,
            "optics": {"100G": 4, "200G": 8, "400G": 12},
        },
        "latencyParameters": {"switchLatency": 0.5, "fiberLatency": 5},
        "rackSpaceParameters": {"spineRackUnits": 2, "leafRackUnits": 1},
    }
    config.update(deepcopy(overrides))
    return config


def build_legacy_config(**overrides: Any) -> Dict[str, Any]:
    """Return a legacy-shape configuration (``linkTypes`` plus list breakouts)."""
    config: Dict[str, Any] = {
        "numSpines": 2,
        "numLeafs": 4,
        "numTiers": 2,
        "linkTypes": [{"type": "100G", "count": 2}, {"type": "400G", "count": 1}],
        "breakoutOptions": [{"type": "4x100G", "enabled": True}],
        "switchCost": {"spine": 20000, "leaf": 8000},
        "opticsCost": {"100G": 100, "400G": 1000},
        "powerUsage": {"spine": 500, "leaf": 300, "optics": {"100G": 5, "400G": 15}},
        "latencyParameters": {"switchLatency": 1.0, "fiberLatency": 5},
        "rackSpaceParameters": {"spineRackUnits": 2, "leafRackUnits": 1},
    }
    config.update(deepcopy(overrides))
    return config


def build_topology(name: str = "fabric", **config_overrides: Any) -> Dict[str, Any]:
    return {
        "id": f"id-{name}",
        "name": name,
        "description": "",
        "createdAt": "2024-01-01T00:00:00Z",
        "updatedAt": "2024-01-01T00:00:00Z",
        "configuration": build_config(**config_overrides),
    }


@pytest.fixture(autouse=True)
def _restore_log_level():
    yield
    set_global_log_level(logging.INFO)


@pytest.fixture
def make_config():
    return build_config


@pytest.fixture
def make_legacy_config():
    return build_legacy_config


@pytest.fixture
def make_topology():
    return build_topology
