"""YAML/JSON topology record loader with schema validation.

Topology records exported by the storage side are JSON; YAML is a superset,
so one entrypoint parses both. Records are normalized where YAML is loose
(bare integer speed keys, unquoted timestamps), validated against the
packaged JSON schema and returned as `Topology` objects. Only strings and
mappings are handled here; reading files is left to the caller.
"""

from __future__ import annotations

import datetime as _dt
import json
from functools import lru_cache
from importlib import resources
from typing import Any, Dict, Mapping

import jsonschema
import yaml

from fabricmetrics.logging import get_logger
from fabricmetrics.model.topology import Topology
from fabricmetrics.utils.yaml_utils import normalize_speed_keys

logger = get_logger(__name__)

_TIMESTAMP_KEYS = ("createdAt", "updatedAt", "importedAt", "exportedAt")


@lru_cache(maxsize=1)
def topology_schema() -> Dict[str, Any]:
    """Return the packaged topology JSON schema."""
    try:
        with (
            resources.files("fabricmetrics.schemas")
            .joinpath("topology.json")
            .open("r", encoding="utf-8")
        ) as f:
            return json.load(f)
    except OSError as exc:  # pragma: no cover
        raise RuntimeError(
            "Failed to locate packaged schema 'fabricmetrics/schemas/topology.json'."
        ) from exc


def _normalize_record(data: Mapping[str, Any]) -> Dict[str, Any]:
    record = dict(data)
    for key in _TIMESTAMP_KEYS:
        value = record.get(key)
        if isinstance(value, (_dt.date, _dt.datetime)):
            record[key] = value.isoformat()
    if record.get("exportVersion") is not None:
        record["exportVersion"] = str(record["exportVersion"])

    config = record.get("configuration")
    if not isinstance(config, Mapping):
        return record
    config = dict(config)
    if isinstance(config.get("opticsCost"), Mapping):
        config["opticsCost"] = normalize_speed_keys(config["opticsCost"])
    power = config.get("powerUsage")
    if isinstance(power, Mapping) and isinstance(power.get("optics"), Mapping):
        config["powerUsage"] = dict(power, optics=normalize_speed_keys(power["optics"]))
    if isinstance(config.get("breakoutOptions"), Mapping):
        config["breakoutOptions"] = normalize_speed_keys(config["breakoutOptions"])
    record["configuration"] = config
    return record


def load_topology_dict(data: Mapping[str, Any]) -> Topology:
    """Validate a topology record and build a `Topology`.

    Args:
        data: camelCase record in the current or legacy shape; not modified.

    Returns:
        The parsed topology.

    Raises:
        ValueError: If ``data`` is not a mapping or does not match the schema.
            The message names the offending path.
    """
    if not isinstance(data, Mapping):
        raise ValueError("A topology record must be a mapping at top-level.")

    record = _normalize_record(data)
    try:
        jsonschema.validate(record, topology_schema())
    except jsonschema.ValidationError as exc:
        path = "/".join(str(p) for p in exc.absolute_path) or "<root>"
        raise ValueError(f"Invalid topology record at '{path}': {exc.message}") from exc

    topology = Topology.from_dict(record)
    logger.debug("Loaded topology %r (id=%r)", topology.name, topology.id)
    return topology


def load_topology_yaml(yaml_str: str) -> Topology:
    """Parse, normalize and validate a topology record from YAML or JSON text.

    Raises:
        ValueError: If the text does not hold a valid topology record.
    """
    try:
        data = yaml.safe_load(yaml_str)
    except yaml.YAMLError as exc:
        raise ValueError(f"Topology record is not valid YAML: {exc}") from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("The provided YAML must map to a dictionary at top-level.")
    return load_topology_dict(data)


def dump_topology_yaml(topology: Topology) -> str:
    """Render ``topology`` as a YAML record that `load_topology_yaml` accepts.

    Raises:
        ValueError: If ``topology`` has no configuration.
    """
    if topology.configuration is None:
        raise ValueError(f"Topology {topology.name!r} has no configuration to dump")
    return yaml.safe_dump(topology.to_dict(), sort_keys=False, allow_unicode=True)
