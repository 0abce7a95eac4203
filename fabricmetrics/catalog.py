"""Device and DeviceCatalog classes for switch cost/power lookups."""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field, replace
from functools import lru_cache
from importlib import resources
from typing import Any, Dict, List, Mapping, Optional

import yaml

from fabricmetrics.logging import get_logger
from fabricmetrics.model.topology import (
    DeviceSelection,
    RoleSelection,
    TopologyConfiguration,
)
from fabricmetrics.utils.yaml_utils import normalize_speed_label

logger = get_logger(__name__)

ROLES = ("spine", "leaf")


@dataclass(frozen=True)
class PortConfiguration:
    """A group of identical ports on a device.

    Attributes:
        count: Number of ports in the group.
        speed: Port speed label, e.g. "400G".
        breakout_options: Breakout labels the ports support, e.g. "4x100G".
    """

    count: int
    speed: str
    breakout_options: tuple = ()


@dataclass
class Device:
    """A switch model that can fill the spine and/or leaf role.

    Attributes:
        id (str): Catalog identifier, e.g. "arista-7800r3".
        manufacturer (str): Vendor name.
        model (str): Vendor model name.
        description (str): Human-readable description.
        port_configurations (List[PortConfiguration]): Port groups.
        power_typical (float): Typical power draw in watts.
        power_max (float): Maximum power draw in watts.
        rack_units (int): Height in rack units.
        cost (float): Unit price.
        thermal_output (float): Heat output in BTU/hr.
        weight (float): Weight in kg.
        downlink_options (List[str]): Server-facing speeds (leaf-capable devices).
        roles (List[str]): Roles the device may fill; derived when empty.
        attrs (Dict[str, Any]): Extra metadata such as dimensions.
    """

    id: str
    manufacturer: str = ""
    model: str = ""
    description: str = ""
    port_configurations: List[PortConfiguration] = field(default_factory=list)

    power_typical: float = 0.0
    power_max: float = 0.0

    rack_units: int = 1
    cost: float = 0.0
    thermal_output: float = 0.0
    weight: float = 0.0

    downlink_options: List[str] = field(default_factory=list)
    roles: List[str] = field(default_factory=list)
    attrs: Dict[str, Any] = field(default_factory=dict)

    def device_roles(self) -> List[str]:
        """Roles this device can fill.

        Explicit ``roles`` win. Otherwise every device can be a spine and a
        device with downlink options can also be a leaf.
        """
        if self.roles:
            return list(self.roles)
        roles = ["spine"]
        if self.downlink_options:
            roles.append("leaf")
        return roles

    def can_fulfill(self, role: str) -> bool:
        return role in self.device_roles()

    def total_ports(self) -> int:
        return sum(pc.count for pc in self.port_configurations)

    def as_dict(self) -> Dict[str, Any]:
        """Returns a dictionary containing all properties of this device."""
        return {
            "id": self.id,
            "manufacturer": self.manufacturer,
            "model": self.model,
            "description": self.description,
            "port_configurations": [
                {
                    "count": pc.count,
                    "speed": pc.speed,
                    "breakout_options": list(pc.breakout_options),
                }
                for pc in self.port_configurations
            ],
            "power_typical": self.power_typical,
            "power_max": self.power_max,
            "rack_units": self.rack_units,
            "cost": self.cost,
            "thermal_output": self.thermal_output,
            "weight": self.weight,
            "downlink_options": list(self.downlink_options),
            "roles": self.device_roles(),
            "attrs": dict(self.attrs),
        }


@dataclass
class DeviceCatalog:
    """Holds a collection of Devices keyed by id.

    Example (YAML-like):
        devices:
          nvidia-spectrum4:
            manufacturer: NVIDIA
            model: Spectrum-4
            roles: [spine]
            port_configurations:
              - {count: 64, speed: 800G, breakout_options: [1x800G, 4x200G]}
            power_typical: 1000
            rack_units: 2
            cost: 50000
    """

    devices: Dict[str, Device] = field(default_factory=dict)

    def get(self, device_id: str) -> Optional[Device]:
        """Retrieves a Device by id, or None if not found."""
        return self.devices.get(device_id)

    def by_role(self, role: str) -> List[Device]:
        """Devices that can fill ``role``, in catalog order."""
        return [d for d in self.devices.values() if d.can_fulfill(role)]

    def by_manufacturer(
        self, manufacturer: str, role: Optional[str] = None
    ) -> List[Device]:
        devices = self.by_role(role) if role else list(self.devices.values())
        return [d for d in devices if d.manufacturer == manufacturer]

    def manufacturers(self, role: Optional[str] = None) -> List[str]:
        """Distinct manufacturers, in first-seen order."""
        devices = self.by_role(role) if role else self.devices.values()
        seen: Dict[str, None] = {}
        for device in devices:
            seen.setdefault(device.manufacturer, None)
        return list(seen)

    def merge(self, other: DeviceCatalog, override: bool = True) -> DeviceCatalog:
        """Merges another catalog into this one.

        Args:
            other (DeviceCatalog): Catalog to merge into this one.
            override (bool): If True, devices in `other` replace existing ones.

        Returns:
            DeviceCatalog: This instance, updated in place.
        """
        for device_id, device in other.devices.items():
            if override or device_id not in self.devices:
                self.devices[device_id] = device
        return self

    def clone(self) -> DeviceCatalog:
        return DeviceCatalog(devices=deepcopy(self.devices))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DeviceCatalog:
        """Constructs a DeviceCatalog from raw device definitions keyed by id.

        Raises:
            ValueError: If a definition is not a mapping.
        """
        devices: Dict[str, Device] = {}
        for device_id, definition in data.items():
            if not isinstance(definition, Mapping):
                raise ValueError(f"Device '{device_id}' must be a mapping")
            devices[str(device_id)] = cls._build_device(str(device_id), definition)
        return DeviceCatalog(devices=devices)

    @classmethod
    def _build_device(cls, device_id: str, definition: Mapping[str, Any]) -> Device:
        ports = [
            PortConfiguration(
                count=int(pc.get("count", 0)),
                speed=normalize_speed_label(pc.get("speed", "")),
                breakout_options=tuple(
                    str(b) for b in pc.get("breakout_options", ())
                ),
            )
            for pc in definition.get("port_configurations", ())
        ]

        recognized_keys = {
            "manufacturer",
            "model",
            "description",
            "port_configurations",
            "power_typical",
            "power_max",
            "rack_units",
            "cost",
            "thermal_output",
            "weight",
            "downlink_options",
            "roles",
            "attrs",
        }
        attrs: Dict[str, Any] = dict(definition.get("attrs", {}))
        attrs.update(
            {str(k): v for k, v in definition.items() if k not in recognized_keys}
        )

        roles = [str(r) for r in definition.get("roles", ())]
        unknown = set(roles) - set(ROLES)
        if unknown:
            raise ValueError(
                f"Device '{device_id}' has unknown role(s): {sorted(unknown)}"
            )

        return Device(
            id=device_id,
            manufacturer=str(definition.get("manufacturer", "")),
            model=str(definition.get("model", "")),
            description=str(definition.get("description", "")),
            port_configurations=ports,
            power_typical=float(definition.get("power_typical", 0.0)),
            power_max=float(definition.get("power_max", 0.0)),
            rack_units=int(definition.get("rack_units", 1)),
            cost=float(definition.get("cost", 0.0)),
            thermal_output=float(definition.get("thermal_output", 0.0)),
            weight=float(definition.get("weight", 0.0)),
            downlink_options=[
                normalize_speed_label(s) for s in definition.get("downlink_options", ())
            ],
            roles=roles,
            attrs=attrs,
        )

    @classmethod
    def from_yaml(cls, yaml_str: str) -> DeviceCatalog:
        """Constructs a DeviceCatalog from a YAML string. A top-level 'devices'
        key is used when present; otherwise the whole document is treated as
        device definitions.

        Raises:
            ValueError: If the top-level or 'devices' is not a dictionary.
        """
        data = yaml.safe_load(yaml_str)
        if not isinstance(data, dict):
            raise ValueError("Top-level must be a dict in device catalog YAML.")

        devices_data = data.get("devices") or data
        if not isinstance(devices_data, dict):
            raise ValueError("'devices' must be a dict if present.")

        return cls.from_dict(devices_data)


@lru_cache(maxsize=1)
def _builtin_catalog_text() -> str:
    return (
        resources.files("fabricmetrics.data")
        .joinpath("devices.yaml")
        .read_text(encoding="utf-8")
    )


def builtin_catalog() -> DeviceCatalog:
    """Return a fresh copy of the packaged device catalog."""
    return DeviceCatalog.from_yaml(_builtin_catalog_text())


def select_device(
    config: TopologyConfiguration,
    role: str,
    device_id: str,
    catalog: Optional[DeviceCatalog] = None,
    use_device_defaults: bool = True,
) -> TopologyConfiguration:
    """Return a copy of ``config`` with ``device_id`` selected for ``role``.

    With ``use_device_defaults`` the device's cost and typical power become
    the unit cost/power overrides for that role; otherwise any existing
    overrides are kept.

    Args:
        config: Configuration to start from; not modified.
        role: "spine" or "leaf".
        device_id: Catalog identifier.
        catalog: Catalog to look the device up in; the built-in one by default.
        use_device_defaults: Whether to apply the device's figures.

    Returns:
        A new `TopologyConfiguration`.

    Raises:
        ValueError: If the role is unknown, the device is not in the catalog
            or the device cannot fill the role.
    """
    if role not in ROLES:
        raise ValueError(f"Unknown role '{role}'; expected one of {ROLES}")
    catalog = catalog if catalog is not None else builtin_catalog()
    device = catalog.get(device_id)
    if device is None:
        raise ValueError(f"Device '{device_id}' not found in catalog")
    if not device.can_fulfill(role):
        raise ValueError(f"Device '{device_id}' cannot be used as a {role}")

    current = deepcopy(config.device_selection) or DeviceSelection()
    previous: Optional[RoleSelection] = getattr(current, role)
    if use_device_defaults:
        chosen = RoleSelection(
            device_id=device_id,
            use_default_config=True,
            cost_override=device.cost,
            power_override=device.power_typical,
        )
    else:
        chosen = RoleSelection(
            device_id=device_id,
            use_default_config=False,
            cost_override=previous.cost_override if previous else None,
            power_override=previous.power_override if previous else None,
        )
    setattr(current, role, chosen)

    logger.debug(
        "Selected %s for %s (cost=%s power=%s)",
        device_id,
        role,
        chosen.cost_override,
        chosen.power_override,
    )
    return replace(deepcopy(config), device_selection=current)
