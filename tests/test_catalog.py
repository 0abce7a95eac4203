"""Tests for the device catalog and device selection."""

from textwrap import dedent

import pytest

from fabricmetrics.calc import calculate_cost, calculate_power_usage
from fabricmetrics.catalog import (
    Device,
    DeviceCatalog,
    PortConfiguration,
    builtin_catalog,
    select_device,
)
from fabricmetrics.model.topology import (
    DeviceSelection,
    RoleSelection,
    TopologyConfiguration,
)


@pytest.fixture
def catalog() -> DeviceCatalog:
    return builtin_catalog()


def test_builtin_catalog_contents(catalog) -> None:
    assert len(catalog.devices) == 8
    assert [d.id for d in catalog.by_role("spine")] == [
        "arista-7800r3",
        "cisco-8000",
        "juniper-qfx10008",
        "nvidia-spectrum4",
    ]
    assert catalog.manufacturers("leaf") == ["Arista", "Cisco", "Juniper", "NVIDIA"]

    spine = catalog.get("nvidia-spectrum4")
    assert spine.cost == 50000
    assert spine.power_typical == 1000
    assert spine.rack_units == 2
    assert spine.port_configurations[0] == PortConfiguration(
        32, "800G", ("1x800G", "2x400G", "4x200G", "8x100G")
    )
    assert spine.attrs["dimensions"]["depth"] == 52.0

    leaf = catalog.get("nvidia-spectrum3")
    assert "50G" in leaf.downlink_options
    assert leaf.can_fulfill("leaf")
    assert not leaf.can_fulfill("spine")


def test_builtin_catalog_is_a_fresh_copy(catalog) -> None:
    catalog.devices.clear()
    assert len(builtin_catalog().devices) == 8


def test_by_manufacturer(catalog) -> None:
    assert [d.id for d in catalog.by_manufacturer("Cisco")] == [
        "cisco-8000",
        "cisco-nexus-9364d",
    ]
    assert [d.id for d in catalog.by_manufacturer("Cisco", role="leaf")] == [
        "cisco-nexus-9364d"
    ]
    assert catalog.get("missing") is None


def test_roles_derived_without_explicit_list() -> None:
    lib = DeviceCatalog.from_yaml(
        dedent(
            """
            devices:
              flex:
                manufacturer: Acme
                downlink_options: [25, 100G]
              core:
                manufacturer: Acme
            """
        )
    )
    assert lib.get("flex").device_roles() == ["spine", "leaf"]
    assert lib.get("flex").downlink_options == ["25G", "100G"]
    assert lib.get("core").device_roles() == ["spine"]


def test_from_yaml_without_devices_key() -> None:
    lib = DeviceCatalog.from_yaml("sw1:\n  cost: 10\n  rack_units: 1\n")
    assert lib.get("sw1").cost == 10.0


@pytest.mark.parametrize(
    "text",
    ["- a\n", "devices: [1, 2]\n", "sw1: 3\n", "sw1:\n  roles: [core]\n"],
)
def test_from_yaml_errors(text) -> None:
    with pytest.raises(ValueError):
        DeviceCatalog.from_yaml(text)


def test_merge_and_clone(catalog) -> None:
    extra = DeviceCatalog(
        devices={
            "cisco-8000": Device(id="cisco-8000", cost=1.0),
            "new": Device(id="new"),
        }
    )
    clone = catalog.clone()

    clone.merge(extra, override=False)
    assert clone.get("cisco-8000").cost == 42000
    assert "new" in clone.devices

    clone.merge(extra)
    assert clone.get("cisco-8000").cost == 1.0
    assert catalog.get("cisco-8000").cost == 42000
    assert "new" not in catalog.devices


def test_as_dict(catalog) -> None:
    data = catalog.get("arista-7050x4").as_dict()
    assert data["roles"] == ["leaf"]
    assert data["port_configurations"][1]["breakout_options"] == ["1x100G", "4x25G"]


def test_select_device_applies_device_figures(make_config, catalog) -> None:
    config = TopologyConfiguration.from_dict(make_config())

    selected = select_device(config, "spine", "arista-7800r3", catalog)

    assert selected.device_selection.spine == RoleSelection(
        device_id="arista-7800r3",
        use_default_config=True,
        cost_override=45000,
        power_override=1200,
    )
    assert config.device_selection is None
    assert calculate_cost(selected).switches.spine == 4 * 45000
    assert calculate_power_usage(selected).switches.spine == 4 * 1200
    # Leaf figures untouched
    assert calculate_cost(selected).switches.leaf == 8 * 10000


def test_select_device_without_defaults_keeps_overrides(make_config) -> None:
    config = TopologyConfiguration.from_dict(make_config())
    config.device_selection = DeviceSelection(
        leaf=RoleSelection(device_id="old", cost_override=123.0)
    )

    selected = select_device(
        config, "leaf", "juniper-qfx5130", use_device_defaults=False
    )

    assert selected.device_selection.leaf.device_id == "juniper-qfx5130"
    assert selected.device_selection.leaf.cost_override == 123.0
    assert selected.device_selection.leaf.power_override is None
    assert config.device_selection.leaf.device_id == "old"


@pytest.mark.parametrize(
    "role,device_id",
    [("core", "arista-7800r3"), ("spine", "missing"), ("spine", "arista-7050x4")],
)
def test_select_device_errors(make_config, role, device_id) -> None:
    config = TopologyConfiguration.from_dict(make_config())
    with pytest.raises(ValueError):
        select_device(config, role, device_id)
