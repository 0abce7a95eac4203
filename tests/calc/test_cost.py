"""Tests for the capital cost model."""

import math

from fabricmetrics.calc import calculate_cost


def test_switch_and_optics_cost(make_config) -> None:
    """Two spines, four leaves, 100G without breakout."""
    cost = calculate_cost(make_config(numSpines=2, numLeafs=4))

    assert cost.switches.spine == 2 * 40000
    assert cost.switches.leaf == 4 * 10000
    assert cost.switches.total == 120000
    # 8 logical links, 2 optics each, 200 per 100G optic
    assert cost.optics == 3200
    assert cost.total == 123200


def test_total_is_switches_plus_optics(make_config) -> None:
    cost = calculate_cost(make_config())
    assert math.isclose(cost.total, cost.switches.total + cost.optics)
    assert cost.switches.total == 4 * 40000 + 8 * 10000


def test_optics_priced_at_breakout_lane_speed(make_config) -> None:
    config = make_config(
        spineConfig={"portCount": 64, "portSpeed": "800G", "breakoutMode": "4x200G"}
    )
    cost = calculate_cost(config)
    # 32 links * 2 optics at the 200G price
    assert cost.optics == 64 * 600


def test_unmatched_breakout_falls_back_to_port_speed(make_config) -> None:
    config = make_config(
        spineConfig={"portCount": 64, "portSpeed": "400G", "breakoutMode": "3x133G"}
    )
    cost = calculate_cost(config)
    assert cost.optics == 64 * 1000


def test_missing_optics_price_contributes_zero(make_config) -> None:
    config = make_config(opticsCost={})
    cost = calculate_cost(config)
    assert cost.optics == 0
    assert cost.total == cost.switches.total


def test_rail_only_fabric_has_no_fabric_optics(make_config) -> None:
    cost = calculate_cost(make_config(numSpines=0, numTiers=1))
    assert cost.optics == 0
    assert cost.switches.spine == 0
    assert cost.total == 8 * 10000


def test_legacy_optics_per_link_type(make_legacy_config) -> None:
    cost = calculate_cost(make_legacy_config())
    assert cost.switches.total == 2 * 20000 + 4 * 8000
    # 100G: 2*4*2 links -> 32 optics; 400G: 2*4*1 links -> 16 optics
    assert cost.optics == 32 * 100 + 16 * 1000
    assert cost.total == cost.switches.total + cost.optics


def test_legacy_without_link_types(make_legacy_config) -> None:
    config = make_legacy_config(linkTypes=[])
    assert calculate_cost(config).optics == 0


def test_device_cost_override(make_config) -> None:
    config = make_config(
        deviceSelection={
            "spine": {"deviceId": "x", "costOverride": 55000},
            "leaf": {"deviceId": "y"},
        }
    )
    cost = calculate_cost(config)
    assert cost.switches.spine == 4 * 55000
    assert cost.switches.leaf == 8 * 10000


def test_parallel_links_multiply_optics(make_config) -> None:
    config = make_config(
        numSpines=2,
        numLeafs=4,
        parallelLinksEnabled=True,
        parallelLinksMode="manual",
        parallelLinksPerSpine=2,
    )
    cost = calculate_cost(config)
    assert cost.optics == 2 * 4 * 2 * 2 * 200


def test_parallel_links_ignored_when_disabled(make_config) -> None:
    config = make_config(parallelLinksEnabled=False, parallelLinksPerSpine=3)
    assert calculate_cost(config).optics == 4 * 8 * 2 * 200


def test_does_not_modify_input(make_config) -> None:
    config = make_config()
    del config["spineConfig"]
    snapshot = repr(config)
    calculate_cost(config)
    assert repr(config) == snapshot
    assert "spineConfig" not in config
