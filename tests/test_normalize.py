"""Tests for configuration normalization and schema classification."""

import logging
from copy import deepcopy

import pytest

from fabricmetrics.model.topology import (
    LegacyBreakoutOption,
    LinkType,
    SpineConfig,
    TopologyConfiguration,
)
from fabricmetrics.normalize import (
    ConfigSchema,
    NormalizedConfiguration,
    auto_parallel_links,
    classify_schema,
    normalize_configuration,
    parallel_links_per_spine,
)


def test_mapping_input_is_not_modified(make_config) -> None:
    config = make_config()
    del config["spineConfig"]
    del config["leafConfig"]
    before = deepcopy(config)

    normalize_configuration(config)

    assert config == before


def test_dataclass_input_is_not_modified(make_config) -> None:
    config = TopologyConfiguration.from_dict(make_config())
    before = deepcopy(config)

    cfg = normalize_configuration(config)

    assert config == before
    assert cfg.spine == config.spine_config
    assert cfg.spine is not config.spine_config


def test_missing_spine_and_leaf_get_defaults() -> None:
    cfg = normalize_configuration({"numSpines": 2, "numLeafs": 4})
    assert cfg.spine == SpineConfig(64, "800G", "1x800G")
    assert (cfg.leaf.port_count, cfg.leaf.downlink_speed, cfg.leaf.breakout_mode) == (
        48,
        "100G",
        "1x100G",
    )
    assert cfg.schema is ConfigSchema.current
    assert dict(cfg.breakout_options) == {}
    assert cfg.spine_breakout.factor == 1
    assert cfg.spine_breakout.wire_speed == "800G"


def test_already_normalized_is_returned_as_is(make_config) -> None:
    cfg = normalize_configuration(make_config())
    assert normalize_configuration(cfg) is cfg


@pytest.mark.parametrize("bad", [None, 42, "config", ["numSpines"]])
def test_unsupported_types_raise(bad) -> None:
    with pytest.raises(TypeError):
        normalize_configuration(bad)


def test_classify_current(make_config) -> None:
    config = TopologyConfiguration.from_dict(make_config())
    assert classify_schema(config) is ConfigSchema.current


def test_classify_legacy(make_legacy_config) -> None:
    config = TopologyConfiguration.from_dict(make_legacy_config())
    assert classify_schema(config) is ConfigSchema.legacy


def test_link_types_without_breakout_options_are_legacy() -> None:
    config = TopologyConfiguration(
        num_spines=2, num_leafs=4, link_types=[LinkType("100G", 1)]
    )
    assert classify_schema(config) is ConfigSchema.legacy


def test_spine_config_wins_over_link_types(make_config) -> None:
    config = TopologyConfiguration.from_dict(
        make_config(linkTypes=[{"type": "100G", "count": 1}])
    )
    assert classify_schema(config) is ConfigSchema.current


def test_spine_config_wins_over_list_breakout_options(make_config) -> None:
    config = TopologyConfiguration.from_dict(
        make_config(breakoutOptions=[{"type": "4x25G", "enabled": True}])
    )
    assert classify_schema(config) is ConfigSchema.current
    cfg = normalize_configuration(config)
    assert cfg.spine_breakout.factor == 1
    assert not cfg.spine_breakout.matched


def test_list_breakout_options_without_spine_config_are_legacy() -> None:
    config = TopologyConfiguration(
        num_spines=2,
        num_leafs=4,
        breakout_options=[LegacyBreakoutOption("4x100G", True)],
    )
    assert classify_schema(config) is ConfigSchema.legacy


def test_legacy_spine_breakout_is_factor_one(make_legacy_config) -> None:
    cfg = normalize_configuration(make_legacy_config())
    assert cfg.is_legacy
    assert cfg.spine_breakout.factor == 1
    assert len(cfg.legacy_breakout_options) == 1
    assert [lt.type for lt in cfg.link_types] == ["100G", "400G"]


def test_factor_below_one_is_clamped_with_warning(make_config, caplog) -> None:
    config = make_config(
        spineConfig={"portCount": 64, "portSpeed": "800G", "breakoutMode": "0x800G"},
        breakoutOptions={"800G": [{"type": "0x800G", "factor": 0}]},
    )
    caplog.set_level(logging.WARNING, logger="fabricmetrics")

    cfg = normalize_configuration(config)

    assert cfg.spine_breakout.factor == 1
    assert cfg.breakout_options["800G"][0].factor == 1
    assert any(
        r.levelno == logging.WARNING and "0x800G" in r.getMessage()
        for r in caplog.records
    )


def test_device_overrides_replace_unit_figures(make_config) -> None:
    cfg = normalize_configuration(
        make_config(
            deviceSelection={
                "spine": {"deviceId": "s", "costOverride": 1.5, "powerOverride": 2.5}
            }
        )
    )
    assert cfg.spine_unit_cost == 1.5
    assert cfg.spine_unit_power == 2.5
    assert cfg.leaf_unit_cost == 10000
    assert cfg.leaf_unit_power == 300


def test_result_is_frozen(make_config) -> None:
    cfg = normalize_configuration(make_config())
    assert isinstance(cfg, NormalizedConfiguration)
    with pytest.raises(AttributeError):
        cfg.num_spines = 99  # type: ignore[misc]
    with pytest.raises(TypeError):
        cfg.optics_cost["100G"] = 0  # type: ignore[index]


@pytest.mark.parametrize(
    "spines,ports,expected",
    [(4, 48, 6), (2, 64, 16), (32, 48, 1), (30, 48, 1), (0, 48, 1), (5, 48, 4)],
)
def test_auto_parallel_links(spines, ports, expected) -> None:
    assert auto_parallel_links(spines, ports) == expected


def test_parallel_links_modes(make_config) -> None:
    def links(**kwargs) -> int:
        return parallel_links_per_spine(
            TopologyConfiguration.from_dict(make_config(**kwargs))
        )

    assert links() == 1
    assert links(parallelLinksEnabled=False, parallelLinksPerSpine=4) == 1
    assert links(parallelLinksEnabled=True, parallelLinksMode="auto") == 6
    assert (
        links(
            parallelLinksEnabled=True,
            parallelLinksMode="manual",
            parallelLinksPerSpine=3,
        )
        == 3
    )
    # Manual mode without a count falls back to auto sizing
    assert links(parallelLinksEnabled=True, parallelLinksMode="manual") == 6


def test_logical_links_include_parallel_links(make_config) -> None:
    cfg = normalize_configuration(
        make_config(
            parallelLinksEnabled=True,
            parallelLinksMode="manual",
            parallelLinksPerSpine=2,
        )
    )
    assert cfg.logical_links == 4 * 8 * 2
