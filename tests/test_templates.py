import pytest

from fabricmetrics.engine import calculate_all_metrics
from fabricmetrics.model.topology import Topology
from fabricmetrics.templates import apply_template, get_builtin_templates, get_template
from fabricmetrics.validation import validate_configuration

TEMPLATE_NAMES = [
    "Small Leaf-Spine",
    "Medium Leaf-Spine",
    "Large Leaf-Spine",
    "3-Tier Clos",
    "High-Density Breakout",
    "Disjointed Spines",
    "Rail-Optimized",
    "Rail-Only",
]


def test_builtin_template_names() -> None:
    assert [t.name for t in get_builtin_templates()] == TEMPLATE_NAMES


@pytest.mark.parametrize("name", TEMPLATE_NAMES)
def test_templates_are_consistent_and_computable(name) -> None:
    template = get_template(name)
    assert template is not None
    assert template.description
    assert validate_configuration(template.configuration) == []
    metrics = calculate_all_metrics(template)
    assert metrics is not None
    assert metrics.device_count.total > 0


def test_high_density_breakout_metrics() -> None:
    metrics = calculate_all_metrics(get_template("High-Density Breakout"))
    # 4 x 32 links over 4x200G breakout cables
    assert metrics.cabling.breakout == 32
    assert metrics.cabling.standard == 0
    assert metrics.cost.switches.total == 4 * 15000 + 32 * 10000
    assert metrics.cost.optics == 4 * 32 * 2 * 1000


def test_rail_only_has_undefined_ratio() -> None:
    metrics = calculate_all_metrics(get_template("Rail-Only"))
    assert metrics.device_count.spines == 0
    assert not metrics.oversubscription.is_defined
    assert metrics.latency.hops == 2


def test_flags_carried_through() -> None:
    assert get_template("Disjointed Spines").configuration.disjointed_spines
    assert get_template("Rail-Optimized").configuration.rail_optimized
    assert get_template("3-Tier Clos").configuration.num_tiers == 3


def test_templates_are_fresh_copies() -> None:
    first = get_template("Small Leaf-Spine")
    first.configuration.num_spines = 99
    first.configuration.optics_cost["100G"] = 0
    second = get_template("Small Leaf-Spine")
    assert second.configuration.num_spines == 2
    assert second.configuration.optics_cost["100G"] == 500


def test_unknown_template() -> None:
    assert get_template("Nope") is None
    topo = Topology(id="x", name="mine")
    assert apply_template(topo, "Nope") is topo


def test_apply_template_keeps_identity() -> None:
    topo = Topology(
        id="t-9", name="mine", created_at="2024-01-01", updated_at="2024-02-01"
    )
    applied = apply_template(topo, "Medium Leaf-Spine")

    assert applied is not topo
    assert applied.id == "t-9"
    assert applied.created_at == "2024-01-01"
    assert applied.updated_at == "2024-02-01"
    assert applied.name == "Medium Leaf-Spine"
    assert applied.configuration.num_leafs == 16
    # Input left alone
    assert topo.name == "mine"
    assert topo.configuration is None
