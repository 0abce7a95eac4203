import math

from fabricmetrics import UNDEFINED_RATIO
from fabricmetrics.engine import compare_topologies
from fabricmetrics.report import COLUMNS, comparison_frame


def test_one_row_per_topology_in_order(make_topology) -> None:
    results = compare_topologies(
        [make_topology("b", numSpines=2), make_topology("a", numSpines=4)]
    )
    df = comparison_frame(results)

    assert list(df.columns) == COLUMNS
    assert list(df["name"]) == ["b", "a"]
    assert list(df["spines"]) == [2, 4]
    assert df.loc[0, "oversubscription"] == results[0].metrics.oversubscription.ratio
    assert df.loc[1, "total_cost"] == results[1].metrics.cost.total
    assert df.loc[1, "total_cables"] == 32


def test_undefined_ratio_is_nan(make_topology) -> None:
    results = compare_topologies(
        [make_topology("rail", numSpines=0, numTiers=1), make_topology("clos")]
    )
    df = comparison_frame(results)

    assert df.loc[0, "oversubscription"] == UNDEFINED_RATIO
    assert math.isnan(df.loc[0, "oversubscription_value"])
    assert math.isclose(df.loc[1, "oversubscription_value"], 1.1)


def test_empty_input() -> None:
    for empty in (None, []):
        df = comparison_frame(empty)
        assert df.empty
        assert list(df.columns) == COLUMNS
