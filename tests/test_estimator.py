import logging
import math

import pandas as pd
import polars as pl
import pytest
from polars.testing import assert_frame_equal

from surveysize.core.errors import ComputationError, ConfigurationError
from surveysize.core.settings import SampleSizeSettings
from surveysize.planning.estimator import SampleSizeEstimator, compute_sample_size_tables
from surveysize.stats.common import proportion_sample_size, z_value


def _admissions_tables(df, levels=(80, 85, 90), **kwargs):
    return compute_sample_size_tables(
        list(levels),
        df,
        group_column="Admit",
        variable_column="Gender",
        population_column="Freq",
        current_sample_size_column="surveys",
        **kwargs,
    )


def test_worked_example(single_cell):
    tables = compute_sample_size_tables(
        [80, 70], single_cell, current_sample_size_column="collected"
    )
    rows = tables["g"].select("confidence_level", "required_sample_size", "sufficient").rows()
    assert rows == [(80, 63, "No"), (70, 52, "Yes")]


def test_one_table_per_group_with_one_row_per_variable_and_level(admissions):
    tables = _admissions_tables(admissions)
    assert list(tables) == ["Admitted", "Rejected"]
    for group, table in tables.items():
        assert table.height == 2 * 3
        assert set(table["Admit"].to_list()) == {group}
        assert table.select("Gender", "confidence_level").is_duplicated().sum() == 0
        assert table.columns == [
            "Admit",
            "Gender",
            "Freq",
            "surveys",
            "confidence_level",
            "required_sample_size",
            "sufficient",
        ]


def test_rows_ordered_by_requested_level_then_variable(admissions):
    table = _admissions_tables(admissions, levels=(90, 80))["Admitted"]
    assert table.select("confidence_level", "Gender").rows() == [
        (90, "Female"),
        (90, "Male"),
        (80, "Female"),
        (80, "Male"),
    ]


def test_aggregates_rows_sharing_group_and_variable():
    df = pl.DataFrame(
        {
            "group": ["a", "a", "a", "b"],
            "variable": ["x", "x", "y", "x"],
            "population": [40, 60, 100, 100],
            "collected": [30, 30, 60, 60],
        }
    )
    table = compute_sample_size_tables(
        [70], df, variable_column="variable", current_sample_size_column="collected"
    )["a"]
    assert table.select("variable", "population", "collected", "sufficient").rows() == [
        ("x", 100, 60, "Yes"),
        ("y", 100, 60, "Yes"),
    ]


def test_pre_summed_and_raw_rows_give_the_same_tables(admissions):
    from surveysize.datasets import simulate_surveys, ucb_admissions

    raw = simulate_surveys(ucb_admissions(), fraction=0.55)
    from_raw = _admissions_tables(raw)
    from_summed = _admissions_tables(admissions)
    for group in from_summed:
        assert_frame_equal(from_raw[group], from_summed[group])


def test_without_variable_collapses_to_group_level(admissions):
    tables = compute_sample_size_tables(
        [90], admissions, group_column="Admit", population_column="Freq"
    )
    assert tables["Admitted"].columns == [
        "Admit",
        "Freq",
        "confidence_level",
        "required_sample_size",
        "sufficient",
    ]
    assert tables["Admitted"]["Freq"].to_list() == [1198 + 557]


def test_without_current_column_every_row_is_unknown(admissions):
    tables = compute_sample_size_tables(
        [80, 90, 99],
        admissions,
        group_column="Admit",
        variable_column="Gender",
        population_column="Freq",
    )
    for table in tables.values():
        assert "surveys" not in table.columns
        assert set(table["sufficient"].to_list()) == {"Unknown"}


def test_required_size_monotone_in_level(admissions):
    tables = _admissions_tables(admissions, levels=(80, 85, 90, 95, 99))
    for table in tables.values():
        for _, rows in table.group_by("Gender"):
            sizes = rows.sort("confidence_level")["required_sample_size"].to_list()
            assert sizes == sorted(sizes)


def test_required_size_monotone_in_population_and_bounded_by_unbounded_size():
    df = pl.DataFrame({"group": list("abcdef"), "population": [1, 10, 100, 1_000, 10_000, 10**7]})
    tables = compute_sample_size_tables([95], df)
    sizes = [tables[g]["required_sample_size"].item() for g in "abcdef"]
    assert sizes == sorted(sizes)
    assert sizes[-1] <= math.ceil(proportion_sample_size(z_value(95)))


def test_proportion_and_margin_are_applied():
    df = {"group": ["g"], "population": [10**9]}
    wide = compute_sample_size_tables([95], df, margin_of_error=0.1)["g"]
    skewed = compute_sample_size_tables([95], df, assumed_proportion=0.1)["g"]
    assert wide["required_sample_size"].item() == 97
    assert skewed["required_sample_size"].item() == 139


def test_duplicate_levels_are_computed_once(single_cell):
    table = compute_sample_size_tables([90, 90, 80], single_cell)["g"]
    assert table["confidence_level"].to_list() == [90, 80]


def test_fractional_levels_keep_float_dtype(single_cell):
    table = compute_sample_size_tables([90, 99.5], single_cell)["g"]
    assert table.schema["confidence_level"] == pl.Float64
    assert table["confidence_level"].to_list() == [90.0, 99.5]


def test_pure_and_repeatable(admissions):
    first = _admissions_tables(admissions)
    second = _admissions_tables(admissions)
    assert list(first) == list(second)
    for group in first:
        assert_frame_equal(first[group], second[group])


def test_accepts_pandas_input(admissions):
    tables = _admissions_tables(admissions.to_pandas())
    assert_frame_equal(tables["Rejected"], _admissions_tables(admissions)["Rejected"])


def test_missing_current_column_is_a_configuration_error(single_cell):
    with pytest.raises(ConfigurationError, match="current sample size column 'surveys'"):
        compute_sample_size_tables([90], single_cell, current_sample_size_column="surveys")


@pytest.mark.parametrize(
    "kwargs, role",
    [
        ({"group_column": "missing"}, "group"),
        ({"variable_column": "missing"}, "variable"),
        ({"population_column": "missing"}, "population"),
    ],
)
def test_missing_key_columns_fail_fast(single_cell, kwargs, role):
    with pytest.raises(ConfigurationError, match=f"{role} column 'missing'"):
        compute_sample_size_tables([90], single_cell, **kwargs)


def test_non_numeric_population_is_a_configuration_error():
    df = pl.DataFrame({"group": ["g"], "population": ["100"]})
    with pytest.raises(ConfigurationError, match="must be numeric"):
        compute_sample_size_tables([90], df)


@pytest.mark.parametrize(
    "kwargs", [{"assumed_proportion": 0}, {"assumed_proportion": 1}, {"margin_of_error": 0}]
)
def test_invalid_parameters_are_configuration_errors(single_cell, kwargs):
    with pytest.raises(ConfigurationError):
        compute_sample_size_tables([90], single_cell, **kwargs)


def test_zero_population_is_a_computation_error():
    df = pl.DataFrame({"group": ["a", "b"], "population": [100, 0]})
    with pytest.raises(ComputationError) as excinfo:
        compute_sample_size_tables([90], df)
    assert excinfo.value.cells == [("b",)]


def test_negative_counts_are_a_computation_error():
    df = pl.DataFrame(
        {"group": ["a", "a"], "population": [100, 50], "collected": [10, -5]}
    )
    with pytest.raises(ComputationError):
        compute_sample_size_tables([90], df, current_sample_size_column="collected")


def test_skip_policy_drops_degenerate_cells_and_warns(caplog):
    df = pl.DataFrame(
        {"group": ["a", "b", "b"], "variable": ["x", "x", "y"], "population": [100, 0, 100]}
    )
    estimator = SampleSizeEstimator(settings=SampleSizeSettings(on_degenerate="skip"))
    with caplog.at_level(logging.WARNING, logger="surveysize.planning.estimator"):
        tables = estimator.compute([90], df, variable_column="variable")
    assert tables["b"]["variable"].to_list() == ["y"]
    assert "Skipping degenerate cells" in caplog.text
    for table in tables.values():
        assert table["required_sample_size"].min() > 0


def test_skip_policy_with_every_cell_degenerate_returns_nothing():
    estimator = SampleSizeEstimator(settings=SampleSizeSettings(on_degenerate="skip"))
    assert estimator.compute([90], {"group": ["a"], "population": [0]}) == {}


def test_null_keys_are_dropped_with_a_warning(caplog):
    df = pl.DataFrame({"group": ["a", None], "population": [100, 100]})
    with caplog.at_level(logging.WARNING, logger="surveysize.planning.estimator"):
        tables = compute_sample_size_tables([90], df)
    assert list(tables) == ["a"]
    assert "null group value" in caplog.text


def test_integer_group_keys_are_preserved():
    df = pd.DataFrame({"group": [2, 1, 2], "population": [50, 60, 70]})
    tables = compute_sample_size_tables([90], df)
    assert list(tables) == [1, 2]
    assert tables[2]["population"].item() == 120


def test_key_and_count_columns_must_be_distinct(single_cell):
    with pytest.raises(ConfigurationError, match="distinct columns"):
        compute_sample_size_tables([90], single_cell, variable_column="group")
    with pytest.raises(ConfigurationError, match="distinct columns"):
        compute_sample_size_tables(
            [90], single_cell, current_sample_size_column="population"
        )


@pytest.mark.parametrize("to_frame", [pl.DataFrame, pd.DataFrame])
def test_nan_population_is_a_computation_error_for_polars_and_pandas(to_frame):
    df = to_frame({"group": ["a", "a"], "population": [100.0, float("nan")]})
    with pytest.raises(ComputationError) as excinfo:
        compute_sample_size_tables([90], df)
    assert excinfo.value.cells == [("a",)]
