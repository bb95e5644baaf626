"""
Tests for dimension selection and mean aggregation.
"""

import pandas as pd
import pytest

from agingviz.aggregation import (
    ETHNICITY,
    SEX,
    aggregate_by_dimension,
    compute_mean_table,
    flatten_table,
    resolve_dimension,
    select_dimension_rows,
)


# ===== FIXTURES =====


def _record(strat1, strat_cat2, strat2, value, strat_cat1="Age Group"):
    return {
        "Class": "Cognitive Decline",
        "Topic": "Subjective cognitive decline",
        "StratCat1": strat_cat1,
        "Strat1": strat1,
        "StratCat2": strat_cat2,
        "Strat2": strat2,
        "Value": value,
    }


@pytest.fixture
def label_row_base():
    """A category-label row next to a real sex-stratified row."""
    return pd.DataFrame(
        [
            _record("60+", "", "Sex", 10.0),
            _record("60+", "Sex", "Female", 20.0),
        ]
    )


@pytest.fixture
def mixed_strat_base():
    """Rows with assorted StratificationCategory2 labels."""
    return pd.DataFrame(
        [
            _record("50-64 years", "Sex", "Female", 1.0),
            _record("50-64 years", "Race/Ethnicity", "Hispanic", 2.0),
            _record("50-64 years", "Ethnic group", "Asian", 3.0),
            _record("50-64 years", "race", "Other", 4.0),
            _record("50-64 years", "", "Blank", 5.0),
            _record("50-64 years", "Sex", "Male", 6.0, strat_cat1="Race/Ethnicity"),
        ]
    )


# ===== DIMENSION TESTS =====


@pytest.mark.parametrize(
    "mode,expected",
    [
        ("sex", SEX),
        ("ethnicity", ETHNICITY),
        ("race", ETHNICITY),
        ("Sex", ETHNICITY),  # case-sensitive selector value
        ("", ETHNICITY),
    ],
)
def test_resolve_dimension(mode, expected):
    """Test that only "sex" selects the sex dimension."""
    assert resolve_dimension(mode) == expected


def test_sex_view_requires_exact_label(mixed_strat_base):
    """Test that the sex view matches StratCat2 == "Sex" on age-group rows only."""
    rows = select_dimension_rows(mixed_strat_base, "sex", verbose=False)

    assert rows["Strat2"].tolist() == ["Female"]


def test_ethnicity_view_matches_race_or_ethnic(mixed_strat_base):
    """Test case-sensitive "Race"/"Ethnic" substring matching."""
    rows = select_dimension_rows(mixed_strat_base, "ethnicity", verbose=False)

    assert rows["Strat2"].tolist() == ["Hispanic", "Asian"]


def test_select_verbose_message(mixed_strat_base, capsys):
    """Test the row count message names the dimension label."""
    select_dimension_rows(mixed_strat_base, "ethnicity", verbose=True)

    assert "Rows after age + Ethnicity filter: 2" in capsys.readouterr().out


# ===== AGGREGATION TESTS =====


def test_label_rows_are_excluded(label_row_base):
    """Test that a row whose Strat2 merely reads "Sex" is not aggregated."""
    result = aggregate_by_dimension(label_row_base, "sex", verbose=False)

    assert result.table == {"60+": {"Female": 20.0}}
    assert result.categories == ["Female"]


def test_sex_aggregate_table(base_data):
    """Test means per (age group, sex) on the sample survey."""
    result = aggregate_by_dimension(base_data, "sex", verbose=False)

    assert result.dimension == SEX
    assert result.age_groups == ["50-64 years", "65 years or older"]
    assert result.categories == ["Female", "Male"]
    assert result.table == {
        "50-64 years": {"Female": 12.0, "Male": 8.0},
        "65 years or older": {"Female": 20.0},
    }


def test_ethnicity_aggregate_table(base_data):
    """Test means per (age group, race/ethnicity) on the sample survey."""
    result = aggregate_by_dimension(base_data, "ethnicity", verbose=False)

    assert result.dimension == ETHNICITY
    assert result.categories == ["Hispanic", "White, non-Hispanic"]
    assert result.table == {
        "50-64 years": {"Hispanic": 16.0},
        "65 years or older": {"White, non-Hispanic": 11.0},
    }


def test_mean_matches_matching_rows(base_data):
    """Test each cell equals the arithmetic mean of exactly its view rows."""
    rows = select_dimension_rows(base_data, "sex", verbose=False)
    result = aggregate_by_dimension(base_data, "sex", verbose=False)

    for age_group, by_category in result.table.items():
        for category, mean in by_category.items():
            values = rows[(rows["Strat1"] == age_group) & (rows["Strat2"] == category)][
                "Value"
            ].tolist()
            assert mean == pytest.approx(sum(values) / len(values))


@pytest.mark.parametrize("mode", ["sex", "ethnicity"])
def test_series_is_full_grid(base_data, mode):
    """Test the flattened series has one row per age group x category."""
    result = aggregate_by_dimension(base_data, mode, verbose=False)

    assert len(result.series) == len(result.age_groups) * len(result.categories)
    assert list(result.series.columns) == ["AgeGroup", "Category", "Value"]


def test_series_fills_missing_cells_with_zero(base_data):
    """Test that an age group without rows for a category gets a 0 bar."""
    result = aggregate_by_dimension(base_data, "sex", verbose=False)
    series = result.series.set_index(["AgeGroup", "Category"])["Value"]

    assert series[("65 years or older", "Male")] == 0.0
    assert "Male" not in result.table["65 years or older"]
    assert result.value("65 years or older", "Male") == 0.0
    assert result.value("50-64 years", "Female") == 12.0


def test_series_order_is_age_major(base_data):
    """Test that series rows follow sorted age groups, then sorted categories."""
    result = aggregate_by_dimension(base_data, "sex", verbose=False)

    assert list(zip(result.series["AgeGroup"], result.series["Category"])) == [
        ("50-64 years", "Female"),
        ("50-64 years", "Male"),
        ("65 years or older", "Female"),
        ("65 years or older", "Male"),
    ]


def test_age_groups_sort_lexicographically():
    """Test that age labels use plain string order."""
    base = pd.DataFrame(
        [
            _record("75+", "Sex", "Female", 1.0),
            _record("65-74", "Sex", "Female", 2.0),
            _record("100+", "Sex", "Female", 3.0),
        ]
    )

    result = aggregate_by_dimension(base, "sex", verbose=False)

    assert result.age_groups == ["100+", "65-74", "75+"]


def test_toggle_round_trip_is_idempotent(base_data):
    """Test that sex -> ethnicity -> sex reproduces the same table."""
    first = aggregate_by_dimension(base_data, "sex", verbose=False)
    aggregate_by_dimension(base_data, "ethnicity", verbose=False)
    again = aggregate_by_dimension(base_data, "sex", verbose=False)

    assert again.table == first.table
    pd.testing.assert_frame_equal(again.series, first.series)


def test_empty_view():
    """Test aggregation when no rows match the dimension."""
    base = pd.DataFrame([_record("50-64 years", "Sex", "Female", 1.0)])

    result = aggregate_by_dimension(base, "ethnicity", verbose=False)

    assert result.is_empty
    assert result.age_groups == []
    assert result.categories == []
    assert result.table == {}


def test_aggregate_verbose_lists_keys(base_data, capsys):
    """Test that age groups and categories are printed."""
    aggregate_by_dimension(base_data, "sex", verbose=True)

    out = capsys.readouterr().out
    assert "Age groups: ['50-64 years', '65 years or older']" in out
    assert "Sex categories: ['Female', 'Male']" in out


# ===== HELPER TESTS =====


def test_compute_mean_table_nested():
    """Test grouping by age group then category."""
    rows = pd.DataFrame(
        [
            _record("A", "Sex", "F", 1.0),
            _record("A", "Sex", "F", 3.0),
            _record("B", "Sex", "M", 5.0),
        ]
    )

    assert compute_mean_table(rows) == {"A": {"F": 2.0}, "B": {"M": 5.0}}


def test_flatten_table_explicit_domains():
    """Test flattening against domains wider than the table."""
    series = flatten_table({"A": {"F": 2.0}}, ["A", "B"], ["F", "M"])

    assert series["Value"].tolist() == [2.0, 0.0, 0.0, 0.0]
