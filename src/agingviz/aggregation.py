"""
Mean-value aggregation by age group and a secondary dimension.

Given the filtered base set, a dimension view is selected (sex or
race/ethnicity), averaged per (age group, category) pair and flattened into a
full grid so every cell has a bar.
"""

from dataclasses import dataclass
from typing import Dict, List

import pandas as pd

from .constants import (
    AGE_GROUP_CATEGORY,
    ETHNICITY_MARKERS,
    ETHNICITY_MODE,
    SEX_CATEGORY,
    SEX_MODE,
)

SERIES_COLUMNS = ["AgeGroup", "Category", "Value"]


@dataclass(frozen=True)
class Dimension:
    """Secondary grouping axis selected by the user."""

    key: str
    label: str


SEX = Dimension(key=SEX_MODE, label="Sex")
ETHNICITY = Dimension(key=ETHNICITY_MODE, label="Ethnicity")


@dataclass
class AggregateResult:
    """Aggregate table plus the sorted axis domains for one dimension view."""

    dimension: Dimension
    age_groups: List[str]
    categories: List[str]
    table: Dict[str, Dict[str, float]]
    series: pd.DataFrame

    def value(self, age_group: str, category: str) -> float:
        """Mean value for a cell, 0 when no rows matched."""
        return self.table.get(age_group, {}).get(category, 0.0)

    @property
    def is_empty(self) -> bool:
        return self.series.empty


def resolve_dimension(mode: str) -> Dimension:
    """Map a selector value to a dimension; anything but "sex" is ethnicity."""
    return SEX if mode == SEX_MODE else ETHNICITY


def _matches_dimension(strat_cat2: pd.Series, dimension: Dimension) -> pd.Series:
    if dimension == SEX:
        return strat_cat2 == SEX_CATEGORY

    text = strat_cat2.fillna("").astype(str)
    mask = pd.Series(False, index=strat_cat2.index)
    for marker in ETHNICITY_MARKERS:
        mask |= text.str.contains(marker, regex=False)
    return mask


def select_dimension_rows(
    base: pd.DataFrame, mode: str, verbose: bool = True
) -> pd.DataFrame:
    """Restrict the base set to age-group rows stratified by the dimension."""
    dimension = resolve_dimension(mode)
    age_layer = base[base["StratCat1"] == AGE_GROUP_CATEGORY]
    rows = age_layer[_matches_dimension(age_layer["StratCat2"], dimension)]

    if verbose:
        print(f"Rows after age + {dimension.label} filter: {len(rows):,}")

    return rows


def compute_mean_table(rows: pd.DataFrame) -> Dict[str, Dict[str, float]]:
    """Average ``Value`` per age group, then per category."""
    means = rows.groupby(["Strat1", "Strat2"], sort=True)["Value"].mean()

    table: Dict[str, Dict[str, float]] = {}
    for (age_group, category), value in means.items():
        table.setdefault(age_group, {})[category] = float(value)
    return table


def flatten_table(
    table: Dict[str, Dict[str, float]],
    age_groups: List[str],
    categories: List[str],
) -> pd.DataFrame:
    """Expand the table to one row per (age group, category), filling gaps with 0."""
    rows = [
        {
            "AgeGroup": age_group,
            "Category": category,
            "Value": table.get(age_group, {}).get(category, 0.0),
        }
        for age_group in age_groups
        for category in categories
    ]
    return pd.DataFrame(rows, columns=SERIES_COLUMNS)


def aggregate_by_dimension(
    base: pd.DataFrame, mode: str, verbose: bool = True
) -> AggregateResult:
    """Build the aggregate table and flattened series for a dimension."""
    dimension = resolve_dimension(mode)
    rows = select_dimension_rows(base, mode, verbose=verbose)

    # Plain string sort; "65+" style labels are not put in clinical order
    age_groups = sorted(rows["Strat1"].unique())
    categories = sorted(rows["Strat2"].unique())

    if verbose:
        print(f"Age groups: {age_groups}")
        print(f"{dimension.label} categories: {categories}")

    table = compute_mean_table(rows)
    series = flatten_table(table, age_groups, categories)

    return AggregateResult(
        dimension=dimension,
        age_groups=age_groups,
        categories=categories,
        table=table,
        series=series,
    )
