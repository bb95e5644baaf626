"""
Shared fixtures: a small survey extract covering every filter branch.
"""

import pandas as pd
import pytest

from agingviz.constants import EXCLUDED_TOPIC
from agingviz.data import load_base_data

TOPIC = "Subjective cognitive decline or memory loss among older adults"


def _row(strat1, strat_cat2, strat2, value, **overrides):
    row = {
        "RowId": "x",
        "Class": "Cognitive Decline",
        "Topic": TOPIC,
        "StratificationCategory1": "Age Group",
        "Stratification1": strat1,
        "StratificationCategory2": strat_cat2,
        "Stratification2": strat2,
        "Data_Value": value,
    }
    row.update(overrides)
    return row


@pytest.fixture
def survey_rows():
    """Raw CSV rows; seven of them survive the base filter."""
    return [
        _row("50-64 years", "Sex", "Female", "10"),
        _row("50-64 years", "Sex", "Female", "14"),
        _row("50-64 years", "Sex", "Male", "8"),
        _row("65 years or older", "Sex", "Female", "20"),
        _row("65 years or older", "Sex", "Male", ""),  # null value
        _row("50-64 years", "Sex", "Male", "99", Topic=EXCLUDED_TOPIC),
        _row("50-64 years", "Sex", "Female", "50", Class="Overall Health"),
        _row("Overall", "Sex", "Female", "30", StratificationCategory1="Overall"),
        _row("50-64 years", "Race/Ethnicity", "Hispanic", "16"),
        _row("65 years or older", "Race/Ethnicity", "White, non-Hispanic", "11"),
        _row("65 years or older", "", "", "13"),
        _row("50-64 years", "Sex", "Male", "n/a"),  # unparseable value
    ]


@pytest.fixture
def survey_csv(tmp_path, survey_rows):
    """The survey rows written to a CSV file."""
    path = tmp_path / "survey.csv"
    pd.DataFrame(survey_rows).to_csv(path, index=False)
    return path


@pytest.fixture
def base_data(survey_csv):
    """Filtered base set loaded from the sample CSV."""
    return load_base_data(survey_csv, verbose=False)
