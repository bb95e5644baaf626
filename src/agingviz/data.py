"""
Data loading and filtering for the Alzheimer's Disease and Healthy Aging survey.

The CSV is projected onto a small set of record fields and then reduced to
the cognitive-decline slice that every chart view starts from.
"""

from pathlib import Path
from typing import Union

import pandas as pd

from .constants import (
    COGNITIVE_DECLINE_CLASS,
    CSV_COLUMNS,
    EXCLUDED_TOPIC,
    OVERALL_STRATUM,
    RECORD_FIELDS,
)


def load_raw_records(
    csv_path: Union[str, Path], verbose: bool = True
) -> pd.DataFrame:
    """Load the survey CSV as raw records with a nullable numeric ``Value``."""
    csv_path = Path(csv_path)
    if not csv_path.exists():
        raise FileNotFoundError(f"Survey data not found: {csv_path}")

    # Keep text cells verbatim so blank stratifications stay "" rather than NaN
    df: pd.DataFrame = pd.read_csv(
        csv_path, dtype=str, keep_default_na=False, low_memory=False
    )
    df.columns = df.columns.str.strip()

    missing = [col for col in CSV_COLUMNS if col not in df.columns]
    if missing:
        raise ValueError(f"Survey data is missing columns: {', '.join(missing)}")

    records = df[list(CSV_COLUMNS)].rename(columns=CSV_COLUMNS)
    # Blank or unparseable values become NaN and are dropped by the filter stage
    records["Value"] = pd.to_numeric(records["Value"], errors="coerce")

    if verbose:
        print(f"Total rows loaded: {len(records):,}")

    return records[RECORD_FIELDS]


def filter_base_rows(raw: pd.DataFrame, verbose: bool = True) -> pd.DataFrame:
    """Keep cognitive-decline rows with a stratified, non-null value."""
    mask = (
        (raw["Class"] == COGNITIVE_DECLINE_CLASS)
        & (raw["Topic"] != EXCLUDED_TOPIC)
        & (raw["Strat1"] != OVERALL_STRATUM)
        & raw["Value"].notna()
    )
    base = raw[mask].reset_index(drop=True)

    if verbose:
        print(f"Filtered base rows: {len(base):,}")

    return base


def load_base_data(csv_path: Union[str, Path], verbose: bool = True) -> pd.DataFrame:
    """Load the CSV and return the filtered base set."""
    return filter_base_rows(load_raw_records(csv_path, verbose=verbose), verbose)
