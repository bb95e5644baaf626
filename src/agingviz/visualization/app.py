"""
Streamlit app for exploring cognitive decline by age group.

Single-page design:
- Dimension selector (Sex / Ethnicity)
- Grouped bar chart of mean reported percentages
- Collapsed aggregate and raw data tables with CSV download
"""

import sys

import pandas as pd
import streamlit as st

from ..aggregation import resolve_dimension
from ..config import load_config
from ..constants import DIMENSION_OPTIONS
from ..data import load_base_data
from .charts import build_dimension_figure


@st.cache_data(show_spinner=False)
def load_cached_base_data(csv_path: str, verbose: bool) -> pd.DataFrame:
    """Filtered base set, loaded once per session and reused across toggles."""
    return load_base_data(csv_path, verbose=verbose)


def main():
    """Main Streamlit app."""
    st.set_page_config(
        page_title="Cognitive Decline by Age Group",
        page_icon=None,
        layout="wide",
        initial_sidebar_state="collapsed",
    )

    st.title("Cognitive Decline by Age Group")

    try:
        config = load_config(overrides=sys.argv[1:])
    except (RuntimeError, FileNotFoundError) as e:
        st.error(f"Invalid configuration: {e}")
        return

    # Load data
    with st.spinner("Loading survey data..."):
        try:
            base = load_cached_base_data(str(config.csv_path), bool(config.verbose))
        except FileNotFoundError:
            st.error(f"Survey data not found at `{config.csv_path}`.")
            st.info(
                "Download the Alzheimer's Disease and Healthy Aging dataset and "
                "pass its location, e.g. `uv run dashboard csv_path=path/to/data.csv`"
            )
            return
        except ValueError as e:
            st.error(f"Could not read survey data: {e}")
            return

    if base.empty:
        st.warning("No cognitive decline rows found in the survey data.")
        return

    labels = list(DIMENSION_OPTIONS.keys())
    # Any configured value other than "sex" selects the ethnicity view
    default_label = resolve_dimension(str(config.dimension)).label
    selected_label = st.selectbox(
        "Group by",
        options=labels,
        index=labels.index(default_label),
        key="dimension",
    )
    mode = DIMENSION_OPTIONS[selected_label]

    result, fig = build_dimension_figure(
        base, mode, config.chart, verbose=bool(config.verbose)
    )

    st.plotly_chart(fig, use_container_width=False)

    with st.expander("Aggregate Table", expanded=False):
        if result.is_empty:
            st.info("No data for current selection.")
        else:
            pivot = result.series.pivot(
                index="AgeGroup", columns="Category", values="Value"
            )
            st.dataframe(pivot.round(2), use_container_width=True)

    with st.expander("Raw Data", expanded=False):
        st.caption("Filtered base rows. Use this table to export data and run your own analyses.")
        st.dataframe(base, use_container_width=True, hide_index=True)
        st.download_button(
            label="Download Data as CSV",
            data=base.to_csv(index=False),
            file_name="cognitive_decline_base_rows.csv",
            mime="text/csv",
        )


if __name__ == "__main__":
    main()
