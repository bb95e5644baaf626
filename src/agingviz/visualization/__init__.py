"""
agingviz visualization package.

This package provides a Streamlit-based dashboard and plotly charts for
comparing cognitive decline across age groups by sex or race/ethnicity.
"""

from agingviz.visualization.charts import (
    build_dimension_figure,
    create_dimension_chart,
    create_grouped_bar_chart,
)
from agingviz.visualization.dashboard import launch_dashboard

__all__ = [
    "build_dimension_figure",
    "create_dimension_chart",
    "create_grouped_bar_chart",
    "launch_dashboard",
]
