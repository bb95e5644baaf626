"""
Chart creation utilities for the visualization dashboard.
"""

from typing import List, Tuple

import pandas as pd
import plotly.graph_objects as go
from omegaconf import DictConfig

from ..aggregation import AggregateResult, aggregate_by_dimension
from ..constants import TITLE_TEMPLATE
from ..layout import BarGeometry, ChartLayout, build_chart_layout

HOVER_TEMPLATE = (
    "Age group: %{customdata[0]}<br>"
    "%{meta}: %{customdata[1]}<br>"
    "Average percentage: %{customdata[2]:.2f}"
    "<extra></extra>"
)


def chart_title(result: AggregateResult) -> str:
    return TITLE_TEMPLATE.format(label=result.dimension.label)


def _bars_for(layout: ChartLayout, category: str) -> List[BarGeometry]:
    return [bar for bar in layout.bars if bar.category == category]


def create_grouped_bar_chart(
    result: AggregateResult, layout: ChartLayout, chart_config: DictConfig
) -> go.Figure:
    """Create a grouped bar chart with one trace (and legend entry) per category."""
    fig = go.Figure()

    for category in result.categories:
        bars = _bars_for(layout, category)
        fig.add_trace(
            go.Bar(
                name=category,
                x=[bar.x + bar.width / 2 for bar in bars],
                y=[bar.value for bar in bars],
                width=[bar.width for bar in bars],
                marker_color=layout.color(category),
                customdata=[[bar.age_group, bar.category, bar.value] for bar in bars],
                meta=result.dimension.label,
                hovertemplate=HOVER_TEMPLATE,
            )
        )

    margin = layout.margin
    fig.update_layout(
        title=dict(
            text=chart_title(result),
            x=margin["left"] / layout.width,
            xanchor="left",
            font=dict(size=14),
        ),
        width=layout.width,
        height=layout.height,
        # Bars carry explicit pixel positions, so plotly must not offset them
        barmode="overlay",
        bargap=0,
        margin=dict(l=margin["left"], r=margin["right"], t=margin["top"] + 20, b=margin["bottom"]),
        xaxis=dict(
            range=[margin["left"], layout.width - margin["right"]],
            tickmode="array",
            tickvals=[layout.outer.center(age) for age in result.age_groups],
            ticktext=result.age_groups,
            showgrid=False,
            zeroline=False,
        ),
        yaxis=dict(
            range=list(layout.y.domain),
            tickvals=layout.y.ticks(),
            showgrid=False,
        ),
        legend=dict(
            x=1.02,
            xanchor="left",
            y=1,
            yanchor="top",
            font=dict(size=11),
        ),
        showlegend=True,
        # Animates value changes on redraw; the first render is not animated
        transition=dict(duration=int(chart_config.transition_ms), easing="cubic-in-out"),
        plot_bgcolor="white",
    )
    return fig


def create_empty_chart(message: str, chart_config: DictConfig) -> go.Figure:
    """Placeholder figure for a view with no rows."""
    fig = go.Figure()
    fig.add_annotation(
        text=message,
        xref="paper",
        yref="paper",
        x=0.5,
        y=0.5,
        xanchor="center",
        yanchor="middle",
        showarrow=False,
        font=dict(size=16, color="gray"),
    )
    fig.update_layout(
        xaxis=dict(visible=False),
        yaxis=dict(visible=False),
        width=int(chart_config.width),
        height=int(chart_config.height),
    )
    return fig


def create_dimension_chart(
    result: AggregateResult, layout: ChartLayout, chart_config: DictConfig
) -> go.Figure:
    """Grouped bar chart for a dimension view, or a placeholder when it is empty."""
    if result.is_empty:
        fig = create_empty_chart(
            f"No age group data available by {result.dimension.label}", chart_config
        )
        fig.update_layout(title=chart_title(result))
        return fig
    return create_grouped_bar_chart(result, layout, chart_config)


def build_dimension_figure(
    base: pd.DataFrame, mode: str, chart_config: DictConfig, verbose: bool = True
) -> Tuple[AggregateResult, go.Figure]:
    """Aggregate the base set for ``mode`` and render it."""
    result = aggregate_by_dimension(base, mode, verbose=verbose)
    layout = build_chart_layout(result, chart_config)
    return result, create_dimension_chart(result, layout, chart_config)
