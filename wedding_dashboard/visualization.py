"""Plotly visualisation helpers for the wedding dashboard.

Each function accepts the output of the aggregation layer (series points,
category bars or the savings DataFrame) and returns a
``plotly.graph_objects.Figure`` that Streamlit renders via
``st.plotly_chart``.  Empty inputs produce a placeholder figure titled
"No data to display" rather than raising.
"""

from __future__ import annotations

from typing import Sequence

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from .models import CategoryBar, SeriesPoint

CHART_COLORS = ['#FF6B6B', '#4ECDC4', '#45B7D1', '#96CEB4', '#FFEAA7', '#DDA0DD', '#98D8C8', '#F7DC6F']


def _empty_figure(title: str = "No data to display") -> go.Figure:
    fig = go.Figure()
    fig.update_layout(title=title)
    return fig


def create_category_pie_chart(series: Sequence[SeriesPoint], title: str | None = None) -> go.Figure:
    """Generate a pie chart of actual spend per category.

    Parameters
    ----------
    series : sequence of SeriesPoint
        Output of :func:`~wedding_dashboard.aggregation.pie_series`.
    title : str, optional
        Chart title.

    Returns
    -------
    plotly.graph_objects.Figure
        Pie chart with slices in the order given.
    """
    if not series:
        return _empty_figure()
    df = pd.DataFrame({
        'Category': [point.label for point in series],
        'Value': [point.value for point in series],
    })
    fig = px.pie(df, names='Category', values='Value', color_discrete_sequence=CHART_COLORS)
    fig.update_traces(sort=False, textinfo='label+percent')
    fig.update_layout(title=title or "Actual spend by category")
    return fig


def create_budget_bar_chart(bars: Sequence[CategoryBar], title: str | None = None) -> go.Figure:
    """Grouped bar chart of budgeted, actual and remaining per category."""
    if not bars:
        return _empty_figure()
    df = pd.DataFrame({
        'Category': [bar.label for bar in bars],
        'Budgeted': [bar.budgeted for bar in bars],
        'Actual': [bar.actual for bar in bars],
        'Remaining': [bar.remaining for bar in bars],
    })
    long_df = df.melt(id_vars='Category', var_name='Metric', value_name='Amount')
    fig = px.bar(long_df, x='Category', y='Amount', color='Metric', barmode='group')
    fig.update_layout(
        title=title or "Budget vs actual",
        xaxis_title="Category",
        yaxis_title="Amount",
    )
    return fig


def create_savings_trend_chart(savings: pd.DataFrame, title: str | None = None) -> go.Figure:
    """Cumulative savings line with a dashed budget target.

    Parameters
    ----------
    savings : pandas.DataFrame
        Output of :func:`~wedding_dashboard.frames.savings_frame` with
        Month, Cumulative and Target columns.
    title : str, optional
        Chart title.

    Returns
    -------
    plotly.graph_objects.Figure
        Two-trace line chart.
    """
    if savings.empty:
        return _empty_figure()
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=savings['Month'],
        y=savings['Cumulative'],
        mode='lines+markers',
        name='Cumulative',
    ))
    fig.add_trace(go.Scatter(
        x=savings['Month'],
        y=savings['Target'],
        mode='lines',
        name='Target',
        line=dict(dash='dash'),
    ))
    fig.update_layout(
        title=title or "Cumulative savings trend",
        xaxis_title="Month",
        yaxis_title="Amount",
    )
    fig.update_xaxes(tickformat='%b %Y')
    return fig


def create_funding_status_chart(arranged: float, total_budget: float, title: str | None = None) -> go.Figure:
    """Pie of funds arranged vs still needed."""
    remaining = max(0.0, total_budget - arranged)
    values = [max(0.0, arranged), remaining]
    if sum(values) <= 0:
        return _empty_figure()
    fig = go.Figure(go.Pie(labels=['Arranged', 'Remaining'], values=values, sort=False, hole=0.4))
    fig.update_layout(title=title or "Financial status")
    return fig
