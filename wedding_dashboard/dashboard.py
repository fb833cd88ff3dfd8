"""Streamlit app for the wedding budget and finance tracker.

Run with ``streamlit run wedding_dashboard/dashboard.py`` or the
``run_dashboard.py`` launcher.  The page loads the exported snapshots,
hands them to the aggregation layer and draws the cards and charts.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import streamlit as st

# Streamlit executes this file as a script, so make the package importable
project_root = Path(__file__).parent.parent.resolve()
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from wedding_dashboard import aggregation as agg
from wedding_dashboard.config import DashboardSettings, load_settings
from wedding_dashboard.errors import ConfigError, SnapshotError
from wedding_dashboard.finance import savings_plan
from wedding_dashboard.formatting import (
    escape_for_markdown,
    format_currency,
    format_percent,
    format_thousands,
)
from wedding_dashboard.frames import budget_summary_frame, lines_frame, savings_frame
from wedding_dashboard.models import BudgetLine, FinanceMonth, SavingsPlan
from wedding_dashboard.snapshots import load_budget_lines, load_finance_months
from wedding_dashboard.visualization import (
    create_budget_bar_chart,
    create_category_pie_chart,
    create_funding_status_chart,
    create_savings_trend_chart,
)

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    level = os.getenv("WEDDING_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def load_snapshots(settings: DashboardSettings) -> Optional[Tuple[List[BudgetLine], List[FinanceMonth]]]:
    """Fetch both snapshots, or report the failure and return ``None``.

    Aggregation must not run on a failed fetch, so callers stop rendering
    when this returns ``None``.
    """
    try:
        lines = load_budget_lines(settings.budget_lines_path)
        months = load_finance_months(settings.finance_months_path)
    except SnapshotError as exc:
        logger.error("Could not load snapshots: %s", exc)
        st.error(f"Could not load data: {exc}")
        return None
    return lines, months


def finance_insights(plan: SavingsPlan, symbol: str) -> List[str]:
    """Plain-language notes shown under the progress bar."""
    target = plan.target
    if target.remaining_needed <= 0:
        return ["🎉 You've already arranged enough funds for the wedding budget!"]
    notes = [
        f"You still need {format_currency(target.remaining_needed, symbol=symbol)} to cover the budget.",
    ]
    if target.months_remaining > 0:
        notes.append(
            f"Save {format_currency(target.monthly_target, symbol=symbol)}/month for the next "
            f"{target.months_remaining} months to meet the goal."
        )
    else:
        notes.append("The target date has passed; there are no months left to save.")
    if plan.needs_attention:
        notes.append(
            "⚠️ This requires significant monthly savings. Consider reviewing the budget "
            "or extending the timeline."
        )
    return notes


def render_budget_section(lines: Sequence[BudgetLine], settings: DashboardSettings) -> None:
    symbol = settings.currency_symbol
    categories = settings.categories
    totals = agg.grand_totals(lines)
    used = agg.utilization_percent(totals.budgeted, totals.actual, precision=0)

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Total Budget", format_currency(totals.budgeted, symbol=symbol))
    col2.metric("Spent", format_currency(totals.actual, symbol=symbol))
    col3.metric(
        "Remaining" if totals.remaining >= 0 else "Over Budget",
        format_currency(abs(totals.remaining), symbol=symbol),
    )
    col4.metric("Budget Used", format_percent(used, precision=0))

    chart_left, chart_right = st.columns(2)
    with chart_left:
        st.plotly_chart(
            create_category_pie_chart(agg.pie_series(lines, categories)),
            use_container_width=True,
        )
    with chart_right:
        st.plotly_chart(
            create_budget_bar_chart(agg.category_bars(lines, categories)),
            use_container_width=True,
        )

    st.subheader("Categories")
    summary = budget_summary_frame(lines, categories, precision=settings.utilization_precision)
    st.dataframe(summary, use_container_width=True)

    over = agg.over_budget_lines(lines)
    if over:
        st.warning(f"{len(over)} item(s) are over budget.")

    counts = agg.status_counts(lines)
    st.caption(" · ".join(f"{status.value.title()}: {count}" for status, count in counts.items()))

    with st.expander("All budget items"):
        st.dataframe(lines_frame(lines), use_container_width=True)


def render_finance_section(
    lines: Sequence[BudgetLine],
    months: Sequence[FinanceMonth],
    settings: DashboardSettings,
    today: Optional[date] = None,
) -> None:
    symbol = settings.currency_symbol
    total_budget = agg.grand_totals(lines).budgeted
    plan = savings_plan(
        months,
        total_budget,
        settings.wedding_date,
        today=today,
        warning_threshold=settings.target_warning_threshold,
    )

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Total Wedding Budget", format_currency(total_budget, symbol=symbol))
    col2.metric(
        "Funds Arranged",
        format_currency(plan.current_available, symbol=symbol),
        plan.status.value,
        delta_color="off",
    )
    col3.metric("Still Needed", format_currency(plan.target.remaining_needed, symbol=symbol))
    col4.metric("Monthly Target", format_currency(plan.target.monthly_target, symbol=symbol))
    st.caption(f"{plan.target.months_remaining} months remaining · {format_thousands(total_budget, symbol)} goal")

    st.progress(min(max(plan.progress_percent / 100.0, 0.0), 1.0))
    st.write(f"Progress to goal: {format_percent(plan.progress_percent)}")
    for note in finance_insights(plan, symbol):
        st.markdown(escape_for_markdown(note))

    drifted = agg.reconcile_cumulative(months)
    if drifted:
        logger.warning("%d stored running total(s) differ from recomputation", len(drifted))
        st.info(
            "Stored cumulative totals differ from the recomputed values for "
            + ", ".join(point.month_year.strftime('%b %Y') for point in drifted)
            + ". The recomputed values are shown."
        )

    savings = savings_frame(months, total_budget)
    chart_left, chart_right = st.columns(2)
    with chart_left:
        st.plotly_chart(create_savings_trend_chart(savings), use_container_width=True)
    with chart_right:
        st.plotly_chart(
            create_funding_status_chart(plan.current_available, total_budget),
            use_container_width=True,
        )


def main() -> None:
    """Render the dashboard."""
    st.set_page_config(page_title="Wedding Budget", page_icon="💍", layout="wide")
    configure_logging()
    try:
        settings = load_settings()
    except ConfigError as exc:
        logger.error("Invalid settings: %s", exc)
        st.error(f"Invalid settings: {exc}")
        return

    snapshots = load_snapshots(settings)
    if snapshots is None:
        return
    lines, months = snapshots

    st.header("💍 Wedding Budget & Finance")
    budget_tab, finance_tab = st.tabs(["📋 Budget", "💰 Finance Tracker"])
    with budget_tab:
        render_budget_section(lines, settings)
    with finance_tab:
        render_finance_section(lines, months, settings)


if __name__ == "__main__":
    main()
