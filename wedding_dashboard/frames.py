"""DataFrame views of the aggregated budget and savings data.

The aggregation functions return plain records; the tables and charts in
the dashboard want DataFrames.  Each helper here builds one table from a
snapshot so the rendering code never re-implements the arithmetic.
"""

from __future__ import annotations

from typing import List, Sequence

import pandas as pd

from .aggregation import category_totals, cumulative_savings, utilization_percent
from .models import BudgetLine, FinanceMonth, LineStatus

SUMMARY_COLUMNS = ['Category', 'Budgeted', 'Actual', 'Remaining', 'Percent Used', 'Status']
LINE_COLUMNS = [
    'Category',
    'Item',
    'Budgeted',
    'Actual',
    'Status',
    'Vendor',
    'Payment Mode',
    'Over Budget',
]
SAVINGS_COLUMNS = ['Month', 'Monthly', 'Cumulative', 'Target']


def budget_summary_frame(
    lines: Sequence[BudgetLine],
    categories: Sequence[str],
    precision: int = 1,
) -> pd.DataFrame:
    """Per-category budget vs actual table.

    Args:
        lines: Budget line snapshot
        categories: Categories to report, in display order
        precision: Decimal places for ``Percent Used``

    Returns:
        DataFrame with columns Category, Budgeted, Actual, Remaining,
        Percent Used, Status (where Status is 'Over' or 'Under')
    """
    rows = []
    for category in categories:
        totals = category_totals(lines, category)
        rows.append({
            'Category': category,
            'Budgeted': totals.budgeted,
            'Actual': totals.actual,
            'Remaining': totals.remaining,
            'Percent Used': utilization_percent(totals.budgeted, totals.actual, precision),
            'Status': 'Over' if totals.is_over_budget else 'Under',
        })
    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)


def lines_frame(lines: Sequence[BudgetLine]) -> pd.DataFrame:
    """One row per budget line, for the item table under each category."""
    rows = [
        {
            'Category': line.category,
            'Item': line.item_name,
            'Budgeted': line.budgeted_amount,
            'Actual': line.actual_amount,
            'Status': LineStatus(line.status).value,
            'Vendor': line.vendor_name,
            'Payment Mode': line.payment_mode,
            'Over Budget': line.is_over_budget,
        }
        for line in lines
    ]
    return pd.DataFrame(rows, columns=LINE_COLUMNS)


def savings_frame(months: Sequence[FinanceMonth], total_budget: float) -> pd.DataFrame:
    """Monthly and cumulative savings alongside the flat budget target.

    Returns:
        DataFrame with columns Month (first-of-month Timestamp), Monthly,
        Cumulative, Target, sorted by month
    """
    points = cumulative_savings(months)
    rows: List[dict] = [
        {
            'Month': pd.Timestamp(point.month_year),
            'Monthly': point.available_funds_month,
            'Cumulative': point.cumulative_available,
            'Target': float(total_budget),
        }
        for point in points
    ]
    return pd.DataFrame(rows, columns=SAVINGS_COLUMNS)
