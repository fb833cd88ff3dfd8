"""Budget and finance aggregation.

Pure functions that turn snapshots of :class:`~wedding_dashboard.models.BudgetLine`
and :class:`~wedding_dashboard.models.FinanceMonth` records into the totals,
chart series and savings projections shown on the dashboard.  None of them
mutate their inputs or keep state between calls, so they are safe to call
from any number of rendering contexts.

Inputs are assumed to be well formed (non-negative, finite amounts); the
loaders and forms are responsible for rejecting bad rows.  The only failure
class handled here is division by zero, which always yields ``0``.
"""

from __future__ import annotations

import calendar
import math
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List, Sequence

from .models import (
    BudgetLine,
    CategoryBar,
    FinanceMonth,
    LineStatus,
    SavingsPoint,
    SavingsTarget,
    SeriesPoint,
    Totals,
)


def _totals(lines: Iterable[BudgetLine]) -> Totals:
    budgeted = 0.0
    actual = 0.0
    for line in lines:
        budgeted += line.budgeted_amount
        actual += line.actual_amount
    return Totals(budgeted=budgeted, actual=actual, remaining=budgeted - actual)


def category_totals(lines: Sequence[BudgetLine], category: str) -> Totals:
    """Sum budgeted and actual amounts for one category.

    Args:
        lines: Budget line snapshot
        category: Category label, matched exactly

    Returns:
        Totals for the matching lines.  ``remaining`` is negative when the
        category is over budget.  No match gives all zeros.

    Example:
        >>> lines = [BudgetLine('Engagement', 'Rings', 1000, 1200)]
        >>> category_totals(lines, 'Engagement')
        Totals(budgeted=1000.0, actual=1200.0, remaining=-200.0)
    """
    return _totals(line for line in lines if line.category == category)


def grand_totals(lines: Sequence[BudgetLine]) -> Totals:
    """Sum budgeted and actual amounts over every line."""
    return _totals(lines)


def category_breakdown(lines: Sequence[BudgetLine], categories: Sequence[str]) -> Dict[str, Totals]:
    """Map each category (in the given order) to its totals."""
    return {category: category_totals(lines, category) for category in categories}


def utilization_percent(budgeted: float, actual: float, precision: int = 1) -> float:
    """Return ``actual`` as a percentage of ``budgeted``.

    Args:
        budgeted: Planned amount
        actual: Realized amount
        precision: Decimal places kept in the result

    Returns:
        Percentage rounded half-up (12.5 -> 13); ``0.0`` when nothing was
        budgeted.  Non-finite results are returned unrounded.
    """
    if budgeted == 0:
        return 0.0
    percent = actual / budgeted * 100.0
    if not math.isfinite(percent):
        return percent
    step = Decimal(1).scaleb(-precision)
    return float(Decimal(repr(percent)).quantize(step, rounding=ROUND_HALF_UP))


def pie_series(lines: Sequence[BudgetLine], categories: Sequence[str]) -> List[SeriesPoint]:
    """Actual spend per category for a pie chart.

    Categories keep the order they are given in.  Categories with no
    actual spend are left out instead of being drawn as empty slices.
    """
    series: List[SeriesPoint] = []
    for category in categories:
        value = category_totals(lines, category).actual
        if value > 0:
            series.append(SeriesPoint(label=category, value=value))
    return series


def category_bars(lines: Sequence[BudgetLine], categories: Sequence[str]) -> List[CategoryBar]:
    """Budgeted vs actual per category for a grouped bar chart.

    ``remaining`` is clamped at zero here since a bar cannot be negative;
    use :func:`category_totals` to see the signed value.
    """
    bars: List[CategoryBar] = []
    for category in categories:
        totals = category_totals(lines, category)
        bars.append(
            CategoryBar(
                label=category,
                budgeted=totals.budgeted,
                actual=totals.actual,
                remaining=max(0.0, totals.remaining),
            )
        )
    return bars


def spent_vs_remaining(lines: Sequence[BudgetLine]) -> List[SeriesPoint]:
    """Split the overall budget into spent and remaining slices."""
    totals = grand_totals(lines)
    slices = [
        SeriesPoint(label='Spent', value=totals.actual),
        SeriesPoint(label='Remaining', value=max(0.0, totals.remaining)),
    ]
    return [point for point in slices if point.value > 0]


def status_counts(lines: Sequence[BudgetLine]) -> Dict[LineStatus, int]:
    counts = {status: 0 for status in LineStatus}
    for line in lines:
        counts[LineStatus(line.status)] += 1
    return counts


def over_budget_lines(lines: Sequence[BudgetLine]) -> List[BudgetLine]:
    return [line for line in lines if line.is_over_budget]


# ---------------------------------------------------------------------------
# Savings
# ---------------------------------------------------------------------------


def cumulative_savings(months: Sequence[FinanceMonth]) -> List[SavingsPoint]:
    """Running total of available funds, oldest month first.

    The input is sorted by ``month_year`` here; callers may pass months in
    any order.  Any ``cumulative_available`` already stored on a record is
    ignored.

    Args:
        months: Finance month snapshot

    Returns:
        One point per month with the recomputed running total
    """
    points: List[SavingsPoint] = []
    running = 0.0
    for month in sorted(months, key=lambda m: m.month_year):
        running += month.available_funds_month
        points.append(
            SavingsPoint(
                month_year=month.month_year,
                available_funds_month=month.available_funds_month,
                cumulative_available=running,
            )
        )
    return points


def reconcile_cumulative(months: Sequence[FinanceMonth], tolerance: float = 0.01) -> List[SavingsPoint]:
    """Find months whose stored running total disagrees with a recomputation.

    Months without a stored value are skipped.

    Returns:
        The recomputed points for every month that drifted by more than
        ``tolerance``
    """
    stored = {m.month_year: m.cumulative_available for m in months}
    drifted: List[SavingsPoint] = []
    for point in cumulative_savings(months):
        cached = stored.get(point.month_year)
        if cached is None:
            continue
        if abs(cached - point.cumulative_available) > tolerance:
            drifted.append(point)
    return drifted


def _is_last_day_of_month(day: date) -> bool:
    return day.day == calendar.monthrange(day.year, day.month)[1]


def months_between(start: date, end: date) -> int:
    """Whole calendar months from ``start`` to ``end``.

    Partial months are dropped.  A one-month gap ending on the last day of
    a month counts in full even if ``start`` has a later day number
    (Jan 31 -> Feb 28 is one month, but Jan 31 -> Apr 30 is two).  Returns
    0 if ``end`` is not after ``start``.
    """
    if end <= start:
        return 0
    months = (end.year - start.year) * 12 + (end.month - start.month)
    if end.day < start.day and not (months == 1 and _is_last_day_of_month(end)):
        months -= 1
    return max(0, months)


def monthly_savings_target(
    current_available: float,
    total_budget_target: float,
    target_date: date,
    today: date,
) -> SavingsTarget:
    """Savings needed each month to reach the budget by ``target_date``.

    Args:
        current_available: Funds arranged so far
        total_budget_target: Amount needed in total
        target_date: Date the funds must be ready by
        today: Reference date for the projection

    Returns:
        The shortfall, the whole months left and the per-month target.
        The target is ``0`` when nothing is needed or no months are left.

    Example:
        >>> monthly_savings_target(400000, 1000000, date(2026, 1, 19), date(2025, 7, 19))
        SavingsTarget(remaining_needed=600000.0, months_remaining=6, monthly_target=100000.0)
    """
    remaining_needed = max(0.0, float(total_budget_target) - float(current_available))
    months_remaining = months_between(today, target_date)
    if months_remaining > 0:
        monthly_target = remaining_needed / months_remaining
    else:
        monthly_target = 0.0
    return SavingsTarget(
        remaining_needed=remaining_needed,
        months_remaining=months_remaining,
        monthly_target=monthly_target,
    )
