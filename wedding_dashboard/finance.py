"""Finance tracker arithmetic.

Loan instalments, net monthly funds and the funding-progress summary shown
on the finance tracker cards.  Running totals come from
:func:`~wedding_dashboard.aggregation.cumulative_savings` so the stored
``cumulative_available`` column is never relied upon.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import List, Optional, Sequence

from .aggregation import cumulative_savings, monthly_savings_target
from .config import DEFAULT_TARGET_WARNING_THRESHOLD
from .models import FinanceMonth, FundingStatus, SavingsPlan

ON_TRACK_PERCENT = 90.0
GOOD_PROGRESS_PERCENT = 60.0


def monthly_emi(principal: float, annual_rate_percent: float, tenure_months: int) -> float:
    """Equated monthly instalment for a reducing-balance loan.

    Args:
        principal: Loan amount
        annual_rate_percent: Yearly interest rate, e.g. ``10`` for 10%
        tenure_months: Number of monthly instalments

    Returns:
        Instalment amount, or ``0.0`` when there is no loan or no tenure

    Example:
        >>> round(monthly_emi(300000, 10, 12), 2)
        26374.77
    """
    if principal <= 0 or tenure_months <= 0:
        return 0.0
    rate = annual_rate_percent / 12.0 / 100.0
    if rate == 0:
        return principal / tenure_months
    growth = (1.0 + rate) ** tenure_months
    return principal * rate * growth / (growth - 1.0)


def available_funds(month: FinanceMonth) -> float:
    """Net cash available in a month after the EMI and card spend."""
    inflow = month.monthly_salary + month.bonus_income + month.cash_holding_1 + month.cash_holding_2
    outflow = month.monthly_emi + month.credit_card_spent
    return inflow - outflow


def with_derived_fields(months: Sequence[FinanceMonth]) -> List[FinanceMonth]:
    """Return sorted copies with EMI, net funds and running totals filled in.

    A stored EMI is kept; one is only computed from the loan terms when the
    record has none.  ``available_funds_month`` and ``cumulative_available``
    are always recomputed.
    """
    filled: List[FinanceMonth] = []
    for month in sorted(months, key=lambda m: m.month_year):
        emi = month.monthly_emi or monthly_emi(
            month.loan_amount, month.loan_interest_rate, month.loan_tenure_months
        )
        month = replace(month, monthly_emi=emi)
        filled.append(replace(month, available_funds_month=available_funds(month)))

    points = cumulative_savings(filled)
    return [
        replace(month, cumulative_available=point.cumulative_available)
        for month, point in zip(filled, points)
    ]


def funding_progress(current_available: float, total_budget: float) -> float:
    """Percent of the total budget already arranged (unrounded)."""
    if total_budget == 0:
        return 0.0
    return current_available / total_budget * 100.0


def financial_status(progress_percent: float) -> FundingStatus:
    if progress_percent >= ON_TRACK_PERCENT:
        return FundingStatus.on_track
    if progress_percent >= GOOD_PROGRESS_PERCENT:
        return FundingStatus.good_progress
    return FundingStatus.needs_attention


def savings_plan(
    months: Sequence[FinanceMonth],
    total_budget: float,
    target_date: date,
    today: Optional[date] = None,
    warning_threshold: float = DEFAULT_TARGET_WARNING_THRESHOLD,
) -> SavingsPlan:
    """Summarise progress towards the wedding budget.

    The funds arranged so far are the recomputed running total of the most
    recent month.

    Args:
        months: Finance month snapshot, any order
        total_budget: Sum of budgeted amounts across all budget lines
        target_date: Wedding date
        today: Reference date, defaults to the current date
        warning_threshold: Monthly target above which the plan is flagged

    Returns:
        Progress, status and the per-month savings target
    """
    points = cumulative_savings(months)
    current = points[-1].cumulative_available if points else 0.0
    progress = funding_progress(current, total_budget)
    target = monthly_savings_target(current, total_budget, target_date, today or date.today())
    return SavingsPlan(
        current_available=current,
        total_budget=float(total_budget),
        progress_percent=progress,
        status=financial_status(progress),
        target=target,
        needs_attention=target.monthly_target > warning_threshold,
    )
