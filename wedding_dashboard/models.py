"""Typed records for budget lines, finance months and derived views.

Snapshots handed to the aggregation functions are made of the frozen
records defined here.  Derived results (totals, chart points, savings
projections) are also plain dataclasses so the rendering layer can read
them by attribute or turn them into DataFrames.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional


class LineStatus(str, Enum):
    planned = "planned"
    pending = "pending"
    paid = "paid"


class FundingStatus(str, Enum):
    on_track = "On Track"
    good_progress = "Good Progress"
    needs_attention = "Needs Attention"


# ---------------------------------------------------------------------------
# Snapshot records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BudgetLine:
    category: str
    item_name: str
    budgeted_amount: float = 0.0
    actual_amount: float = 0.0
    status: LineStatus = LineStatus.planned
    notes: Optional[str] = None
    vendor_name: Optional[str] = None
    payment_mode: Optional[str] = None

    @property
    def is_over_budget(self) -> bool:
        return self.actual_amount > self.budgeted_amount


@dataclass(frozen=True)
class FinanceMonth:
    """One calendar month of savings tracking.

    ``cumulative_available`` is whatever the data store last saved.  It is
    kept for display and reconciliation only; running totals are always
    recomputed from ``available_funds_month``.
    """

    month_year: date
    monthly_salary: float = 0.0
    loan_amount: float = 0.0
    loan_interest_rate: float = 0.0
    loan_tenure_months: int = 0
    monthly_emi: float = 0.0
    cash_holding_1: float = 0.0
    cash_holding_2: float = 0.0
    credit_card_spent: float = 0.0
    bonus_income: float = 0.0
    available_funds_month: float = 0.0
    cumulative_available: Optional[float] = None


# ---------------------------------------------------------------------------
# Derived views
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Totals:
    budgeted: float = 0.0
    actual: float = 0.0
    remaining: float = 0.0

    @property
    def is_over_budget(self) -> bool:
        return self.remaining < 0


@dataclass(frozen=True)
class SeriesPoint:
    label: str
    value: float


@dataclass(frozen=True)
class CategoryBar:
    label: str
    budgeted: float
    actual: float
    remaining: float


@dataclass(frozen=True)
class SavingsPoint:
    month_year: date
    available_funds_month: float
    cumulative_available: float


@dataclass(frozen=True)
class SavingsTarget:
    remaining_needed: float
    months_remaining: int
    monthly_target: float


@dataclass(frozen=True)
class SavingsPlan:
    """Everything the finance tracker cards need in one place."""

    current_available: float
    total_budget: float
    progress_percent: float
    status: FundingStatus
    target: SavingsTarget
    needs_attention: bool
