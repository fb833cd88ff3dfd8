from datetime import date

import pytest

from wedding_dashboard.finance import (
    available_funds,
    financial_status,
    funding_progress,
    monthly_emi,
    savings_plan,
    with_derived_fields,
)
from wedding_dashboard.models import FinanceMonth, FundingStatus


def test_monthly_emi_standard_loan():
    assert monthly_emi(300000, 10, 12) == pytest.approx(26374.77, abs=0.01)


def test_monthly_emi_zero_rate_divides_evenly():
    assert monthly_emi(120000, 0, 12) == 10000


@pytest.mark.parametrize('principal, tenure', [(0, 12), (100000, 0), (-5, 12)])
def test_monthly_emi_without_loan_is_zero(principal, tenure):
    assert monthly_emi(principal, 10, tenure) == 0


def test_available_funds_nets_outflows():
    month = FinanceMonth(
        month_year=date(2025, 1, 1),
        monthly_salary=80000,
        bonus_income=5000,
        cash_holding_1=2000,
        cash_holding_2=1000,
        monthly_emi=26000,
        credit_card_spent=12000,
    )
    assert available_funds(month) == 50000


def test_with_derived_fields_recomputes_running_totals():
    months = [
        FinanceMonth(month_year=date(2025, 2, 1), monthly_salary=80000, monthly_emi=30000,
                     cumulative_available=1),
        FinanceMonth(month_year=date(2025, 1, 1), monthly_salary=80000, loan_amount=120000,
                     loan_tenure_months=12),
    ]
    derived = with_derived_fields(months)
    assert [m.month_year for m in derived] == [date(2025, 1, 1), date(2025, 2, 1)]
    assert derived[0].monthly_emi == 10000
    assert derived[0].available_funds_month == 70000
    assert derived[1].monthly_emi == 30000
    assert [m.cumulative_available for m in derived] == [70000, 120000]
    # originals untouched
    assert months[0].cumulative_available == 1


def test_funding_progress_guards_zero_budget():
    assert funding_progress(1000, 0) == 0
    assert funding_progress(250, 1000) == 25


@pytest.mark.parametrize(
    'progress, expected',
    [
        (95, FundingStatus.on_track),
        (90, FundingStatus.on_track),
        (60, FundingStatus.good_progress),
        (59.9, FundingStatus.needs_attention),
        (0, FundingStatus.needs_attention),
    ],
)
def test_financial_status_thresholds(progress, expected):
    assert financial_status(progress) == expected


def test_savings_plan_uses_recomputed_total():
    months = [
        FinanceMonth(month_year=date(2025, 1, 1), available_funds_month=200000, cumulative_available=5),
        FinanceMonth(month_year=date(2025, 2, 1), available_funds_month=200000, cumulative_available=5),
    ]
    plan = savings_plan(months, 1000000, date(2026, 1, 19), today=date(2025, 7, 19))
    assert plan.current_available == 400000
    assert plan.progress_percent == pytest.approx(40)
    assert plan.status is FundingStatus.needs_attention
    assert plan.target.monthly_target == 100000
    assert plan.needs_attention


def test_savings_plan_without_months():
    plan = savings_plan([], 0, date(2026, 1, 31), today=date(2025, 7, 19))
    assert plan.current_available == 0
    assert plan.progress_percent == 0
    assert plan.target.monthly_target == 0
    assert not plan.needs_attention


def test_savings_plan_threshold_is_configurable():
    months = [FinanceMonth(month_year=date(2025, 1, 1), available_funds_month=400000)]
    plan = savings_plan(months, 1000000, date(2026, 1, 19), today=date(2025, 7, 19),
                        warning_threshold=150000)
    assert not plan.needs_attention
