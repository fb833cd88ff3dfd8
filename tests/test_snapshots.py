from __future__ import annotations

import logging
from datetime import date

import pandas as pd
import pytest

from wedding_dashboard.errors import SnapshotError
from wedding_dashboard.models import LineStatus
from wedding_dashboard.snapshots import (
    budget_lines_from_frame,
    finance_months_from_frame,
    load_budget_lines,
    load_finance_months,
)


def _budget_df():
    return pd.DataFrame([
        {
            'category': 'Engagement',
            'item_name': 'Rings',
            'budgeted_amount': 50000,
            'actual_amount': 52000,
            'status': 'paid',
            'vendor_name': 'Jeweller',
            'payment_mode': None,
            'notes': '  ',
        },
        {
            'category': 'Home Setup',
            'item_name': 'Sofa',
            'budgeted_amount': '30000',
            'actual_amount': None,
            'status': 'Pending',
            'vendor_name': None,
            'payment_mode': 'UPI',
            'notes': 'deliver after March',
        },
    ])


def _finance_df():
    return pd.DataFrame([
        {
            'month_year': '2025-02-01',
            'monthly_salary': 80000,
            'cash_hdfc': 1000,
            'cash_boi': 2000,
            'credit_card_spent_idfc': 5000,
            'available_funds_month': 48000,
            'cumulative_available': 98000,
        },
        {
            'month_year': '2025-01-15',
            'monthly_salary': 80000,
            'loan_tenure_months': 12,
            'available_funds_month': 50000,
            'cumulative_available': None,
        },
    ])


def test_budget_lines_from_frame_maps_columns():
    lines = budget_lines_from_frame(_budget_df())
    assert len(lines) == 2
    rings, sofa = lines
    assert rings.status is LineStatus.paid
    assert rings.is_over_budget
    assert rings.notes is None
    assert rings.vendor_name == 'Jeweller'
    assert sofa.budgeted_amount == 30000
    assert sofa.actual_amount == 0
    assert sofa.status is LineStatus.pending
    assert sofa.payment_mode == 'UPI'


def test_unknown_status_defaults_to_planned(caplog):
    df = pd.DataFrame([{'category': 'A', 'item_name': 'x', 'status': 'cancelled'}])
    with caplog.at_level(logging.WARNING):
        lines = budget_lines_from_frame(df)
    assert lines[0].status is LineStatus.planned
    assert 'unknown status' in caplog.text


def test_budget_lines_missing_column_raises():
    with pytest.raises(SnapshotError, match='item_name'):
        budget_lines_from_frame(pd.DataFrame([{'category': 'A'}]))


def test_empty_frames_are_valid_snapshots():
    assert budget_lines_from_frame(pd.DataFrame()) == []
    assert finance_months_from_frame(pd.DataFrame()) == []


def test_finance_months_from_frame_aliases_and_normalises():
    months = finance_months_from_frame(_finance_df())
    feb, jan = months
    assert feb.month_year == date(2025, 2, 1)
    assert feb.cash_holding_1 == 1000
    assert feb.cash_holding_2 == 2000
    assert feb.credit_card_spent == 5000
    assert feb.cumulative_available == 98000
    assert jan.month_year == date(2025, 1, 1)
    assert jan.loan_tenure_months == 12
    assert jan.cumulative_available is None
    assert jan.bonus_income == 0


def test_finance_months_rejects_duplicate_months():
    df = pd.DataFrame([
        {'month_year': '2025-01-01', 'available_funds_month': 1},
        {'month_year': '2025-01-20', 'available_funds_month': 2},
    ])
    with pytest.raises(SnapshotError, match='duplicate'):
        finance_months_from_frame(df)


def test_finance_months_rejects_bad_dates():
    df = pd.DataFrame([{'month_year': 'not a date', 'available_funds_month': 1}])
    with pytest.raises(SnapshotError, match='month_year'):
        finance_months_from_frame(df)


def test_load_budget_lines_from_csv(tmp_path):
    path = tmp_path / 'budget_items.csv'
    _budget_df().to_csv(path, index=False)
    lines = load_budget_lines(path)
    assert [line.item_name for line in lines] == ['Rings', 'Sofa']


def test_load_finance_months_from_csv(tmp_path):
    path = tmp_path / 'finance_tracker.csv'
    _finance_df().to_csv(path, index=False)
    months = load_finance_months(path)
    assert {m.month_year for m in months} == {date(2025, 1, 1), date(2025, 2, 1)}


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(SnapshotError, match='not found'):
        load_budget_lines(tmp_path / 'missing.csv')


def test_load_empty_file_returns_no_records(tmp_path):
    path = tmp_path / 'empty.csv'
    path.write_text('')
    assert load_finance_months(path) == []


def test_load_header_only_file_returns_no_records(tmp_path):
    path = tmp_path / 'header.csv'
    path.write_text('category,item_name,budgeted_amount,actual_amount\n')
    assert load_budget_lines(path) == []
