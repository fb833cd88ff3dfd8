"""Snapshot loading at the data-store boundary.

Budget items and finance months are exported from the hosted database as
tabular rows.  This module turns those rows (a CSV file or a DataFrame
already in memory) into the typed records the aggregation functions take.
Column names follow the database schema; the bank-specific cash and card
columns are mapped to neutral field names.

Fetch and parse failures raise :class:`~wedding_dashboard.errors.SnapshotError`
so callers can stop before aggregating anything.  An empty table is a valid
snapshot and yields an empty list.
"""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import pandas as pd

from .errors import SnapshotError
from .models import BudgetLine, FinanceMonth, LineStatus

logger = logging.getLogger(__name__)

FINANCE_COLUMN_ALIASES: Dict[str, str] = {
    'cash_hdfc': 'cash_holding_1',
    'cash_boi': 'cash_holding_2',
    'credit_card_spent_idfc': 'credit_card_spent',
}

BUDGET_NUMERIC_FIELDS = ('budgeted_amount', 'actual_amount')
BUDGET_TEXT_FIELDS = ('notes', 'vendor_name', 'payment_mode')
FINANCE_NUMERIC_FIELDS = (
    'monthly_salary',
    'loan_amount',
    'loan_interest_rate',
    'monthly_emi',
    'cash_holding_1',
    'cash_holding_2',
    'credit_card_spent',
    'bonus_income',
    'available_funds_month',
)


def _require_columns(df: pd.DataFrame, required: List[str], table: str) -> None:
    missing = [col for col in required if col not in df.columns]
    if missing:
        raise SnapshotError(f"{table} snapshot is missing column(s): {', '.join(missing)}")


def _numeric_column(df: pd.DataFrame, column: str) -> pd.Series:
    if column not in df.columns:
        return pd.Series(0.0, index=df.index)
    return pd.to_numeric(df[column], errors='coerce').fillna(0.0).astype(float)


def _optional_text(value: Any) -> Optional[str]:
    if value is None or pd.isna(value):
        return None
    text = str(value).strip()
    return text or None


def _parse_status(value: Any, row_label: Any) -> LineStatus:
    text = _optional_text(value)
    if text is None:
        return LineStatus.planned
    try:
        return LineStatus(text.lower())
    except ValueError:
        logger.warning("Row %s has unknown status %r; treating it as planned", row_label, text)
        return LineStatus.planned


def budget_lines_from_frame(df: pd.DataFrame) -> List[BudgetLine]:
    """Convert ``budget_items`` rows into :class:`BudgetLine` records.

    Args:
        df: Rows with at least ``category`` and ``item_name`` columns

    Returns:
        Records in row order.  Missing amounts become ``0.0``.

    Raises:
        SnapshotError: If a required column is absent
    """
    if df.empty:
        return []
    _require_columns(df, ['category', 'item_name'], 'budget_items')

    amounts = {field: _numeric_column(df, field) for field in BUDGET_NUMERIC_FIELDS}
    lines: List[BudgetLine] = []
    for idx, row in df.iterrows():
        text_fields = {
            field: _optional_text(row[field]) if field in df.columns else None
            for field in BUDGET_TEXT_FIELDS
        }
        lines.append(
            BudgetLine(
                category=_optional_text(row['category']) or '',
                item_name=_optional_text(row['item_name']) or '',
                budgeted_amount=float(amounts['budgeted_amount'].loc[idx]),
                actual_amount=float(amounts['actual_amount'].loc[idx]),
                status=_parse_status(row.get('status'), idx),
                **text_fields,
            )
        )
    return lines


def finance_months_from_frame(df: pd.DataFrame) -> List[FinanceMonth]:
    """Convert ``finance_tracker`` rows into :class:`FinanceMonth` records.

    ``month_year`` values are normalised to the first of their month.  The
    stored ``cumulative_available`` is carried over as-is (or ``None`` when
    blank) and is only used for reconciliation.

    Raises:
        SnapshotError: If ``month_year`` is missing or unparseable, or if the
            same month appears twice
    """
    if df.empty:
        return []
    df = df.rename(columns=FINANCE_COLUMN_ALIASES)
    _require_columns(df, ['month_year'], 'finance_tracker')

    parsed = pd.to_datetime(df['month_year'], errors='coerce')
    bad_rows = parsed[parsed.isna()].index.tolist()
    if bad_rows:
        raise SnapshotError(f"finance_tracker rows {bad_rows} have an invalid month_year")
    month_keys = parsed.dt.to_period('M')
    duplicated = month_keys[month_keys.duplicated()].astype(str).unique().tolist()
    if duplicated:
        raise SnapshotError(f"finance_tracker has duplicate months: {', '.join(duplicated)}")

    numbers = {field: _numeric_column(df, field) for field in FINANCE_NUMERIC_FIELDS}
    tenure = _numeric_column(df, 'loan_tenure_months').astype(int)
    if 'cumulative_available' in df.columns:
        stored_cumulative = pd.to_numeric(df['cumulative_available'], errors='coerce')
    else:
        stored_cumulative = pd.Series(float('nan'), index=df.index)

    months: List[FinanceMonth] = []
    for idx in df.index:
        period = month_keys.loc[idx]
        cached = stored_cumulative.loc[idx]
        months.append(
            FinanceMonth(
                month_year=date(period.year, period.month, 1),
                loan_tenure_months=int(tenure.loc[idx]),
                cumulative_available=None if pd.isna(cached) else float(cached),
                **{field: float(series.loc[idx]) for field, series in numbers.items()},
            )
        )
    return months


def _read_snapshot(path: Union[str, Path]) -> pd.DataFrame:
    target = Path(path)
    if not target.exists():
        raise SnapshotError(f"Snapshot file not found: {target}")
    try:
        df = pd.read_csv(target)
    except pd.errors.EmptyDataError:
        logger.info("Snapshot %s is empty", target)
        return pd.DataFrame()
    except (pd.errors.ParserError, UnicodeDecodeError, OSError) as exc:
        raise SnapshotError(f"Could not read snapshot {target}: {exc}") from exc
    logger.debug("Read %d row(s) from %s", len(df), target)
    return df


def load_budget_lines(path: Union[str, Path]) -> List[BudgetLine]:
    """Load a ``budget_items`` CSV export."""
    lines = budget_lines_from_frame(_read_snapshot(path))
    logger.info("Loaded %d budget line(s) from %s", len(lines), path)
    return lines


def load_finance_months(path: Union[str, Path]) -> List[FinanceMonth]:
    """Load a ``finance_tracker`` CSV export."""
    months = finance_months_from_frame(_read_snapshot(path))
    logger.info("Loaded %d finance month(s) from %s", len(months), path)
    return months
