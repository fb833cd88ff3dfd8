"""Formatting utilities for currency and percentage display."""

from __future__ import annotations

from typing import Union

from .config import DEFAULT_CURRENCY_SYMBOL


def format_currency(
    amount: Union[float, int],
    include_sign: bool = True,
    symbol: str = DEFAULT_CURRENCY_SYMBOL,
) -> str:
    """Format a currency amount with thousands separators and no decimals.

    Args:
        amount: The amount to format
        include_sign: Whether to prefix the currency symbol
        symbol: Currency symbol to use

    Returns:
        Formatted currency string (e.g., "₹1,234" or "1,234").  Negative
        amounts keep the minus sign in front of the symbol.

    Example:
        >>> format_currency(1234.56)
        '₹1,235'
        >>> format_currency(-500, symbol='$')
        '-$500'
    """
    formatted = f"{abs(amount):,.0f}"
    sign = "-" if amount < 0 and formatted != "0" else ""
    return f"{sign}{symbol}{formatted}" if include_sign else f"{sign}{formatted}"


def format_thousands(amount: Union[float, int], symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    """Compact form used on summary cards, e.g. ``₹350k``."""
    return f"{symbol}{amount / 1000:,.0f}k"


def format_percent(value: float, precision: int = 1) -> str:
    return f"{value:.{precision}f}%"


def escape_for_markdown(text: str) -> str:
    """Escape dollar signs so Streamlit markdown doesn't start LaTeX mode."""
    return text.replace("$", "\\$")
