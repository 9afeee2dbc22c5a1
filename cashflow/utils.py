"""Shared utilities for the cash flow chart."""

from __future__ import annotations

DEFAULT_CURRENCY = "NZD"

_SYMBOLS = {"NZD": "NZ$", "USD": "US$", "AUD": "A$", "GBP": "£", "EUR": "€"}


def format_currency(value: float, currency: str = DEFAULT_CURRENCY) -> str:
    """Return a human-readable currency string."""

    symbol = _SYMBOLS.get(currency.upper(), f"{currency.upper()} ")
    return f"{symbol}{value:,.2f}"
