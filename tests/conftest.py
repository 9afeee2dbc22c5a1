"""Shared fixtures for the cash flow tests."""

from __future__ import annotations

import pytest
from cashflow.models import CashFlowRecord, CashFlowSeries

WEEKDAY_AMOUNTS = [
    ("Monday", 10.0, 20.0),
    ("Tuesday", 30.0, 5.0),
    ("Wednesday", 12.5, 40.0),
    ("Thursday", 0.0, 7.25),
    ("Friday", 99.0, 1.0),
]


@pytest.fixture
def weekday_records() -> tuple[CashFlowRecord, ...]:
    return tuple(CashFlowRecord(label, cash_in, cash_out) for label, cash_in, cash_out in WEEKDAY_AMOUNTS)


@pytest.fixture
def weekday_series(weekday_records) -> CashFlowSeries:
    return CashFlowSeries(week_to_date=weekday_records, month_to_date=weekday_records)
