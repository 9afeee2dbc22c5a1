"""Data model for cash-in vs cash-out chart series."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import pandas as pd

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday")


class CashFlowType(str, Enum):
    """Legend names for the two bar series."""

    MONEY_IN = "Money In"
    MONEY_OUT = "Money Out"


class ReportPeriod(str, Enum):
    WEEK = "week"
    MONTH = "month"

    @property
    def display_name(self) -> str:
        return "Week to Date" if self is ReportPeriod.WEEK else "Month to Date"


@dataclass(frozen=True)
class CashFlowRecord:
    """Cash flow for a single category (a weekday)."""

    label: str
    cash_in: float
    cash_out: float

    def __post_init__(self) -> None:
        if not self.label:
            raise ValueError("label must be a non-empty string")
        for name in ("cash_in", "cash_out"):
            value = float(getattr(self, name))
            if not math.isfinite(value) or value < 0:
                raise ValueError(f"{name} must be a finite, non-negative amount (got {value!r})")
            object.__setattr__(self, name, value)

    def to_dict(self) -> dict[str, Any]:
        return {"label": self.label, "cash_in": self.cash_in, "cash_out": self.cash_out}


def _as_records(records: Iterable[CashFlowRecord], *, name: str) -> tuple[CashFlowRecord, ...]:
    items = tuple(records)
    seen: set[str] = set()
    for record in items:
        if record.label in seen:
            raise ValueError(f"duplicate label {record.label!r} in {name}")
        seen.add(record.label)
    return items


@dataclass(frozen=True)
class CashFlowSeries:
    """Week-to-date and month-to-date records, each in display order."""

    week_to_date: tuple[CashFlowRecord, ...] = field(default_factory=tuple)
    month_to_date: tuple[CashFlowRecord, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "week_to_date", _as_records(self.week_to_date, name="week_to_date"))
        object.__setattr__(self, "month_to_date", _as_records(self.month_to_date, name="month_to_date"))

    def records_for(self, period: ReportPeriod) -> tuple[CashFlowRecord, ...]:
        return self.week_to_date if ReportPeriod(period) is ReportPeriod.WEEK else self.month_to_date

    def labels(self, period: ReportPeriod) -> list[str]:
        return [record.label for record in self.records_for(period)]

    def is_complete(self) -> bool:
        """Both periods carry at least one record."""

        return bool(self.week_to_date) and bool(self.month_to_date)

    def to_frame(self, period: ReportPeriod) -> pd.DataFrame:
        """Return the records of one period as a :class:`pandas.DataFrame`."""

        return pd.DataFrame(
            [record.to_dict() for record in self.records_for(period)],
            columns=["label", "cash_in", "cash_out"],
        )

    def to_dict(self) -> dict[str, list[dict[str, Any]]]:
        return {
            "week_to_date": [record.to_dict() for record in self.week_to_date],
            "month_to_date": [record.to_dict() for record in self.month_to_date],
        }
