"""Synthetic cash flow data used for placeholders and the demo fetch.

Amounts are drawn uniformly from a fixed range with a numpy ``Generator`` so a
seed reproduces the same series. Every generated series carries the same
category labels, so a placeholder and the eventual content share one shape.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import numpy as np

from .models import WEEKDAYS, CashFlowRecord, CashFlowSeries, ReportPeriod

DEFAULT_SEED = 7
AMOUNT_RANGE = (0.0, 150.0)


def generate_records(
    labels: Sequence[str] = WEEKDAYS,
    *,
    rng: np.random.Generator,
    low: float = AMOUNT_RANGE[0],
    high: float = AMOUNT_RANGE[1],
) -> tuple[CashFlowRecord, ...]:
    """Return one record per label with random cash in/out amounts."""

    if low < 0 or high < low:
        raise ValueError("amount range must satisfy 0 <= low <= high")

    amounts = rng.uniform(low, high, size=(len(labels), 2)).round(2)
    return tuple(
        CashFlowRecord(label=label, cash_in=float(cash_in), cash_out=float(cash_out))
        for label, (cash_in, cash_out) in zip(labels, amounts)
    )


def generate_series(
    *,
    seed: int | None = None,
    labels: Sequence[str] = WEEKDAYS,
    rng: np.random.Generator | None = None,
) -> CashFlowSeries:
    """Generate a week-to-date and month-to-date series over ``labels``.

    Passing ``rng`` draws from an existing generator and ignores ``seed``.
    """

    if rng is None:
        rng = np.random.default_rng(seed)
    return CashFlowSeries(
        week_to_date=generate_records(labels, rng=rng),
        month_to_date=generate_records(labels, rng=rng),
    )


def write_series_csv(series: CashFlowSeries, output_dir: str | Path = Path("data")) -> tuple[Path, Path]:
    """Persist both periods of ``series`` to CSV files."""

    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    week_path = output_path / "cash_flow_week_to_date.csv"
    series.to_frame(ReportPeriod.WEEK).to_csv(week_path, index=False)

    month_path = output_path / "cash_flow_month_to_date.csv"
    series.to_frame(ReportPeriod.MONTH).to_csv(month_path, index=False)

    return week_path, month_path
