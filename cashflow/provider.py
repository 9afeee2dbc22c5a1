"""Data provider standing in for a network or database call."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from typing import Callable

import numpy as np

from . import synth
from .config import DEFAULT_LATENCY_SECONDS, Settings
from .logging_setup import get_logger
from .models import WEEKDAYS, CashFlowSeries, ReportPeriod

logger = get_logger("cashflow.provider")


class FetchError(RuntimeError):
    """Raised when the series could not be produced."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class CashFlowProvider:
    """Produce :class:`CashFlowSeries` values, optionally after a delay.

    ``labels`` fixes the categories of every series the provider hands out, so
    a placeholder always has the shape of the content that replaces it.
    ``source`` replaces the random generator for the real fetch; it is called
    once per :meth:`fetch_series` after the simulated latency has elapsed.
    """

    def __init__(
        self,
        *,
        latency: float = DEFAULT_LATENCY_SECONDS,
        seed: int | None = None,
        labels: Sequence[str] = WEEKDAYS,
        source: Callable[[], CashFlowSeries] | None = None,
    ) -> None:
        if latency < 0:
            raise ValueError("latency must not be negative")
        if not labels:
            raise ValueError("labels must not be empty")
        self.latency = latency
        self.labels = list(labels)
        self._rng = np.random.default_rng(seed)
        self._source = source

    @classmethod
    def from_settings(cls, settings: Settings) -> CashFlowProvider:
        return cls(latency=settings.latency_seconds, seed=settings.seed)

    def fetch_placeholder(self) -> CashFlowSeries:
        return synth.generate_series(labels=self.labels, rng=self._rng)

    async def fetch_series(self) -> CashFlowSeries:
        """Wait for the simulated latency, then return the series.

        Failures of ``source`` and series whose categories differ from
        ``labels`` are raised as :class:`FetchError`; cancellation propagates
        unchanged.
        """

        await asyncio.sleep(self.latency)
        try:
            if self._source is not None:
                series = self._source()
            else:
                series = synth.generate_series(labels=self.labels, rng=self._rng)
        except Exception as exc:
            logger.warning("Cash flow fetch failed: %s", exc)
            raise FetchError(f"{type(exc).__name__}: {exc}") from exc

        if not isinstance(series, CashFlowSeries):
            raise FetchError(f"source returned {type(series).__name__}, expected CashFlowSeries")
        if not series.is_complete():
            raise FetchError("source returned an empty series")
        for period in ReportPeriod:
            if series.labels(period) != self.labels:
                raise FetchError(
                    f"{period.value} categories {series.labels(period)} do not match {self.labels}"
                )
        return series
