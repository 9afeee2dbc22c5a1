"""View controller tying the provider, loading state and tap selection together."""

from __future__ import annotations

import asyncio

from .logging_setup import get_logger
from .models import CashFlowRecord, CashFlowSeries, ReportPeriod
from .provider import CashFlowProvider, FetchError
from .selection import CategoryLookup, Selection, TapResolver
from .state import Idle, InvalidTransitionError, Loading, LoadingStateMachine

logger = get_logger("cashflow.controller")


class CashFlowController:
    """Owns the state of one cash flow chart view.

    The view calls :meth:`start` (or awaits :meth:`load`) when it becomes
    active and :meth:`cancel` when it is torn down. Once cancelled, a pending
    fetch can no longer change the state.
    """

    def __init__(self, provider: CashFlowProvider, *, period: ReportPeriod = ReportPeriod.WEEK) -> None:
        self.provider = provider
        self.period = ReportPeriod(period)
        self.state: LoadingStateMachine[CashFlowSeries] = LoadingStateMachine()
        self.resolver = TapResolver()
        self._task: asyncio.Task[None] | None = None
        self._cancelled = False

    @property
    def selection(self) -> Selection:
        return self.resolver.selection

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    async def load(self) -> None:
        """Show the placeholder, fetch the series, then resolve or fail."""

        if self._cancelled:
            raise InvalidTransitionError("controller has been cancelled")

        if self.state.is_terminal():
            raise InvalidTransitionError(f"cannot load from {type(self.state.current).__name__}")

        placeholder = self.provider.fetch_placeholder()
        try:
            self.state.begin(placeholder)
            series = await self.provider.fetch_series()
        except FetchError as exc:
            if not self._cancelled:
                self.state.fail(exc.reason)
            return
        except BaseException as exc:
            # Interrupted while showing our placeholder: leave a retryable state.
            if not self._cancelled and self._showing(placeholder):
                self.state.fail(f"interrupted: {type(exc).__name__}")
            raise

        if self._cancelled:
            logger.info("Discarding cash flow fetched after cancellation")
            return
        self.state.resolve(series)

    def _showing(self, placeholder: CashFlowSeries) -> bool:
        current = self.state.current
        return isinstance(current, Loading) and current.placeholder is placeholder

    def start(self) -> asyncio.Task[None]:
        """Schedule :meth:`load` on the running event loop."""

        if self._task is not None and not self._task.done():
            raise InvalidTransitionError("a fetch is already in progress")
        self._task = asyncio.get_running_loop().create_task(self.load())
        return self._task

    def retry(self) -> asyncio.Task[None]:
        if not self.state.is_failed():
            raise InvalidTransitionError("retry is only possible after a failed fetch")
        return self.start()

    def cancel(self) -> None:
        """Stop any pending fetch; later completions leave the state untouched."""

        if self._cancelled:
            return
        self._cancelled = True
        if self._task is not None and not self._task.done():
            self._task.cancel()
        if isinstance(self.state.current, Idle) or self.state.is_loading():
            self.state.cancel()
            logger.info("Cash flow fetch cancelled")

    def set_period(self, period: ReportPeriod) -> None:
        period = ReportPeriod(period)
        if period is not self.period:
            self.period = period
            self.resolver.clear()

    def visible_records(self) -> tuple[CashFlowRecord, ...]:
        series = self.state.payload
        if series is None:
            return ()
        return series.records_for(self.period)

    def tap(self, relative_x: float, category_at: CategoryLookup) -> Selection:
        """Resolve a tap on the plot area; ignored until content is loaded."""

        if not self.state.is_loaded():
            return self.resolver.selection
        return self.resolver.tap(self.visible_records(), relative_x, category_at)
