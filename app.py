"""Streamlit entry point for the Cash In & Out chart."""

from __future__ import annotations

import asyncio
from typing import Any

import streamlit as st
from cashflow import config, logging_setup, viz
from cashflow.controller import CashFlowController
from cashflow.models import ReportPeriod
from cashflow.provider import CashFlowProvider

_CONTROLLER_KEY = "cash_flow_controller"
_LAST_CLICK_KEY = "cash_flow_last_click"
# Nominal plot-area width used to turn a clicked bar into an x offset.
_PLOT_WIDTH = 1000.0


def _get_controller(settings: config.Settings) -> CashFlowController:
    controller = st.session_state.get(_CONTROLLER_KEY)
    if controller is None:
        controller = CashFlowController(CashFlowProvider.from_settings(settings))
        st.session_state[_CONTROLLER_KEY] = controller
    return controller


def _chart_key(controller: CashFlowController) -> str:
    return f"cash_flow_chart_{controller.period.value}"


def _clicked_points(event: Any) -> list[dict[str, Any]]:
    if not isinstance(event, dict):
        return []
    return list(event.get("selection", {}).get("points", []))


def _click_signature(key: str) -> tuple[str, tuple[str, ...]]:
    points = _clicked_points(st.session_state.get(key))
    return key, tuple(str(point.get("x")) for point in points)


def _click_offset(point: dict[str, Any], axis: viz.CategoryAxis) -> float | None:
    index = point.get("point_index")
    if isinstance(index, int):
        offset = axis.offset_for_index(index)
        if offset is not None:
            return offset
    return axis.position_for(str(point.get("x")))


def _apply_chart_click(controller: CashFlowController, key: str) -> None:
    """Turn a change of the chart's point selection into a tap.

    Plotly clears its selection when the selected bar is clicked again, so an
    emptied selection is a second tap on the currently selected category.
    """

    points = _clicked_points(st.session_state.get(key))
    signature = _click_signature(key)
    if st.session_state.get(_LAST_CLICK_KEY, (key, ())) == signature:
        return
    st.session_state[_LAST_CLICK_KEY] = signature

    axis = viz.CategoryAxis([record.label for record in controller.visible_records()], _PLOT_WIDTH)
    if points:
        relative_x = _click_offset(points[0], axis)
    elif controller.selection.label is not None:
        relative_x = axis.position_for(controller.selection.label)
    else:
        relative_x = None

    if relative_x is not None:
        controller.tap(relative_x, axis.category_at)


def _render_placeholder(slot: Any, controller: CashFlowController, currency: str) -> None:
    figure = viz.plot_cash_flow(controller.visible_records(), loading=True, currency=currency)
    slot.plotly_chart(figure, use_container_width=True, config={"displayModeBar": False})


def _render_loaded(controller: CashFlowController, currency: str) -> None:
    key = _chart_key(controller)
    _apply_chart_click(controller, key)
    figure = viz.plot_cash_flow(
        controller.visible_records(),
        selection=controller.selection,
        currency=currency,
    )
    st.plotly_chart(
        figure,
        use_container_width=True,
        config={"displayModeBar": False},
        key=key,
        on_select="rerun",
        selection_mode="points",
    )


def main() -> None:
    """Render the Cash In & Out screen."""

    settings = config.load_settings()
    logging_setup.configure_logging(settings.log_level)

    st.set_page_config(page_title="Cash In & Out", page_icon="📊", layout="centered")
    st.title("Cash In & Out")

    controller = _get_controller(settings)

    if controller.state.is_loaded():
        _render_loaded(controller, settings.currency)
    else:
        slot = st.empty()
        if controller.state.is_failed():
            st.error(f"Could not load cash flow: {controller.state.current.reason}")
            _render_placeholder(slot, controller, settings.currency)
            retry = st.button("Retry")
        else:
            retry = True

        if retry:
            def _show_placeholder(_previous: Any, _current: Any) -> None:
                if controller.state.is_loading():
                    _render_placeholder(slot, controller, settings.currency)

            unsubscribe = controller.state.subscribe(_show_placeholder)
            try:
                asyncio.run(controller.load())
            finally:
                unsubscribe()
            st.rerun()

    periods = [ReportPeriod.WEEK, ReportPeriod.MONTH]
    choice = st.radio(
        "Date Range",
        periods,
        index=periods.index(controller.period),
        format_func=lambda period: period.display_name,
        horizontal=True,
    )
    if choice is not controller.period:
        controller.set_period(choice)
        st.session_state[_LAST_CLICK_KEY] = _click_signature(_chart_key(controller))
        st.rerun()


if __name__ == "__main__":
    main()
