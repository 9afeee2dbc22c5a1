"""Chart helpers for the cash in/out bar chart."""

from __future__ import annotations

from collections.abc import Sequence

import plotly.graph_objects as go

from . import utils
from .models import CashFlowRecord, CashFlowType
from .selection import Selection

LOADED_COLORS = {CashFlowType.MONEY_IN: "purple", CashFlowType.MONEY_OUT: "orange"}
PLACEHOLDER_COLORS = {CashFlowType.MONEY_IN: "black", CashFlowType.MONEY_OUT: "gray"}
POPOVER_WIDTH = 200.0
# Popover width as a fraction of the plot area when placed in paper coordinates.
POPOVER_PAPER_WIDTH = 0.4


class CategoryAxis:
    """Band scale mapping plot-area x offsets to category labels.

    Each category owns an equal-width band of ``plot_width``; ``category_at``
    and ``position_for`` are the two lookups a tap handler needs from a chart.
    """

    def __init__(self, categories: Sequence[str], plot_width: float) -> None:
        if plot_width <= 0:
            raise ValueError("plot_width must be positive")
        self.categories = list(categories)
        self.plot_width = float(plot_width)

    @property
    def band_width(self) -> float:
        if not self.categories:
            return 0.0
        return self.plot_width / len(self.categories)

    def category_at(self, x: float) -> str | None:
        if not self.categories or x < 0 or x >= self.plot_width:
            return None
        index = min(int(x // self.band_width), len(self.categories) - 1)
        return self.categories[index]

    def position_for(self, label: str) -> float | None:
        try:
            index = self.categories.index(label)
        except ValueError:
            return None
        return (index + 0.5) * self.band_width

    def offset_for_index(self, index: int) -> float | None:
        """Centre offset of the band at ``index`` (a clicked bar's point index)."""

        if not 0 <= index < len(self.categories):
            return None
        return (index + 0.5) * self.band_width


def popover_offset(center_x: float, *, container_width: float, box_width: float = POPOVER_WIDTH) -> float:
    """Left edge of a popover centred on ``center_x``, clamped to the container."""

    return max(0.0, min(container_width - box_width, center_x - box_width / 2))


def _empty_figure(message: str) -> go.Figure:
    fig = go.Figure()
    fig.add_annotation(
        text=message,
        showarrow=False,
        x=0.5,
        y=0.5,
        xref="paper",
        yref="paper",
        font=dict(size=14, color="#6c757d"),
    )
    fig.update_layout(margin=dict(l=0, r=0, t=20, b=20))
    return fig


def _popover_text(record: CashFlowRecord, currency: str) -> str:
    return (
        f"{record.label}<br>"
        f"<b>Cash Out: {utils.format_currency(record.cash_out, currency)}</b><br>"
        f"<b>Cash In: {utils.format_currency(record.cash_in, currency)}</b>"
    )


def plot_cash_flow(
    records: Sequence[CashFlowRecord],
    *,
    loading: bool = False,
    selection: Selection | None = None,
    currency: str = utils.DEFAULT_CURRENCY,
) -> go.Figure:
    """Return a grouped bar chart of cash out and cash in per category.

    Placeholder data is drawn in a muted palette with hover disabled. A visible
    selection adds a rule over the selected category and a popover annotation.
    """

    if not records:
        return _empty_figure("No cash flow data available.")

    colors = PLACEHOLDER_COLORS if loading else LOADED_COLORS
    labels = [record.label for record in records]

    fig = go.Figure()
    fig.add_bar(
        name=CashFlowType.MONEY_OUT.value,
        x=labels,
        y=[record.cash_out for record in records],
        marker_color=colors[CashFlowType.MONEY_OUT],
    )
    fig.add_bar(
        name=CashFlowType.MONEY_IN.value,
        x=labels,
        y=[record.cash_in for record in records],
        marker_color=colors[CashFlowType.MONEY_IN],
    )
    fig.update_layout(
        barmode="group",
        yaxis_title="Cash Flow",
        xaxis_title="Day",
        margin=dict(l=0, r=0, t=40, b=0),
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
    )
    fig.update_xaxes(type="category", categoryorder="array", categoryarray=labels)

    if loading:
        fig.update_traces(opacity=0.35, hoverinfo="skip")
        fig.update_layout(showlegend=False)
        fig.update_yaxes(showticklabels=False)
        return fig

    if selection is not None and selection.visible and selection.record is not None:
        record = selection.record
        if record.label in labels:
            axis = CategoryAxis(labels, plot_width=1.0)
            center = axis.position_for(record.label)
            fig.add_vline(x=labels.index(record.label), line_width=2, line_color="rgba(0,0,0,0.15)")
            fig.add_annotation(
                x=popover_offset(center, container_width=1.0, box_width=POPOVER_PAPER_WIDTH),
                xref="paper",
                xanchor="left",
                y=1,
                yref="paper",
                text=_popover_text(record, currency),
                showarrow=False,
                align="left",
                bgcolor="rgba(240,240,240,0.9)",
                borderpad=10,
            )

    return fig
