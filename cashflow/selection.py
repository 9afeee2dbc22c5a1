"""Tap-to-category resolution and popover selection state."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from typing import Callable

from .models import CashFlowRecord

CategoryLookup = Callable[[float], "str | None"]


@dataclass(frozen=True)
class Selection:
    """Highlighted category and whether its popover is shown."""

    record: CashFlowRecord | None = None
    visible: bool = False

    @property
    def label(self) -> str | None:
        return self.record.label if self.record is not None else None

    def with_tap(self, record: CashFlowRecord) -> Selection:
        """Apply a tap on ``record``.

        Tapping the selected category toggles the popover. Tapping any other
        category selects it and always shows the popover.
        """

        if self.record is not None and record.label == self.record.label:
            return replace(self, record=record, visible=not self.visible)
        return Selection(record=record, visible=True)


def find_record(records: Iterable[CashFlowRecord], label: str) -> CashFlowRecord | None:
    for record in records:
        if record.label == label:
            return record
    return None


def resolve_tap(
    records: Sequence[CashFlowRecord],
    relative_x: float,
    category_at: CategoryLookup,
) -> CashFlowRecord | None:
    """Return the record under ``relative_x`` (offset from the plot's left edge)."""

    category = category_at(relative_x)
    if category is None:
        return None
    return find_record(records, category)


class TapResolver:
    """Holds the current :class:`Selection` and applies taps to it.

    A tap that resolves to no category leaves the selection untouched.
    """

    def __init__(self) -> None:
        self.selection = Selection()

    def tap(
        self,
        records: Sequence[CashFlowRecord],
        relative_x: float,
        category_at: CategoryLookup,
    ) -> Selection:
        record = resolve_tap(records, relative_x, category_at)
        if record is not None:
            self.selection = self.selection.with_tap(record)
        return self.selection

    def clear(self) -> None:
        self.selection = Selection()
