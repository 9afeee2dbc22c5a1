"""Tests for the loading state machine."""

from __future__ import annotations

import asyncio

import pytest
from cashflow.models import ReportPeriod
from cashflow.provider import CashFlowProvider
from cashflow.state import (
    Cancelled,
    Failed,
    Idle,
    InvalidTransitionError,
    Loaded,
    Loading,
    LoadingStateMachine,
)


def test_machine_starts_idle_without_payload() -> None:
    machine: LoadingStateMachine[str] = LoadingStateMachine()
    assert machine.current == Idle()
    assert machine.payload is None
    assert not machine.is_loading()


def test_idle_loading_loaded_cycle_is_one_shot() -> None:
    machine: LoadingStateMachine[str] = LoadingStateMachine()

    assert machine.begin("placeholder") == Loading("placeholder")
    assert machine.is_loading()
    assert machine.payload == "placeholder"

    assert machine.resolve("content") == Loaded("content")
    assert not machine.is_loading()
    assert machine.is_loaded() and machine.is_terminal()
    assert machine.payload == "content"

    with pytest.raises(InvalidTransitionError):
        machine.begin("again")
    with pytest.raises(InvalidTransitionError):
        machine.resolve("again")
    with pytest.raises(InvalidTransitionError):
        machine.cancel()
    assert machine.current == Loaded("content")


def test_resolve_requires_loading() -> None:
    machine: LoadingStateMachine[str] = LoadingStateMachine()
    with pytest.raises(InvalidTransitionError, match="from Idle"):
        machine.resolve("content")
    with pytest.raises(InvalidTransitionError):
        machine.fail("boom")


def test_failed_keeps_placeholder_and_allows_retry() -> None:
    machine: LoadingStateMachine[str] = LoadingStateMachine()
    machine.begin("placeholder")

    assert machine.fail("timeout") == Failed("timeout", placeholder="placeholder")
    assert machine.is_failed()
    assert machine.payload == "placeholder"

    machine.begin("placeholder-2")
    machine.resolve("content")
    assert machine.current == Loaded("content")


def test_cancel_is_terminal() -> None:
    machine: LoadingStateMachine[str] = LoadingStateMachine()
    machine.begin("placeholder")
    assert machine.cancel() == Cancelled()
    assert machine.is_terminal()
    with pytest.raises(InvalidTransitionError):
        machine.resolve("late content")


def test_subscribers_see_each_transition_until_unsubscribed() -> None:
    machine: LoadingStateMachine[str] = LoadingStateMachine()
    seen: list[tuple[object, object]] = []
    unsubscribe = machine.subscribe(lambda previous, current: seen.append((previous, current)))

    machine.begin("placeholder")
    assert seen == [(Idle(), Loading("placeholder"))]

    unsubscribe()
    unsubscribe()
    machine.resolve("content")
    assert len(seen) == 1


def test_placeholder_and_content_share_category_labels() -> None:
    provider = CashFlowProvider(latency=0.0, seed=11)
    machine = LoadingStateMachine()

    loading = machine.begin(provider.fetch_placeholder())
    loaded = machine.resolve(asyncio.run(provider.fetch_series()))

    for period in ReportPeriod:
        assert loading.placeholder.labels(period) == loaded.content.labels(period)


def test_failing_observer_does_not_block_transitions_or_other_observers(caplog) -> None:
    machine: LoadingStateMachine[str] = LoadingStateMachine()
    seen: list[object] = []

    def broken(_previous, _current) -> None:
        raise RuntimeError("render failed")

    machine.subscribe(broken)
    machine.subscribe(lambda _previous, current: seen.append(current))

    with caplog.at_level("ERROR", logger="cashflow.state"):
        machine.begin("placeholder")
        machine.resolve("content")

    assert machine.current == Loaded("content")
    assert seen == [Loading("placeholder"), Loaded("content")]
    assert "observer" in caplog.text
