"""Loading state machine for a single fetch-and-render cycle.

The machine moves ``Idle -> Loading -> Loaded`` once. A fetch may instead end
in ``Failed``, from which ``Loading`` can be entered again to retry, and a
pending fetch may be ``Cancelled``. ``Loaded`` and ``Cancelled`` are terminal.
Observers registered with :meth:`LoadingStateMachine.subscribe` are notified
after each swap, so they only ever see complete variants. An observer that
raises is logged and skipped; it cannot leave the machine half-way through a
transition.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, Union

from .logging_setup import get_logger

T = TypeVar("T")

logger = get_logger("cashflow.state")


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Loading(Generic[T]):
    placeholder: T


@dataclass(frozen=True)
class Loaded(Generic[T]):
    content: T


@dataclass(frozen=True)
class Failed(Generic[T]):
    reason: str
    placeholder: T | None = None


@dataclass(frozen=True)
class Cancelled:
    pass


LoadingState = Union[Idle, Loading[T], Loaded[T], Failed[T], Cancelled]
Observer = Callable[[LoadingState, LoadingState], None]

_TERMINAL = (Loaded, Cancelled)


class InvalidTransitionError(RuntimeError):
    """Raised when a transition is not allowed from the current state."""


class LoadingStateMachine(Generic[T]):
    def __init__(self) -> None:
        self._state: LoadingState = Idle()
        self._observers: list[Observer] = []

    @property
    def current(self) -> LoadingState:
        return self._state

    @property
    def payload(self) -> T | None:
        """The placeholder while loading or failed, the content once loaded."""

        state = self._state
        if isinstance(state, Loading):
            return state.placeholder
        if isinstance(state, Loaded):
            return state.content
        if isinstance(state, Failed):
            return state.placeholder
        return None

    def is_loading(self) -> bool:
        return isinstance(self._state, Loading)

    def is_loaded(self) -> bool:
        return isinstance(self._state, Loaded)

    def is_failed(self) -> bool:
        return isinstance(self._state, Failed)

    def is_terminal(self) -> bool:
        return isinstance(self._state, _TERMINAL)

    def subscribe(self, callback: Observer) -> Callable[[], None]:
        """Register ``callback(previous, current)``; return an unsubscribe function."""

        self._observers.append(callback)

        def unsubscribe() -> None:
            if callback in self._observers:
                self._observers.remove(callback)

        return unsubscribe

    def begin(self, placeholder: T) -> Loading[T]:
        """Enter ``Loading`` from ``Idle`` or, to retry, from ``Failed``."""

        if not isinstance(self._state, (Idle, Failed)):
            raise self._invalid("begin loading")
        return self._transition(Loading(placeholder))

    def resolve(self, content: T) -> Loaded[T]:
        if not isinstance(self._state, Loading):
            raise self._invalid("resolve")
        return self._transition(Loaded(content))

    def fail(self, reason: str) -> Failed[T]:
        if not isinstance(self._state, Loading):
            raise self._invalid("fail")
        return self._transition(Failed(reason, placeholder=self._state.placeholder))

    def cancel(self) -> Cancelled:
        if not isinstance(self._state, (Idle, Loading)):
            raise self._invalid("cancel")
        return self._transition(Cancelled())

    def _invalid(self, action: str) -> InvalidTransitionError:
        return InvalidTransitionError(f"cannot {action} from {type(self._state).__name__}")

    def _transition(self, new_state):
        previous = self._state
        self._state = new_state
        logger.debug("Loading state %s -> %s", type(previous).__name__, type(new_state).__name__)
        for observer in list(self._observers):
            try:
                observer(previous, new_state)
            except Exception:
                logger.exception("Loading state observer %r failed", observer)
        return new_state
