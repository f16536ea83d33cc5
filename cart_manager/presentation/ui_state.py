"""UI-facing state for the cart screen and the container that publishes it."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from ..domain.results import CartFailureReason


@dataclass(frozen=True)
class Idle:
    """No add-to-cart attempt has been made yet."""


@dataclass(frozen=True)
class ItemAdded:
    """The last attempt succeeded."""

    total_items: int


@dataclass(frozen=True)
class Error:
    """The last attempt failed; ``message`` is shown to the user verbatim.

    ``reason`` lets non-visual consumers (the HTTP layer) branch without
    parsing the message.
    """

    message: str
    reason: CartFailureReason


CartUiState = Idle | ItemAdded | Error

T = TypeVar("T")


class ObservableState(Generic[T]):
    """Holds one immutable snapshot and notifies subscribers when it is replaced.

    Every assignment to ``value`` replaces the snapshot and notifies all
    subscribers in subscription order, even when the new value equals the
    old one.
    """

    def __init__(self, initial: T):
        self._value = initial
        self._subscribers: list[Callable[[T], None]] = []

    @property
    def value(self) -> T:
        return self._value

    @value.setter
    def value(self, new_value: T) -> None:
        self._value = new_value
        for subscriber in list(self._subscribers):
            subscriber(new_value)

    def subscribe(self, subscriber: Callable[[T], None]) -> Callable[[], None]:
        """Register ``subscriber`` and return a function that unregisters it.

        The subscriber is not called with the current value on registration;
        read ``value`` for that.
        """
        self._subscribers.append(subscriber)

        def unsubscribe() -> None:
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)

        return unsubscribe

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)
