"""Observable state holders used by the cart and session services."""
from typing import Callable, Generic, List, TypeVar

T = TypeVar("T")

Listener = Callable[[T], None]


class StateHolder(Generic[T]):
    """
    Holds a current value and notifies listeners when it is published.

    Listeners are called synchronously, in subscription order, with the
    new value. `subscribe` returns a callable that removes the listener.
    """

    def __init__(self, initial: T):
        self._value = initial
        self._listeners: List[Listener] = []

    @property
    def value(self) -> T:
        return self._value

    def subscribe(self, listener: Listener, emit_current: bool = True) -> Callable[[], None]:
        """Register a listener; by default it is called with the current value right away."""
        self._listeners.append(listener)
        if emit_current:
            listener(self._value)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def publish(self, value: T) -> None:
        self._value = value
        for listener in list(self._listeners):
            listener(value)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)
