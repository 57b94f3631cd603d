"""
Store: base class for state containers driven by a Dispatcher.

A store registers exactly one callback with its dispatcher and exposes its
dispatch_token so other stores can wait_for it. Views subscribe to the store
(not the dispatcher) through listeners, which fire after a dispatch changed it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from flux_core.errors import NotDispatchingError

if TYPE_CHECKING:
    from flux_core.dispatcher import Dispatcher


class Store(ABC):
    """
    Base class for stores. Subclasses implement on_dispatch and call
    emit_change when the payload changed their state.
    """

    def __init__(self, dispatcher: "Dispatcher") -> None:
        self._dispatcher = dispatcher
        self._changed = False
        self._listeners: dict[str, Callable[[], None]] = {}
        self._last_listener_id = 0
        self.dispatch_token = dispatcher.register(self._invoke_on_dispatch)

    def get_dispatcher(self) -> "Dispatcher":
        return self._dispatcher

    def add_listener(self, callback: Callable[[], None]) -> str:
        """Subscribe to change notifications. Returns an id for remove_listener."""
        self._last_listener_id += 1
        listener_id = f"listener_{self._last_listener_id}"
        self._listeners[listener_id] = callback
        return listener_id

    def remove_listener(self, listener_id: str) -> None:
        del self._listeners[listener_id]

    def has_changed(self) -> bool:
        """Whether the current dispatch changed this store."""
        if not self._dispatcher.is_dispatching():
            raise NotDispatchingError(f"{type(self).__name__}.has_changed")
        return self._changed

    def emit_change(self) -> None:
        """Mark the store as changed; listeners fire once on_dispatch returns."""
        if not self._dispatcher.is_dispatching():
            raise NotDispatchingError(f"{type(self).__name__}.emit_change")
        self._changed = True

    def _invoke_on_dispatch(self, payload: Any) -> None:
        self._changed = False
        self.on_dispatch(payload)
        if self._changed:
            for listener in list(self._listeners.values()):
                listener()

    @abstractmethod
    def on_dispatch(self, payload: Any) -> None:
        """
        React to a dispatched payload. Call self.emit_change() if state changed.
        Use self.get_dispatcher().wait_for([...]) to read other stores' updated state.
        """
        ...
