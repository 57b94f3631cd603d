"""
Dispatcher errors.

Each misuse of the dispatcher raises its own type so callers can tell them apart.
Exceptions raised by registered callbacks are never wrapped.
"""

from __future__ import annotations

from collections.abc import Sequence


class DispatcherError(Exception):
    """Base class for errors raised by the Dispatcher itself."""


class AlreadyDispatchingError(DispatcherError):
    """dispatch() called while a dispatch is in progress."""

    def __init__(self) -> None:
        super().__init__("Cannot dispatch in the middle of a dispatch.")


class NotDispatchingError(DispatcherError):
    """An operation that is only valid mid-dispatch was called while idle."""

    def __init__(self, operation: str = "wait_for") -> None:
        self.operation = operation
        super().__init__(f"{operation}(...): Must be invoked while dispatching.")


class InvalidTokenError(DispatcherError):
    """Token does not map to a registered callback."""

    def __init__(self, token: str, operation: str) -> None:
        self.token = token
        self.operation = operation
        super().__init__(f"{operation}(...): `{token}` does not map to a registered callback.")


class CircularDependencyError(DispatcherError):
    """wait_for chain leads back to a callback that is still running."""

    def __init__(self, cycle: Sequence[str]) -> None:
        self.cycle = tuple(cycle)
        super().__init__("wait_for(...): Circular dependency detected: " + " -> ".join(self.cycle))


class DependencyFailedError(DispatcherError):
    """wait_for on a callback whose invocation already raised in this dispatch."""

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"wait_for(...): `{token}` raised earlier in this dispatch.")
