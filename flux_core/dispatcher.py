"""
Dispatcher: single-threaded, synchronous broadcast of payloads to registered callbacks.

Callbacks run in registration order. A callback may call wait_for to have other
callbacks run first within the same dispatch; the ordering is resolved on demand
by nested invocation, and a wait_for that reaches a callback still on the call
stack is a circular dependency.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable, Sequence
from datetime import datetime
from enum import Enum
from typing import Any, Protocol

from flux_core.errors import (
    AlreadyDispatchingError,
    CircularDependencyError,
    DependencyFailedError,
    InvalidTokenError,
    NotDispatchingError,
)
from flux_core.invocation import InvocationRecord, InvocationStatus

logger = logging.getLogger(__name__)

Callback = Callable[[Any], None]


class DispatchObserver(Protocol):
    """Called after every callback invocation, completed or failed."""

    def __call__(self, record: InvocationRecord) -> None:
        ...


class _Status(Enum):
    """Per-dispatch state of a snapshotted token."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    HANDLED = "handled"
    FAILED = "failed"


class Dispatcher:
    """
    Broadcasts each dispatched payload to every registered callback.

    Instance-scoped: create one per application (or per test) and pass it around.
    register/unregister are valid at any time; wait_for only from inside a
    callback during a dispatch. At most one dispatch is active at a time.
    """

    def __init__(
        self,
        *,
        token_prefix: str = "ID_",
        observers: Sequence[DispatchObserver] = (),
    ) -> None:
        self.token_prefix = token_prefix
        self.observers: list[DispatchObserver] = list(observers)
        self._callbacks: dict[str, Callback] = {}
        self._last_id = 0
        self._is_dispatching = False
        self._pending_payload: Any = None
        self._status: dict[str, _Status] = {}
        self._stack: list[str] = []
        self._dispatch_count = 0

    @property
    def dispatch_count(self) -> int:
        """Number of dispatches started on this instance."""
        return self._dispatch_count

    def add_observer(self, observer: DispatchObserver) -> None:
        self.observers.append(observer)

    def tokens(self) -> list[str]:
        """Registered tokens in registration order."""
        return list(self._callbacks)

    def register(self, callback: Callback) -> str:
        """
        Register a callback to be invoked with every dispatched payload.
        Returns a token that can be used with unregister and wait_for.
        """
        self._last_id += 1
        token = f"{self.token_prefix}{self._last_id}"
        self._callbacks[token] = callback
        logger.debug("Registered %s (%s)", token, getattr(callback, "__name__", repr(callback)))
        return token

    def unregister(self, token: str) -> None:
        """Remove a callback. If a dispatch is in progress it will not be invoked for the rest of it."""
        if token not in self._callbacks:
            raise InvalidTokenError(token, "unregister")
        del self._callbacks[token]
        logger.debug("Unregistered %s", token)

    def wait_for(self, tokens: Iterable[str] | str) -> None:
        """
        Invoke the callbacks for the given tokens (in order) before continuing
        the current callback. Callbacks already handled in this dispatch are skipped.
        """
        if not self._is_dispatching:
            raise NotDispatchingError("wait_for")
        if isinstance(tokens, str):
            tokens = [tokens]
        for token in tokens:
            if token not in self._callbacks:
                raise InvalidTokenError(token, "wait_for")
            status = self._status.get(token)
            if status is None:
                # Registered after this dispatch started; not part of it.
                logger.debug("wait_for(%s): not part of dispatch %d", token, self._dispatch_count)
                continue
            if status is _Status.HANDLED:
                continue
            if status is _Status.IN_PROGRESS:
                start = self._stack.index(token)
                raise CircularDependencyError([*self._stack[start:], token])
            if status is _Status.FAILED:
                raise DependencyFailedError(token)
            self._invoke_callback(token)

    def dispatch(self, payload: Any) -> None:
        """Dispatch a payload to all registered callbacks."""
        if self._is_dispatching:
            raise AlreadyDispatchingError()
        self._start_dispatching(payload)
        dispatch_id = self._dispatch_count
        try:
            # Status is read live: wait_for may have handled a later token already.
            for token in list(self._status):
                if self._status[token] is not _Status.PENDING:
                    continue
                if token not in self._callbacks:
                    continue
                self._invoke_callback(token)
        except Exception:
            failed = [t for t, s in self._status.items() if s is _Status.FAILED]
            logger.warning("Dispatch %d aborted: failed callbacks %s", dispatch_id, failed or "none")
            raise
        finally:
            self._stop_dispatching()
        logger.debug("Dispatch %d complete", dispatch_id)

    def is_dispatching(self) -> bool:
        """True while a dispatch is in progress."""
        return self._is_dispatching

    def _invoke_callback(self, token: str) -> None:
        """Run one callback with the current payload and record its outcome."""
        callback = self._callbacks[token]
        waited_by = self._stack[-1] if self._stack else None
        depth = len(self._stack)
        self._status[token] = _Status.IN_PROGRESS
        self._stack.append(token)
        started_at = datetime.now()
        t0 = time.perf_counter()
        try:
            callback(self._pending_payload)
        except Exception as exc:
            self._status[token] = _Status.FAILED
            record = InvocationRecord(
                dispatch_id=self._dispatch_count,
                token=token,
                status=InvocationStatus.FAILED,
                started_at=started_at,
                duration_ms=(time.perf_counter() - t0) * 1000.0,
                depth=depth,
                waited_by=waited_by,
                error=repr(exc),
            )
            try:
                self._notify(record)
            except Exception:
                # The callback error is the one that leaves dispatch.
                logger.exception("Observer failed while reporting %s failure", token)
            raise
        finally:
            self._stack.pop()
        self._status[token] = _Status.HANDLED
        self._notify(
            InvocationRecord(
                dispatch_id=self._dispatch_count,
                token=token,
                status=InvocationStatus.COMPLETED,
                started_at=started_at,
                duration_ms=(time.perf_counter() - t0) * 1000.0,
                depth=depth,
                waited_by=waited_by,
            )
        )

    def _notify(self, record: InvocationRecord) -> None:
        for obs in self.observers:
            obs(record)

    def _start_dispatching(self, payload: Any) -> None:
        """Snapshot the registry as this dispatch's pending set."""
        self._status = {token: _Status.PENDING for token in self._callbacks}
        self._stack = []
        self._pending_payload = payload
        self._is_dispatching = True
        self._dispatch_count += 1
        logger.debug("Dispatch %d started with %d callbacks", self._dispatch_count, len(self._status))

    def _stop_dispatching(self) -> None:
        self._pending_payload = None
        self._status = {}
        self._stack = []
        self._is_dispatching = False
