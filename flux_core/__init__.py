"""
flux-core: single-process, synchronous Flux-style dispatcher.

Callbacks register with a Dispatcher, every dispatch broadcasts one payload to
all of them, and wait_for lets a callback demand that others run first.
No async, no topics, no persistence.
"""

__version__ = "0.1.0"

from flux_core.actions import Action
from flux_core.dispatcher import Dispatcher
from flux_core.errors import (
    AlreadyDispatchingError,
    CircularDependencyError,
    DependencyFailedError,
    DispatcherError,
    InvalidTokenError,
    NotDispatchingError,
)
from flux_core.invocation import InvocationRecord, InvocationStatus
from flux_core.store import Store

__all__ = [
    "Action",
    "Dispatcher",
    "DispatcherError",
    "AlreadyDispatchingError",
    "NotDispatchingError",
    "InvalidTokenError",
    "CircularDependencyError",
    "DependencyFailedError",
    "InvocationRecord",
    "InvocationStatus",
    "Store",
]
