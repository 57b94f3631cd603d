"""
Invocation records: what the dispatcher reports to observers.

One record per callback invocation, emitted when the callback returns or raises.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class InvocationStatus(Enum):
    """Outcome of one callback invocation."""

    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class InvocationRecord:
    """
    One callback invocation within a dispatch. Immutable.

    depth is 0 for calls made by the dispatch loop and grows by one for every
    nested wait_for; waited_by names the token whose wait_for triggered the call.
    """

    dispatch_id: int
    token: str
    status: InvocationStatus
    started_at: datetime
    duration_ms: float
    depth: int = 0
    waited_by: str | None = None
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.status == InvocationStatus.FAILED
