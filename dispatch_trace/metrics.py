"""
Trace metrics: invocation counts, failures, nesting and callback durations.

Computed from the InvocationRecords collected by a DispatchRecorder.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np
import pandas as pd

from flux_core.invocation import InvocationRecord, InvocationStatus


@dataclass
class TraceMetrics:
    """Summary of a recorded run of dispatches."""

    dispatches: int
    invocations: int
    failures: int
    nested_invocations: int
    max_depth: int
    mean_duration_ms: float
    p95_duration_ms: float
    max_duration_ms: float


def compute_metrics(records: Sequence[InvocationRecord]) -> TraceMetrics:
    """
    Compute metrics from invocation records.

    Parameters
    ----------
    records : sequence of InvocationRecord
        Records as emitted by the dispatcher (any order).

    Returns
    -------
    TraceMetrics
        dispatches counts distinct dispatch ids; nested_invocations counts
        calls triggered by wait_for (depth > 0).
    """
    if not records:
        return TraceMetrics(
            dispatches=0,
            invocations=0,
            failures=0,
            nested_invocations=0,
            max_depth=0,
            mean_duration_ms=0.0,
            p95_duration_ms=0.0,
            max_duration_ms=0.0,
        )

    durations = np.array([r.duration_ms for r in records], dtype=float)
    depths = np.array([r.depth for r in records], dtype=int)

    return TraceMetrics(
        dispatches=len({r.dispatch_id for r in records}),
        invocations=len(records),
        failures=sum(1 for r in records if r.status == InvocationStatus.FAILED),
        nested_invocations=int(np.count_nonzero(depths)),
        max_depth=int(depths.max()),
        mean_duration_ms=float(np.mean(durations)),
        p95_duration_ms=float(np.percentile(durations, 95)),
        max_duration_ms=float(np.max(durations)),
    )


def token_summary(records: Sequence[InvocationRecord]) -> pd.DataFrame:
    """Per-token invocations, failures and mean duration, indexed by token in first-seen order."""
    columns = ["invocations", "failures", "mean_duration_ms"]
    if not records:
        return pd.DataFrame(columns=columns, index=pd.Index([], name="token"))
    df = pd.DataFrame(
        {
            "token": [r.token for r in records],
            "failed": [r.status == InvocationStatus.FAILED for r in records],
            "duration_ms": [r.duration_ms for r in records],
        }
    )
    summary = df.groupby("token", sort=False).agg(
        invocations=("failed", "size"),
        failures=("failed", "sum"),
        mean_duration_ms=("duration_ms", "mean"),
    )
    summary["failures"] = summary["failures"].astype(int)
    return summary[columns]
