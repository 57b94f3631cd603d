"""
Trace report: print a dispatch summary from a DispatchRecorder.
"""

from __future__ import annotations

from dispatch_trace.metrics import TraceMetrics, compute_metrics, token_summary
from dispatch_trace.recorder import DispatchRecorder


def print_report(recorder: DispatchRecorder, *, per_token: bool = True) -> TraceMetrics:
    """
    Compute metrics from the recorder and print a summary.

    Parameters
    ----------
    recorder : DispatchRecorder
        Recorder attached to a dispatcher.
    per_token : bool
        Also print the per-token table (default True).

    Returns
    -------
    TraceMetrics
        The computed metrics (e.g. for programmatic use).
    """
    records = recorder.records
    metrics = compute_metrics(records)
    print("--- Dispatch Trace ---")
    print(f"Dispatches:      {metrics.dispatches}")
    print(f"Invocations:     {metrics.invocations}")
    print(f"Failures:        {metrics.failures}")
    print(f"Via wait_for:    {metrics.nested_invocations} (max depth {metrics.max_depth})")
    print(f"Mean duration:   {metrics.mean_duration_ms:.3f} ms")
    print(f"P95 duration:    {metrics.p95_duration_ms:.3f} ms")
    print(f"Max duration:    {metrics.max_duration_ms:.3f} ms")
    if per_token and records:
        print(token_summary(records).to_string())
    print("----------------------")
    return metrics
