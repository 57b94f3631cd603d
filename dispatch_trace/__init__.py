"""
Dispatch tracing on top of flux-core.

Records every callback invocation through the dispatcher's observer hook;
computes metrics and per-token tables; prints a summary report.
"""

from dispatch_trace.metrics import TraceMetrics, compute_metrics, token_summary
from dispatch_trace.recorder import DispatchRecorder
from dispatch_trace.report import print_report

__all__ = [
    "DispatchRecorder",
    "TraceMetrics",
    "compute_metrics",
    "token_summary",
    "print_report",
]
